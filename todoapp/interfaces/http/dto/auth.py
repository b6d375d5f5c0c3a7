from __future__ import annotations

import re
from datetime import datetime

from pydantic import EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

from todoapp.application.use_cases.users.results import AuthResult, UserProfile

from .common import CamelModel

_USERNAME_RE = re.compile(r"^[a-zA-Z0-9_]+$")
_EMAIL_MAX_LENGTH = 100


class RegisterRequestDTO(CamelModel):
    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        if not _USERNAME_RE.match(value):
            raise PydanticCustomError(
                "username_invalid_chars",
                "Username can only contain letters, numbers, and underscores",
                {"pattern": _USERNAME_RE.pattern},
            )
        return value

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        if len(value) > _EMAIL_MAX_LENGTH:
            raise PydanticCustomError(
                "string_too_long",
                "String should have at most {max_length} characters",
                {"max_length": _EMAIL_MAX_LENGTH},
            )
        # stored and looked up case-insensitively
        return value.lower()

    @field_validator("first_name", "last_name")
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        return value or None


class LoginRequestDTO(CamelModel):
    username_or_email: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=128)  # No strength check on login


class RefreshRequestDTO(CamelModel):
    refresh_token: str = Field(min_length=1)


class UserProfileDTO(CamelModel):
    id: int
    username: str
    email: str
    first_name: str | None
    last_name: str | None
    enabled: bool
    roles: list[str]
    created_at: datetime | None

    @classmethod
    def from_profile(cls, profile: UserProfile) -> UserProfileDTO:
        return cls(
            id=profile.id,
            username=profile.username,
            email=profile.email,
            first_name=profile.first_name,
            last_name=profile.last_name,
            enabled=profile.enabled,
            roles=sorted(profile.roles),
            created_at=profile.created_at,
        )


class AuthResponseDTO(CamelModel):
    access_token: str
    refresh_token: str
    token_type: str
    expires_in_millis: int
    profile: UserProfileDTO

    @classmethod
    def from_result(cls, result: AuthResult) -> AuthResponseDTO:
        return cls(
            access_token=result.access_token,
            refresh_token=result.refresh_token,
            token_type=result.token_type,
            expires_in_millis=result.expires_in_millis,
            profile=UserProfileDTO.from_profile(result.profile),
        )
