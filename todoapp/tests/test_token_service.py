from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from todoapp.application.services.tokens import ACCESS_TOKEN_EXPIRATION_MS, JwtTokenService
from todoapp.domain.users.entities import User
from todoapp.domain.users.exceptions import TokenMalformedError
from todoapp.shared.errors.base import AuthenticationFailedError

SECRET = "unit-test-secret-0123456789abcdef0123456789"
ISSUED_AT = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
REFRESH_MS = 7 * 24 * 60 * 60 * 1000


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _user(username: str = "alice", user_id: int = 1) -> User:
    return User(
        id=user_id,
        username=username,
        email=f"{username}@example.com",
        password_hash="hashed:irrelevant",
        first_name=None,
        last_name=None,
        enabled=True,
        created_at=ISSUED_AT,
        roles=frozenset({"ROLE_USER"}),
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(ISSUED_AT)


@pytest.fixture()
def tokens(clock: FakeClock) -> JwtTokenService:
    return JwtTokenService(
        secret=SECRET, issuer="todoapp", refresh_expiration_ms=REFRESH_MS, clock=clock
    )


def test_access_token_carries_identity_claims(tokens: JwtTokenService) -> None:
    token = tokens.issue_access_token(_user(user_id=7))

    claims = tokens.decode(token)

    assert tokens.extract_subject(token) == "alice"
    assert claims.issuer == "todoapp"
    assert claims.user_id == 7
    assert claims.roles == ("ROLE_USER",)
    assert claims.issued_at == ISSUED_AT
    assert claims.expires_at - claims.issued_at == timedelta(
        milliseconds=ACCESS_TOKEN_EXPIRATION_MS
    )


def test_refresh_token_uses_configured_lifetime(tokens: JwtTokenService) -> None:
    claims = tokens.decode(tokens.issue_refresh_token(_user()))

    assert claims.expires_at - claims.issued_at == timedelta(days=7)


def test_access_token_expires_after_fifteen_minutes(
    tokens: JwtTokenService, clock: FakeClock
) -> None:
    token = tokens.issue_access_token(_user())

    clock.now = ISSUED_AT + timedelta(seconds=1)
    assert tokens.is_expired(token) is False
    assert tokens.is_valid(token, "alice") is True

    clock.now = ISSUED_AT + timedelta(minutes=16)
    assert tokens.is_expired(token) is True
    assert tokens.is_valid(token, "alice") is False


def test_is_valid_rejects_other_subject(tokens: JwtTokenService) -> None:
    token = tokens.issue_access_token(_user())

    assert tokens.is_valid(token, "bob") is False


def test_garbage_token_is_malformed(tokens: JwtTokenService) -> None:
    with pytest.raises(TokenMalformedError):
        tokens.extract_subject("not-a-token")

    with pytest.raises(TokenMalformedError):
        tokens.is_expired("a.b.c")


def test_tampered_token_raises_from_is_valid(tokens: JwtTokenService) -> None:
    alice_token = tokens.issue_access_token(_user("alice", 1))
    mallory_token = tokens.issue_access_token(_user("mallory", 2))
    header, _, signature = alice_token.split(".")
    forged = ".".join([header, mallory_token.split(".")[1], signature])

    with pytest.raises(TokenMalformedError):
        tokens.is_valid(forged, "mallory")


def test_token_from_other_secret_is_rejected(tokens: JwtTokenService, clock: FakeClock) -> None:
    other = JwtTokenService(
        secret="another-secret-0123456789abcdef0123456789",
        issuer="todoapp",
        refresh_expiration_ms=REFRESH_MS,
        clock=clock,
    )

    with pytest.raises(AuthenticationFailedError):
        tokens.decode(other.issue_access_token(_user()))


def test_token_from_other_issuer_is_rejected(tokens: JwtTokenService, clock: FakeClock) -> None:
    other = JwtTokenService(
        secret=SECRET, issuer="someone-else", refresh_expiration_ms=REFRESH_MS, clock=clock
    )

    with pytest.raises(TokenMalformedError):
        tokens.extract_subject(other.issue_access_token(_user()))


def test_empty_secret_is_refused() -> None:
    with pytest.raises(ValueError):
        JwtTokenService(secret="", issuer="todoapp", refresh_expiration_ms=REFRESH_MS)
