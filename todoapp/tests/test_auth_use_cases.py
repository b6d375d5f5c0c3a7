from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from todoapp.application.services.tokens import JwtTokenService
from todoapp.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from todoapp.application.use_cases.users.login_user import LoginUserUseCase
from todoapp.application.use_cases.users.logout_user import LogoutUserUseCase
from todoapp.application.use_cases.users.refresh_token import RefreshTokenUseCase
from todoapp.application.use_cases.users.register_user import RegisterUserUseCase
from todoapp.domain.users.entities import NewUser, Role, User
from todoapp.domain.users.exceptions import (
    DefaultRoleMissingError,
    EmailTakenError,
    InvalidCredentialsError,
    TokenExpiredError,
    TokenMalformedError,
    UsernameTakenError,
)
from todoapp.domain.users.repositories import PasswordHasher, RoleRepository, UserRepository
from todoapp.shared.errors.base import ConflictError, NotAuthenticatedError

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1

    def find_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    def find_by_username_or_email(self, identifier: str) -> User | None:
        for u in self._users.values():
            if u.username == identifier or u.email.lower() == identifier.lower():
                return u
        return None

    def exists_by_username(self, username: str) -> bool:
        return self.find_by_username(username) is not None

    def exists_by_email(self, email: str) -> bool:
        return any(u.email.lower() == email.lower() for u in self._users.values())

    def add(self, user: NewUser, roles: list[Role]) -> User:
        new_user = User(
            id=self._seq,
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            first_name=user.first_name,
            last_name=user.last_name,
            enabled=user.enabled,
            created_at=NOW,
            roles=frozenset(role.name for role in roles),
        )
        self._seq += 1
        self._users[new_user.id] = new_user
        return new_user

    def __len__(self) -> int:
        return len(self._users)


class InMemoryRoleRepository(RoleRepository):
    def __init__(self, *names: str) -> None:
        self._roles = {name: Role(id=i, name=name) for i, name in enumerate(names, start=1)}

    def find_by_name(self, name: str) -> Role | None:
        return self._roles.get(name)


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture()
def tokens(clock: FakeClock) -> JwtTokenService:
    return JwtTokenService(
        secret="unit-test-secret-0123456789abcdef0123456789",
        issuer="todoapp",
        refresh_expiration_ms=7 * 24 * 60 * 60 * 1000,
        clock=clock,
    )


def _register(
    users: InMemoryUserRepository,
    tokens: JwtTokenService,
    roles: RoleRepository | None = None,
) -> RegisterUserUseCase:
    return RegisterUserUseCase(
        users=users,
        roles=roles or InMemoryRoleRepository("ROLE_USER", "ROLE_ADMIN"),
        tokens=tokens,
        password_hasher=DeterministicHasher(),
        default_role="ROLE_USER",
    )


def _login(users: InMemoryUserRepository, tokens: JwtTokenService) -> LoginUserUseCase:
    return LoginUserUseCase(users=users, tokens=tokens, password_hasher=DeterministicHasher())


def test_register_user_success(users: InMemoryUserRepository, tokens: JwtTokenService) -> None:
    result = _register(users, tokens).execute(
        "alice", "alice@example.com", "secret123", "Alice", "Liddell"
    )

    assert result.token_type == "Bearer"
    assert result.expires_in_millis == 900_000
    assert result.profile.username == "alice"
    assert result.profile.first_name == "Alice"
    assert result.profile.roles == frozenset({"ROLE_USER"})
    assert result.profile.enabled is True
    assert tokens.extract_subject(result.access_token) == "alice"
    assert tokens.extract_subject(result.refresh_token) == "alice"

    stored = users.find_by_username("alice")
    assert stored is not None
    assert stored.password_hash == "hashed:secret123"


def test_register_duplicate_username(
    users: InMemoryUserRepository, tokens: JwtTokenService
) -> None:
    use_case = _register(users, tokens)
    use_case.execute("alice", "alice@example.com", "secret123")

    with pytest.raises(UsernameTakenError):
        use_case.execute("alice", "other@example.com", "secret123")
    assert len(users) == 1


def test_register_duplicate_email(users: InMemoryUserRepository, tokens: JwtTokenService) -> None:
    use_case = _register(users, tokens)
    use_case.execute("alice", "alice@example.com", "secret123")

    with pytest.raises(EmailTakenError) as excinfo:
        use_case.execute("bob", "alice@example.com", "secret123")
    assert isinstance(excinfo.value, ConflictError)
    assert excinfo.value.status == 409
    assert len(users) == 1


def test_register_checks_username_before_email(
    users: InMemoryUserRepository, tokens: JwtTokenService
) -> None:
    use_case = _register(users, tokens)
    use_case.execute("alice", "alice@example.com", "secret123")

    with pytest.raises(UsernameTakenError):
        use_case.execute("alice", "alice@example.com", "secret123")


def test_register_without_default_role(
    users: InMemoryUserRepository, tokens: JwtTokenService
) -> None:
    use_case = _register(users, tokens, roles=InMemoryRoleRepository("ROLE_ADMIN"))

    with pytest.raises(DefaultRoleMissingError) as excinfo:
        use_case.execute("alice", "alice@example.com", "secret123")
    assert excinfo.value.status == 500
    assert excinfo.value.to_dict() == {
        "error": "default_role_missing",
        "context": {"role": "ROLE_USER"},
    }
    assert len(users) == 0


def test_login_by_username_and_email(
    users: InMemoryUserRepository, tokens: JwtTokenService
) -> None:
    _register(users, tokens).execute("alice", "alice@example.com", "secret123")
    login = _login(users, tokens)

    user, result = login.execute("alice", "secret123")
    assert user.username == "alice"
    assert tokens.is_valid(result.access_token, "alice")

    user_by_email, _ = login.execute("alice@example.com", "secret123")
    assert user_by_email.id == user.id


def test_login_failures_are_indistinguishable(
    users: InMemoryUserRepository, tokens: JwtTokenService
) -> None:
    _register(users, tokens).execute("alice", "alice@example.com", "secret123")
    login = _login(users, tokens)

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        login.execute("alice", "wrong-password")
    with pytest.raises(InvalidCredentialsError) as unknown_user:
        login.execute("nobody", "secret123")

    assert wrong_password.value.to_dict() == unknown_user.value.to_dict()
    assert wrong_password.value.status == unknown_user.value.status == 401


def test_login_disabled_user(users: InMemoryUserRepository, tokens: JwtTokenService) -> None:
    users.add(
        NewUser(
            username="carol",
            email="carol@example.com",
            password_hash="hashed:secret123",
            first_name=None,
            last_name=None,
            enabled=False,
        ),
        [Role(id=1, name="ROLE_USER")],
    )

    with pytest.raises(InvalidCredentialsError):
        _login(users, tokens).execute("carol", "secret123")


def test_current_user_requires_identity() -> None:
    with pytest.raises(NotAuthenticatedError):
        GetCurrentUserUseCase().execute(None)


def test_current_user_profile_has_no_password(
    users: InMemoryUserRepository, tokens: JwtTokenService
) -> None:
    _register(users, tokens).execute("alice", "alice@example.com", "secret123")
    identity = users.find_by_username("alice")

    profile = GetCurrentUserUseCase().execute(identity)

    assert profile.username == "alice"
    assert profile.email == "alice@example.com"
    assert not hasattr(profile, "password_hash")


def test_logout_is_stateless(users: InMemoryUserRepository, tokens: JwtTokenService) -> None:
    result = _register(users, tokens).execute("alice", "alice@example.com", "secret123")

    LogoutUserUseCase().execute(users.find_by_username("alice"))
    LogoutUserUseCase().execute(None)

    # tokens issued before logout stay valid until they expire
    assert tokens.is_valid(result.access_token, "alice")


def test_refresh_issues_new_pair(
    users: InMemoryUserRepository, tokens: JwtTokenService, clock: FakeClock
) -> None:
    issued = _register(users, tokens).execute("alice", "alice@example.com", "secret123")
    clock.now = NOW + timedelta(hours=1)

    refreshed = RefreshTokenUseCase(users=users, tokens=tokens).execute(issued.refresh_token)

    assert refreshed.profile.id == issued.profile.id
    assert tokens.extract_subject(refreshed.access_token) == "alice"
    assert tokens.is_expired(issued.access_token)
    assert not tokens.is_expired(refreshed.access_token)


def test_refresh_rejects_garbage(users: InMemoryUserRepository, tokens: JwtTokenService) -> None:
    with pytest.raises(TokenMalformedError):
        RefreshTokenUseCase(users=users, tokens=tokens).execute("garbage")


def test_refresh_rejects_expired_token(
    users: InMemoryUserRepository, tokens: JwtTokenService, clock: FakeClock
) -> None:
    issued = _register(users, tokens).execute("alice", "alice@example.com", "secret123")
    clock.now = NOW + timedelta(days=8)

    with pytest.raises(TokenExpiredError):
        RefreshTokenUseCase(users=users, tokens=tokens).execute(issued.refresh_token)


def test_refresh_rejects_unknown_subject(
    users: InMemoryUserRepository, tokens: JwtTokenService
) -> None:
    issued = _register(users, tokens).execute("alice", "alice@example.com", "secret123")

    with pytest.raises(TokenMalformedError):
        RefreshTokenUseCase(users=InMemoryUserRepository(), tokens=tokens).execute(
            issued.refresh_token
        )
