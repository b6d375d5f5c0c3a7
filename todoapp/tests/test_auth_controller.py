from __future__ import annotations

from datetime import UTC, datetime
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from todoapp.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from todoapp.application.use_cases.users.register_user import RegisterUserUseCase
from todoapp.application.use_cases.users.results import AuthResult, UserProfile
from todoapp.domain.users.entities import User
from todoapp.domain.users.exceptions import InvalidCredentialsError, TokenMalformedError
from todoapp.infrastructure.auth.bearer import BearerTokenAuthenticator, install_authenticator
from todoapp.interfaces.http.controllers.auth_controller import AuthController
from todoapp.shared.middleware.error_handler import configure_error_handling

ALICE = User(
    id=1,
    username="alice",
    email="alice@example.com",
    password_hash="hashed:secret123",
    first_name="Alice",
    last_name=None,
    enabled=True,
    created_at=datetime(2024, 1, 1, tzinfo=UTC),
    roles=frozenset({"ROLE_USER"}),
)


class StubAuthenticator:
    def authenticate(self, token: str) -> User:
        if token != "good-token":
            raise TokenMalformedError()
        return ALICE


def _result(user: User = ALICE) -> AuthResult:
    return AuthResult(
        access_token="access-token",
        refresh_token="refresh-token",
        token_type="Bearer",
        expires_in_millis=900_000,
        profile=UserProfile.from_user(user),
    )


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    install_authenticator(app, cast(BearerTokenAuthenticator, StubAuthenticator()))
    return app


def _mount(flask_app: Flask, **overrides) -> AuthController:
    use_cases = {
        "register_use_case": MagicMock(),
        "login_use_case": MagicMock(),
        "logout_use_case": MagicMock(),
        "current_user_use_case": GetCurrentUserUseCase(),
        "refresh_use_case": MagicMock(),
    }
    use_cases.update(overrides)
    controller = AuthController(**use_cases)
    flask_app.register_blueprint(controller.as_blueprint())
    return controller


def test_register_endpoint_returns_auth_payload(flask_app: Flask) -> None:
    register_called: dict[str, tuple] = {}

    class StubRegister:
        def execute(self, *args) -> AuthResult:
            register_called["args"] = args
            return _result()

    _mount(flask_app, register_use_case=cast(RegisterUserUseCase, StubRegister()))

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={
                "username": "alice",
                "email": "Alice@Example.com",
                "password": "secret123",
                "firstName": "Alice",
            },
        )

    assert response.status_code == 200
    assert register_called["args"] == ("alice", "alice@example.com", "secret123", "Alice", None)
    payload = response.get_json()
    assert payload["accessToken"] == "access-token"
    assert payload["refreshToken"] == "refresh-token"
    assert payload["tokenType"] == "Bearer"
    assert payload["expiresInMillis"] == 900_000
    assert payload["profile"]["firstName"] == "Alice"
    assert payload["profile"]["roles"] == ["ROLE_USER"]
    assert "passwordHash" not in payload["profile"]


def test_register_invalid_payload_returns_400(flask_app: Flask) -> None:
    register = MagicMock()
    _mount(flask_app, register_use_case=register)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={"username": "al", "email": "not-an-email", "password": "short"},
        )

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert {"username", "email", "password"} <= set(payload["context"]["fields"])
    register.execute.assert_not_called()


def test_register_rejects_malformed_email_domain(flask_app: Flask) -> None:
    register = MagicMock()
    _mount(flask_app, register_use_case=register)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={"username": "bob", "email": "bob@bar..com", "password": "secret123"},
        )

    assert response.status_code == 400
    assert response.get_json()["context"]["fields"] == ["email"]
    register.execute.assert_not_called()


def test_register_rejects_username_with_symbols(flask_app: Flask) -> None:
    _mount(flask_app)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={"username": "alice!", "email": "alice@example.com", "password": "secret123"},
        )

    assert response.status_code == 400
    assert response.get_json()["context"]["fields"] == ["username"]


def test_login_invalid_payload_returns_400(flask_app: Flask) -> None:
    _mount(flask_app)

    with flask_app.test_client() as client:
        response = client.post("/api/auth/login", json={"password": "x"})

    assert response.status_code == 400
    assert response.get_json()["error"] == "validation_error"


def test_login_wrong_credentials_returns_401(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.side_effect = InvalidCredentialsError()
    _mount(flask_app, login_use_case=login)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/login", json={"usernameOrEmail": "alice", "password": "wrong"}
        )

    assert response.status_code == 401
    assert response.get_json() == {"error": "invalid_credentials"}
    login.execute.assert_called_once_with("alice", "wrong")


def test_login_success(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.return_value = (ALICE, _result())
    _mount(flask_app, login_use_case=login)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/login", json={"usernameOrEmail": "alice", "password": "secret123"}
        )

    assert response.status_code == 200
    assert response.get_json()["profile"]["username"] == "alice"


def test_me_requires_bearer_token(flask_app: Flask) -> None:
    _mount(flask_app)

    with flask_app.test_client() as client:
        response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.get_json() == {"error": "not_authenticated"}


def test_me_rejects_bad_token(flask_app: Flask) -> None:
    _mount(flask_app)

    with flask_app.test_client() as client:
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer forged"})

    assert response.status_code == 401
    assert response.get_json() == {"error": "invalid_token"}


def test_me_returns_profile(flask_app: Flask) -> None:
    _mount(flask_app)

    with flask_app.test_client() as client:
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer good-token"})

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["username"] == "alice"
    assert payload["email"] == "alice@example.com"
    assert payload["lastName"] is None
    assert payload["createdAt"].startswith("2024-01-01T00:00:00")


def test_logout_returns_message(flask_app: Flask) -> None:
    logout = MagicMock()
    _mount(flask_app, logout_use_case=logout)

    with flask_app.test_client() as client:
        response = client.post("/api/auth/logout", headers={"Authorization": "Bearer good-token"})

    assert response.status_code == 200
    assert response.get_json() == {"success": True, "message": "Logout successful"}
    logout.execute.assert_called_once_with(ALICE)


def test_refresh_passes_token_through(flask_app: Flask) -> None:
    refresh = MagicMock()
    refresh.execute.return_value = _result()
    _mount(flask_app, refresh_use_case=refresh)

    with flask_app.test_client() as client:
        response = client.post("/api/auth/refresh", json={"refreshToken": "refresh-token"})

    assert response.status_code == 200
    refresh.execute.assert_called_once_with("refresh-token")
