"""
@file: test_auth.py
@description:
Test suite for authentication in the NerdyTips API: registration, login,
token verification and protected endpoint access.

@notes:
- Tests use the test client to simulate HTTP requests
- Token checks call nerdytips.core.auth directly with explicit settings
- Both success and failure scenarios are tested
"""

from datetime import timedelta

import pytest
from jose import jwt
from sqlalchemy import select

from nerdytips.core.auth import (
    create_access_token,
    create_session_token,
    verify_access_token,
    verify_password
)
from nerdytips.core.exceptions import DuplicateEmail, InvalidCredentials, Unauthorized
from nerdytips.db.models import User
from nerdytips.services import credential_service


def test_register_returns_token_and_public_user(test_client):
    """Test successful registration."""
    response = test_client.post(
        "/api/auth/register",
        json={"email": "new@nerdytips.ai", "password": "s3cret"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["token"]
    assert data["user"]["email"] == "new@nerdytips.ai"
    assert data["user"]["tier"] == "free"
    assert data["user"]["predictionsRemaining"] == 4
    assert data["user"]["subscriptionEnd"] is None
    assert "password" not in data["user"]


def test_register_stores_only_a_password_hash(test_client, db_session):
    test_client.post("/api/auth/register", json={"email": "hash@nerdytips.ai", "password": "plaintext-pw"})

    user = db_session.scalar(select(User).where(User.email == "hash@nerdytips.ai"))
    assert user is not None
    assert user.password != "plaintext-pw"
    assert verify_password("plaintext-pw", user.password)


def test_register_duplicate_email(test_client, db_session):
    """Second registration with the same email fails and leaves the first row alone."""
    first = test_client.post("/api/auth/register", json={"email": "dup@nerdytips.ai", "password": "first"})
    assert first.status_code == 200

    second = test_client.post("/api/auth/register", json={"email": "dup@nerdytips.ai", "password": "second"})
    assert second.status_code == 400
    assert second.json() == {"error": "Email already exists"}

    users = db_session.scalars(select(User).where(User.email == "dup@nerdytips.ai")).all()
    assert len(users) == 1
    assert users[0].id == first.json()["user"]["id"]
    assert verify_password("first", users[0].password)


def test_register_missing_password_is_bad_request(test_client):
    response = test_client.post("/api/auth/register", json={"email": "nopass@nerdytips.ai"})
    assert response.status_code == 400
    assert "password" in response.json()["error"]


def test_login_success(test_client, registered_user):
    """Test successful login and token retrieval."""
    response = test_client.post(
        "/api/auth/login",
        json={"email": "fan@nerdytips.ai", "password": "correct-horse"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["user"]["id"] == registered_user["user"]["id"]
    assert data["user"]["tier"] == "free"
    assert data["token"]


def test_login_wrong_password_and_unknown_email_look_the_same(test_client, registered_user):
    wrong_password = test_client.post(
        "/api/auth/login",
        json={"email": "fan@nerdytips.ai", "password": "wrong"}
    )
    unknown_email = test_client.post(
        "/api/auth/login",
        json={"email": "nobody@nerdytips.ai", "password": "wrong"}
    )

    assert wrong_password.status_code == 400
    assert unknown_email.status_code == 400
    assert wrong_password.json() == unknown_email.json() == {"error": "Invalid credentials"}


def test_me_with_token(test_client, registered_user, auth_headers):
    response = test_client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["id"] == registered_user["user"]["id"]
    assert response.json()["email"] == "fan@nerdytips.ai"


def test_protected_endpoint_without_token(test_client):
    """Test accessing a protected endpoint without a token."""
    response = test_client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


def test_protected_endpoint_with_garbage_token(test_client):
    response = test_client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}


class TestCredentialService:
    """Service-level checks, independent of HTTP."""

    def test_register_then_duplicate(self, db_session, test_settings):
        result = credential_service.register(db_session, "svc@nerdytips.ai", "pw", settings=test_settings)
        assert result.user.email == "svc@nerdytips.ai"

        with pytest.raises(DuplicateEmail):
            credential_service.register(db_session, "svc@nerdytips.ai", "other", settings=test_settings)

    def test_login_wrong_password(self, db_session, test_settings):
        credential_service.register(db_session, "svc@nerdytips.ai", "pw", settings=test_settings)

        with pytest.raises(InvalidCredentials):
            credential_service.login(db_session, "svc@nerdytips.ai", "nope", settings=test_settings)

    def test_login_token_verifies_to_the_same_identity(self, db_session, test_settings):
        registered = credential_service.register(db_session, "svc@nerdytips.ai", "pw", settings=test_settings)
        session = credential_service.login(db_session, "svc@nerdytips.ai", "pw", settings=test_settings)

        identity = credential_service.verify(session.token, settings=test_settings)
        assert identity.id == registered.user.id
        assert identity.email == "svc@nerdytips.ai"


class TestTokenVerification:

    def test_fresh_token_verifies(self, test_settings):
        token = create_session_token("user-1", "a@b.c", settings=test_settings)
        identity = verify_access_token(token, settings=test_settings)
        assert identity.id == "user-1"
        assert identity.email == "a@b.c"

    def test_token_signed_with_other_secret_fails(self, test_settings):
        other = test_settings.model_copy(update={"JWT_SECRET": "another-secret"})
        token = create_session_token("user-1", "a@b.c", settings=other)

        with pytest.raises(Unauthorized):
            verify_access_token(token, settings=test_settings)

    def test_expired_token_fails(self, test_settings):
        token = create_access_token(
            {"sub": "user-1", "email": "a@b.c"},
            expires_delta=timedelta(minutes=-5),
            settings=test_settings
        )

        with pytest.raises(Unauthorized):
            verify_access_token(token, settings=test_settings)

    def test_missing_token_fails(self, test_settings):
        with pytest.raises(Unauthorized):
            verify_access_token(None, settings=test_settings)

    def test_token_without_identity_claims_fails(self, test_settings):
        token = jwt.encode({"scope": "nothing"}, test_settings.JWT_SECRET, algorithm="HS256")

        with pytest.raises(Unauthorized):
            verify_access_token(token, settings=test_settings)
