"""Tests for credential checks and access token handling."""

from datetime import timedelta

import jwt
import pytest
from sqlmodel import Session

from app.core.config import get_settings
from app.core.security import (
    authenticate_user,
    create_access_token,
    decode_access_token,
)
from app.models.user import User

TEST_PASSWORD = "Password123"


class TestAuthenticateUser:
    def test_success(self, session: Session, employer_user: User):
        user = authenticate_user(session, employer_user.email, TEST_PASSWORD)
        assert user is not None
        assert user.id_user == employer_user.id_user

    def test_email_is_case_insensitive(self, session: Session, employer_user: User):
        assert authenticate_user(session, " HR@ACME.com ", TEST_PASSWORD) is not None

    def test_wrong_password(self, session: Session, employer_user: User):
        assert authenticate_user(session, employer_user.email, "WrongPass1") is None

    def test_unknown_email(self, session: Session):
        assert authenticate_user(session, "ghost@example.com", TEST_PASSWORD) is None


class TestAccessToken:
    def test_round_trip_claims(self):
        token = create_access_token(data={"sub": "hr@acme.com"})

        payload = decode_access_token(token)

        assert payload["sub"] == "hr@acme.com"
        assert payload["type"] == "access"
        assert "exp" in payload

    def test_signed_with_secret_key(self):
        settings = get_settings()
        token = create_access_token(data={"sub": "hr@acme.com"})

        with pytest.raises(jwt.InvalidSignatureError):
            jwt.decode(token, "another-secret-key-of-32-characters!", algorithms=[settings.ALGORITHM])

    def test_expired(self):
        token = create_access_token(
            data={"sub": "hr@acme.com"}, expires_delta=timedelta(seconds=-5)
        )

        with pytest.raises(jwt.ExpiredSignatureError):
            decode_access_token(token)

    def test_input_claims_not_mutated(self):
        claims = {"sub": "hr@acme.com"}
        create_access_token(data=claims)
        assert claims == {"sub": "hr@acme.com"}
