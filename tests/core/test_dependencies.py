"""Tests for authentication and role dependencies."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from sqlmodel import Session

from app.core.config import get_settings
from app.core.dependencies import (
    get_current_admin,
    get_current_employer,
    get_current_user,
    require_roles,
)
from app.core.security import create_access_token
from app.exceptions import (
    InsufficientPermissionsError,
    InvalidTokenError,
    TokenExpiredError,
)
from app.models.enums import UserRole
from app.models.user import User


class TestGetCurrentUser:
    def test_valid_token(self, session: Session, employer_user: User):
        token = create_access_token(data={"sub": employer_user.email})

        user = get_current_user(token, session)

        assert user.id_user == employer_user.id_user

    def test_expired_token(self, session: Session, employer_user: User):
        token = create_access_token(
            data={"sub": employer_user.email}, expires_delta=timedelta(minutes=-1)
        )

        with pytest.raises(TokenExpiredError):
            get_current_user(token, session)

    def test_garbage_token(self, session: Session):
        with pytest.raises(InvalidTokenError):
            get_current_user("not-a-token", session)

    def test_wrong_token_type(self, session: Session, employer_user: User):
        settings = get_settings()
        token = jwt.encode(
            {
                "sub": employer_user.email,
                "type": "refresh",
                "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
            },
            settings.SECRET_KEY.get_secret_value(),
            algorithm=settings.ALGORITHM,
        )

        with pytest.raises(InvalidTokenError):
            get_current_user(token, session)

    def test_missing_subject(self, session: Session):
        token = create_access_token(data={})

        with pytest.raises(InvalidTokenError):
            get_current_user(token, session)

    def test_unknown_user(self, session: Session):
        token = create_access_token(data={"sub": "ghost@example.com"})

        with pytest.raises(InvalidTokenError):
            get_current_user(token, session)


class TestRequireRoles:
    def test_allows_listed_role(self, employer_user: User):
        assert get_current_employer(employer_user) is employer_user

    def test_rejects_other_roles(self, employer_user: User, jobseeker_user: User):
        with pytest.raises(InsufficientPermissionsError):
            get_current_admin(employer_user)
        with pytest.raises(InsufficientPermissionsError):
            get_current_employer(jobseeker_user)

    def test_multiple_roles(self, employer_user: User, admin_user: User):
        check = require_roles(UserRole.EMPLOYER, UserRole.ADMIN)

        assert check(employer_user) is employer_user
        assert check(admin_user) is admin_user
