from typing import Annotated, Callable
import jwt
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session, select

from app.core.security import decode_access_token
from app.database.database import get_session
from app.exceptions import (
    InvalidTokenError,
    TokenExpiredError,
    InsufficientPermissionsError,
)
from app.models.enums import UserRole
from app.models.token import TokenData
from app.models.user import User


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    session: Annotated[Session, Depends(get_session)],
) -> User:
    """
    Resolve the authenticated user from an access JWT.

    Returns:
        user (User): The User whose email matches the token's subject.

    Raises:
        TokenExpiredError: If the token's `exp` has passed.
        InvalidTokenError: If the token is invalid, not an access token, missing the subject, or if no matching user is found.
    """
    try:
        payload = decode_access_token(token)
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError("access")
    except jwt.InvalidTokenError:
        raise InvalidTokenError()

    email: str | None = payload.get("sub")
    if email is None or payload.get("type") != "access":
        raise InvalidTokenError()
    token_data = TokenData(email=email)

    user = session.exec(select(User).where(User.email == token_data.email)).first()
    if user is None:
        raise InvalidTokenError()
    return user


def require_roles(*roles: UserRole) -> Callable[..., User]:
    """
    Build a dependency that admits only users holding one of `roles`.

    Usage:
        current_user: Annotated[User, Depends(require_roles(UserRole.ADMIN))]

    Raises:
        InsufficientPermissionsError: When the authenticated user's role is not listed.
    """

    def _check_role(current_user: Annotated[User, Depends(get_current_user)]) -> User:
        if current_user.role not in roles:
            raise InsufficientPermissionsError()
        return current_user

    return _check_role


get_current_employer = require_roles(UserRole.EMPLOYER)
get_current_admin = require_roles(UserRole.ADMIN)
