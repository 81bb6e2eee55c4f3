from datetime import datetime, timedelta, timezone

import jwt
from sqlmodel import Session, select

from app.core.config import get_settings
from app.core.password import verify_password
from app.models.user import User

# Verified when the email is unknown so both branches cost one Argon2 check
DUMMY_HASH = "$argon2id$v=19$m=65536,t=3,p=4$dummy"


def authenticate_user(session: Session, email: str, password: str) -> User | None:
    """
    Authenticate a user by email and password.

    Returns:
        User if authentication succeeds, `None` otherwise.
    """
    statement = select(User).where(User.email == email.strip().lower())
    user = session.exec(statement).first()
    hash_to_verify = user.hashed_password if user else DUMMY_HASH
    if verify_password(password, hash_to_verify) and user:
        return user
    return None


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """
    Create a signed JWT access token containing the provided claims.

    Parameters:
        data (dict): Claims to include in the token payload; `sub` should carry the user's email.
        expires_delta (timedelta | None): Time until expiration. Defaults to ACCESS_TOKEN_EXPIRE_MINUTES.

    Returns:
        str: Encoded JWT string with `exp` and `type="access"` claims added.
    """
    settings = get_settings()
    expires_delta = expires_delta or timedelta(
        minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    to_encode = data.copy()
    to_encode.update(
        {"exp": datetime.now(timezone.utc) + expires_delta, "type": "access"}
    )
    return jwt.encode(
        to_encode,
        settings.SECRET_KEY.get_secret_value(),
        algorithm=settings.ALGORITHM,
    )


def decode_access_token(token: str) -> dict:
    """
    Decode and verify an access token.

    Raises:
        jwt.ExpiredSignatureError: If the token has expired.
        jwt.InvalidTokenError: If the signature or format is invalid.
    """
    settings = get_settings()
    return jwt.decode(
        token,
        settings.SECRET_KEY.get_secret_value(),
        algorithms=[settings.ALGORITHM],
    )
