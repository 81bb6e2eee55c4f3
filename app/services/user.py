"""User service module for account creation and lookups."""

from sqlmodel import Session, select
from sqlalchemy.exc import IntegrityError

from app.models.user import User, UserCreate
from app.core.password import get_password_hash
from app.exceptions import AlreadyExistsError


def create_user(session: Session, user_in: UserCreate) -> User:
    """
    Create and persist a new user with a hashed password.

    New accounts start with the "no verification record" projection
    (under review, not verified), which is the model default.

    Parameters:
        user_in (UserCreate): Registration data; must include a plaintext `password`.

    Returns:
        User: The created User model instance.

    Raises:
        AlreadyExistsError: If a user with the same email already exists.
    """
    hashed_password = get_password_hash(user_in.password)

    db_user = User.model_validate(user_in, update={"hashed_password": hashed_password})

    session.add(db_user)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise AlreadyExistsError("User", "email", user_in.email)
    session.refresh(db_user)
    return db_user


def get_user(session: Session, user_id: int) -> User | None:
    """
    Retrieve a user by ID.

    Returns:
        User | None: The user record or None if not found
    """
    return session.get(User, user_id)


def get_user_by_email(session: Session, email: str) -> User | None:
    """
    Retrieve a user by email (case-insensitive, as emails are stored lower-cased).
    """
    statement = select(User).where(User.email == email.strip().lower())
    return session.exec(statement).first()
