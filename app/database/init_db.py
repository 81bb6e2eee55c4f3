from sqlmodel import Session, select
from loguru import logger
from sqlalchemy.exc import IntegrityError

from app.core.config import get_settings
from app.core.password import get_password_hash
from app.exceptions import AlreadyExistsError
from app.models.enums import UserRole
from app.models.user import User


def init_db(session: Session) -> None:
    """
    Ensure the configured initial admin account exists in the database.

    If FIRST_SUPERUSER_EMAIL or FIRST_SUPERUSER_PASSWORD is not set, the function logs a warning and makes no changes. If a user with the configured email already exists, no action is taken. Otherwise, an admin User is created from the configured settings and persisted.

    Parameters:
        session (Session): Database session used to query for an existing user and to add/commit the admin.

    Raises:
        AlreadyExistsError: If a unique constraint prevents creating the admin (email already exists).
        Exception: Any other error encountered while creating or persisting the admin is propagated.
    """
    settings = get_settings()
    if (
        not settings.FIRST_SUPERUSER_EMAIL
        or not settings.FIRST_SUPERUSER_PASSWORD.get_secret_value()
    ):
        logger.warning("First superuser not configured. Skipping creation.")
        return

    email = settings.FIRST_SUPERUSER_EMAIL.strip().lower()
    admin = session.exec(select(User).where(User.email == email)).first()

    if admin:
        if admin.role != UserRole.ADMIN:
            logger.warning(f"User {email} exists but is not an admin; leaving it as is")
        else:
            logger.info("First superuser already exists")
        return

    admin = User(
        name=settings.FIRST_SUPERUSER_NAME,
        email=email,
        role=UserRole.ADMIN,
        hashed_password=get_password_hash(
            settings.FIRST_SUPERUSER_PASSWORD.get_secret_value()
        ),
    )
    try:
        session.add(admin)
        session.commit()
        logger.info("First superuser created successfully")
    except IntegrityError:
        session.rollback()
        logger.error("First superuser already exists (constraint violation)")
        raise AlreadyExistsError("User", "email", email)
    except Exception as e:
        session.rollback()
        logger.error(f"Failed to create first superuser: {e}")
        raise
