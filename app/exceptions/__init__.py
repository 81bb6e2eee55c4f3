"""
Application exceptions module.

Services raise these domain exceptions; they never raise HTTP errors
themselves. The hierarchy is:
- AppException: root of every domain error
- CRUD exceptions for lookups, uniqueness and business validation
- Auth exceptions for identity and role checks
- Storage exceptions for the object store collaborator

HTTP mapping lives in app/core/error_handlers.py.
"""

from app.exceptions.base import AppException
from app.exceptions.crud import (
    NotFoundError,
    AlreadyExistsError,
    ValidationError,
)
from app.exceptions.auth import (
    AuthenticationError,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    InsufficientPermissionsError,
)
from app.exceptions.storage import StorageObjectNotFoundError

__all__ = [
    "AppException",
    "NotFoundError",
    "AlreadyExistsError",
    "ValidationError",
    "AuthenticationError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "TokenExpiredError",
    "InsufficientPermissionsError",
    "StorageObjectNotFoundError",
]
