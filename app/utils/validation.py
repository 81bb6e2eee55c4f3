import os
from typing import TypeVar
from app.exceptions import AppException, ValidationError

T = TypeVar("T")

ALLOWED_DOCUMENT_EXTENSIONS = frozenset({".pdf", ".png", ".jpg", ".jpeg"})
ALLOWED_DOCUMENT_MIME_TYPES = frozenset(
    {"application/pdf", "image/png", "image/jpg", "image/jpeg"}
)


def ensure_id(id_value: T | None, resource_name: str = "Resource") -> T:
    """
    Ensure that an ID value is not None.

    Args:
        id_value: The ID value to check.
        resource_name: The name of the resource for the error message.

    Returns:
        The non-None ID value.

    Raises:
        AppException: If the ID value is None.
    """
    if id_value is None:
        raise AppException(f"{resource_name} ID is missing")
    return id_value


def validate_verification_document(
    file_name: str, content_type: str, size: int, max_size: int
) -> None:
    """
    Check a verification upload's type and size.

    Both the extension and the declared mime type must be one of PDF, PNG or
    JPEG, and the payload must be non-empty and at most `max_size` bytes.

    Raises:
        ValidationError: On the first rule the upload breaks (field "document").
    """
    extension = os.path.splitext(file_name)[1].lower()
    if (
        extension not in ALLOWED_DOCUMENT_EXTENSIONS
        or (content_type or "").lower() not in ALLOWED_DOCUMENT_MIME_TYPES
    ):
        raise ValidationError(
            "Only PDF, JPG, JPEG, PNG files are allowed", field="document"
        )
    if size <= 0:
        raise ValidationError("Uploaded file is empty.", field="document")
    if size > max_size:
        raise ValidationError(
            f"File too large (max {max_size // (1024 * 1024)}MB)", field="document"
        )
