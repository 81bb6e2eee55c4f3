"""Object storage exceptions."""

from app.exceptions.base import AppException


class StorageObjectNotFoundError(AppException):
    """The object key does not resolve to a stored artifact."""

    def __init__(self, object_name: str):
        self.object_name = object_name
        super().__init__(f"Stored object '{object_name}' not found")
