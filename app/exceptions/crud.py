"""Lookup and validation exceptions raised by the service layer."""

from app.exceptions.base import AppException


class NotFoundError(AppException):
    """A record, user or stored artifact does not exist."""

    def __init__(self, resource: str, identifier: int | str):
        """
        Build the error for a missing resource.

        Parameters:
            resource (str): Kind of resource that was looked up, e.g. "Verification".
            identifier (int | str): The key that failed to resolve.
        """
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} with identifier '{identifier}' not found")


class AlreadyExistsError(AppException):
    """A unique field already holds the submitted value."""

    def __init__(self, resource: str, field: str, value: int | str):
        self.resource = resource
        self.field = field
        self.value = value
        super().__init__(f"{resource} with {field}='{value}' already exists")


class ValidationError(AppException):
    """Input rejected by a business rule (bad enum value, missing upload, file type)."""

    def __init__(self, message: str, field: str | None = None):
        """
        Parameters:
            message (str): Explanation returned to the caller.
            field (str | None): Request field the error refers to, if any.
        """
        self.field = field
        super().__init__(message)
