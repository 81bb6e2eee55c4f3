"""Authentication and authorization exceptions."""

from app.exceptions.base import AppException


class AuthenticationError(AppException):
    """The caller's identity could not be established."""

    pass


class InvalidCredentialsError(AuthenticationError):
    """Email or password is incorrect."""

    def __init__(self, message: str = "Incorrect email or password"):
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    """Bearer token is malformed, of the wrong type, or names an unknown user."""

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message)


class TokenExpiredError(InvalidTokenError):
    """Bearer token signature is valid but its `exp` claim has passed."""

    def __init__(self, token_type: str = "access"):
        """
        Parameters:
            token_type (str): Kind of token that expired; stored as `token_type`
                and used in the message "<Type> token has expired".
        """
        super().__init__(f"{token_type.capitalize()} token has expired")
        self.token_type = token_type


class InsufficientPermissionsError(AppException):
    """Authenticated caller's role is not allowed on this route."""

    def __init__(self, message: str = "Access denied. Role not authorized."):
        super().__init__(message)
