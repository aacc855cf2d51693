"""Typed failures raised by the account, session and reset services.

Routes translate these into HTTP responses; services never touch status codes.
"""


class ServiceError(Exception):
    """Base class; carries a caller-safe message."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(ServiceError):
    """Requested resource does not exist (or is soft-deleted)."""


class ConflictError(ServiceError):
    """Resource already exists (e.g. email taken at registration)."""


class InvalidCredentialsError(ServiceError):
    """Email/password pair did not authenticate. Same error for unknown email and wrong password."""

    def __init__(self, message: str = "Invalid email or password.") -> None:
        super().__init__(message)


class TokenInvalidError(ServiceError):
    """Bad signature, expired, malformed, wrong type, or not the currently stored token."""

    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(message)


class UnauthorizedError(ServiceError):
    """No session, or the session no longer maps to an active user."""

    def __init__(self, message: str = "Authentication required. Please login.") -> None:
        super().__init__(message)


class DeliveryFailureError(ServiceError):
    """An email could not be delivered."""
