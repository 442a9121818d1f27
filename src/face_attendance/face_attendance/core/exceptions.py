from .constants import DUPLICATE_FACE_CODE


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is missing or malformed."""


class NotFoundError(DomainError):
    """Raised when an identifier does not resolve to a record."""


class AuthenticationError(DomainError):
    """Raised when a user is not approved or credentials do not match."""


class ConflictError(DomainError):
    """Raised when a face is already registered to another user."""

    def __init__(self, message: str, code: str = DUPLICATE_FACE_CODE):
        super().__init__(message)
        self.code = code


class SessionError(DomainError):
    """Raised when an attendance session is unknown or expired."""
