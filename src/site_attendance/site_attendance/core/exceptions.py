class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConflictError(DomainError):
    """Raised when a stored record changed since it was read (version mismatch)."""


class ConnectivityError(DomainError):
    """Raised when the persistence API cannot be reached or answers with an error."""
