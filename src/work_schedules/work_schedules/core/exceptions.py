class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when the caller's role or site does not allow an action."""


class NotFoundError(DomainError):
    """Raised when a referenced template, site or employee does not exist."""


class ConflictError(DomainError):
    """Raised when an entity is still referenced and cannot be removed."""
