class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(ValidationError):
    """Raised when a referenced row does not exist."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class DuplicateError(DomainError):
    """Raised when the store rejects a row because of a uniqueness constraint."""


class RemoteError(DomainError):
    """Raised when the data store is unreachable or a statement fails."""
