class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is malformed or a required argument is missing."""


class NotFoundError(DomainError):
    """Raised when a referenced staff member, leave row or configuration is absent."""


class ConflictError(DomainError):
    """Raised when the requested transition collides with existing state."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class UpstreamError(Exception):
    """Raised when an external collaborator (messaging, classifier) call fails."""
