"""Domain layer errors.

Each error maps to one HTTP status in the interface layer.
"""


class DomainError(Exception):
    """Base domain error."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Domain validation error (400)."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error (400)."""

    pass


class AuthenticationError(DomainError):
    """Caller could not be authenticated (401)."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when a user acts on a resource they don't own (403)."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(f"Not authorized to modify this {resource.lower()}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found (404)."""

    def __init__(self, resource: str, identifier: str, message: str | None = None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(message or f"{resource} not found")


class ConflictError(DomainError):
    """Raised when a write collides with existing state (409)."""

    pass


class StorageError(DomainError):
    """Underlying store failed (500, message not exposed to clients)."""

    pass
