"""Custom exceptions for Palate Cleanser."""


class InvalidInput(Exception):
    """Client-supplied data failed validation."""

    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(message)


class DuplicateUsername(Exception):
    """Username already taken at registration."""

    def __init__(self, username: str):
        self.username = username
        super().__init__('That username is already taken. Please try another.')


class Unauthenticated(Exception):
    """No valid session for the request."""

    def __init__(self, message: str = None):
        super().__init__(message or 'Authentication required')


class NotFound(Exception):
    """Referenced user, track or session does not exist."""

    def __init__(self, kind: str, identifier=None):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} not found: {identifier}")


class StoreFailure(Exception):
    """Persistence layer unavailable or an operation against it failed."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Store operation failed: {operation}")


class ConfigurationError(Exception):
    """Required configuration missing at startup."""
