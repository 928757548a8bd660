class ScopingError(Exception):
    """Base class for scoping API errors."""

    def __init__(self, message: str, *, cause: Exception = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self):
        base = f"{type(self).__name__}: {self.message}"
        if self.cause:
            return f"{base} (caused by {repr(self.cause)})"
        return base


class MissingRequiredFieldsError(ScopingError, ValueError):
    """Raised when a record lacks the fields required to persist it."""

    def __init__(self, message: str = "missing required fields", *, cause: Exception = None):
        super().__init__(message, cause=cause)


class DatastoreError(ScopingError):
    """Raised when the document store fails or returns unusable data."""


class CompletionError(ScopingError):
    """Raised when the completion endpoint cannot produce a usable response."""
