"""
Error kinds raised by the services.

Services raise these and never build HTTP responses themselves; the API
layer maps each kind to a status code (see myblog.api.errors).
"""
from typing import Optional


class BlogError(Exception):
    """Base exception for blog operations."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)


class ValidationError(BlogError):
    """Malformed, oversized or unknown-reference input."""
    pass


class NotFoundError(BlogError):
    """No row matches the requested id, name or search term."""
    pass


class StorageError(BlogError):
    """The database failed, or a mutation affected no rows."""
    pass
