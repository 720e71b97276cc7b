"""
Domain-specific exceptions for rooms app.

These exceptions represent membership lookups that cannot be answered
and should be caught by callers and converted to their own errors.
"""


class RoomsServiceError(Exception):
    """Base exception for all rooms service errors."""
    pass


class RoomNotFoundError(RoomsServiceError):
    """Raised when a room does not exist."""
    pass
