"""
Custom exception classes for the rental booking backend.

Each error carries a user-facing message and the HTTP status the API
answers with, so controllers can let them propagate to the JSON error
handlers instead of returning generic 500 errors.
"""


class BookingError(Exception):
    """Base class for errors returned to the caller of a booking operation."""

    status_code = 400

    def __init__(self, message: str = "Error: booking request failed") -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover
        return self.message

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(BookingError):
    """Raised for missing, malformed or out-of-order request input."""

    status_code = 400

    def __init__(self, message: str = "Error: invalid request", fields=None) -> None:
        self.fields = list(fields or [])
        super().__init__(message)

    @classmethod
    def missing(cls, fields) -> "ValidationError":
        """Build the error reported when one or more required fields are empty."""
        fields = list(fields)
        return cls(f"Missing fields: {', '.join(fields)}", fields=fields)

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if self.fields:
            payload["fields"] = self.fields
        return payload


class NotFoundError(BookingError):
    """Raised when a referenced vehicle or booking does not exist (or is not yours)."""

    status_code = 404

    def __init__(self, message: str = "Error: not found") -> None:
        super().__init__(message)


class ConflictError(BookingError):
    """Raised when the requested dates overlap a confirmed booking."""

    status_code = 409

    def __init__(self, message: str = "Car already booked") -> None:
        super().__init__(message)


class AuthenticationError(BookingError):
    """Raised when a user-channel operation has no authenticated requester."""

    status_code = 401

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class DuplicateError(BookingError):
    """Raised when a unique value (username, confirmation code) already exists."""

    status_code = 409

    def __init__(self, message: str = "Error: already exists") -> None:
        super().__init__(message)


class NotificationError(Exception):
    """Raised inside notification delivery; never surfaced to booking callers."""

    def __init__(self, message: str = "Error: notification delivery failed") -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover
        return self.message
