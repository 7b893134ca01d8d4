"""
Booking domain errors.

Every rejection from the booking and status-transition services is a
BookingError; the API maps ``code`` to an HTTP status in one handler.
"""
from typing import List, Optional


class BookingError(Exception):
    code = "BookingError"
    http_status = 400

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.fields = fields or []

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code, "fields": self.fields}


class MissingFieldError(BookingError):
    code = "MissingField"


class NotFoundError(BookingError):
    code = "NotFound"
    http_status = 404


class BookingValidationError(BookingError):
    """Malformed date, time or numeric input"""
    code = "ValidationError"


class SlotConflictError(BookingError):
    code = "SlotConflict"
    http_status = 409


class InvalidTransitionError(BookingError):
    code = "InvalidTransition"
