"""
Error taxonomy for the guest booking flow.

Selection rejections are *values* (RejectionReason), returned by
SelectionSet.toggle and shown as a transient notice.  Everything else is
an exception derived from GuestBookingError; the FastAPI app maps each
class onto an HTTP status in guest_booking.main.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class RejectionReason(str, Enum):
    """Why a slot toggle was refused.  The selection is left unchanged."""

    NOT_CONSECUTIVE = "not_consecutive"
    WOULD_BREAK_CONTINUITY = "would_break_continuity"

    @property
    def message(self) -> str:
        return _REJECTION_MESSAGES[self]


_REJECTION_MESSAGES = {
    RejectionReason.NOT_CONSECUTIVE: "Please select consecutive time slots only",
    RejectionReason.WOULD_BREAK_CONTINUITY: (
        "Removing this slot would break the continuous booking. "
        "Please deselect from the ends first."
    ),
}


class GuestBookingError(Exception):
    """Base class for every recoverable or remote failure in the flow."""

    error_code = "guest_booking_error"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(GuestBookingError):
    """Malformed guest contact fields, empty selection, missing court."""

    error_code = "validation_error"

    def __init__(
        self,
        message: str,
        field_errors: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message, details={"fields": field_errors or {}})
        self.field_errors = field_errors or {}


class WizardStateError(GuestBookingError):
    """An operation was requested in a step that does not allow it."""

    error_code = "invalid_step"


class SubmissionPendingError(GuestBookingError):
    """A booking submission is already in flight for this wizard."""

    error_code = "submission_pending"


class AvailabilityFetchError(GuestBookingError):
    """The Availability Provider call failed."""

    error_code = "availability_unavailable"


class BookingConflictError(GuestBookingError):
    """The Booking Store refused the interval (taken by someone else)."""

    error_code = "booking_conflict"


class PaymentUpdateError(GuestBookingError):
    """The Booking Store could not record the payment choice."""

    error_code = "payment_failed"


class BookingStoreError(GuestBookingError):
    """Any other Booking Store failure (lookup, cancel, server errors)."""

    error_code = "booking_store_error"
