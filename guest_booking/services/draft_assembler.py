"""
Booking draft assembly.

Combines the selection, the court and the guest's contact details into the
payload handed to the Booking Store.  Pure construction: nothing here
touches the network.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pydantic

from guest_booking.errors import ValidationError
from guest_booking.models import AllocationType, BookingDraft, Court, GuestDetails
from guest_booking.services.pricing import price_for_interval, price_for_selection
from guest_booking.services.selection import SelectionSet


def validate_guest(guest: GuestDetails | Mapping[str, Any]) -> GuestDetails:
    """Run the contact-field format checks, raising our ValidationError."""
    if isinstance(guest, GuestDetails):
        return guest
    try:
        return GuestDetails.model_validate(dict(guest))
    except pydantic.ValidationError as exc:
        field_errors = {
            str(err["loc"][0]) if err["loc"] else "guest": err["msg"]
            for err in exc.errors()
        }
        raise ValidationError("Please correct the highlighted fields", field_errors) from None


def assemble(
    selection: SelectionSet,
    court: Court | None,
    guest: GuestDetails | Mapping[str, Any],
    allocation_type: AllocationType = AllocationType.FULL,
) -> BookingDraft:
    """
    Build a BookingDraft spanning the whole selection.

    A full-court booking is priced per selected hour.  A half-court booking
    on a shared court is priced from the span's duration at half rate.
    """
    if court is None:
        raise ValidationError("Please select a court", {"court": "Court is required"})

    span = selection.span()
    if span is None:
        raise ValidationError(
            "Please select at least one time slot",
            {"selection": "At least one time slot is required"},
        )

    if allocation_type.is_half and not court.shared_allocation:
        raise ValidationError(
            "Half court booking is not available for this court",
            {"allocation_type": f"{court.sport_type} courts can only be booked in full"},
        )

    details = validate_guest(guest)

    if allocation_type.is_half:
        total_price = price_for_interval(court, span, allocation_type)
    else:
        total_price = price_for_selection(court, selection)

    return BookingDraft(
        court_id=court.id,
        interval=span,
        allocation_type=allocation_type,
        guest_name=details.guest_name,
        guest_email=str(details.guest_email),
        guest_phone=details.guest_phone,
        notes=details.notes or None,
        total_price=total_price,
    )
