"""Receipt summary for a created booking."""

from __future__ import annotations

import math

from guest_booking.config import is_shared_allocation_sport
from guest_booking.models import Booking, Court, Receipt
from guest_booking.services.slot_generator import format_display


def duration_label(hours: float) -> str:
    """'1 hour (2 x 30 min)', '1.5 hours (3 x 30 min)' – rounded up to half hours."""
    half_hours = math.ceil(hours * 2)
    unit = "hour" if half_hours == 2 else "hours"
    return f"{half_hours / 2:g} {unit} ({half_hours} x 30 min)"


def build_receipt(booking: Booking, court: Court | None = None) -> Receipt:
    name = booking.court_name or (court.name if court else booking.court_id)
    sport_type = booking.sport_type or (court.sport_type if court else "")

    court_label = name
    if (court is not None and court.shared_allocation) or is_shared_allocation_sport(sport_type):
        court_label = f"{name} ({booking.allocation_type.wire_value})"

    return Receipt(
        booking_reference=booking.booking_reference,
        court_label=court_label,
        booking_date=booking.interval.start.date(),
        time_range=format_display(booking.interval.start, booking.interval.end),
        duration_label=duration_label(booking.interval.hours),
        total_price=booking.total_price,
        status=booking.status,
        payment_status=booking.payment_status,
        payment_method=booking.payment_method,
    )
