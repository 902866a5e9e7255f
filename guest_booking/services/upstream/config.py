"""
Upstream guest-booking API configuration.

Endpoint paths and request defaults for the booking backend that acts as
both the Availability Provider and the Booking Store.
"""

from __future__ import annotations

# ── API endpoints (relative to UPSTREAM_API_URL) ──────────────────────────

AVAILABLE_COURTS_PATH = "/guest-bookings/available-courts/{date}"
COURT_AVAILABILITY_PATH = "/guest-bookings/availability/{court_id}/{date}"
CREATE_BOOKING_PATH = "/guest-bookings"
BOOKING_BY_REFERENCE_PATH = "/guest-bookings/reference/{reference}"
UPDATE_PAYMENT_PATH = "/guest-bookings/{booking_id}/payment"
CANCEL_BOOKING_PATH = "/guest-bookings/{booking_id}/cancel"

# Dates travel as calendar dates without a time component.
DATE_FORMAT = "%Y-%m-%d"

# ── HTTP defaults ─────────────────────────────────────────────────────────

DEFAULT_HEADERS: dict[str, str] = {
    "User-Agent": "GuestBooking/0.1",
    "Accept": "application/json",
    "Content-Type": "application/json",
}
