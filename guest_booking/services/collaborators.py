"""
Interfaces of the two external collaborators the wizard depends on.

The HTTP implementations live in guest_booking.services.upstream; tests
use in-memory fakes.  Keeping the wizard behind these protocols means it
never knows which booking backend it is talking to.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol

from guest_booking.models import (
    Booking,
    BookingDraft,
    Court,
    DayAvailability,
    PaymentMethod,
)


class AvailabilityProvider(Protocol):
    """Source of courts, open windows and existing bookings."""

    async def list_courts(self, target_date: date) -> list[Court]:
        """Return the courts that accept rentals on *target_date*."""
        ...

    async def fetch_availability(self, court_id: str, target_date: date) -> DayAvailability:
        """
        Return windows and booked intervals for one court and date.
        Raises AvailabilityFetchError on any failure.
        """
        ...


class BookingStore(Protocol):
    """Authoritative store for guest bookings."""

    async def create_booking(self, draft: BookingDraft) -> Booking:
        """Persist *draft*.  Raises BookingConflictError if the time was taken."""
        ...

    async def update_payment(
        self,
        booking_id: str,
        payment_method: PaymentMethod,
        pay_later: bool = False,
    ) -> Booking:
        """Record the payment choice.  Raises PaymentUpdateError on failure."""
        ...

    async def get_booking(self, reference: str) -> Booking | None:
        """Look a booking up by its reference, or None if unknown."""
        ...

    async def cancel_booking(self, booking_id: str, email: str) -> None:
        """Cancel a booking after verifying the guest's email."""
        ...
