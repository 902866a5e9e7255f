"""
Pydantic models that mirror the upstream guest-booking API shapes.

These are *internal* – the rest of the app never imports them directly.
The upstream services translate them into guest_booking.models.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field


class CourtInfo(BaseModel):
    """Court summary as embedded in availability and booking responses."""
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str
    location: str | None = None
    sportType: str
    hourlyRate: float
    image: str | None = None


# ── /guest-bookings/available-courts/{date} ───────────────────────────────

class AvailableCourtsResponse(BaseModel):
    date: str | None = None
    courts: list[CourtInfo]


# ── /guest-bookings/availability/{courtId}/{date} ─────────────────────────

class WindowEntry(BaseModel):
    """An open rental window."""
    start: datetime
    end: datetime


class BookedEntry(BaseModel):
    """An existing booking.  courtType is absent for regular bookings."""
    startTime: datetime
    endTime: datetime
    courtType: str | None = None


class CourtAvailabilityResponse(BaseModel):
    court: CourtInfo
    date: str | None = None
    availableSlots: list[WindowEntry] = Field(default_factory=list)
    bookedSlots: list[BookedEntry] = Field(default_factory=list)
    isBasketballCourt: bool = False


# ── /guest-bookings (create / lookup / payment) ───────────────────────────

class GuestBookingEntry(BaseModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    court: CourtInfo | str
    courtType: str | None = None
    guestName: str
    guestEmail: str
    guestPhone: str
    startTime: datetime
    endTime: datetime
    totalPrice: float
    status: str = "Pending"
    paymentStatus: str = "Unpaid"
    paymentMethod: str | None = None
    bookingReference: str
    notes: str | None = None


class BookingEnvelope(BaseModel):
    booking: GuestBookingEntry
    message: str | None = None


class MessageBody(BaseModel):
    msg: str | None = None
    message: str | None = None


class ErrorBody(BaseModel):
    """Error payload: either a single msg or express-validator field errors."""
    msg: str | None = None
    errors: list[dict] | None = None
