"""Pydantic models for the guest booking service."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from guest_booking.errors import RejectionReason


# ── Enumerations ──────────────────────────────────────────────────────────


class AllocationType(str, Enum):
    """Which part of a court a booking occupies."""

    FULL = "Full Court"
    HALF_A = "Half Court A"
    HALF_B = "Half Court B"

    @property
    def is_half(self) -> bool:
        return self is not AllocationType.FULL

    @property
    def wire_value(self) -> str:
        """The upstream API only knows "Full Court" and "Half Court"."""
        return "Half Court" if self.is_half else "Full Court"

    @classmethod
    def from_wire(cls, value: str | None) -> AllocationType:
        """Parse an upstream courtType.  Absent means a full-court booking."""
        if not value:
            return cls.FULL
        if value in ("Half Court", cls.HALF_A.value):
            return cls.HALF_A
        if value == cls.HALF_B.value:
            return cls.HALF_B
        return cls.FULL


class BookingStatus(str, Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"


class PaymentStatus(str, Enum):
    UNPAID = "Unpaid"
    PAID = "Paid"
    REFUNDED = "Refunded"


class PaymentMethod(str, Enum):
    CASH = "Cash"
    CARD = "Card"
    MOBILE = "Mobile"

    @property
    def pay_later(self) -> bool:
        """Cash is settled at the court, so the booking stays unpaid."""
        return self is PaymentMethod.CASH


class WizardStep(str, Enum):
    SELECT_COURT = "select_court"
    SELECT_TIME = "select_time"
    ENTER_DETAILS = "enter_details"
    CHOOSE_PAYMENT = "choose_payment"
    CONFIRMED = "confirmed"

    @property
    def position(self) -> int:
        return WIZARD_STEPS.index(self)


WIZARD_STEPS: list[WizardStep] = list(WizardStep)


# ── Time ──────────────────────────────────────────────────────────────────


class TimeInterval(BaseModel):
    """Half-open interval [start, end)."""

    model_config = ConfigDict(frozen=True)

    start: datetime = Field(..., description="Inclusive start")
    end: datetime = Field(..., description="Exclusive end")

    @model_validator(mode="after")
    def _check_order(self) -> TimeInterval:
        if self.start >= self.end:
            raise ValueError("interval start must be before its end")
        return self

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def hours(self) -> float:
        return self.duration.total_seconds() / 3600


class AvailabilityWindow(TimeInterval):
    """A span during which a court accepts bookings on a given date."""


class BookedInterval(TimeInterval):
    """An existing, committed reservation."""

    allocation_type: AllocationType = Field(
        default=AllocationType.FULL, description="Full court or one half"
    )


# ── Courts and slots ──────────────────────────────────────────────────────


class Court(BaseModel):
    """A bookable court (immutable reference data)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Upstream court identifier")
    name: str = Field(..., description="Court name")
    location: str | None = Field(None, description="Venue / hall")
    sport_type: str = Field(..., description="Sport played on this court")
    hourly_rate: float = Field(..., ge=0, description="Price per hour")
    shared_allocation: bool = Field(
        default=False, description="Can be booked as two independent halves"
    )
    image: str | None = Field(None, description="Image URL")


class DayAvailability(BaseModel):
    """Open windows and existing bookings for one court on one date."""

    court_id: str
    target_date: date
    windows: list[AvailabilityWindow] = Field(default_factory=list)
    booked: list[BookedInterval] = Field(default_factory=list)
    shared_allocation: bool = False


class CandidateSlot(BaseModel):
    """A selectable one-hour slot."""

    model_config = ConfigDict(frozen=True)

    interval: TimeInterval
    display: str = Field(..., description="Human readable 'HH:MM - HH:MM'")
    partially_occupied: bool = Field(
        default=False, description="One half of a shared court is already booked"
    )

    @property
    def start(self) -> datetime:
        return self.interval.start

    @property
    def end(self) -> datetime:
        return self.interval.end


# ── Guest and bookings ────────────────────────────────────────────────────


class GuestDetails(BaseModel):
    """Contact details collected in the 'Your Details' step."""

    model_config = ConfigDict(str_strip_whitespace=True)

    guest_name: str = Field(..., min_length=1, max_length=100, description="Full name")
    guest_email: EmailStr = Field(..., description="Contact email")
    guest_phone: str = Field(
        ..., pattern=r"^[0-9+()\-\s]{6,20}$", description="Contact phone number"
    )
    notes: str | None = Field(None, max_length=500, description="Free-form notes")


class BookingDraft(BaseModel):
    """The assembled, not-yet-persisted request for the Booking Store."""

    model_config = ConfigDict(frozen=True)

    court_id: str
    interval: TimeInterval
    allocation_type: AllocationType
    guest_name: str
    guest_email: str
    guest_phone: str
    notes: str | None = None
    total_price: float


class Booking(BaseModel):
    """Authoritative booking as returned by the Booking Store."""

    id: str = Field(..., description="Store-assigned identifier")
    booking_reference: str = Field(..., description="Reference shown to the guest")
    court_id: str
    court_name: str | None = None
    sport_type: str | None = None
    interval: TimeInterval
    allocation_type: AllocationType = AllocationType.FULL
    guest_name: str
    guest_email: str
    guest_phone: str
    notes: str | None = None
    total_price: float
    status: BookingStatus = BookingStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    payment_method: PaymentMethod | None = None


class Receipt(BaseModel):
    """Printable summary of a booking."""

    booking_reference: str
    court_label: str
    booking_date: date
    time_range: str
    duration_label: str
    total_price: float
    status: BookingStatus
    payment_status: PaymentStatus
    payment_method: PaymentMethod | None = None


# ── Wizard API ────────────────────────────────────────────────────────────


class Notice(BaseModel):
    """Banner shown above the current step."""

    message: str
    level: str = Field(default="warning", description="info | warning | error")


class SlotView(BaseModel):
    """A candidate slot as rendered in the time-selection grid."""

    start_time: datetime
    end_time: datetime
    display: str
    partially_occupied: bool
    selected: bool


class SelectionSummary(BaseModel):
    start_time: datetime
    end_time: datetime
    display: str
    hours: int
    total_price: float


class WizardState(BaseModel):
    """Everything the front-end needs to render the current step."""

    id: UUID
    step: WizardStep
    booking_date: date
    court: Court | None = None
    courts: list[Court] = Field(default_factory=list)
    slots: list[SlotView] = Field(default_factory=list)
    selection: SelectionSummary | None = None
    notice: Notice | None = None
    booking: Booking | None = None
    submitting: bool = False


class WizardCreate(BaseModel):
    booking_date: date | None = Field(None, description="Defaults to today")


class DateUpdate(BaseModel):
    booking_date: date


class CourtChoice(BaseModel):
    court_id: str


class SlotToggleRequest(BaseModel):
    start_time: datetime = Field(..., description="Start of the candidate slot to toggle")


class ToggleResponse(BaseModel):
    rejection: RejectionReason | None = None
    state: WizardState


class DetailsSubmission(BaseModel):
    """Guest details plus the allocation choice for shared courts."""

    guest_name: str
    guest_email: str
    guest_phone: str
    notes: str | None = None
    allocation_type: AllocationType = AllocationType.FULL


class PaymentRequest(BaseModel):
    payment_method: PaymentMethod


class CancelRequest(BaseModel):
    email: EmailStr


class CourtListResponse(BaseModel):
    booking_date: date
    courts: list[Court]


# ── Generic responses ─────────────────────────────────────────────────────


class Error(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: dict[str, Any] | None = Field(None, description="Additional error details")


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="Service version")
    timestamp: datetime = Field(..., description="Current timestamp")
    upstream: bool = Field(..., description="Whether the upstream booking client is registered")
    open_wizards: int = Field(..., description="Wizards currently held in memory")
