"""
Wizard controller – one guest booking attempt, start to finish.

Steps run strictly in order::

    select_court → select_time → enter_details → choose_payment → confirmed

Back-navigation may return to any earlier step except from ``confirmed``.
Changing the court or the date clears the selection and invalidates any
availability fetch still in flight: every fetch remembers the generation
it was started under and its result is dropped if the generation has
moved on by the time it arrives.

All mutation happens on one event loop, so no locking is involved.  The
only re-entrancy guard is the submission flag: while a booking or
payment call is pending, every step-changing operation is refused.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from datetime import date, datetime
from typing import Any
from uuid import UUID, uuid4

from guest_booking.config import NOTICE_TTL_SECONDS
from guest_booking.errors import (
    AvailabilityFetchError,
    BookingConflictError,
    GuestBookingError,
    PaymentUpdateError,
    RejectionReason,
    SubmissionPendingError,
    ValidationError,
    WizardStateError,
)
from guest_booking.models import (
    AllocationType,
    Booking,
    CandidateSlot,
    Court,
    DayAvailability,
    GuestDetails,
    Notice,
    PaymentMethod,
    Receipt,
    SelectionSummary,
    SlotView,
    WIZARD_STEPS,
    WizardState,
    WizardStep,
)
from guest_booking.services.collaborators import AvailabilityProvider, BookingStore
from guest_booking.services.draft_assembler import assemble
from guest_booking.services.pricing import price_for_selection
from guest_booking.services.receipt import build_receipt
from guest_booking.services.selection import SelectionSet
from guest_booking.services.slot_generator import format_display, slot_generator

logger = logging.getLogger(__name__)

# Steps whose transient error is cleared when they are entered.
_CLEARS_NOTICE_ON_ENTRY = {WizardStep.SELECT_TIME, WizardStep.ENTER_DETAILS}

# Court and date may be changed while the guest is still choosing a time.
_COURT_DATE_STEPS = (WizardStep.SELECT_COURT, WizardStep.SELECT_TIME)


class WizardController:
    """Holds the state of one booking attempt and drives its steps."""

    def __init__(
        self,
        provider: AvailabilityProvider,
        store: BookingStore,
        *,
        booking_date: date | None = None,
        wizard_id: UUID | None = None,
        clock: Callable[[], float] = time.monotonic,
        notice_ttl: float = NOTICE_TTL_SECONDS,
    ) -> None:
        self.id = wizard_id or uuid4()
        self._provider = provider
        self._store = store
        self._clock = clock
        self._notice_ttl = notice_ttl

        self.step = WizardStep.SELECT_COURT
        self.booking_date = booking_date or date.today()
        self.courts: list[Court] = []
        self.court: Court | None = None
        self.availability: DayAvailability | None = None
        self.slots: list[CandidateSlot] = []
        self.selection = SelectionSet()
        self.booking: Booking | None = None

        self._generation = 0
        self._submitting = False
        self._notice: Notice | None = None
        self._notice_expires_at: float | None = None

    # ── Notices ────────────────────────────────────────────────────────

    @property
    def notice(self) -> Notice | None:
        if self._notice_expires_at is not None and self._clock() >= self._notice_expires_at:
            self.clear_notice()
        return self._notice

    def _show_notice(self, message: str, level: str = "error", *, transient: bool = False) -> None:
        self._notice = Notice(message=message, level=level)
        self._notice_expires_at = self._clock() + self._notice_ttl if transient else None

    def clear_notice(self) -> None:
        self._notice = None
        self._notice_expires_at = None

    # ── Guards ─────────────────────────────────────────────────────────

    def _require_idle(self) -> None:
        """Nothing may change the wizard while a store call is in flight."""
        if self._submitting:
            raise SubmissionPendingError(
                "Your booking is being processed, please wait",
                details={"step": self.step.value},
            )

    def _require_step(self, *steps: WizardStep) -> None:
        self._require_idle()
        if self.step not in steps:
            allowed = ", ".join(s.value for s in steps)
            raise WizardStateError(
                f"Not allowed in step '{self.step.value}'",
                details={"step": self.step.value, "allowed": allowed},
            )

    @property
    def submitting(self) -> bool:
        return self._submitting

    # ── Court and date ─────────────────────────────────────────────────

    def _invalidate_availability(self) -> None:
        """Forget slots and selection; results of in-flight fetches become stale."""
        self._generation += 1
        self.availability = None
        self.slots = []
        self.selection.clear()

    async def load_courts(self) -> list[Court]:
        """Fetch the courts bookable on the current date."""
        self._require_step(*_COURT_DATE_STEPS)
        generation = self._generation
        try:
            courts = await self._provider.list_courts(self.booking_date)
        except AvailabilityFetchError as exc:
            if generation == self._generation:
                self.courts = []
                self._show_notice(exc.message)
            return []

        if generation != self._generation:
            logger.debug("Discarding stale court list for wizard %s", self.id)
            return self.courts

        self.courts = courts
        return courts

    def set_date(self, booking_date: date) -> None:
        self._require_step(*_COURT_DATE_STEPS)
        if booking_date == self.booking_date:
            return
        self.booking_date = booking_date
        self.courts = []
        self._invalidate_availability()

    def select_court(self, court_id: str) -> Court:
        self._require_step(*_COURT_DATE_STEPS)
        court = next((c for c in self.courts if c.id == court_id), None)
        if court is None:
            raise ValidationError(
                "Court is not available on the selected date",
                {"court_id": f"Unknown court {court_id}"},
            )
        if self.court is None or self.court.id != court.id:
            self.court = court
            self._invalidate_availability()
        return court

    async def refresh_availability(self) -> bool:
        """
        (Re)fetch availability for the current court and date.

        Returns True if the result was applied, False if it failed or was
        superseded by a court/date change while in flight.
        """
        if self.court is None:
            raise ValidationError("Please select a court", {"court_id": "Court is required"})

        court = self.court
        target_date = self.booking_date
        generation = self._generation
        try:
            availability = await self._provider.fetch_availability(court.id, target_date)
        except AvailabilityFetchError as exc:
            if generation != self._generation:
                logger.debug("Ignoring failed stale fetch for wizard %s", self.id)
                return False
            self.availability = None
            self.slots = []
            self._show_notice(exc.message)
            return False

        if generation != self._generation:
            logger.debug(
                "Discarding stale availability for court %s on %s (wizard %s)",
                court.id,
                target_date,
                self.id,
            )
            return False

        if availability.shared_allocation and not court.shared_allocation:
            court = court.model_copy(update={"shared_allocation": True})
            self.court = court

        self.availability = availability
        self.slots = slot_generator.generate(court, availability)
        return True

    # ── Time selection ─────────────────────────────────────────────────

    def toggle(self, start_time: datetime) -> RejectionReason | None:
        """Toggle the candidate slot starting at *start_time*."""
        self._require_step(WizardStep.SELECT_TIME)
        slot = next((s for s in self.slots if s.start == start_time), None)
        if slot is None:
            raise ValidationError(
                "That time slot is not available",
                {"start_time": f"No slot starts at {start_time.isoformat()}"},
            )

        rejection = self.selection.toggle(slot)
        if rejection is not None:
            self._show_notice(rejection.message, "warning", transient=True)
        return rejection

    @property
    def total_price(self) -> float:
        if self.court is None:
            return 0.0
        return price_for_selection(self.court, self.selection)

    # ── Navigation ─────────────────────────────────────────────────────

    def _enter(self, step: WizardStep) -> None:
        logger.debug("Wizard %s: %s → %s", self.id, self.step.value, step.value)
        self.step = step
        if step in _CLEARS_NOTICE_ON_ENTRY:
            self.clear_notice()

    async def advance(self) -> WizardStep:
        """Move forward from the court or time step."""
        self._require_idle()
        if self.step is WizardStep.SELECT_COURT:
            if self.court is None:
                raise ValidationError("Please select a court", {"court_id": "Court is required"})
            self._enter(WizardStep.SELECT_TIME)
            if self.availability is None:
                await self.refresh_availability()
        elif self.step is WizardStep.SELECT_TIME:
            if len(self.selection) == 0:
                raise ValidationError(
                    "Please select at least one time slot",
                    {"selection": "At least one time slot is required"},
                )
            self._enter(WizardStep.ENTER_DETAILS)
        elif self.step is WizardStep.ENTER_DETAILS:
            raise WizardStateError("Submit your details to continue")
        elif self.step is WizardStep.CHOOSE_PAYMENT:
            raise WizardStateError("Choose a payment method to continue")
        else:
            raise WizardStateError("The booking is already confirmed")
        return self.step

    def go_to(self, step: WizardStep) -> WizardStep:
        """Jump back to any earlier step (never out of 'confirmed')."""
        self._require_idle()
        if self.step is WizardStep.CONFIRMED:
            raise WizardStateError("A confirmed booking cannot be changed")
        if step.position >= self.step.position:
            raise WizardStateError(
                f"Cannot move forward to '{step.value}'",
                details={"step": self.step.value},
            )
        self._enter(step)
        return self.step

    def back(self) -> WizardStep:
        self._require_idle()
        if self.step is WizardStep.SELECT_COURT:
            raise WizardStateError("Already at the first step")
        return self.go_to(WIZARD_STEPS[self.step.position - 1])

    # ── Submission ─────────────────────────────────────────────────────

    async def submit_details(
        self,
        guest: GuestDetails | Mapping[str, Any],
        allocation_type: AllocationType = AllocationType.FULL,
    ) -> Booking:
        """Assemble the draft and create the booking in the store."""
        self._require_step(WizardStep.ENTER_DETAILS)

        draft = assemble(self.selection, self.court, guest, allocation_type)

        self._submitting = True
        try:
            booking = await self._store.create_booking(draft)
        except BookingConflictError as exc:
            logger.info("Booking conflict for wizard %s: %s", self.id, exc.message)
            self._invalidate_availability()
            self._enter(WizardStep.SELECT_TIME)
            await self.refresh_availability()
            self._show_notice(exc.message)
            raise
        except GuestBookingError as exc:
            self._show_notice(exc.message)
            raise
        finally:
            self._submitting = False

        self.booking = booking
        self._enter(WizardStep.CHOOSE_PAYMENT)
        self.clear_notice()
        return booking

    async def choose_payment(self, payment_method: PaymentMethod) -> Booking:
        """Record the payment choice; Cash means pay later at the court."""
        self._require_step(WizardStep.CHOOSE_PAYMENT)
        if self.booking is None:
            raise WizardStateError("No booking to pay for")

        self._submitting = True
        try:
            booking = await self._store.update_payment(
                self.booking.id,
                payment_method,
                pay_later=payment_method.pay_later,
            )
        except PaymentUpdateError as exc:
            self._show_notice(exc.message)
            raise
        finally:
            self._submitting = False

        self.booking = booking
        self._enter(WizardStep.CONFIRMED)
        self.clear_notice()
        return booking

    def receipt(self) -> Receipt:
        if self.booking is None:
            raise WizardStateError("No booking has been created yet")
        return build_receipt(self.booking, self.court)

    # ── Introspection ──────────────────────────────────────────────────

    def snapshot(self) -> WizardState:
        selection = None
        if len(self.selection):
            selection = SelectionSummary(
                start_time=self.selection.start,
                end_time=self.selection.end,
                display=format_display(self.selection.start, self.selection.end),
                hours=self.selection.size(),
                total_price=self.total_price,
            )

        return WizardState(
            id=self.id,
            step=self.step,
            booking_date=self.booking_date,
            court=self.court,
            courts=self.courts,
            slots=[
                SlotView(
                    start_time=s.start,
                    end_time=s.end,
                    display=s.display,
                    partially_occupied=s.partially_occupied,
                    selected=s in self.selection,
                )
                for s in self.slots
            ],
            selection=selection,
            notice=self.notice,
            booking=self.booking,
            submitting=self._submitting,
        )
