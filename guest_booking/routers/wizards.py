"""
Booking wizard endpoints (public, unauthenticated).

Each wizard is one booking attempt held in memory by the session
registry.  Every endpoint returns the full WizardState so the front-end
can render the current step without extra round trips.
"""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Request, Response, status

from guest_booking.dependencies import Wizard
from guest_booking.models import (
    CourtChoice,
    DateUpdate,
    DetailsSubmission,
    PaymentRequest,
    Receipt,
    SlotToggleRequest,
    ToggleResponse,
    WizardCreate,
    WizardState,
    WizardStep,
)
from guest_booking.rate_limit import STRICT, SUBMIT, limiter
from guest_booking.services.sessions import registry

router = APIRouter(prefix="/api/wizards", tags=["wizards"])


@router.post(
    "",
    response_model=WizardState,
    status_code=status.HTTP_201_CREATED,
    operation_id="createWizard",
    summary="Start a new booking wizard",
)
@limiter.limit(STRICT)
async def create_wizard(request: Request, body: WizardCreate | None = None) -> WizardState:
    wizard = registry.create(body.booking_date if body else None)
    await wizard.load_courts()
    return wizard.snapshot()


@router.get(
    "/{wizard_id}",
    response_model=WizardState,
    operation_id="getWizard",
    summary="Get the current state of a wizard",
)
async def get_wizard(wizard: Wizard) -> WizardState:
    return wizard.snapshot()


@router.delete(
    "/{wizard_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    operation_id="deleteWizard",
    summary="Abandon a wizard",
)
async def delete_wizard(wizard_id: UUID) -> Response:
    if not registry.remove(wizard_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Wizard {wizard_id} not found",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ── Court and date ────────────────────────────────────────────────────────


@router.put(
    "/{wizard_id}/date",
    response_model=WizardState,
    operation_id="setWizardDate",
    summary="Change the booking date (clears the selection)",
)
async def set_date(body: DateUpdate, wizard: Wizard) -> WizardState:
    wizard.set_date(body.booking_date)
    await wizard.load_courts()
    if wizard.step is WizardStep.SELECT_TIME and wizard.court is not None:
        await wizard.refresh_availability()
    return wizard.snapshot()


@router.put(
    "/{wizard_id}/court",
    response_model=WizardState,
    operation_id="selectWizardCourt",
    summary="Choose the court (clears the selection)",
)
async def select_court(body: CourtChoice, wizard: Wizard) -> WizardState:
    wizard.select_court(body.court_id)
    if wizard.step is WizardStep.SELECT_TIME:
        await wizard.refresh_availability()
    return wizard.snapshot()


# ── Time slots ────────────────────────────────────────────────────────────


@router.post(
    "/{wizard_id}/slots/toggle",
    response_model=ToggleResponse,
    operation_id="toggleWizardSlot",
    summary="Select or deselect a one-hour slot",
)
async def toggle_slot(body: SlotToggleRequest, wizard: Wizard) -> ToggleResponse:
    rejection = wizard.toggle(body.start_time)
    return ToggleResponse(rejection=rejection, state=wizard.snapshot())


@router.post(
    "/{wizard_id}/slots/refresh",
    response_model=WizardState,
    operation_id="refreshWizardSlots",
    summary="Re-fetch availability for the chosen court and date",
)
async def refresh_slots(wizard: Wizard) -> WizardState:
    await wizard.refresh_availability()
    return wizard.snapshot()


# ── Navigation ────────────────────────────────────────────────────────────


@router.post(
    "/{wizard_id}/next",
    response_model=WizardState,
    operation_id="advanceWizard",
    summary="Continue to the next step",
)
async def advance(wizard: Wizard) -> WizardState:
    await wizard.advance()
    return wizard.snapshot()


@router.post(
    "/{wizard_id}/back",
    response_model=WizardState,
    operation_id="backWizard",
    summary="Return to the previous step",
)
async def back(wizard: Wizard) -> WizardState:
    wizard.back()
    return wizard.snapshot()


# ── Details and payment ───────────────────────────────────────────────────


@router.post(
    "/{wizard_id}/details",
    response_model=WizardState,
    operation_id="submitWizardDetails",
    summary="Submit guest details and create the booking",
)
@limiter.limit(SUBMIT)
async def submit_details(request: Request, body: DetailsSubmission, wizard: Wizard) -> WizardState:
    guest = body.model_dump(exclude={"allocation_type"})
    await wizard.submit_details(guest, body.allocation_type)
    return wizard.snapshot()


@router.post(
    "/{wizard_id}/payment",
    response_model=WizardState,
    operation_id="chooseWizardPayment",
    summary="Choose how to pay (Cash = pay later at the court)",
)
async def choose_payment(body: PaymentRequest, wizard: Wizard) -> WizardState:
    await wizard.choose_payment(body.payment_method)
    return wizard.snapshot()


@router.get(
    "/{wizard_id}/receipt",
    response_model=Receipt,
    operation_id="getWizardReceipt",
    summary="Receipt for the booking created by this wizard",
)
async def get_receipt(wizard: Wizard) -> Receipt:
    return wizard.receipt()
