"""FastAPI dependencies: wizard lookup and collaborator access."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status

from guest_booking.services.collaborators import AvailabilityProvider, BookingStore
from guest_booking.services.sessions import registry
from guest_booking.services.wizard import WizardController


def get_wizard(wizard_id: UUID) -> WizardController:
    wizard = registry.get(wizard_id)
    if wizard is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Wizard {wizard_id} not found",
        )
    return wizard


def get_provider() -> AvailabilityProvider:
    if registry.provider is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Availability provider is not configured",
        )
    return registry.provider


def get_store() -> BookingStore:
    if registry.store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Booking store is not configured",
        )
    return registry.store


Wizard = Annotated[WizardController, Depends(get_wizard)]
Provider = Annotated[AvailabilityProvider, Depends(get_provider)]
Store = Annotated[BookingStore, Depends(get_store)]
