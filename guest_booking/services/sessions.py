"""
Wizard session registry – holds every open booking wizard.

Provides a single place to look up a wizard by id and owns the upstream
collaborators shared by all wizards.  Initialized once at application
startup.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from datetime import date
from uuid import UUID

from guest_booking.config import MAX_WIZARD_SESSIONS
from guest_booking.services.collaborators import AvailabilityProvider, BookingStore
from guest_booking.services.upstream.client import GuestBookingApiClient
from guest_booking.services.upstream.service import (
    UpstreamAvailabilityProvider,
    UpstreamBookingStore,
)
from guest_booking.services.wizard import WizardController

logger = logging.getLogger(__name__)


class WizardRegistry:
    """
    Registry of open wizards plus the Availability Provider and Booking
    Store they talk to.

    Wizards live in memory only.  Once *max_sessions* are open the least
    recently created one is dropped.
    """

    def __init__(self, max_sessions: int = MAX_WIZARD_SESSIONS) -> None:
        self._wizards: OrderedDict[UUID, WizardController] = OrderedDict()
        self._max_sessions = max_sessions
        self._client: GuestBookingApiClient | None = None
        self.provider: AvailabilityProvider | None = None
        self.store: BookingStore | None = None

    # ── Lifecycle ──────────────────────────────────────────────────────

    def register_upstream(self) -> None:
        """Create the HTTP client and the upstream-backed collaborators."""
        client = GuestBookingApiClient()
        self._client = client
        self.provider = UpstreamAvailabilityProvider(client)
        self.store = UpstreamBookingStore(client)
        logger.info("Upstream guest-booking API registered")

    async def stop(self) -> None:
        """Drop all wizards and close the HTTP client."""
        self._wizards.clear()
        if self._client is not None:
            await self._client.close()
            self._client = None
            logger.info("Upstream client closed")

    # ── Wizards ────────────────────────────────────────────────────────

    def create(self, booking_date: date | None = None) -> WizardController:
        if self.provider is None or self.store is None:
            raise RuntimeError("WizardRegistry used before collaborators were registered")

        wizard = WizardController(self.provider, self.store, booking_date=booking_date)
        self._wizards[wizard.id] = wizard
        while len(self._wizards) > self._max_sessions:
            evicted, _ = self._wizards.popitem(last=False)
            logger.info("Evicted wizard %s (session limit %d)", evicted, self._max_sessions)
        return wizard

    def get(self, wizard_id: UUID) -> WizardController | None:
        return self._wizards.get(wizard_id)

    def remove(self, wizard_id: UUID) -> bool:
        return self._wizards.pop(wizard_id, None) is not None

    def __len__(self) -> int:
        return len(self._wizards)


# ── Singleton instance ────────────────────────────────────────────────────
registry = WizardRegistry()
