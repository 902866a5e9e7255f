"""
Low-level HTTP client for the upstream guest-booking API.

Handles request construction and JSON ↔ Pydantic parsing.  Non-2xx
responses surface as httpx.HTTPStatusError; the services in
guest_booking.services.upstream.service translate them into the domain
error taxonomy.  A single instance is shared across the app lifetime.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx

from guest_booking.config import UPSTREAM_API_URL, UPSTREAM_TIMEOUT
from guest_booking.services.upstream.api_models import (
    AvailableCourtsResponse,
    BookingEnvelope,
    CourtAvailabilityResponse,
    GuestBookingEntry,
    MessageBody,
)
from guest_booking.services.upstream.config import (
    AVAILABLE_COURTS_PATH,
    BOOKING_BY_REFERENCE_PATH,
    CANCEL_BOOKING_PATH,
    COURT_AVAILABILITY_PATH,
    CREATE_BOOKING_PATH,
    DATE_FORMAT,
    DEFAULT_HEADERS,
    UPDATE_PAYMENT_PATH,
)

logger = logging.getLogger(__name__)


class GuestBookingApiClient:
    """Async HTTP client for the guest-booking backend."""

    def __init__(
        self,
        base_url: str = UPSTREAM_API_URL,
        timeout: float = UPSTREAM_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=DEFAULT_HEADERS,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    # ── Availability ──────────────────────────────────────────────────

    async def get_available_courts(self, target_date: date) -> AvailableCourtsResponse:
        """Fetch courts that have rental hours on *target_date*."""
        url = AVAILABLE_COURTS_PATH.format(date=target_date.strftime(DATE_FORMAT))
        resp = await self._client.get(url)
        resp.raise_for_status()
        return AvailableCourtsResponse.model_validate(resp.json())

    async def get_court_availability(
        self,
        court_id: str,
        target_date: date,
    ) -> CourtAvailabilityResponse:
        """Fetch open windows and existing bookings for one court and date."""
        url = COURT_AVAILABILITY_PATH.format(
            court_id=court_id,
            date=target_date.strftime(DATE_FORMAT),
        )
        logger.debug("availability request: court=%s date=%s", court_id, target_date)
        resp = await self._client.get(url)
        resp.raise_for_status()
        return CourtAvailabilityResponse.model_validate(resp.json())

    # ── Bookings ──────────────────────────────────────────────────────

    async def create_booking(self, payload: dict[str, Any]) -> BookingEnvelope:
        logger.debug("create booking request: court=%s", payload.get("court"))
        resp = await self._client.post(CREATE_BOOKING_PATH, json=payload)
        resp.raise_for_status()
        return BookingEnvelope.model_validate(resp.json())

    async def get_booking_by_reference(self, reference: str) -> GuestBookingEntry:
        url = BOOKING_BY_REFERENCE_PATH.format(reference=reference)
        resp = await self._client.get(url)
        resp.raise_for_status()
        return GuestBookingEntry.model_validate(resp.json())

    async def update_payment(
        self,
        booking_id: str,
        payload: dict[str, Any],
    ) -> BookingEnvelope:
        url = UPDATE_PAYMENT_PATH.format(booking_id=booking_id)
        resp = await self._client.put(url, json=payload)
        resp.raise_for_status()
        return BookingEnvelope.model_validate(resp.json())

    async def cancel_booking(self, booking_id: str, email: str) -> MessageBody:
        url = CANCEL_BOOKING_PATH.format(booking_id=booking_id)
        resp = await self._client.put(url, json={"email": email})
        resp.raise_for_status()
        return MessageBody.model_validate(resp.json())
