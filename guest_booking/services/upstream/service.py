"""
Upstream services – implement the AvailabilityProvider and BookingStore
protocols on top of GuestBookingApiClient.

Translates upstream API responses into our domain models
(guest_booking.models) and upstream failures into the error taxonomy
(guest_booking.errors).  This is the only layer that knows about both the
external API shape and our internal schema.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from zoneinfo import ZoneInfo

import httpx

from guest_booking.config import CLUB_TIMEZONE, is_shared_allocation_sport
from guest_booking.errors import (
    AvailabilityFetchError,
    BookingConflictError,
    BookingStoreError,
    PaymentUpdateError,
    ValidationError,
)
from guest_booking.models import (
    AllocationType,
    AvailabilityWindow,
    BookedInterval,
    Booking,
    BookingDraft,
    BookingStatus,
    Court,
    DayAvailability,
    PaymentMethod,
    PaymentStatus,
    TimeInterval,
)
from guest_booking.services.upstream.api_models import (
    CourtInfo,
    ErrorBody,
    GuestBookingEntry,
)
from guest_booking.services.upstream.client import GuestBookingApiClient

logger = logging.getLogger(__name__)

_CLUB_TZ = ZoneInfo(CLUB_TIMEZONE)


# ── Translation helpers ───────────────────────────────────────────────────


def _localize(value: datetime) -> datetime:
    """Aware upstream timestamps are shown in the club's time zone."""
    if value.tzinfo is None:
        return value
    return value.astimezone(_CLUB_TZ)


def _to_court(info: CourtInfo, shared_flag: bool = False) -> Court:
    return Court(
        id=info.id,
        name=info.name,
        location=info.location,
        sport_type=info.sportType,
        hourly_rate=info.hourlyRate,
        shared_allocation=shared_flag or is_shared_allocation_sport(info.sportType),
        image=info.image or None,
    )


def _to_booking(entry: GuestBookingEntry) -> Booking:
    court = entry.court if isinstance(entry.court, CourtInfo) else None
    return Booking(
        id=entry.id,
        booking_reference=entry.bookingReference,
        court_id=court.id if court else str(entry.court),
        court_name=court.name if court else None,
        sport_type=court.sportType if court else None,
        interval=TimeInterval(
            start=_localize(entry.startTime),
            end=_localize(entry.endTime),
        ),
        allocation_type=AllocationType.from_wire(entry.courtType),
        guest_name=entry.guestName,
        guest_email=entry.guestEmail,
        guest_phone=entry.guestPhone,
        notes=entry.notes or None,
        total_price=entry.totalPrice,
        status=BookingStatus(entry.status),
        payment_status=PaymentStatus(entry.paymentStatus),
        payment_method=PaymentMethod(entry.paymentMethod) if entry.paymentMethod else None,
    )


def _error_body(exc: httpx.HTTPError) -> ErrorBody:
    if not isinstance(exc, httpx.HTTPStatusError):
        return ErrorBody(msg=None)
    try:
        return ErrorBody.model_validate(exc.response.json())
    except ValueError:
        return ErrorBody(msg=exc.response.text or None)


def _upstream_message(exc: httpx.HTTPError, fallback: str) -> str:
    body = _error_body(exc)
    if body.msg:
        return body.msg
    if body.errors:
        return str(body.errors[0].get("msg", fallback))
    return fallback


def _status_code(exc: Exception) -> int | None:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code
    return None


# ── Availability Provider ─────────────────────────────────────────────────


class UpstreamAvailabilityProvider:
    """
    Implements the AvailabilityProvider protocol.

    Usage::

        client = GuestBookingApiClient()
        provider = UpstreamAvailabilityProvider(client)
        courts = await provider.list_courts(date.today())
        day = await provider.fetch_availability(courts[0].id, date.today())
    """

    def __init__(self, client: GuestBookingApiClient) -> None:
        self._client = client

    async def list_courts(self, target_date: date) -> list[Court]:
        try:
            response = await self._client.get_available_courts(target_date)
        except (httpx.HTTPError, ValueError) as exc:
            if _status_code(exc) == 404:
                # Upstream answers 404 when no court is active at all.
                return []
            logger.warning("Failed to list courts for %s: %s", target_date, exc)
            raise AvailabilityFetchError(
                "Failed to fetch available courts",
                details={"date": target_date.isoformat()},
            ) from exc

        return [_to_court(info) for info in response.courts]

    async def fetch_availability(self, court_id: str, target_date: date) -> DayAvailability:
        try:
            response = await self._client.get_court_availability(court_id, target_date)
        except (httpx.HTTPError, ValueError) as exc:
            if _status_code(exc) == 400:
                # Closed that day or no rental hours: nothing to offer.
                logger.info(
                    "No rental hours for court %s on %s: %s",
                    court_id,
                    target_date,
                    _upstream_message(exc, "not available"),
                )
                return DayAvailability(court_id=court_id, target_date=target_date)
            logger.warning(
                "Availability fetch failed for court %s on %s: %s",
                court_id,
                target_date,
                exc,
            )
            message = (
                _upstream_message(exc, "Failed to fetch court availability")
                if isinstance(exc, httpx.HTTPError)
                else "Failed to fetch court availability"
            )
            raise AvailabilityFetchError(
                message,
                details={"court_id": court_id, "date": target_date.isoformat()},
            ) from exc

        windows = [
            AvailabilityWindow(start=_localize(w.start), end=_localize(w.end))
            for w in response.availableSlots
            if w.start < w.end
        ]
        booked = [
            BookedInterval(
                start=_localize(b.startTime),
                end=_localize(b.endTime),
                allocation_type=AllocationType.from_wire(b.courtType),
            )
            for b in response.bookedSlots
            if b.startTime < b.endTime
        ]
        return DayAvailability(
            court_id=court_id,
            target_date=target_date,
            windows=windows,
            booked=booked,
            shared_allocation=(
                response.isBasketballCourt
                or is_shared_allocation_sport(response.court.sportType)
            ),
        )


# ── Booking Store ─────────────────────────────────────────────────────────


class UpstreamBookingStore:
    """Implements the BookingStore protocol against the upstream API."""

    def __init__(self, client: GuestBookingApiClient) -> None:
        self._client = client

    async def create_booking(self, draft: BookingDraft) -> Booking:
        payload = {
            "court": draft.court_id,
            "startTime": draft.interval.start.isoformat(),
            "endTime": draft.interval.end.isoformat(),
            "guestName": draft.guest_name,
            "guestEmail": draft.guest_email,
            "guestPhone": draft.guest_phone,
            "notes": draft.notes or "",
            "courtType": draft.allocation_type.wire_value,
            "totalPrice": draft.total_price,
        }
        try:
            envelope = await self._client.create_booking(payload)
            booking = _to_booking(envelope.booking)
        except httpx.HTTPStatusError as exc:
            body = _error_body(exc)
            status = exc.response.status_code
            if status in (400, 409) and body.errors:
                field_errors = {
                    str(err.get("param") or err.get("path") or "booking"): str(err.get("msg", ""))
                    for err in body.errors
                }
                raise ValidationError("The booking request was rejected", field_errors) from exc
            if status in (400, 409):
                raise BookingConflictError(
                    body.msg or "The selected time is no longer available",
                    details={"court_id": draft.court_id},
                ) from exc
            logger.warning("Booking creation failed (%d): %s", status, body.msg)
            raise BookingStoreError(body.msg or "Failed to create booking") from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Booking creation failed: %s", exc)
            raise BookingStoreError("Failed to create booking") from exc

        logger.info(
            "Booking %s created for court %s (%s)",
            booking.booking_reference,
            booking.court_id,
            booking.interval.start.isoformat(),
        )
        return booking

    async def update_payment(
        self,
        booking_id: str,
        payment_method: PaymentMethod,
        pay_later: bool = False,
    ) -> Booking:
        payload = {"paymentMethod": payment_method.value, "payLater": pay_later}
        try:
            envelope = await self._client.update_payment(booking_id, payload)
            booking = _to_booking(envelope.booking)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Payment update failed for booking %s: %s", booking_id, exc)
            message = (
                _upstream_message(exc, "Failed to process payment")
                if isinstance(exc, httpx.HTTPError)
                else "Failed to process payment"
            )
            raise PaymentUpdateError(message, details={"booking_id": booking_id}) from exc

        logger.info(
            "Booking %s payment updated: %s / %s",
            booking.booking_reference,
            payment_method.value,
            booking.payment_status.value,
        )
        return booking

    async def get_booking(self, reference: str) -> Booking | None:
        try:
            entry = await self._client.get_booking_by_reference(reference)
            return _to_booking(entry)
        except (httpx.HTTPError, ValueError) as exc:
            if _status_code(exc) == 404:
                return None
            logger.warning("Booking lookup failed for %s: %s", reference, exc)
            raise BookingStoreError("Failed to fetch booking") from exc

    async def cancel_booking(self, booking_id: str, email: str) -> None:
        try:
            await self._client.cancel_booking(booking_id, email)
        except (httpx.HTTPError, ValueError) as exc:
            message = (
                _upstream_message(exc, "Failed to cancel booking")
                if isinstance(exc, httpx.HTTPError)
                else "Failed to cancel booking"
            )
            logger.warning("Cancel failed for booking %s: %s", booking_id, message)
            raise BookingStoreError(message, details={"booking_id": booking_id}) from exc
        logger.info("Booking %s cancelled", booking_id)
