"""
Booking endpoints – look up or cancel a booking by reference / id.
"""

from fastapi import APIRouter, HTTPException, status

from guest_booking.dependencies import Store
from guest_booking.models import Booking, CancelRequest, MessageResponse

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.get(
    "/{reference}",
    response_model=Booking,
    operation_id="getBooking",
    summary="Get a booking by its reference",
)
async def get_booking(reference: str, store: Store) -> Booking:
    booking = await store.get_booking(reference)
    if booking is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Booking {reference} not found",
        )
    return booking


@router.post(
    "/{booking_id}/cancel",
    response_model=MessageResponse,
    operation_id="cancelBooking",
    summary="Cancel a booking (guest email must match)",
)
async def cancel_booking(booking_id: str, body: CancelRequest, store: Store) -> MessageResponse:
    await store.cancel_booking(booking_id, str(body.email))
    return MessageResponse(message="Booking cancelled successfully")
