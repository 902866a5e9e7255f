"""
Court endpoints – which courts take rentals on a given date.
"""

from datetime import date

from fastapi import APIRouter, Query

from guest_booking.dependencies import Provider
from guest_booking.models import CourtListResponse

router = APIRouter(prefix="/api/courts", tags=["courts"])


@router.get(
    "",
    response_model=CourtListResponse,
    operation_id="listCourts",
    summary="List courts bookable on a date",
)
async def list_courts(
    provider: Provider,
    booking_date: date | None = Query(
        None, alias="date", description="Date (YYYY-MM-DD), defaults to today"
    ),
    sport_type: str | None = Query(None, description="Filter by sport"),
) -> CourtListResponse:
    target_date = booking_date or date.today()
    courts = await provider.list_courts(target_date)
    if sport_type:
        courts = [c for c in courts if c.sport_type.lower() == sport_type.lower()]
    return CourtListResponse(booking_date=target_date, courts=courts)
