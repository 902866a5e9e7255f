"""Main FastAPI application for the guest court booking service."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from guest_booking.config import ENVIRONMENT, LOG_LEVEL
from guest_booking.errors import (
    AvailabilityFetchError,
    BookingConflictError,
    BookingStoreError,
    GuestBookingError,
    PaymentUpdateError,
    SubmissionPendingError,
    ValidationError,
    WizardStateError,
)
from guest_booking.models import Error
from guest_booking.rate_limit import limiter
from guest_booking.routers import bookings, courts, health, wizards
from guest_booking.services.sessions import registry

logger = logging.getLogger(__name__)
logging.getLogger("guest_booking").setLevel(LOG_LEVEL.upper())

_STATUS_BY_ERROR: dict[type[GuestBookingError], int] = {
    ValidationError: 422,
    WizardStateError: 409,
    BookingConflictError: 409,
    SubmissionPendingError: 429,
    AvailabilityFetchError: 502,
    PaymentUpdateError: 502,
    BookingStoreError: 502,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    registry.register_upstream()
    try:
        yield
    finally:
        await registry.stop()


app = FastAPI(
    title="Guest Court Booking API",
    description="Reserve one or more consecutive hours on a sports court without an account",
    version="0.1.0",
    # API docs are not published in production
    docs_url=None if ENVIRONMENT == "production" else "/docs",
    redoc_url=None if ENVIRONMENT == "production" else "/redoc",
    lifespan=lifespan,
)

app.state.limiter = limiter


@app.exception_handler(GuestBookingError)
async def guest_booking_error_handler(request: Request, exc: GuestBookingError) -> JSONResponse:
    status_code = next(
        (code for cls, code in _STATUS_BY_ERROR.items() if isinstance(exc, cls)),
        500,
    )
    if status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status_code,
        content=Error(
            error=exc.error_code,
            message=exc.message,
            details=exc.details or None,
        ).model_dump(),
    )


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


app.include_router(health.router)
app.include_router(courts.router)
app.include_router(wizards.router)
app.include_router(bookings.router)
