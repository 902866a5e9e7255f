#!/usr/bin/env python3
"""
Entry point for the Guest Court Booking service.

Importing guest_booking.config loads .env before the server settings
below are read.
"""

import os

import uvicorn

from guest_booking.config import LOG_LEVEL

if __name__ == "__main__":
    uvicorn.run(
        "guest_booking.main:app",
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", "8000")),
        reload=os.getenv("API_RELOAD", "false").lower() == "true",
        log_level=LOG_LEVEL.lower(),
    )
