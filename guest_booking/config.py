"""
Application configuration from environment variables.

All settings have sensible defaults for local development.
A .env file in the project root is loaded automatically (if present).
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file before reading any env vars
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

# ── Environment ───────────────────────────────────────────────────────────

ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "info")

# ── Upstream guest-booking API ────────────────────────────────────────────

UPSTREAM_API_URL: str = os.getenv("UPSTREAM_API_URL", "http://localhost:5000/api")
UPSTREAM_TIMEOUT: float = float(os.getenv("UPSTREAM_TIMEOUT", "15"))

# Upstream timestamps are converted to this zone before slots are built.
CLUB_TIMEZONE: str = os.getenv("CLUB_TIMEZONE", "UTC")

# ── Slot engine ───────────────────────────────────────────────────────────

# Sports whose physical court can be split into two independently
# bookable halves.
SHARED_ALLOCATION_SPORTS: frozenset[str] = frozenset(
    s.strip()
    for s in os.getenv("SHARED_ALLOCATION_SPORTS", "Basketball").split(",")
    if s.strip()
)

# Max gap (or overlap) between two slots that still counts as adjacent.
SLOT_TOLERANCE_SECONDS: float = float(os.getenv("SLOT_TOLERANCE_SECONDS", "60"))

# ── Wizard ────────────────────────────────────────────────────────────────

# How long a selection rejection stays visible (seconds).
NOTICE_TTL_SECONDS: float = float(os.getenv("NOTICE_TTL_SECONDS", "3"))

# Oldest sessions are evicted once this many wizards are open.
MAX_WIZARD_SESSIONS: int = int(os.getenv("MAX_WIZARD_SESSIONS", "1000"))


def is_shared_allocation_sport(sport_type: str) -> bool:
    """True when *sport_type* may be booked as two half-courts."""
    return sport_type in SHARED_ALLOCATION_SPORTS
