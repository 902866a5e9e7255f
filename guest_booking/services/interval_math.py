"""
Overlap and adjacency tests over half-open time intervals.

Both functions work on anything exposing ``start`` / ``end`` datetimes
(TimeInterval, AvailabilityWindow, BookedInterval, CandidateSlot).
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Protocol

from guest_booking.config import SLOT_TOLERANCE_SECONDS

DEFAULT_TOLERANCE = timedelta(seconds=SLOT_TOLERANCE_SECONDS)


class Span(Protocol):
    @property
    def start(self) -> datetime: ...

    @property
    def end(self) -> datetime: ...


def overlaps(a: Span, b: Span) -> bool:
    """
    True if the intervals share any instant.

    Covers *a* starting inside *b*, *a* ending inside *b*, and *a*
    containing *b*.  Intervals that merely touch (a.end == b.start) do
    not overlap.
    """
    return (
        (a.start >= b.start and a.start < b.end)
        or (a.end > b.start and a.end <= b.end)
        or (a.start <= b.start and a.end >= b.end)
    )


def adjacent(a: Span, b: Span, tolerance: timedelta = DEFAULT_TOLERANCE) -> bool:
    """True if one interval ends within *tolerance* of where the other starts."""
    return abs(a.end - b.start) <= tolerance or abs(b.end - a.start) <= tolerance
