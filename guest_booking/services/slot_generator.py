"""Slot generator – turns availability windows into selectable one-hour slots."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from guest_booking.models import (
    AllocationType,
    AvailabilityWindow,
    BookedInterval,
    CandidateSlot,
    Court,
    DayAvailability,
    TimeInterval,
)
from guest_booking.services.interval_math import overlaps

logger = logging.getLogger(__name__)

SLOT_LENGTH = timedelta(hours=1)

# Two half bookings fill a shared court.
_HALVES_PER_COURT = 2


def format_display(start: datetime, end: datetime) -> str:
    return f"{start:%H:%M} - {end:%H:%M}"


class SlotGenerator:
    """
    Derives the ordered list of candidate slots for one court and date.

    Output is a pure function of the inputs, so it is safe to recompute on
    every availability refresh.  No qualifying slot yields an empty list.
    """

    def generate(self, court: Court, availability: DayAvailability) -> list[CandidateSlot]:
        """
        Algorithm:
        1. Walk each window in one-hour steps; a trailing partial hour is dropped
        2. Exclude or annotate each hour against the existing bookings
        3. Return the survivors in chronological order across all windows
        """
        candidates: list[CandidateSlot] = []
        for window in availability.windows:
            for interval in self._hourly_intervals(window):
                slot = self._evaluate(court, interval, availability.booked)
                if slot is not None:
                    candidates.append(slot)

        candidates.sort(key=lambda s: s.start)
        logger.debug(
            "Generated %d slots for court %s on %s",
            len(candidates),
            court.id,
            availability.target_date.isoformat(),
        )
        return candidates

    def _hourly_intervals(self, window: AvailabilityWindow) -> list[TimeInterval]:
        intervals = []
        current = window.start
        while current + SLOT_LENGTH <= window.end:
            intervals.append(TimeInterval(start=current, end=current + SLOT_LENGTH))
            current += SLOT_LENGTH
        return intervals

    def _evaluate(
        self,
        court: Court,
        interval: TimeInterval,
        booked: list[BookedInterval],
    ) -> CandidateSlot | None:
        """Return the candidate for *interval*, or None if it is taken."""
        clashing = [b for b in booked if overlaps(interval, b)]

        if any(b.allocation_type is AllocationType.FULL for b in clashing):
            return None

        partially_occupied = False
        if court.shared_allocation:
            # Halves are counted, not identified.
            halves = sum(1 for b in clashing if b.allocation_type.is_half)
            if halves >= _HALVES_PER_COURT:
                return None
            partially_occupied = halves == 1

        return CandidateSlot(
            interval=interval,
            display=format_display(interval.start, interval.end),
            partially_occupied=partially_occupied,
        )


# Global slot generator instance
slot_generator = SlotGenerator()
