"""
Contiguous selection of candidate slots for a single booking.

The set only changes through toggle().  After every successful toggle the
members, sorted by start time, form one unbroken chain: each member ends
within the tolerance of where the next one starts.  Slots are identified
by their display interval, so a slot is never held twice.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from guest_booking.errors import RejectionReason
from guest_booking.models import CandidateSlot, TimeInterval
from guest_booking.services.interval_math import DEFAULT_TOLERANCE, adjacent


class SelectionSet:
    """Ordered, contiguous chain of chosen one-hour slots."""

    def __init__(self, tolerance: timedelta = DEFAULT_TOLERANCE) -> None:
        self._tolerance = tolerance
        self._slots: list[CandidateSlot] = []

    # ── Mutation ───────────────────────────────────────────────────────

    def toggle(self, slot: CandidateSlot) -> RejectionReason | None:
        """
        Add *slot* if absent, remove it if present.

        Returns None on success, or the reason the change was refused.  A
        refused toggle leaves the selection untouched.
        """
        if slot in self:
            if self._would_break_continuity(slot):
                return RejectionReason.WOULD_BREAK_CONTINUITY
            self._slots = [s for s in self._slots if s.display != slot.display]
            return None

        if self._slots:
            earliest, latest = self._slots[0], self._slots[-1]
            if not (
                adjacent(slot, earliest, self._tolerance)
                or adjacent(slot, latest, self._tolerance)
            ):
                return RejectionReason.NOT_CONSECUTIVE

        self._slots.append(slot)
        self._slots.sort(key=lambda s: s.start)
        return None

    def clear(self) -> None:
        self._slots = []

    def _would_break_continuity(self, slot: CandidateSlot) -> bool:
        # One or two members have no interior.
        if len(self._slots) <= 2:
            return False

        remaining = [s for s in self._slots if s.display != slot.display]
        for current, following in zip(remaining, remaining[1:]):
            if abs(current.end - following.start) > self._tolerance:
                return True
        return False

    # ── Read ───────────────────────────────────────────────────────────

    def __contains__(self, slot: object) -> bool:
        if not isinstance(slot, CandidateSlot):
            return False
        return any(s.display == slot.display for s in self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self):
        return iter(list(self._slots))

    def size(self) -> int:
        """Number of members, which is also the duration in hours."""
        return len(self._slots)

    @property
    def slots(self) -> list[CandidateSlot]:
        return list(self._slots)

    @property
    def start(self) -> datetime | None:
        return min((s.start for s in self._slots), default=None)

    @property
    def end(self) -> datetime | None:
        return max((s.end for s in self._slots), default=None)

    def span(self) -> TimeInterval | None:
        """[earliest start, latest end) over all members, or None when empty."""
        if not self._slots:
            return None
        return TimeInterval(start=self.start, end=self.end)
