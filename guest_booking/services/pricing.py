"""
Price calculation.

Two separate paths exist:

* multi-slot: hourly rate × number of selected hours, no discount;
* single interval with an allocation choice: duration × hourly rate,
  halved for a half-court booking.

For a single shared-court hour booked as a half the two paths disagree
(rate vs. rate / 2).
"""

from __future__ import annotations

from guest_booking.models import AllocationType, Court, TimeInterval
from guest_booking.services.selection import SelectionSet

HALF_COURT_MULTIPLIER = 0.5


def price_for_selection(court: Court, selection: SelectionSet) -> float:
    """Multi-slot price.  Partial occupancy never changes the price here."""
    return round(court.hourly_rate * selection.size(), 2)


def price_for_interval(
    court: Court,
    interval: TimeInterval,
    allocation_type: AllocationType = AllocationType.FULL,
) -> float:
    """Price for one explicit interval, with the half-court discount."""
    multiplier = HALF_COURT_MULTIPLIER if allocation_type.is_half else 1.0
    return round(interval.hours * court.hourly_rate * multiplier, 2)
