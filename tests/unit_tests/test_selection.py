"""Tests for the contiguous selection set."""

from itertools import product

from guest_booking.errors import RejectionReason
from guest_booking.services.selection import SelectionSet
from tests.mocks.models import make_slot

SLOTS = {hour: make_slot(hour) for hour in range(9, 14)}


def selection_of(*hours: int) -> SelectionSet:
    selection = SelectionSet()
    for hour in hours:
        assert selection.toggle(SLOTS[hour]) is None
    return selection


def hours_of(selection: SelectionSet) -> list[int]:
    return [s.start.hour for s in selection]


def is_contiguous(selection: SelectionSet) -> bool:
    members = selection.slots
    return all(a.end == b.start for a, b in zip(members, members[1:]))


class TestAdd:
    def test_first_slot_always_accepted(self):
        selection = SelectionSet()
        assert selection.toggle(SLOTS[12]) is None
        assert hours_of(selection) == [12]

    def test_extend_after(self):
        assert hours_of(selection_of(10, 11)) == [10, 11]

    def test_extend_before_keeps_order(self):
        assert hours_of(selection_of(11, 10, 9)) == [9, 10, 11]

    def test_gap_is_rejected(self):
        selection = selection_of(10)
        assert selection.toggle(SLOTS[12]) is RejectionReason.NOT_CONSECUTIVE
        assert hours_of(selection) == [10]

    def test_rejection_message(self):
        assert RejectionReason.NOT_CONSECUTIVE.message == "Please select consecutive time slots only"


class TestRemove:
    def test_remove_only_member(self):
        selection = selection_of(10)
        assert selection.toggle(SLOTS[10]) is None
        assert len(selection) == 0

    def test_remove_either_of_two(self):
        first = selection_of(10, 11)
        assert first.toggle(SLOTS[10]) is None
        assert hours_of(first) == [11]

        second = selection_of(10, 11)
        assert second.toggle(SLOTS[11]) is None
        assert hours_of(second) == [10]

    def test_remove_end_of_three(self):
        selection = selection_of(9, 10, 11)
        assert selection.toggle(SLOTS[11]) is None
        assert hours_of(selection) == [9, 10]
        assert selection.toggle(SLOTS[9]) is None
        assert hours_of(selection) == [10]

    def test_remove_interior_is_rejected(self):
        selection = selection_of(9, 10, 11)
        assert selection.toggle(SLOTS[10]) is RejectionReason.WOULD_BREAK_CONTINUITY
        assert hours_of(selection) == [9, 10, 11]

    def test_membership_is_by_display(self):
        selection = selection_of(10)
        assert make_slot(10) in selection
        assert make_slot(11) not in selection
        assert "10:00 - 11:00" not in selection


class TestSpan:
    def test_empty(self):
        selection = SelectionSet()
        assert selection.span() is None
        assert selection.start is None
        assert selection.end is None
        assert selection.size() == 0

    def test_span_covers_members(self):
        selection = selection_of(11, 10, 12)
        span = selection.span()
        assert span.start == SLOTS[10].start
        assert span.end == SLOTS[12].end
        assert span.hours == selection.size() == 3

    def test_clear(self):
        selection = selection_of(10, 11)
        selection.clear()
        assert len(selection) == 0


class TestInvariant:
    def test_every_toggle_sequence_stays_contiguous(self):
        """Exhaustively toggle every length-4 sequence over five slots."""
        hours = sorted(SLOTS)
        for sequence in product(hours, repeat=4):
            selection = SelectionSet()
            for hour in sequence:
                before = hours_of(selection)
                rejection = selection.toggle(SLOTS[hour])
                if rejection is not None:
                    assert hours_of(selection) == before
                assert is_contiguous(selection), sequence
                assert len({s.display for s in selection}) == len(selection)

    def test_sequence_from_walkthrough(self):
        selection = SelectionSet()
        assert selection.toggle(SLOTS[10]) is None
        assert selection.toggle(SLOTS[11]) is None
        assert selection.toggle(SLOTS[13]) is RejectionReason.NOT_CONSECUTIVE
        assert selection.toggle(SLOTS[12]) is None
        assert selection.toggle(SLOTS[11]) is RejectionReason.WOULD_BREAK_CONTINUITY
        assert selection.toggle(SLOTS[10]) is None
        assert hours_of(selection) == [11, 12]
