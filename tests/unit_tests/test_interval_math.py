"""Tests for the overlap and adjacency checks."""

from datetime import timedelta

from guest_booking.models import TimeInterval
from guest_booking.services.interval_math import adjacent, overlaps
from tests.mocks.models import at


def span(start, end) -> TimeInterval:
    return TimeInterval(start=start, end=end)


class TestOverlaps:
    def test_start_inside_other(self):
        assert overlaps(span(at(10, 30), at(11, 30)), span(at(10), at(11)))

    def test_end_inside_other(self):
        assert overlaps(span(at(9, 30), at(10, 30)), span(at(10), at(11)))

    def test_contains_other(self):
        assert overlaps(span(at(9), at(12)), span(at(10), at(11)))

    def test_contained_by_other(self):
        assert overlaps(span(at(10), at(11)), span(at(9), at(12)))

    def test_identical(self):
        assert overlaps(span(at(10), at(11)), span(at(10), at(11)))

    def test_touching_intervals_do_not_overlap(self):
        assert not overlaps(span(at(10), at(11)), span(at(11), at(12)))
        assert not overlaps(span(at(11), at(12)), span(at(10), at(11)))

    def test_disjoint(self):
        assert not overlaps(span(at(8), at(9)), span(at(10), at(11)))

    def test_symmetric(self):
        a = span(at(10), at(11, 30))
        b = span(at(11), at(12))
        assert overlaps(a, b) == overlaps(b, a)


class TestAdjacent:
    def test_back_to_back_either_order(self):
        a = span(at(10), at(11))
        b = span(at(11), at(12))
        assert adjacent(a, b)
        assert adjacent(b, a)

    def test_within_tolerance(self):
        a = span(at(10), at(11))
        b = TimeInterval(start=at(11) + timedelta(seconds=60), end=at(12))
        assert adjacent(a, b)

    def test_beyond_tolerance(self):
        a = span(at(10), at(11))
        b = TimeInterval(start=at(11) + timedelta(seconds=61), end=at(12))
        assert not adjacent(a, b)

    def test_gap_of_an_hour(self):
        assert not adjacent(span(at(9), at(10)), span(at(11), at(12)))

    def test_custom_tolerance(self):
        a = span(at(10), at(11))
        b = span(at(11, 5), at(12))
        assert not adjacent(a, b)
        assert adjacent(a, b, tolerance=timedelta(minutes=5))
