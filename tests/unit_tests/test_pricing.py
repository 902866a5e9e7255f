"""Tests for price calculation."""

import pytest

from guest_booking.models import AllocationType, TimeInterval
from guest_booking.services.pricing import price_for_interval, price_for_selection
from guest_booking.services.selection import SelectionSet
from tests.mocks.models import MOCK_BASKETBALL_COURT, MOCK_COURT, at, make_court, make_slot


class TestSelectionPrice:
    def test_empty_selection_is_free(self):
        assert price_for_selection(MOCK_COURT, SelectionSet()) == 0

    @pytest.mark.parametrize("hours", [1, 2, 3, 4])
    def test_rate_times_hours(self, hours):
        selection = SelectionSet()
        for hour in range(10, 10 + hours):
            selection.toggle(make_slot(hour))
        assert price_for_selection(MOCK_COURT, selection) == MOCK_COURT.hourly_rate * hours

    def test_partial_occupancy_does_not_discount(self):
        selection = SelectionSet()
        selection.toggle(make_slot(10, partially_occupied=True))
        assert price_for_selection(MOCK_BASKETBALL_COURT, selection) == 40.0

    def test_rounded_to_cents(self):
        court = make_court(hourly_rate=0.1)
        selection = SelectionSet()
        for hour in (10, 11, 12):
            selection.toggle(make_slot(hour))
        assert price_for_selection(court, selection) == 0.3


class TestIntervalPrice:
    def test_full_court(self):
        interval = TimeInterval(start=at(10), end=at(12))
        assert price_for_interval(MOCK_BASKETBALL_COURT, interval) == 80.0

    def test_half_court_is_half_rate(self):
        interval = TimeInterval(start=at(10), end=at(12))
        price = price_for_interval(MOCK_BASKETBALL_COURT, interval, AllocationType.HALF_B)
        assert price == 40.0

    def test_fractional_duration(self):
        interval = TimeInterval(start=at(10), end=at(11, 30))
        assert price_for_interval(MOCK_COURT, interval) == 30.0

    def test_paths_disagree_for_single_half_hour(self):
        selection = SelectionSet()
        selection.toggle(make_slot(10))
        span = selection.span()
        assert price_for_selection(MOCK_BASKETBALL_COURT, selection) == 40.0
        assert price_for_interval(MOCK_BASKETBALL_COURT, span, AllocationType.HALF_A) == 20.0


class TestReferencePrices:
    def test_three_hours_at_twenty(self):
        selection = SelectionSet()
        for hour in (10, 11, 12):
            selection.toggle(make_slot(hour))
        assert price_for_selection(make_court(hourly_rate=20), selection) == 60.00

    def test_one_shared_hour_as_half_at_thirty(self):
        court = make_court(sport_type="Basketball", hourly_rate=30, shared_allocation=True)
        interval = TimeInterval(start=at(10), end=at(11))
        assert price_for_interval(court, interval, AllocationType.HALF_A) == 15.00
