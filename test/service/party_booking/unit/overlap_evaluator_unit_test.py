"""
Unit tests for the Overlap Evaluator

Test Coverage:
1. Half-open intersection (touching windows never intersect)
2. Buffer padding: gaps shorter than the buffer conflict, gaps equal to it do not
3. Search range covers every window that could conflict
"""

from datetime import timedelta

import pytest

from src.service.party_booking.domain.booking_errors import InvalidWindowError
from src.service.party_booking.domain.overlap_evaluator import (
    conflict_search_range,
    conflicts_with_any,
    intersects,
    padded,
)
from src.service.party_booking.domain.value_object.time_window import TimeWindow
from test.service.party_booking.in_memory_store import at


pytestmark = pytest.mark.unit


class TestIntersects:
    def test_overlapping_windows_intersect(self):
        assert intersects(TimeWindow.of(at(14), at(16)), TimeWindow.of(at(15), at(17)))

    def test_touching_windows_do_not_intersect(self):
        assert not intersects(TimeWindow.of(at(14), at(16)), TimeWindow.of(at(16), at(18)))

    def test_contained_window_intersects(self):
        assert intersects(TimeWindow.of(at(14), at(18)), TimeWindow.of(at(15), at(16)))


class TestConflictsWithAny:
    """30 minute buffer, existing reservation 14:00-16:00"""

    existing = [TimeWindow.of(at(14), at(16))]

    def test_gap_shorter_than_buffer_conflicts(self):
        assert conflicts_with_any(TimeWindow.of(at(16, 15), at(18)), self.existing, 30)

    def test_gap_equal_to_buffer_is_accepted(self):
        assert not conflicts_with_any(TimeWindow.of(at(16, 30), at(18)), self.existing, 30)

    def test_gap_before_existing_window_is_checked_too(self):
        assert conflicts_with_any(TimeWindow.of(at(12), at(13, 45)), self.existing, 30)
        assert not conflicts_with_any(TimeWindow.of(at(12), at(13, 30)), self.existing, 30)

    def test_zero_buffer_allows_back_to_back(self):
        assert not conflicts_with_any(TimeWindow.of(at(16), at(18)), self.existing, 0)

    def test_no_existing_windows_never_conflicts(self):
        assert not conflicts_with_any(TimeWindow.of(at(14), at(16)), [], 30)

    def test_any_conflicting_window_is_enough(self):
        existing = [TimeWindow.of(at(9), at(10)), TimeWindow.of(at(17), at(19))]

        assert conflicts_with_any(TimeWindow.of(at(15), at(16, 45)), existing, 30)


class TestPadding:
    def test_padded_widens_both_sides_by_full_buffer(self):
        window = padded(TimeWindow.of(at(14), at(16)), 30)

        assert window.start == at(13, 30)
        assert window.end == at(16, 30)

    def test_search_range_reaches_every_possible_conflict(self):
        candidate = TimeWindow.of(at(16, 15), at(18))
        search_range = conflict_search_range(candidate, 30)

        # an existing window ending 15:50 conflicts (25 minute gap) and must be found
        existing = TimeWindow.of(at(14), at(15, 50))
        assert conflicts_with_any(candidate, [existing], 30)
        assert intersects(existing, search_range)

        assert search_range.duration == candidate.duration + timedelta(minutes=60)


class TestTimeWindow:
    def test_start_must_be_before_end(self):
        with pytest.raises(InvalidWindowError):
            TimeWindow.of(at(16), at(14))

    def test_empty_window_is_rejected(self):
        with pytest.raises(InvalidWindowError):
            TimeWindow.of(at(16), at(16))

    def test_naive_datetimes_are_rejected(self):
        with pytest.raises(InvalidWindowError):
            TimeWindow.of(at(14).replace(tzinfo=None), at(16).replace(tzinfo=None))
