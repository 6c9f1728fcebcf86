"""
Buffer-padded interval math shared by hold creation, commit and availability.

Pure functions, no I/O. Buffers always come from the tenant's *current* policy;
nothing about padding is stored on holds or bookings.

The buffer is the minimum turnover gap between two reservations of one room.
`conflicts_with_any` pads the candidate and every existing window by half the
buffer each, so two windows conflict exactly when the gap between them is
shorter than the buffer. With a 30 minute buffer, a reservation ending at 16:00
blocks a start at 16:15 and accepts a start at 16:30.
"""

from collections.abc import Iterable
from datetime import timedelta

from src.service.party_booking.domain.value_object.time_window import TimeWindow


def padded(window: TimeWindow, buffer_minutes: int) -> TimeWindow:
    return window.widen(timedelta(minutes=buffer_minutes))


def intersects(a: TimeWindow, b: TimeWindow) -> bool:
    # half-open: touching endpoints do not intersect
    return a.start < b.end and b.start < a.end


def conflicts_with_any(
    candidate: TimeWindow, existing: Iterable[TimeWindow], buffer_minutes: int
) -> bool:
    half_buffer = timedelta(minutes=buffer_minutes) / 2
    padded_candidate = candidate.widen(half_buffer)
    return any(intersects(padded_candidate, window.widen(half_buffer)) for window in existing)


def conflict_search_range(window: TimeWindow, buffer_minutes: int) -> TimeWindow:
    """Range an existing window must intersect to possibly conflict with `window`."""
    return padded(window, buffer_minutes)
