from datetime import datetime, timedelta, timezone

import attrs

from src.service.party_booking.domain.booking_errors import InvalidWindowError


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@attrs.frozen
class TimeWindow:
    """Half-open interval [start, end) on the UTC timeline."""

    start: datetime
    end: datetime

    @classmethod
    def of(cls, start: datetime, end: datetime) -> 'TimeWindow':
        if start.tzinfo is None or end.tzinfo is None:
            raise InvalidWindowError('Start and end times must carry a timezone offset')
        if start >= end:
            raise InvalidWindowError()
        return cls(start=start, end=end)

    @classmethod
    def starting_at(cls, start: datetime, *, minutes: int) -> 'TimeWindow':
        return cls.of(start, start + timedelta(minutes=minutes))

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def widen(self, amount: timedelta) -> 'TimeWindow':
        return TimeWindow(start=self.start - amount, end=self.end + amount)
