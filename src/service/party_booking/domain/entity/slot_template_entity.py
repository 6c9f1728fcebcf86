from datetime import date, datetime, time, timezone
from typing import List
from uuid import UUID
from zoneinfo import ZoneInfo

import attrs

from src.platform.logging.loguru_io import Logger
from src.service.party_booking.domain.value_object.time_window import TimeWindow


def day_of_week(local_date: date) -> int:
    """0 = Sunday ... 6 = Saturday."""
    return local_date.isoweekday() % 7


@attrs.define
class SlotTemplate:
    tenant_id: UUID
    day_of_week: int
    start_times: List[str] = attrs.field(factory=list)  # local 'HH:MM'
    active: bool = True

    def windows_on(
        self, local_date: date, *, zone: ZoneInfo, duration_minutes: int
    ) -> List[TimeWindow]:
        windows = []
        for raw in self.start_times:
            try:
                local_start = time.fromisoformat(raw)
            except ValueError:
                Logger.base.warning(f'Skipping malformed slot start time {raw!r}')
                continue
            start = datetime.combine(local_date, local_start, tzinfo=zone).astimezone(timezone.utc)
            windows.append(TimeWindow.starting_at(start, minutes=duration_minutes))
        return sorted(windows, key=lambda window: window.start)
