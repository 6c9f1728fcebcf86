from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.party_booking.domain.booking_errors import (
    CannotExtendFurtherError,
    HoldExpiredError,
)
from src.service.party_booking.domain.value_object.time_window import TimeWindow


@attrs.define
class Hold:
    """
    Short-lived claim on a room window while the customer finishes checkout.

    A hold is live while `now < expires_at`. Expired holds are treated as absent
    by every read path whether or not the row has been swept yet.
    """

    id: UUID
    tenant_id: UUID
    room_id: UUID
    start_time: datetime
    end_time: datetime
    created_at: datetime
    expires_at: datetime
    package_id: Optional[UUID] = None
    party_size: Optional[int] = None
    client_token: Optional[str] = None

    @classmethod
    def create(
        cls,
        *,
        id: UUID,
        tenant_id: UUID,
        room_id: UUID,
        window: TimeWindow,
        now: datetime,
        hold_minutes: int,
        package_id: Optional[UUID] = None,
        party_size: Optional[int] = None,
        client_token: Optional[str] = None,
    ) -> 'Hold':
        if hold_minutes <= 0:
            raise DomainError('hold_minutes must be positive')
        return cls(
            id=id,
            tenant_id=tenant_id,
            room_id=room_id,
            package_id=package_id,
            start_time=window.start,
            end_time=window.end,
            party_size=party_size,
            client_token=client_token,
            created_at=now,
            expires_at=now + timedelta(minutes=hold_minutes),
        )

    @property
    def window(self) -> TimeWindow:
        return TimeWindow(start=self.start_time, end=self.end_time)

    def is_live(self, now: datetime) -> bool:
        return now < self.expires_at

    def extension_deadline(
        self, *, hold_minutes: int, max_total_minutes: Optional[int], ceiling_minutes: int
    ) -> datetime:
        """Latest expiry this hold may ever reach, measured from its creation."""
        requested = (
            min(max_total_minutes, ceiling_minutes) if max_total_minutes else hold_minutes
        )
        return self.created_at + timedelta(minutes=max(hold_minutes, requested))

    def extend(
        self,
        *,
        now: datetime,
        extend_minutes: int,
        hold_minutes: int,
        max_total_minutes: Optional[int],
        ceiling_minutes: int,
    ) -> 'Hold':
        if extend_minutes <= 0:
            raise DomainError('extend_minutes must be positive')
        if not self.is_live(now):
            raise HoldExpiredError()

        proposed = max(now, self.expires_at) + timedelta(minutes=extend_minutes)
        deadline = self.extension_deadline(
            hold_minutes=hold_minutes,
            max_total_minutes=max_total_minutes,
            ceiling_minutes=ceiling_minutes,
        )
        # at the cap already: same expiry back; a lowered cap pulls it in
        new_expires_at = min(proposed, deadline)
        if new_expires_at <= now:
            raise CannotExtendFurtherError()

        return attrs.evolve(self, expires_at=new_expires_at)
