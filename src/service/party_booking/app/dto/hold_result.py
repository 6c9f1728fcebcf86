from datetime import datetime
from uuid import UUID

import attrs

from src.service.party_booking.domain.entity.hold_entity import Hold


@attrs.frozen
class HoldResult:
    hold_id: UUID
    expires_at: datetime

    @classmethod
    def from_hold(cls, hold: Hold) -> 'HoldResult':
        return cls(hold_id=hold.id, expires_at=hold.expires_at)
