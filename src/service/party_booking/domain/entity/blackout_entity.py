from datetime import date
from typing import Optional
from uuid import UUID

import attrs


@attrs.define
class Blackout:
    tenant_id: UUID
    start_date: date
    end_date: date  # inclusive
    reason: Optional[str] = None
    active: bool = True

    def covers(self, local_date: date) -> bool:
        return self.active and self.start_date <= local_date <= self.end_date
