from datetime import datetime
from typing import List
from uuid import UUID

import attrs


@attrs.frozen
class RoomAvailability:
    room_id: UUID
    room_name: str
    max_occupancy: int
    eligible: bool
    available: bool


@attrs.frozen
class SlotAvailability:
    window_start: datetime
    window_end: datetime
    rooms: List[RoomAvailability] = attrs.field(factory=list)
