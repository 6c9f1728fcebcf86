import datetime as dt
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class AvailabilityRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'tenant_slug': 'funzone',
                'date': '2025-06-14',
                'package_id': None,
                'party_size': 12,
            }
        }
    )

    tenant_slug: str = Field(min_length=1, max_length=100)
    date: dt.date  # local date in the tenant's timezone
    package_id: Optional[UUID] = None
    party_size: Optional[int] = Field(default=None, gt=0)
    include_holds: bool = True


class RoomAvailabilityResponse(BaseModel):
    room_id: UUID
    room_name: str
    max_occupancy: int
    eligible: bool
    available: bool


class SlotAvailabilityResponse(BaseModel):
    window_start: dt.datetime
    window_end: dt.datetime
    rooms: List[RoomAvailabilityResponse]
