from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from src.platform.config.core_setting import settings


class HoldCreateRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'examples': [
                {
                    'tenant_slug': 'funzone',
                    'room_id': '01934b2e-1c3a-7d4e-8f00-000000000001',
                    'start_time': '2025-06-14T14:00:00Z',
                    'end_time': '2025-06-14T16:00:00Z',
                    'party_size': 12,
                },
                {
                    'tenant_slug': 'funzone',
                    'room_id': '01934b2e-1c3a-7d4e-8f00-000000000001',
                    'package_id': '01934b2e-1c3a-7d4e-8f00-0000000000aa',
                    'start_time': '2025-06-14T14:00:00Z',
                    'client_token': 'browser-3f9c',
                },
            ]
        }
    )

    tenant_slug: str = Field(min_length=1, max_length=100)
    room_id: UUID
    start_time: AwareDatetime
    end_time: Optional[AwareDatetime] = None  # defaults to package duration, else policy default
    package_id: Optional[UUID] = None
    party_size: Optional[int] = Field(default=None, gt=0)
    client_token: Optional[str] = Field(default=None, max_length=128)


class HoldExtendRequest(BaseModel):
    extend_minutes: int = Field(default=settings.DEFAULT_EXTEND_MINUTES, gt=0)
    max_total_minutes: Optional[int] = Field(default=None, gt=0)

    model_config = ConfigDict(
        json_schema_extra={'example': {'extend_minutes': 5, 'max_total_minutes': 30}}
    )


class HoldResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'hold_id': '01934b2e-1c3a-7d4e-8f00-0000000000ff',
                'expires_at': '2025-06-10T18:15:00Z',
            }
        }
    )

    hold_id: UUID
    expires_at: datetime


class HoldReleaseResponse(BaseModel):
    hold_id: UUID
