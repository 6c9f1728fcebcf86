from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.service.party_booking.domain.entity.booking_entity import Booking


class CustomerInfoSchema(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: Optional[str] = Field(default=None, max_length=320)
    phone: Optional[str] = Field(default=None, max_length=50)


class BookingCommitRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'hold_id': '01934b2e-1c3a-7d4e-8f00-0000000000ff',
                'customer': {
                    'name': 'Avery Parent',
                    'email': 'avery@example.com',
                    'phone': '+1 555 0100',
                },
                'notes': 'Dinosaur theme',
            }
        }
    )

    hold_id: UUID
    customer: CustomerInfoSchema
    notes: Optional[str] = Field(default=None, max_length=2000)


class BookingConfirmRequest(BaseModel):
    amount_paid: Optional[Decimal] = Field(default=None, ge=0)

    model_config = ConfigDict(json_schema_extra={'example': {'amount_paid': '150.00'}})


class BookingResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'id': '01934b2e-1c3a-7d4e-8f00-000000000b01',
                'tenant_id': '01934b2e-1c3a-7d4e-8f00-000000000a01',
                'room_id': '01934b2e-1c3a-7d4e-8f00-000000000001',
                'package_id': None,
                'customer_id': '01934b2e-1c3a-7d4e-8f00-000000000c01',
                'start_time': '2025-06-14T14:00:00Z',
                'end_time': '2025-06-14T16:00:00Z',
                'party_size': 12,
                'status': 'pending',
                'notes': None,
                'total_price': '300.00',
                'deposit_due': '150.00',
                'deposit_paid': '0.00',
                'created_at': '2025-06-10T18:02:11Z',
            }
        }
    )

    id: UUID
    tenant_id: UUID
    room_id: UUID
    package_id: Optional[UUID] = None
    customer_id: UUID
    start_time: datetime
    end_time: datetime
    party_size: Optional[int] = None
    status: str
    notes: Optional[str] = None
    total_price: Decimal
    deposit_due: Decimal
    deposit_paid: Decimal
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, booking: Booking) -> 'BookingResponse':
        return cls(
            id=booking.id,
            tenant_id=booking.tenant_id,
            room_id=booking.room_id,
            package_id=booking.package_id,
            customer_id=booking.customer_id,
            start_time=booking.start_time,
            end_time=booking.end_time,
            party_size=booking.party_size,
            status=booking.status.value,
            notes=booking.notes,
            total_price=booking.total_price,
            deposit_due=booking.deposit_due,
            deposit_paid=booking.deposit_paid,
            created_at=booking.created_at,
        )
