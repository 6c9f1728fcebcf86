from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from typing import Optional
from uuid import UUID

import attrs

from src.service.party_booking.domain.booking_errors import InvalidBookingTransitionError
from src.service.party_booking.domain.entity.hold_entity import Hold
from src.service.party_booking.domain.value_object.price_quote import PriceQuote
from src.service.party_booking.domain.value_object.time_window import TimeWindow


class BookingStatus(StrEnum):
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'


# statuses that occupy the room
ACTIVE_BOOKING_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)


@attrs.define
class Booking:
    id: UUID
    tenant_id: UUID
    room_id: UUID
    customer_id: UUID
    start_time: datetime
    end_time: datetime
    package_id: Optional[UUID] = None
    party_size: Optional[int] = None
    status: BookingStatus = BookingStatus.PENDING
    notes: Optional[str] = None
    total_price: Decimal = Decimal('0.00')
    deposit_due: Decimal = Decimal('0.00')
    deposit_paid: Decimal = Decimal('0.00')
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create_from_hold(
        cls,
        *,
        id: UUID,
        hold: Hold,
        customer_id: UUID,
        quote: PriceQuote,
        now: datetime,
        notes: Optional[str] = None,
    ) -> 'Booking':
        # zero deposit confirms immediately
        status = BookingStatus.CONFIRMED if quote.deposit_due == 0 else BookingStatus.PENDING
        return cls(
            id=id,
            tenant_id=hold.tenant_id,
            room_id=hold.room_id,
            package_id=hold.package_id,
            customer_id=customer_id,
            start_time=hold.start_time,
            end_time=hold.end_time,
            party_size=hold.party_size,
            status=status,
            notes=notes,
            total_price=quote.total_price,
            deposit_due=quote.deposit_due,
            created_at=now,
            updated_at=now,
        )

    @property
    def window(self) -> TimeWindow:
        return TimeWindow(start=self.start_time, end=self.end_time)

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_BOOKING_STATUSES

    def confirm(self, *, now: datetime, amount_paid: Optional[Decimal] = None) -> 'Booking':
        if self.status != BookingStatus.PENDING:
            raise InvalidBookingTransitionError(
                f'Cannot confirm a booking that is {self.status.value}'
            )
        return attrs.evolve(
            self,
            status=BookingStatus.CONFIRMED,
            deposit_paid=self.deposit_due if amount_paid is None else amount_paid,
            updated_at=now,
        )

    def cancel(self, *, now: datetime) -> 'Booking':
        if self.status != BookingStatus.PENDING:
            raise InvalidBookingTransitionError(
                f'Cannot cancel a booking that is {self.status.value}'
            )
        return attrs.evolve(self, status=BookingStatus.CANCELLED, updated_at=now)
