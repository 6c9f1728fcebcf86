"""
Booking Command Repository Implementation

Runs on the Unit of Work's session; never commits on its own.
Active-booking overlap is enforced twice by PostgreSQL: the partial unique index on
(tenant_id, room_id, start_time) and the tstzrange exclusion constraint. Either
violation is raised as UniqueViolationError.
"""

from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.integrity import translate_integrity_error
from src.platform.logging.loguru_io import Logger
from src.service.party_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.party_booking.domain.entity.booking_entity import (
    ACTIVE_BOOKING_STATUSES,
    Booking,
    BookingStatus,
)
from src.service.party_booking.domain.value_object.time_window import TimeWindow
from src.service.party_booking.driven_adapter.model.reservation_model import BookingModel


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _model_to_entity(booking_model: BookingModel) -> Booking:
        return Booking(
            id=booking_model.id,
            tenant_id=booking_model.tenant_id,
            room_id=booking_model.room_id,
            package_id=booking_model.package_id,
            customer_id=booking_model.customer_id,
            start_time=booking_model.start_time,
            end_time=booking_model.end_time,
            party_size=booking_model.party_size,
            status=BookingStatus(booking_model.status),
            notes=booking_model.notes,
            total_price=booking_model.total_price,
            deposit_due=booking_model.deposit_due,
            deposit_paid=booking_model.deposit_paid,
            created_at=booking_model.created_at,
            updated_at=booking_model.updated_at,
        )

    @Logger.io
    async def list_active_bookings(
        self, *, tenant_id: UUID, room_ids: Sequence[UUID], search_range: TimeWindow
    ) -> List[Booking]:
        if not room_ids:
            return []
        result = await self.session.execute(
            select(BookingModel).where(
                BookingModel.tenant_id == tenant_id,
                BookingModel.room_id.in_(room_ids),
                BookingModel.status.in_([status.value for status in ACTIVE_BOOKING_STATUSES]),
                BookingModel.start_time < search_range.end,
                BookingModel.end_time > search_range.start,
            )
        )
        return [self._model_to_entity(booking_model) for booking_model in result.scalars().all()]

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        booking_model = BookingModel(
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
            updated_at=booking.updated_at,
        )
        # savepoint so a rejected insert leaves the rest of the transaction usable
        with translate_integrity_error():
            async with self.session.begin_nested():
                self.session.add(booking_model)
        return self._model_to_entity(booking_model)

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID, for_update: bool = False) -> Optional[Booking]:
        stmt = select(BookingModel).where(BookingModel.id == booking_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        booking_model = result.scalar_one_or_none()
        return self._model_to_entity(booking_model) if booking_model else None

    @Logger.io
    async def update_status(self, *, booking: Booking) -> Booking:
        await self.session.execute(
            update(BookingModel)
            .where(BookingModel.id == booking.id)
            .values(
                status=booking.status.value,
                deposit_paid=booking.deposit_paid,
                updated_at=booking.updated_at,
            )
        )
        return booking
