"""
Hold Command Repository Implementation

Runs on the Unit of Work's session; never commits on its own.
"""

from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.integrity import (
    translate_integrity_error,
    translate_persistence_error,
)
from src.platform.logging.loguru_io import Logger
from src.service.party_booking.app.interface.i_hold_command_repo import IHoldCommandRepo
from src.service.party_booking.domain.entity.hold_entity import Hold
from src.service.party_booking.domain.value_object.time_window import TimeWindow
from src.service.party_booking.driven_adapter.model.catalog_model import RoomModel
from src.service.party_booking.driven_adapter.model.reservation_model import BookingHoldModel


class HoldCommandRepoImpl(IHoldCommandRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _model_to_entity(hold_model: BookingHoldModel) -> Hold:
        return Hold(
            id=hold_model.id,
            tenant_id=hold_model.tenant_id,
            room_id=hold_model.room_id,
            package_id=hold_model.package_id,
            start_time=hold_model.start_time,
            end_time=hold_model.end_time,
            party_size=hold_model.party_size,
            client_token=hold_model.client_token,
            created_at=hold_model.created_at,
            expires_at=hold_model.expires_at,
        )

    @Logger.io
    async def lock_room(self, *, tenant_id: UUID, room_id: UUID) -> bool:
        # SELECT ... FOR UPDATE: concurrent writers for this room queue here until commit
        result = await self.session.execute(
            select(RoomModel.id)
            .where(RoomModel.id == room_id, RoomModel.tenant_id == tenant_id)
            .with_for_update()
        )
        return result.scalar_one_or_none() is not None

    @Logger.io
    async def delete_expired_for_room(
        self, *, tenant_id: UUID, room_id: UUID, now: datetime
    ) -> int:
        expired_ids = (
            select(BookingHoldModel.id)
            .where(
                BookingHoldModel.tenant_id == tenant_id,
                BookingHoldModel.room_id == room_id,
                BookingHoldModel.expires_at <= now,
            )
            .with_for_update(skip_locked=True)
        )
        result = await self.session.execute(
            delete(BookingHoldModel).where(BookingHoldModel.id.in_(expired_ids))
        )
        return result.rowcount or 0  # type: ignore[attr-defined]

    @Logger.io
    async def list_live_holds(
        self,
        *,
        tenant_id: UUID,
        room_ids: Sequence[UUID],
        search_range: TimeWindow,
        now: datetime,
    ) -> List[Hold]:
        if not room_ids:
            return []
        result = await self.session.execute(
            select(BookingHoldModel).where(
                BookingHoldModel.tenant_id == tenant_id,
                BookingHoldModel.room_id.in_(room_ids),
                BookingHoldModel.start_time < search_range.end,
                BookingHoldModel.end_time > search_range.start,
                BookingHoldModel.expires_at > now,
            )
        )
        return [self._model_to_entity(hold_model) for hold_model in result.scalars().all()]

    @Logger.io
    async def create(self, *, hold: Hold) -> Hold:
        hold_model = BookingHoldModel(
            id=hold.id,
            tenant_id=hold.tenant_id,
            room_id=hold.room_id,
            package_id=hold.package_id,
            start_time=hold.start_time,
            end_time=hold.end_time,
            party_size=hold.party_size,
            client_token=hold.client_token,
            created_at=hold.created_at,
            expires_at=hold.expires_at,
        )
        self.session.add(hold_model)
        with translate_integrity_error():
            await self.session.flush()
        return self._model_to_entity(hold_model)

    @Logger.io
    async def get(self, *, hold_id: UUID) -> Optional[Hold]:
        hold_model = await self.session.get(BookingHoldModel, hold_id)
        return self._model_to_entity(hold_model) if hold_model else None

    @Logger.io
    async def get_live_for_update(self, *, hold_id: UUID, now: datetime) -> Optional[Hold]:
        result = await self.session.execute(
            select(BookingHoldModel)
            .where(BookingHoldModel.id == hold_id, BookingHoldModel.expires_at > now)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        hold_model = result.scalar_one_or_none()
        return self._model_to_entity(hold_model) if hold_model else None

    @Logger.io
    async def get_for_update(self, *, hold_id: UUID) -> Optional[Hold]:
        result = await self.session.execute(
            select(BookingHoldModel).where(BookingHoldModel.id == hold_id).with_for_update()
        )
        hold_model = result.scalar_one_or_none()
        return self._model_to_entity(hold_model) if hold_model else None

    @Logger.io
    async def update_expiry(self, *, hold: Hold) -> Hold:
        await self.session.execute(
            update(BookingHoldModel)
            .where(BookingHoldModel.id == hold.id)
            .values(expires_at=hold.expires_at)
        )
        return hold

    @Logger.io
    async def delete(self, *, hold_id: UUID) -> bool:
        with translate_persistence_error():
            result = await self.session.execute(
                delete(BookingHoldModel).where(BookingHoldModel.id == hold_id)
            )
        return bool(result.rowcount)  # type: ignore[attr-defined]

    @Logger.io
    async def delete_expired(self, *, now: datetime) -> int:
        # a hold locked by an in-flight commit is left for the next sweep
        expired_ids = (
            select(BookingHoldModel.id)
            .where(BookingHoldModel.expires_at <= now)
            .with_for_update(skip_locked=True)
        )
        result = await self.session.execute(
            delete(BookingHoldModel).where(BookingHoldModel.id.in_(expired_ids))
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
