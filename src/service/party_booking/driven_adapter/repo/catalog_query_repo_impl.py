from datetime import date
from typing import AsyncContextManager, Callable, List, Optional, Set
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.party_booking.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.party_booking.domain.entity.package_entity import Package
from src.service.party_booking.domain.entity.room_entity import Room
from src.service.party_booking.domain.entity.slot_template_entity import SlotTemplate
from src.service.party_booking.driven_adapter.model.catalog_model import (
    BlackoutModel,
    PackageModel,
    PackageRoomEligibilityModel,
    RoomModel,
    SlotTemplateModel,
)


class CatalogQueryRepoImpl(ICatalogQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get_room(self, *, tenant_id: UUID, room_id: UUID) -> Optional[Room]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(RoomModel).where(RoomModel.id == room_id, RoomModel.tenant_id == tenant_id)
            )
            room_model = result.scalar_one_or_none()
            return self._room_to_entity(room_model) if room_model else None

    @Logger.io
    async def list_active_rooms(self, *, tenant_id: UUID, min_occupancy: int = 0) -> List[Room]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(RoomModel)
                .where(
                    RoomModel.tenant_id == tenant_id,
                    RoomModel.active.is_(True),
                    RoomModel.max_occupancy >= min_occupancy,
                )
                .order_by(RoomModel.name)
            )
            return [self._room_to_entity(room_model) for room_model in result.scalars().all()]

    @Logger.io
    async def get_package(self, *, tenant_id: UUID, package_id: UUID) -> Optional[Package]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(PackageModel).where(
                    PackageModel.id == package_id, PackageModel.tenant_id == tenant_id
                )
            )
            package_model = result.scalar_one_or_none()
            if not package_model:
                return None

            return Package(
                id=package_model.id,
                tenant_id=package_model.tenant_id,
                name=package_model.name,
                duration_minutes=package_model.duration_minutes,
                base_price=package_model.base_price,
                base_party_size=package_model.base_party_size,
                extra_guest_price=package_model.extra_guest_price,
                active=package_model.active,
            )

    @Logger.io
    async def list_eligible_room_ids(self, *, tenant_id: UUID, package_id: UUID) -> Set[UUID]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(PackageRoomEligibilityModel.room_id).where(
                    PackageRoomEligibilityModel.package_id == package_id,
                    PackageRoomEligibilityModel.tenant_id == tenant_id,
                )
            )
            return set(result.scalars().all())

    @Logger.io
    async def get_slot_template(
        self, *, tenant_id: UUID, day_of_week: int
    ) -> Optional[SlotTemplate]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(SlotTemplateModel).where(
                    SlotTemplateModel.tenant_id == tenant_id,
                    SlotTemplateModel.day_of_week == day_of_week,
                    SlotTemplateModel.active.is_(True),
                )
            )
            template_model = result.scalar_one_or_none()
            if not template_model:
                return None

            return SlotTemplate(
                tenant_id=template_model.tenant_id,
                day_of_week=template_model.day_of_week,
                start_times=list(template_model.start_times or []),
                active=template_model.active,
            )

    @Logger.io
    async def is_blacked_out(self, *, tenant_id: UUID, on_date: date) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                select(BlackoutModel.id)
                .where(
                    BlackoutModel.tenant_id == tenant_id,
                    BlackoutModel.active.is_(True),
                    BlackoutModel.start_date <= on_date,
                    BlackoutModel.end_date >= on_date,
                )
                .limit(1)
            )
            return result.scalar_one_or_none() is not None

    @staticmethod
    def _room_to_entity(room_model: RoomModel) -> Room:
        return Room(
            id=room_model.id,
            tenant_id=room_model.tenant_id,
            name=room_model.name,
            max_occupancy=room_model.max_occupancy,
            active=room_model.active,
        )
