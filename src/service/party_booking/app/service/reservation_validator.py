from typing import Optional
from uuid import UUID

import attrs

from src.service.party_booking.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.party_booking.domain.booking_errors import (
    CapacityExceededError,
    InvalidPackageError,
    RoomNotEligibleForPackageError,
    RoomNotFoundError,
)
from src.service.party_booking.domain.entity.package_entity import Package
from src.service.party_booking.domain.entity.room_entity import Room


@attrs.frozen
class ValidatedSelection:
    room: Room
    package: Optional[Package]


class ReservationValidator:
    """
    Room / capacity / package checks shared by hold creation and commit.

    Runs entirely before any write, so a rejected request leaves nothing behind.
    """

    def __init__(self, *, catalog_query_repo: ICatalogQueryRepo) -> None:
        self.catalog_query_repo = catalog_query_repo

    async def load_package(self, *, tenant_id: UUID, package_id: UUID) -> Package:
        package = await self.catalog_query_repo.get_package(
            tenant_id=tenant_id, package_id=package_id
        )
        if package is None or not package.active:
            raise InvalidPackageError()
        return package

    async def validate(
        self,
        *,
        tenant_id: UUID,
        room_id: UUID,
        party_size: Optional[int],
        package_id: Optional[UUID] = None,
        package: Optional[Package] = None,
    ) -> ValidatedSelection:
        room = await self.catalog_query_repo.get_room(tenant_id=tenant_id, room_id=room_id)
        if room is None or not room.active:
            raise RoomNotFoundError()
        if not room.fits(party_size):
            raise CapacityExceededError(
                f'Party size {party_size} exceeds room capacity {room.max_occupancy}'
            )

        if package_id is None:
            return ValidatedSelection(room=room, package=None)

        if package is None:
            package = await self.load_package(tenant_id=tenant_id, package_id=package_id)
        eligible_room_ids = await self.catalog_query_repo.list_eligible_room_ids(
            tenant_id=tenant_id, package_id=package.id
        )
        if room.id not in eligible_room_ids:
            raise RoomNotEligibleForPackageError()
        return ValidatedSelection(room=room, package=package)
