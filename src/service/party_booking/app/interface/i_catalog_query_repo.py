"""
Room/Package Catalog Query Interface

Tenant-scoped reads of rooms, packages, package-room eligibility, slot templates
and blackouts. Every lookup takes the tenant id, so a row owned by another tenant
is reported exactly like a missing one.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional, Set
from uuid import UUID

from src.service.party_booking.domain.entity.package_entity import Package
from src.service.party_booking.domain.entity.room_entity import Room
from src.service.party_booking.domain.entity.slot_template_entity import SlotTemplate


class ICatalogQueryRepo(ABC):
    @abstractmethod
    async def get_room(self, *, tenant_id: UUID, room_id: UUID) -> Optional[Room]:
        pass

    @abstractmethod
    async def list_active_rooms(self, *, tenant_id: UUID, min_occupancy: int = 0) -> List[Room]:
        """
        List active rooms ordered by name

        Args:
            tenant_id: Tenant ID
            min_occupancy: Only rooms with max_occupancy >= this value
        """
        pass

    @abstractmethod
    async def get_package(self, *, tenant_id: UUID, package_id: UUID) -> Optional[Package]:
        pass

    @abstractmethod
    async def list_eligible_room_ids(self, *, tenant_id: UUID, package_id: UUID) -> Set[UUID]:
        pass

    @abstractmethod
    async def get_slot_template(
        self, *, tenant_id: UUID, day_of_week: int
    ) -> Optional[SlotTemplate]:
        """Active slot template for the day (0 = Sunday) or None"""
        pass

    @abstractmethod
    async def is_blacked_out(self, *, tenant_id: UUID, on_date: date) -> bool:
        pass
