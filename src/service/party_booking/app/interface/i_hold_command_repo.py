"""
Hold Command Repository Interface

Used inside a Unit of Work transaction. Callers that create holds must call
`lock_room` first so checks and inserts for one room are serialized.

Lock order is always room, then hold. The expiry purges skip hold rows another
transaction has locked instead of waiting for them.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID

from src.service.party_booking.domain.entity.hold_entity import Hold
from src.service.party_booking.domain.value_object.time_window import TimeWindow


class IHoldCommandRepo(ABC):
    @abstractmethod
    async def lock_room(self, *, tenant_id: UUID, room_id: UUID) -> bool:
        """
        Take the per-room exclusive lock for the rest of the transaction

        Returns:
            False when the room row does not exist for this tenant
        """
        pass

    @abstractmethod
    async def delete_expired_for_room(
        self, *, tenant_id: UUID, room_id: UUID, now: datetime
    ) -> int:
        pass

    @abstractmethod
    async def list_live_holds(
        self,
        *,
        tenant_id: UUID,
        room_ids: Sequence[UUID],
        search_range: TimeWindow,
        now: datetime,
    ) -> List[Hold]:
        """Live holds of the given rooms whose window intersects `search_range`"""
        pass

    @abstractmethod
    async def create(self, *, hold: Hold) -> Hold:
        """
        Insert a hold

        Raises:
            UniqueViolationError: another hold already starts at the same time in the room
        """
        pass

    @abstractmethod
    async def get(self, *, hold_id: UUID) -> Optional[Hold]:
        """Read without locking"""
        pass

    @abstractmethod
    async def get_live_for_update(self, *, hold_id: UUID, now: datetime) -> Optional[Hold]:
        """Lock and return the hold, or None when it is missing or expired"""
        pass

    @abstractmethod
    async def get_for_update(self, *, hold_id: UUID) -> Optional[Hold]:
        """Lock and return the hold regardless of expiry"""
        pass

    @abstractmethod
    async def update_expiry(self, *, hold: Hold) -> Hold:
        pass

    @abstractmethod
    async def delete(self, *, hold_id: UUID) -> bool:
        pass

    @abstractmethod
    async def delete_expired(self, *, now: datetime) -> int:
        pass
