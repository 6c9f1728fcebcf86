from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from src.service.party_booking.domain.entity.booking_entity import Booking
from src.service.party_booking.domain.value_object.time_window import TimeWindow


class IBookingCommandRepo(ABC):
    """Booking persistence, used inside a Unit of Work transaction."""

    @abstractmethod
    async def list_active_bookings(
        self, *, tenant_id: UUID, room_ids: Sequence[UUID], search_range: TimeWindow
    ) -> List[Booking]:
        """Pending/confirmed bookings of the given rooms intersecting `search_range`"""
        pass

    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """
        Insert a booking

        Raises:
            UniqueViolationError: an active booking of the room already occupies the window
        """
        pass

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID, for_update: bool = False) -> Optional[Booking]:
        pass

    @abstractmethod
    async def update_status(self, *, booking: Booking) -> Booking:
        """Persist status, deposit_paid and updated_at"""
        pass
