from src.service.party_booking.app.dto.availability_dto import RoomAvailability, SlotAvailability
from src.service.party_booking.app.dto.hold_result import HoldResult

__all__ = ['HoldResult', 'RoomAvailability', 'SlotAvailability']
