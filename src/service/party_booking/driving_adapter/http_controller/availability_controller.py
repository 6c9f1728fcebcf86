from typing import List

from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.party_booking.app.query.list_availability_use_case import (
    ListAvailabilityUseCase,
)
from src.service.party_booking.driving_adapter.http_controller.schema.availability_schema import (
    AvailabilityRequest,
    RoomAvailabilityResponse,
    SlotAvailabilityResponse,
)


router = APIRouter()


@router.post('')
@Logger.io
async def list_availability(
    request: AvailabilityRequest,
    use_case: ListAvailabilityUseCase = Depends(ListAvailabilityUseCase.depends),
) -> List[SlotAvailabilityResponse]:
    slots = await use_case.execute(
        tenant_slug=request.tenant_slug,
        on_date=request.date,
        package_id=request.package_id,
        party_size=request.party_size,
        include_holds=request.include_holds,
    )
    return [
        SlotAvailabilityResponse(
            window_start=slot.window_start,
            window_end=slot.window_end,
            rooms=[
                RoomAvailabilityResponse(
                    room_id=room.room_id,
                    room_name=room.room_name,
                    max_occupancy=room.max_occupancy,
                    eligible=room.eligible,
                    available=room.available,
                )
                for room in slot.rooms
            ],
        )
        for slot in slots
    ]
