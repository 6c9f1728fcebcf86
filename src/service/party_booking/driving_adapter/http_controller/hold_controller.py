from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.party_booking.app.command.create_hold_use_case import CreateHoldUseCase
from src.service.party_booking.app.command.extend_hold_use_case import ExtendHoldUseCase
from src.service.party_booking.app.command.release_hold_use_case import ReleaseHoldUseCase
from src.service.party_booking.driving_adapter.http_controller.schema.hold_schema import (
    HoldCreateRequest,
    HoldExtendRequest,
    HoldReleaseResponse,
    HoldResponse,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_hold(
    request: HoldCreateRequest,
    use_case: CreateHoldUseCase = Depends(CreateHoldUseCase.depends),
) -> HoldResponse:
    result = await use_case.execute(
        tenant_slug=request.tenant_slug,
        room_id=request.room_id,
        start_time=request.start_time,
        end_time=request.end_time,
        package_id=request.package_id,
        party_size=request.party_size,
        client_token=request.client_token,
    )
    return HoldResponse(hold_id=result.hold_id, expires_at=result.expires_at)


@router.post('/{hold_id}/extend')
@Logger.io
async def extend_hold(
    hold_id: UUID,
    request: Optional[HoldExtendRequest] = None,
    use_case: ExtendHoldUseCase = Depends(ExtendHoldUseCase.depends),
) -> HoldResponse:
    request = request or HoldExtendRequest()
    result = await use_case.execute(
        hold_id=hold_id,
        extend_minutes=request.extend_minutes,
        max_total_minutes=request.max_total_minutes,
    )
    return HoldResponse(hold_id=result.hold_id, expires_at=result.expires_at)


@router.delete('/{hold_id}')
@Logger.io
async def release_hold(
    hold_id: UUID,
    use_case: ReleaseHoldUseCase = Depends(ReleaseHoldUseCase.depends),
) -> HoldReleaseResponse:
    released_id = await use_case.execute(hold_id=hold_id)
    return HoldReleaseResponse(hold_id=released_id)
