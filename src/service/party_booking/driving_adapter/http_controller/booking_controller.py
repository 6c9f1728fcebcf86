from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.party_booking.app.command.commit_booking_use_case import CommitBookingUseCase
from src.service.party_booking.app.command.update_booking_status_to_cancelled_use_case import (
    UpdateBookingToCancelledUseCase,
)
from src.service.party_booking.app.command.update_booking_status_to_confirmed_use_case import (
    UpdateBookingToConfirmedUseCase,
)
from src.service.party_booking.app.query.get_booking_use_case import GetBookingUseCase
from src.service.party_booking.domain.entity.customer_entity import CustomerInfo
from src.service.party_booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingCommitRequest,
    BookingConfirmRequest,
    BookingResponse,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def commit_booking(
    request: BookingCommitRequest,
    use_case: CommitBookingUseCase = Depends(CommitBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(
        hold_id=request.hold_id,
        customer=CustomerInfo(
            name=request.customer.name,
            email=request.customer.email,
            phone=request.customer.phone,
        ),
        notes=request.notes,
    )
    return BookingResponse.from_entity(booking)


@router.get('/{booking_id}')
@Logger.io
async def get_booking(
    booking_id: UUID,
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(booking_id=booking_id)
    return BookingResponse.from_entity(booking)


@router.post('/{booking_id}/confirm')
@Logger.io
async def confirm_booking(
    booking_id: UUID,
    request: Optional[BookingConfirmRequest] = None,
    use_case: UpdateBookingToConfirmedUseCase = Depends(UpdateBookingToConfirmedUseCase.depends),
) -> BookingResponse:
    amount_paid = request.amount_paid if request else None
    booking = await use_case.execute(booking_id=booking_id, amount_paid=amount_paid)
    return BookingResponse.from_entity(booking)


@router.post('/{booking_id}/cancel')
@Logger.io
async def cancel_booking(
    booking_id: UUID,
    use_case: UpdateBookingToCancelledUseCase = Depends(UpdateBookingToCancelledUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(booking_id=booking_id)
    return BookingResponse.from_entity(booking)
