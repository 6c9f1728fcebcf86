from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.party_booking.domain.booking_errors import BookingNotFoundError
from src.service.party_booking.domain.entity.booking_entity import Booking
from src.service.party_booking.domain.value_object.time_window import utc_now


class UpdateBookingToConfirmedUseCase:
    """
    Mark a pending booking as confirmed once its deposit has been collected.

    Called by whatever receives the payment provider's confirmation; the
    provider integration itself lives outside this service.
    """

    def __init__(
        self, *, uow: AbstractUnitOfWork, clock: Callable[[], datetime] = utc_now
    ) -> None:
        self.uow = uow
        self.clock = clock

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(
        self, *, booking_id: UUID, amount_paid: Optional[Decimal] = None
    ) -> Booking:
        try:
            async with self.uow:
                booking = await self.uow.booking_command_repo.get_by_id(
                    booking_id=booking_id, for_update=True
                )
                if booking is None:
                    raise BookingNotFoundError()

                confirmed = booking.confirm(now=self.clock(), amount_paid=amount_paid)
                confirmed = await self.uow.booking_command_repo.update_status(booking=confirmed)
                await self.uow.commit()
        except CustomBaseError as e:
            metrics.record_booking(operation='confirm', result=e.code)
            raise

        metrics.record_booking(operation='confirm', result='ok')
        Logger.base.info(f'✅ [BOOKING] {booking_id} confirmed, paid {confirmed.deposit_paid}')
        return confirmed
