from datetime import datetime
from typing import Callable, Self
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


class UpdateBookingToCancelledUseCase:
    """
    Cancel a pending booking.

    A cancelled booking no longer occupies its room, so the slot becomes
    available to holds right after the transaction commits.
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
    async def execute(self, *, booking_id: UUID) -> Booking:
        try:
            async with self.uow:
                booking = await self.uow.booking_command_repo.get_by_id(
                    booking_id=booking_id, for_update=True
                )
                if booking is None:
                    raise BookingNotFoundError()

                cancelled = booking.cancel(now=self.clock())
                cancelled = await self.uow.booking_command_repo.update_status(booking=cancelled)
                await self.uow.commit()
        except CustomBaseError as e:
            metrics.record_booking(operation='cancel', result=e.code)
            raise

        metrics.record_booking(operation='cancel', result='ok')
        Logger.base.info(f'🚫 [BOOKING] {booking_id} cancelled')
        return cancelled
