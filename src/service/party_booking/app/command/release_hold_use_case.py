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
from src.service.party_booking.domain.booking_errors import HoldNotFoundError
from src.service.party_booking.domain.value_object.time_window import utc_now


class ReleaseHoldUseCase:
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
    async def execute(self, *, hold_id: UUID) -> UUID:
        """Delete a live hold; an expired one is reported as not found."""
        try:
            async with self.uow:
                hold = await self.uow.hold_command_repo.get_for_update(hold_id=hold_id)
                if hold is None or not hold.is_live(self.clock()):
                    raise HoldNotFoundError()

                await self.uow.hold_command_repo.delete(hold_id=hold_id)
                await self.uow.commit()
        except CustomBaseError as e:
            metrics.record_hold(operation='release', result=e.code)
            raise

        metrics.record_hold(operation='release', result='ok')
        Logger.base.info(f'🔓 [HOLD] {hold_id} released')
        return hold_id
