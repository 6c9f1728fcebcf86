from datetime import datetime
from typing import Callable

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.party_booking.domain.value_object.time_window import utc_now


class ExpireHoldsUseCase:
    """
    Physically delete holds whose expiry has passed.

    Housekeeping only: every read path already ignores expired holds.
    """

    def __init__(
        self, *, uow: AbstractUnitOfWork, clock: Callable[[], datetime] = utc_now
    ) -> None:
        self.uow = uow
        self.clock = clock

    async def execute(self) -> int:
        async with self.uow:
            deleted = await self.uow.hold_command_repo.delete_expired(now=self.clock())
            await self.uow.commit()

        metrics.record_sweep(deleted=deleted)
        if deleted:
            Logger.base.info(f'🧹 [SWEEP] Deleted {deleted} expired hold(s)')
        return deleted
