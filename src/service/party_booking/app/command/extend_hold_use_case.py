from datetime import datetime
from typing import Callable, Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.party_booking.app.dto.hold_result import HoldResult
from src.service.party_booking.app.service.policy_resolver import PolicyResolver
from src.service.party_booking.domain.booking_errors import HoldNotFoundError
from src.service.party_booking.domain.value_object.time_window import utc_now


class ExtendHoldUseCase:
    """
    Push a live hold's expiry forward.

    The new expiry is `max(now, expires_at) + extend_minutes`, capped at
    `created_at + max(hold_minutes, max_total_minutes or hold_minutes)`, where the
    client's `max_total_minutes` is itself bounded by HOLD_EXTENSION_CEILING_MINUTES.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        policy_resolver: PolicyResolver,
        ceiling_minutes: int = settings.HOLD_EXTENSION_CEILING_MINUTES,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.uow = uow
        self.policy_resolver = policy_resolver
        self.ceiling_minutes = ceiling_minutes
        self.clock = clock

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        policy_resolver: PolicyResolver = Depends(Provide[Container.policy_resolver]),
    ) -> Self:
        return cls(uow=uow, policy_resolver=policy_resolver)

    @Logger.io
    async def execute(
        self,
        *,
        hold_id: UUID,
        extend_minutes: int = settings.DEFAULT_EXTEND_MINUTES,
        max_total_minutes: Optional[int] = None,
    ) -> HoldResult:
        try:
            async with self.uow:
                hold = await self.uow.hold_command_repo.get_for_update(hold_id=hold_id)
                if hold is None:
                    raise HoldNotFoundError()

                policy = await self.policy_resolver.resolve(tenant_id=hold.tenant_id)
                extended = hold.extend(
                    now=self.clock(),
                    extend_minutes=extend_minutes,
                    hold_minutes=policy.hold_minutes,
                    max_total_minutes=max_total_minutes,
                    ceiling_minutes=self.ceiling_minutes,
                )
                extended = await self.uow.hold_command_repo.update_expiry(hold=extended)
                await self.uow.commit()
        except CustomBaseError as e:
            metrics.record_hold(operation='extend', result=e.code)
            raise

        metrics.record_hold(operation='extend', result='ok')
        Logger.base.info(f'⏳ [HOLD] {hold_id} extended to {extended.expires_at.isoformat()}')
        return HoldResult.from_hold(extended)
