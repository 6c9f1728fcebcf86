"""
Hold Expiry Sweeper

Periodically deletes expired holds. Correctness never depends on it: expired
holds are already invisible to every read path, the sweep only keeps the table small.
"""

from typing import Callable

import anyio
from anyio.abc import TaskGroup

from src.platform.logging.loguru_io import Logger
from src.service.party_booking.app.command.expire_holds_use_case import ExpireHoldsUseCase


class HoldExpirySweeper:
    def __init__(
        self,
        *,
        use_case_factory: Callable[[], ExpireHoldsUseCase],
        interval_seconds: float,
    ) -> None:
        self.use_case_factory = use_case_factory
        self.interval_seconds = interval_seconds

    async def sweep_once(self) -> int:
        try:
            return await self.use_case_factory().execute()
        except Exception as e:
            # next tick retries
            Logger.base.opt(exception=e).error(f'❌ [SWEEP] Hold sweep failed: {e}')
            return 0

    async def run(self) -> None:
        Logger.base.info(f'🧹 [SWEEP] Started, interval={self.interval_seconds}s')
        while True:
            await self.sweep_once()
            await anyio.sleep(self.interval_seconds)

    async def start(self, *, task_group: TaskGroup) -> None:
        task_group.start_soon(self.run)
