"""
Production FastAPI Application

Party booking API plus the background sweep of expired holds.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.service.party_booking.app.command.expire_holds_use_case import ExpireHoldsUseCase
from src.service.party_booking.driving_adapter.background.hold_expiry_sweeper import (
    HoldExpirySweeper,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Party Booking] Starting up...')

    tracing = TracingConfig(service_name='party-booking-core')
    tracing.setup()
    Logger.base.info('📊 [Party Booking] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Party Booking] Dependency injection wired')

    engine = get_engine()
    tracing.instrument_sqlalchemy(engine=engine)
    Logger.base.info('🗄️  [Party Booking] Database engine ready + instrumented')

    async with anyio.create_task_group() as tg:
        if settings.HOLD_SWEEP_ENABLED:
            sweeper = HoldExpirySweeper(
                use_case_factory=lambda: ExpireHoldsUseCase(uow=container.unit_of_work()),
                interval_seconds=settings.HOLD_SWEEP_INTERVAL_SECONDS,
            )
            await sweeper.start(task_group=tg)

        Logger.base.info('✅ [Party Booking] Ready to serve requests')

        yield

        Logger.base.info('🛑 [Party Booking] Shutting down...')
        tg.cancel_scope.cancel()

    await container.database().dispose()
    Logger.base.info('🗄️  [Party Booking] Database engine disposed')

    tracing.shutdown()
    container.unwire()

    Logger.base.info('👋 [Party Booking] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
