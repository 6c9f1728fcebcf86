import time
from datetime import datetime
from typing import Callable, Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils.compat import uuid7

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import CustomBaseError, UniqueViolationError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.party_booking.app.dto.hold_result import HoldResult
from src.service.party_booking.app.service.policy_resolver import PolicyResolver
from src.service.party_booking.app.service.reservation_validator import ReservationValidator
from src.service.party_booking.domain.booking_errors import (
    RoomNotFoundError,
    SlotTemporarilyHeldError,
    SlotUnavailableError,
)
from src.service.party_booking.domain.entity.hold_entity import Hold
from src.service.party_booking.domain.entity.package_entity import Package
from src.service.party_booking.domain.overlap_evaluator import (
    conflict_search_range,
    conflicts_with_any,
)
from src.service.party_booking.domain.value_object.time_window import TimeWindow, utc_now


class CreateHoldUseCase:
    """
    Place a short-lived hold on a room window.

    Flow:
    1. Resolve tenant and policy (TenantNotFound / TenantInactive)
    2. Derive the window: explicit end, else package duration, else policy default
    3. Validate room, capacity and package eligibility - before any write
    4. In one transaction, serialized per room by the room row lock:
       - purge this room's expired holds
       - padded check against pending/confirmed bookings (SlotUnavailable)
       - padded check against live holds (SlotTemporarilyHeld)
       - insert; the unique (tenant, room, start_time) index settles any race
         that slipped past the check (SlotTemporarilyHeld)
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        policy_resolver: PolicyResolver,
        reservation_validator: ReservationValidator,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.uow = uow
        self.policy_resolver = policy_resolver
        self.reservation_validator = reservation_validator
        self.clock = clock
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        policy_resolver: PolicyResolver = Depends(Provide[Container.policy_resolver]),
        reservation_validator: ReservationValidator = Depends(
            Provide[Container.reservation_validator]
        ),
    ) -> Self:
        return cls(
            uow=uow, policy_resolver=policy_resolver, reservation_validator=reservation_validator
        )

    @Logger.io
    async def execute(
        self,
        *,
        tenant_slug: str,
        room_id: UUID,
        start_time: datetime,
        end_time: Optional[datetime] = None,
        package_id: Optional[UUID] = None,
        party_size: Optional[int] = None,
        client_token: Optional[str] = None,
    ) -> HoldResult:
        started = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.create_hold',
            attributes={'tenant.slug': tenant_slug, 'room.id': str(room_id)},
        ) as span:
            try:
                hold = await self._create_hold(
                    tenant_slug=tenant_slug,
                    room_id=room_id,
                    start_time=start_time,
                    end_time=end_time,
                    package_id=package_id,
                    party_size=party_size,
                    client_token=client_token,
                )
            except CustomBaseError as e:
                span.set_attribute('result', e.code)
                metrics.record_hold(operation='create', result=e.code)
                raise

            span.set_attribute('hold.id', str(hold.id))
            metrics.record_hold(
                operation='create',
                result='ok',
                duration=time.perf_counter() - started,
            )
            Logger.base.info(
                f'🔒 [HOLD] {hold.id} room={room_id} '
                f'{hold.start_time.isoformat()}..{hold.end_time.isoformat()} '
                f'expires={hold.expires_at.isoformat()}'
            )
            return HoldResult.from_hold(hold)

    async def _create_hold(
        self,
        *,
        tenant_slug: str,
        room_id: UUID,
        start_time: datetime,
        end_time: Optional[datetime],
        package_id: Optional[UUID],
        party_size: Optional[int],
        client_token: Optional[str],
    ) -> Hold:
        tenant = await self.policy_resolver.resolve_tenant(slug=tenant_slug)
        policy = await self.policy_resolver.resolve(tenant_id=tenant.id)

        package: Optional[Package] = None
        if end_time is not None:
            window = TimeWindow.of(start_time, end_time)
        else:
            duration = policy.default_duration_minutes
            if package_id is not None:
                package = await self.reservation_validator.load_package(
                    tenant_id=tenant.id, package_id=package_id
                )
                duration = package.duration_minutes or duration
            window = TimeWindow.starting_at(start_time, minutes=duration)

        await self.reservation_validator.validate(
            tenant_id=tenant.id,
            room_id=room_id,
            party_size=party_size,
            package_id=package_id,
            package=package,
        )

        async with self.uow:
            if not await self.uow.hold_command_repo.lock_room(tenant_id=tenant.id, room_id=room_id):
                raise RoomNotFoundError()

            # taken after the room lock is held
            now = self.clock()
            await self.uow.hold_command_repo.delete_expired_for_room(
                tenant_id=tenant.id, room_id=room_id, now=now
            )

            search_range = conflict_search_range(window, policy.buffer_minutes)
            bookings = await self.uow.booking_command_repo.list_active_bookings(
                tenant_id=tenant.id, room_ids=[room_id], search_range=search_range
            )
            if conflicts_with_any(window, [b.window for b in bookings], policy.buffer_minutes):
                raise SlotUnavailableError()

            holds = await self.uow.hold_command_repo.list_live_holds(
                tenant_id=tenant.id, room_ids=[room_id], search_range=search_range, now=now
            )
            if conflicts_with_any(window, [h.window for h in holds], policy.buffer_minutes):
                raise SlotTemporarilyHeldError()

            hold = Hold.create(
                id=uuid7(),
                tenant_id=tenant.id,
                room_id=room_id,
                window=window,
                now=now,
                hold_minutes=policy.hold_minutes,
                package_id=package_id,
                party_size=party_size,
                client_token=client_token,
            )
            try:
                hold = await self.uow.hold_command_repo.create(hold=hold)
                await self.uow.commit()
            except UniqueViolationError:
                raise SlotTemporarilyHeldError()

        return hold
