from collections import defaultdict
from datetime import date, datetime
from typing import Callable, Dict, List, Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.party_booking.app.dto.availability_dto import RoomAvailability, SlotAvailability
from src.service.party_booking.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.party_booking.app.service.policy_resolver import PolicyResolver
from src.service.party_booking.domain.booking_errors import PackageNotFoundError
from src.service.party_booking.domain.entity.package_entity import Package
from src.service.party_booking.domain.entity.slot_template_entity import day_of_week
from src.service.party_booking.domain.overlap_evaluator import (
    conflict_search_range,
    conflicts_with_any,
)
from src.service.party_booking.domain.value_object.time_window import TimeWindow, utc_now


class ListAvailabilityUseCase:
    """
    Compile per-room availability for one local date.

    Read-only snapshot: a slot reported available may be taken a moment later;
    createHold is where exclusivity is enforced.

    Flow:
    1. Resolve tenant, package (PackageNotFound) and policy
    2. Blackout covering the date, or no active slot template for its weekday -> []
    3. Candidate windows = template start times (tenant timezone) + package/default duration
    4. For every active room that fits the party: `eligible` from the package's room
       set, `available` from the padded check against active bookings and live holds
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        policy_resolver: PolicyResolver,
        catalog_query_repo: ICatalogQueryRepo,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.uow = uow
        self.policy_resolver = policy_resolver
        self.catalog_query_repo = catalog_query_repo
        self.clock = clock
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        policy_resolver: PolicyResolver = Depends(Provide[Container.policy_resolver]),
        catalog_query_repo: ICatalogQueryRepo = Depends(Provide[Container.catalog_query_repo]),
    ) -> Self:
        return cls(
            uow=uow, policy_resolver=policy_resolver, catalog_query_repo=catalog_query_repo
        )

    @Logger.io
    async def execute(
        self,
        *,
        tenant_slug: str,
        on_date: date,
        package_id: Optional[UUID] = None,
        party_size: Optional[int] = None,
        include_holds: bool = True,
    ) -> List[SlotAvailability]:
        with self.tracer.start_as_current_span(
            'use_case.list_availability',
            attributes={'tenant.slug': tenant_slug, 'date': on_date.isoformat()},
        ):
            try:
                slots = await self._compile(
                    tenant_slug=tenant_slug,
                    on_date=on_date,
                    package_id=package_id,
                    party_size=party_size,
                    include_holds=include_holds,
                )
            except CustomBaseError as e:
                metrics.record_availability(result=e.code)
                raise
            metrics.record_availability(result='ok')
            return slots

    async def _compile(
        self,
        *,
        tenant_slug: str,
        on_date: date,
        package_id: Optional[UUID],
        party_size: Optional[int],
        include_holds: bool,
    ) -> List[SlotAvailability]:
        tenant = await self.policy_resolver.resolve_tenant(slug=tenant_slug)

        package: Optional[Package] = None
        if package_id is not None:
            package = await self.catalog_query_repo.get_package(
                tenant_id=tenant.id, package_id=package_id
            )
            if package is None or not package.active:
                raise PackageNotFoundError()

        policy = await self.policy_resolver.resolve(tenant_id=tenant.id)

        if await self.catalog_query_repo.is_blacked_out(tenant_id=tenant.id, on_date=on_date):
            Logger.base.debug(f'{tenant_slug} is blacked out on {on_date}')
            return []

        template = await self.catalog_query_repo.get_slot_template(
            tenant_id=tenant.id, day_of_week=day_of_week(on_date)
        )
        if template is None or not template.active:
            return []

        duration = (package.duration_minutes if package else 0) or policy.default_duration_minutes
        windows = template.windows_on(on_date, zone=tenant.zone, duration_minutes=duration)
        if not windows:
            return []

        rooms = await self.catalog_query_repo.list_active_rooms(
            tenant_id=tenant.id, min_occupancy=party_size or 0
        )
        if package is not None:
            eligible_ids = await self.catalog_query_repo.list_eligible_room_ids(
                tenant_id=tenant.id, package_id=package.id
            )
        else:
            eligible_ids = {room.id for room in rooms}

        busy: Dict[UUID, List[TimeWindow]] = defaultdict(list)
        if rooms:
            room_ids = [room.id for room in rooms]
            search_range = conflict_search_range(
                TimeWindow(
                    start=min(w.start for w in windows), end=max(w.end for w in windows)
                ),
                policy.buffer_minutes,
            )
            async with self.uow:
                bookings = await self.uow.booking_command_repo.list_active_bookings(
                    tenant_id=tenant.id, room_ids=room_ids, search_range=search_range
                )
                holds = (
                    await self.uow.hold_command_repo.list_live_holds(
                        tenant_id=tenant.id,
                        room_ids=room_ids,
                        search_range=search_range,
                        now=self.clock(),
                    )
                    if include_holds
                    else []
                )
            for booking in bookings:
                busy[booking.room_id].append(booking.window)
            for hold in holds:
                busy[hold.room_id].append(hold.window)

        return [
            SlotAvailability(
                window_start=window.start,
                window_end=window.end,
                rooms=[
                    RoomAvailability(
                        room_id=room.id,
                        room_name=room.name,
                        max_occupancy=room.max_occupancy,
                        eligible=room.id in eligible_ids,
                        available=not conflicts_with_any(
                            window, busy[room.id], policy.buffer_minutes
                        ),
                    )
                    for room in rooms
                ],
            )
            for window in windows
        ]
