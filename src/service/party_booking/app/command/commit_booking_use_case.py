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
from src.platform.exception.exceptions import (
    CustomBaseError,
    PersistenceError,
    UniqueViolationError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.party_booking.app.service.policy_resolver import PolicyResolver
from src.service.party_booking.app.service.reservation_validator import ReservationValidator
from src.service.party_booking.domain.booking_errors import (
    HoldNotFoundError,
    RoomNotFoundError,
    SlotUnavailableError,
)
from src.service.party_booking.domain.entity.booking_entity import Booking
from src.service.party_booking.domain.entity.customer_entity import CustomerInfo
from src.service.party_booking.domain.overlap_evaluator import (
    conflict_search_range,
    conflicts_with_any,
)
from src.service.party_booking.domain.value_object.price_quote import PriceQuote
from src.service.party_booking.domain.value_object.time_window import utc_now


class CommitBookingUseCase:
    """
    Turn a live hold into a booking and retire the hold, in one transaction.

    Flow:
    1. Read the live hold (HoldNotFound when missing or expired) and re-validate
       room, capacity and package eligibility
    2. Lock the room, then the hold row (room before hold, same as createHold)
    3. Padded check against pending/confirmed bookings only (SlotUnavailable);
       the hold being committed is the one live hold allowed to overlap
    4. Find or create the tenant's customer
    5. Insert the booking with its price and deposit; an exclusion/unique
       violation surfaces as SlotUnavailable and leaves the hold intact
    6. Delete the hold inside a savepoint; a failure there is logged, not raised

    Steps 1-3 abort with no side effects.
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
        self, *, hold_id: UUID, customer: CustomerInfo, notes: Optional[str] = None
    ) -> Booking:
        started = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.commit_booking', attributes={'hold.id': str(hold_id)}
        ) as span:
            try:
                booking = await self._commit(hold_id=hold_id, customer=customer, notes=notes)
            except CustomBaseError as e:
                span.set_attribute('result', e.code)
                metrics.record_booking(operation='commit', result=e.code)
                raise

            span.set_attribute('booking.id', str(booking.id))
            metrics.record_booking(
                operation='commit', result='ok', duration=time.perf_counter() - started
            )
            Logger.base.info(
                f'📝 [COMMIT] Booking {booking.id} ({booking.status}) from hold {hold_id}'
            )
            return booking

    async def _commit(
        self, *, hold_id: UUID, customer: CustomerInfo, notes: Optional[str]
    ) -> Booking:
        async with self.uow:
            now = self.clock()
            # unlocked read to learn the room; the row is locked after the room
            candidate = await self.uow.hold_command_repo.get(hold_id=hold_id)
            if candidate is None or not candidate.is_live(now):
                raise HoldNotFoundError()

            policy = await self.policy_resolver.resolve(tenant_id=candidate.tenant_id)
            selection = await self.reservation_validator.validate(
                tenant_id=candidate.tenant_id,
                room_id=candidate.room_id,
                party_size=candidate.party_size,
                package_id=candidate.package_id,
            )

            if not await self.uow.hold_command_repo.lock_room(
                tenant_id=candidate.tenant_id, room_id=candidate.room_id
            ):
                raise RoomNotFoundError()
            hold = await self.uow.hold_command_repo.get_live_for_update(hold_id=hold_id, now=now)
            if hold is None:
                raise HoldNotFoundError()

            bookings = await self.uow.booking_command_repo.list_active_bookings(
                tenant_id=hold.tenant_id,
                room_ids=[hold.room_id],
                search_range=conflict_search_range(hold.window, policy.buffer_minutes),
            )
            if conflicts_with_any(
                hold.window, [b.window for b in bookings], policy.buffer_minutes
            ):
                raise SlotUnavailableError()

            customer_record = await self.uow.customer_directory.find_or_create(
                tenant_id=hold.tenant_id, info=customer
            )

            quote = (
                selection.package.quote(
                    party_size=hold.party_size, deposit_percent=policy.deposit_percent
                )
                if selection.package
                else PriceQuote.free()
            )
            booking = Booking.create_from_hold(
                id=uuid7(),
                hold=hold,
                customer_id=customer_record.id,
                quote=quote,
                now=now,
                notes=notes,
            )
            try:
                booking = await self.uow.booking_command_repo.create(booking=booking)
            except UniqueViolationError:
                raise SlotUnavailableError()

            try:
                async with self.uow.savepoint():
                    await self.uow.hold_command_repo.delete(hold_id=hold.id)
            except PersistenceError as e:
                # expiry reclaims the hold; the booking already occupies the slot
                Logger.base.warning(f'⚠️ [COMMIT] Could not delete hold {hold.id}: {e}')

            await self.uow.commit()

        return booking
