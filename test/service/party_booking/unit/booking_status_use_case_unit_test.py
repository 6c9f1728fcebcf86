"""
Unit tests for GetBookingUseCase and the booking status use cases

Test Coverage:
1. Get: returns the stored booking, BookingNotFound otherwise
2. Confirm: pending -> confirmed with deposit_paid, rejected otherwise
3. Cancel: pending -> cancelled frees the slot for new holds
"""

from decimal import Decimal
from uuid import uuid4

import pytest

from src.service.party_booking.app.command.create_hold_use_case import CreateHoldUseCase
from src.service.party_booking.app.command.update_booking_status_to_cancelled_use_case import (
    UpdateBookingToCancelledUseCase,
)
from src.service.party_booking.app.command.update_booking_status_to_confirmed_use_case import (
    UpdateBookingToConfirmedUseCase,
)
from src.service.party_booking.app.query.get_booking_use_case import GetBookingUseCase
from src.service.party_booking.domain.booking_errors import (
    BookingNotFoundError,
    InvalidBookingTransitionError,
)
from src.service.party_booking.domain.entity.booking_entity import BookingStatus
from test.service.party_booking.in_memory_store import at


pytestmark = pytest.mark.unit


class TestGetBooking:
    @pytest.mark.asyncio
    async def test_get_existing_booking(self, store, room):
        booking = store.add_booking(room=room, start=at(14), end=at(16))

        found = await GetBookingUseCase(uow=store.uow()).execute(booking_id=booking.id)

        assert found == booking

    @pytest.mark.asyncio
    async def test_get_unknown_booking(self, store):
        with pytest.raises(BookingNotFoundError):
            await GetBookingUseCase(uow=store.uow()).execute(booking_id=uuid4())


class TestConfirmBooking:
    @pytest.mark.asyncio
    async def test_confirm_pending_booking(self, store, room, clock):
        booking = store.add_booking(room=room, start=at(14), end=at(16), deposit_due='100.00')

        confirmed = await UpdateBookingToConfirmedUseCase(uow=store.uow(), clock=clock).execute(
            booking_id=booking.id
        )

        assert confirmed.status == BookingStatus.CONFIRMED
        assert confirmed.deposit_paid == Decimal('100.00')
        assert store.bookings[booking.id].status == BookingStatus.CONFIRMED

    @pytest.mark.asyncio
    async def test_confirm_with_amount_paid(self, store, room, clock):
        booking = store.add_booking(room=room, start=at(14), end=at(16))

        confirmed = await UpdateBookingToConfirmedUseCase(uow=store.uow(), clock=clock).execute(
            booking_id=booking.id, amount_paid=Decimal('200.00')
        )

        assert confirmed.deposit_paid == Decimal('200.00')

    @pytest.mark.asyncio
    async def test_confirm_twice_is_rejected(self, store, room, clock):
        booking = store.add_booking(
            room=room, start=at(14), end=at(16), status=BookingStatus.CONFIRMED
        )

        with pytest.raises(InvalidBookingTransitionError):
            await UpdateBookingToConfirmedUseCase(uow=store.uow(), clock=clock).execute(
                booking_id=booking.id
            )

    @pytest.mark.asyncio
    async def test_confirm_unknown_booking(self, store, clock):
        with pytest.raises(BookingNotFoundError):
            await UpdateBookingToConfirmedUseCase(uow=store.uow(), clock=clock).execute(
                booking_id=uuid4()
            )


class TestCancelBooking:
    @pytest.mark.asyncio
    async def test_cancel_frees_the_slot(
        self, store, room, clock, policy_resolver, reservation_validator
    ):
        booking = store.add_booking(room=room, start=at(14), end=at(16))

        cancelled = await UpdateBookingToCancelledUseCase(uow=store.uow(), clock=clock).execute(
            booking_id=booking.id
        )
        result = await CreateHoldUseCase(
            uow=store.uow(),
            policy_resolver=policy_resolver,
            reservation_validator=reservation_validator,
            clock=clock,
        ).execute(tenant_slug='funzone', room_id=room.id, start_time=at(14), end_time=at(16))

        assert cancelled.status == BookingStatus.CANCELLED
        assert result.hold_id in store.holds

    @pytest.mark.asyncio
    async def test_cancel_confirmed_booking_is_rejected(self, store, room, clock):
        booking = store.add_booking(
            room=room, start=at(14), end=at(16), status=BookingStatus.CONFIRMED
        )

        with pytest.raises(InvalidBookingTransitionError):
            await UpdateBookingToCancelledUseCase(uow=store.uow(), clock=clock).execute(
                booking_id=booking.id
            )
        assert store.bookings[booking.id].status == BookingStatus.CONFIRMED
