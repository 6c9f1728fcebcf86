"""
Unit tests for Booking, Package pricing and slot templates

Test Coverage:
1. Booking from hold: copies the window, pending vs immediately confirmed
2. Status transitions: pending -> confirmed / cancelled, everything else refused
3. Pricing: base price, extra guests, deposit rounding
4. Slot templates: local start times to UTC windows, malformed entries skipped
"""

from datetime import date, timezone
from decimal import Decimal
from uuid import uuid4
from zoneinfo import ZoneInfo

import pytest

from src.service.party_booking.domain.booking_errors import InvalidBookingTransitionError
from src.service.party_booking.domain.entity.booking_entity import Booking, BookingStatus
from src.service.party_booking.domain.entity.customer_entity import CustomerInfo
from src.service.party_booking.domain.entity.hold_entity import Hold
from src.service.party_booking.domain.entity.package_entity import Package
from src.service.party_booking.domain.entity.slot_template_entity import (
    SlotTemplate,
    day_of_week,
)
from src.service.party_booking.domain.entity.tenant_entity import Policy, PolicyOverrides
from src.service.party_booking.domain.value_object.price_quote import PriceQuote
from src.service.party_booking.domain.value_object.time_window import TimeWindow
from test.service.party_booking.in_memory_store import at


pytestmark = pytest.mark.unit


def make_hold() -> Hold:
    return Hold.create(
        id=uuid4(),
        tenant_id=uuid4(),
        room_id=uuid4(),
        window=TimeWindow.of(at(14), at(16)),
        now=at(9),
        hold_minutes=15,
        party_size=12,
    )


def make_booking(quote: PriceQuote) -> Booking:
    return Booking.create_from_hold(
        id=uuid4(), hold=make_hold(), customer_id=uuid4(), quote=quote, now=at(9, 5)
    )


class TestBookingFromHold:
    def test_copies_hold_window_and_party(self):
        hold = make_hold()

        booking = Booking.create_from_hold(
            id=uuid4(),
            hold=hold,
            customer_id=uuid4(),
            quote=PriceQuote.with_deposit(Decimal('230'), 50),
            now=at(9, 5),
            notes='Dinosaur theme',
        )

        assert booking.window == hold.window
        assert booking.room_id == hold.room_id
        assert booking.tenant_id == hold.tenant_id
        assert booking.party_size == 12
        assert booking.notes == 'Dinosaur theme'
        assert booking.status == BookingStatus.PENDING
        assert booking.deposit_paid == Decimal('0.00')

    def test_no_deposit_due_is_confirmed_immediately(self):
        booking = make_booking(PriceQuote.free())

        assert booking.status == BookingStatus.CONFIRMED
        assert booking.is_active


class TestBookingTransitions:
    def test_confirm_records_deposit_due_by_default(self):
        booking = make_booking(PriceQuote.with_deposit(Decimal('200'), 50))

        confirmed = booking.confirm(now=at(10))

        assert confirmed.status == BookingStatus.CONFIRMED
        assert confirmed.deposit_paid == Decimal('100.00')
        assert confirmed.updated_at == at(10)

    def test_confirm_records_amount_paid(self):
        booking = make_booking(PriceQuote.with_deposit(Decimal('200'), 50))

        confirmed = booking.confirm(now=at(10), amount_paid=Decimal('200.00'))

        assert confirmed.deposit_paid == Decimal('200.00')

    def test_cancel_pending_booking(self):
        booking = make_booking(PriceQuote.with_deposit(Decimal('200'), 50))

        cancelled = booking.cancel(now=at(10))

        assert cancelled.status == BookingStatus.CANCELLED
        assert not cancelled.is_active

    @pytest.mark.parametrize('status', [BookingStatus.CONFIRMED, BookingStatus.CANCELLED])
    def test_only_pending_bookings_transition(self, status):
        booking = make_booking(PriceQuote.with_deposit(Decimal('200'), 50))
        booking.status = status

        with pytest.raises(InvalidBookingTransitionError):
            booking.confirm(now=at(10))
        with pytest.raises(InvalidBookingTransitionError):
            booking.cancel(now=at(10))


class TestPricing:
    def package(self) -> Package:
        return Package(
            id=uuid4(),
            tenant_id=uuid4(),
            name='Dino Party',
            duration_minutes=120,
            base_price=Decimal('200.00'),
            base_party_size=10,
            extra_guest_price=Decimal('15.00'),
        )

    def test_base_price_covers_base_party_size(self):
        quote = self.package().quote(party_size=8, deposit_percent=50)

        assert quote == PriceQuote(total_price=Decimal('200.00'), deposit_due=Decimal('100.00'))

    def test_extra_guests_are_charged(self):
        quote = self.package().quote(party_size=12, deposit_percent=50)

        assert quote.total_price == Decimal('230.00')
        assert quote.deposit_due == Decimal('115.00')

    def test_unknown_party_size_pays_base_price(self):
        assert self.package().quote(party_size=None, deposit_percent=0).total_price == Decimal(
            '200.00'
        )

    def test_deposit_rounds_half_up_to_cents(self):
        quote = PriceQuote.with_deposit(Decimal('100.05'), 25)

        assert quote.deposit_due == Decimal('25.01')


class TestPolicy:
    def test_overrides_replace_only_set_fields(self):
        defaults = Policy(
            hold_minutes=15, buffer_minutes=30, default_duration_minutes=120, deposit_percent=50
        )

        merged = defaults.merged_with(PolicyOverrides(buffer_minutes=45))

        assert merged == Policy(
            hold_minutes=15, buffer_minutes=45, default_duration_minutes=120, deposit_percent=50
        )

    def test_missing_overrides_keep_defaults(self):
        defaults = Policy(
            hold_minutes=15, buffer_minutes=30, default_duration_minutes=120, deposit_percent=50
        )

        assert defaults.merged_with(None) is defaults


class TestSlotTemplate:
    def test_day_of_week_starts_on_sunday(self):
        assert day_of_week(date(2025, 6, 15)) == 0  # Sunday
        assert day_of_week(date(2025, 6, 14)) == 6  # Saturday

    def test_local_start_times_become_utc_windows(self):
        template = SlotTemplate(
            tenant_id=uuid4(), day_of_week=6, start_times=['14:00', '10:00']
        )

        windows = template.windows_on(
            date(2025, 6, 14), zone=ZoneInfo('America/New_York'), duration_minutes=120
        )

        # EDT is UTC-4, sorted by start
        assert [w.start for w in windows] == [at(14), at(18)]
        assert windows[0].end == at(16)
        assert all(w.start.tzinfo is not None for w in windows)

    def test_malformed_start_times_are_skipped(self):
        template = SlotTemplate(tenant_id=uuid4(), day_of_week=6, start_times=['noon', '09:30'])

        windows = template.windows_on(
            date(2025, 6, 14), zone=ZoneInfo('UTC'), duration_minutes=60
        )

        assert [w.start.astimezone(timezone.utc) for w in windows] == [at(9, 30)]


class TestCustomerInfo:
    def test_email_is_normalized(self):
        assert CustomerInfo(name='Avery', email='  Avery@Example.COM ').email == 'avery@example.com'

    def test_blank_email_becomes_none(self):
        assert CustomerInfo(name='Avery', email='   ').email is None
