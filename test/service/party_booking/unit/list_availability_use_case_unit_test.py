"""
Unit tests for ListAvailabilityUseCase

Test Coverage:
1. Windows from the weekday's slot template, in the tenant's timezone
2. Room availability from padded checks against bookings and live holds
3. Package: duration, eligibility flag, PackageNotFound
4. Party size filters rooms by capacity
5. Blackout dates and missing templates yield no slots
"""

from datetime import date

import pytest

from src.service.party_booking.app.query.list_availability_use_case import (
    ListAvailabilityUseCase,
)
from src.service.party_booking.domain.booking_errors import (
    PackageNotFoundError,
    TenantNotFoundError,
)
from src.service.party_booking.domain.entity.booking_entity import BookingStatus
from test.service.party_booking.in_memory_store import at


pytestmark = pytest.mark.unit

SATURDAY = date(2025, 6, 14)


class TestListAvailability:
    @pytest.fixture(autouse=True)
    def setup(self, store, tenant, room, policy_resolver, catalog_query_repo, clock):
        self.store = store
        self.tenant = tenant
        self.room = room
        self.clock = clock
        self.big_room = store.add_room(tenant=tenant, name='Room 2', max_occupancy=40)
        store.add_slot_template(tenant=tenant, day_of_week=6, start_times=['10:00', '14:00'])
        self.use_case = ListAvailabilityUseCase(
            uow=store.uow(),
            policy_resolver=policy_resolver,
            catalog_query_repo=catalog_query_repo,
            clock=clock,
        )

    def room_flags(self, slot):
        return {r.room_name: (r.eligible, r.available) for r in slot.rooms}

    @pytest.mark.asyncio
    async def test_all_rooms_free(self):
        slots = await self.use_case.execute(tenant_slug='funzone', on_date=SATURDAY)

        assert [(s.window_start, s.window_end) for s in slots] == [
            (at(10), at(12)),
            (at(14), at(16)),
        ]
        for slot in slots:
            assert self.room_flags(slot) == {'Room 1': (True, True), 'Room 2': (True, True)}

    @pytest.mark.asyncio
    async def test_booking_and_hold_mark_rooms_unavailable(self):
        # Given: Room 1 booked 12:15-13:00 (inside the buffer of the 10:00 slot)
        #        Room 2 held 14:00-16:00
        self.store.add_booking(room=self.room, start=at(12, 15), end=at(13))
        self.store.add_hold(room=self.big_room, start=at(14), end=at(16), now=self.clock())

        morning, afternoon = await self.use_case.execute(tenant_slug='funzone', on_date=SATURDAY)

        assert self.room_flags(morning) == {'Room 1': (True, False), 'Room 2': (True, True)}
        assert self.room_flags(afternoon) == {'Room 1': (True, True), 'Room 2': (True, False)}

    @pytest.mark.asyncio
    async def test_holds_can_be_excluded(self):
        self.store.add_hold(room=self.room, start=at(10), end=at(12), now=self.clock())

        morning, _ = await self.use_case.execute(
            tenant_slug='funzone', on_date=SATURDAY, include_holds=False
        )

        assert self.room_flags(morning)['Room 1'] == (True, True)

    @pytest.mark.asyncio
    async def test_expired_holds_and_cancelled_bookings_are_ignored(self):
        self.store.add_hold(room=self.room, start=at(10), end=at(12), now=at(8))
        self.store.add_booking(
            room=self.big_room, start=at(10), end=at(12), status=BookingStatus.CANCELLED
        )

        morning, _ = await self.use_case.execute(tenant_slug='funzone', on_date=SATURDAY)

        assert self.room_flags(morning) == {'Room 1': (True, True), 'Room 2': (True, True)}

    @pytest.mark.asyncio
    async def test_party_size_filters_small_rooms(self):
        slots = await self.use_case.execute(tenant_slug='funzone', on_date=SATURDAY, party_size=25)

        assert all([r.room_name for r in slot.rooms] == ['Room 2'] for slot in slots)

    @pytest.mark.asyncio
    async def test_package_sets_duration_and_eligibility(self):
        package = self.store.add_package(
            tenant=self.tenant, rooms=[self.big_room], duration_minutes=90
        )

        slots = await self.use_case.execute(
            tenant_slug='funzone', on_date=SATURDAY, package_id=package.id
        )

        assert slots[0].window_end == at(11, 30)
        assert self.room_flags(slots[0]) == {'Room 1': (False, True), 'Room 2': (True, True)}

    @pytest.mark.asyncio
    async def test_unknown_package(self):
        other = self.store.add_tenant(slug='other')
        foreign_package = self.store.add_package(tenant=other)

        with pytest.raises(PackageNotFoundError):
            await self.use_case.execute(
                tenant_slug='funzone', on_date=SATURDAY, package_id=foreign_package.id
            )

    @pytest.mark.asyncio
    async def test_unknown_tenant(self):
        with pytest.raises(TenantNotFoundError):
            await self.use_case.execute(tenant_slug='nobody', on_date=SATURDAY)

    @pytest.mark.asyncio
    async def test_blackout_date_has_no_slots(self):
        self.store.add_blackout(
            tenant=self.tenant, start_date=date(2025, 6, 13), end_date=date(2025, 6, 15)
        )

        assert await self.use_case.execute(tenant_slug='funzone', on_date=SATURDAY) == []

    @pytest.mark.asyncio
    async def test_day_without_template_has_no_slots(self):
        sunday = date(2025, 6, 15)

        assert await self.use_case.execute(tenant_slug='funzone', on_date=sunday) == []

    @pytest.mark.asyncio
    async def test_inactive_template_has_no_slots(self):
        self.store.add_slot_template(
            tenant=self.tenant, day_of_week=6, start_times=['10:00'], active=False
        )

        assert await self.use_case.execute(tenant_slug='funzone', on_date=SATURDAY) == []


class TestListAvailabilityTimezone:
    @pytest.mark.asyncio
    async def test_template_times_are_tenant_local(
        self, store, policy_resolver, catalog_query_repo, clock
    ):
        tenant = store.add_tenant(slug='nyc', timezone='America/New_York')
        store.add_room(tenant=tenant)
        store.add_slot_template(tenant=tenant, day_of_week=6, start_times=['10:00'])
        use_case = ListAvailabilityUseCase(
            uow=store.uow(),
            policy_resolver=policy_resolver,
            catalog_query_repo=catalog_query_repo,
            clock=clock,
        )

        slots = await use_case.execute(tenant_slug='nyc', on_date=SATURDAY)

        assert slots[0].window_start == at(14)
