"""
Unit tests for PolicyResolver and ReservationValidator

Test Coverage:
1. Tenant resolution: not found, inactive
2. Policy merge with platform defaults
3. Cache: hits within TTL, refresh after TTL, misses never cached, invalidate
4. Validator: room, capacity, package and eligibility checks in order
"""

from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.service.party_booking.app.service.policy_resolver import PolicyResolver
from src.service.party_booking.app.service.reservation_validator import ReservationValidator
from src.service.party_booking.domain.booking_errors import (
    CapacityExceededError,
    InvalidPackageError,
    RoomNotEligibleForPackageError,
    RoomNotFoundError,
    TenantInactiveError,
    TenantNotFoundError,
)
from src.service.party_booking.domain.entity.package_entity import Package
from src.service.party_booking.domain.entity.room_entity import Room
from src.service.party_booking.domain.entity.tenant_entity import (
    Policy,
    PolicyOverrides,
    Tenant,
)


pytestmark = pytest.mark.unit

DEFAULTS = Policy(hold_minutes=15, buffer_minutes=30, default_duration_minutes=120, deposit_percent=50)


class FakeMonotonic:
    def __init__(self) -> None:
        self.value = 1000.0

    def __call__(self) -> float:
        return self.value


class TestPolicyResolver:
    def setup_method(self):
        self.tenant = Tenant(id=uuid4(), slug='funzone', name='Fun Zone')
        self.tenant_directory = AsyncMock()
        self.tenant_directory.get_by_slug.return_value = self.tenant
        self.tenant_directory.get_by_id.return_value = self.tenant
        self.tenant_directory.get_policy.return_value = PolicyOverrides(buffer_minutes=45)
        self.monotonic = FakeMonotonic()

        self.resolver = PolicyResolver(
            tenant_directory=self.tenant_directory,
            ttl_seconds=30.0,
            defaults=DEFAULTS,
            clock=self.monotonic,
        )

    @pytest.mark.asyncio
    async def test_resolve_merges_overrides_with_defaults(self):
        policy = await self.resolver.resolve(tenant_id=self.tenant.id)

        assert policy.buffer_minutes == 45
        assert policy.hold_minutes == 15

    @pytest.mark.asyncio
    async def test_tenant_without_policy_row_gets_defaults(self):
        self.tenant_directory.get_policy.return_value = None

        assert await self.resolver.resolve(tenant_id=self.tenant.id) == DEFAULTS

    @pytest.mark.asyncio
    async def test_unknown_slug_raises_tenant_not_found(self):
        self.tenant_directory.get_by_slug.return_value = None

        with pytest.raises(TenantNotFoundError):
            await self.resolver.resolve_tenant(slug='nobody')

    @pytest.mark.asyncio
    async def test_inactive_tenant_is_rejected(self):
        self.tenant_directory.get_by_slug.return_value = Tenant(
            id=uuid4(), slug='closed', name='Closed', active=False
        )

        with pytest.raises(TenantInactiveError):
            await self.resolver.resolve_tenant(slug='closed')

    @pytest.mark.asyncio
    async def test_lookups_are_cached_within_ttl(self):
        await self.resolver.resolve_tenant(slug='funzone')
        await self.resolver.resolve(tenant_id=self.tenant.id)
        self.monotonic.value += 29
        await self.resolver.resolve_tenant(slug='funzone')
        await self.resolver.resolve(tenant_id=self.tenant.id)

        self.tenant_directory.get_by_slug.assert_awaited_once()
        self.tenant_directory.get_by_id.assert_not_awaited()  # filled from the slug lookup
        self.tenant_directory.get_policy.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_entries_refresh_after_ttl(self):
        await self.resolver.resolve(tenant_id=self.tenant.id)
        self.tenant_directory.get_policy.return_value = PolicyOverrides(buffer_minutes=10)
        self.monotonic.value += 31

        policy = await self.resolver.resolve(tenant_id=self.tenant.id)

        assert policy.buffer_minutes == 10
        assert self.tenant_directory.get_policy.await_count == 2

    @pytest.mark.asyncio
    async def test_misses_are_not_cached(self):
        self.tenant_directory.get_by_slug.return_value = None
        with pytest.raises(TenantNotFoundError):
            await self.resolver.resolve_tenant(slug='funzone')

        self.tenant_directory.get_by_slug.return_value = self.tenant
        tenant = await self.resolver.resolve_tenant(slug='funzone')

        assert tenant == self.tenant

    @pytest.mark.asyncio
    async def test_invalidate_drops_tenant_and_policy(self):
        await self.resolver.resolve(tenant_id=self.tenant.id)

        self.resolver.invalidate(tenant_id=self.tenant.id)
        await self.resolver.resolve(tenant_id=self.tenant.id)

        assert self.tenant_directory.get_by_id.await_count == 2
        assert self.tenant_directory.get_policy.await_count == 2


class TestReservationValidator:
    def setup_method(self):
        self.tenant_id = uuid4()
        self.room = Room(id=uuid4(), tenant_id=self.tenant_id, name='Room 1', max_occupancy=20)
        self.package = Package(
            id=uuid4(),
            tenant_id=self.tenant_id,
            name='Dino Party',
            duration_minutes=120,
            base_price=Decimal('200'),
        )
        self.catalog = AsyncMock()
        self.catalog.get_room.return_value = self.room
        self.catalog.get_package.return_value = self.package
        self.catalog.list_eligible_room_ids.return_value = {self.room.id}
        self.validator = ReservationValidator(catalog_query_repo=self.catalog)

    @pytest.mark.asyncio
    async def test_valid_selection(self):
        selection = await self.validator.validate(
            tenant_id=self.tenant_id,
            room_id=self.room.id,
            party_size=20,
            package_id=self.package.id,
        )

        assert selection.room == self.room
        assert selection.package == self.package

    @pytest.mark.asyncio
    async def test_without_package(self):
        selection = await self.validator.validate(
            tenant_id=self.tenant_id, room_id=self.room.id, party_size=None
        )

        assert selection.package is None
        self.catalog.get_package.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_room(self):
        self.catalog.get_room.return_value = None

        with pytest.raises(RoomNotFoundError):
            await self.validator.validate(
                tenant_id=self.tenant_id, room_id=uuid4(), party_size=5
            )

    @pytest.mark.asyncio
    async def test_inactive_room_is_not_found(self):
        self.room.active = False

        with pytest.raises(RoomNotFoundError):
            await self.validator.validate(
                tenant_id=self.tenant_id, room_id=self.room.id, party_size=5
            )

    @pytest.mark.asyncio
    async def test_capacity_checked_before_package(self):
        self.catalog.get_package.return_value = None

        with pytest.raises(CapacityExceededError):
            await self.validator.validate(
                tenant_id=self.tenant_id,
                room_id=self.room.id,
                party_size=25,
                package_id=self.package.id,
            )

    @pytest.mark.asyncio
    async def test_inactive_package(self):
        self.package.active = False

        with pytest.raises(InvalidPackageError):
            await self.validator.validate(
                tenant_id=self.tenant_id,
                room_id=self.room.id,
                party_size=5,
                package_id=self.package.id,
            )

    @pytest.mark.asyncio
    async def test_room_not_eligible_for_package(self):
        self.catalog.list_eligible_room_ids.return_value = {uuid4()}

        with pytest.raises(RoomNotEligibleForPackageError):
            await self.validator.validate(
                tenant_id=self.tenant_id,
                room_id=self.room.id,
                party_size=5,
                package_id=self.package.id,
            )
