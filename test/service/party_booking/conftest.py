"""
Shared fixtures for party booking tests.

Everything runs against the in-memory store; no database or network.
"""

import pytest

from src.service.party_booking.app.service.policy_resolver import PolicyResolver
from src.service.party_booking.app.service.reservation_validator import ReservationValidator
from src.service.party_booking.domain.entity.tenant_entity import Policy, PolicyOverrides
from test.service.party_booking.in_memory_store import (
    FixedClock,
    InMemoryCatalogQueryRepo,
    InMemoryStore,
    InMemoryTenantDirectory,
    at,
)


DEFAULT_POLICY = Policy(
    hold_minutes=15, buffer_minutes=30, default_duration_minutes=120, deposit_percent=50
)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(at(9))


@pytest.fixture
def tenant(store: InMemoryStore):
    return store.add_tenant(
        slug='funzone', policy=PolicyOverrides(hold_minutes=15, buffer_minutes=30)
    )


@pytest.fixture
def room(store: InMemoryStore, tenant):
    return store.add_room(tenant=tenant, name='Room 1', max_occupancy=20)


@pytest.fixture
def catalog_query_repo(store: InMemoryStore) -> InMemoryCatalogQueryRepo:
    return InMemoryCatalogQueryRepo(store=store)


@pytest.fixture
def policy_resolver(store: InMemoryStore) -> PolicyResolver:
    return PolicyResolver(
        tenant_directory=InMemoryTenantDirectory(store=store),
        ttl_seconds=30.0,
        defaults=DEFAULT_POLICY,
    )


@pytest.fixture
def reservation_validator(catalog_query_repo: InMemoryCatalogQueryRepo) -> ReservationValidator:
    return ReservationValidator(catalog_query_repo=catalog_query_repo)
