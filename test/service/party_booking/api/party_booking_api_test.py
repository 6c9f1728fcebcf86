"""
HTTP tests for the party booking routers

The real FastAPI app (create_app) with the DI container overridden to use the
in-memory store. Use cases run on the real clock, so every window is in 2030.
"""

from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager
from datetime import date, datetime

from dependency_injector import providers
from fastapi import FastAPI
from fastapi.testclient import TestClient
import pytest

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.constant.route_constant import AVAILABILITY_BASE, BOOKING_BASE, HOLD_BASE


pytestmark = pytest.mark.api

SATURDAY = '2030-01-05'


def iso(hour: int, minute: int = 0) -> str:
    return f'{SATURDAY}T{hour:02d}:{minute:02d}:00Z'


@pytest.fixture
def client(store, policy_resolver, reservation_validator, catalog_query_repo) -> Iterator[TestClient]:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        container.wire(modules=WIRE_MODULES)
        yield
        container.unwire()

    with (
        container.unit_of_work.override(providers.Factory(store.uow)),
        container.policy_resolver.override(policy_resolver),
        container.reservation_validator.override(reservation_validator),
        container.catalog_query_repo.override(catalog_query_repo),
    ):
        app = create_app(lifespan=lifespan, title_suffix=' (Test)')
        with TestClient(app) as test_client:
            yield test_client


def create_hold(client: TestClient, room, start: str, end: str | None = None, **extra):
    body = {'tenant_slug': 'funzone', 'room_id': str(room.id), 'start_time': start, **extra}
    if end is not None:
        body['end_time'] = end
    return client.post(HOLD_BASE, json=body)


class TestHoldApi:
    def test_buffer_scenario(self, client, room):
        first = create_hold(client, room, iso(14), iso(16))
        assert first.status_code == 201
        assert {'hold_id', 'expires_at'} <= first.json().keys()

        inside_buffer = create_hold(client, room, iso(16, 15), iso(18))
        assert inside_buffer.status_code == 409
        assert inside_buffer.json()['code'] == 'SLOT_TEMPORARILY_HELD'

        outside_buffer = create_hold(client, room, iso(16, 30), iso(18))
        assert outside_buffer.status_code == 201

    def test_capacity_exceeded(self, client, room):
        response = create_hold(client, room, iso(14), iso(16), party_size=25)

        assert response.status_code == 409
        assert response.json() == {
            'detail': 'Party size 25 exceeds room capacity 20',
            'code': 'CAPACITY_EXCEEDED',
        }

    def test_naive_start_time_is_rejected(self, client, room):
        response = create_hold(client, room, f'{SATURDAY}T14:00:00')

        assert response.status_code == 400
        assert response.json()['code'] == 'VALIDATION_ERROR'

    def test_end_before_start(self, client, room):
        response = create_hold(client, room, iso(16), iso(14))

        assert response.status_code == 400
        assert response.json()['code'] == 'INVALID_WINDOW'

    def test_unknown_tenant(self, client, room):
        response = client.post(
            HOLD_BASE,
            json={'tenant_slug': 'nobody', 'room_id': str(room.id), 'start_time': iso(14)},
        )

        assert response.status_code == 404
        assert response.json()['code'] == 'TENANT_NOT_FOUND'

    def test_extend_hold(self, client, room):
        created = create_hold(client, room, iso(14), iso(16)).json()

        extended = client.post(
            f'{HOLD_BASE}/{created["hold_id"]}/extend',
            json={'extend_minutes': 5, 'max_total_minutes': 30},
        )

        assert extended.status_code == 200
        assert datetime.fromisoformat(extended.json()['expires_at']) > datetime.fromisoformat(
            created['expires_at']
        )

    def test_extend_without_body_is_capped_at_hold_minutes(self, client, room):
        created = create_hold(client, room, iso(14), iso(16)).json()

        response = client.post(f'{HOLD_BASE}/{created["hold_id"]}/extend')

        assert response.status_code == 200
        assert response.json()['expires_at'] == created['expires_at']

    def test_release_hold(self, client, room, store):
        created = create_hold(client, room, iso(14), iso(16)).json()

        released = client.delete(f'{HOLD_BASE}/{created["hold_id"]}')
        again = client.delete(f'{HOLD_BASE}/{created["hold_id"]}')

        assert released.status_code == 200
        assert released.json() == {'hold_id': created['hold_id']}
        assert again.status_code == 404
        assert again.json()['code'] == 'HOLD_NOT_FOUND'
        assert store.holds == {}


class TestBookingApi:
    def test_commit_confirm_flow(self, client, store, tenant, room):
        package = store.add_package(tenant=tenant, rooms=[room])
        hold = create_hold(
            client, room, iso(14), package_id=str(package.id), party_size=12
        ).json()

        # commit
        committed = client.post(
            BOOKING_BASE,
            json={
                'hold_id': hold['hold_id'],
                'customer': {'name': 'Avery Parent', 'email': 'avery@example.com'},
                'notes': 'Dinosaur theme',
            },
        )
        assert committed.status_code == 201
        booking = committed.json()
        assert booking['status'] == 'pending'
        assert booking['start_time'].startswith(f'{SATURDAY}T14:00:00')
        assert booking['end_time'].startswith(f'{SATURDAY}T16:00:00')
        assert booking['total_price'] == '230.00'
        assert booking['deposit_due'] == '115.00'

        # the hold is consumed
        again = client.post(
            BOOKING_BASE,
            json={'hold_id': hold['hold_id'], 'customer': {'name': 'Avery Parent'}},
        )
        assert again.status_code == 404
        assert again.json()['code'] == 'HOLD_NOT_FOUND'

        # read back
        fetched = client.get(f'{BOOKING_BASE}/{booking["id"]}')
        assert fetched.status_code == 200
        assert fetched.json()['notes'] == 'Dinosaur theme'

        # payment confirmation
        confirmed = client.post(f'{BOOKING_BASE}/{booking["id"]}/confirm')
        assert confirmed.status_code == 200
        assert confirmed.json()['status'] == 'confirmed'
        assert confirmed.json()['deposit_paid'] == '115.00'

        # confirmed bookings cannot be cancelled
        cancelled = client.post(f'{BOOKING_BASE}/{booking["id"]}/cancel')
        assert cancelled.status_code == 409
        assert cancelled.json()['code'] == 'INVALID_BOOKING_TRANSITION'

    def test_cancel_pending_booking(self, client, store, tenant, room):
        package = store.add_package(tenant=tenant, rooms=[room])
        hold = create_hold(client, room, iso(14), package_id=str(package.id)).json()
        booking = client.post(
            BOOKING_BASE, json={'hold_id': hold['hold_id'], 'customer': {'name': 'Avery'}}
        ).json()

        response = client.post(f'{BOOKING_BASE}/{booking["id"]}/cancel')

        assert response.status_code == 200
        assert response.json()['status'] == 'cancelled'
        assert create_hold(client, room, iso(14), iso(16)).status_code == 201

    def test_unknown_booking(self, client):
        response = client.get(f'{BOOKING_BASE}/01934b2e-1c3a-7d4e-8f00-000000000b01')

        assert response.status_code == 404
        assert response.json()['code'] == 'BOOKING_NOT_FOUND'


class TestAvailabilityApi:
    def test_list_availability(self, client, store, tenant, room):
        store.add_slot_template(tenant=tenant, day_of_week=6, start_times=['10:00', '14:00'])
        create_hold(client, room, iso(14), iso(16))

        response = client.post(
            AVAILABILITY_BASE, json={'tenant_slug': 'funzone', 'date': SATURDAY}
        )

        assert response.status_code == 200
        morning, afternoon = response.json()
        assert morning['rooms'][0]['available'] is True
        assert afternoon['rooms'][0]['available'] is False
        assert afternoon['rooms'][0]['room_name'] == 'Room 1'

    def test_blackout(self, client, store, tenant, room):
        store.add_slot_template(tenant=tenant, day_of_week=6, start_times=['10:00'])
        store.add_blackout(tenant=tenant, start_date=date(2030, 1, 5), end_date=date(2030, 1, 5))

        response = client.post(
            AVAILABILITY_BASE, json={'tenant_slug': 'funzone', 'date': SATURDAY}
        )

        assert response.status_code == 200
        assert response.json() == []


class TestCommonEndpoints:
    def test_health(self, client):
        assert client.get('/health').json()['status'] == 'healthy'

    def test_metrics_exposes_booking_counters(self, client, room):
        create_hold(client, room, iso(14), iso(16))

        body = client.get('/metrics').text

        assert 'hold_requests_total' in body
