"""Policy Resolver - tenant lookup and scheduling policy with a short-lived cache"""

import time
from typing import Callable, Dict, Generic, Optional, TypeVar
from uuid import UUID

import attrs
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.party_booking.app.interface.i_tenant_directory import ITenantDirectory
from src.service.party_booking.domain.booking_errors import (
    TenantInactiveError,
    TenantNotFoundError,
)
from src.service.party_booking.domain.entity.tenant_entity import Policy, Tenant


_V = TypeVar('_V')


@attrs.define
class CacheEntry(Generic[_V]):
    value: _V
    timestamp: float


def default_policy() -> Policy:
    return Policy(
        hold_minutes=settings.DEFAULT_HOLD_MINUTES,
        buffer_minutes=settings.DEFAULT_BUFFER_MINUTES,
        default_duration_minutes=settings.DEFAULT_DURATION_MINUTES,
        deposit_percent=settings.DEFAULT_DEPOSIT_PERCENT,
    )


class PolicyResolver:
    """
    Resolves tenants and their scheduling policy

    Cache:
    - Tenants (by slug and id) and merged policies are cached for `ttl_seconds`
    - Misses are never cached, so a newly onboarded tenant is visible immediately
    - A tenant deactivated while cached keeps resolving until its entry expires

    Hold and booking state never passes through here.
    """

    def __init__(
        self,
        *,
        tenant_directory: ITenantDirectory,
        ttl_seconds: float = 30.0,
        defaults: Optional[Policy] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.tenant_directory = tenant_directory
        self.defaults = defaults or default_policy()
        self.tracer = trace.get_tracer(__name__)
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._tenant_by_slug: Dict[str, CacheEntry[Tenant]] = {}
        self._tenant_by_id: Dict[UUID, CacheEntry[Tenant]] = {}
        self._policy_by_tenant: Dict[UUID, CacheEntry[Policy]] = {}

    def _fresh(self, entry: Optional[CacheEntry[_V]]) -> Optional[_V]:
        if entry is None or self._clock() - entry.timestamp > self._ttl_seconds:
            return None
        return entry.value

    def _remember_tenant(self, tenant: Tenant) -> None:
        entry = CacheEntry(value=tenant, timestamp=self._clock())
        self._tenant_by_slug[tenant.slug] = entry
        self._tenant_by_id[tenant.id] = entry

    @staticmethod
    def _ensure_active(tenant: Optional[Tenant]) -> Tenant:
        if tenant is None:
            raise TenantNotFoundError()
        if not tenant.active:
            raise TenantInactiveError()
        return tenant

    async def resolve_tenant(self, *, slug: str) -> Tenant:
        tenant = self._fresh(self._tenant_by_slug.get(slug))
        if tenant is None:
            tenant = await self.tenant_directory.get_by_slug(slug=slug)
            if tenant is not None:
                self._remember_tenant(tenant)
        return self._ensure_active(tenant)

    async def resolve_tenant_by_id(self, *, tenant_id: UUID) -> Tenant:
        tenant = self._fresh(self._tenant_by_id.get(tenant_id))
        if tenant is None:
            tenant = await self.tenant_directory.get_by_id(tenant_id=tenant_id)
            if tenant is not None:
                self._remember_tenant(tenant)
        return self._ensure_active(tenant)

    async def resolve(self, *, tenant_id: UUID) -> Policy:
        with self.tracer.start_as_current_span('policy_resolver.resolve') as span:
            await self.resolve_tenant_by_id(tenant_id=tenant_id)

            policy = self._fresh(self._policy_by_tenant.get(tenant_id))
            span.set_attribute('cache_hit', policy is not None)
            if policy is not None:
                return policy

            overrides = await self.tenant_directory.get_policy(tenant_id=tenant_id)
            if overrides is None:
                Logger.base.debug(f'No policy row for tenant {tenant_id}, using defaults')
            policy = self.defaults.merged_with(overrides)
            self._policy_by_tenant[tenant_id] = CacheEntry(value=policy, timestamp=self._clock())
            return policy

    def invalidate(self, *, tenant_id: Optional[UUID] = None) -> None:
        if tenant_id is None:
            self._tenant_by_slug.clear()
            self._tenant_by_id.clear()
            self._policy_by_tenant.clear()
            return
        tenant_entry = self._tenant_by_id.pop(tenant_id, None)
        if tenant_entry is not None:
            self._tenant_by_slug.pop(tenant_entry.value.slug, None)
        self._policy_by_tenant.pop(tenant_id, None)
