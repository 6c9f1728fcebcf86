from typing import AsyncContextManager, Callable, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.party_booking.app.interface.i_tenant_directory import ITenantDirectory
from src.service.party_booking.domain.entity.tenant_entity import PolicyOverrides, Tenant
from src.service.party_booking.driven_adapter.model.tenant_model import (
    TenantModel,
    TenantPolicyModel,
)


class TenantDirectoryImpl(ITenantDirectory):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get_by_slug(self, *, slug: str) -> Optional[Tenant]:
        async with self.session_factory() as session:
            result = await session.execute(select(TenantModel).where(TenantModel.slug == slug))
            tenant_model = result.scalar_one_or_none()
            return self._model_to_entity(tenant_model) if tenant_model else None

    @Logger.io
    async def get_by_id(self, *, tenant_id: UUID) -> Optional[Tenant]:
        async with self.session_factory() as session:
            tenant_model = await session.get(TenantModel, tenant_id)
            return self._model_to_entity(tenant_model) if tenant_model else None

    @Logger.io
    async def get_policy(self, *, tenant_id: UUID) -> Optional[PolicyOverrides]:
        async with self.session_factory() as session:
            policy_model = await session.get(TenantPolicyModel, tenant_id)
            if not policy_model:
                return None

            return PolicyOverrides(
                hold_minutes=policy_model.hold_minutes,
                buffer_minutes=policy_model.buffer_minutes,
                default_duration_minutes=policy_model.default_duration_minutes,
                deposit_percent=policy_model.deposit_percent,
            )

    @staticmethod
    def _model_to_entity(tenant_model: TenantModel) -> Tenant:
        return Tenant(
            id=tenant_model.id,
            slug=tenant_model.slug,
            name=tenant_model.name,
            timezone=tenant_model.timezone,
            currency=tenant_model.currency,
            active=tenant_model.active,
        )
