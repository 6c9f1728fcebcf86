from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.service.party_booking.domain.entity.tenant_entity import PolicyOverrides, Tenant


class ITenantDirectory(ABC):
    """Read-only access to tenants and their stored scheduling policy."""

    @abstractmethod
    async def get_by_slug(self, *, slug: str) -> Optional[Tenant]:
        pass

    @abstractmethod
    async def get_by_id(self, *, tenant_id: UUID) -> Optional[Tenant]:
        pass

    @abstractmethod
    async def get_policy(self, *, tenant_id: UUID) -> Optional[PolicyOverrides]:
        """
        Get the tenant's stored policy row

        Returns:
            PolicyOverrides (columns may be None) or None when the tenant has no row
        """
        pass
