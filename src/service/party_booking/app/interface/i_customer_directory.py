from abc import ABC, abstractmethod
from uuid import UUID

from src.service.party_booking.domain.entity.customer_entity import Customer, CustomerInfo


class ICustomerDirectory(ABC):
    @abstractmethod
    async def find_or_create(self, *, tenant_id: UUID, info: CustomerInfo) -> Customer:
        """
        Return the tenant's customer with this email, creating it when absent

        Customers without an email are always created fresh.
        """
        pass
