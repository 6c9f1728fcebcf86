from typing import Optional
from uuid import UUID

import attrs


def _normalize_email(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip().lower() or None


@attrs.frozen
class CustomerInfo:
    name: str
    email: Optional[str] = attrs.field(default=None, converter=_normalize_email)
    phone: Optional[str] = None


@attrs.define
class Customer:
    id: UUID
    tenant_id: UUID
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None

    @classmethod
    def create(cls, *, id: UUID, tenant_id: UUID, info: CustomerInfo) -> 'Customer':
        return cls(id=id, tenant_id=tenant_id, name=info.name, email=info.email, phone=info.phone)
