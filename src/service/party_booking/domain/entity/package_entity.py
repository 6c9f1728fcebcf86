from decimal import Decimal
from uuid import UUID

import attrs

from src.service.party_booking.domain.value_object.price_quote import PriceQuote


@attrs.define
class Package:
    id: UUID
    tenant_id: UUID
    name: str
    duration_minutes: int
    base_price: Decimal = Decimal('0')
    base_party_size: int = 0
    extra_guest_price: Decimal = Decimal('0')
    active: bool = True

    def quote(self, *, party_size: int | None, deposit_percent: int) -> PriceQuote:
        """Base price covers `base_party_size` guests; each extra guest adds `extra_guest_price`."""
        extra_guests = max(0, (party_size or 0) - self.base_party_size)
        total = self.base_price + extra_guests * self.extra_guest_price
        return PriceQuote.with_deposit(total, deposit_percent)
