from decimal import ROUND_HALF_UP, Decimal

import attrs


CENT = Decimal('0.01')


@attrs.frozen
class PriceQuote:
    total_price: Decimal
    deposit_due: Decimal

    @classmethod
    def free(cls) -> 'PriceQuote':
        return cls(total_price=Decimal('0.00'), deposit_due=Decimal('0.00'))

    @classmethod
    def with_deposit(cls, total_price: Decimal, deposit_percent: int) -> 'PriceQuote':
        total = total_price.quantize(CENT, rounding=ROUND_HALF_UP)
        deposit = (total * Decimal(deposit_percent) / Decimal(100)).quantize(
            CENT, rounding=ROUND_HALF_UP
        )
        return cls(total_price=total, deposit_due=deposit)
