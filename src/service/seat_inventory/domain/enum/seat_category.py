from decimal import Decimal
from enum import StrEnum


class SeatCategory(StrEnum):
    STANDARD = 'standard'
    PREMIUM = 'premium'
    VIP = 'vip'

    @property
    def default_price_multiplier(self) -> Decimal:
        return _DEFAULT_MULTIPLIERS[self]


_DEFAULT_MULTIPLIERS = {
    SeatCategory.STANDARD: Decimal('1.00'),
    SeatCategory.PREMIUM: Decimal('1.50'),
    SeatCategory.VIP: Decimal('2.00'),
}
