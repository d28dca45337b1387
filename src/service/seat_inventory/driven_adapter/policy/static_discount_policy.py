from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional

from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.app.interface.i_discount_policy import IDiscountPolicy


class StaticDiscountPolicy(IDiscountPolicy):
    """Percent-off promotion codes loaded from settings (`PROMOTION_CODES`)."""

    def __init__(self, *, promotion_codes: Mapping[str, int]) -> None:
        self.promotion_codes = {code.upper(): pct for code, pct in promotion_codes.items()}

    def apply_discount(self, *, code: Optional[str], amount: Decimal) -> Decimal:
        if not code:
            return amount

        percent_off = self.promotion_codes.get(code.strip().upper())
        if percent_off is None:
            Logger.base.info(f'🏷️ [DISCOUNT] Unknown promotion code {code!r}; no discount applied')
            return amount

        percent_off = max(0, min(100, percent_off))
        discounted = amount * (Decimal(100 - percent_off) / Decimal(100))
        return discounted.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
