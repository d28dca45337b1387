from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional


class IDiscountPolicy(ABC):
    @abstractmethod
    def apply_discount(self, *, code: Optional[str], amount: Decimal) -> Decimal:
        """Return the amount to charge; unknown or empty codes leave it unchanged."""
        pass
