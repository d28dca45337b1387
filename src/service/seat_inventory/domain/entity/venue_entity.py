from decimal import Decimal
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.seat_inventory.domain.enum.seat_category import SeatCategory


@attrs.define
class Venue:
    name: str
    capacity: int
    id: Optional[int] = None

    @classmethod
    def create(cls, *, name: str, capacity: int) -> 'Venue':
        if not name.strip():
            raise DomainError('Venue name is required')
        if capacity <= 0:
            raise DomainError('Venue capacity must be positive')
        return cls(name=name.strip(), capacity=capacity)


@attrs.define(frozen=True)
class Seat:
    """A physical seat. Identity and position never change after creation."""

    venue_id: int
    row_label: str
    seat_number: int
    category: SeatCategory = SeatCategory.STANDARD
    price_multiplier: Decimal = Decimal('1.00')
    id: Optional[int] = None

    @property
    def label(self) -> str:
        return f'{self.row_label}{self.seat_number}'

    def with_price_multiplier(self, multiplier: Decimal) -> 'Seat':
        if multiplier <= 0:
            raise DomainError('Price multiplier must be positive')
        return attrs.evolve(self, price_multiplier=multiplier.quantize(Decimal('0.01')))
