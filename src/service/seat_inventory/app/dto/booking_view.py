"""Flat read model of a booking, built from one joined query."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

import attrs


@attrs.define(frozen=True)
class BookingSeatView:
    seat_id: int
    row_label: str
    seat_number: int
    category: str
    price: Decimal
    released: bool


@attrs.define(frozen=True)
class BookingView:
    id: UUID
    booking_number: str
    user_id: int
    status: str
    show_schedule_id: int
    show_id: int
    show_title: str
    show_type: str
    venue_id: int
    venue_name: str
    starts_at: datetime
    original_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    promotion_code: Optional[str]
    created_at: datetime
    updated_at: datetime
    seats: List[BookingSeatView] = attrs.field(factory=list)

    @property
    def seat_count(self) -> int:
        return len(self.seats)
