from decimal import Decimal
from typing import List

import attrs

from src.service.seat_inventory.domain.enum.seat_status import SeatStatus


@attrs.define(frozen=True)
class SeatMapSeat:
    seat_id: int
    row_label: str
    seat_number: int
    category: str
    price: Decimal
    status: SeatStatus


@attrs.define(frozen=True)
class SeatMapRow:
    row_label: str
    seats: List[SeatMapSeat]


@attrs.define(frozen=True)
class SeatMapMetadata:
    total_rows: int
    max_seats_per_row: int
    total_seats: int
    seats_available: int
    available_count: int
    reserved_count: int
    sold_count: int
    withheld_count: int

    @property
    def has_capacity_limitation(self) -> bool:
        return self.withheld_count > 0


@attrs.define(frozen=True)
class SeatMap:
    show_schedule_id: int
    venue_id: int
    rows: List[SeatMapRow]
    metadata: SeatMapMetadata
