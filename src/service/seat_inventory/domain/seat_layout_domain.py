"""
Default seat layout for venues created without an explicit seating plan.

The layout is roughly square: `min(20, ceil(sqrt(capacity)))` seats per row.
Rows are lettered A..Z; if more than 26 rows would be needed, rows get wider
instead. The two front rows are VIP, the next three PREMIUM, the rest STANDARD.
"""

import math
from typing import List

from src.platform.exception.exceptions import DomainError
from src.service.seat_inventory.domain.entity.venue_entity import Seat
from src.service.seat_inventory.domain.enum.seat_category import SeatCategory
from src.service.seat_inventory.domain.value_object.row_label import row_label_for_index


MAX_SEATS_PER_ROW = 20
MAX_ROWS = 26
VIP_ROWS = 2
PREMIUM_ROWS = 3


def category_for_row(row_index: int) -> SeatCategory:
    if row_index < VIP_ROWS:
        return SeatCategory.VIP
    if row_index < VIP_ROWS + PREMIUM_ROWS:
        return SeatCategory.PREMIUM
    return SeatCategory.STANDARD


def plan_seat_layout(*, venue_id: int, capacity: int) -> List[Seat]:
    if capacity <= 0:
        raise DomainError('Venue capacity must be greater than 0')

    seats_per_row = min(MAX_SEATS_PER_ROW, math.ceil(math.sqrt(capacity)))
    rows_needed = math.ceil(capacity / seats_per_row)
    if rows_needed > MAX_ROWS:
        seats_per_row = math.ceil(capacity / MAX_ROWS)
        rows_needed = MAX_ROWS

    seats: List[Seat] = []
    for row_index in range(rows_needed):
        category = category_for_row(row_index)
        for seat_number in range(1, seats_per_row + 1):
            if len(seats) == capacity:
                return seats
            seats.append(
                Seat(
                    venue_id=venue_id,
                    row_label=row_label_for_index(row_index),
                    seat_number=seat_number,
                    category=category,
                    price_multiplier=category.default_price_multiplier,
                )
            )
    return seats


def resolve_schedule_total_seats(*, requested: int | None, physical_seats: int) -> int:
    """
    Sellable seats for a new schedule.

    Defaults to, and is capped at, the number of physical seats.
    """
    if physical_seats <= 0:
        raise DomainError('Venue has no seats configured. Please configure seats first.')
    if requested is None or requested > physical_seats:
        return physical_seats
    if requested <= 0:
        raise DomainError('Requested seats must be greater than 0')
    return requested
