"""
Seats kept off sale when a schedule sells fewer seats than the venue has.

When `total_seats` is below the physical seat count, the surplus is withheld:
80% from STANDARD, 10% from VIP, the remainder from PREMIUM, back rows and
high seat numbers first. A category that runs short is topped up from the
remaining back seats, so exactly `surplus` seats are withheld.

The result depends only on the seat list and `total_seats`, so every
transaction computes the same withheld set and the sellable set has exactly
`total_seats` members.
"""

import math
from typing import Iterable, List

from src.service.seat_inventory.domain.entity.venue_entity import Seat
from src.service.seat_inventory.domain.enum.seat_category import SeatCategory
from src.service.seat_inventory.domain.value_object.row_label import row_sort_key


def _back_to_front(seats: Iterable[Seat]) -> List[Seat]:
    return sorted(seats, key=lambda s: (row_sort_key(s.row_label), s.seat_number), reverse=True)


def withheld_seat_ids(seats: List[Seat], total_seats: int) -> set[int]:
    surplus = len(seats) - total_seats
    if surplus <= 0:
        return set()

    standard_quota = math.ceil(surplus * 0.8)
    vip_quota = math.ceil(surplus * 0.1)
    premium_quota = max(0, surplus - standard_quota - vip_quota)

    withheld: set[int] = set()
    for category, quota in (
        (SeatCategory.STANDARD, standard_quota),
        (SeatCategory.VIP, vip_quota),
        (SeatCategory.PREMIUM, premium_quota),
    ):
        candidates = _back_to_front(s for s in seats if s.category == category)
        for seat in candidates[: min(quota, surplus - len(withheld))]:
            withheld.add(seat.id)  # type: ignore[arg-type]

    if len(withheld) < surplus:
        for seat in _back_to_front(seats):
            if len(withheld) == surplus:
                break
            if seat.id not in withheld:
                withheld.add(seat.id)  # type: ignore[arg-type]

    return withheld
