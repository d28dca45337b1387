from datetime import datetime
from typing import List

import attrs

from src.service.seat_inventory.domain.entity.seat_reservation_entity import SeatReservation


@attrs.define(frozen=True)
class ReservationResult:
    session_id: str
    show_schedule_id: int
    holds: List[SeatReservation]

    @property
    def expires_at(self) -> datetime | None:
        return min((h.expires_at for h in self.holds), default=None)
