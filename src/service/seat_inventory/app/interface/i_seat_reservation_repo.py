from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from src.service.seat_inventory.domain.entity.seat_reservation_entity import SeatReservation


class ISeatReservationRepo(ABC):
    """
    Temporary seat holds.

    `add_all` relies on the (seat, schedule) unique constraint: a concurrent
    hold on the same key makes it raise `sqlalchemy.exc.IntegrityError`.
    """

    @abstractmethod
    async def add_all(self, *, holds: Sequence[SeatReservation]) -> List[SeatReservation]:
        pass

    @abstractmethod
    async def list_active(
        self, *, schedule_id: int, now: datetime, seat_ids: Optional[Sequence[int]] = None
    ) -> List[SeatReservation]:
        pass

    @abstractmethod
    async def list_by_session(self, *, session_id: str, now: datetime) -> List[SeatReservation]:
        """Active holds of a session."""
        pass

    @abstractmethod
    async def list_owner_ids_by_session(self, *, session_id: str) -> List[int]:
        pass

    @abstractmethod
    async def extend(self, *, reservation_ids: Sequence[int], expires_at: datetime) -> None:
        pass

    @abstractmethod
    async def delete_by_session(self, *, session_id: str) -> int:
        pass

    @abstractmethod
    async def delete_for_seats(self, *, schedule_id: int, seat_ids: Sequence[int]) -> int:
        pass

    @abstractmethod
    async def delete_expired(
        self,
        *,
        now: datetime,
        schedule_id: Optional[int] = None,
        seat_ids: Optional[Sequence[int]] = None,
    ) -> int:
        pass
