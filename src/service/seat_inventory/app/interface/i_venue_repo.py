from abc import ABC, abstractmethod
from typing import List, Sequence

from src.service.seat_inventory.domain.entity.venue_entity import Seat, Venue


class IVenueRepo(ABC):
    """Venues and their physical seats."""

    @abstractmethod
    async def create(self, *, venue: Venue) -> Venue:
        pass

    @abstractmethod
    async def get_by_id(self, *, venue_id: int) -> Venue | None:
        pass

    @abstractmethod
    async def add_seats(self, *, seats: Sequence[Seat]) -> int:
        pass

    @abstractmethod
    async def count_seats(self, *, venue_id: int) -> int:
        pass

    @abstractmethod
    async def list_seats(self, *, venue_id: int) -> List[Seat]:
        """All seats of a venue, front row first."""
        pass

    @abstractmethod
    async def get_seats_by_ids(self, *, seat_ids: Sequence[int]) -> List[Seat]:
        pass

    @abstractmethod
    async def get_seat(self, *, seat_id: int) -> Seat | None:
        pass

    @abstractmethod
    async def update_price_multiplier(self, *, seat: Seat) -> Seat:
        pass
