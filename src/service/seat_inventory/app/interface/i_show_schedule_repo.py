from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.seat_inventory.domain.entity.show_entity import Show, ShowSchedule


class IShowScheduleRepo(ABC):
    """Shows and their schedules, including the cached seat counters."""

    @abstractmethod
    async def create_show(self, *, show: Show) -> Show:
        pass

    @abstractmethod
    async def get_show(self, *, show_id: int) -> Show | None:
        pass

    @abstractmethod
    async def create_schedule(self, *, schedule: ShowSchedule) -> ShowSchedule:
        pass

    @abstractmethod
    async def get_by_id(self, *, schedule_id: int) -> ShowSchedule | None:
        pass

    @abstractmethod
    async def get_for_update(self, *, schedule_id: int) -> ShowSchedule | None:
        """Load the schedule with a row lock held until the transaction ends."""
        pass

    @abstractmethod
    async def save_seat_counts(self, *, schedule: ShowSchedule) -> None:
        """Persist `total_seats` and `seats_available`; nothing else is written."""
        pass

    @abstractmethod
    async def list_ids(self, *, venue_id: Optional[int] = None) -> List[int]:
        pass
