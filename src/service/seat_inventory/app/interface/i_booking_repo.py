from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, Optional, Sequence
from uuid import UUID

from src.service.seat_inventory.app.dto.booking_view import BookingView
from src.service.seat_inventory.domain.entity.booking_entity import Booking
from src.service.seat_inventory.domain.enum.booking_status import BookingStatus


class IBookingRepo(ABC):
    """
    Bookings and their seat allocations.

    `create` relies on the active (seat, schedule) unique index: a seat that is
    already committed makes it raise `sqlalchemy.exc.IntegrityError`.
    """

    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Booking | None:
        pass

    @abstractmethod
    async def get_view(self, *, booking_id: UUID) -> BookingView | None:
        pass

    @abstractmethod
    async def transition_status(
        self,
        *,
        booking_id: UUID,
        from_statuses: Iterable[BookingStatus],
        to_status: BookingStatus,
        now: datetime,
    ) -> bool:
        """Conditional status update; True only for the caller whose update applied."""
        pass

    @abstractmethod
    async def mark_seats_released(self, *, booking_id: UUID) -> int:
        pass

    @abstractmethod
    async def booked_seat_ids(
        self, *, schedule_id: int, seat_ids: Optional[Sequence[int]] = None
    ) -> set[int]:
        pass

    @abstractmethod
    async def count_active_seat_bookings(self, *, schedule_id: int) -> int:
        """Seat bookings whose booking still occupies seats, judged by booking status."""
        pass

    @abstractmethod
    async def heal_release_flags(self, *, schedule_id: int) -> int:
        """Mark seat bookings of cancelled/refunded/expired bookings as released."""
        pass
