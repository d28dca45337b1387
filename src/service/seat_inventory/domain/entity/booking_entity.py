from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.domain.enum.booking_status import (
    RELEASED_BOOKING_STATUSES,
    BookingStatus,
)


# Statuses a booking may be released from, per target status
_RELEASE_SOURCES: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.CANCELLED: frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED}),
    BookingStatus.REFUNDED: frozenset({BookingStatus.CONFIRMED}),
    BookingStatus.EXPIRED: frozenset({BookingStatus.PENDING}),
}


@attrs.define(frozen=True)
class SeatBooking:
    seat_id: int
    show_schedule_id: int
    price: Decimal
    booking_id: Optional[UUID] = None
    released: bool = False
    id: Optional[int] = None


@attrs.define
class Booking:
    id: UUID
    booking_number: str
    user_id: int
    show_schedule_id: int
    original_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    status: BookingStatus = BookingStatus.PENDING
    promotion_code: Optional[str] = None
    seat_bookings: List[SeatBooking] = attrs.field(factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @staticmethod
    def booking_number_for(booking_id: UUID) -> str:
        # uuid7 low bits are random; 12 hex chars keep numbers short and unique enough
        return f'BK{booking_id.hex[-12:].upper()}'

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: UUID,
        user_id: int,
        show_schedule_id: int,
        seat_bookings: List[SeatBooking],
        total_amount: Decimal,
        promotion_code: Optional[str] = None,
        payment_recorded: bool = False,
    ) -> 'Booking':
        if not seat_bookings:
            raise DomainError('A booking needs at least one seat')
        seat_ids = [sb.seat_id for sb in seat_bookings]
        if len(set(seat_ids)) != len(seat_ids):
            raise DomainError('A seat can only appear once in a booking')

        original_amount = sum((sb.price for sb in seat_bookings), Decimal('0.00'))
        total_amount = max(Decimal('0.00'), min(total_amount, original_amount))
        now = datetime.now(timezone.utc)
        return cls(
            id=id,
            booking_number=cls.booking_number_for(id),
            user_id=user_id,
            show_schedule_id=show_schedule_id,
            original_amount=original_amount,
            discount_amount=original_amount - total_amount,
            total_amount=total_amount,
            promotion_code=promotion_code,
            status=BookingStatus.CONFIRMED if payment_recorded else BookingStatus.PENDING,
            seat_bookings=[attrs.evolve(sb, booking_id=id) for sb in seat_bookings],
            created_at=now,
            updated_at=now,
        )

    @property
    def seat_count(self) -> int:
        return len(self.seat_bookings)

    @property
    def is_released(self) -> bool:
        return self.status in RELEASED_BOOKING_STATUSES

    @staticmethod
    def release_sources(target: BookingStatus) -> frozenset[BookingStatus]:
        if target not in _RELEASE_SOURCES:
            raise DomainError(f'{target} does not release seats')
        return _RELEASE_SOURCES[target]

    @Logger.io
    def validate_can_release(self, target: BookingStatus) -> None:
        if self.status not in self.release_sources(target):
            raise DomainError(f'Cannot move a {self.status} booking to {target}')
