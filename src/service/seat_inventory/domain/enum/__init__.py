"""Seat Inventory Domain Enums"""

from src.service.seat_inventory.domain.enum.booking_status import (
    ACTIVE_BOOKING_STATUSES,
    RELEASED_BOOKING_STATUSES,
    BookingStatus,
)
from src.service.seat_inventory.domain.enum.seat_category import SeatCategory
from src.service.seat_inventory.domain.enum.seat_status import SeatStatus
from src.service.seat_inventory.domain.enum.user_role import UserRole

__all__ = [
    'ACTIVE_BOOKING_STATUSES',
    'RELEASED_BOOKING_STATUSES',
    'BookingStatus',
    'SeatCategory',
    'SeatStatus',
    'UserRole',
]
