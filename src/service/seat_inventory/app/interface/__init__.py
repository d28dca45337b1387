"""Application layer interfaces (Ports)"""

from src.service.seat_inventory.app.interface.i_booking_repo import IBookingRepo
from src.service.seat_inventory.app.interface.i_discount_policy import IDiscountPolicy
from src.service.seat_inventory.app.interface.i_seat_reservation_repo import (
    ISeatReservationRepo,
)
from src.service.seat_inventory.app.interface.i_show_schedule_repo import IShowScheduleRepo
from src.service.seat_inventory.app.interface.i_venue_repo import IVenueRepo

__all__ = [
    'IBookingRepo',
    'IDiscountPolicy',
    'ISeatReservationRepo',
    'IShowScheduleRepo',
    'IVenueRepo',
]
