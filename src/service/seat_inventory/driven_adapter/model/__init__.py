"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.seat_inventory.driven_adapter.model.booking_model import (
    BookingModel,
    SeatBookingModel,
)
from src.service.seat_inventory.driven_adapter.model.seat_reservation_model import (
    SeatReservationModel,
)
from src.service.seat_inventory.driven_adapter.model.show_model import (
    ShowModel,
    ShowScheduleModel,
)
from src.service.seat_inventory.driven_adapter.model.venue_model import SeatModel, VenueModel

__all__ = [
    'BookingModel',
    'SeatBookingModel',
    'SeatModel',
    'SeatReservationModel',
    'ShowModel',
    'ShowScheduleModel',
    'VenueModel',
]
