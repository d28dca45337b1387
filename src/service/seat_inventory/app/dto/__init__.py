"""Application layer DTOs"""

from src.service.seat_inventory.app.dto.booking_view import BookingSeatView, BookingView
from src.service.seat_inventory.app.dto.reservation_result import ReservationResult
from src.service.seat_inventory.app.dto.seat_map import (
    SeatMap,
    SeatMapMetadata,
    SeatMapRow,
    SeatMapSeat,
)
from src.service.seat_inventory.app.dto.venue_summary import VenueSummary

__all__ = [
    'BookingSeatView',
    'BookingView',
    'ReservationResult',
    'SeatMap',
    'SeatMapMetadata',
    'SeatMapRow',
    'SeatMapSeat',
    'VenueSummary',
]
