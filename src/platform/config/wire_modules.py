"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.seat_inventory.app.command import (
    commit_booking_use_case,
    create_show_schedule_use_case,
    create_show_use_case,
    create_venue_use_case,
    release_booking_use_case,
    release_reservation_use_case,
    reserve_seats_use_case,
    sweep_expired_reservations_use_case,
    synchronize_seat_counts_use_case,
    update_seat_price_multiplier_use_case,
)
from src.service.seat_inventory.app.query import (
    get_booking_use_case,
    get_seat_map_use_case,
    list_session_reservations_use_case,
    seat_availability_use_case,
)
from src.service.seat_inventory.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    reserve_seats_use_case,
    release_reservation_use_case,
    sweep_expired_reservations_use_case,
    commit_booking_use_case,
    release_booking_use_case,
    synchronize_seat_counts_use_case,
    create_venue_use_case,
    create_show_use_case,
    create_show_schedule_use_case,
    update_seat_price_multiplier_use_case,
    seat_availability_use_case,
    get_seat_map_use_case,
    get_booking_use_case,
    list_session_reservations_use_case,
    role_auth,
]
