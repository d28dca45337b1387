from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.app.query.get_seat_map_use_case import GetSeatMapUseCase
from src.service.seat_inventory.app.query.seat_availability_use_case import (
    SeatAvailabilityUseCase,
)
from src.service.seat_inventory.driving_adapter.http_controller.schema.seat_schema import (
    AvailableSeatsResponse,
    SeatAvailabilityResponse,
    SeatMapResponse,
    SeatResponse,
)


router = APIRouter()


@router.get('/venue/{venue_id}/schedule/{schedule_id}/available')
@Logger.io(truncate_content=True)
async def list_available_seats(
    venue_id: int,
    schedule_id: int,
    use_case: SeatAvailabilityUseCase = Depends(SeatAvailabilityUseCase.depends),
) -> AvailableSeatsResponse:
    seats = await use_case.available_seats(venue_id=venue_id, schedule_id=schedule_id)
    return AvailableSeatsResponse(
        venue_id=venue_id,
        show_schedule_id=schedule_id,
        count=len(seats),
        seats=[SeatResponse.from_seat(s) for s in seats],
    )


@router.get('/schedule/{schedule_id}/seat-map')
@Logger.io(truncate_content=True)
async def get_seat_map(
    schedule_id: int,
    use_case: GetSeatMapUseCase = Depends(GetSeatMapUseCase.depends),
) -> SeatMapResponse:
    seat_map = await use_case.get_seat_map(schedule_id=schedule_id)
    return SeatMapResponse.from_seat_map(seat_map)


@router.get('/{seat_id}/schedule/{schedule_id}/availability')
@Logger.io
async def get_seat_availability(
    seat_id: int,
    schedule_id: int,
    use_case: SeatAvailabilityUseCase = Depends(SeatAvailabilityUseCase.depends),
) -> SeatAvailabilityResponse:
    available = await use_case.is_available(seat_id=seat_id, schedule_id=schedule_id)
    return SeatAvailabilityResponse(
        seat_id=seat_id, show_schedule_id=schedule_id, available=available
    )
