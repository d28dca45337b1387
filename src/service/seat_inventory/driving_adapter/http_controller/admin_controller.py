from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.app.command.create_show_schedule_use_case import (
    CreateShowScheduleUseCase,
)
from src.service.seat_inventory.app.command.create_show_use_case import CreateShowUseCase
from src.service.seat_inventory.app.command.create_venue_use_case import CreateVenueUseCase
from src.service.seat_inventory.app.command.sweep_expired_reservations_use_case import (
    SweepExpiredReservationsUseCase,
)
from src.service.seat_inventory.app.command.synchronize_seat_counts_use_case import (
    SynchronizeSeatCountsUseCase,
)
from src.service.seat_inventory.app.command.update_seat_price_multiplier_use_case import (
    UpdateSeatPriceMultiplierUseCase,
)
from src.service.seat_inventory.domain.entity.user_entity import UserEntity
from src.service.seat_inventory.driving_adapter.http_controller.auth.role_auth import (
    require_admin,
    require_organizer,
)
from src.service.seat_inventory.driving_adapter.http_controller.schema.admin_schema import (
    GenerateSeatsResponse,
    PriceMultiplierUpdateRequest,
    ScheduleCreateRequest,
    ScheduleResponse,
    SeatCountSyncReportResponse,
    SeatCountSyncResponse,
    ShowCreateRequest,
    ShowResponse,
    VenueCreateRequest,
    VenueResponse,
)
from src.service.seat_inventory.driving_adapter.http_controller.schema.seat_reservation_schema import (
    SweepResponse,
)
from src.service.seat_inventory.driving_adapter.http_controller.schema.seat_schema import (
    SeatResponse,
)


router = APIRouter()


# ========== Seat consistency ==========


@router.post('/seat-consistency/schedule/{schedule_id}')
@Logger.io
async def synchronize_schedule(
    schedule_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: SynchronizeSeatCountsUseCase = Depends(SynchronizeSeatCountsUseCase.depends),
) -> SeatCountSyncReportResponse:
    report = await use_case.synchronize_schedule(schedule_id=schedule_id)
    return SeatCountSyncReportResponse.from_report(report)


@router.post('/seat-consistency/venue/{venue_id}')
@Logger.io
async def synchronize_venue(
    venue_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: SynchronizeSeatCountsUseCase = Depends(SynchronizeSeatCountsUseCase.depends),
) -> SeatCountSyncResponse:
    reports = await use_case.synchronize_venue(venue_id=venue_id)
    return SeatCountSyncResponse.from_reports(reports)


@router.post('/seat-consistency/all')
@Logger.io
async def synchronize_all(
    current_user: UserEntity = Depends(require_admin),
    use_case: SynchronizeSeatCountsUseCase = Depends(SynchronizeSeatCountsUseCase.depends),
) -> SeatCountSyncResponse:
    reports = await use_case.synchronize_all()
    return SeatCountSyncResponse.from_reports(reports)


@router.post('/seat-reservation/sweep')
@Logger.io
async def sweep_expired_reservations(
    current_user: UserEntity = Depends(require_admin),
    use_case: SweepExpiredReservationsUseCase = Depends(SweepExpiredReservationsUseCase.depends),
) -> SweepResponse:
    deleted = await use_case.sweep_expired()
    return SweepResponse(deleted=deleted)


# ========== Catalog ==========


@router.post('/venue', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_venue(
    request: VenueCreateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: CreateVenueUseCase = Depends(CreateVenueUseCase.depends),
) -> VenueResponse:
    venue = await use_case.create_venue(
        name=request.name, capacity=request.capacity, generate_seats=request.generate_seats
    )
    return VenueResponse(
        id=venue.id, name=venue.name, capacity=venue.capacity, seat_count=venue.seat_count
    )


@router.post('/venue/{venue_id}/seats', status_code=status.HTTP_201_CREATED)
@Logger.io
async def generate_venue_seats(
    venue_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: CreateVenueUseCase = Depends(CreateVenueUseCase.depends),
) -> GenerateSeatsResponse:
    seats_created = await use_case.generate_seats(venue_id=venue_id)
    return GenerateSeatsResponse(venue_id=venue_id, seats_created=seats_created)


@router.post('/show', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_show(
    request: ShowCreateRequest,
    current_user: UserEntity = Depends(require_organizer),
    use_case: CreateShowUseCase = Depends(CreateShowUseCase.depends),
) -> ShowResponse:
    show = await use_case.create_show(
        title=request.title, show_type=request.show_type, actor=current_user
    )
    return ShowResponse.from_show(show)


@router.post('/schedule', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_schedule(
    request: ScheduleCreateRequest,
    current_user: UserEntity = Depends(require_organizer),
    use_case: CreateShowScheduleUseCase = Depends(CreateShowScheduleUseCase.depends),
) -> ScheduleResponse:
    schedule = await use_case.create_schedule(
        show_id=request.show_id,
        venue_id=request.venue_id,
        starts_at=request.starts_at,
        base_price=request.base_price,
        total_seats=request.total_seats,
        actor=current_user,
    )
    return ScheduleResponse.from_schedule(schedule)


@router.patch('/seat/{seat_id}/price-multiplier')
@Logger.io
async def update_seat_price_multiplier(
    seat_id: int,
    request: PriceMultiplierUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: UpdateSeatPriceMultiplierUseCase = Depends(UpdateSeatPriceMultiplierUseCase.depends),
) -> SeatResponse:
    seat = await use_case.update(seat_id=seat_id, price_multiplier=request.price_multiplier)
    return SeatResponse.from_seat(seat)
