from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.app.command.release_reservation_use_case import (
    ReleaseReservationUseCase,
)
from src.service.seat_inventory.app.command.reserve_seats_use_case import ReserveSeatsUseCase
from src.service.seat_inventory.app.query.list_session_reservations_use_case import (
    ListSessionReservationsUseCase,
)
from src.service.seat_inventory.domain.entity.user_entity import UserEntity
from src.service.seat_inventory.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
)
from src.service.seat_inventory.driving_adapter.http_controller.schema.seat_reservation_schema import (
    ReleaseReservationResponse,
    ReservationResponse,
    ReserveSeatsRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('/schedule/{schedule_id}', status_code=status.HTTP_201_CREATED)
@Logger.io
async def reserve_seats(
    schedule_id: int,
    request: ReserveSeatsRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: ReserveSeatsUseCase = Depends(ReserveSeatsUseCase.depends),
) -> ReservationResponse:
    with tracer.start_as_current_span('controller.reserve_seats') as span:
        span.set_attribute('schedule_id', schedule_id)
        span.set_attribute('user_id', current_user.id)

        result = await use_case.reserve(
            schedule_id=schedule_id,
            seat_ids=request.seat_ids,
            user_id=current_user.id,
            session_id=request.session_id,
            ttl_minutes=request.ttl_minutes,
        )
        return ReservationResponse.from_result(result)


@router.get('/session/{session_id}')
@Logger.io
async def get_session_reservations(
    session_id: str,
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListSessionReservationsUseCase = Depends(ListSessionReservationsUseCase.depends),
) -> ReservationResponse:
    result = await use_case.list_session_holds(session_id=session_id, actor=current_user)
    return ReservationResponse.from_result(result)


@router.delete('/session/{session_id}')
@Logger.io
async def release_session_reservations(
    session_id: str,
    current_user: UserEntity = Depends(get_current_user),
    use_case: ReleaseReservationUseCase = Depends(ReleaseReservationUseCase.depends),
) -> ReleaseReservationResponse:
    released = await use_case.release(session_id=session_id, actor=current_user)
    return ReleaseReservationResponse(session_id=session_id, released=released)
