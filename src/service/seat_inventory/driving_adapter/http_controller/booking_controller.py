from uuid import UUID

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.app.command.commit_booking_use_case import CommitBookingUseCase
from src.service.seat_inventory.app.command.release_booking_use_case import (
    ReleaseBookingUseCase,
)
from src.service.seat_inventory.app.query.get_booking_use_case import GetBookingUseCase
from src.service.seat_inventory.domain.entity.user_entity import UserEntity
from src.service.seat_inventory.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
)
from src.service.seat_inventory.driving_adapter.http_controller.schema.booking_schema import (
    BookingCreateRequest,
    BookingResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CommitBookingUseCase = Depends(CommitBookingUseCase.depends),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('schedule_id', request.show_schedule_id)
        span.set_attribute('user_id', current_user.id)

        view = await use_case.commit(
            user_id=current_user.id,
            schedule_id=request.show_schedule_id,
            seat_ids=request.seat_ids,
            session_id=request.session_id,
            promotion_code=request.promotion_code,
            payment_recorded=request.payment_recorded,
        )
        span.set_attribute('booking.id', str(view.id))
        return BookingResponse.from_view(view)


@router.get('/{booking_id}')
@Logger.io
async def get_booking(
    booking_id: UUID,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingResponse:
    view = await use_case.get_booking(booking_id=booking_id, actor=current_user)
    return BookingResponse.from_view(view)


@router.post('/{booking_id}/cancel')
@Logger.io
async def cancel_booking(
    booking_id: UUID,
    current_user: UserEntity = Depends(get_current_user),
    use_case: ReleaseBookingUseCase = Depends(ReleaseBookingUseCase.depends),
) -> BookingResponse:
    view = await use_case.cancel(booking_id=booking_id, actor=current_user)
    return BookingResponse.from_view(view)


@router.post('/{booking_id}/refund')
@Logger.io
async def refund_booking(
    booking_id: UUID,
    current_user: UserEntity = Depends(get_current_user),
    use_case: ReleaseBookingUseCase = Depends(ReleaseBookingUseCase.depends),
) -> BookingResponse:
    view = await use_case.refund(booking_id=booking_id, actor=current_user)
    return BookingResponse.from_view(view)
