from datetime import datetime, timezone
from typing import Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seat_inventory_metrics import metrics
from src.service.seat_inventory.app.dto.booking_view import BookingView
from src.service.seat_inventory.domain.access_policy import AccessPolicy
from src.service.seat_inventory.domain.entity.booking_entity import Booking
from src.service.seat_inventory.domain.entity.show_entity import ShowSchedule
from src.service.seat_inventory.domain.entity.user_entity import UserEntity
from src.service.seat_inventory.domain.enum.booking_status import BookingStatus


class ReleaseBookingUseCase:
    """
    Cancel, refund or expire a booking and give its seats back.

    The status change is a conditional update (`WHERE status IN ...`); only
    the transaction whose update applies increments `seats_available`, so
    repeated or concurrent requests release the seats once.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def cancel(self, *, booking_id: UUID, actor: UserEntity) -> BookingView:
        return await self._release(
            booking_id=booking_id, target=BookingStatus.CANCELLED, actor=actor
        )

    @Logger.io
    async def refund(self, *, booking_id: UUID, actor: UserEntity) -> BookingView:
        return await self._release(
            booking_id=booking_id, target=BookingStatus.REFUNDED, actor=actor
        )

    @Logger.io
    async def expire(self, *, booking_id: UUID) -> BookingView:
        """System transition for unpaid bookings; no actor check."""
        return await self._release(booking_id=booking_id, target=BookingStatus.EXPIRED, actor=None)

    async def _release(
        self, *, booking_id: UUID, target: BookingStatus, actor: Optional[UserEntity]
    ) -> BookingView:
        with self.tracer.start_as_current_span(
            f'use_case.{target.value}_booking',
            attributes={'booking.id': str(booking_id)},
        ):
            async with self.uow:
                booking = await self.uow.booking_repo.get_by_id(booking_id=booking_id)
                if not booking:
                    raise NotFoundError('Booking not found')
                if actor is not None:
                    AccessPolicy.ensure_can_manage_booking(actor, booking)

                released: Optional[ShowSchedule] = None
                if booking.status != target:
                    booking.validate_can_release(target)
                    released = await self._apply_release(booking=booking, target=target)

                view = await self.uow.booking_repo.get_view(booking_id=booking_id)
                assert view is not None
                await self.uow.commit()

            metrics.record_booking_release(status=target.value, applied=released is not None)
            if released is not None:
                metrics.record_seats_available(
                    schedule_id=released.id,  # type: ignore[arg-type]
                    seats_available=released.seats_available,
                    started=released.starts_at <= datetime.now(timezone.utc),
                )
                Logger.base.info(
                    f'↩️ [RELEASE] booking={booking.booking_number} -> {target} '
                    f'released {booking.seat_count} seats'
                )
            else:
                Logger.base.info(
                    f'🔁 [RELEASE] booking={booking.booking_number} already {view.status}; no-op'
                )
            return view

    async def _apply_release(
        self, *, booking: Booking, target: BookingStatus
    ) -> Optional[ShowSchedule]:
        # Same lock order as commit: schedule row first
        schedule = await self.uow.show_schedule_repo.get_for_update(
            schedule_id=booking.show_schedule_id
        )
        assert schedule is not None

        applied = await self.uow.booking_repo.transition_status(
            booking_id=booking.id,
            from_statuses=Booking.release_sources(target),
            to_status=target,
            now=datetime.now(timezone.utc),
        )
        if not applied:
            return None

        await self.uow.booking_repo.mark_seats_released(booking_id=booking.id)
        schedule = schedule.release_seats(booking.seat_count)
        await self.uow.show_schedule_repo.save_seat_counts(schedule=schedule)
        return schedule
