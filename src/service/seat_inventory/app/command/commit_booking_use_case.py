import time
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import List, Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from sqlalchemy.exc import IntegrityError
from uuid_utils.compat import uuid7

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    BookingWindowClosedError,
    NotFoundError,
    SeatUnavailableError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seat_inventory_metrics import metrics
from src.service.seat_inventory.app.dto.booking_view import BookingView
from src.service.seat_inventory.app.interface.i_discount_policy import IDiscountPolicy
from src.service.seat_inventory.app.seat_claims import (
    check_seat_claims,
    load_schedule_seats,
    normalize_seat_ids,
    seat_unavailable,
)
from src.service.seat_inventory.domain.booking_window_policy import BookingWindowPolicy
from src.service.seat_inventory.domain.entity.booking_entity import Booking, SeatBooking
from src.service.seat_inventory.domain.entity.seat_reservation_entity import SeatReservation


class CommitBookingUseCase:
    """
    Turn seats into a booking in one transaction.

    Flow:
    1. Lock the schedule row (`FOR UPDATE`), check the booking window
    2. Purge stale holds; seats held by this user or session are fine
    3. Claim unheld seats with holds so concurrent reservers lose on the
       unique constraint
    4. Insert Booking + SeatBookings priced `base_price * price_multiplier`,
       then apply the discount
    5. Decrement `seats_available` through `ShowSchedule.commit_seats`
    6. Drop the session's holds and the claim holds
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        booking_window_policy: BookingWindowPolicy,
        discount_policy: IDiscountPolicy,
    ) -> None:
        self.uow = uow
        self.booking_window_policy = booking_window_policy
        self.discount_policy = discount_policy
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        booking_window_policy: BookingWindowPolicy = Depends(
            Provide[Container.booking_window_policy]
        ),
        discount_policy: IDiscountPolicy = Depends(Provide[Container.discount_policy]),
    ) -> Self:
        return cls(
            uow=uow,
            booking_window_policy=booking_window_policy,
            discount_policy=discount_policy,
        )

    @Logger.io
    async def commit(
        self,
        *,
        user_id: int,
        schedule_id: int,
        seat_ids: List[int],
        session_id: Optional[str] = None,
        promotion_code: Optional[str] = None,
        payment_recorded: bool = False,
    ) -> BookingView:
        seat_ids = normalize_seat_ids(seat_ids, limit=settings.MAX_SEATS_PER_RESERVATION)
        booking_id = uuid7()

        start = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.commit_booking',
            attributes={
                'booking.id': str(booking_id),
                'schedule.id': schedule_id,
                'user.id': user_id,
                'seat.quantity': len(seat_ids),
            },
        ):
            try:
                view = await self._commit(
                    booking_id=booking_id,
                    user_id=user_id,
                    schedule_id=schedule_id,
                    seat_ids=seat_ids,
                    session_id=session_id,
                    promotion_code=promotion_code,
                    payment_recorded=payment_recorded,
                )
            except SeatUnavailableError:
                metrics.record_booking_commit(
                    result='conflict', duration=time.perf_counter() - start
                )
                raise
            except BookingWindowClosedError:
                metrics.record_booking_commit(
                    result='window_closed', duration=time.perf_counter() - start
                )
                raise
            except Exception:
                metrics.record_booking_commit(result='error', duration=time.perf_counter() - start)
                raise

            metrics.record_booking_commit(result='success', duration=time.perf_counter() - start)
            Logger.base.info(
                f'🎫 [COMMIT] booking={view.booking_number} schedule={schedule_id} '
                f'seats={view.seat_count} total={view.total_amount} status={view.status}'
            )
            return view

    async def _commit(
        self,
        *,
        booking_id: UUID,
        user_id: int,
        schedule_id: int,
        seat_ids: List[int],
        session_id: Optional[str],
        promotion_code: Optional[str],
        payment_recorded: bool,
    ) -> BookingView:
        async with self.uow:
            now = datetime.now(timezone.utc)
            schedule = await self.uow.show_schedule_repo.get_for_update(schedule_id=schedule_id)
            if not schedule:
                raise NotFoundError('Show schedule not found')
            show = await self.uow.show_schedule_repo.get_show(show_id=schedule.show_id)
            if not show:
                raise NotFoundError('Show not found')

            self.booking_window_policy.ensure_open(
                show_type=show.show_type, starts_at=schedule.starts_at, now=now
            )

            seats = await load_schedule_seats(self.uow, schedule=schedule, seat_ids=seat_ids)
            await self.uow.seat_reservation_repo.delete_expired(
                now=now, schedule_id=schedule_id, seat_ids=seat_ids
            )

            check = await check_seat_claims(
                self.uow,
                schedule=schedule,
                seats=seats,
                session_id=session_id,
                user_id=user_id,
                now=now,
            )
            check.raise_if_conflicting()

            own_seat_ids = {h.seat_id for h in check.own_holds}
            claim_session_id = session_id or f'commit-{booking_id.hex}'
            claims = [
                SeatReservation.hold(
                    seat_id=seat.id,  # type: ignore[arg-type]
                    show_schedule_id=schedule_id,
                    user_id=user_id,
                    session_id=claim_session_id,
                    ttl=timedelta(minutes=settings.RESERVATION_TTL_MINUTES),
                    now=now,
                )
                for seat in seats
                if seat.id not in own_seat_ids
            ]

            seat_bookings = [
                SeatBooking(
                    seat_id=seat.id,  # type: ignore[arg-type]
                    show_schedule_id=schedule_id,
                    price=schedule.price_for(seat.price_multiplier),
                )
                for seat in seats
            ]
            original_amount = sum((sb.price for sb in seat_bookings), Decimal('0.00'))
            booking = Booking.create(
                id=booking_id,
                user_id=user_id,
                show_schedule_id=schedule_id,
                seat_bookings=seat_bookings,
                total_amount=self.discount_policy.apply_discount(
                    code=promotion_code, amount=original_amount
                ),
                promotion_code=promotion_code,
                payment_recorded=payment_recorded,
            )

            try:
                if claims:
                    await self.uow.seat_reservation_repo.add_all(holds=claims)
                await self.uow.booking_repo.create(booking=booking)
            except IntegrityError:
                # A concurrent hold or commit took one of the seats first
                await self.uow.rollback()
                retry = await check_seat_claims(
                    self.uow,
                    schedule=schedule,
                    seats=seats,
                    session_id=session_id,
                    user_id=user_id,
                    now=datetime.now(timezone.utc),
                )
                raise seat_unavailable(retry.conflicting_seats or seats)

            schedule = schedule.commit_seats(booking.seat_count)
            await self.uow.show_schedule_repo.save_seat_counts(schedule=schedule)

            if session_id:
                await self.uow.seat_reservation_repo.delete_by_session(session_id=session_id)
            await self.uow.seat_reservation_repo.delete_for_seats(
                schedule_id=schedule_id, seat_ids=seat_ids
            )

            view = await self.uow.booking_repo.get_view(booking_id=booking.id)
            assert view is not None
            await self.uow.commit()

        metrics.record_seats_available(
            schedule_id=schedule_id,
            seats_available=schedule.seats_available,
            started=schedule.starts_at <= now,
        )
        return view
