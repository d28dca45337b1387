import time
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from sqlalchemy.exc import IntegrityError
from uuid_utils.compat import uuid7

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError, SeatUnavailableError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seat_inventory_metrics import metrics
from src.service.seat_inventory.app.dto.reservation_result import ReservationResult
from src.service.seat_inventory.app.seat_claims import (
    check_seat_claims,
    load_schedule_seats,
    normalize_seat_ids,
    seat_unavailable,
)
from src.service.seat_inventory.domain.entity.seat_reservation_entity import SeatReservation


class ReserveSeatsUseCase:
    """
    Place time-boxed holds on a set of seats, all or nothing.

    Flow:
    1. Purge stale holds on the requested (seat, schedule) keys
    2. Reject seats held by another session, booked, or withheld
    3. Refresh holds this session already owns, insert the rest
    4. Re-check bookings so a hold never coexists with a committed seat

    The insert is guarded by the (seat, schedule) unique constraint; losing
    that race rolls back every hold of this request.
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
    async def reserve(
        self,
        *,
        schedule_id: int,
        seat_ids: List[int],
        user_id: int,
        session_id: Optional[str] = None,
        ttl_minutes: Optional[int] = None,
    ) -> ReservationResult:
        seat_ids = normalize_seat_ids(seat_ids, limit=settings.MAX_SEATS_PER_RESERVATION)
        session_id = session_id or str(uuid7())
        ttl = timedelta(minutes=ttl_minutes or settings.RESERVATION_TTL_MINUTES)

        start = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.reserve_seats',
            attributes={
                'schedule.id': schedule_id,
                'user.id': user_id,
                'session.id': session_id,
                'seat.quantity': len(seat_ids),
            },
        ):
            try:
                result = await self._reserve(
                    schedule_id=schedule_id,
                    seat_ids=seat_ids,
                    user_id=user_id,
                    session_id=session_id,
                    ttl=ttl,
                )
            except SeatUnavailableError as e:
                metrics.record_seat_reservation(
                    result='conflict', seat_count=0, duration=time.perf_counter() - start
                )
                Logger.base.info(
                    f'🚫 [RESERVE] schedule={schedule_id} session={session_id} '
                    f'lost seats {e.seat_ids}'
                )
                raise
            except Exception:
                metrics.record_seat_reservation(
                    result='error', seat_count=0, duration=time.perf_counter() - start
                )
                raise

            metrics.record_seat_reservation(
                result='success',
                seat_count=len(result.holds),
                duration=time.perf_counter() - start,
            )
            Logger.base.info(
                f'🎯 [RESERVE] schedule={schedule_id} session={session_id} '
                f'held {len(result.holds)} seats until {result.expires_at}'
            )
            return result

    async def _reserve(
        self,
        *,
        schedule_id: int,
        seat_ids: List[int],
        user_id: int,
        session_id: str,
        ttl: timedelta,
    ) -> ReservationResult:
        async with self.uow:
            now = datetime.now(timezone.utc)
            schedule = await self.uow.show_schedule_repo.get_by_id(schedule_id=schedule_id)
            if not schedule:
                raise NotFoundError('Show schedule not found')

            seats = await load_schedule_seats(self.uow, schedule=schedule, seat_ids=seat_ids)
            await self.uow.seat_reservation_repo.delete_expired(
                now=now, schedule_id=schedule_id, seat_ids=seat_ids
            )

            check = await check_seat_claims(
                self.uow, schedule=schedule, seats=seats, session_id=session_id, now=now
            )
            check.raise_if_conflicting()

            expires_at = now + ttl
            own_seat_ids = {h.seat_id for h in check.own_holds}
            if check.own_holds:
                await self.uow.seat_reservation_repo.extend(
                    reservation_ids=[h.id for h in check.own_holds if h.id is not None],
                    expires_at=expires_at,
                )

            new_holds = [
                SeatReservation.hold(
                    seat_id=seat.id,  # type: ignore[arg-type]
                    show_schedule_id=schedule_id,
                    user_id=user_id,
                    session_id=session_id,
                    ttl=ttl,
                    now=now,
                )
                for seat in seats
                if seat.id not in own_seat_ids
            ]

            created: List[SeatReservation] = []
            if new_holds:
                try:
                    created = await self.uow.seat_reservation_repo.add_all(holds=new_holds)
                except IntegrityError:
                    # Another transaction inserted a hold on one of our keys first
                    await self.uow.rollback()
                    retry = await check_seat_claims(
                        self.uow,
                        schedule=schedule,
                        seats=seats,
                        session_id=session_id,
                        now=datetime.now(timezone.utc),
                    )
                    raise seat_unavailable(retry.conflicting_seats or seats)

            booked = await self.uow.booking_repo.booked_seat_ids(
                schedule_id=schedule_id, seat_ids=seat_ids
            )
            if booked:
                raise seat_unavailable([s for s in seats if s.id in booked])

            await self.uow.commit()

        order = {seat_id: i for i, seat_id in enumerate(seat_ids)}
        holds = [attrs.evolve(h, expires_at=expires_at) for h in check.own_holds] + created
        holds.sort(key=lambda h: order[h.seat_id])
        return ReservationResult(session_id=session_id, show_schedule_id=schedule_id, holds=holds)
