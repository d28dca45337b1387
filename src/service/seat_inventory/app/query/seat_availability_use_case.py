from datetime import datetime, timezone
from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.app.seat_claims import withheld_seats_for_schedule
from src.service.seat_inventory.domain.entity.venue_entity import Seat


class SeatAvailabilityUseCase:
    """
    Point-in-time availability reads.

    Unknown ids, or a seat or venue that does not match the schedule, read as
    "not available" instead of raising.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.read_unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def is_available(self, *, seat_id: int, schedule_id: int) -> bool:
        async with self.uow:
            now = datetime.now(timezone.utc)
            schedule = await self.uow.show_schedule_repo.get_by_id(schedule_id=schedule_id)
            seat = await self.uow.venue_repo.get_seat(seat_id=seat_id)
            if not schedule or not seat or seat.venue_id != schedule.venue_id:
                return False

            if seat_id in await self.uow.booking_repo.booked_seat_ids(
                schedule_id=schedule_id, seat_ids=[seat_id]
            ):
                return False
            if await self.uow.seat_reservation_repo.list_active(
                schedule_id=schedule_id, now=now, seat_ids=[seat_id]
            ):
                return False
            return seat_id not in await withheld_seats_for_schedule(self.uow, schedule=schedule)

    @Logger.io(truncate_content=True)
    async def available_seats(self, *, venue_id: int, schedule_id: int) -> List[Seat]:
        async with self.uow:
            now = datetime.now(timezone.utc)
            schedule = await self.uow.show_schedule_repo.get_by_id(schedule_id=schedule_id)
            if not schedule or schedule.venue_id != venue_id:
                return []

            seats = await self.uow.venue_repo.list_seats(venue_id=venue_id)
            booked = await self.uow.booking_repo.booked_seat_ids(schedule_id=schedule_id)
            held = {
                h.seat_id
                for h in await self.uow.seat_reservation_repo.list_active(
                    schedule_id=schedule_id, now=now
                )
            }
            withheld = await withheld_seats_for_schedule(self.uow, schedule=schedule)

            unavailable = booked | held | withheld
            return [s for s in seats if s.id not in unavailable]
