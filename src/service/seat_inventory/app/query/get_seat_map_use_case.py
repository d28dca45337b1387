from datetime import datetime, timezone
from itertools import groupby
from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.app.dto.seat_map import (
    SeatMap,
    SeatMapMetadata,
    SeatMapRow,
    SeatMapSeat,
)
from src.service.seat_inventory.app.seat_claims import withheld_seats_for_schedule
from src.service.seat_inventory.domain.enum.seat_status import SeatStatus


class GetSeatMapUseCase:
    """
    Seat map for one schedule: rows front to back, each seat priced and marked
    AVAILABLE, RESERVED (held or withheld) or SOLD.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.read_unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io(truncate_content=True)
    async def get_seat_map(self, *, schedule_id: int) -> SeatMap:
        async with self.uow:
            now = datetime.now(timezone.utc)
            schedule = await self.uow.show_schedule_repo.get_by_id(schedule_id=schedule_id)
            if not schedule:
                raise NotFoundError('Show schedule not found')

            seats = await self.uow.venue_repo.list_seats(venue_id=schedule.venue_id)
            booked = await self.uow.booking_repo.booked_seat_ids(schedule_id=schedule_id)
            held = {
                h.seat_id
                for h in await self.uow.seat_reservation_repo.list_active(
                    schedule_id=schedule_id, now=now
                )
            }
            withheld = await withheld_seats_for_schedule(self.uow, schedule=schedule)

        rows: List[SeatMapRow] = []
        counts = {status: 0 for status in SeatStatus}
        for row_label, row_seats in groupby(seats, key=lambda s: s.row_label):
            map_seats = []
            for seat in row_seats:
                if seat.id in booked:
                    status = SeatStatus.SOLD
                elif seat.id in held or seat.id in withheld:
                    status = SeatStatus.RESERVED
                else:
                    status = SeatStatus.AVAILABLE
                counts[status] += 1
                map_seats.append(
                    SeatMapSeat(
                        seat_id=seat.id,  # type: ignore[arg-type]
                        row_label=seat.row_label,
                        seat_number=seat.seat_number,
                        category=seat.category.value,
                        price=schedule.price_for(seat.price_multiplier),
                        status=status,
                    )
                )
            rows.append(SeatMapRow(row_label=row_label, seats=map_seats))

        return SeatMap(
            show_schedule_id=schedule_id,
            venue_id=schedule.venue_id,
            rows=rows,
            metadata=SeatMapMetadata(
                total_rows=len(rows),
                max_seats_per_row=max((len(r.seats) for r in rows), default=0),
                total_seats=schedule.total_seats,
                seats_available=schedule.seats_available,
                available_count=counts[SeatStatus.AVAILABLE],
                reserved_count=counts[SeatStatus.RESERVED],
                sold_count=counts[SeatStatus.SOLD],
                withheld_count=len(withheld - booked),
            ),
        )
