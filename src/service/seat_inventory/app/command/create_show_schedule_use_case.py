from datetime import datetime
from decimal import Decimal
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.domain.access_policy import AccessPolicy
from src.service.seat_inventory.domain.entity.show_entity import ShowSchedule
from src.service.seat_inventory.domain.entity.user_entity import UserEntity
from src.service.seat_inventory.domain.seat_layout_domain import (
    plan_seat_layout,
    resolve_schedule_total_seats,
)


class CreateShowScheduleUseCase:
    """
    Schedule a show at a venue.

    A venue without seats gets the default layout first. `total_seats`
    defaults to, and is capped at, the venue's physical seat count.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def create_schedule(
        self,
        *,
        show_id: int,
        venue_id: int,
        starts_at: datetime,
        base_price: Decimal,
        actor: UserEntity,
        total_seats: Optional[int] = None,
    ) -> ShowSchedule:
        async with self.uow:
            show = await self.uow.show_schedule_repo.get_show(show_id=show_id)
            if not show:
                raise NotFoundError('Show not found')
            AccessPolicy.ensure_can_schedule_show(actor, show)

            venue = await self.uow.venue_repo.get_by_id(venue_id=venue_id)
            if not venue:
                raise NotFoundError('Venue not found')

            physical_seats = await self.uow.venue_repo.count_seats(venue_id=venue_id)
            if physical_seats == 0:
                physical_seats = await self.uow.venue_repo.add_seats(
                    seats=plan_seat_layout(venue_id=venue_id, capacity=venue.capacity)
                )
                Logger.base.info(
                    f'🏟️ [SCHEDULE] Venue {venue_id} had no seats; generated {physical_seats}'
                )

            schedule = ShowSchedule.create(
                show_id=show_id,
                venue_id=venue_id,
                starts_at=starts_at,
                base_price=base_price,
                total_seats=resolve_schedule_total_seats(
                    requested=total_seats, physical_seats=physical_seats
                ),
            )
            schedule = await self.uow.show_schedule_repo.create_schedule(schedule=schedule)
            await self.uow.commit()

        Logger.base.info(
            f'📅 [SCHEDULE] Created schedule {schedule.id} for show {show_id} at venue '
            f'{venue_id} with {schedule.total_seats} seats'
        )
        return schedule
