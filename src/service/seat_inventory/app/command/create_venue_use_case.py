from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.app.dto.venue_summary import VenueSummary
from src.service.seat_inventory.domain.entity.venue_entity import Venue
from src.service.seat_inventory.domain.seat_layout_domain import plan_seat_layout


class CreateVenueUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def create_venue(
        self, *, name: str, capacity: int, generate_seats: bool = True
    ) -> VenueSummary:
        venue = Venue.create(name=name, capacity=capacity)
        async with self.uow:
            venue = await self.uow.venue_repo.create(venue=venue)
            assert venue.id is not None
            seat_count = 0
            if generate_seats:
                seat_count = await self.uow.venue_repo.add_seats(
                    seats=plan_seat_layout(venue_id=venue.id, capacity=venue.capacity)
                )
            await self.uow.commit()

        Logger.base.info(f'🏟️ [VENUE] Created venue {venue.id} with {seat_count} seats')
        return VenueSummary(
            id=venue.id, name=venue.name, capacity=venue.capacity, seat_count=seat_count
        )

    @Logger.io
    async def generate_seats(self, *, venue_id: int) -> int:
        """Lay out seats for a venue that has none yet."""
        async with self.uow:
            venue = await self.uow.venue_repo.get_by_id(venue_id=venue_id)
            if not venue:
                raise NotFoundError('Venue not found')
            if await self.uow.venue_repo.count_seats(venue_id=venue_id) > 0:
                raise DomainError('Venue already has seats configured')

            seat_count = await self.uow.venue_repo.add_seats(
                seats=plan_seat_layout(venue_id=venue_id, capacity=venue.capacity)
            )
            await self.uow.commit()

        Logger.base.info(f'🏟️ [VENUE] Generated {seat_count} seats for venue {venue_id}')
        return seat_count
