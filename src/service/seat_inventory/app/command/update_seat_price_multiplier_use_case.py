from decimal import Decimal
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.domain.entity.venue_entity import Seat


class UpdateSeatPriceMultiplierUseCase:
    """The only mutation a seat accepts after creation; existing bookings keep their price."""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def update(self, *, seat_id: int, price_multiplier: Decimal) -> Seat:
        async with self.uow:
            seat = await self.uow.venue_repo.get_seat(seat_id=seat_id)
            if not seat:
                raise NotFoundError('Seat not found')

            seat = await self.uow.venue_repo.update_price_multiplier(
                seat=seat.with_price_multiplier(price_multiplier)
            )
            await self.uow.commit()

        return seat
