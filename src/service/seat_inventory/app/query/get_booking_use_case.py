from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.app.dto.booking_view import BookingView
from src.service.seat_inventory.domain.access_policy import AccessPolicy
from src.service.seat_inventory.domain.entity.user_entity import UserEntity


class GetBookingUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.read_unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def get_booking(self, *, booking_id: UUID, actor: UserEntity) -> BookingView:
        async with self.uow:
            view = await self.uow.booking_repo.get_view(booking_id=booking_id)

        if not view:
            raise NotFoundError('Booking not found')
        if not (AccessPolicy.is_admin(actor) or AccessPolicy.is_owner(actor, view.user_id)):
            raise ForbiddenError('Only the booking owner can view this booking')
        return view
