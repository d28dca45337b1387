from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.domain.access_policy import AccessPolicy
from src.service.seat_inventory.domain.entity.show_entity import Show
from src.service.seat_inventory.domain.entity.user_entity import UserEntity


class CreateShowUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def create_show(self, *, title: str, show_type: str, actor: UserEntity) -> Show:
        AccessPolicy.ensure_organizer(actor)
        show = Show.create(title=title, show_type=show_type, created_by=actor.id)
        async with self.uow:
            show = await self.uow.show_schedule_repo.create_show(show=show)
            await self.uow.commit()
        return show
