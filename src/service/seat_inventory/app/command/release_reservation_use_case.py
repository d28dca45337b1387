from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.domain.access_policy import AccessPolicy
from src.service.seat_inventory.domain.entity.user_entity import UserEntity


class ReleaseReservationUseCase:
    """Drop every hold of a client session. Unknown or expired sessions are a no-op."""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def release(self, *, session_id: str, actor: UserEntity) -> int:
        async with self.uow:
            owner_ids = await self.uow.seat_reservation_repo.list_owner_ids_by_session(
                session_id=session_id
            )
            if not owner_ids:
                return 0

            AccessPolicy.ensure_can_release_holds(actor, owner_ids)

            deleted = await self.uow.seat_reservation_repo.delete_by_session(
                session_id=session_id
            )
            await self.uow.commit()

        Logger.base.info(f'🔓 [RELEASE] session={session_id} released {deleted} holds')
        return deleted
