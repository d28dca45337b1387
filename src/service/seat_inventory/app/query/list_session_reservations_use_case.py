from datetime import datetime, timezone
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.app.dto.reservation_result import ReservationResult
from src.service.seat_inventory.domain.access_policy import AccessPolicy
from src.service.seat_inventory.domain.entity.user_entity import UserEntity


class ListSessionReservationsUseCase:
    """Active holds of a session, for the checkout countdown."""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.read_unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def list_session_holds(self, *, session_id: str, actor: UserEntity) -> ReservationResult:
        async with self.uow:
            holds = await self.uow.seat_reservation_repo.list_by_session(
                session_id=session_id, now=datetime.now(timezone.utc)
            )

        if not holds:
            raise NotFoundError('No active reservation for this session')
        if not AccessPolicy.is_admin(actor) and any(h.user_id != actor.id for h in holds):
            raise ForbiddenError('Only the reservation owner can view these seats')

        return ReservationResult(
            session_id=session_id, show_schedule_id=holds[0].show_schedule_id, holds=holds
        )
