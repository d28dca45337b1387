from datetime import datetime, timezone
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seat_inventory_metrics import metrics


class SweepExpiredReservationsUseCase:
    """
    Delete holds whose `expires_at` has passed.

    Runs from the periodic job runner and the admin endpoint; holders are
    never consulted, so a crashed client cannot keep seats locked.
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
    async def sweep_expired(self, *, now: Optional[datetime] = None) -> int:
        now = now or datetime.now(timezone.utc)
        async with self.uow:
            deleted = await self.uow.seat_reservation_repo.delete_expired(now=now)
            await self.uow.commit()

        metrics.record_expired_sweep(deleted=deleted)
        if deleted:
            Logger.base.info(f'🧹 [SWEEP] Deleted {deleted} expired holds')
        return deleted
