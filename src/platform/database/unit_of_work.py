"""
Unit of Work Pattern - one database transaction per `async with uow:` block

Architecture:
- UoW opens a session on enter and closes it on exit
- UoW owns commit/rollback; anything not committed is rolled back on exit
- Repositories are created per block and share that session
- Use cases coordinate several repositories through one UoW
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


if TYPE_CHECKING:
    from src.service.seat_inventory.app.interface.i_booking_repo import IBookingRepo
    from src.service.seat_inventory.app.interface.i_seat_reservation_repo import (
        ISeatReservationRepo,
    )
    from src.service.seat_inventory.app.interface.i_show_schedule_repo import (
        IShowScheduleRepo,
    )
    from src.service.seat_inventory.app.interface.i_venue_repo import IVenueRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the seat inventory service

    Usage:
        async with uow:
            schedule = await uow.show_schedule_repo.get_for_update(schedule_id=...)
            await uow.commit()
    """

    venue_repo: IVenueRepo
    show_schedule_repo: IShowScheduleRepo
    seat_reservation_repo: ISeatReservationRepo
    booking_repo: IBookingRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    A fresh session is taken from `session_factory` on every enter, so one UoW
    instance can run several transactions one after another.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self):
        from src.service.seat_inventory.driven_adapter.repo.booking_repo_impl import (
            BookingRepoImpl,
        )
        from src.service.seat_inventory.driven_adapter.repo.seat_reservation_repo_impl import (
            SeatReservationRepoImpl,
        )
        from src.service.seat_inventory.driven_adapter.repo.show_schedule_repo_impl import (
            ShowScheduleRepoImpl,
        )
        from src.service.seat_inventory.driven_adapter.repo.venue_repo_impl import (
            VenueRepoImpl,
        )

        self.session = self.session_factory()
        self.venue_repo = VenueRepoImpl(self.session)
        self.show_schedule_repo = ShowScheduleRepoImpl(self.session)
        self.seat_reservation_repo = SeatReservationRepoImpl(self.session)
        self.booking_repo = BookingRepoImpl(self.session)

        return await super().__aenter__()

    async def __aexit__(self, *args):
        try:
            await super().__aexit__(*args)
        finally:
            if self.session is not None:
                await self.session.close()
                self.session = None

    async def _commit(self):
        assert self.session is not None, 'commit() called outside `async with uow:`'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
