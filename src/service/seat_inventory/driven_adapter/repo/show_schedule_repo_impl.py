from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.app.interface.i_show_schedule_repo import IShowScheduleRepo
from src.service.seat_inventory.domain.entity.show_entity import Show, ShowSchedule
from src.service.seat_inventory.driven_adapter.model.show_model import (
    ShowModel,
    ShowScheduleModel,
)


class ShowScheduleRepoImpl(IShowScheduleRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_show(db_show: ShowModel) -> Show:
        return Show(
            id=db_show.id,
            title=db_show.title,
            show_type=db_show.show_type,
            created_by=db_show.created_by,
        )

    @staticmethod
    def _to_schedule(db_schedule: ShowScheduleModel) -> ShowSchedule:
        return ShowSchedule(
            id=db_schedule.id,
            show_id=db_schedule.show_id,
            venue_id=db_schedule.venue_id,
            starts_at=db_schedule.starts_at,
            base_price=Decimal(db_schedule.base_price),
            total_seats=db_schedule.total_seats,
            seats_available=db_schedule.seats_available,
        )

    @Logger.io
    async def create_show(self, *, show: Show) -> Show:
        db_show = ShowModel(title=show.title, show_type=show.show_type, created_by=show.created_by)
        self.session.add(db_show)
        await self.session.flush()
        return self._to_show(db_show)

    async def get_show(self, *, show_id: int) -> Show | None:
        db_show = await self.session.get(ShowModel, show_id)
        return self._to_show(db_show) if db_show else None

    @Logger.io
    async def create_schedule(self, *, schedule: ShowSchedule) -> ShowSchedule:
        db_schedule = ShowScheduleModel(
            show_id=schedule.show_id,
            venue_id=schedule.venue_id,
            starts_at=schedule.starts_at,
            base_price=schedule.base_price,
            total_seats=schedule.total_seats,
            seats_available=schedule.seats_available,
        )
        self.session.add(db_schedule)
        await self.session.flush()
        return self._to_schedule(db_schedule)

    async def get_by_id(self, *, schedule_id: int) -> ShowSchedule | None:
        result = await self.session.execute(
            select(ShowScheduleModel).where(ShowScheduleModel.id == schedule_id)
        )
        db_schedule = result.scalar_one_or_none()
        return self._to_schedule(db_schedule) if db_schedule else None

    async def get_for_update(self, *, schedule_id: int) -> ShowSchedule | None:
        result = await self.session.execute(
            select(ShowScheduleModel)
            .where(ShowScheduleModel.id == schedule_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        db_schedule = result.scalar_one_or_none()
        return self._to_schedule(db_schedule) if db_schedule else None

    @Logger.io
    async def save_seat_counts(self, *, schedule: ShowSchedule) -> None:
        await self.session.execute(
            update(ShowScheduleModel)
            .where(ShowScheduleModel.id == schedule.id)
            .values(total_seats=schedule.total_seats, seats_available=schedule.seats_available)
        )

    async def list_ids(self, *, venue_id: Optional[int] = None) -> List[int]:
        stmt = select(ShowScheduleModel.id).order_by(ShowScheduleModel.id)
        if venue_id is not None:
            stmt = stmt.where(ShowScheduleModel.venue_id == venue_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
