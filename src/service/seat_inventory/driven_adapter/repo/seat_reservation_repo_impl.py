from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.app.interface.i_seat_reservation_repo import (
    ISeatReservationRepo,
)
from src.service.seat_inventory.domain.entity.seat_reservation_entity import SeatReservation
from src.service.seat_inventory.driven_adapter.model.seat_reservation_model import (
    SeatReservationModel,
)


class SeatReservationRepoImpl(ISeatReservationRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_entity(db_hold: SeatReservationModel) -> SeatReservation:
        return SeatReservation(
            id=db_hold.id,
            seat_id=db_hold.seat_id,
            show_schedule_id=db_hold.show_schedule_id,
            user_id=db_hold.user_id,
            session_id=db_hold.session_id,
            created_at=db_hold.created_at,
            expires_at=db_hold.expires_at,
        )

    @Logger.io
    async def add_all(self, *, holds: Sequence[SeatReservation]) -> List[SeatReservation]:
        db_holds = [
            SeatReservationModel(
                seat_id=hold.seat_id,
                show_schedule_id=hold.show_schedule_id,
                user_id=hold.user_id,
                session_id=hold.session_id,
                created_at=hold.created_at,
                expires_at=hold.expires_at,
            )
            for hold in holds
        ]
        self.session.add_all(db_holds)
        # Flush now so a unique violation surfaces here, inside the caller's transaction
        await self.session.flush()
        return [self._to_entity(h) for h in db_holds]

    async def list_active(
        self, *, schedule_id: int, now: datetime, seat_ids: Optional[Sequence[int]] = None
    ) -> List[SeatReservation]:
        stmt = select(SeatReservationModel).where(
            SeatReservationModel.show_schedule_id == schedule_id,
            SeatReservationModel.expires_at > now,
        )
        if seat_ids is not None:
            stmt = stmt.where(SeatReservationModel.seat_id.in_(list(seat_ids)))
        result = await self.session.execute(stmt)
        return [self._to_entity(h) for h in result.scalars().all()]

    async def list_by_session(self, *, session_id: str, now: datetime) -> List[SeatReservation]:
        result = await self.session.execute(
            select(SeatReservationModel)
            .where(
                SeatReservationModel.session_id == session_id,
                SeatReservationModel.expires_at > now,
            )
            .order_by(SeatReservationModel.seat_id)
        )
        return [self._to_entity(h) for h in result.scalars().all()]

    async def list_owner_ids_by_session(self, *, session_id: str) -> List[int]:
        result = await self.session.execute(
            select(SeatReservationModel.user_id)
            .where(SeatReservationModel.session_id == session_id)
            .distinct()
        )
        return list(result.scalars().all())

    async def extend(self, *, reservation_ids: Sequence[int], expires_at: datetime) -> None:
        if not reservation_ids:
            return
        await self.session.execute(
            update(SeatReservationModel)
            .where(SeatReservationModel.id.in_(list(reservation_ids)))
            .values(expires_at=expires_at)
        )

    @Logger.io
    async def delete_by_session(self, *, session_id: str) -> int:
        result = await self.session.execute(
            delete(SeatReservationModel).where(SeatReservationModel.session_id == session_id)
        )
        return result.rowcount or 0  # type: ignore[attr-defined]

    @Logger.io
    async def delete_for_seats(self, *, schedule_id: int, seat_ids: Sequence[int]) -> int:
        if not seat_ids:
            return 0
        result = await self.session.execute(
            delete(SeatReservationModel).where(
                SeatReservationModel.show_schedule_id == schedule_id,
                SeatReservationModel.seat_id.in_(list(seat_ids)),
            )
        )
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def delete_expired(
        self,
        *,
        now: datetime,
        schedule_id: Optional[int] = None,
        seat_ids: Optional[Sequence[int]] = None,
    ) -> int:
        stmt = delete(SeatReservationModel).where(SeatReservationModel.expires_at <= now)
        if schedule_id is not None:
            stmt = stmt.where(SeatReservationModel.show_schedule_id == schedule_id)
        if seat_ids is not None:
            stmt = stmt.where(SeatReservationModel.seat_id.in_(list(seat_ids)))
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]
