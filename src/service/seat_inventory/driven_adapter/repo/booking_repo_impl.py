from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.app.dto.booking_view import BookingSeatView, BookingView
from src.service.seat_inventory.app.interface.i_booking_repo import IBookingRepo
from src.service.seat_inventory.domain.entity.booking_entity import Booking, SeatBooking
from src.service.seat_inventory.domain.enum.booking_status import (
    ACTIVE_BOOKING_STATUSES,
    RELEASED_BOOKING_STATUSES,
    BookingStatus,
)
from src.service.seat_inventory.driven_adapter.model.booking_model import (
    BookingModel,
    SeatBookingModel,
)
from src.service.seat_inventory.driven_adapter.model.show_model import (
    ShowModel,
    ShowScheduleModel,
)
from src.service.seat_inventory.driven_adapter.model.venue_model import SeatModel, VenueModel


_ACTIVE = [s.value for s in ACTIVE_BOOKING_STATUSES]
_RELEASED = [s.value for s in RELEASED_BOOKING_STATUSES]


class BookingRepoImpl(IBookingRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_entity(db_booking: BookingModel) -> Booking:
        return Booking(
            id=db_booking.id,
            booking_number=db_booking.booking_number,
            user_id=db_booking.user_id,
            show_schedule_id=db_booking.show_schedule_id,
            status=BookingStatus(db_booking.status),
            original_amount=Decimal(db_booking.original_amount),
            discount_amount=Decimal(db_booking.discount_amount),
            total_amount=Decimal(db_booking.total_amount),
            promotion_code=db_booking.promotion_code,
            seat_bookings=[
                SeatBooking(
                    id=sb.id,
                    booking_id=sb.booking_id,
                    seat_id=sb.seat_id,
                    show_schedule_id=sb.show_schedule_id,
                    price=Decimal(sb.price),
                    released=sb.released,
                )
                for sb in db_booking.seat_bookings
            ],
            created_at=db_booking.created_at,
            updated_at=db_booking.updated_at,
        )

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        db_booking = BookingModel(
            id=booking.id,
            booking_number=booking.booking_number,
            user_id=booking.user_id,
            show_schedule_id=booking.show_schedule_id,
            status=booking.status.value,
            original_amount=booking.original_amount,
            discount_amount=booking.discount_amount,
            total_amount=booking.total_amount,
            promotion_code=booking.promotion_code,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
            seat_bookings=[
                SeatBookingModel(
                    seat_id=sb.seat_id,
                    show_schedule_id=sb.show_schedule_id,
                    price=sb.price,
                    released=False,
                )
                for sb in booking.seat_bookings
            ],
        )
        self.session.add(db_booking)
        await self.session.flush()
        return self._to_entity(db_booking)

    async def get_by_id(self, *, booking_id: UUID) -> Booking | None:
        result = await self.session.execute(
            select(BookingModel).where(BookingModel.id == booking_id)
        )
        db_booking = result.scalar_one_or_none()
        return self._to_entity(db_booking) if db_booking else None

    async def get_view(self, *, booking_id: UUID) -> BookingView | None:
        result = await self.session.execute(
            select(BookingModel, ShowScheduleModel, ShowModel, VenueModel)
            .join(ShowScheduleModel, ShowScheduleModel.id == BookingModel.show_schedule_id)
            .join(ShowModel, ShowModel.id == ShowScheduleModel.show_id)
            .join(VenueModel, VenueModel.id == ShowScheduleModel.venue_id)
            .where(BookingModel.id == booking_id)
        )
        row = result.one_or_none()
        if row is None:
            return None
        db_booking, db_schedule, db_show, db_venue = row

        seat_rows = await self.session.execute(
            select(SeatBookingModel, SeatModel)
            .join(SeatModel, SeatModel.id == SeatBookingModel.seat_id)
            .where(SeatBookingModel.booking_id == booking_id)
            .order_by(SeatBookingModel.id)
        )
        seats = [
            BookingSeatView(
                seat_id=db_seat.id,
                row_label=db_seat.row_label,
                seat_number=db_seat.seat_number,
                category=db_seat.category,
                price=Decimal(sb.price),
                released=sb.released,
            )
            for sb, db_seat in seat_rows.all()
        ]

        return BookingView(
            id=db_booking.id,
            booking_number=db_booking.booking_number,
            user_id=db_booking.user_id,
            status=db_booking.status,
            show_schedule_id=db_schedule.id,
            show_id=db_show.id,
            show_title=db_show.title,
            show_type=db_show.show_type,
            venue_id=db_venue.id,
            venue_name=db_venue.name,
            starts_at=db_schedule.starts_at,
            original_amount=Decimal(db_booking.original_amount),
            discount_amount=Decimal(db_booking.discount_amount),
            total_amount=Decimal(db_booking.total_amount),
            promotion_code=db_booking.promotion_code,
            created_at=db_booking.created_at,
            updated_at=db_booking.updated_at,
            seats=seats,
        )

    @Logger.io
    async def transition_status(
        self,
        *,
        booking_id: UUID,
        from_statuses: Iterable[BookingStatus],
        to_status: BookingStatus,
        now: datetime,
    ) -> bool:
        result = await self.session.execute(
            update(BookingModel)
            .where(
                BookingModel.id == booking_id,
                BookingModel.status.in_([s.value for s in from_statuses]),
            )
            .values(status=to_status.value, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        return (result.rowcount or 0) == 1  # type: ignore[attr-defined]

    @Logger.io
    async def mark_seats_released(self, *, booking_id: UUID) -> int:
        result = await self.session.execute(
            update(SeatBookingModel)
            .where(SeatBookingModel.booking_id == booking_id, SeatBookingModel.released.is_(False))
            .values(released=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def booked_seat_ids(
        self, *, schedule_id: int, seat_ids: Optional[Sequence[int]] = None
    ) -> set[int]:
        stmt = select(SeatBookingModel.seat_id).where(
            SeatBookingModel.show_schedule_id == schedule_id,
            SeatBookingModel.released.is_(False),
        )
        if seat_ids is not None:
            stmt = stmt.where(SeatBookingModel.seat_id.in_(list(seat_ids)))
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def count_active_seat_bookings(self, *, schedule_id: int) -> int:
        result = await self.session.execute(
            select(func.count(SeatBookingModel.id))
            .join(BookingModel, BookingModel.id == SeatBookingModel.booking_id)
            .where(
                SeatBookingModel.show_schedule_id == schedule_id,
                BookingModel.status.in_(_ACTIVE),
            )
        )
        return int(result.scalar_one())

    @Logger.io
    async def heal_release_flags(self, *, schedule_id: int) -> int:
        released_booking_ids = select(BookingModel.id).where(
            BookingModel.show_schedule_id == schedule_id,
            BookingModel.status.in_(_RELEASED),
        )
        result = await self.session.execute(
            update(SeatBookingModel)
            .where(
                SeatBookingModel.show_schedule_id == schedule_id,
                SeatBookingModel.released.is_(False),
                SeatBookingModel.booking_id.in_(released_booking_ids),
            )
            .values(released=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
