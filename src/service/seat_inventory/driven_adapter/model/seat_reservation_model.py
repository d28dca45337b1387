from datetime import datetime

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.db_setting import Base, UtcDateTime


class SeatReservationModel(Base):
    """
    Temporary seat hold.

    `uq_seat_reservation_seat_schedule` is what makes concurrent holds on the
    same seat lose: the second insert fails instead of double-holding.
    """

    __tablename__ = 'seat_reservation'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    seat_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('seat.id', ondelete='CASCADE'), nullable=False
    )
    show_schedule_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('show_schedule.id', ondelete='CASCADE'), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    session_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint('seat_id', 'show_schedule_id', name='uq_seat_reservation_seat_schedule'),
    )
