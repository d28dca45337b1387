from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.db_setting import Base, UtcDateTime


class ShowModel(Base):
    __tablename__ = 'show'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    show_type: Mapped[str] = mapped_column(String(50), nullable=False)
    created_by: Mapped[int] = mapped_column(Integer, nullable=False, index=True)


class ShowScheduleModel(Base):
    __tablename__ = 'show_schedule'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    show_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('show.id', ondelete='CASCADE'), nullable=False, index=True
    )
    venue_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('venue.id'), nullable=False, index=True
    )
    starts_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
    base_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    total_seats: Mapped[int] = mapped_column(Integer, nullable=False)
    seats_available: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint(
            'seats_available >= 0 AND seats_available <= total_seats',
            name='ck_show_schedule_seats_available_range',
        ),
    )
