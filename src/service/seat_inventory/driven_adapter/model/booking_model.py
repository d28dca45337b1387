from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy import (
    Boolean,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    Uuid,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.db_setting import Base, UtcDateTime


class BookingModel(Base):
    __tablename__ = 'booking'

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)  # UUID7
    booking_number: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    show_schedule_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('show_schedule.id'), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(String(20), default='pending', nullable=False)
    original_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    discount_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal('0.00'), nullable=False
    )
    total_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    promotion_code: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)

    seat_bookings: Mapped[List['SeatBookingModel']] = relationship(
        'SeatBookingModel',
        back_populates='booking',
        cascade='all, delete-orphan',
        lazy='selectin',
        order_by='SeatBookingModel.id',
    )


class SeatBookingModel(Base):
    """
    Confirmed seat allocation.

    `uq_active_seat_booking` allows one unreleased row per (seat, schedule),
    so two commits for the same seat cannot both land.
    """

    __tablename__ = 'seat_booking'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    booking_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('booking.id', ondelete='CASCADE'), nullable=False
    )
    seat_id: Mapped[int] = mapped_column(Integer, ForeignKey('seat.id'), nullable=False)
    show_schedule_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('show_schedule.id'), nullable=False, index=True
    )
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    released: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    booking: Mapped[BookingModel] = relationship(
        'BookingModel', back_populates='seat_bookings', lazy='raise'
    )

    __table_args__ = (
        UniqueConstraint('booking_id', 'seat_id', name='uq_seat_booking_booking_seat'),
        Index(
            'uq_active_seat_booking',
            'seat_id',
            'show_schedule_id',
            unique=True,
            postgresql_where=text('released = false'),
            sqlite_where=text('released = 0'),
        ),
    )
