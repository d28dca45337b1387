from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.db_setting import Base, UtcDateTime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class VenueModel(Base):
    __tablename__ = 'venue'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(UtcDateTime, default=_utcnow, nullable=False)


class SeatModel(Base):
    __tablename__ = 'seat'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    venue_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('venue.id', ondelete='CASCADE'), nullable=False, index=True
    )
    row_label: Mapped[str] = mapped_column(String(4), nullable=False)
    seat_number: Mapped[int] = mapped_column(Integer, nullable=False)
    category: Mapped[str] = mapped_column(String(20), default='standard', nullable=False)
    price_multiplier: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), default=Decimal('1.00'), nullable=False
    )

    __table_args__ = (
        UniqueConstraint('venue_id', 'row_label', 'seat_number', name='uq_seat_position'),
    )
