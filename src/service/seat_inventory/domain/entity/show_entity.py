from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger


@attrs.define
class Show:
    title: str
    show_type: str
    created_by: int
    id: Optional[int] = None

    @classmethod
    def create(cls, *, title: str, show_type: str, created_by: int) -> 'Show':
        if not title.strip():
            raise DomainError('Show title is required')
        if not show_type.strip():
            raise DomainError('Show type is required')
        return cls(title=title.strip(), show_type=show_type.strip().lower(), created_by=created_by)


@attrs.define
class ShowSchedule:
    """
    One performance of a show at a venue.

    `total_seats` is a snapshot of sellable capacity taken at creation (and
    re-derived by reconciliation). `seats_available` is a cached counter; it is
    only changed through `commit_seats`, `release_seats` and `synchronized`.
    """

    show_id: int
    venue_id: int
    starts_at: datetime
    base_price: Decimal
    total_seats: int
    seats_available: int
    id: Optional[int] = None

    @classmethod
    def create(
        cls,
        *,
        show_id: int,
        venue_id: int,
        starts_at: datetime,
        base_price: Decimal,
        total_seats: int,
    ) -> 'ShowSchedule':
        if base_price < 0:
            raise DomainError('Base price cannot be negative')
        if total_seats <= 0:
            raise DomainError('A schedule needs at least one sellable seat')
        if starts_at.tzinfo is None:
            starts_at = starts_at.replace(tzinfo=timezone.utc)
        return cls(
            show_id=show_id,
            venue_id=venue_id,
            starts_at=starts_at,
            base_price=base_price.quantize(Decimal('0.01')),
            total_seats=total_seats,
            seats_available=total_seats,
        )

    def price_for(self, price_multiplier: Decimal) -> Decimal:
        return (self.base_price * price_multiplier).quantize(Decimal('0.01'))

    @Logger.io
    def commit_seats(self, count: int) -> 'ShowSchedule':
        if count <= 0:
            raise DomainError('Seat count must be positive')
        if count > self.seats_available:
            Logger.base.warning(
                f'⚠️ [SCHEDULE] schedule={self.id} committing {count} seats with only '
                f'{self.seats_available} counted as available; counter clamped at 0'
            )
        return attrs.evolve(self, seats_available=max(0, self.seats_available - count))

    @Logger.io
    def release_seats(self, count: int) -> 'ShowSchedule':
        if count <= 0:
            raise DomainError('Seat count must be positive')
        return attrs.evolve(
            self, seats_available=min(self.total_seats, self.seats_available + count)
        )

    def synchronized(self, *, total_seats: int, seats_available: int) -> 'ShowSchedule':
        return attrs.evolve(
            self,
            total_seats=max(0, total_seats),
            seats_available=max(0, min(seats_available, max(0, total_seats))),
        )
