from decimal import Decimal
from typing import List, Sequence

from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.app.interface.i_venue_repo import IVenueRepo
from src.service.seat_inventory.domain.entity.venue_entity import Seat, Venue
from src.service.seat_inventory.domain.enum.seat_category import SeatCategory
from src.service.seat_inventory.domain.value_object.row_label import row_sort_key
from src.service.seat_inventory.driven_adapter.model.venue_model import SeatModel, VenueModel


class VenueRepoImpl(IVenueRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_seat(db_seat: SeatModel) -> Seat:
        return Seat(
            id=db_seat.id,
            venue_id=db_seat.venue_id,
            row_label=db_seat.row_label,
            seat_number=db_seat.seat_number,
            category=SeatCategory(db_seat.category),
            price_multiplier=Decimal(db_seat.price_multiplier),
        )

    @staticmethod
    def _front_to_back(seats: List[Seat]) -> List[Seat]:
        return sorted(seats, key=lambda s: (row_sort_key(s.row_label), s.seat_number))

    @Logger.io
    async def create(self, *, venue: Venue) -> Venue:
        db_venue = VenueModel(name=venue.name, capacity=venue.capacity)
        self.session.add(db_venue)
        await self.session.flush()
        return Venue(id=db_venue.id, name=db_venue.name, capacity=db_venue.capacity)

    async def get_by_id(self, *, venue_id: int) -> Venue | None:
        db_venue = await self.session.get(VenueModel, venue_id)
        if db_venue is None:
            return None
        return Venue(id=db_venue.id, name=db_venue.name, capacity=db_venue.capacity)

    @Logger.io(truncate_content=True)
    async def add_seats(self, *, seats: Sequence[Seat]) -> int:
        if not seats:
            return 0
        await self.session.execute(
            insert(SeatModel),
            [
                {
                    'venue_id': seat.venue_id,
                    'row_label': seat.row_label,
                    'seat_number': seat.seat_number,
                    'category': seat.category.value,
                    'price_multiplier': seat.price_multiplier,
                }
                for seat in seats
            ],
        )
        return len(seats)

    async def count_seats(self, *, venue_id: int) -> int:
        result = await self.session.execute(
            select(func.count(SeatModel.id)).where(SeatModel.venue_id == venue_id)
        )
        return int(result.scalar_one())

    async def list_seats(self, *, venue_id: int) -> List[Seat]:
        result = await self.session.execute(
            select(SeatModel).where(SeatModel.venue_id == venue_id)
        )
        return self._front_to_back([self._to_seat(s) for s in result.scalars().all()])

    async def get_seats_by_ids(self, *, seat_ids: Sequence[int]) -> List[Seat]:
        if not seat_ids:
            return []
        result = await self.session.execute(
            select(SeatModel).where(SeatModel.id.in_(list(seat_ids)))
        )
        return self._front_to_back([self._to_seat(s) for s in result.scalars().all()])

    async def get_seat(self, *, seat_id: int) -> Seat | None:
        db_seat = await self.session.get(SeatModel, seat_id)
        return self._to_seat(db_seat) if db_seat else None

    @Logger.io
    async def update_price_multiplier(self, *, seat: Seat) -> Seat:
        await self.session.execute(
            update(SeatModel)
            .where(SeatModel.id == seat.id)
            .values(price_multiplier=seat.price_multiplier)
        )
        return seat
