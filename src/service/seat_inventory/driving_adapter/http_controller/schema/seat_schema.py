from decimal import Decimal
from typing import List

from pydantic import BaseModel

from src.service.seat_inventory.app.dto.seat_map import SeatMap
from src.service.seat_inventory.domain.entity.venue_entity import Seat


class SeatResponse(BaseModel):
    id: int
    venue_id: int
    row_label: str
    seat_number: int
    label: str
    category: str
    price_multiplier: Decimal

    @classmethod
    def from_seat(cls, seat: Seat) -> 'SeatResponse':
        return cls(
            id=seat.id or 0,
            venue_id=seat.venue_id,
            row_label=seat.row_label,
            seat_number=seat.seat_number,
            label=seat.label,
            category=seat.category.value,
            price_multiplier=seat.price_multiplier,
        )


class AvailableSeatsResponse(BaseModel):
    venue_id: int
    show_schedule_id: int
    count: int
    seats: List[SeatResponse]


class SeatAvailabilityResponse(BaseModel):
    seat_id: int
    show_schedule_id: int
    available: bool


class SeatMapSeatResponse(BaseModel):
    seat_id: int
    seat_number: int
    category: str
    price: Decimal
    status: str


class SeatMapRowResponse(BaseModel):
    row_label: str
    seats: List[SeatMapSeatResponse]


class SeatMapMetadataResponse(BaseModel):
    total_rows: int
    max_seats_per_row: int
    total_seats: int
    seats_available: int
    available_count: int
    reserved_count: int
    sold_count: int
    withheld_count: int
    has_capacity_limitation: bool


class SeatMapResponse(BaseModel):
    show_schedule_id: int
    venue_id: int
    rows: List[SeatMapRowResponse]
    metadata: SeatMapMetadataResponse

    @classmethod
    def from_seat_map(cls, seat_map: SeatMap) -> 'SeatMapResponse':
        meta = seat_map.metadata
        return cls(
            show_schedule_id=seat_map.show_schedule_id,
            venue_id=seat_map.venue_id,
            rows=[
                SeatMapRowResponse(
                    row_label=row.row_label,
                    seats=[
                        SeatMapSeatResponse(
                            seat_id=s.seat_id,
                            seat_number=s.seat_number,
                            category=s.category,
                            price=s.price,
                            status=s.status.value,
                        )
                        for s in row.seats
                    ],
                )
                for row in seat_map.rows
            ],
            metadata=SeatMapMetadataResponse(
                total_rows=meta.total_rows,
                max_seats_per_row=meta.max_seats_per_row,
                total_seats=meta.total_seats,
                seats_available=meta.seats_available,
                available_count=meta.available_count,
                reserved_count=meta.reserved_count,
                sold_count=meta.sold_count,
                withheld_count=meta.withheld_count,
                has_capacity_limitation=meta.has_capacity_limitation,
            ),
        )
