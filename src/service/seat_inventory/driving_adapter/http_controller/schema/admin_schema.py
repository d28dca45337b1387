from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from src.service.seat_inventory.domain.entity.show_entity import Show, ShowSchedule
from src.service.seat_inventory.domain.seat_count_reconciliation import SeatCountSyncReport


class VenueCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    capacity: int = Field(gt=0)
    generate_seats: bool = True

    model_config = {'json_schema_extra': {'example': {'name': 'Grand Hall', 'capacity': 100}}}


class VenueResponse(BaseModel):
    id: int
    name: str
    capacity: int
    seat_count: int


class GenerateSeatsResponse(BaseModel):
    venue_id: int
    seats_created: int


class ShowCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    show_type: str = Field(min_length=1, max_length=32)

    model_config = {
        'json_schema_extra': {'example': {'title': 'Hamlet', 'show_type': 'theater'}}
    }


class ShowResponse(BaseModel):
    id: int
    title: str
    show_type: str
    created_by: int

    @classmethod
    def from_show(cls, show: Show) -> 'ShowResponse':
        return cls(
            id=show.id or 0, title=show.title, show_type=show.show_type, created_by=show.created_by
        )


class ScheduleCreateRequest(BaseModel):
    show_id: int
    venue_id: int
    starts_at: datetime
    base_price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    total_seats: Optional[int] = Field(default=None, gt=0)

    model_config = {
        'json_schema_extra': {
            'example': {
                'show_id': 1,
                'venue_id': 1,
                'starts_at': '2026-12-24T19:30:00Z',
                'base_price': '50.00',
            }
        }
    }


class ScheduleResponse(BaseModel):
    id: int
    show_id: int
    venue_id: int
    starts_at: datetime
    base_price: Decimal
    total_seats: int
    seats_available: int

    @classmethod
    def from_schedule(cls, schedule: ShowSchedule) -> 'ScheduleResponse':
        return cls(
            id=schedule.id or 0,
            show_id=schedule.show_id,
            venue_id=schedule.venue_id,
            starts_at=schedule.starts_at,
            base_price=schedule.base_price,
            total_seats=schedule.total_seats,
            seats_available=schedule.seats_available,
        )


class PriceMultiplierUpdateRequest(BaseModel):
    price_multiplier: Decimal = Field(gt=0, max_digits=5, decimal_places=2)

    @field_validator('price_multiplier')
    @classmethod
    def not_absurd(cls, v: Decimal) -> Decimal:
        if v > Decimal('100'):
            raise ValueError('price_multiplier must be at most 100')
        return v


class SeatCountAnomalyResponse(BaseModel):
    kind: str
    message: str


class SeatCountSyncReportResponse(BaseModel):
    schedule_id: int
    venue_id: int
    physical_seats: int
    venue_capacity: int
    active_seat_bookings: int
    previous_total_seats: int
    previous_seats_available: int
    total_seats: int
    seats_available: int
    healed_seat_bookings: int
    changed: bool
    anomalies: List[SeatCountAnomalyResponse]

    @classmethod
    def from_report(cls, report: SeatCountSyncReport) -> 'SeatCountSyncReportResponse':
        return cls(
            schedule_id=report.schedule_id,
            venue_id=report.venue_id,
            physical_seats=report.physical_seats,
            venue_capacity=report.venue_capacity,
            active_seat_bookings=report.active_seat_bookings,
            previous_total_seats=report.previous_total_seats,
            previous_seats_available=report.previous_seats_available,
            total_seats=report.total_seats,
            seats_available=report.seats_available,
            healed_seat_bookings=report.healed_seat_bookings,
            changed=report.changed,
            anomalies=[
                SeatCountAnomalyResponse(kind=a.kind.value, message=a.message)
                for a in report.anomalies
            ],
        )


class SeatCountSyncResponse(BaseModel):
    schedules_checked: int
    schedules_corrected: int
    anomaly_count: int
    reports: List[SeatCountSyncReportResponse]

    @classmethod
    def from_reports(cls, reports: List[SeatCountSyncReport]) -> 'SeatCountSyncResponse':
        return cls(
            schedules_checked=len(reports),
            schedules_corrected=sum(1 for r in reports if r.changed),
            anomaly_count=sum(len(r.anomalies) for r in reports),
            reports=[SeatCountSyncReportResponse.from_report(r) for r in reports],
        )
