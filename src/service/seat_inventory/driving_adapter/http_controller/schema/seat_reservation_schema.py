from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.service.seat_inventory.app.dto.reservation_result import ReservationResult


class ReserveSeatsRequest(BaseModel):
    seat_ids: List[int] = Field(min_length=1)
    session_id: Optional[str] = Field(default=None, min_length=1, max_length=64)
    ttl_minutes: Optional[int] = Field(default=None, ge=1, le=60)

    model_config = {
        'json_schema_extra': {
            'example': {
                'seat_ids': [1, 2],
                'session_id': '01936d8f-5e73-7c4e-a9c5-123456789abc',
            }
        }
    }


class SeatHoldResponse(BaseModel):
    reservation_id: Optional[int]
    seat_id: int
    expires_at: datetime


class ReservationResponse(BaseModel):
    session_id: str
    show_schedule_id: int
    expires_at: Optional[datetime]
    holds: List[SeatHoldResponse]

    @classmethod
    def from_result(cls, result: ReservationResult) -> 'ReservationResponse':
        return cls(
            session_id=result.session_id,
            show_schedule_id=result.show_schedule_id,
            expires_at=result.expires_at,
            holds=[
                SeatHoldResponse(reservation_id=h.id, seat_id=h.seat_id, expires_at=h.expires_at)
                for h in result.holds
            ],
        )


class ReleaseReservationResponse(BaseModel):
    session_id: str
    released: int


class SweepResponse(BaseModel):
    deleted: int
