from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.service.seat_inventory.app.dto.booking_view import BookingView


class BookingCreateRequest(BaseModel):
    show_schedule_id: int
    seat_ids: List[int] = Field(min_length=1)
    session_id: Optional[str] = Field(default=None, min_length=1, max_length=64)
    promotion_code: Optional[str] = Field(default=None, max_length=32)
    payment_recorded: bool = False

    model_config = {
        'json_schema_extra': {
            'example': {
                'show_schedule_id': 1,
                'seat_ids': [1, 2],
                'session_id': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                'promotion_code': 'WELCOME10',
            }
        }
    }


class BookingSeatResponse(BaseModel):
    seat_id: int
    row_label: str
    seat_number: int
    category: str
    price: Decimal
    released: bool


class BookingResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'booking_number': 'BK5E73A9C51234',
                'user_id': 2,
                'status': 'pending',
                'show_schedule_id': 1,
                'seat_count': 2,
                'total_amount': '200.00',
            }
        },
    }

    id: UUID
    booking_number: str
    user_id: int
    status: str
    show_schedule_id: int
    show_id: int
    show_title: str
    show_type: str
    venue_id: int
    venue_name: str
    starts_at: datetime
    original_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    promotion_code: Optional[str]
    seat_count: int
    seats: List[BookingSeatResponse]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_view(cls, view: BookingView) -> 'BookingResponse':
        return cls(
            id=view.id,
            booking_number=view.booking_number,
            user_id=view.user_id,
            status=view.status,
            show_schedule_id=view.show_schedule_id,
            show_id=view.show_id,
            show_title=view.show_title,
            show_type=view.show_type,
            venue_id=view.venue_id,
            venue_name=view.venue_name,
            starts_at=view.starts_at,
            original_amount=view.original_amount,
            discount_amount=view.discount_amount,
            total_amount=view.total_amount,
            promotion_code=view.promotion_code,
            seat_count=view.seat_count,
            seats=[
                BookingSeatResponse(
                    seat_id=s.seat_id,
                    row_label=s.row_label,
                    seat_number=s.seat_number,
                    category=s.category,
                    price=s.price,
                    released=s.released,
                )
                for s in view.seats
            ],
            created_at=view.created_at,
            updated_at=view.updated_at,
        )
