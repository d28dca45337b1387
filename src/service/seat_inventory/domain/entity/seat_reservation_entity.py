from datetime import datetime, timedelta, timezone
from typing import Optional

import attrs


@attrs.define(frozen=True)
class SeatReservation:
    """Time-boxed hold on one seat for one schedule, owned by a client session."""

    seat_id: int
    show_schedule_id: int
    user_id: int
    session_id: str
    created_at: datetime
    expires_at: datetime
    id: Optional[int] = None

    @classmethod
    def hold(
        cls,
        *,
        seat_id: int,
        show_schedule_id: int,
        user_id: int,
        session_id: str,
        ttl: timedelta,
        now: Optional[datetime] = None,
    ) -> 'SeatReservation':
        now = now or datetime.now(timezone.utc)
        return cls(
            seat_id=seat_id,
            show_schedule_id=show_schedule_id,
            user_id=user_id,
            session_id=session_id,
            created_at=now,
            expires_at=now + ttl,
        )

    def is_active(self, now: datetime) -> bool:
        return self.expires_at > now
