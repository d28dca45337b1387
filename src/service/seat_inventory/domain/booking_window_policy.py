from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

import attrs

from src.platform.exception.exceptions import BookingWindowClosedError


@attrs.define(frozen=True)
class BookingWindowPolicy:
    """
    Decide whether a schedule can still be booked at a given moment.

    Before `starts_at` every show type is bookable. After it, only the types
    in `late_show_types` stay open, and only for `grace_minutes`.
    """

    late_show_types: frozenset[str] = frozenset({'movie'})
    grace_minutes: int = 15

    @classmethod
    def from_settings(
        cls, *, late_show_types: Iterable[str], grace_minutes: int
    ) -> 'BookingWindowPolicy':
        return cls(
            late_show_types=frozenset(t.lower() for t in late_show_types),
            grace_minutes=grace_minutes,
        )

    def ensure_open(
        self, *, show_type: str, starts_at: datetime, now: Optional[datetime] = None
    ) -> None:
        now = now or datetime.now(timezone.utc)
        if now <= starts_at:
            return

        late_by = now - starts_at
        minutes_late = int(late_by.total_seconds() // 60)
        show_type = show_type.lower()

        if show_type in self.late_show_types:
            if late_by <= timedelta(minutes=self.grace_minutes):
                return
            raise BookingWindowClosedError(
                message=(
                    f'Booking not allowed. The {show_type} started {minutes_late} minutes ago. '
                    f'Bookings are only allowed up to {self.grace_minutes} minutes after '
                    f'the {show_type} starts.'
                ),
                minutes_late=minutes_late,
                rule=f'late_booking_grace_{self.grace_minutes}_minutes',
            )

        raise BookingWindowClosedError(
            message=(
                f'Booking not allowed. The {show_type} started {minutes_late} minutes ago. '
                f'Bookings are not allowed after {show_type} events have started.'
            ),
            minutes_late=minutes_late,
            rule='no_booking_after_start',
        )
