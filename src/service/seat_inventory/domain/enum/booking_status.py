from enum import StrEnum


class BookingStatus(StrEnum):
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'
    REFUNDED = 'refunded'
    EXPIRED = 'expired'

    @property
    def occupies_seats(self) -> bool:
        return self in ACTIVE_BOOKING_STATUSES


ACTIVE_BOOKING_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})
RELEASED_BOOKING_STATUSES = frozenset(
    {BookingStatus.CANCELLED, BookingStatus.REFUNDED, BookingStatus.EXPIRED}
)
