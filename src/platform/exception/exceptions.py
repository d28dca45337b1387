from typing import Any, Sequence


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def extra(self) -> dict[str, Any]:
        """Additional fields rendered next to `detail` in the error response."""
        return {}


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class SeatUnavailableError(ConflictError):
    """One or more requested seats are held by another session, booked, or withheld."""

    def __init__(self, *, seat_ids: Sequence[int], seat_labels: Sequence[str] = ()) -> None:
        self.seat_ids = sorted(set(seat_ids))
        self.seat_labels = list(seat_labels)
        shown = ', '.join(self.seat_labels) if self.seat_labels else str(self.seat_ids)
        super().__init__(f'Seats not available: {shown}')

    def extra(self) -> dict[str, Any]:
        return {'seat_ids': self.seat_ids, 'seat_labels': self.seat_labels}


class BookingWindowClosedError(CustomBaseError):
    def __init__(self, *, message: str, minutes_late: int, rule: str) -> None:
        self.minutes_late = minutes_late
        self.rule = rule
        super().__init__(message, 422)

    def extra(self) -> dict[str, Any]:
        return {'minutes_late': self.minutes_late, 'rule': self.rule}
