from typing import Iterable

from src.platform.exception.exceptions import ForbiddenError
from src.service.seat_inventory.domain.entity.booking_entity import Booking
from src.service.seat_inventory.domain.entity.show_entity import Show
from src.service.seat_inventory.domain.entity.user_entity import UserEntity
from src.service.seat_inventory.domain.enum.user_role import UserRole


class AccessPolicy:
    """Single place that decides who may act on holds, bookings and the catalog."""

    @staticmethod
    def is_admin(user: UserEntity) -> bool:
        return user.role == UserRole.ADMIN

    @staticmethod
    def is_owner(user: UserEntity, owner_id: int) -> bool:
        return user.id == owner_id

    @staticmethod
    def is_organizer(user: UserEntity) -> bool:
        return user.role in (UserRole.ORGANIZER, UserRole.ADMIN)

    @staticmethod
    def is_show_creator(user: UserEntity, show: Show) -> bool:
        return show.created_by == user.id

    @classmethod
    def ensure_admin(cls, user: UserEntity) -> None:
        if not cls.is_admin(user):
            raise ForbiddenError('Only admins can perform this action')

    @classmethod
    def ensure_organizer(cls, user: UserEntity) -> None:
        if not cls.is_organizer(user):
            raise ForbiddenError('Only organizers can perform this action')

    @classmethod
    def ensure_can_manage_booking(cls, user: UserEntity, booking: Booking) -> None:
        if not (cls.is_admin(user) or cls.is_owner(user, booking.user_id)):
            raise ForbiddenError('Only the booking owner can perform this action')

    @classmethod
    def ensure_can_release_holds(cls, user: UserEntity, owner_ids: Iterable[int]) -> None:
        if cls.is_admin(user):
            return
        if any(owner_id != user.id for owner_id in owner_ids):
            raise ForbiddenError('Only the reservation owner can release these seats')

    @classmethod
    def ensure_can_schedule_show(cls, user: UserEntity, show: Show) -> None:
        if cls.is_admin(user):
            return
        if not (cls.is_organizer(user) and cls.is_show_creator(user, show)):
            raise ForbiddenError('Only the show creator can schedule this show')
