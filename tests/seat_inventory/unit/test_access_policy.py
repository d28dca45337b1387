from decimal import Decimal
from uuid import uuid4

import pytest

from src.platform.exception.exceptions import ForbiddenError
from src.service.seat_inventory.domain.access_policy import AccessPolicy
from src.service.seat_inventory.domain.entity.booking_entity import Booking
from src.service.seat_inventory.domain.entity.show_entity import Show
from src.service.seat_inventory.domain.entity.user_entity import UserEntity
from src.service.seat_inventory.domain.enum.user_role import UserRole


OWNER = UserEntity(id=1, role=UserRole.USER)
STRANGER = UserEntity(id=2, role=UserRole.USER)
ORGANIZER = UserEntity(id=3, role=UserRole.ORGANIZER)
OTHER_ORGANIZER = UserEntity(id=4, role=UserRole.ORGANIZER)
ADMIN = UserEntity(id=9, role=UserRole.ADMIN)


@pytest.fixture
def booking():
    booking_id = uuid4()
    return Booking(
        id=booking_id,
        booking_number=Booking.booking_number_for(booking_id),
        user_id=OWNER.id,
        show_schedule_id=1,
        original_amount=Decimal('10.00'),
        discount_amount=Decimal('0.00'),
        total_amount=Decimal('10.00'),
    )


class TestAccessPolicy:
    def test_owner_and_admin_manage_booking(self, booking):
        AccessPolicy.ensure_can_manage_booking(OWNER, booking)
        AccessPolicy.ensure_can_manage_booking(ADMIN, booking)

    def test_stranger_cannot_manage_booking(self, booking):
        with pytest.raises(ForbiddenError):
            AccessPolicy.ensure_can_manage_booking(STRANGER, booking)

    def test_release_holds_requires_every_hold_to_be_own(self):
        AccessPolicy.ensure_can_release_holds(OWNER, [1, 1])
        AccessPolicy.ensure_can_release_holds(ADMIN, [1, 2])
        with pytest.raises(ForbiddenError):
            AccessPolicy.ensure_can_release_holds(OWNER, [1, 2])

    def test_admin_only_actions(self):
        AccessPolicy.ensure_admin(ADMIN)
        with pytest.raises(ForbiddenError):
            AccessPolicy.ensure_admin(ORGANIZER)

    def test_admin_counts_as_organizer(self):
        AccessPolicy.ensure_organizer(ADMIN)
        AccessPolicy.ensure_organizer(ORGANIZER)
        with pytest.raises(ForbiddenError):
            AccessPolicy.ensure_organizer(OWNER)

    def test_only_show_creator_schedules_show(self):
        show = Show(id=1, title='Hamlet', show_type='theater', created_by=ORGANIZER.id)

        AccessPolicy.ensure_can_schedule_show(ORGANIZER, show)
        AccessPolicy.ensure_can_schedule_show(ADMIN, show)
        with pytest.raises(ForbiddenError):
            AccessPolicy.ensure_can_schedule_show(OTHER_ORGANIZER, show)
