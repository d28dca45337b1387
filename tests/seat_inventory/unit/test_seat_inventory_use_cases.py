"""
Use case unit tests against a mocked unit of work
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from src.platform.exception.exceptions import (
    BookingWindowClosedError,
    DomainError,
    ForbiddenError,
    NotFoundError,
)
from src.service.seat_inventory.app.command.commit_booking_use_case import CommitBookingUseCase
from src.service.seat_inventory.app.command.release_reservation_use_case import (
    ReleaseReservationUseCase,
)
from src.service.seat_inventory.app.command.reserve_seats_use_case import ReserveSeatsUseCase
from src.service.seat_inventory.app.command.synchronize_seat_counts_use_case import (
    SynchronizeSeatCountsUseCase,
)
from src.service.seat_inventory.domain.booking_window_policy import BookingWindowPolicy
from src.service.seat_inventory.domain.entity.show_entity import Show, ShowSchedule
from src.service.seat_inventory.domain.entity.venue_entity import Venue
from src.service.seat_inventory.driven_adapter.policy.static_discount_policy import (
    StaticDiscountPolicy,
)
from tests.seat_inventory.fixtures import ADMIN, ALICE, BOB


def _schedule(*, schedule_id: int = 1, starts_at=None, seats_available: int = 100):
    return ShowSchedule(
        id=schedule_id,
        show_id=1,
        venue_id=3,
        starts_at=starts_at or datetime.now(timezone.utc) + timedelta(days=1),
        base_price=Decimal('100.00'),
        total_seats=100,
        seats_available=seats_available,
    )


class TestReleaseReservationUseCase:
    @pytest.fixture
    def use_case(self, mock_uow):
        return ReleaseReservationUseCase(uow=mock_uow)

    @pytest.mark.asyncio
    async def test_unknown_session_is_a_no_op(self, use_case, mock_uow):
        mock_uow.seat_reservation_repo.list_owner_ids_by_session.return_value = []

        assert await use_case.release(session_id='gone', actor=ALICE) == 0
        mock_uow.seat_reservation_repo.delete_by_session.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_owner_releases_session(self, use_case, mock_uow):
        mock_uow.seat_reservation_repo.list_owner_ids_by_session.return_value = [ALICE.id]
        mock_uow.seat_reservation_repo.delete_by_session.return_value = 2

        assert await use_case.release(session_id='s1', actor=ALICE) == 2
        mock_uow.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_stranger_cannot_release(self, use_case, mock_uow):
        mock_uow.seat_reservation_repo.list_owner_ids_by_session.return_value = [ALICE.id]

        with pytest.raises(ForbiddenError):
            await use_case.release(session_id='s1', actor=BOB)
        mock_uow.seat_reservation_repo.delete_by_session.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_admin_releases_any_session(self, use_case, mock_uow):
        mock_uow.seat_reservation_repo.list_owner_ids_by_session.return_value = [ALICE.id]
        mock_uow.seat_reservation_repo.delete_by_session.return_value = 1

        assert await use_case.release(session_id='s1', actor=ADMIN) == 1


class TestReserveSeatsUseCase:
    @pytest.fixture
    def use_case(self, mock_uow):
        return ReserveSeatsUseCase(uow=mock_uow)

    @pytest.mark.asyncio
    @pytest.mark.parametrize('seat_ids', [[], [1, 1], list(range(1, 12))])
    async def test_invalid_seat_lists_rejected_before_any_query(
        self, use_case, mock_uow, seat_ids
    ):
        with pytest.raises(DomainError):
            await use_case.reserve(schedule_id=1, seat_ids=seat_ids, user_id=ALICE.id)
        mock_uow.show_schedule_repo.get_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_schedule(self, use_case, mock_uow):
        mock_uow.show_schedule_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await use_case.reserve(schedule_id=404, seat_ids=[1], user_id=ALICE.id)
        mock_uow.commit.assert_not_awaited()


class TestCommitBookingUseCase:
    @pytest.fixture
    def use_case(self, mock_uow):
        return CommitBookingUseCase(
            uow=mock_uow,
            booking_window_policy=BookingWindowPolicy(),
            discount_policy=StaticDiscountPolicy(promotion_codes={}),
        )

    @pytest.mark.asyncio
    async def test_closed_window_writes_nothing(self, use_case, mock_uow):
        started = datetime.now(timezone.utc) - timedelta(minutes=5)
        mock_uow.show_schedule_repo.get_for_update.return_value = _schedule(starts_at=started)
        mock_uow.show_schedule_repo.get_show.return_value = Show(
            id=1, title='Hamlet', show_type='theater', created_by=50
        )

        with pytest.raises(BookingWindowClosedError):
            await use_case.commit(user_id=ALICE.id, schedule_id=1, seat_ids=[1, 2])

        mock_uow.booking_repo.create.assert_not_awaited()
        mock_uow.show_schedule_repo.save_seat_counts.assert_not_awaited()
        mock_uow.commit.assert_not_awaited()


class TestSynchronizeSeatCountsUseCase:
    @pytest.fixture
    def use_case(self, mock_uow):
        mock_uow.venue_repo.get_by_id.return_value = Venue(id=3, name='Hall', capacity=100)
        mock_uow.venue_repo.count_seats.return_value = 100
        mock_uow.booking_repo.heal_release_flags.return_value = 0
        mock_uow.booking_repo.count_active_seat_bookings.return_value = 2
        return SynchronizeSeatCountsUseCase(uow=mock_uow)

    @pytest.mark.asyncio
    async def test_consistent_counter_is_not_written(self, use_case, mock_uow):
        mock_uow.show_schedule_repo.get_for_update.return_value = _schedule(seats_available=98)

        report = await use_case.synchronize_schedule(schedule_id=1)

        assert not report.changed
        mock_uow.show_schedule_repo.save_seat_counts.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_drifted_counter_is_written(self, use_case, mock_uow):
        mock_uow.show_schedule_repo.get_for_update.return_value = _schedule(seats_available=100)

        report = await use_case.synchronize_schedule(schedule_id=1)

        assert report.seats_available == 98
        saved = mock_uow.show_schedule_repo.save_seat_counts.await_args.kwargs['schedule']
        assert saved.seats_available == 98

    @pytest.mark.asyncio
    async def test_vanished_schedules_are_skipped(self, use_case, mock_uow):
        mock_uow.show_schedule_repo.list_ids.return_value = [1, 2]
        mock_uow.show_schedule_repo.get_for_update.side_effect = [
            None,
            _schedule(schedule_id=2, seats_available=98),
        ]

        reports = await use_case.synchronize_all()

        assert [r.schedule_id for r in reports] == [2]
