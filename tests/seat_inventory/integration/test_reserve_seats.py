"""
Seat holds against a real database: exclusivity, refresh, release and expiry
"""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from src.platform.exception.exceptions import (
    ForbiddenError,
    NotFoundError,
    SeatUnavailableError,
)
from src.service.seat_inventory.app.command.release_reservation_use_case import (
    ReleaseReservationUseCase,
)
from src.service.seat_inventory.app.command.reserve_seats_use_case import ReserveSeatsUseCase
from src.service.seat_inventory.app.command.sweep_expired_reservations_use_case import (
    SweepExpiredReservationsUseCase,
)
from src.service.seat_inventory.app.query.list_session_reservations_use_case import (
    ListSessionReservationsUseCase,
)
from tests.seat_inventory.fixtures import ADMIN, ALICE, BOB


SQLITE_TS = '%Y-%m-%d %H:%M:%S.%f'


async def _active_holds(make_uow, schedule_id: int):
    async with make_uow() as uow:
        return await uow.seat_reservation_repo.list_active(
            schedule_id=schedule_id, now=datetime.now(timezone.utc)
        )


class TestReserveSeats:
    @pytest.mark.asyncio
    async def test_overlapping_reserve_loses_and_holds_nothing(
        self, make_uow, seed_schedule, seat_labels
    ):
        schedule = await seed_schedule(capacity=100)
        seats = await seat_labels(schedule.venue_id)

        first = await ReserveSeatsUseCase(uow=make_uow()).reserve(
            schedule_id=schedule.id,
            seat_ids=[seats['A1'], seats['A2']],
            user_id=ALICE.id,
            session_id='s1',
        )
        with pytest.raises(SeatUnavailableError) as exc_info:
            await ReserveSeatsUseCase(uow=make_uow()).reserve(
                schedule_id=schedule.id,
                seat_ids=[seats['A2'], seats['A3']],
                user_id=BOB.id,
                session_id='s2',
            )

        assert [h.seat_id for h in first.holds] == [seats['A1'], seats['A2']]
        assert exc_info.value.seat_labels == ['A2']
        assert exc_info.value.seat_ids == [seats['A2']]
        holds = await _active_holds(make_uow, schedule.id)
        assert {(h.seat_id, h.session_id) for h in holds} == {
            (seats['A1'], 's1'),
            (seats['A2'], 's1'),
        }

    @pytest.mark.asyncio
    async def test_concurrent_reserves_exactly_one_wins(
        self, make_uow, seed_schedule, seat_labels
    ):
        schedule = await seed_schedule(capacity=100)
        seats = await seat_labels(schedule.venue_id)

        results = await asyncio.gather(
            ReserveSeatsUseCase(uow=make_uow()).reserve(
                schedule_id=schedule.id,
                seat_ids=[seats['A1'], seats['A2']],
                user_id=ALICE.id,
                session_id='s1',
            ),
            ReserveSeatsUseCase(uow=make_uow()).reserve(
                schedule_id=schedule.id,
                seat_ids=[seats['A2'], seats['A3']],
                user_id=BOB.id,
                session_id='s2',
            ),
            return_exceptions=True,
        )

        winners = [r for r in results if not isinstance(r, BaseException)]
        losers = [r for r in results if isinstance(r, BaseException)]
        assert len(winners) == 1
        assert len(losers) == 1
        assert isinstance(losers[0], SeatUnavailableError)
        assert losers[0].seat_labels == ['A2']

        holds = await _active_holds(make_uow, schedule.id)
        assert {h.session_id for h in holds} == {winners[0].session_id}
        assert len(holds) == 2

    @pytest.mark.asyncio
    async def test_same_session_refreshes_its_holds(self, make_uow, seed_schedule, seat_labels):
        schedule = await seed_schedule()
        seats = await seat_labels(schedule.venue_id)

        first = await ReserveSeatsUseCase(uow=make_uow()).reserve(
            schedule_id=schedule.id, seat_ids=[seats['C1']], user_id=ALICE.id, session_id='s1'
        )
        second = await ReserveSeatsUseCase(uow=make_uow()).reserve(
            schedule_id=schedule.id,
            seat_ids=[seats['C1'], seats['C2']],
            user_id=ALICE.id,
            session_id='s1',
            ttl_minutes=20,
        )

        assert second.holds[0].id == first.holds[0].id
        assert second.holds[0].expires_at > first.holds[0].expires_at
        assert [h.seat_id for h in second.holds] == [seats['C1'], seats['C2']]
        assert len(await _active_holds(make_uow, schedule.id)) == 2

    @pytest.mark.asyncio
    async def test_session_id_generated_when_missing(self, make_uow, seed_schedule, seat_labels):
        schedule = await seed_schedule()
        seats = await seat_labels(schedule.venue_id)

        result = await ReserveSeatsUseCase(uow=make_uow()).reserve(
            schedule_id=schedule.id, seat_ids=[seats['D4']], user_id=ALICE.id
        )

        assert result.session_id
        assert result.expires_at is not None

    @pytest.mark.asyncio
    async def test_seat_from_another_venue_rejected(self, make_uow, seed_schedule, seat_labels):
        schedule = await seed_schedule(capacity=20)
        other = await seed_schedule(capacity=20)
        other_seats = await seat_labels(other.venue_id)

        with pytest.raises(NotFoundError):
            await ReserveSeatsUseCase(uow=make_uow()).reserve(
                schedule_id=schedule.id, seat_ids=[other_seats['A1']], user_id=ALICE.id
            )

    @pytest.mark.asyncio
    async def test_withheld_seat_cannot_be_held(self, make_uow, seed_schedule, seat_labels):
        schedule = await seed_schedule(capacity=100, total_seats=90)
        seats = await seat_labels(schedule.venue_id)

        with pytest.raises(SeatUnavailableError) as exc_info:
            await ReserveSeatsUseCase(uow=make_uow()).reserve(
                schedule_id=schedule.id,
                seat_ids=[seats['J1'], seats['J10']],
                user_id=ALICE.id,
            )

        assert exc_info.value.seat_labels == ['J10']


class TestReleaseAndExpireHolds:
    @pytest.mark.asyncio
    async def test_released_session_frees_seats(self, make_uow, seed_schedule, seat_labels):
        schedule = await seed_schedule()
        seats = await seat_labels(schedule.venue_id)
        await ReserveSeatsUseCase(uow=make_uow()).reserve(
            schedule_id=schedule.id, seat_ids=[seats['A1']], user_id=ALICE.id, session_id='s1'
        )

        with pytest.raises(ForbiddenError):
            await ReleaseReservationUseCase(uow=make_uow()).release(session_id='s1', actor=BOB)
        released = await ReleaseReservationUseCase(uow=make_uow()).release(
            session_id='s1', actor=ALICE
        )
        taken = await ReserveSeatsUseCase(uow=make_uow()).reserve(
            schedule_id=schedule.id, seat_ids=[seats['A1']], user_id=BOB.id, session_id='s2'
        )

        assert released == 1
        assert len(taken.holds) == 1

    @pytest.mark.asyncio
    async def test_session_holds_visible_to_owner_and_admin(
        self, make_uow, seed_schedule, seat_labels
    ):
        schedule = await seed_schedule()
        seats = await seat_labels(schedule.venue_id)
        await ReserveSeatsUseCase(uow=make_uow()).reserve(
            schedule_id=schedule.id, seat_ids=[seats['B2']], user_id=ALICE.id, session_id='s1'
        )

        own = await ListSessionReservationsUseCase(uow=make_uow()).list_session_holds(
            session_id='s1', actor=ALICE
        )
        seen_by_admin = await ListSessionReservationsUseCase(uow=make_uow()).list_session_holds(
            session_id='s1', actor=ADMIN
        )

        assert [h.seat_id for h in own.holds] == [seats['B2']]
        assert seen_by_admin.show_schedule_id == schedule.id
        with pytest.raises(ForbiddenError):
            await ListSessionReservationsUseCase(uow=make_uow()).list_session_holds(
                session_id='s1', actor=BOB
            )
        with pytest.raises(NotFoundError):
            await ListSessionReservationsUseCase(uow=make_uow()).list_session_holds(
                session_id='nobody', actor=ALICE
            )

    @pytest.mark.asyncio
    async def test_sweep_only_removes_expired_holds(self, make_uow, seed_schedule, seat_labels):
        schedule = await seed_schedule()
        seats = await seat_labels(schedule.venue_id)
        await ReserveSeatsUseCase(uow=make_uow()).reserve(
            schedule_id=schedule.id,
            seat_ids=[seats['A1'], seats['A2']],
            user_id=ALICE.id,
            session_id='s1',
            ttl_minutes=10,
        )

        before_ttl = await SweepExpiredReservationsUseCase(uow=make_uow()).sweep_expired()
        after_ttl = await SweepExpiredReservationsUseCase(uow=make_uow()).sweep_expired(
            now=datetime.now(timezone.utc) + timedelta(minutes=11)
        )

        assert before_ttl == 0
        assert after_ttl == 2
        assert await _active_holds(make_uow, schedule.id) == []

    @pytest.mark.asyncio
    async def test_expired_hold_does_not_block_a_new_reserve(
        self, make_uow, seed_schedule, seat_labels, run_sql
    ):
        schedule = await seed_schedule()
        seats = await seat_labels(schedule.venue_id)
        await ReserveSeatsUseCase(uow=make_uow()).reserve(
            schedule_id=schedule.id, seat_ids=[seats['A1']], user_id=ALICE.id, session_id='s1'
        )
        # Lapse the hold without running the sweeper
        await run_sql(
            'UPDATE seat_reservation SET expires_at = :past',
            {'past': (datetime.now(timezone.utc) - timedelta(minutes=1)).strftime(SQLITE_TS)},
        )

        taken = await ReserveSeatsUseCase(uow=make_uow()).reserve(
            schedule_id=schedule.id, seat_ids=[seats['A1']], user_id=BOB.id, session_id='s2'
        )

        assert taken.holds[0].session_id == 's2'
        holds = await _active_holds(make_uow, schedule.id)
        assert [h.session_id for h in holds] == ['s2']
