from datetime import datetime, timezone
from decimal import Decimal

import pytest

from src.platform.exception.exceptions import DomainError, NotFoundError, SeatUnavailableError
from src.service.seat_inventory.app.command.commit_booking_use_case import CommitBookingUseCase
from src.service.seat_inventory.app.command.create_venue_use_case import CreateVenueUseCase
from src.service.seat_inventory.app.command.reserve_seats_use_case import ReserveSeatsUseCase
from src.service.seat_inventory.app.command.update_seat_price_multiplier_use_case import (
    UpdateSeatPriceMultiplierUseCase,
)
from src.service.seat_inventory.app.query.get_seat_map_use_case import GetSeatMapUseCase
from src.service.seat_inventory.app.query.seat_availability_use_case import (
    SeatAvailabilityUseCase,
)
from src.service.seat_inventory.domain.booking_window_policy import BookingWindowPolicy
from src.service.seat_inventory.domain.enum.seat_status import SeatStatus
from src.service.seat_inventory.driven_adapter.policy.static_discount_policy import (
    StaticDiscountPolicy,
)
from tests.seat_inventory.fixtures import ALICE, BOB


async def _book(make_uow, *, schedule_id: int, seat_ids, user_id: int = ALICE.id):
    return await CommitBookingUseCase(
        uow=make_uow(),
        booking_window_policy=BookingWindowPolicy(),
        discount_policy=StaticDiscountPolicy(promotion_codes={}),
    ).commit(user_id=user_id, schedule_id=schedule_id, seat_ids=seat_ids)


class TestSeatMap:
    @pytest.mark.asyncio
    async def test_statuses_and_counts(self, make_uow, seed_schedule, seat_labels):
        schedule = await seed_schedule(capacity=100, total_seats=90)
        seats = await seat_labels(schedule.venue_id)
        await _book(make_uow, schedule_id=schedule.id, seat_ids=[seats['A1']])
        await ReserveSeatsUseCase(uow=make_uow()).reserve(
            schedule_id=schedule.id, seat_ids=[seats['A2']], user_id=BOB.id, session_id='s2'
        )

        seat_map = await GetSeatMapUseCase(uow=make_uow()).get_seat_map(schedule_id=schedule.id)

        by_label = {f'{s.row_label}{s.seat_number}': s for r in seat_map.rows for s in r.seats}
        assert by_label['A1'].status == SeatStatus.SOLD
        assert by_label['A2'].status == SeatStatus.RESERVED
        assert by_label['J10'].status == SeatStatus.RESERVED
        assert by_label['A3'].status == SeatStatus.AVAILABLE
        assert by_label['A3'].price == Decimal('200.00')
        assert [r.row_label for r in seat_map.rows] == list('ABCDEFGHIJ')

        meta = seat_map.metadata
        assert (meta.total_rows, meta.max_seats_per_row) == (10, 10)
        assert (meta.sold_count, meta.withheld_count) == (1, 10)
        assert meta.reserved_count == 11
        assert meta.available_count == 88
        assert meta.total_seats == 90
        assert meta.seats_available == 89
        assert meta.has_capacity_limitation

    @pytest.mark.asyncio
    async def test_unknown_schedule(self, make_uow):
        with pytest.raises(NotFoundError):
            await GetSeatMapUseCase(uow=make_uow()).get_seat_map(schedule_id=404)

    @pytest.mark.asyncio
    async def test_sold_plus_held_never_exceeds_total(self, make_uow, seed_schedule, seat_labels):
        schedule = await seed_schedule(capacity=20, total_seats=5)
        seats = await seat_labels(schedule.venue_id)
        seat_map = await GetSeatMapUseCase(uow=make_uow()).get_seat_map(schedule_id=schedule.id)
        sellable = [s.seat_id for r in seat_map.rows for s in r.seats if s.status == 'available']

        await _book(make_uow, schedule_id=schedule.id, seat_ids=sellable[:3])
        await ReserveSeatsUseCase(uow=make_uow()).reserve(
            schedule_id=schedule.id, seat_ids=sellable[3:], user_id=BOB.id
        )

        async with make_uow() as uow:
            booked = await uow.booking_repo.count_active_seat_bookings(schedule_id=schedule.id)
            held = await uow.seat_reservation_repo.list_active(
                schedule_id=schedule.id, now=datetime.now(timezone.utc)
            )
        assert len(sellable) == 5
        assert booked + len(held) <= 5
        assert len(seats) == 20

    @pytest.mark.asyncio
    async def test_holds_and_bookings_exhaust_limited_schedule(
        self, make_uow, seed_schedule, seat_labels
    ):
        schedule = await seed_schedule(capacity=20, total_seats=6)
        seats = await seat_labels(schedule.venue_id)
        seat_map = await GetSeatMapUseCase(uow=make_uow()).get_seat_map(schedule_id=schedule.id)
        sellable = [s.seat_id for r in seat_map.rows for s in r.seats if s.status == 'available']
        assert len(sellable) == 6

        async def occupied() -> int:
            async with make_uow() as uow:
                booked = await uow.booking_repo.count_active_seat_bookings(
                    schedule_id=schedule.id
                )
                held = await uow.seat_reservation_repo.list_active(
                    schedule_id=schedule.id, now=datetime.now(timezone.utc)
                )
            return booked + len(held)

        for step, pair in enumerate([sellable[0:2], sellable[2:4], sellable[4:6]]):
            if step % 2:
                await _book(make_uow, schedule_id=schedule.id, seat_ids=pair, user_id=BOB.id)
            else:
                await ReserveSeatsUseCase(uow=make_uow()).reserve(
                    schedule_id=schedule.id, seat_ids=pair, user_id=ALICE.id, session_id=f's{step}'
                )
            assert await occupied() == 2 * (step + 1)
            assert await occupied() <= 6

        remaining = sorted(set(seats.values()) - set(sellable))
        for seat_id in [sellable[0], remaining[0], remaining[-1]]:
            with pytest.raises(SeatUnavailableError):
                await ReserveSeatsUseCase(uow=make_uow()).reserve(
                    schedule_id=schedule.id, seat_ids=[seat_id], user_id=BOB.id, session_id='late'
                )
        assert await occupied() == 6
        exhausted = await GetSeatMapUseCase(uow=make_uow()).get_seat_map(schedule_id=schedule.id)
        assert exhausted.metadata.available_count == 0


class TestSeatAvailability:
    @pytest.mark.asyncio
    async def test_single_seat_availability(self, make_uow, seed_schedule, seat_labels):
        schedule = await seed_schedule(capacity=100, total_seats=90)
        other = await seed_schedule(capacity=10)
        seats = await seat_labels(schedule.venue_id)
        await ReserveSeatsUseCase(uow=make_uow()).reserve(
            schedule_id=schedule.id, seat_ids=[seats['A2']], user_id=BOB.id
        )
        use_case = SeatAvailabilityUseCase(uow=make_uow())

        assert await use_case.is_available(seat_id=seats['A1'], schedule_id=schedule.id)
        assert not await use_case.is_available(seat_id=seats['A2'], schedule_id=schedule.id)
        assert not await use_case.is_available(seat_id=seats['J10'], schedule_id=schedule.id)
        assert not await use_case.is_available(seat_id=seats['A1'], schedule_id=other.id)
        assert not await use_case.is_available(seat_id=99999, schedule_id=schedule.id)

    @pytest.mark.asyncio
    async def test_available_seat_listing(self, make_uow, seed_schedule, seat_labels):
        schedule = await seed_schedule(capacity=100, total_seats=90)
        seats = await seat_labels(schedule.venue_id)
        await _book(make_uow, schedule_id=schedule.id, seat_ids=[seats['A1'], seats['A2']])
        use_case = SeatAvailabilityUseCase(uow=make_uow())

        available = await use_case.available_seats(
            venue_id=schedule.venue_id, schedule_id=schedule.id
        )
        mismatched = await use_case.available_seats(
            venue_id=schedule.venue_id + 1, schedule_id=schedule.id
        )

        assert len(available) == 88
        assert seats['A1'] not in {s.id for s in available}
        assert mismatched == []


class TestVenueAdministration:
    @pytest.mark.asyncio
    async def test_generate_seats_only_once(self, make_uow):
        venue = await CreateVenueUseCase(uow=make_uow()).create_venue(
            name='Studio', capacity=12, generate_seats=False
        )

        created = await CreateVenueUseCase(uow=make_uow()).generate_seats(venue_id=venue.id)

        assert venue.seat_count == 0
        assert created == 12
        with pytest.raises(DomainError):
            await CreateVenueUseCase(uow=make_uow()).generate_seats(venue_id=venue.id)
        with pytest.raises(NotFoundError):
            await CreateVenueUseCase(uow=make_uow()).generate_seats(venue_id=404)

    @pytest.mark.asyncio
    async def test_price_multiplier_changes_future_prices_only(
        self, make_uow, seed_schedule, seat_labels
    ):
        schedule = await seed_schedule(capacity=100, base_price=Decimal('40.00'))
        seats = await seat_labels(schedule.venue_id)
        before = await _book(make_uow, schedule_id=schedule.id, seat_ids=[seats['F1']])

        seat = await UpdateSeatPriceMultiplierUseCase(uow=make_uow()).update(
            seat_id=seats['F2'], price_multiplier=Decimal('1.25')
        )
        after = await _book(make_uow, schedule_id=schedule.id, seat_ids=[seats['F2']])

        assert seat.price_multiplier == Decimal('1.25')
        assert before.total_amount == Decimal('40.00')
        assert after.total_amount == Decimal('50.00')
