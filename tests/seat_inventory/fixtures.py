from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Dict, Optional

import pytest

from src.platform.database.db_setting import get_session_maker
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.seat_inventory.app.command.create_show_schedule_use_case import (
    CreateShowScheduleUseCase,
)
from src.service.seat_inventory.app.command.create_show_use_case import CreateShowUseCase
from src.service.seat_inventory.app.command.create_venue_use_case import CreateVenueUseCase
from src.service.seat_inventory.domain.entity.show_entity import ShowSchedule
from src.service.seat_inventory.domain.entity.user_entity import UserEntity
from src.service.seat_inventory.domain.enum.user_role import UserRole


ALICE = UserEntity(id=1, email='alice@example.com', name='Alice', role=UserRole.USER)
BOB = UserEntity(id=2, email='bob@example.com', name='Bob', role=UserRole.USER)
ORGANIZER = UserEntity(id=50, email='organizer@example.com', name='Olive', role=UserRole.ORGANIZER)
ADMIN = UserEntity(id=99, email='admin@example.com', name='Ada', role=UserRole.ADMIN)

USERS = {'alice': ALICE, 'bob': BOB, 'organizer': ORGANIZER, 'admin': ADMIN}


@pytest.fixture
def booking_state():
    return {}


@pytest.fixture
def make_uow():
    """Fresh unit of work bound to the running loop; call it inside the test."""

    def _make() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(get_session_maker())

    return _make


@pytest.fixture
def seed_schedule(make_uow):
    """Create venue + show + schedule through the use cases and return the schedule."""

    async def _seed(
        *,
        capacity: int = 100,
        show_type: str = 'concert',
        starts_at: Optional[datetime] = None,
        base_price: Decimal = Decimal('100.00'),
        total_seats: Optional[int] = None,
    ) -> ShowSchedule:
        venue = await CreateVenueUseCase(uow=make_uow()).create_venue(
            name='Grand Hall', capacity=capacity
        )
        show = await CreateShowUseCase(uow=make_uow()).create_show(
            title='Evening Performance', show_type=show_type, actor=ORGANIZER
        )
        assert show.id is not None
        return await CreateShowScheduleUseCase(uow=make_uow()).create_schedule(
            show_id=show.id,
            venue_id=venue.id,
            starts_at=starts_at or datetime.now(timezone.utc) + timedelta(days=2),
            base_price=base_price,
            actor=ORGANIZER,
            total_seats=total_seats,
        )

    return _seed


@pytest.fixture
def seat_labels(make_uow):
    """Map seat labels ("A1") to ids for a venue."""

    async def _labels(venue_id: int) -> Dict[str, int]:
        async with make_uow() as uow:
            seats = await uow.venue_repo.list_seats(venue_id=venue_id)
        return {seat.label: seat.id for seat in seats}  # type: ignore[misc]

    return _labels


@pytest.fixture
def load_schedule(make_uow):
    async def _load(schedule_id: int) -> ShowSchedule:
        async with make_uow() as uow:
            schedule = await uow.show_schedule_repo.get_by_id(schedule_id=schedule_id)
        assert schedule is not None
        return schedule

    return _load


# Common test fixtures for unit tests
@pytest.fixture
def mock_uow():
    """Mock unit of work for testing."""
    from unittest.mock import AsyncMock, Mock

    uow = Mock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=None)
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.venue_repo = AsyncMock()
    uow.show_schedule_repo = AsyncMock()
    uow.seat_reservation_repo = AsyncMock()
    uow.booking_repo = AsyncMock()
    return uow
