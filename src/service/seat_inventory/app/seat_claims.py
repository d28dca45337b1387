"""
Seat claim checks shared by holds, commits and availability queries.

A seat can be claimed for a schedule when it belongs to the schedule's venue,
is not withheld by the capacity limit, has no active seat booking, and has no
live hold owned by somebody else.
"""

from datetime import datetime
from typing import List, Optional, Sequence

import attrs

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DomainError, NotFoundError, SeatUnavailableError
from src.service.seat_inventory.domain.capacity_withholding_domain import withheld_seat_ids
from src.service.seat_inventory.domain.entity.seat_reservation_entity import SeatReservation
from src.service.seat_inventory.domain.entity.show_entity import ShowSchedule
from src.service.seat_inventory.domain.entity.venue_entity import Seat


@attrs.define(frozen=True)
class SeatClaimCheck:
    own_holds: List[SeatReservation]
    conflicting_seats: List[Seat]

    def raise_if_conflicting(self) -> None:
        if self.conflicting_seats:
            raise seat_unavailable(self.conflicting_seats)


def seat_unavailable(seats: Sequence[Seat]) -> SeatUnavailableError:
    return SeatUnavailableError(
        seat_ids=[s.id for s in seats if s.id is not None],
        seat_labels=[s.label for s in seats],
    )


def normalize_seat_ids(seat_ids: Sequence[int], *, limit: int) -> List[int]:
    if not seat_ids:
        raise DomainError('At least one seat must be selected')
    unique = list(dict.fromkeys(seat_ids))
    if len(unique) != len(seat_ids):
        raise DomainError('Duplicate seats in request')
    if len(unique) > limit:
        raise DomainError(f'Cannot select more than {limit} seats at once')
    return unique


async def load_schedule_seats(
    uow: AbstractUnitOfWork, *, schedule: ShowSchedule, seat_ids: Sequence[int]
) -> List[Seat]:
    """Requested seats in request order; all of them must belong to the schedule's venue."""
    seats = await uow.venue_repo.get_seats_by_ids(seat_ids=seat_ids)
    by_id = {s.id: s for s in seats if s.venue_id == schedule.venue_id}
    missing = [seat_id for seat_id in seat_ids if seat_id not in by_id]
    if missing:
        raise NotFoundError(f'Seats not found at this venue: {missing}')
    return [by_id[seat_id] for seat_id in seat_ids]


async def withheld_seats_for_schedule(
    uow: AbstractUnitOfWork, *, schedule: ShowSchedule
) -> set[int]:
    physical_seats = await uow.venue_repo.count_seats(venue_id=schedule.venue_id)
    if physical_seats <= schedule.total_seats:
        return set()
    venue_seats = await uow.venue_repo.list_seats(venue_id=schedule.venue_id)
    return withheld_seat_ids(venue_seats, schedule.total_seats)


async def check_seat_claims(
    uow: AbstractUnitOfWork,
    *,
    schedule: ShowSchedule,
    seats: Sequence[Seat],
    session_id: Optional[str],
    now: datetime,
    user_id: Optional[int] = None,
) -> SeatClaimCheck:
    """
    Split live holds on `seats` into our own and everyone else's.

    A hold is ours when it carries `session_id`, or `user_id` when given.
    """
    assert schedule.id is not None
    seat_ids = [s.id for s in seats if s.id is not None]

    holds = await uow.seat_reservation_repo.list_active(
        schedule_id=schedule.id, now=now, seat_ids=seat_ids
    )
    booked = await uow.booking_repo.booked_seat_ids(schedule_id=schedule.id, seat_ids=seat_ids)
    withheld = await withheld_seats_for_schedule(uow, schedule=schedule)

    own_holds: List[SeatReservation] = []
    held_by_others: set[int] = set()
    for hold in holds:
        is_own = (session_id is not None and hold.session_id == session_id) or (
            user_id is not None and hold.user_id == user_id
        )
        if is_own:
            own_holds.append(hold)
        else:
            held_by_others.add(hold.seat_id)

    blocked = held_by_others | booked | withheld
    return SeatClaimCheck(
        own_holds=own_holds,
        conflicting_seats=[s for s in seats if s.id in blocked],
    )
