"""
Seat count reconciliation.

Re-derives a schedule's `total_seats` and `seats_available` from ground truth
(physical seat rows and active seat bookings). Impossible or suspicious states
are reported as anomalies; the recomputed values are applied regardless.
"""

from enum import StrEnum
from typing import List

import attrs

from src.service.seat_inventory.domain.entity.show_entity import ShowSchedule


class AnomalyKind(StrEnum):
    TOTAL_EXCEEDS_PHYSICAL = 'total_exceeds_physical_seats'
    TOTAL_BELOW_PHYSICAL = 'total_below_physical_seats'
    CAPACITY_MISMATCH = 'venue_capacity_mismatch'
    BOOKED_EXCEEDS_TOTAL = 'booked_exceeds_total'
    COUNTER_DRIFT = 'seats_available_drift'
    RELEASED_FLAG_DRIFT = 'seat_booking_release_flag_drift'


@attrs.define(frozen=True)
class SeatCountAnomaly:
    kind: AnomalyKind
    message: str


@attrs.define(frozen=True)
class SeatCountSyncReport:
    schedule_id: int
    venue_id: int
    physical_seats: int
    venue_capacity: int
    active_seat_bookings: int
    previous_total_seats: int
    previous_seats_available: int
    total_seats: int
    seats_available: int
    healed_seat_bookings: int = 0
    anomalies: List[SeatCountAnomaly] = attrs.field(factory=list)

    @property
    def changed(self) -> bool:
        return (
            self.previous_total_seats != self.total_seats
            or self.previous_seats_available != self.seats_available
        )

    @property
    def has_anomalies(self) -> bool:
        return bool(self.anomalies)


def reconcile_seat_counts(
    *,
    schedule: ShowSchedule,
    physical_seats: int,
    venue_capacity: int,
    active_seat_bookings: int,
    healed_seat_bookings: int = 0,
) -> tuple[ShowSchedule, SeatCountSyncReport]:
    """
    Return the synchronized schedule and a report of what was found.

    `total_seats` follows the physical seat count; a venue without seat rows
    falls back to its declared capacity. A total moved in either direction is
    reported, including a reduced allocation that gets widened.
    """
    assert schedule.id is not None
    anomalies: List[SeatCountAnomaly] = []

    total_seats = physical_seats if physical_seats > 0 else venue_capacity

    if schedule.total_seats > total_seats:
        anomalies.append(
            SeatCountAnomaly(
                kind=AnomalyKind.TOTAL_EXCEEDS_PHYSICAL,
                message=(
                    f'schedule {schedule.id} sells {schedule.total_seats} seats but venue '
                    f'{schedule.venue_id} has {total_seats}; lowered to {total_seats}'
                ),
            )
        )
    elif schedule.total_seats < total_seats:
        anomalies.append(
            SeatCountAnomaly(
                kind=AnomalyKind.TOTAL_BELOW_PHYSICAL,
                message=(
                    f'schedule {schedule.id} sells {schedule.total_seats} of the '
                    f'{total_seats} seats in venue {schedule.venue_id}; raised to {total_seats}, '
                    'withheld seats are back on sale'
                ),
            )
        )

    if physical_seats > 0 and venue_capacity != physical_seats:
        anomalies.append(
            SeatCountAnomaly(
                kind=AnomalyKind.CAPACITY_MISMATCH,
                message=(
                    f'venue {schedule.venue_id} declares capacity {venue_capacity} '
                    f'but has {physical_seats} seats'
                ),
            )
        )

    if active_seat_bookings > total_seats:
        anomalies.append(
            SeatCountAnomaly(
                kind=AnomalyKind.BOOKED_EXCEEDS_TOTAL,
                message=(
                    f'schedule {schedule.id} has {active_seat_bookings} active seat bookings '
                    f'for {total_seats} seats'
                ),
            )
        )

    seats_available = max(0, total_seats - active_seat_bookings)
    if schedule.seats_available != seats_available:
        anomalies.append(
            SeatCountAnomaly(
                kind=AnomalyKind.COUNTER_DRIFT,
                message=(
                    f'schedule {schedule.id} counted {schedule.seats_available} available, '
                    f'derived {seats_available}'
                ),
            )
        )

    if healed_seat_bookings:
        anomalies.append(
            SeatCountAnomaly(
                kind=AnomalyKind.RELEASED_FLAG_DRIFT,
                message=(
                    f'schedule {schedule.id}: {healed_seat_bookings} seat bookings had a '
                    'release flag out of step with their booking status'
                ),
            )
        )

    synchronized = schedule.synchronized(total_seats=total_seats, seats_available=seats_available)
    report = SeatCountSyncReport(
        schedule_id=schedule.id,
        venue_id=schedule.venue_id,
        physical_seats=physical_seats,
        venue_capacity=venue_capacity,
        active_seat_bookings=active_seat_bookings,
        previous_total_seats=schedule.total_seats,
        previous_seats_available=schedule.seats_available,
        total_seats=synchronized.total_seats,
        seats_available=synchronized.seats_available,
        healed_seat_bookings=healed_seat_bookings,
        anomalies=anomalies,
    )
    return synchronized, report
