from datetime import datetime, timezone
from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seat_inventory_metrics import metrics
from src.service.seat_inventory.domain.seat_count_reconciliation import (
    SeatCountSyncReport,
    reconcile_seat_counts,
)


class SynchronizeSeatCountsUseCase:
    """
    Re-derive `total_seats` / `seats_available` from seats and bookings.

    Each schedule is handled in its own short transaction with the schedule
    row locked, so a full run never blocks the booking path for long.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def synchronize_schedule(self, *, schedule_id: int) -> SeatCountSyncReport:
        with self.tracer.start_as_current_span(
            'use_case.synchronize_schedule', attributes={'schedule.id': schedule_id}
        ):
            async with self.uow:
                schedule = await self.uow.show_schedule_repo.get_for_update(
                    schedule_id=schedule_id
                )
                if not schedule:
                    raise NotFoundError('Show schedule not found')
                venue = await self.uow.venue_repo.get_by_id(venue_id=schedule.venue_id)
                if not venue:
                    raise NotFoundError('Venue not found')

                physical_seats = await self.uow.venue_repo.count_seats(venue_id=schedule.venue_id)
                healed = await self.uow.booking_repo.heal_release_flags(schedule_id=schedule_id)
                active_seat_bookings = await self.uow.booking_repo.count_active_seat_bookings(
                    schedule_id=schedule_id
                )

                synchronized, report = reconcile_seat_counts(
                    schedule=schedule,
                    physical_seats=physical_seats,
                    venue_capacity=venue.capacity,
                    active_seat_bookings=active_seat_bookings,
                    healed_seat_bookings=healed,
                )
                if report.changed:
                    await self.uow.show_schedule_repo.save_seat_counts(schedule=synchronized)
                await self.uow.commit()

            self._log_report(report)
            metrics.record_seats_available(
                schedule_id=schedule_id,
                seats_available=report.seats_available,
                started=schedule.starts_at <= datetime.now(timezone.utc),
            )
            return report

    @Logger.io
    async def synchronize_venue(self, *, venue_id: int) -> List[SeatCountSyncReport]:
        async with self.uow:
            venue = await self.uow.venue_repo.get_by_id(venue_id=venue_id)
            if not venue:
                raise NotFoundError('Venue not found')
            schedule_ids = await self.uow.show_schedule_repo.list_ids(venue_id=venue_id)

        return await self._synchronize_many(schedule_ids)

    @Logger.io
    async def synchronize_all(self) -> List[SeatCountSyncReport]:
        async with self.uow:
            schedule_ids = await self.uow.show_schedule_repo.list_ids()

        reports = await self._synchronize_many(schedule_ids)
        corrected = sum(1 for r in reports if r.changed)
        Logger.base.info(
            f'🔄 [SYNC] Checked {len(reports)} schedules, corrected {corrected}, '
            f'{sum(len(r.anomalies) for r in reports)} anomalies'
        )
        return reports

    async def _synchronize_many(self, schedule_ids: List[int]) -> List[SeatCountSyncReport]:
        reports: List[SeatCountSyncReport] = []
        for schedule_id in schedule_ids:
            try:
                reports.append(await self.synchronize_schedule(schedule_id=schedule_id))
            except NotFoundError:
                # Deleted after it was listed
                Logger.base.info(f'🔄 [SYNC] schedule={schedule_id} vanished; skipped')
        return reports

    @staticmethod
    def _log_report(report: SeatCountSyncReport) -> None:
        for anomaly in report.anomalies:
            Logger.base.warning(f'⚠️ [SYNC] {anomaly.kind}: {anomaly.message}')

        if report.changed:
            Logger.base.info(
                f'🔄 [SYNC] schedule={report.schedule_id} total '
                f'{report.previous_total_seats}->{report.total_seats}, available '
                f'{report.previous_seats_available}->{report.seats_available}'
            )

        metrics.record_seat_count_sync(
            result='corrected' if report.changed else 'unchanged',
            anomaly_kinds=[a.kind.value for a in report.anomalies],
        )
