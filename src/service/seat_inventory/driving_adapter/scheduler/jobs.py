"""Background jobs started from the FastAPI lifespan."""

from typing import List

from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.service.seat_inventory.app.command.sweep_expired_reservations_use_case import (
    SweepExpiredReservationsUseCase,
)
from src.service.seat_inventory.app.command.synchronize_seat_counts_use_case import (
    SynchronizeSeatCountsUseCase,
)
from src.service.seat_inventory.driving_adapter.scheduler.periodic_job_runner import (
    PeriodicJobRunner,
)


async def sweep_expired_reservations() -> int:
    use_case = SweepExpiredReservationsUseCase(uow=container.unit_of_work())
    return await use_case.sweep_expired()


async def synchronize_all_seat_counts() -> int:
    use_case = SynchronizeSeatCountsUseCase(uow=container.unit_of_work())
    reports = await use_case.synchronize_all()
    return len(reports)


def build_periodic_jobs() -> List[PeriodicJobRunner]:
    return [
        PeriodicJobRunner(
            name='reservation-sweeper',
            job=sweep_expired_reservations,
            interval=settings.RESERVATION_SWEEP_INTERVAL_SECONDS,
        ),
        PeriodicJobRunner(
            name='seat-count-sync',
            job=synchronize_all_seat_counts,
            interval=settings.CAPACITY_SYNC_INTERVAL_SECONDS,
            initial_delay=min(60.0, settings.CAPACITY_SYNC_INTERVAL_SECONDS),
        ),
    ]
