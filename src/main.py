"""
Production FastAPI Application

Seat inventory API plus the background expiry sweeper and seat count sync.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import cleanup, container, setup
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.db_setting import create_db_and_tables, dispose_engines, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
import src.service.seat_inventory.driven_adapter.model  # noqa: F401
from src.service.seat_inventory.driving_adapter.scheduler.jobs import build_periodic_jobs


SERVICE_NAME = 'seat-inventory-service'


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Seat Inventory] Starting up...')

    # Setup OpenTelemetry tracing (OTLP export when OTEL_EXPORTER_OTLP_ENDPOINT is set)
    tracing = TracingConfig(service_name=SERVICE_NAME)
    tracing.setup()
    Logger.base.info('📊 [Seat Inventory] OpenTelemetry tracing configured')

    # Wire dependency injection for all modules
    setup()
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Seat Inventory] Dependency injection wired')

    # Initialize database
    engine = get_engine()
    tracing.instrument_sqlalchemy(engine=engine)
    if engine.dialect.name == 'sqlite':
        # No migrations on SQLite; build the schema from the ORM metadata
        await create_db_and_tables()
        Logger.base.info('🗄️  [Seat Inventory] SQLite schema created from ORM metadata')
    else:
        Logger.base.info('🗄️  [Seat Inventory] Database engine ready (schema via alembic)')

    async with anyio.create_task_group() as tg:
        if settings.RUN_BACKGROUND_JOBS:
            for job in build_periodic_jobs():
                await job.start(task_group=tg)
        Logger.base.info('✅ [Seat Inventory] Ready to serve requests')

        yield

        Logger.base.info('🛑 [Seat Inventory] Shutting down...')
        tg.cancel_scope.cancel()

    await dispose_engines()
    Logger.base.info('🗄️  [Seat Inventory] Database engines disposed')

    tracing.shutdown()
    Logger.base.info('📊 [Seat Inventory] Tracing shutdown complete')

    # Unwire DI
    container.unwire()
    cleanup()

    Logger.base.info('👋 [Seat Inventory] Shutdown complete')


# Create FastAPI app using shared factory
app = create_app(
    lifespan=lifespan,
    service_name=SERVICE_NAME,
    description='Seat inventory consistency core - holds, bookings and seat count reconciliation',
)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
