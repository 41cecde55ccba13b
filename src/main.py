"""
Production FastAPI Application

Storefront API plus the outbox dispatcher and reminder scheduler running in the
lifespan task group.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import dispose_engine, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.service.ticketing.app.command.enqueue_event_reminders_use_case import (
    EnqueueEventRemindersUseCase,
)
from src.service.ticketing.driving_adapter.worker.outbox_worker import OutboxWorker
from src.service.ticketing.driving_adapter.worker.reminder_worker import ReminderWorker


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [TicketHub] Starting up...')

    tracing = TracingConfig(service_name='tickethub-storefront')
    tracing.setup()
    Logger.base.info('📊 [TicketHub] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [TicketHub] Dependency injection wired')

    engine = get_engine()
    tracing.instrument_sqlalchemy(engine=engine)
    Logger.base.info('🗄️  [TicketHub] Database engine ready + instrumented')

    settings = container.config_service()
    outbox_worker = OutboxWorker(
        use_case=container.dispatch_outbox_use_case(),
        poll_interval=settings.OUTBOX_POLL_INTERVAL_SECONDS,
        batch_size=settings.OUTBOX_BATCH_SIZE,
    )
    reminder_worker = ReminderWorker(
        use_case=EnqueueEventRemindersUseCase(
            booking_query_repo=container.booking_query_repo(),
            event_query_repo=container.event_query_repo(),
            outbox_repo=container.outbox_repo(),
        ),
        scan_interval=settings.REMINDER_SCAN_INTERVAL_SECONDS,
    )

    async with anyio.create_task_group() as tg:
        await outbox_worker.start(task_group=tg)
        await reminder_worker.start(task_group=tg)
        Logger.base.info('✅ [TicketHub] Ready to serve requests')

        yield

        Logger.base.info('🛑 [TicketHub] Shutting down...')
        tg.cancel_scope.cancel()

    await dispose_engine()
    Logger.base.info('🗄️  [TicketHub] Database engine disposed')

    tracing.shutdown()
    Logger.base.info('📊 [TicketHub] Tracing shutdown complete')

    container.unwire()

    Logger.base.info('👋 [TicketHub] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
