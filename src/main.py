"""
Production FastAPI Application
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import cleanup, container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.logging.loguru_io_config import intercept_std_logging
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Cinema Service] Starting up...')
    intercept_std_logging('uvicorn', 'uvicorn.access', 'uvicorn.error', 'sqlalchemy.engine')

    tracing = TracingConfig(service_name='cinema-booking')
    tracing.setup()
    Logger.base.info('📊 [Cinema Service] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Cinema Service] Dependency injection wired')

    engine = get_engine()
    tracing.instrument_sqlalchemy(engine=engine)
    Logger.base.info('🗄️  [Cinema Service] Database engine ready + instrumented')

    # Migrations own the schema outside DEBUG (alembic upgrade head)
    if settings.DEBUG:
        await create_db_and_tables()

    Logger.base.info('✅ [Cinema Service] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Cinema Service] Shutting down...')

    await dispose_engine()
    Logger.base.info('🗄️  [Cinema Service] Database engine disposed')

    tracing.shutdown()
    Logger.base.info('📊 [Cinema Service] Tracing shutdown complete')

    container.unwire()
    cleanup()

    Logger.base.info('👋 [Cinema Service] Shutdown complete')


app = create_app(
    lifespan=lifespan,
    description='Cinema Booking Service - users, movie catalogue with showtimes, and seat bookings',
)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
