"""
FastAPI application entry point for the Interview Scheduler.
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.api.errors import register_exception_handlers
from apps.api.routers import admin, bookings, calendar, people, slots
from core.logging import LogContext, get_logger, setup_logging
from core.providers import SystemClock, UUIDGenerator
from core.settings import Settings, settings as default_settings
from core.utils_datetime import format_timestamp, get_current_datetime
from services.rate_limiter import RateLimiter
from services.scheduling_store import SchedulingStore


logger = get_logger(__name__)


def create_app(
    config: Optional[Settings] = None,
    store: Optional[SchedulingStore] = None,
    rate_limiter: Optional[RateLimiter] = None,
) -> FastAPI:
    """
    Build the application and its collaborators.

    Args:
        config: Settings (defaults to global settings)
        store: Pre-built store (defaults to one built from settings)
        rate_limiter: Pre-built rate limiter (defaults to one built from settings)

    Returns:
        Configured FastAPI application
    """
    config = config or default_settings

    with LogContext(logger, phase="composition", environment=config.app_env) as context:
        clock = SystemClock()
        if store is None:
            store = SchedulingStore(
                clock=clock,
                id_generator=UUIDGenerator(),
                weekly_day_limit=config.weekly_day_limit,
                seed=config.seed_on_startup,
                audit_log_max_entries=config.audit_log_max_entries,
            )
        if rate_limiter is None:
            rate_limiter = RateLimiter(
                limit=config.rate_limit_max_actions,
                window_seconds=config.rate_limit_window_seconds,
                clock=clock,
            )

        context.log(
            "info",
            "Scheduling components ready",
            slot_count=len(store.snapshot().slots),
            weekly_day_limit=store.weekly_day_limit,
            rate_limit=f"{rate_limiter.limit}/{rate_limiter.window.total_seconds():g}s",
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan context manager.
        Handles startup and shutdown events.
        """
        logger.info(
            "Starting Interview Scheduler",
            extra={
                "app_name": config.app_name,
                "environment": config.app_env,
                "version": "1.0.0"
            }
        )

        yield

        logger.info("Shutting down Interview Scheduler")

    app = FastAPI(
        title=config.app_name,
        description="Interview slot publication, booking and rescheduling",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    app.state.settings = config
    app.state.store = store
    app.state.rate_limiter = rate_limiter

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=config.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(slots.router, prefix=config.api_prefix)
    app.include_router(bookings.router, prefix=config.api_prefix)
    app.include_router(calendar.router, prefix=config.api_prefix)
    app.include_router(people.router, prefix=config.api_prefix)
    app.include_router(admin.router, prefix=config.api_prefix)

    @app.get(f"{config.api_prefix}/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "ok",
            "timestamp": format_timestamp(get_current_datetime())
        }

    return app


setup_logging()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "apps.api.main:app",
        host=default_settings.api_host,
        port=default_settings.api_port,
        reload=default_settings.api_reload,
        log_level=default_settings.log_level.lower()
    )
