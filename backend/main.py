"""
Application factory for FastAPI.

This module provides a factory function for creating FastAPI application instances.
The factory pattern allows for:
- Easy testing with custom settings and injected fakes
- Multiple app instances with different configurations
- Clear separation of app creation from route definitions

The session core (store, catalog, broadcaster, WorkoutSessionManager) is
built in the app lifespan: on startup the configured recovery policy is
applied to any active workout left in the store, and on shutdown the active
workout is written back so the next process can resume it.

Usage:
    from backend.main import create_app
    from backend.settings import Settings

    # Default app (uses get_settings())
    app = create_app()

    # Test app with custom settings and fakes
    test_settings = Settings(environment="test", _env_file=None)
    test_app = create_app(settings=test_settings, store=FakeWorkoutStore())
"""

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Callable, Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from application.errors import SessionError
from application.ports import ExerciseCatalog, LiveStatusBroadcaster, WorkoutStore
from application.services import (
    RecoveryPolicy,
    SessionClock,
    WorkoutSessionManager,
)
from application.services.session_manager import utcnow
from backend.settings import Settings, get_settings
from infrastructure.broadcast import build_broadcaster
from infrastructure.catalog import YamlExerciseCatalog
from infrastructure.db import JsonFileWorkoutStore, SupabaseWorkoutStore

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    *,
    store: Optional[WorkoutStore] = None,
    catalog: Optional[ExerciseCatalog] = None,
    broadcaster: Optional[LiveStatusBroadcaster] = None,
    clock: Optional[SessionClock] = None,
    now: Optional[Callable[[], datetime]] = None,
) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.
        store: WorkoutStore to use instead of the configured backend
        catalog: ExerciseCatalog to use instead of the bundled YAML catalog
        broadcaster: LiveStatusBroadcaster to use instead of the configured one
        clock: SessionClock to use instead of one built from tick settings
        now: Time source for the session manager

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    _configure_logging(settings)

    # Initialize Sentry for error tracking
    _init_sentry(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        manager = build_session_manager(
            settings,
            store=store,
            catalog=catalog,
            broadcaster=broadcaster,
            clock=clock,
            now=now,
        )
        app.state.session_manager = manager
        app.state.workout_store = manager.store
        app.state.exercise_catalog = manager.catalog

        await _recover_session(manager, settings)
        try:
            yield
        finally:
            await manager.shutdown()

    # Create FastAPI app
    app = FastAPI(
        title="Gym Tracker Session API",
        description="Active workout session tracking API",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Configure CORS middleware
    _configure_cors(app)

    _include_routers(app)

    _log_feature_flags(settings)

    return app


def build_workout_store(settings: Settings) -> WorkoutStore:
    """Build the WorkoutStore selected by STORE_BACKEND."""
    if settings.store_backend == "supabase":
        from api.deps import get_supabase_client

        client = get_supabase_client()
        if client is None:
            raise RuntimeError("Supabase credentials are not configured")
        logger.info("Using Supabase workout store")
        return SupabaseWorkoutStore(client)

    logger.info(f"Using JSON file workout store in {settings.data_dir}")
    return JsonFileWorkoutStore.in_directory(settings.data_dir)


def build_session_manager(
    settings: Settings,
    *,
    store: Optional[WorkoutStore] = None,
    catalog: Optional[ExerciseCatalog] = None,
    broadcaster: Optional[LiveStatusBroadcaster] = None,
    clock: Optional[SessionClock] = None,
    now: Optional[Callable[[], datetime]] = None,
) -> WorkoutSessionManager:
    """Wire the session manager from settings, keeping any injected collaborators."""
    if broadcaster is None:
        broadcaster = build_broadcaster(
            settings.live_status_enabled,
            settings.live_status_url,
            timeout=settings.broadcast_timeout_seconds,
        )
    return WorkoutSessionManager(
        store if store is not None else build_workout_store(settings),
        catalog=catalog if catalog is not None else YamlExerciseCatalog(settings.exercise_catalog_path),
        broadcaster=broadcaster,
        clock=clock or SessionClock(settings.fast_tick_seconds, settings.slow_tick_seconds),
        now=now or utcnow,
        replace_active_on_start=settings.replace_active_on_start,
        broadcast_timeout=settings.broadcast_timeout_seconds,
    )


async def _recover_session(manager: WorkoutSessionManager, settings: Settings) -> None:
    """Apply the recovery policy; a failure leaves the manager idle."""
    try:
        result = await manager.recover(RecoveryPolicy(settings.recovery_policy))
    except SessionError as e:
        logger.error(f"Session recovery failed: {e.message}")
        return
    if result.workout is not None:
        logger.info(
            f"Recovery ({result.policy.value}) handled workout {result.workout.id}; "
            f"finalized {len(result.finalized_ids)}"
        )


def _configure_logging(settings: Settings) -> None:
    """Set the root log level from LOG_LEVEL."""
    logging.getLogger().setLevel(settings.log_level)


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,  # 10% of transactions for performance monitoring
            profiles_sample_rate=0.1,
            enable_tracing=True,
        )
        logger.info("Sentry initialized for gym-tracker-api")


def _configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    trusted_origins = [
        "http://localhost:3000",
        "http://localhost:3001",
    ]
    # Add production domains from environment if configured
    production_origins = os.environ.get("CORS_ALLOWED_ORIGINS", "").split(",")
    trusted_origins.extend([origin.strip() for origin in production_origins if origin.strip()])

    app.add_middleware(
        CORSMiddleware,
        allow_origins=trusted_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _include_routers(app: FastAPI) -> None:
    """Include all API routers in the application."""
    from api.routers import (
        health_router,
        session_router,
        workouts_router,
        exercises_router,
    )

    # Health router (no prefix - /health at root)
    app.include_router(health_router)

    # Domain routers (with prefixes defined in each router)
    app.include_router(session_router)
    app.include_router(workouts_router)
    app.include_router(exercises_router)


def _log_feature_flags(settings: Settings) -> None:
    """Log the status of feature flags at startup."""
    if settings.live_status_enabled:
        logger.info(f"LIVE_STATUS_ENABLED is active ({settings.live_status_url})")
    else:
        logger.info("LIVE_STATUS_ENABLED is disabled")

    if not settings.replace_active_on_start:
        logger.info("REPLACE_ACTIVE_ON_START is disabled; starting over an active workout fails")


# Default app instance for uvicorn
# This allows: uvicorn backend.main:app --reload
app = create_app()
