"""
Unit tests for backend/main.py
"""

import logging
from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from application.services import SessionState, WorkoutSessionManager
from backend.main import (
    _configure_cors,
    _init_sentry,
    _log_feature_flags,
    build_session_manager,
    build_workout_store,
    create_app,
)
from backend.settings import Settings
from infrastructure.broadcast import HttpLiveStatusBroadcaster
from infrastructure.catalog import YamlExerciseCatalog
from infrastructure.db import JsonFileWorkoutStore, SupabaseWorkoutStore
from tests.fakes import (
    FakeExerciseCatalog,
    FakeLiveStatusBroadcaster,
    FakeWorkoutStore,
    ManualSessionClock,
    make_workout,
)


@pytest.mark.unit
class TestCreateApp:
    """Test the create_app() factory function."""

    def test_create_app_returns_fastapi_instance(self, test_settings):
        """create_app() should return a FastAPI application instance."""
        app = create_app(settings=test_settings)
        assert isinstance(app, FastAPI)

    def test_create_app_uses_default_settings_when_none_provided(self, test_settings):
        """create_app() should use get_settings() when no settings provided."""
        with patch("backend.main.get_settings") as mock_get_settings:
            mock_get_settings.return_value = test_settings

            app = create_app(settings=None)

            mock_get_settings.assert_called_once()
            assert isinstance(app, FastAPI)

    def test_create_app_configures_app_metadata(self, test_settings):
        """create_app() should configure app title and version."""
        app = create_app(settings=test_settings)

        assert app.title == "Gym Tracker Session API"
        assert app.version == "1.0.0"

    def test_create_app_sets_root_log_level(self, tmp_path):
        settings = Settings(environment="test", data_dir=tmp_path, log_level="debug", _env_file=None)
        root = logging.getLogger()
        previous = root.level
        try:
            create_app(settings=settings)
            assert root.level == logging.DEBUG
        finally:
            root.setLevel(previous)

    def test_routes_registered(self, test_settings):
        paths = {route.path for route in create_app(settings=test_settings).routes}

        for path in ("/health", "/session", "/session/start", "/workouts", "/exercises"):
            assert path in paths


@pytest.mark.unit
class TestLifespan:
    """Startup builds and recovers the session; shutdown writes it back."""

    def test_startup_wires_app_state(self, test_settings):
        store = FakeWorkoutStore()
        app = create_app(settings=test_settings, store=store, clock=ManualSessionClock())

        with TestClient(app):
            manager = app.state.session_manager
            assert isinstance(manager, WorkoutSessionManager)
            assert app.state.workout_store is store
            assert isinstance(app.state.exercise_catalog, YamlExerciseCatalog)

    def test_startup_recovers_active_workout(self, test_settings):
        store = FakeWorkoutStore()
        workout = make_workout(is_active=True)
        store.seed([workout])
        broadcaster = FakeLiveStatusBroadcaster()
        app = create_app(
            settings=test_settings,
            store=store,
            catalog=FakeExerciseCatalog(),
            broadcaster=broadcaster,
            clock=ManualSessionClock(),
        )

        with TestClient(app):
            manager = app.state.session_manager
            assert manager.state == SessionState.ACTIVE
            assert manager.active_snapshot().id == workout.id

        # Shutdown writes the record back as still active and releases the session.
        assert store.committed_by_id(workout.id).is_active is True
        assert manager.state == SessionState.IDLE

    def test_startup_finalize_policy(self, tmp_path):
        settings = Settings(
            environment="test", data_dir=tmp_path, recovery_policy="finalize", _env_file=None
        )
        store = FakeWorkoutStore()
        workout = make_workout(is_active=True, duration_seconds=30)
        store.seed([workout])
        app = create_app(settings=settings, store=store, clock=ManualSessionClock())

        with TestClient(app):
            assert app.state.session_manager.state == SessionState.IDLE

        assert store.committed_by_id(workout.id).is_active is False

    def test_recovery_failure_leaves_app_running(self, test_settings):
        store = FakeWorkoutStore()
        store.fail_fetches = True
        app = create_app(settings=test_settings, store=store, clock=ManualSessionClock())

        with TestClient(app) as client:
            assert app.state.session_manager.state == SessionState.IDLE
            assert client.get("/health").status_code == 200


@pytest.mark.unit
class TestBuilders:
    """Tests for the component builders."""

    def test_build_workout_store_file(self, test_settings, tmp_path):
        store = build_workout_store(test_settings)

        assert isinstance(store, JsonFileWorkoutStore)
        assert store.path == tmp_path / "workouts.json"

    def test_build_workout_store_supabase(self, tmp_path):
        settings = Settings(
            environment="test",
            store_backend="supabase",
            supabase_url="https://project.supabase.co",
            supabase_anon_key="anon-key",
            _env_file=None,
        )
        client = MagicMock()

        with patch("api.deps.get_supabase_client", return_value=client):
            store = build_workout_store(settings)

        assert isinstance(store, SupabaseWorkoutStore)
        assert store._client is client

    def test_build_workout_store_supabase_without_client(self):
        settings = Settings(
            environment="test",
            store_backend="supabase",
            supabase_url="https://project.supabase.co",
            supabase_anon_key="anon-key",
            _env_file=None,
        )

        with patch("api.deps.get_supabase_client", return_value=None):
            with pytest.raises(RuntimeError):
                build_workout_store(settings)

    def test_build_session_manager_uses_settings(self, tmp_path):
        settings = Settings(
            environment="test",
            data_dir=tmp_path,
            live_status_enabled=True,
            live_status_url="http://relay:8010",
            replace_active_on_start=False,
            _env_file=None,
        )

        manager = build_session_manager(settings)

        assert isinstance(manager.store, JsonFileWorkoutStore)
        assert isinstance(manager.catalog, YamlExerciseCatalog)
        assert isinstance(manager._broadcaster, HttpLiveStatusBroadcaster)
        assert manager._replace_active_on_start is False

    def test_build_session_manager_keeps_injected_fakes(self, test_settings):
        store = FakeWorkoutStore()
        catalog = FakeExerciseCatalog()

        manager = build_session_manager(test_settings, store=store, catalog=catalog)

        assert manager.store is store
        assert manager.catalog is catalog
        assert manager._broadcaster is None


@pytest.mark.unit
class TestInitSentry:
    """Test Sentry initialization."""

    def test_init_sentry_skipped_when_no_dsn(self):
        """Sentry should not be initialized when DSN is not set."""
        settings = Settings(sentry_dsn=None, _env_file=None)

        with patch("backend.main.sentry_sdk.init") as mock_init:
            _init_sentry(settings)
            mock_init.assert_not_called()

    def test_init_sentry_called_when_dsn_provided(self):
        """Sentry should be initialized when DSN is provided."""
        settings = Settings(
            sentry_dsn="https://test@sentry.io/123",
            environment="test",
            _env_file=None
        )

        with patch("backend.main.sentry_sdk.init") as mock_init:
            _init_sentry(settings)
            mock_init.assert_called_once_with(
                dsn="https://test@sentry.io/123",
                environment="test",
                traces_sample_rate=0.1,
                profiles_sample_rate=0.1,
                enable_tracing=True,
            )


@pytest.mark.unit
class TestConfigureCors:
    """Test CORS configuration."""

    def test_configure_cors_adds_middleware(self):
        """_configure_cors should add CORS middleware to the app."""
        app = FastAPI()
        initial_middleware_count = len(app.user_middleware)

        _configure_cors(app)

        assert len(app.user_middleware) == initial_middleware_count + 1

    def test_cors_allows_requests(self, test_settings):
        """CORS should allow cross-origin requests."""
        app = create_app(settings=test_settings, store=FakeWorkoutStore(), clock=ManualSessionClock())

        with TestClient(app) as client:
            response = client.get("/health", headers={"Origin": "http://localhost:3000"})

        assert response.status_code == 200
        assert "access-control-allow-origin" in response.headers


@pytest.mark.unit
class TestLogFeatureFlags:
    """Test feature flag logging."""

    def test_log_live_status_enabled(self, caplog):
        settings = Settings(
            live_status_enabled=True, live_status_url="http://relay:8010", _env_file=None
        )

        with caplog.at_level("INFO"):
            _log_feature_flags(settings)

        assert "LIVE_STATUS_ENABLED is active" in caplog.text

    def test_log_live_status_disabled(self, caplog):
        settings = Settings(live_status_enabled=False, _env_file=None)

        with caplog.at_level("INFO"):
            _log_feature_flags(settings)

        assert "LIVE_STATUS_ENABLED is disabled" in caplog.text

    def test_log_replace_disabled(self, caplog):
        settings = Settings(replace_active_on_start=False, _env_file=None)

        with caplog.at_level("INFO"):
            _log_feature_flags(settings)

        assert "REPLACE_ACTIVE_ON_START is disabled" in caplog.text


@pytest.mark.unit
class TestMultipleAppInstances:
    """Test that multiple app instances can be created."""

    def test_create_multiple_independent_apps(self, test_settings):
        app1 = create_app(settings=test_settings)
        app2 = create_app(settings=test_settings)

        assert app1 is not app2
        assert isinstance(app1, FastAPI)
        assert isinstance(app2, FastAPI)
