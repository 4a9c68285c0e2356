"""
Shared pytest fixtures.

The session manager fixture is wired entirely with fakes: a manual time
source, a manual clock, an in-memory store and a recording broadcaster.
"""
import pytest

from application.services import WorkoutSessionManager
from backend.settings import Settings
from tests.fakes import (
    FakeExerciseCatalog,
    FakeLiveStatusBroadcaster,
    FakeTimeSource,
    FakeWorkoutStore,
    ManualSessionClock,
)


@pytest.fixture
def time_source():
    return FakeTimeSource()


@pytest.fixture
def store():
    return FakeWorkoutStore()


@pytest.fixture
def catalog():
    return FakeExerciseCatalog()


@pytest.fixture
def broadcaster():
    return FakeLiveStatusBroadcaster()


@pytest.fixture
def session_clock():
    return ManualSessionClock()


@pytest.fixture
def make_manager(store, catalog, broadcaster, session_clock, time_source):
    """Factory for managers sharing the fixture fakes; kwargs override them."""

    def _make(**overrides) -> WorkoutSessionManager:
        kwargs = dict(
            store=store,
            catalog=catalog,
            broadcaster=broadcaster,
            clock=session_clock,
            now=time_source,
            broadcast_timeout=0.05,
        )
        kwargs.update(overrides)
        return WorkoutSessionManager(kwargs.pop("store"), **kwargs)

    return _make


@pytest.fixture
def manager(make_manager):
    return make_manager()


@pytest.fixture
def test_settings(tmp_path):
    """Settings isolated from the environment and .env file."""
    return Settings(environment="test", data_dir=tmp_path, _env_file=None)
