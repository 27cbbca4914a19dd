"""Pytest configuration and fixtures for interview scheduler tests."""
import pytest
from datetime import datetime, timedelta

import pytz
from fastapi.testclient import TestClient

from apps.api.main import create_app
from core.settings import Settings
from services.rate_limiter import RateLimiter
from services.scheduling_store import SchedulingStore


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current


class SequentialIdGenerator:
    """Predictable IDs: id-1, id-2, ..."""

    def __init__(self, prefix: str = "id"):
        self.prefix = prefix
        self.counter = 0

    def new_id(self) -> str:
        self.counter += 1
        return f"{self.prefix}-{self.counter}"


@pytest.fixture(scope="function")
def base_time():
    """Monday 2024-03-11 08:00 UTC."""
    return datetime(2024, 3, 11, 8, 0, tzinfo=pytz.UTC)


@pytest.fixture(scope="function")
def clock(base_time):
    return ManualClock(base_time)


@pytest.fixture(scope="function")
def id_generator():
    return SequentialIdGenerator()


@pytest.fixture(scope="function")
def store(clock, id_generator):
    """Store loaded with the seed dataset."""
    return SchedulingStore(clock=clock, id_generator=id_generator)


@pytest.fixture(scope="function")
def empty_store(clock, id_generator):
    """Store without any slots or bookings."""
    return SchedulingStore(clock=clock, id_generator=id_generator, seed=False)


@pytest.fixture(scope="function")
def rate_limiter(clock):
    return RateLimiter(limit=5, window_seconds=60, clock=clock)


@pytest.fixture(scope="function")
def make_slot(empty_store, base_time):
    """Factory fixture creating a one-hour slot on the empty store."""
    def _create(day_offset=0, hour=10, interviewer_id="i-1", duration_minutes=60, location="Zoom"):
        start = base_time.replace(hour=hour) + timedelta(days=day_offset)
        end = start + timedelta(minutes=duration_minutes)
        return empty_store.create_slot(
            interviewer_id=interviewer_id,
            start_time=start.isoformat(),
            end_time=end.isoformat(),
            location=location,
        )
    return _create


@pytest.fixture(scope="function")
def test_settings():
    return Settings(app_env="development", rate_limit_max_actions=5, rate_limit_window_seconds=60)


@pytest.fixture(scope="function")
def client(test_settings, store, rate_limiter):
    """HTTP client for an app wired to the seeded store and manual clock."""
    app = create_app(config=test_settings, store=store, rate_limiter=rate_limiter)
    with TestClient(app) as test_client:
        yield test_client
