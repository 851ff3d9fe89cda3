"""
Shared pytest fixtures for flight service tests.

Provides a scripted random source, a controllable clock, flight factories
and an HTTP client bound to an app with an injected store.
"""
import itertools
import random

import pytest
import pytest_asyncio
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport

from flight_service.config import Settings
from flight_service.main import create_app
from flight_service.models import Flight
from flight_service.store import FlightStore

T0 = 1_700_000_000_000  # ms since epoch


class SequenceRandom:
    """Random source that replays a fixed list of values, cycling."""

    def __init__(self, values):
        self._values = itertools.cycle(values)

    def random(self) -> float:
        return next(self._values)


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, now: int = T0):
        self.now = now

    def now_ms(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def make_flight():
    """Factory for a flight with overridable fields."""

    def _make(**overrides) -> Flight:
        data = dict(
            id="f1",
            callsign="CC0001",
            origin="JFK",
            destination="LAX",
            lat=40.6413,
            lon=-73.7781,
            heading=270.0,
            speed_kts=480,
            altitude_ft=35000,
            created_at=T0,
            updated_at=T0,
        )
        data.update(overrides)
        return Flight(**data)

    return _make


@pytest.fixture
def store(clock):
    return FlightStore.populate(clock.now_ms(), random.Random(7))


@pytest_asyncio.fixture
async def client(store, clock) -> AsyncGenerator[AsyncClient, None]:
    """Async test client against an app with an injected store and clock."""
    app = create_app(settings=Settings(), store=store, clock=clock)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac


@pytest.fixture
def scripted():
    """Build a SequenceRandom from a list of draws."""
    return SequenceRandom


def ang_diff_deg(a: float, b: float) -> float:
    """Smallest absolute angular difference in degrees."""
    d = (a - b + 540.0) % 360.0 - 180.0
    return abs(d)


@pytest.fixture
def ang_diff():
    return ang_diff_deg
