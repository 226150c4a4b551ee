"""Shared fixtures: a controllable UTC clock and a store in a temp dir."""

from datetime import datetime, timedelta, timezone

import pytest

from cognitrain.progress import Progress
from cognitrain.store import DurableStore


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(tmp_path):
    return DurableStore(tmp_path / "data")


@pytest.fixture
def progress(store, clock):
    p = Progress(store, clock=clock)
    p.initialize()
    return p
