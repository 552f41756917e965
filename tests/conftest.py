"""Shared fixtures: a fresh store per test, driven by a fake clock."""

import pytest

from habitledger.store import Store


class _Clock:
    """Host clock the tests can move by assigning `now`."""

    def __init__(self, now: float = 1000):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return _Clock()


@pytest.fixture
def store(tmp_path, clock):
    """Ensure a fresh database for each test."""
    s = Store(tmp_path / "test.db", clock=clock)
    yield s
    s.close()
