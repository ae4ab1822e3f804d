"""Shared fixtures."""

import time

import pytest

from ghupdater import updater
from ghupdater.repository import rate_limit


@pytest.fixture(autouse=True)
def reset_shared_state(monkeypatch):
    """Give every test a clean rate limiter and no cached client."""
    rate_limit.RATE_LIMITER.clear()
    rate_limit.RATE_LIMITER.clock = time.time
    monkeypatch.setattr(updater, "_default_client", None)
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    yield
    rate_limit.RATE_LIMITER.clear()
    rate_limit.RATE_LIMITER.clock = time.time


class FakeClock:
    """Manually advanced clock for rate-limit tests."""

    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()
