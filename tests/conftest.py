"""
Pytest configuration and shared fixtures for the dumonitor test suite.

Provides deterministic stand-ins for the external collaborators of a run:
a scripted disk usage source, a child process with a scripted lifetime and
a manually advanced clock.
"""

import logging
import shutil
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Union

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dumonitor.collectors.base import DiskUsageSource  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "e2e: mark test as an end-to-end test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


requires_du = pytest.mark.skipif(
    shutil.which("du") is None or shutil.which("sh") is None,
    reason="requires the 'du' and 'sh' utilities",
)


# ============================================================================
# Fakes
# ============================================================================


class EventLog(list):
    """Shared, ordered log of calls made on the fakes."""


class FakeDiskUsageSource(DiskUsageSource):
    """
    Returns scripted readings in order.

    An Exception instance in the script is raised instead of returned. Once
    the script is exhausted the last value is repeated.
    """

    def __init__(self, readings: Iterable[Union[int, Exception]], events: Optional[EventLog] = None):
        self.readings = list(readings)
        self.events = events if events is not None else EventLog()
        self.calls: List[str] = []
        self._index = 0

    def measure(self, path):
        self.calls.append(str(path))
        if self._index < len(self.readings):
            reading = self.readings[self._index]
            self._index += 1
        else:
            reading = self.readings[-1]
        self.events.append(("measure", reading))
        if isinstance(reading, Exception):
            raise reading
        return reading


class FakeChild:
    """
    Child process that reports itself alive for ``alive_polls`` polls and
    exited (with ``returncode``) from then on.
    """

    def __init__(self, alive_polls: int, returncode: int = 0, events: Optional[EventLog] = None):
        self.alive_polls = alive_polls
        self._exit_code = returncode
        self.events = events if events is not None else EventLog()
        self.poll_count = 0
        self.released = False
        self.pid = 4242

    @property
    def returncode(self) -> Optional[int]:
        return self._exit_code if self.poll_count > self.alive_polls else None

    def poll(self) -> Optional[int]:
        self.poll_count += 1
        alive = self.poll_count <= self.alive_polls
        self.events.append(("poll", alive))
        return None if alive else self._exit_code

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.released = True


class FakeClock:
    """Monotonic clock advanced explicitly by tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def events():
    return EventLog()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def fake_source_factory(events):
    def _make(readings):
        return FakeDiskUsageSource(readings, events=events)
    return _make


@pytest.fixture
def fake_child_factory(events):
    def _make(alive_polls, returncode=0):
        return FakeChild(alive_polls, returncode=returncode, events=events)
    return _make


@pytest.fixture
def target_dir(tmp_path):
    """An existing directory to monitor."""
    directory = tmp_path / "target"
    directory.mkdir()
    return directory


@pytest.fixture(autouse=True)
def clear_config_after_test(monkeypatch):
    """Isolate tests from DUMONITOR_CONFIG, the cached configuration and log levels set by the CLI."""
    monkeypatch.delenv("DUMONITOR_CONFIG", raising=False)
    root_level = logging.getLogger().level

    yield

    logging.getLogger().setLevel(root_level)

    from dumonitor.config import clear_config_cache, set_config_path

    set_config_path(None)
    clear_config_cache()
