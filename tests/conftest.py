"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from buildtrace.clock import Clock  # noqa: E402


class ManualClock(Clock):
    """Clock whose raw reading is set by the test."""

    def __init__(self, start: int = 0):
        super().__init__()
        self.value = start

    def _elapsed(self) -> int:
        return self.value

    def advance(self, ns: int) -> None:
        self.value += ns


@pytest.fixture
def clock():
    """Create a manual clock starting at 0 ns."""
    return ManualClock()


@pytest.fixture
def store():
    """Create an empty event store."""
    from buildtrace.storage import EventStore

    return EventStore()


@pytest.fixture
def normalizer():
    """Create an empty path normalizer."""
    from buildtrace.paths import PathNormalizer

    return PathNormalizer()


@pytest.fixture
def inclusions(store, clock):
    """Create an inclusion tracker."""
    from buildtrace.tracker import InclusionTracker

    return InclusionTracker(store, clock)


@pytest.fixture
def stages(store, clock):
    """Create a stage tracker."""
    from buildtrace.tracker import StageTracker

    return StageTracker(store, clock)


@pytest.fixture
def recorder(store, clock):
    """Create a function recorder."""
    from buildtrace.tracker import FunctionRecorder

    return FunctionRecorder(store, clock)


@pytest.fixture
def emitter(store, clock, normalizer, inclusions, stages):
    """Create a trace emitter with a fixed pid."""
    from buildtrace.output import TraceEmitter

    return TraceEmitter(store, clock, normalizer, inclusions, stages, pid=4242)


@pytest.fixture
def memory_sink():
    """Create an in-memory trace sink."""
    from buildtrace.output import MemoryTraceSink

    return MemoryTraceSink()


@pytest.fixture
def session(memory_sink, clock):
    """Create a session writing to memory."""
    from buildtrace.session import TraceSession

    return TraceSession(memory_sink, clock=clock)
