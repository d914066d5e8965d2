import threading
import time

import pytest

from philosophers.agent import State


@pytest.fixture(autouse=True)
def no_thread_leaks():
    """Every philosopher thread a test starts must be gone once it finishes."""
    baseline = threading.active_count()
    yield
    deadline = time.monotonic() + 2.0
    while threading.active_count() > baseline and time.monotonic() < deadline:
        time.sleep(0.01)
    assert threading.active_count() <= baseline, (
        f"Thread leak detected: {threading.active_count()} threads alive, "
        f"expected <= {baseline}"
    )


@pytest.fixture
def simulations():
    """Collects simulations started by a test and stops them afterwards."""
    started = []
    yield started
    for sim in started:
        sim.stop()


class Recorder:
    """Observer that keeps every report, per philosopher and in global order."""

    def __init__(self):
        self.lock = threading.Lock()
        self.events = []

    def __call__(self, i, state):
        with self.lock:
            self.events.append((i, state))

    def states_of(self, i):
        with self.lock:
            return [state for j, state in self.events if j == i]


CYCLE = [State.THINKING, State.WAITING, State.EATING]


@pytest.fixture
def recorder():
    return Recorder()


class FakeStop:
    """Stands in for threading.Event: records nap lengths instead of sleeping."""

    def __init__(self, stop_after_waits=None):
        self.waits = []
        self.stop_after_waits = stop_after_waits
        self._set = False

    def is_set(self):
        return self._set

    def set(self):
        self._set = True

    def wait(self, timeout=None):
        self.waits.append(timeout)
        if self.stop_after_waits is not None and len(self.waits) >= self.stop_after_waits:
            self._set = True
        return self._set
