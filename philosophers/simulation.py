"""Simulation lifecycle: configuration, spawning philosophers, shutdown."""

import logging
import math
import random
import threading
import time
from dataclasses import dataclass
from typing import Dict, List, Optional

from .agent import MAX_DRAW, TIME_UNIT, Observer, State, philosopher_loop
from .errors import ConfigurationError
from .forks import ForkSet

logger = logging.getLogger(__name__)

# how long stop() waits for the philosophers to leave the table
STOP_TIMEOUT = 5.0
# fresh seed bases are drawn from [0, SEED_RANGE)
SEED_RANGE = 1_000_000


def _ignore(i: int, state: State) -> None:
    pass


def fresh_seed_base() -> int:
    """A seed base for a run that should not repeat the previous one."""
    return random.randrange(SEED_RANGE)


@dataclass
class SimulationConfig:
    """Parameters that govern a simulation run."""

    n_philosophers: int = 5
    # milliseconds per random draw of thinking/eating time
    timescale: float = 200
    # philosopher i seeds its generator with seed_base + i
    seed_base: Optional[int] = None
    # meals per philosopher before it leaves; None = eat forever
    max_cycles: Optional[int] = None

    def validate(self) -> None:
        if isinstance(self.n_philosophers, bool) or not isinstance(self.n_philosophers, int):
            raise ConfigurationError(
                f"n_philosophers must be an integer, got {self.n_philosophers!r}"
            )
        if self.n_philosophers < 1:
            raise ConfigurationError(
                f"n_philosophers must be at least 1, got {self.n_philosophers}"
            )
        if not math.isfinite(self.timescale) or self.timescale <= 0:
            raise ConfigurationError(f"timescale must be a positive finite number, got {self.timescale}")
        # longest nap must still be a valid Event.wait timeout
        if (MAX_DRAW - 1) * self.timescale * TIME_UNIT > threading.TIMEOUT_MAX:
            raise ConfigurationError(f"timescale {self.timescale}ms is too large to sleep on")
        if self.max_cycles is not None and self.max_cycles < 1:
            raise ConfigurationError(f"max_cycles must be at least 1, got {self.max_cycles}")


class DiningSimulation:
    """N philosophers, N forks, one thread per philosopher."""

    def __init__(self, config: SimulationConfig, observer: Optional[Observer] = None):
        self.config = config
        self.observer = observer or _ignore
        self.forks: Optional[ForkSet] = None
        self.threads: List[threading.Thread] = []
        self.stop_event = threading.Event()
        self.lock = threading.Lock()  # protects meals
        self.meals: Dict[int, int] = {}
        self.started_at: Optional[float] = None

    @property
    def n(self) -> int:
        return self.config.n_philosophers

    @property
    def running(self) -> bool:
        return any(t.is_alive() for t in self.threads)

    def _count_meal(self, i: int) -> None:
        with self.lock:
            self.meals[i] += 1

    def _run_philosopher(self, i: int) -> None:
        try:
            philosopher_loop(
                i,
                self.forks,
                self.observer,
                timescale=self.config.timescale,
                stop_event=self.stop_event,
                seed_base=self.config.seed_base or 0,
                max_cycles=self.config.max_cycles,
                on_meal=self._count_meal,
            )
        except Exception:  # noqa: BLE001
            with self.lock:
                meals = self.meals[i]
            logger.exception("P%d crashed and left the table after %d meals", i, meals)

    def start(self) -> "DiningSimulation":
        """
        Validate the configuration and seat the philosophers.

        Raises ConfigurationError before any thread is created if the
        configuration is invalid, and RuntimeError if already started.
        """
        self.config.validate()
        if self.threads:
            raise RuntimeError("simulation has already been started")

        self.stop_event.clear()
        self.forks = ForkSet(self.n)
        self.meals = {i: 0 for i in range(self.n)}
        self.started_at = time.monotonic()
        self.threads = [
            threading.Thread(
                target=self._run_philosopher,
                args=(i,),
                name=f"philosopher-{i}",
                daemon=True,
            )
            for i in range(self.n)
        ]
        for t in self.threads:
            t.start()
        logger.info(
            "seated %d philosophers (timescale=%sms, seed_base=%s, max_cycles=%s)",
            self.n,
            self.config.timescale,
            self.config.seed_base,
            self.config.max_cycles,
        )
        return self

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for every philosopher to leave; True if all did within ``timeout``."""
        deadline = None if timeout is None else time.monotonic() + timeout
        for t in self.threads:
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            t.join(timeout=remaining)
        return not self.running

    def stop(self, timeout: float = STOP_TIMEOUT) -> bool:
        """
        Ask every philosopher to leave the table and wait for them.

        Returns True once all threads have exited (and so put their forks
        down), False if some were still running when ``timeout`` expired.
        """
        self.stop_event.set()
        stopped = self.join(timeout)
        if stopped:
            logger.info("simulation stopped after %.2fs", self.elapsed())
        else:
            stuck = [t.name for t in self.threads if t.is_alive()]
            logger.warning("philosophers still running after %.1fs: %s", timeout, ", ".join(stuck))
        return stopped

    def elapsed(self) -> float:
        if self.started_at is None:
            return 0.0
        return time.monotonic() - self.started_at

    def completed_cycles(self) -> Dict[int, int]:
        """Meals finished so far by each philosopher."""
        with self.lock:
            return dict(self.meals)


def start(config: Optional[SimulationConfig] = None, observer: Optional[Observer] = None) -> DiningSimulation:
    """Create a DiningSimulation and start it."""
    return DiningSimulation(config or SimulationConfig(), observer).start()
