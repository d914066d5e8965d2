"""
One philosopher's think -> wait -> eat cycle.

Deadlock is avoided by resource hierarchy: every philosopher picks up the
lower-numbered of its two forks first. Since all forks are taken in ascending
order, no ring of philosophers can each hold one fork while waiting for the
next, including at the wraparound where philosopher N-1 shares fork 0 with
philosopher 0.
"""

import logging
import random
import threading
from enum import Enum
from typing import Callable, Optional, Tuple

from .forks import ForkSet

logger = logging.getLogger(__name__)

# timescale is expressed in milliseconds
TIME_UNIT = 0.001
# think/eat durations are randrange(MAX_DRAW) * timescale
MAX_DRAW = 10


class State(Enum):
    THINKING = "Thinking"
    WAITING = "Waiting for forks"
    EATING = "Eating"


Observer = Callable[[int, State], None]


def fork_ids(i: int, n: int) -> Tuple[int, int]:
    """Return ``(low, high)``: the ids of philosopher i's forks in acquisition order."""
    left = i
    right = (i + 1) % n
    return (left, right) if left <= right else (right, left)


def _nap(rng: random.Random, timescale: float, stop_event: threading.Event) -> bool:
    """Sleep for a random number of timescale units; True if interrupted by a stop."""
    return stop_event.wait(rng.randrange(MAX_DRAW) * timescale * TIME_UNIT)


def philosopher_loop(
    i: int,
    forks: ForkSet,
    observer: Observer,
    *,
    timescale: float,
    stop_event: threading.Event,
    seed_base: int = 0,
    max_cycles: Optional[int] = None,
    on_meal: Optional[Callable[[int], None]] = None,
) -> int:
    """
    Think and eat until ``stop_event`` is set or ``max_cycles`` meals are done.

    Every state change is reported as ``observer(i, state)`` from this thread.
    Forks are only ever held inside this function and are always put back
    before it returns, whether it stops, finishes or the observer raises.
    ``on_meal(i)`` is called after every finished meal, so a caller can keep
    count even if the loop later raises.

    Returns the number of completed meals.
    """
    low, high = fork_ids(i, len(forks))
    rng = random.Random(seed_base + i)
    meals = 0
    logger.debug("P%d seated with forks (%d, %d)", i, low, high)

    while not stop_event.is_set():
        if max_cycles is not None and meals >= max_cycles:
            break

        # Think
        observer(i, State.THINKING)
        if _nap(rng, timescale, stop_event):
            break

        # Wait for forks
        forks.acquire(low, i)
        try:
            if stop_event.is_set():
                break
            observer(i, State.WAITING)
            if high != low:
                forks.acquire(high, i)
            try:
                if stop_event.is_set():
                    break

                # Eat
                observer(i, State.EATING)
                if _nap(rng, timescale, stop_event):
                    break
                meals += 1
                if on_meal is not None:
                    on_meal(i)
            finally:
                if high != low:
                    forks.release(high, i)
        finally:
            forks.release(low, i)

    logger.debug("P%d leaves the table after %d meals", i, meals)
    return meals
