"""
Observers that turn the philosophers' state reports into something a
presentation layer can read.

Philosophers call their observer synchronously from their own thread, so
everything here keeps its critical sections short and never blocks on a
consumer.
"""

import queue
import threading
import time
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Tuple

from .agent import Observer, State

Event = Tuple[int, State]


@dataclass
class Philosopher:
    idx: int
    state: State = State.THINKING
    times_eaten: int = 0
    last_state_change: float = field(default_factory=time.time)


class StateBoard:
    """Latest known state of every philosopher, plus how often each has eaten."""

    def __init__(self, n: int):
        self.lock = threading.Lock()
        self.philosophers: List[Philosopher] = [Philosopher(i) for i in range(n)]

    def __call__(self, i: int, state: State) -> None:
        with self.lock:
            p = self.philosophers[i]
            p.state = state
            p.last_state_change = time.time()
            if state is State.EATING:
                p.times_eaten += 1

    def apply(self, events: Iterable[Event]) -> None:
        for i, state in events:
            self(i, state)

    def snapshot(self) -> List[Philosopher]:
        with self.lock:
            return [replace(p) for p in self.philosophers]


class QueueObserver:
    """Buffers events on an unbounded queue for a consumer on another thread."""

    def __init__(self):
        self.events: "queue.Queue[Event]" = queue.Queue()

    def __call__(self, i: int, state: State) -> None:
        self.events.put_nowait((i, state))

    def drain(self) -> List[Event]:
        """Everything reported since the last drain, oldest first."""
        drained = []
        while True:
            try:
                drained.append(self.events.get_nowait())
            except queue.Empty:
                return drained


def fan_out(*observers: Observer) -> Observer:
    """An observer that forwards every report to each of ``observers`` in turn."""

    def notify(i: int, state: State) -> None:
        for observer in observers:
            observer(i, state)

    return notify
