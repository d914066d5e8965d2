"""
Forks shared between philosophers.

A ForkSet owns N forks, one lock each. Philosopher i eats with forks i and
(i+1) % N, so every fork is contended by exactly two neighbours (or one, when
N == 1).
"""

import logging
import threading
from typing import List, Optional

from .errors import ConfigurationError, ResourceProtocolError

logger = logging.getLogger(__name__)


class ForkSet:
    """A fixed collection of mutually exclusive forks, indexed 0..n-1."""

    def __init__(self, n: int):
        if n < 1:
            raise ConfigurationError(f"need at least one fork, got {n}")
        self._locks = [threading.Lock() for _ in range(n)]
        # who holds which fork: None = free, else philosopher idx
        self._taken_by: List[Optional[int]] = [None] * n

    def __len__(self) -> int:
        return len(self._locks)

    def _lock(self, fork_id: int) -> threading.Lock:
        if not 0 <= fork_id < len(self._locks):
            raise IndexError(f"no fork {fork_id}")
        return self._locks[fork_id]

    def acquire(self, fork_id: int, holder: int) -> None:
        """Block until fork ``fork_id`` is free, then take it on behalf of ``holder``."""
        lock = self._lock(fork_id)
        lock.acquire()
        self._taken_by[fork_id] = holder
        logger.debug("fork %d taken by P%d", fork_id, holder)

    def release(self, fork_id: int, holder: int) -> None:
        """
        Put fork ``fork_id`` back on the table.

        Only the philosopher holding the fork may release it; anything else is
        a bug in the caller and raises ResourceProtocolError.
        """
        lock = self._lock(fork_id)
        owner = self._taken_by[fork_id]
        if owner != holder or not lock.locked():
            raise ResourceProtocolError(
                f"P{holder} released fork {fork_id} held by "
                f"{'nobody' if owner is None else f'P{owner}'}"
            )
        self._taken_by[fork_id] = None
        lock.release()
        logger.debug("fork %d released by P%d", fork_id, holder)

    # -------------------
    # Read-only views (display and tests)
    # -------------------

    def holder(self, fork_id: int) -> Optional[int]:
        self._lock(fork_id)  # bounds check
        return self._taken_by[fork_id]

    def holders(self) -> List[Optional[int]]:
        return list(self._taken_by)

    def all_free(self) -> bool:
        return not any(lock.locked() for lock in self._locks)

    def __repr__(self) -> str:
        return f"ForkSet(n={len(self)}, taken_by={self.holders()})"
