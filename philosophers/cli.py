"""Headless runner: seat the philosophers, let them eat for a while, report."""

import argparse
import logging
import sys
from typing import List, Optional

from .errors import ConfigurationError
from .observers import StateBoard, fan_out
from .simulation import DiningSimulation, SimulationConfig

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dining-philosophers",
        description="Dining philosophers with resource-ordered fork acquisition",
    )
    parser.add_argument("-n", "--philosophers", type=int, default=5, help="Number of philosophers (default: 5)")
    parser.add_argument(
        "-t",
        "--timescale",
        type=float,
        default=200,
        help="Milliseconds per random unit of thinking/eating time (default: 200)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed base; philosopher i uses seed+i")
    parser.add_argument("--cycles", type=int, default=None, help="Stop each philosopher after this many meals")
    parser.add_argument(
        "--duration",
        type=float,
        default=5.0,
        help="Seconds to run before stopping (default: 5; with --cycles, an upper bound)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every state change and fork")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(threadName)s %(levelname)s %(name)s: %(message)s",
    )

    config = SimulationConfig(
        n_philosophers=args.philosophers,
        timescale=args.timescale,
        seed_base=args.seed,
        max_cycles=args.cycles,
    )
    board = StateBoard(max(config.n_philosophers, 0))

    def log_transition(i, state):
        LOGGER.debug("P%d -> %s", i, state.value)

    sim = DiningSimulation(config, fan_out(log_transition, board))
    try:
        sim.start()
    except ConfigurationError as exc:
        parser.error(str(exc))

    try:
        finished = sim.join(timeout=args.duration)
    except KeyboardInterrupt:
        LOGGER.info("interrupted")
        finished = False
    stopped = finished or sim.stop()

    meals = sim.completed_cycles()
    for p in board.snapshot():
        LOGGER.info("P%d: %s, ate %d times", p.idx, p.state.value, meals[p.idx])
    LOGGER.info("forks free: %s", sim.forks.all_free())
    return 0 if stopped else 1


if __name__ == "__main__":
    sys.exit(main())
