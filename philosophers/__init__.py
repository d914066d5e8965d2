"""Dining philosophers simulation with resource-ordered fork acquisition."""

from .agent import State, fork_ids, philosopher_loop
from .errors import ConfigurationError, PhilosophersError, ResourceProtocolError
from .forks import ForkSet
from .observers import Philosopher, QueueObserver, StateBoard, fan_out
from .simulation import DiningSimulation, SimulationConfig, start

__all__ = [
    "ConfigurationError",
    "DiningSimulation",
    "ForkSet",
    "Philosopher",
    "PhilosophersError",
    "QueueObserver",
    "ResourceProtocolError",
    "SimulationConfig",
    "State",
    "StateBoard",
    "fan_out",
    "fork_ids",
    "philosopher_loop",
    "start",
]
