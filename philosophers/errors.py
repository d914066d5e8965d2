"""Exceptions raised by the simulator."""


class PhilosophersError(Exception):
    """Base class for simulator errors."""


class ConfigurationError(PhilosophersError, ValueError):
    """Raised when a simulation is configured with invalid parameters."""


class ResourceProtocolError(PhilosophersError, RuntimeError):
    """Raised when a fork is released by someone who does not hold it."""
