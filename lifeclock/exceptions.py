"""Exception types raised by lifeclock."""


class LifeClockError(Exception):
    """Base class for lifeclock errors."""


class ComputationError(LifeClockError):
    """An unexpected failure while computing or rendering statistics."""
