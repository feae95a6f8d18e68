"""Timers, transient error annotations and the live update loop."""

from .scheduler import Scheduler, ManualScheduler, SchedScheduler, TimerHandle
from .error_board import ErrorBoard
from .loop import LiveUpdateContext, LiveUpdateLoop, LoopState

__all__ = [
    'Scheduler',
    'ManualScheduler',
    'SchedScheduler',
    'TimerHandle',
    'ErrorBoard',
    'LiveUpdateContext',
    'LiveUpdateLoop',
    'LoopState',
]
