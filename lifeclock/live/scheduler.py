"""
Single-threaded timers for deferred and repeating callbacks.

Two schedulers share one interface: ``ManualScheduler`` keeps virtual time
that only moves when ``advance()`` is called, and ``SchedScheduler`` runs
callbacks in real time on top of the standard ``sched`` module. In both, a
repeating callback is re-armed only after it returns, so runs never
overlap, and a callback that raises is not re-armed.
"""

import heapq
import itertools
import logging
import sched
import time
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)

Callback = Callable[[], None]

_handle_ids = itertools.count(1)


@dataclass(eq=False)
class TimerHandle:
    """A registered callback; pass it to ``Scheduler.cancel``."""
    callback: Callback
    interval: Optional[float] = None  # None for one-shot timers
    handle_id: int = field(default_factory=lambda: next(_handle_ids))
    cancelled: bool = False
    fired: int = 0
    event: Any = None  # backend-specific entry

    @property
    def repeating(self) -> bool:
        return self.interval is not None

    @property
    def active(self) -> bool:
        if self.cancelled:
            return False
        return self.repeating or self.fired == 0


class Scheduler(Protocol):
    """Timer interface used by the live display."""

    def now(self) -> float:
        ...

    def call_later(self, delay: float, callback: Callback) -> TimerHandle:
        ...

    def call_every(self, interval: float, callback: Callback) -> TimerHandle:
        ...

    def cancel(self, handle: Optional[TimerHandle]) -> None:
        ...


def _run_handle(handle: TimerHandle) -> None:
    handle.fired += 1
    try:
        handle.callback()
    except Exception:
        handle.cancelled = True
        raise


class ManualScheduler:
    """Scheduler driven by explicit calls to ``advance``."""

    def __init__(self, start: float = 0.0):
        self._now = start
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    def _push(self, due: float, handle: TimerHandle) -> TimerHandle:
        handle.event = due
        heapq.heappush(self._queue, (due, next(self._seq), handle))
        return handle

    def call_later(self, delay: float, callback: Callback) -> TimerHandle:
        return self._push(self._now + max(0.0, delay), TimerHandle(callback))

    def call_every(self, interval: float, callback: Callback) -> TimerHandle:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        return self._push(self._now + interval, TimerHandle(callback, interval=interval))

    def cancel(self, handle: Optional[TimerHandle]) -> None:
        if handle is not None:
            handle.cancelled = True

    def pending(self) -> List[TimerHandle]:
        """Handles still waiting to fire, in due order."""
        return [entry[2] for entry in sorted(self._queue) if not entry[2].cancelled]

    def advance(self, seconds: float) -> int:
        """
        Move time forward, running every callback that falls due.

        Args:
            seconds: How far to move the clock

        Returns:
            Number of callbacks run
        """
        target = self._now + seconds
        ran = 0

        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = due
            _run_handle(handle)
            ran += 1
            if handle.repeating and not handle.cancelled:
                self._push(due + handle.interval, handle)

        self._now = target
        return ran


class SchedScheduler:
    """Real-time scheduler on the standard ``sched`` module."""

    def __init__(
        self,
        timefunc: Callable[[], float] = time.monotonic,
        delayfunc: Callable[[float], Any] = time.sleep,
    ):
        self._sched = sched.scheduler(timefunc, delayfunc)
        self._timefunc = timefunc

    def now(self) -> float:
        return self._timefunc()

    def _enter(self, delay: float, handle: TimerHandle) -> TimerHandle:
        handle.event = self._sched.enter(max(0.0, delay), 0, self._fire, (handle,))
        return handle

    def _fire(self, handle: TimerHandle) -> None:
        if handle.cancelled:
            return
        _run_handle(handle)
        if handle.repeating and not handle.cancelled:
            self._enter(handle.interval, handle)

    def call_later(self, delay: float, callback: Callback) -> TimerHandle:
        return self._enter(delay, TimerHandle(callback))

    def call_every(self, interval: float, callback: Callback) -> TimerHandle:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        return self._enter(interval, TimerHandle(callback, interval=interval))

    def cancel(self, handle: Optional[TimerHandle]) -> None:
        if handle is None:
            return
        handle.cancelled = True
        try:
            self._sched.cancel(handle.event)
        except ValueError:
            # Already fired or removed
            pass

    def empty(self) -> bool:
        return self._sched.empty()

    def run(self) -> None:
        """Block, running callbacks until nothing is scheduled."""
        logger.debug("Scheduler running")
        self._sched.run()
        logger.debug("Scheduler idle")
