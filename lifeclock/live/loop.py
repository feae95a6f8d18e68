"""
Live update loop for the lifespan display.

While ACTIVE, the loop recomputes the statistics for the last validated
interval once per tick and pushes the values that changed to the renderer.
At most one tick registration exists per context; starting again replaces
it, and any failure inside a tick stops the loop.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, Optional

from ..config import LifeClockConfig, default_config
from ..core.calculator import LifeStats, compute_stats
from ..core.duration import DurationBreakdown, format_duration
from ..core.fields import FieldValues
from ..exceptions import ComputationError
from ..ui.renderer import (
    DURATION_UNITS,
    LIVED_PREFIX,
    REMAINING_PREFIX,
    Renderer,
    is_seconds_element,
)
from ..validation.input_validator import Clock, LifeInterval
from .scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """Whether live updates are running."""
    IDLE = "idle"
    ACTIVE = "active"


@dataclass
class LiveUpdateContext:
    """State owned by one live display."""
    handle: Optional[TimerHandle] = None
    interval: Optional[LifeInterval] = None
    field_reader: Optional[Callable[[], FieldValues]] = None
    displayed: Dict[str, str] = field(default_factory=dict)
    highlights: Dict[str, TimerHandle] = field(default_factory=dict)
    results_visible: bool = False
    ticks: int = 0

    @property
    def state(self) -> LoopState:
        if self.handle is not None and self.handle.active:
            return LoopState.ACTIVE
        return LoopState.IDLE


def duration_values(prefix: str, breakdown: DurationBreakdown) -> Dict[str, str]:
    """Element id -> display text for one breakdown."""
    return {
        f"{prefix}-{suffix}": str(getattr(breakdown, attr))
        for suffix, attr in DURATION_UNITS
    }


class LiveUpdateLoop:
    """Drives periodic re-rendering of a LiveUpdateContext."""

    def __init__(
        self,
        scheduler: Scheduler,
        renderer: Renderer,
        context: Optional[LiveUpdateContext] = None,
        clock: Optional[Clock] = None,
        config: LifeClockConfig = default_config,
    ):
        self.scheduler = scheduler
        self.renderer = renderer
        self.context = context or LiveUpdateContext()
        self.clock = clock or datetime.now
        self.config = config

    @property
    def state(self) -> LoopState:
        return self.context.state

    def start(self, interval: Optional[LifeInterval] = None) -> None:
        """
        Begin ticking, replacing any loop already running.

        Args:
            interval: Newly validated interval; keeps the stored one if omitted
        """
        if interval is not None:
            self.context.interval = interval
        if self.context.interval is None:
            raise ComputationError("Cannot start live updates without a validated interval")

        self.stop()
        self.context.handle = self.scheduler.call_every(self.config.tick_interval, self.tick)
        logger.debug("Live updates started (every %.2fs)", self.config.tick_interval)

    def stop(self) -> None:
        """Cancel the tick and end any highlight still showing."""
        for element_id in list(self.context.highlights):
            self.scheduler.cancel(self.context.highlights[element_id])
            self._end_highlight(element_id)

        if self.context.handle is None:
            return
        self.scheduler.cancel(self.context.handle)
        self.context.handle = None
        logger.debug("Live updates stopped")

    def tick(self) -> None:
        """Recompute and redraw; stops the loop on any error."""
        try:
            reader = self.context.field_reader
            if reader is not None and not reader().all_present():
                return
            if self.context.interval is None:
                raise ComputationError("No interval to update")
            stats = compute_stats(self.context.interval, self.clock())
            self.render(stats, only_changed=True)
            self.context.ticks += 1
        except Exception:
            logger.exception("Error in live update")
            self.stop()

    def render(self, stats: LifeStats, only_changed: bool = False) -> None:
        """
        Push statistics to the renderer.

        With ``only_changed`` set, values whose text is already displayed are
        skipped and changed seconds fields are briefly highlighted.
        """
        values = duration_values(LIVED_PREFIX, format_duration(stats.lived_ms))
        values.update(duration_values(REMAINING_PREFIX, format_duration(stats.remaining_ms)))

        for element_id, text in values.items():
            if only_changed and self.context.displayed.get(element_id) == text:
                continue
            highlight = only_changed and is_seconds_element(element_id)
            self.renderer.render_value(element_id, text, highlight=highlight)
            self.context.displayed[element_id] = text
            if highlight:
                self.scheduler.cancel(self.context.highlights.get(element_id))
                self.context.highlights[element_id] = self.scheduler.call_later(
                    self.config.highlight_seconds,
                    lambda element_id=element_id: self._end_highlight(element_id),
                )

        self.renderer.render_progress(stats.percentage_lived, stats.progress_text)

    def _end_highlight(self, element_id: str) -> None:
        self.context.highlights.pop(element_id, None)
        self.renderer.end_highlight(element_id)

    def on_visibility_change(self, hidden: bool) -> None:
        """Pause while hidden; resume when shown again with results on screen."""
        if hidden:
            self.stop()
        elif self.context.results_visible and self.context.interval is not None:
            self.start()
