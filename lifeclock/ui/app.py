"""
Presentation controller for the lifespan calculator.

Holds the six raw input fields, reacts to input events, runs the deferred
calculation and hands successful results to the live update loop.
"""

import logging
from datetime import datetime
from typing import Callable, Dict, Optional

from ..config import LifeClockConfig, default_config
from ..core.calculator import LifeCalculator, LifeStats, compute_stats
from ..core.fields import FieldValues, format_field_on_blur
from ..live.error_board import ErrorBoard
from ..live.loop import LiveUpdateLoop, LoopState
from ..live.scheduler import Scheduler, TimerHandle
from ..validation.input_validator import Clock, LifeInterval
from ..validation.lifespan_rules import ALL_FIELDS, InputField
from .renderer import (
    BUSY_LABEL,
    CALCULATION_FAILED_NOTICE,
    IDLE_LABEL,
    INVALID_INPUT_NOTICE,
    Renderer,
)

logger = logging.getLogger(__name__)


class LifeClockApp:
    """Wires input events, calculation and the live display together."""

    def __init__(
        self,
        renderer: Renderer,
        scheduler: Scheduler,
        clock: Optional[Clock] = None,
        config: LifeClockConfig = default_config,
    ):
        """
        Initialize the application.

        Args:
            renderer: Display surface
            scheduler: Timer source for deferred and repeating work
            clock: Returns the current local time; defaults to datetime.now
            config: Timings
        """
        self.renderer = renderer
        self.scheduler = scheduler
        self.clock = clock or datetime.now
        self.config = config

        self.error_board = ErrorBoard(renderer, scheduler, config.error_display_seconds)
        self.calculator = LifeCalculator(error_sink=self.error_board, clock=self.clock)
        self.loop = LiveUpdateLoop(scheduler, renderer, clock=self.clock, config=config)
        self.loop.context.field_reader = self.read_fields

        self.fields: Dict[InputField, str] = {input_field: '' for input_field in ALL_FIELDS}
        self.last_stats: Optional[LifeStats] = None
        self._pending_calculation: Optional[TimerHandle] = None
        self._auto_calc: Optional[TimerHandle] = None

        logger.info("LifeClock initialized")

    # Input events

    def set_field(self, input_field: InputField, value: str) -> None:
        self.fields[input_field] = value

    def set_fields(self, values: Dict[InputField, object]) -> None:
        for input_field, value in values.items():
            self.set_field(input_field, '' if value is None else str(value))

    def on_field_input(self, input_field: InputField, value: str) -> None:
        """Store typed text, drop the field's error and restart the auto-calc timer."""
        self.set_field(input_field, value)
        self.error_board.clear_field(input_field)

        self.scheduler.cancel(self._auto_calc)
        self._auto_calc = self.scheduler.call_later(self.config.auto_calc_delay, self._auto_calculate)

    def on_field_blur(self, input_field: InputField) -> str:
        formatted = format_field_on_blur(input_field, self.fields[input_field])
        self.fields[input_field] = formatted
        return formatted

    def _auto_calculate(self) -> None:
        self._auto_calc = None
        if all(value.strip() != '' for value in self.fields.values()):
            self.request_calculation()

    def submit(self) -> None:
        """Equivalent of pressing Enter in any field."""
        self.request_calculation()

    # Calculation

    def read_fields(self) -> FieldValues:
        return FieldValues.from_mapping(self.fields)

    def request_calculation(
        self,
        on_done: Optional[Callable[[Optional[LifeStats]], None]] = None,
    ) -> None:
        """
        Show the busy state and calculate after the configured latency.

        Args:
            on_done: Called with the result of the deferred calculation
        """
        self.renderer.set_busy(True, BUSY_LABEL)
        self.scheduler.cancel(self._pending_calculation)

        callback = self.run_calculation
        if on_done is not None:
            callback = lambda: on_done(self.run_calculation())
        self._pending_calculation = self.scheduler.call_later(
            self.config.calculation_latency, callback
        )

    def run_calculation(self) -> Optional[LifeStats]:
        """
        Validate the current fields and show the results.

        Returns:
            The statistics shown, or None if the inputs were rejected or
            the calculation failed
        """
        self._pending_calculation = None
        try:
            fields = self.read_fields()
            interval = self.calculator.validate_interval(*fields.as_tuple())
            if interval is None:
                self.renderer.show_notice(INVALID_INPUT_NOTICE)
                return None

            stats = compute_stats(interval, self.clock())
            self.show_result(stats, interval)
            return stats
        except Exception:
            logger.exception("Calculation error")
            self.renderer.show_notice(CALCULATION_FAILED_NOTICE)
            return None
        finally:
            self.renderer.set_busy(False, IDLE_LABEL)

    def show_result(self, stats: LifeStats, interval: LifeInterval) -> None:
        self.last_stats = stats
        self.loop.render(stats)
        self.show_results()
        self.loop.start(interval)

    # Results view and page lifecycle

    @property
    def live_state(self) -> LoopState:
        return self.loop.state

    def show_results(self) -> None:
        self.loop.context.results_visible = True
        self.renderer.show_results()

    def hide_results(self) -> None:
        """Navigate away from the results; stops live updates."""
        self.loop.context.results_visible = False
        self.renderer.hide_results()
        self.loop.stop()

    def on_visibility_change(self, hidden: bool) -> None:
        self.loop.on_visibility_change(hidden)

    def unload(self) -> None:
        """Stop every timer the application owns."""
        self.loop.stop()
        self.scheduler.cancel(self._auto_calc)
        self.scheduler.cancel(self._pending_calculation)
        self._auto_calc = None
        self._pending_calculation = None
        self.error_board.clear_all()
        logger.debug("LifeClock unloaded")
