"""Field error annotations that clear themselves after a fixed time."""

import logging
from typing import Dict, Optional

from ..validation.lifespan_rules import ALL_FIELDS, InputField
from ..ui.renderer import Renderer
from .scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class ErrorBoard:
    """
    Shows field errors on a renderer and expires each one on its own timer.

    A field shows one message at a time; raising a second message on the
    same field replaces the first and restarts that field's timer.
    """

    def __init__(self, renderer: Renderer, scheduler: Scheduler, display_seconds: float = 4.0):
        self.renderer = renderer
        self.scheduler = scheduler
        self.display_seconds = display_seconds
        self.active: Dict[InputField, str] = {}
        self._expiries: Dict[InputField, TimerHandle] = {}

    def raise_error(self, input_field: InputField, message: str) -> None:
        self.scheduler.cancel(self._expiries.pop(input_field, None))
        self.active[input_field] = message
        self.renderer.show_field_error(input_field, message)
        self._expiries[input_field] = self.scheduler.call_later(
            self.display_seconds, lambda: self._expire(input_field)
        )

    def _expire(self, input_field: InputField) -> None:
        self._expiries.pop(input_field, None)
        if self.active.pop(input_field, None) is not None:
            logger.debug("Error on %s expired", input_field.value)
        self.renderer.clear_field_error(input_field)

    def clear_field(self, input_field: InputField) -> None:
        """Remove one field's annotation immediately."""
        self.scheduler.cancel(self._expiries.pop(input_field, None))
        self.active.pop(input_field, None)
        self.renderer.clear_field_error(input_field)

    def clear_all(self) -> None:
        for input_field in ALL_FIELDS:
            self.clear_field(input_field)

    def message_for(self, input_field: InputField) -> Optional[str]:
        return self.active.get(input_field)
