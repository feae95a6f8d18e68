"""
Rendering interface for lifespan results.

The calculation code only talks to a ``Renderer``; anything that can show
field errors, numeric values and a progress bar can host the display.
"""

import sys
from typing import Dict, List, Optional, Protocol, TextIO, Tuple

from ..validation.lifespan_rules import InputField


# (element suffix, DurationBreakdown attribute)
DURATION_UNITS: List[Tuple[str, str]] = [
    ('years', 'years'),
    ('months', 'months'),
    ('days', 'days'),
    ('hours', 'hours'),
    ('minutes', 'minutes'),
    ('seconds', 'seconds'),
]

LIVED_PREFIX = 'lived'
REMAINING_PREFIX = 'remaining'

DURATION_ELEMENTS: List[str] = [
    f"{prefix}-{suffix}"
    for prefix in (LIVED_PREFIX, REMAINING_PREFIX)
    for suffix, _ in DURATION_UNITS
]

BUSY_LABEL = 'Calculating...'
IDLE_LABEL = 'Calculate Life Journey'
INVALID_INPUT_NOTICE = 'Please enter valid dates!'
CALCULATION_FAILED_NOTICE = 'An error occurred during calculation. Please check your inputs.'


def is_seconds_element(element_id: str) -> bool:
    return element_id.endswith('-seconds')


class Renderer(Protocol):
    """Display surface for errors, durations and progress."""

    def show_field_error(self, input_field: InputField, message: str) -> None:
        ...

    def clear_field_error(self, input_field: InputField) -> None:
        ...

    def render_value(self, element_id: str, text: str, highlight: bool = False) -> None:
        ...

    def end_highlight(self, element_id: str) -> None:
        ...

    def render_progress(self, percentage: float, text: str) -> None:
        ...

    def show_notice(self, message: str) -> None:
        ...

    def set_busy(self, busy: bool, label: str) -> None:
        ...

    def show_results(self) -> None:
        ...

    def hide_results(self) -> None:
        ...


class TerminalRenderer:
    """Writes the display as plain text lines."""

    BAR_WIDTH = 40

    def __init__(self, stream: Optional[TextIO] = None, stderr: Optional[TextIO] = None):
        self.stream = stream or sys.stdout
        self.stderr = stderr or sys.stderr
        self.values: Dict[str, str] = {}
        self.errors: Dict[InputField, str] = {}
        self.progress_text = ''
        self.percentage = 0.0
        self.visible = False

    def show_field_error(self, input_field: InputField, message: str) -> None:
        self.errors[input_field] = message
        print(f"Error [{input_field.value}]: {message}", file=self.stderr)

    def clear_field_error(self, input_field: InputField) -> None:
        self.errors.pop(input_field, None)

    def render_value(self, element_id: str, text: str, highlight: bool = False) -> None:
        self.values[element_id] = text

    def end_highlight(self, element_id: str) -> None:
        pass

    def render_progress(self, percentage: float, text: str) -> None:
        self.percentage = percentage
        self.progress_text = text
        if self.visible:
            self.draw()

    def show_notice(self, message: str) -> None:
        print(message, file=self.stderr)

    def set_busy(self, busy: bool, label: str) -> None:
        if busy:
            print(label, file=self.stream)

    def show_results(self) -> None:
        self.visible = True
        self.draw()

    def hide_results(self) -> None:
        self.visible = False

    def _row(self, prefix: str) -> str:
        parts = []
        for suffix, _ in DURATION_UNITS:
            parts.append(f"{self.values.get(f'{prefix}-{suffix}', '0')} {suffix}")
        return ', '.join(parts)

    def draw(self) -> None:
        """Print the current values as one block."""
        filled = int(round(self.BAR_WIDTH * self.percentage / 100))
        bar = '#' * filled + '-' * (self.BAR_WIDTH - filled)
        print(f"Lived:     {self._row(LIVED_PREFIX)}", file=self.stream)
        print(f"Remaining: {self._row(REMAINING_PREFIX)}", file=self.stream)
        print(f"[{bar}] {self.progress_text}", file=self.stream)
        self.stream.flush()
