"""Shared fixtures: a recording renderer and a clock tied to virtual time."""

from datetime import datetime, timedelta
from typing import Dict, List, Tuple

import pytest

from lifeclock.live.scheduler import ManualScheduler
from lifeclock.validation.lifespan_rules import InputField


NOW = datetime(2026, 10, 18, 12, 0, 0)


class RecordingRenderer:
    """Renderer that remembers every call."""

    def __init__(self):
        self.values: Dict[str, str] = {}
        self.value_calls: List[Tuple[str, str, bool]] = []
        self.highlights_ended: List[str] = []
        self.errors: Dict[InputField, str] = {}
        self.error_calls: List[Tuple[InputField, str]] = []
        self.progress: List[Tuple[float, str]] = []
        self.notices: List[str] = []
        self.busy: List[Tuple[bool, str]] = []
        self.visible = False

    def show_field_error(self, input_field, message):
        self.errors[input_field] = message
        self.error_calls.append((input_field, message))

    def clear_field_error(self, input_field):
        self.errors.pop(input_field, None)

    def render_value(self, element_id, text, highlight=False):
        self.values[element_id] = text
        self.value_calls.append((element_id, text, highlight))

    def end_highlight(self, element_id):
        self.highlights_ended.append(element_id)

    def render_progress(self, percentage, text):
        self.progress.append((percentage, text))

    def show_notice(self, message):
        self.notices.append(message)

    def set_busy(self, busy, label):
        self.busy.append((busy, label))

    def show_results(self):
        self.visible = True

    def hide_results(self):
        self.visible = False

    def renders_of(self, element_id):
        return [call for call in self.value_calls if call[0] == element_id]


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def clock(scheduler):
    """Wall clock that moves with the virtual scheduler."""
    return lambda: NOW + timedelta(seconds=scheduler.now())
