"""Tests for the live update loop."""

import logging
from datetime import datetime

import pytest

from lifeclock.config import LifeClockConfig
from lifeclock.core.calculator import compute_stats
from lifeclock.core.fields import FieldValues
from lifeclock.exceptions import ComputationError
from lifeclock.live.loop import LiveUpdateContext, LiveUpdateLoop, LoopState
from lifeclock.ui.renderer import DURATION_ELEMENTS
from lifeclock.validation import LifeInterval

INTERVAL = LifeInterval(datetime(1990, 1, 1), datetime(2080, 1, 1))
FIELDS = FieldValues(bday=1, bmonth=1, byear=1990, dday=1, dmonth=1, dyear=2080)


@pytest.fixture
def loop(scheduler, renderer, clock):
    return LiveUpdateLoop(scheduler, renderer, clock=clock, config=LifeClockConfig())


def active_repeats(scheduler):
    return [handle for handle in scheduler.pending() if handle.repeating]


class TestLoopState:
    """Test starting, replacing and stopping the loop."""

    def test_starts_idle(self, loop):
        """Test a new loop is idle."""
        assert loop.state is LoopState.IDLE

    def test_start_and_stop(self, loop, scheduler):
        """Test start registers one repeating timer and stop removes it."""
        loop.start(INTERVAL)
        assert loop.state is LoopState.ACTIVE
        assert len(active_repeats(scheduler)) == 1

        loop.stop()
        assert loop.state is LoopState.IDLE
        assert active_repeats(scheduler) == []

    def test_second_start_replaces_first(self, loop, scheduler):
        """Test starting again cancels the running registration."""
        loop.start(INTERVAL)
        first = loop.context.handle
        loop.start(INTERVAL)

        assert first.cancelled
        assert len(active_repeats(scheduler)) == 1

        scheduler.advance(3.0)
        assert loop.context.ticks == 3

    def test_start_without_interval(self, loop):
        """Test starting with no validated interval is an error."""
        with pytest.raises(ComputationError):
            loop.start()

    def test_restart_keeps_stored_interval(self, loop):
        """Test a bare start resumes with the stored interval."""
        loop.start(INTERVAL)
        loop.stop()
        loop.start()
        assert loop.context.interval == INTERVAL
        assert loop.state is LoopState.ACTIVE

    def test_stop_when_idle(self, loop):
        """Test stopping an idle loop is harmless."""
        loop.stop()
        assert loop.state is LoopState.IDLE


class TestTick:
    """Test what a tick renders."""

    def test_tick_updates_seconds_with_highlight(self, loop, renderer, scheduler, clock):
        """Test a tick redraws the seconds with a highlight."""
        loop.render(compute_stats(INTERVAL, clock()))
        assert {call[0] for call in renderer.value_calls} == set(DURATION_ELEMENTS)

        loop.start(INTERVAL)
        scheduler.advance(1.0)

        seconds_calls = renderer.renders_of('lived-seconds')
        assert seconds_calls[-1][2] is True
        assert renderer.values['lived-seconds'] != seconds_calls[0][1]

    def test_unchanged_values_not_redrawn(self, loop, renderer, scheduler, clock):
        """Test values whose text did not change are skipped."""
        loop.render(compute_stats(INTERVAL, clock()))
        loop.start(INTERVAL)
        scheduler.advance(1.0)

        assert len(renderer.renders_of('lived-years')) == 1
        assert len(renderer.renders_of('remaining-years')) == 1

    def test_highlight_ends(self, loop, renderer, scheduler):
        """Test the seconds highlight ends after a short delay."""
        loop.start(INTERVAL)
        scheduler.advance(1.0)
        assert renderer.highlights_ended == []
        scheduler.advance(0.25)
        assert 'lived-seconds' in renderer.highlights_ended
        assert loop.context.highlights == {}

    def test_stop_cancels_pending_highlights(self, loop, renderer, scheduler):
        """Test stopping ends highlights at once and leaves no timers behind."""
        loop.start(INTERVAL)
        scheduler.advance(1.0)
        assert loop.context.highlights

        loop.stop()
        assert scheduler.pending() == []
        assert loop.context.highlights == {}
        assert set(renderer.highlights_ended) == {'lived-seconds', 'remaining-seconds'}

        scheduler.advance(1.0)
        assert len(renderer.highlights_ended) == 2

    def test_progress_rendered_each_tick(self, loop, renderer, scheduler):
        """Test the progress bar is updated on every tick."""
        loop.start(INTERVAL)
        scheduler.advance(3.0)
        assert len(renderer.progress) == 3
        percentage, text = renderer.progress[-1]
        assert 0 < percentage < 100
        assert text.endswith('% Complete')

    def test_incomplete_fields_skip_tick(self, loop, renderer, scheduler):
        """Test a tick renders nothing while a stored field is blank."""
        current = {'fields': FieldValues(bday=1, bmonth=1, byear=1990)}
        loop.context.field_reader = lambda: current['fields']
        loop.start(INTERVAL)

        scheduler.advance(2.0)
        assert renderer.value_calls == []
        assert loop.state is LoopState.ACTIVE

        current['fields'] = FIELDS
        scheduler.advance(1.0)
        assert renderer.value_calls != []

    def test_error_stops_loop(self, scheduler, renderer, caplog):
        """Test an exception in a tick is logged and stops the loop."""
        def broken_clock():
            raise RuntimeError("clock failure")

        loop = LiveUpdateLoop(scheduler, renderer, clock=broken_clock)
        loop.start(INTERVAL)

        with caplog.at_level(logging.ERROR):
            scheduler.advance(1.0)

        assert loop.state is LoopState.IDLE
        assert active_repeats(scheduler) == []
        assert "Error in live update" in caplog.text

        scheduler.advance(5.0)
        assert renderer.value_calls == []


class TestVisibility:
    """Test pausing and resuming on visibility changes."""

    def test_hidden_stops(self, loop):
        """Test hiding the page stops the loop."""
        loop.start(INTERVAL)
        loop.on_visibility_change(hidden=True)
        assert loop.state is LoopState.IDLE

    def test_visible_resumes_when_results_shown(self, loop):
        """Test showing the page resumes while results are displayed."""
        loop.context.results_visible = True
        loop.start(INTERVAL)
        loop.on_visibility_change(hidden=True)
        loop.on_visibility_change(hidden=False)
        assert loop.state is LoopState.ACTIVE

    def test_visible_without_results_stays_idle(self, loop):
        """Test showing the page does not resume without results."""
        loop.start(INTERVAL)
        loop.on_visibility_change(hidden=True)
        loop.on_visibility_change(hidden=False)
        assert loop.state is LoopState.IDLE

    def test_visible_without_interval_stays_idle(self, scheduler, renderer):
        """Test showing the page does not resume without an interval."""
        loop = LiveUpdateLoop(scheduler, renderer, context=LiveUpdateContext(results_visible=True))
        loop.on_visibility_change(hidden=False)
        assert loop.state is LoopState.IDLE
