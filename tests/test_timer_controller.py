import warnings

import pytest
from PySide6.QtCore import QCoreApplication

from sandtimer.core.timer import Event, State, TimerController, TimerState

_app = None


def _ensure_app():
    global _app
    if _app is None:
        _app = QCoreApplication.instance() or QCoreApplication([])


def _ticks(controller, n):
    for _ in range(n):
        controller._tick()


def test_initial_state():
    _ensure_app()
    c = TimerController()
    s = c.current_state()
    assert s == State(10_000, 10_000, TimerState.READY)
    assert s.display_seconds == "10"
    assert s.percentage == 0.0
    assert not c.is_ticking()


def test_play_ticks_and_pause_resume_from_paused_value():
    _ensure_app()
    c = TimerController()
    c.play()
    assert c.current_state().timer_state is TimerState.RUNNING
    assert c.is_ticking()
    _ticks(c, 10)
    s = c.current_state()
    assert s.remaining_ms == 9000
    assert s.percentage == pytest.approx(0.1)
    assert s.display_seconds == "9"

    c.pause()
    assert not c.is_ticking()
    assert c.current_state() == State(10_000, 9000, TimerState.PAUSED)
    # stray ticks after pause do not decrement
    _ticks(c, 3)
    assert c.current_state().remaining_ms == 9000

    c.play()
    assert c.current_state().timer_state is TimerState.RUNNING
    _ticks(c, 1)
    assert c.current_state().remaining_ms == 8900


def test_counts_down_to_expired():
    _ensure_app()
    c = TimerController()
    c.play()
    _ticks(c, 100)
    s = c.current_state()
    assert s.timer_state is TimerState.EXPIRED
    assert s.remaining_ms == 0
    assert s.percentage == 1.0
    assert not c.is_ticking()
    _ticks(c, 5)
    assert c.current_state().remaining_ms == 0


def test_expired_ignores_play_and_pause():
    _ensure_app()
    c = TimerController(total_duration_ms=200)
    c.play()
    _ticks(c, 2)
    assert c.current_state().timer_state is TimerState.EXPIRED
    c.play()
    assert c.current_state().timer_state is TimerState.EXPIRED
    assert not c.is_ticking()
    c.pause()
    assert c.current_state().timer_state is TimerState.EXPIRED


def test_tick_larger_than_remaining_clamps_to_zero():
    _ensure_app()
    c = TimerController(total_duration_ms=250, tick_ms=100)
    c.play()
    _ticks(c, 3)
    s = c.current_state()
    assert s.remaining_ms == 0
    assert s.timer_state is TimerState.EXPIRED


@pytest.mark.parametrize("ticks", [0, 5, 100])
@pytest.mark.parametrize("pause_first", [False, True])
def test_reset_from_any_state(ticks, pause_first):
    _ensure_app()
    c = TimerController()
    c.play()
    _ticks(c, ticks)
    if pause_first:
        c.pause()
    c.reset()
    assert c.current_state() == State(10_000, 10_000, TimerState.READY)
    assert not c.is_ticking()


def test_play_while_running_keeps_single_timer():
    _ensure_app()
    c = TimerController()
    c.play()
    _ticks(c, 4)
    c.play()
    assert c.current_state().remaining_ms == 9600
    assert c.is_ticking()


def test_pause_outside_running_is_noop():
    _ensure_app()
    c = TimerController()
    seen = []
    c.subscribe(seen.append)
    c.pause()
    assert c.current_state().timer_state is TimerState.READY
    assert seen == []


def test_remaining_stays_in_bounds_for_event_sequences():
    _ensure_app()
    c = TimerController(total_duration_ms=1000)
    seen = []
    c.subscribe(seen.append)
    script = [
        Event.PlayClicked,
        Event.PauseClicked,
        Event.PlayClicked,
        Event.ResetClicked,
        Event.PauseClicked,
        Event.PlayClicked,
        Event.PlayClicked,
        Event.PauseClicked,
        Event.PlayClicked,
    ]
    for event in script:
        c.action(event)
        _ticks(c, 4)
    _ticks(c, 20)
    assert seen
    for s in seen:
        assert 0 <= s.remaining_ms <= s.total_duration_ms
        assert 0.0 <= s.percentage <= 1.0
    assert c.current_state().timer_state is TimerState.EXPIRED


def test_subscribers_see_snapshots_in_order_and_can_unsubscribe():
    _ensure_app()
    c = TimerController()
    seen = []
    unsubscribe = c.subscribe(seen.append)
    c.action(Event.PlayClicked)
    _ticks(c, 2)
    c.action(Event.PauseClicked)
    assert [s.timer_state for s in seen] == [
        TimerState.RUNNING,
        TimerState.RUNNING,
        TimerState.RUNNING,
        TimerState.PAUSED,
    ]
    assert [s.remaining_ms for s in seen] == [10_000, 9900, 9800, 9800]
    unsubscribe()
    c.action(Event.ResetClicked)
    assert len(seen) == 4


def test_rejects_non_positive_durations():
    _ensure_app()
    with pytest.raises(ValueError):
        TimerController(total_duration_ms=0)
    with pytest.raises(ValueError):
        TimerController(tick_ms=-100)


def test_state_clamps_remaining():
    s = State.initial(1000)
    assert s.with_remaining(-50).remaining_ms == 0
    assert s.with_remaining(5000).remaining_ms == 1000
    assert State(1000, 0, TimerState.EXPIRED).display_seconds == "0"


def test_pause_delivered_with_last_tick_wins_over_expiry():
    _ensure_app()
    c = TimerController(total_duration_ms=200)

    def pause_at_zero(state):
        if state.timer_state is TimerState.RUNNING and state.remaining_ms == 0:
            c.pause()

    c.subscribe(pause_at_zero)
    c.play()
    _ticks(c, 2)
    s = c.current_state()
    assert s.timer_state is TimerState.PAUSED
    assert s.remaining_ms == 0
    assert not c.is_ticking()


def test_reset_delivered_with_last_tick_wins_over_expiry():
    _ensure_app()
    c = TimerController(total_duration_ms=100)

    def reset_at_zero(state):
        if state.timer_state is TimerState.RUNNING and state.remaining_ms == 0:
            c.reset()

    c.subscribe(reset_at_zero)
    c.play()
    _ticks(c, 1)
    assert c.current_state() == State(100, 100, TimerState.READY)


def test_second_unsubscribe_is_silent():
    _ensure_app()
    c = TimerController()
    seen = []
    unsubscribe = c.subscribe(seen.append)
    unsubscribe()
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        unsubscribe()
    c.play()
    assert seen == []
