import pytest
from PySide6.QtWidgets import QApplication

from sandtimer.core.timer import TimerController, TimerState
from sandtimer.ui.main_window import MainWindow

_app = None


def _ensure_app():
    global _app
    if _app is None:
        _app = QApplication.instance() or QApplication([])


def test_window_reflects_controller_state():
    _ensure_app()
    win = MainWindow()
    assert win.time_label.text() == "10"
    assert win.play_pause_btn.text() == "Play"
    assert not win.play_pause_btn.isHidden()

    win.play_pause_btn.click()
    assert win.controller.current_state().timer_state is TimerState.RUNNING
    assert win.play_pause_btn.text() == "Pause"
    assert win.hourglass.isRunning()

    for _ in range(15):
        win.controller._tick()
    assert win.time_label.text() == "8"
    assert win.hourglass.percentage() == pytest.approx(0.15)

    win.play_pause_btn.click()
    assert win.controller.current_state().timer_state is TimerState.PAUSED
    assert win.play_pause_btn.text() == "Play"
    assert not win.hourglass.isRunning()

    win.reset_btn.click()
    assert win.controller.current_state().remaining_ms == 10_000
    assert win.time_label.text() == "10"
    assert win.hourglass.percentage() == 0.0


def test_play_pause_hidden_when_expired():
    _ensure_app()
    controller = TimerController(total_duration_ms=300)
    win = MainWindow(controller)
    win.play_pause_btn.click()
    for _ in range(3):
        controller._tick()
    assert controller.current_state().timer_state is TimerState.EXPIRED
    assert win.play_pause_btn.isHidden()
    assert win.time_label.text() == "0"
    win.reset_btn.click()
    assert not win.play_pause_btn.isHidden()
    assert win.play_pause_btn.text() == "Play"


def test_center_on_preferred_screen_ignores_bad_index(monkeypatch):
    _ensure_app()
    monkeypatch.setenv("SANDTIMER_SCREEN_INDEX", "not-a-number")
    win = MainWindow()
    win.centerOnPreferredScreen()  # must not raise
