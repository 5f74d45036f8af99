"""Countdown timer controller.

Design:
TimerController owns a single immutable `State` snapshot and exposes:
    play()
    pause()
    reset()
    action(event)
    current_state() -> State
    subscribe(callback) -> unsubscribe callable
Signals:
    stateChanged(State)   # every new snapshot, in emission order

Ticking uses one QTimer on the owning thread's event loop. `play()` always
stops it before starting it again, so there is never more than one tick source.
The tick handler re-checks the state before each decrement and stops itself once
the state is no longer ``running``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional

from PySide6.QtCore import QObject, Qt, QTimer, Signal

from ..utils.timefmt import format_seconds

logger = logging.getLogger(__name__)

DEFAULT_TOTAL_MS = 10_000
DEFAULT_TICK_MS = 100


class TimerState(str, Enum):
    READY = "ready"
    RUNNING = "running"
    PAUSED = "paused"
    EXPIRED = "expired"


class Event(Enum):
    PlayClicked = "play"
    PauseClicked = "pause"
    ResetClicked = "reset"


@dataclass(frozen=True)
class State:
    total_duration_ms: int
    remaining_ms: int
    timer_state: TimerState = TimerState.READY

    @classmethod
    def initial(cls, total_duration_ms: int = DEFAULT_TOTAL_MS) -> "State":
        return cls(total_duration_ms, total_duration_ms, TimerState.READY)

    @property
    def display_seconds(self) -> str:
        return format_seconds(self.remaining_ms)

    @property
    def percentage(self) -> float:
        if self.total_duration_ms <= 0:
            return 0.0
        return (self.total_duration_ms - self.remaining_ms) / self.total_duration_ms

    @property
    def is_running(self) -> bool:
        return self.timer_state is TimerState.RUNNING

    def with_remaining(self, remaining_ms: int) -> "State":
        """Copy with ``remaining_ms`` clamped to [0, total]."""
        clamped = max(0, min(int(remaining_ms), self.total_duration_ms))
        return replace(self, remaining_ms=clamped)

    def with_timer_state(self, timer_state: TimerState) -> "State":
        return replace(self, timer_state=timer_state)


class TimerController(QObject):
    stateChanged = Signal(object)  # State

    def __init__(
        self,
        parent: Optional[QObject] = None,
        *,
        total_duration_ms: int = DEFAULT_TOTAL_MS,
        tick_ms: int = DEFAULT_TICK_MS,
    ):
        super().__init__(parent)
        if total_duration_ms <= 0:
            raise ValueError("total_duration_ms must be positive")
        if tick_ms <= 0:
            raise ValueError("tick_ms must be positive")
        self._total_ms = int(total_duration_ms)
        self._tick_ms = int(tick_ms)
        self._state = State.initial(self._total_ms)
        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.PreciseTimer)  # type: ignore[attr-defined]
        self._timer.setInterval(self._tick_ms)
        self._timer.timeout.connect(self._tick)

    # Public API
    def current_state(self) -> State:
        return self._state

    def subscribe(self, callback: Callable[[State], None]) -> Callable[[], None]:
        """Deliver every subsequent snapshot to ``callback``.

        Returns a function that removes the subscription.
        """
        self.stateChanged.connect(callback)
        connected = [True]

        def unsubscribe():
            if not connected[0]:
                return
            connected[0] = False
            self.stateChanged.disconnect(callback)

        return unsubscribe

    def is_ticking(self) -> bool:
        return self._timer.isActive()

    def action(self, event: Event):
        if event is Event.PlayClicked:
            self.play()
        elif event is Event.PauseClicked:
            self.pause()
        elif event is Event.ResetClicked:
            self.reset()

    def play(self):
        if self._state.timer_state not in (TimerState.READY, TimerState.PAUSED):
            logger.debug("play ignored in state %s", self._state.timer_state.value)
            return
        self._stop_ticking()
        self._emit(self._state.with_timer_state(TimerState.RUNNING))
        self._timer.start()

    def pause(self):
        self._stop_ticking()
        if self._state.timer_state is not TimerState.RUNNING:
            logger.debug("pause ignored in state %s", self._state.timer_state.value)
            return
        self._emit(self._state.with_timer_state(TimerState.PAUSED))

    def reset(self):
        self._stop_ticking()
        self._emit(State.initial(self._total_ms))

    # Internal
    def _stop_ticking(self):
        if self._timer.isActive():
            self._timer.stop()

    def _emit(self, state: State):
        previous = self._state.timer_state
        self._state = state
        if state.timer_state is not previous:
            logger.debug(
                "timer %s -> %s (remaining=%dms)",
                previous.value,
                state.timer_state.value,
                state.remaining_ms,
            )
        self.stateChanged.emit(state)

    def _tick(self):
        if self._state.timer_state is not TimerState.RUNNING:
            self._stop_ticking()
            return
        self._emit(self._state.with_remaining(self._state.remaining_ms - self._tick_ms))
        # a subscriber may have paused or reset while the last decrement was delivered
        if (
            self._state.timer_state is TimerState.RUNNING
            and self._state.remaining_ms <= 0
        ):
            self._stop_ticking()
            self._emit(self._state.with_timer_state(TimerState.EXPIRED))


__all__ = ["TimerController", "TimerState", "State", "Event"]
