"""Top-level application package exports.

Public API surface (keep minimal):
 - TimerController, TimerState, State, Event (countdown logic)
 - geometry (hourglass path math, Qt-free)

UI classes live in `sandtimer.ui` and are imported lazily by the launcher so the
core stays importable without a display.
"""

from .core.timer import Event, State, TimerController, TimerState  # noqa: F401
from .core import geometry  # noqa: F401

__all__ = ["TimerController", "TimerState", "State", "Event", "geometry"]
