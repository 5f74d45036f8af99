"""Time formatting for the countdown readout."""

from __future__ import annotations

__all__ = ["format_seconds"]


def format_seconds(remaining_ms: int) -> str:
    """Return whole seconds left as text, rounding down (9999 ms -> "9").

    Negative input clamps to "0".
    """
    if remaining_ms < 0:
        remaining_ms = 0
    return str(int(remaining_ms) // 1000)
