"""Logging setup for the desktop launcher.

Modules log through ``logging.getLogger(__name__)``; nothing is configured until
`configure_logging` runs, so library use and tests stay quiet by default.
"""

from __future__ import annotations

import logging
import os
import sys

_TRUTHY = {"1", "true", "yes", "on"}


def debug_enabled() -> bool:
    """True when SANDTIMER_DEBUG is set to a truthy value."""
    return os.getenv("SANDTIMER_DEBUG", "").strip().lower() in _TRUTHY


def configure_logging(debug: bool | None = None) -> logging.Logger:
    if debug is None:
        debug = debug_enabled()
    logger = logging.getLogger("sandtimer")
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    if not any(getattr(h, "_sandtimer", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )
        handler._sandtimer = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger


__all__ = ["configure_logging", "debug_enabled"]
