"""Hourglass geometry: pure mappings from completion percentage to paths.

Nothing here touches Qt. Each shape function returns a `Path` (an immutable
list of move/line/cubic commands) in bounding-box coordinates; the widget layer
converts them to QPainterPath for drawing.

Coordinate conventions:
- Origin top-left, y grows downward.
- Every shape is laid out in a *content area*: the bounding size inset by
  ``padding.horizontal`` on both axes, translated by
  ``(padding.horizontal, padding.vertical)``. The vertical padding therefore only
  shifts the shape down; it does not shrink it further.

Percentages outside [0, 1] are not rejected. The easing curves simply
extrapolate, so callers clamp first.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple, Union

# Default bounding box of every hourglass layer (width x height).
DEFAULT_WIDTH = 300.0
DEFAULT_HEIGHT = 400.0

FRAME_PADDING = 16.0
FRAME_GAP_RADIUS = 10.0
FRAME_STROKE_WIDTH = 12.0
DRIP_OFFSET = 24.0
DRIP_STROKE_WIDTH = 1.0

# Easing constants. Chosen by eye; tune freely.
TOP_EASE_QUADRATIC = 0.4
TOP_EASE_LINEAR = 0.6
BOTTOM_SPREAD_RATE = 3.0

# Horizontal bounds of the chambers as fractions of content width.
CHAMBER_LEFT = 0.1
CHAMBER_RIGHT = 0.9


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    @classmethod
    def default(cls) -> "Size":
        return cls(DEFAULT_WIDTH, DEFAULT_HEIGHT)


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def translated(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def translated(self, dx: float, dy: float) -> "Rect":
        return Rect(self.left + dx, self.top + dy, self.right + dx, self.bottom + dy)


@dataclass(frozen=True)
class Padding:
    horizontal: float
    vertical: float

    @classmethod
    def uniform(cls, value: float) -> "Padding":
        return cls(value, value)


@dataclass(frozen=True)
class MoveTo:
    to: Point


@dataclass(frozen=True)
class LineTo:
    to: Point


@dataclass(frozen=True)
class CubicTo:
    c1: Point
    c2: Point
    to: Point


Command = Union[MoveTo, LineTo, CubicTo]


def _translate_command(cmd: Command, dx: float, dy: float) -> Command:
    if isinstance(cmd, CubicTo):
        return CubicTo(
            cmd.c1.translated(dx, dy),
            cmd.c2.translated(dx, dy),
            cmd.to.translated(dx, dy),
        )
    return type(cmd)(cmd.to.translated(dx, dy))


@dataclass(frozen=True)
class Path:
    """Immutable path description."""

    commands: Tuple[Command, ...] = field(default_factory=tuple)
    closed: bool = False

    def translated(self, dx: float, dy: float) -> "Path":
        return Path(
            tuple(_translate_command(c, dx, dy) for c in self.commands), self.closed
        )

    def points(self) -> list[Point]:
        """All end points in command order (control points excluded)."""
        return [c.to for c in self.commands]

    def __len__(self) -> int:
        return len(self.commands)


@dataclass(frozen=True)
class ClippedPath:
    """A path to be filled only where it overlaps ``clip``."""

    path: Path
    clip: Rect


class _PathBuilder:
    def __init__(self):
        self._commands: list[Command] = []

    def move_to(self, x: float, y: float) -> "_PathBuilder":
        self._commands.append(MoveTo(Point(x, y)))
        return self

    def line_to(self, x: float, y: float) -> "_PathBuilder":
        self._commands.append(LineTo(Point(x, y)))
        return self

    def cubic_to(
        self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float
    ) -> "_PathBuilder":
        self._commands.append(CubicTo(Point(x1, y1), Point(x2, y2), Point(x3, y3)))
        return self

    def build(self, closed: bool = False) -> Path:
        return Path(tuple(self._commands), closed)


# --- Easing -----------------------------------------------------------------


def top_fraction(percentage: float) -> float:
    """Convex easing for the top chamber: drains faster toward the end."""
    return percentage * (TOP_EASE_QUADRATIC * percentage + TOP_EASE_LINEAR)


def bottom_fraction(percentage: float) -> float:
    """Vertical growth of the bottom mound (linear)."""
    return percentage


def bottom_fraction_faster(percentage: float) -> float:
    """Horizontal spread of the bottom mound; saturates at one third."""
    return min(percentage * BOTTOM_SPREAD_RATE, 1.0)


def bottom_height(fraction: float, full_height: float) -> float:
    """Apex y of the mound within a chamber of ``full_height``.

    fraction=0 gives ``full_height`` (the floor, an empty pile) and fraction=1
    gives ``full_height / 2`` (the waist, a full pile).
    """
    return full_height / 2.0 * (2.0 - fraction)


# --- Shapes -----------------------------------------------------------------


def content_size(size: Size, padding: Padding) -> Size:
    inset = 2 * padding.horizontal
    return Size(size.width - inset, size.height - inset)


def frame_path(
    size: Size | None = None,
    padding: float = FRAME_PADDING,
    gap_radius: float = FRAME_GAP_RADIUS,
) -> Path:
    """Closed hourglass outline, independent of percentage."""
    size = size or Size.default()
    inner = content_size(size, Padding.uniform(padding))
    w, h = inner.width, inner.height
    center_h = h / 2.0
    center_w = w / 2.0
    left = w * CHAMBER_LEFT
    right = w * CHAMBER_RIGHT
    h30 = h * 0.3
    h70 = h * 0.7
    waist_right = center_w + gap_radius
    waist_left = center_w - gap_radius

    path = (
        _PathBuilder()
        .move_to(left, 0.0)
        .line_to(right, 0.0)
        .cubic_to(w, h30, waist_right, h30, waist_right, center_h)
        .cubic_to(waist_right, h70, w, h70, right, h)
        .line_to(left, h)
        .cubic_to(0.0, h70, waist_left, h70, waist_left, center_h)
        .cubic_to(waist_left, h30, 0.0, h30, left, 0.0)
        .build(closed=True)
    )
    return path.translated(padding, padding)


def top_sand(
    percentage: float,
    size: Size | None = None,
    padding: Padding = Padding(32.0, 24.0),
) -> ClippedPath:
    """Top chamber fill: fixed wedge clipped from above as the sand drains."""
    size = size or Size.default()
    inner = content_size(size, padding)
    w, h = inner.width, inner.height
    center_h = h / 2.0
    center_w = w / 2.0
    left = w * CHAMBER_LEFT
    right = w * CHAMBER_RIGHT
    h30 = h * 0.3

    wedge = (
        _PathBuilder()
        .move_to(left, 0.0)
        .line_to(right, 0.0)
        .cubic_to(w, h30, center_w, h30, center_w, center_h)
        .cubic_to(center_w, h30, 0.0, h30, left, 0.0)
        .build(closed=True)
    )
    clip = Rect(0.0, center_h * top_fraction(percentage), w, center_h)
    dx, dy = padding.horizontal, padding.vertical
    return ClippedPath(wedge.translated(dx, dy), clip.translated(dx, dy))


def bottom_sand_path(
    percentage: float,
    size: Size | None = None,
    padding: Padding = Padding(32.0, 40.0),
) -> Path:
    """Bottom mound: a narrow spike that quickly widens into a pile."""
    size = size or Size.default()
    inner = content_size(size, padding)
    w, h = inner.width, inner.height
    fraction = bottom_fraction(percentage)
    spread = bottom_fraction_faster(percentage)

    apex_y = bottom_height(fraction, h)
    center_w = w / 2.0
    left = w * (0.5 - 0.4 * spread)
    right = w * (0.5 + 0.4 * spread)
    # from the base up to 0.7h as the pile fills
    h70 = h * 0.7 + h * 0.3 * (1.0 - fraction)
    ctrl_right = w * (0.5 + 0.5 * fraction)
    ctrl_left = w * (0.5 - 0.5 * fraction)

    path = (
        _PathBuilder()
        .move_to(center_w, apex_y)
        .cubic_to(center_w, h70, ctrl_right, h70, right, h)
        .line_to(left, h)
        .cubic_to(ctrl_left, h70, center_w, h70, center_w, apex_y)
        .build(closed=True)
    )
    return path.translated(padding.horizontal, padding.vertical)


def drip_line_path(
    size: Size | None = None,
    padding: Padding = Padding(32.0, 40.0),
    offset: float = DRIP_OFFSET,
) -> Path:
    """Vertical pour line from just above the waist to the chamber floor."""
    size = size or Size.default()
    inner = content_size(size, padding)
    center_w = inner.width / 2.0
    path = (
        _PathBuilder()
        .move_to(center_w, inner.height / 2.0 - offset)
        .line_to(center_w, inner.height)
        .build()
    )
    return path.translated(padding.horizontal, padding.vertical)


def drip_alpha_target(is_running: bool) -> float:
    return 1.0 if is_running else 0.0


__all__ = [
    "Size",
    "Point",
    "Rect",
    "Padding",
    "MoveTo",
    "LineTo",
    "CubicTo",
    "Path",
    "ClippedPath",
    "top_fraction",
    "bottom_fraction",
    "bottom_fraction_faster",
    "bottom_height",
    "content_size",
    "frame_path",
    "top_sand",
    "bottom_sand_path",
    "drip_line_path",
    "drip_alpha_target",
]
