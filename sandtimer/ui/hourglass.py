"""Hourglass widget.

Paints the four layers produced by `sandtimer.core.geometry` on top of each
other inside a fixed 300x400 box:
    frame      stroked outline
    top sand   wedge intersected with a percentage-driven clip rectangle
    bottom     growing mound
    drip       thin pour line, faded in/out with a QVariantAnimation

Geometry is rebuilt on every paint; nothing is cached between percentages.
"""

from __future__ import annotations

from PySide6.QtCore import QEasingCurve, QRectF, QSize, Qt, QVariantAnimation
from PySide6.QtGui import QColor, QPainter, QPainterPath, QPen
from PySide6.QtWidgets import QSizePolicy, QWidget

from ..core import geometry as geo

DRIP_FADE_MS = 300


def to_qpainterpath(path: geo.Path) -> QPainterPath:
    """Convert a geometry `Path` into a QPainterPath."""
    qpath = QPainterPath()
    for cmd in path.commands:
        if isinstance(cmd, geo.MoveTo):
            qpath.moveTo(cmd.to.x, cmd.to.y)
        elif isinstance(cmd, geo.LineTo):
            qpath.lineTo(cmd.to.x, cmd.to.y)
        elif isinstance(cmd, geo.CubicTo):
            qpath.cubicTo(cmd.c1.x, cmd.c1.y, cmd.c2.x, cmd.c2.y, cmd.to.x, cmd.to.y)
    if path.closed:
        qpath.closeSubpath()
    return qpath


def clipped_to_qpainterpath(clipped: geo.ClippedPath) -> QPainterPath:
    clip = QPainterPath()
    r = clipped.clip
    if r.width > 0 and r.height > 0:
        clip.addRect(QRectF(r.left, r.top, r.width, r.height))
    return clip.intersected(to_qpainterpath(clipped.path))


class HourglassWidget(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        self._size = geo.Size.default()
        self._percentage = 0.0
        self._running = False
        self._drip_alpha = 0.0
        self._frame_color = QColor(98, 0, 238)
        self._fill_color = QColor(3, 218, 197)
        self._drip_anim = QVariantAnimation(self)
        self._drip_anim.setDuration(DRIP_FADE_MS)
        self._drip_anim.setEasingCurve(QEasingCurve.InOutQuad)
        self._drip_anim.valueChanged.connect(self._onDripAlpha)
        self.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)
        self.setFixedSize(int(self._size.width), int(self._size.height))

    def sizeHint(self):  # type: ignore[override]
        return QSize(int(self._size.width), int(self._size.height))

    # --- Public API ---
    def percentage(self) -> float:
        return self._percentage

    def setPercentage(self, percentage: float):
        p = min(max(float(percentage), 0.0), 1.0)
        if p == self._percentage:
            return
        self._percentage = p
        self.update()

    def isRunning(self) -> bool:
        return self._running

    def dripAlpha(self) -> float:
        return self._drip_alpha

    def setRunning(self, running: bool):
        if running == self._running:
            return
        self._running = running
        self._drip_anim.stop()
        self._drip_anim.setStartValue(float(self._drip_alpha))
        self._drip_anim.setEndValue(geo.drip_alpha_target(running))
        self._drip_anim.start()

    def setColors(self, frame: QColor, fill: QColor):
        self._frame_color = QColor(frame)
        self._fill_color = QColor(fill)
        self.update()

    # --- Rendering ---
    def _onDripAlpha(self, value):
        self._drip_alpha = float(value)
        self.update()

    def paintEvent(self, event):  # type: ignore[override]
        p = QPainter(self)
        p.setRenderHint(QPainter.Antialiasing, True)

        frame_pen = QPen(self._frame_color, geo.FRAME_STROKE_WIDTH)
        frame_pen.setCapStyle(Qt.RoundCap)
        p.setPen(frame_pen)
        p.setBrush(Qt.NoBrush)
        p.drawPath(to_qpainterpath(geo.frame_path(self._size)))

        p.setPen(Qt.NoPen)
        p.setBrush(self._fill_color)
        p.drawPath(clipped_to_qpainterpath(geo.top_sand(self._percentage, self._size)))
        p.drawPath(to_qpainterpath(geo.bottom_sand_path(self._percentage, self._size)))

        if self._drip_alpha > 0.0:
            p.setOpacity(self._drip_alpha)
            p.setPen(QPen(self._fill_color, geo.DRIP_STROKE_WIDTH))
            p.setBrush(Qt.NoBrush)
            p.drawPath(to_qpainterpath(geo.drip_line_path(self._size)))
        p.end()


__all__ = ["HourglassWidget", "to_qpainterpath", "clipped_to_qpainterpath"]
