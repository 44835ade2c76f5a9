from __future__ import annotations

"""Hourglass scene: the top bulb empties as the countdown runs down."""

from math import sin

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QPainter, QPainterPath, QPen, QPolygonF

from focusdesk.scenes.base import BaseScene


VIEW_W = 200.0
VIEW_H = 300.0
SAND = QColor("#f59e0b")
FRAME = QColor("#2f2a26")


class HourglassScene(BaseScene):
    name = "Hourglass"

    def render(self, painter: QPainter, rect: QRectF, progress: float, running: bool, time_s: float) -> None:
        scale = min(rect.width() / VIEW_W, rect.height() / VIEW_H)
        ox = rect.center().x() - VIEW_W * scale / 2
        oy = rect.center().y() - VIEW_H * scale / 2

        def pt(x: float, y: float) -> QPointF:
            return QPointF(ox + x * scale, oy + y * scale)

        def box(x: float, y: float, w: float, h: float) -> QRectF:
            return QRectF(ox + x * scale, oy + y * scale, w * scale, h * scale)

        progress = max(0.0, min(1.0, progress))
        top_bulb = QPainterPath()
        top_bulb.addPolygon(QPolygonF([pt(40, 20), pt(160, 20), pt(160, 80), pt(100, 150)]))
        top_bulb.closeSubpath()
        bottom_bulb = QPainterPath()
        bottom_bulb.addPolygon(QPolygonF([pt(100, 150), pt(160, 220), pt(160, 280), pt(40, 280), pt(40, 220)]))
        bottom_bulb.closeSubpath()

        painter.save()
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(SAND))
        painter.setClipPath(top_bulb)
        painter.drawRect(box(40, 20 + 130 * (1 - progress), 120, 130 * progress))
        painter.setClipPath(bottom_bulb)
        painter.drawRect(box(40, 280 - 130 * (1 - progress), 120, 130 * (1 - progress)))
        painter.restore()

        if running and progress > 0:
            alpha = int(160 + 95 * (0.5 + 0.5 * sin(time_s * 6.0)))
            stream = QColor(SAND)
            stream.setAlpha(alpha)
            painter.setPen(QPen(stream, max(1.0, 2 * scale)))
            painter.drawLine(pt(100, 145), pt(100, 155))

        outline = QPolygonF([
            pt(40, 20), pt(160, 20), pt(160, 80), pt(100, 150), pt(160, 220),
            pt(160, 280), pt(40, 280), pt(40, 220), pt(100, 150), pt(40, 80),
        ])
        painter.setPen(QPen(FRAME, max(1.0, 3 * scale)))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPolygon(outline)

        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(FRAME))
        painter.drawRoundedRect(box(30, 10, 140, 15), 3 * scale, 3 * scale)
        painter.drawRoundedRect(box(30, 275, 140, 15), 3 * scale, 3 * scale)
