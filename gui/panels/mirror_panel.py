"""
mirror_panel.py

Implements the MirrorPanel, a live drawing of the mock ROV: one line per motor
showing thrust direction and magnitude, plus boxes for the master power,
light and sampler relays (filled when energized).
"""

from PyQt6.QtCore import QPointF, QRectF
from PyQt6.QtGui import QColor, QPainter, QPen
from PyQt6.QtWidgets import QWidget

from teleop.command_diff import THROTTLE_MAX
from teleop.commands import MotorId

# (origin, unit direction) per motor, in widget pixels
MOTOR_LAYOUT = {
    MotorId.MOTOR_1: ((430.0, 260.0), (-0.5, -0.5)),
    MotorId.MOTOR_2: ((370.0, 260.0), (0.5, -0.5)),
    MotorId.MOTOR_3: ((430.0, 340.0), (-0.5, 0.5)),
    MotorId.MOTOR_4: ((370.0, 340.0), (0.5, 0.5)),
    MotorId.MOTOR_5: ((500.0, 300.0), (0.0, 1.0)),
    MotorId.MOTOR_6: ((560.0, 300.0), (0.0, 1.0)),
}
MOTOR_LINE_LENGTH = 60.0

BACKGROUND = QColor(255, 128, 128)
FOREGROUND = QColor(255, 255, 255)


def motor_line(motor: MotorId, throttle: int):
    """Start and end points of the line drawn for *motor* at *throttle*."""
    (x, y), (dx, dy) = MOTOR_LAYOUT[motor]
    length = throttle * MOTOR_LINE_LENGTH / THROTTLE_MAX
    return (x, y), (x + dx * length, y + dy * length)


class MirrorPanel(QWidget):
    """Paints the mirror state; call refresh() after the session updates it."""

    def __init__(self, mock_rov, parent=None):
        super().__init__(parent)
        self.mock_rov = mock_rov
        self.setMinimumSize(640, 560)

    def refresh(self):
        self.update()

    def _relay_box(self, painter: QPainter, rect: QRectF, energized: bool, label: str):
        if energized:
            painter.fillRect(rect, FOREGROUND)
        else:
            painter.drawRect(rect)
        painter.drawText(QPointF(rect.left(), rect.bottom() + 18), label)

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            painter.fillRect(self.rect(), BACKGROUND)
            pen = QPen(FOREGROUND)
            pen.setWidth(2)
            painter.setPen(pen)

            rov = self.mock_rov
            self._relay_box(painter, QRectF(30, 450, 70, 70), rov.robot_is_on, "Master")
            self._relay_box(painter, QRectF(120, 450, 50, 50), rov.light_relay, "Lights")
            self._relay_box(
                painter,
                QRectF(190, 450, 50, 50),
                rov.sampler_relay,
                f"Sampler ({rov.samples_loaded})",
            )

            for motor in MotorId:
                start, end = motor_line(motor, rov.motors[motor])
                painter.drawLine(QPointF(*start), QPointF(*end))
                painter.drawText(
                    QPointF(start[0] - 6, start[1] - 6),
                    str(int(motor) + 1),
                )
            painter.drawText(QPointF(10, 20), "ROV mirror")
        finally:
            painter.end()
