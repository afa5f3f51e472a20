"""
app_window.py

Defines the main application window for the ROV teleoperation GUI: the active
screen on top and the operator log below.
Keyboard and window-close requests are queued as control events so that the
active screen sees them on its next frame.
"""

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QMainWindow, QVBoxLayout, QWidget

from teleop.control_state import Key, KeyUp, QuitRequested


class AppWindow(QMainWindow):
    """
    Main application window.

    - Hosts one screen widget at a time (set_screen_widget).
    - Hosts the logging panel under it.
    - Collects Escape releases and close requests in pending_events.
    """

    def __init__(self, logging_panel, size=(800, 600)):
        super().__init__()
        self.setWindowTitle("ROV Interface")
        self.resize(*size)

        self.pending_events = []
        self._quit_requested = False

        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)

        self._layout = QVBoxLayout()
        self.central_widget.setLayout(self._layout)

        self.screen_placeholder = QWidget()
        self._layout.addWidget(self.screen_placeholder, stretch=3)
        self._layout.addWidget(logging_panel, stretch=1)

    def set_screen_widget(self, widget):
        """
        Replace the current screen widget with a new one.

        Args:
            widget (QWidget): Widget of the screen being switched to.
        """
        self._layout.replaceWidget(self.screen_placeholder, widget)
        self.screen_placeholder.deleteLater()
        self.screen_placeholder = widget

    def take_events(self) -> list:
        """Return and clear the queued window events."""
        events, self.pending_events = self.pending_events, []
        return events

    def keyReleaseEvent(self, event):
        if event.key() == Qt.Key.Key_Escape and not event.isAutoRepeat():
            self.pending_events.append(KeyUp(Key.ESCAPE))
        super().keyReleaseEvent(event)

    def closeEvent(self, event):
        # Let the frame loop shut the session down before the window goes away
        if not self._quit_requested:
            self._quit_requested = True
            self.pending_events.append(QuitRequested())
            event.ignore()
            return
        super().closeEvent(event)
