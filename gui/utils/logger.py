import logging
from PyQt6.QtCore import QObject, pyqtSignal


class GuiLogEmitter(QObject):
    log_signal = pyqtSignal(str)


class GuiLogHandler(logging.Handler):
    """Forwards formatted log records to the GUI through a Qt signal."""

    def __init__(self, level=logging.INFO):
        super().__init__(level)
        self.emitter = GuiLogEmitter()
        self.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(message)s", "%H:%M:%S")
        )

    def emit(self, record: logging.LogRecord):
        try:
            msg = self.format(record)
        except Exception:
            self.handleError(record)
            return
        self.emitter.log_signal.emit(msg)
