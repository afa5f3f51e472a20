"""
logging_panel.py

Implements the LoggingPanel, the operator-facing log of the control screen.
Shows vehicle responses, send failures and mirror rejections as they happen,
keeping only the most recent lines.
"""

from PyQt6.QtWidgets import QGroupBox, QVBoxLayout, QPlainTextEdit


class LoggingPanel(QGroupBox):
    """
    Scrollable, bounded log of session messages.

    - Appends new messages as they arrive (via append_log).
    - Drops the oldest lines past max_lines.
    - Keeps the newest line in view.
    """

    def __init__(self, parent=None, max_lines: int = 500):
        """
        Args:
            parent (QWidget, optional): Parent widget for panel hierarchy.
            max_lines (int): Maximum number of log lines to keep/display.
        """
        super().__init__("Log Output", parent)
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.log_box = QPlainTextEdit()
        self.log_box.setReadOnly(True)
        self.log_box.setMaximumBlockCount(max_lines)
        layout.addWidget(self.log_box)

        self.max_lines = max_lines

    def append_log(self, message: str):
        self.log_box.appendPlainText(message)
        scrollbar = self.log_box.verticalScrollBar()
        if scrollbar is not None:
            scrollbar.setValue(scrollbar.maximum())
