"""
port_select.py

The vehicle selection screen shown when no serial port was given on the command
line. Lists the serial ports present on this machine; picking one (double-click,
Connect, or the gamepad's A button) switches to the control screen.
"""

import logging

from PyQt6.QtWidgets import QGroupBox, QHBoxLayout, QListWidget, QPushButton, QVBoxLayout
from serial.tools import list_ports

from gui.screens.control_rov import RovControlScreen
from teleop.control_state import Button, ButtonDown
from teleop.session import Continue, Quit, SwitchTo, is_quit_event

log = logging.getLogger(__name__)


def available_ports() -> list[str]:
    return sorted(port.device for port in list_ports.comports())


class PortSelect:
    """Screen listing serial ports to connect to."""

    def __init__(self):
        self.selected_path = None
        self.widget = None

    def init(self, engine):
        self.widget = QGroupBox("Select ROV serial port")
        layout = QVBoxLayout()
        self.widget.setLayout(layout)

        self.port_list = QListWidget()
        self.port_list.itemDoubleClicked.connect(lambda item: self._select(item.text()))
        layout.addWidget(self.port_list)

        buttons = QHBoxLayout()
        refresh_button = QPushButton("Refresh")
        refresh_button.clicked.connect(self.refresh_ports)
        connect_button = QPushButton("Connect")
        connect_button.clicked.connect(self._select_current)
        buttons.addWidget(refresh_button)
        buttons.addWidget(connect_button)
        layout.addLayout(buttons)

        self.refresh_ports()

    def refresh_ports(self):
        self.port_list.clear()
        ports = available_ports()
        self.port_list.addItems(ports)
        if ports:
            self.port_list.setCurrentRow(0)
        log.info(f"Found {len(ports)} serial port(s)")

    def _select_current(self):
        item = self.port_list.currentItem()
        if item is not None:
            self._select(item.text())

    def _select(self, path: str):
        self.selected_path = path

    def update(self, engine, delta: float):
        for event in engine.poll_events():
            if is_quit_event(event):
                return Quit()
            if isinstance(event, ButtonDown) and event.button is Button.A:
                self._select_current()

        if self.selected_path is not None:
            log.info(f"Selected serial port {self.selected_path}")
            return SwitchTo(RovControlScreen(self.selected_path))
        return Continue()

    def close(self):
        pass
