"""
control_rov.py

The control screen: owns a ControlSession for one serial link and shows the
mirror of the vehicle it drives.
"""

import logging

from gui.panels.mirror_panel import MirrorPanel
from teleop.session import Quit, open_session

log = logging.getLogger(__name__)


class RovControlScreen:
    """
    Screen that drives the ROV on *path*.

    init() opens the link; a LinkError from it is fatal to the application.
    """

    def __init__(self, path: str | None):
        self.path = path
        self.session = None
        self.widget = None

    def init(self, engine):
        """
        Open the link and build the mirror view.

        Raises:
            LinkError: If the serial port cannot be opened.
        """
        self.session = open_session(self.path, engine.config, logger=log)
        self.widget = MirrorPanel(self.session.mock_rov)
        if self.path is None:
            log.warning("No serial port given; driving the mirror only")
        else:
            log.info(f"Control session started on {self.path}")

    def update(self, engine, delta: float):
        trans = self.session.update(engine.poll_events())
        self.widget.refresh()
        if isinstance(trans, Quit):
            log.info(f"Control session ended ({self.session.send_failures} failed sends)")
        return trans

    def close(self):
        if self.session is not None:
            self.session.close()
