"""
main.py

Entry point for the ROV teleoperation GUI.
Sets up logging, the main window and the gamepad, then runs the frame loop that
updates the active screen and acts on its transition (continue, quit, switch).

Usage:
    python -m gui.main [serial-port]

With a serial port the control screen starts right away; without one the
port selection screen is shown first.
"""

from PyQt6.QtWidgets import QApplication
from PyQt6.QtCore import QTimer
from datetime import datetime, timezone
import sys
import time
import logging

from config import load_config
from logging_setup import setup_logging
from gui.engine import Engine
from gui.input.gamepad_input import GamepadInput
from gui.panels.app_window import AppWindow
from gui.panels.logging_panel import LoggingPanel
from gui.screens.control_rov import RovControlScreen
from gui.screens.port_select import PortSelect
from gui.utils.logger import GuiLogHandler
from teleop.errors import TeleopError
from teleop.session import Quit, SwitchTo

logger = logging.getLogger(__name__)


def report_error(error: BaseException):
    """Print *error* and every exception that caused it."""
    print(f"Error: {error}", file=sys.stderr)
    cause = error.__cause__ or error.__context__
    while cause is not None:
        print(f"Caused by: {cause}", file=sys.stderr)
        cause = cause.__cause__ or cause.__context__


class ScreenHost:
    """
    Runs the active screen once per timer tick.

    Owns the active screen and closes it on every exit path.
    """

    def __init__(self, app, engine, screen):
        self.app = app
        self.engine = engine
        self.screen = screen
        self.exit_code = 0
        self.prev_time = time.monotonic()

    def install(self, screen):
        screen.init(self.engine)
        self.engine.window.set_screen_widget(screen.widget)
        self.screen = screen

    def tick(self):
        now = time.monotonic()
        delta = now - self.prev_time
        self.prev_time = now

        trans = self.screen.update(self.engine, delta)
        if isinstance(trans, Quit):
            self.app.quit()
        elif isinstance(trans, SwitchTo):
            old_screen = self.screen
            try:
                self.install(trans.screen)
            except TeleopError as e:
                logger.critical(f"Failed to initialize screen: {e}")
                report_error(e)
                self.exit_code = 1
                self.app.quit()
            finally:
                old_screen.close()

    def close(self):
        self.screen.close()


def run(argv, config) -> int:
    serialport_path = argv[1] if len(argv) > 1 else None
    app = QApplication(argv)

    logging_panel = LoggingPanel(max_lines=config.logging_max_lines)
    gui_handler = GuiLogHandler()
    gui_handler.emitter.log_signal.connect(logging_panel.append_log)
    logging.getLogger().addHandler(gui_handler)

    window = AppWindow(logging_panel, size=config.window_size)

    try:
        gamepad = GamepadInput(config)
        logger.info("Gamepad input enabled.")
    except RuntimeError as e:
        gamepad = None
        logger.warning(f"Gamepad not available: {e}")

    engine = Engine(window=window, gamepad=gamepad, config=config)
    if serialport_path is not None:
        screen = RovControlScreen(serialport_path)
    else:
        screen = PortSelect()

    host = ScreenHost(app, engine, screen)
    try:
        try:
            host.install(screen)
        except TeleopError as e:
            logger.critical(f"Failed to initialize screen: {e}")
            report_error(e)
            return 1

        frame_timer = QTimer()
        frame_timer.setInterval(config.frame_interval_ms)
        frame_timer.timeout.connect(host.tick)
        frame_timer.start()

        window.show()
        app.exec()
        frame_timer.stop()
    finally:
        host.close()
        if gamepad is not None:
            gamepad.close()
    return host.exit_code


def main():
    """Launch the ROV teleoperation GUI and exit with its status."""
    try:
        config = load_config()
    except (ValueError, OSError) as e:
        # pydantic's ValidationError and json's JSONDecodeError are ValueErrors
        report_error(e)
        sys.exit(1)

    setup_logging(logfile=config.log_file_path, json_logfile=config.log_json_path)
    logger.info(
        f"Application started at {datetime.now(timezone.utc).isoformat()}"
    )
    sys.exit(run(sys.argv, config))


if __name__ == "__main__":
    main()
