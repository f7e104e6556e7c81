"""
Logger - Component-tagged logging for Flow Lines

Usage:
    from flowlines.utils.logger import logger

    logger.flow("Grid rebuilt for 320x200", details="28 columns, 8 rows")
    logger.config("Ignoring unknown config key 'foo'")
    logger.info("Flow field started", component=FLOW)

Every message goes to stdout (INFO and above) and is re-emitted through a
Qt signal, so a host window can mirror the background's messages in its
own console without touching Python logging.
"""

import logging
import sys
from datetime import datetime
from typing import Optional
from PyQt5.QtCore import QObject, pyqtSignal

# Component tags
FLOW = "FLOW"      # Animation loop, grid, surface
CONFIG = "CONFIG"  # Config file loading
APP = "APP"        # Demo entry point

_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


class LogRelay(QObject):
    """Forwards formatted records to the GUI thread."""
    message = pyqtSignal(str, int, str)  # text, level, HH:MM:SS


class _RelayHandler(logging.Handler):
    def __init__(self, relay: LogRelay):
        super().__init__(logging.DEBUG)
        self.relay = relay
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord):
        try:
            stamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
            self.relay.message.emit(self.format(record), record.levelno, stamp)
        except Exception:
            self.handleError(record)


class FlowLinesLogger:
    """
    Wraps the "flowlines" logger.

    Messages are tagged "[COMPONENT] text - details". Engine chatter
    (grid rebuilds) goes through flow() at DEBUG so it reaches the relay
    but not the terminal; config problems go through config() as warnings.
    """

    def __init__(self):
        self._logger = logging.getLogger("flowlines")
        self._logger.setLevel(logging.DEBUG)
        self._logger.propagate = False

        console = logging.StreamHandler(sys.stdout)
        console.setLevel(logging.INFO)
        console.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
        self._logger.addHandler(console)

        self.relay = LogRelay()
        self._logger.addHandler(_RelayHandler(self.relay))

        self._file_handler: Optional[logging.FileHandler] = None

    @staticmethod
    def tag(msg: str, component: Optional[str] = None, details: Optional[str] = None) -> str:
        text = f"[{component}] {msg}" if component else msg
        return f"{text} - {details}" if details else text

    def debug(self, msg: str, component: Optional[str] = None, details: Optional[str] = None):
        self._logger.debug(self.tag(msg, component, details))

    def info(self, msg: str, component: Optional[str] = None, details: Optional[str] = None):
        self._logger.info(self.tag(msg, component, details))

    def warning(self, msg: str, component: Optional[str] = None, details: Optional[str] = None):
        self._logger.warning(self.tag(msg, component, details))

    def flow(self, msg: str, details: Optional[str] = None):
        """Engine detail, DEBUG level."""
        self.debug(msg, FLOW, details)

    def config(self, msg: str, details: Optional[str] = None):
        """Config problem that fell back to defaults, WARNING level."""
        self.warning(msg, CONFIG, details)

    def log_to_file(self, filepath: str):
        """Also write everything (DEBUG and up) to ``filepath``."""
        self.stop_file_logging()
        self._file_handler = logging.FileHandler(filepath)
        self._file_handler.setFormatter(logging.Formatter(_FORMAT))
        self._logger.addHandler(self._file_handler)

    def stop_file_logging(self):
        if self._file_handler is None:
            return
        self._logger.removeHandler(self._file_handler)
        self._file_handler.close()
        self._file_handler = None


logger = FlowLinesLogger()
