"""Append-only session audit log.

One log file is created per process session under the logs directory. Every
line has the form ``<yyyy-MM-dd HH:mm:ss> - <message>``. Writing is best
effort: a failure to write is swallowed so that logging can never break a
script run.
"""

import logging
import os
import threading
from abc import ABC, abstractmethod
from pathlib import Path

from scriptbay.core.clock import Clock

logger = logging.getLogger(__name__)

# Enable debug logging if SCRIPTBAY_DEBUG environment variable is set
if os.getenv("SCRIPTBAY_DEBUG"):
    logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")

LINE_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
FILE_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


class AuditLog(ABC):
    """Abstract append-only event sink shared by all core components.

    Contract:
    - log() never raises, whatever happens to the underlying storage
    - each message becomes one timestamped record written in a single append
    - lines from concurrent callers never interleave
    """

    @abstractmethod
    def log(self, message: str) -> None:
        """Append a timestamped line for message."""
        ...

    @property
    @abstractmethod
    def log_path(self) -> Path | None:
        """Path of the session log file, or None if nothing is persisted."""
        ...


class FileAuditLog(AuditLog):
    """Production audit log writing to ``<logs_dir>/log_<yyyyMMdd_HHmmss>.txt``."""

    def __init__(self, logs_dir: Path, clock: Clock) -> None:
        """Create the logs directory if needed and open a new session file.

        Args:
            logs_dir: Directory that holds one file per session
            clock: Clock used for the file name and line timestamps

        A logs directory that cannot be created is reported through the
        logging module only; later writes then fail silently.
        """
        self._clock = clock
        self._lock = threading.Lock()
        try:
            logs_dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            logger.debug("Cannot create logs folder %s", logs_dir, exc_info=True)
        stamp = clock.now().strftime(FILE_TIMESTAMP_FORMAT)
        self._path = logs_dir / f"log_{stamp}.txt"
        self.log("Logger initialized.")

    @property
    def log_path(self) -> Path | None:
        return self._path

    def log(self, message: str) -> None:
        line = f"{self._clock.now().strftime(LINE_TIMESTAMP_FORMAT)} - {message}\n"
        logger.debug("audit: %s", message)
        try:
            with self._lock:
                with self._path.open("a", encoding="utf-8") as f:
                    f.write(line)
        except Exception:
            # Best effort
            logger.debug("Failed to write audit line to %s", self._path, exc_info=True)

