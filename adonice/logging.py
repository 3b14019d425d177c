"""Console logging for the adonice CLI.

Messages go to stderr so the printed PR summary and link on stdout stay
clean. Level and format come from .adonice.yaml (logging.level,
logging.format) or env (LOGGING_LEVEL, LOGGING_FORMAT).

HTTP client libraries log every request at INFO; they are held at
WARNING unless adonice itself runs at DEBUG.
"""

import logging
import sys
from typing import TextIO

from adonice.config import LoggingConfig

ROOT_LOGGER = "adonice"

# Supported levels only (DEBUG, INFO, WARNING, ERROR)
LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "%(levelname)s - %(message)s"

NOISY_LOGGERS = ("httpx", "httpcore", "openai", "urllib3")


def _resolve_level(level: str) -> int:
    """Map level name to logging constant; unknown names mean INFO."""
    return LEVELS.get(level.upper().strip(), logging.INFO)


class AdoniceLogging:
    """Sets up stderr logging for one CLI invocation."""

    def __init__(self, config: LoggingConfig, stream: TextIO | None = None) -> None:
        self.level = _resolve_level(config.level)
        self._format = config.format or DEFAULT_FORMAT
        self._stream = stream

    def setup(self) -> None:
        """Install the handler on the root logger and quiet HTTP libraries."""
        logging.basicConfig(
            level=self.level,
            format=self._format,
            stream=self._stream or sys.stderr,
            force=True,
        )
        library_level = logging.DEBUG if self.level <= logging.DEBUG else logging.WARNING
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(library_level)

    def get_logger(self, name: str = "") -> logging.Logger:
        """Logger under the adonice namespace ("cli" -> "adonice.cli")."""
        if not name or name == ROOT_LOGGER:
            return logging.getLogger(ROOT_LOGGER)
        if name.startswith(ROOT_LOGGER + "."):
            return logging.getLogger(name)
        return logging.getLogger(f"{ROOT_LOGGER}.{name}")
