"""
Diagnostic logging for the CLI and terminal UI.

Logs go to stderr so that tables, JSON and CSV on stdout can be piped.
Level names are colored with typer's styling when stderr is a terminal.
"""

import logging
import sys
from typing import Optional, TextIO, Union

import typer

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s %(funcName)s():%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# chatty HTTP internals stay at WARNING whatever the app level is
QUIET_LOGGERS = ("urllib3", "requests")


class _LevelColorFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "magenta",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname)
        if color:
            # handlers share the record; style a copy
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = typer.style(record.levelname, fg=color, bold=True)
        return super().format(record)


class _SeatsHandler(logging.StreamHandler):
    """Marks the handler installed by setup_logging so a rerun replaces it."""


def setup_logging(
    level: Union[int, str] = logging.WARNING, stream: Optional[TextIO] = None
) -> logging.Handler:
    """
    Install the stderr log handler on the root logger.

    Args:
        level: Level name (e.g. "DEBUG") or number
        stream: Destination, stderr by default

    Returns:
        The installed handler
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())
    if stream is None:
        stream = sys.stderr

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for existing in [h for h in root_logger.handlers if isinstance(h, _SeatsHandler)]:
        root_logger.removeHandler(existing)

    handler = _SeatsHandler(stream)
    handler.setLevel(level)
    formatter_class = _LevelColorFormatter if stream.isatty() else logging.Formatter
    handler.setFormatter(formatter_class(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
