"""
Logging setup for isotiles.

Everything goes through the root logger. The console handler follows the
configured level; the optional CSV file always records DEBUG.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..settings import AppSettings

CONSOLE_FORMAT = "%(asctime)s : %(levelname)-8s : %(message)s"
CONSOLE_DATE_FORMAT = "%H:%M:%S"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
FILE_MAX_BYTES = 10 * 1024 * 1024
FILE_BACKUP_COUNT = 5


class ColoredFormatter(logging.Formatter):
    """Console formatter that wraps the level name in an ANSI color."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelname)
        if color is None:
            return line
        return line.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)


class CSVFormatter(logging.Formatter):
    """One semicolon-separated row per record.

    Columns: time, level, ms since startup, logger, line, message. Double
    quotes inside the message are doubled.
    """

    def format(self, record: logging.LogRecord) -> str:
        fields = [
            f'"{self.formatTime(record, self.datefmt)}"',
            record.levelname.ljust(8),
            f'"{int(record.relativeCreated)} ms"',
            f'"{record.name}"',
            f'"{record.lineno}"',
            '"{}"'.format(record.getMessage().replace('"', '""')),
        ]
        return ";".join(fields)


def _console_handler(level: str, use_colors: bool) -> logging.Handler:
    formatter_class = ColoredFormatter if use_colors else logging.Formatter
    handler = logging.StreamHandler()
    handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    handler.setFormatter(formatter_class(fmt=CONSOLE_FORMAT, datefmt=CONSOLE_DATE_FORMAT))
    return handler


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=FILE_MAX_BYTES, backupCount=FILE_BACKUP_COUNT, encoding="utf-8"
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(CSVFormatter(datefmt=FILE_DATE_FORMAT))
    return handler


def setup_logging(settings: "AppSettings") -> None:
    """Replace the root handlers according to the logging settings.

    A log file that cannot be opened is reported and skipped; console
    logging keeps working.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()
    logging.getLogger("isotiles").setLevel(logging.DEBUG)

    if settings.console_logging:
        root_logger.addHandler(
            _console_handler(settings.console_log_level, settings.console_use_colors)
        )

    log_path: Optional[Path] = None
    if settings.file_logging:
        try:
            root_logger.addHandler(_file_handler(Path(settings.log_file_path)))
            log_path = settings.log_file_absolute_path
        except OSError as e:
            root_logger.warning(f"Could not open log file {settings.log_file_path}: {e}")

    # Pillow logs every PNG chunk at DEBUG
    logging.getLogger("PIL").setLevel(logging.INFO)

    logger = logging.getLogger(__name__)
    logger.info("Logging initialized")
    if settings.console_logging:
        logger.debug(
            f"Console logging: {settings.console_log_level} "
            f"(colors: {settings.console_use_colors})"
        )
    if log_path is not None:
        logger.debug(f"File logging: DEBUG at {log_path}")
