"""
Structured Logging Configuration

One console format for the engine, the API and the CLI. Log calls made
while handling an analysis can pass ``extra={"analysis_id": ...}`` and the
id is printed next to the logger name.
"""
import logging
import sys
from typing import Optional
from datetime import datetime, timezone

FILE_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'

# Server loggers that install their own handlers; routed to the root instead
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

CLI_LOGGER_NAME = "vitalpath.cli"


class StructuredFormatter(logging.Formatter):
    """Console formatter: UTC timestamp, padded level, logger name, analysis id."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m'
    }

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, timezone.utc).isoformat()

        if self.use_color:
            color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
            reset = self.COLORS['RESET']
        else:
            color = reset = ""

        context = f"[{record.name}]"
        analysis_id = getattr(record, "analysis_id", None)
        if analysis_id:
            context += f" [{analysis_id}]"

        log_message = (
            f"{color}[{timestamp}] "
            f"{record.levelname:8} "
            f"{context} "
            f"{record.getMessage()}{reset}"
        )

        if record.exc_info:
            log_message += f"\n{self.formatException(record.exc_info)}"

        return log_message


def _resolve_level(level: str) -> int:
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"unknown log level {level!r}")
    return resolved


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure application-wide logging.

    Replaces any handlers already on the root logger and hands the uvicorn
    loggers over to it, so server and engine lines share one format.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output

    Raises:
        ValueError: ``level`` is not a logging level name.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level(level))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(StructuredFormatter(use_color=sys.stdout.isatty()))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root_logger.addHandler(file_handler)

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Module name (typically __name__). ``"__main__"`` maps to the
            CLI logger so ``python -m vitalpath`` logs under the package.
    """
    if name == "__main__":
        name = CLI_LOGGER_NAME
    return logging.getLogger(name)
