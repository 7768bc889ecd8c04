"""Console logging for fluxgraph.

Three output modes:
- Human mode: [LEVEL] message (colored if TTY)
- Verbose mode: [LEVEL][HH:MM:SS] message
- CI/JSON mode: {"level":"...","ts":"...","msg":"..."}
"""

import json
import logging
import sys
from datetime import UTC, datetime
from enum import Enum
from typing import Any, TextIO

LOGGER_NAME = "fluxgraph"


class LogMode(Enum):
    """Logging output mode."""

    HUMAN = "human"
    VERBOSE = "verbose"
    JSON = "json"


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RED = "\033[31m"
    GRAY = "\033[90m"


LEVEL_COLORS = {
    logging.DEBUG: Colors.GRAY,
    logging.INFO: Colors.GREEN,
    logging.WARNING: Colors.YELLOW,
    logging.ERROR: Colors.RED,
    logging.CRITICAL: Colors.RED,
}


def _is_tty(stream: TextIO | None) -> bool:
    return stream is not None and hasattr(stream, "isatty") and stream.isatty()


class ConsoleFormatter(logging.Formatter):
    """Formatter for terminal output.

    Renders ``[LEVEL] message``, or ``[LEVEL][HH:MM:SS] message`` when
    timestamps are enabled. The level tag is colored on a TTY.
    """

    def __init__(self, show_time: bool = False, use_colors: bool = False) -> None:
        super().__init__()
        self.show_time = show_time
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record."""
        tag = f"[{record.levelname}]"
        if self.use_colors:
            color = LEVEL_COLORS.get(record.levelno, Colors.RESET)
            tag = f"{color}{tag}{Colors.RESET}"

        if self.show_time:
            tag += f"[{datetime.now().strftime('%H:%M:%S')}]"

        return f"{tag} {record.getMessage()}"


class JSONFormatter(logging.Formatter):
    """Formatter for JSON lines output (machine-readable).

    Structured fields passed via ``FluxGraphLogger.structured`` are merged
    into the entry.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON."""
        log_entry: dict[str, Any] = {
            "level": record.levelname,
            "ts": datetime.now(UTC).isoformat(),
            "msg": record.getMessage(),
        }

        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            log_entry.update(extra_data)

        return json.dumps(log_entry)


class FluxGraphLogger(logging.Logger):
    """Logger with structured logging support."""

    def structured(self, level: int, msg: str, **kwargs: Any) -> None:
        """Log a message with additional structured data.

        In human and verbose modes the data is appended as ``key=value``
        pairs; in JSON mode it becomes top-level fields.

        Args:
            level: Log level
            msg: Log message
            **kwargs: Additional data to attach to the record
        """
        if not self.isEnabledFor(level):
            return

        if kwargs and not self._emits_json():
            pairs = " ".join(f"{key}={value}" for key, value in kwargs.items())
            msg = f"{msg} ({pairs})"

        record = self.makeRecord(self.name, level, "(unknown)", 0, msg, (), None)
        if kwargs:
            record.extra_data = kwargs  # type: ignore[attr-defined]
        self.handle(record)

    def _emits_json(self) -> bool:
        logger: logging.Logger | None = self
        while logger is not None:
            if any(isinstance(h.formatter, JSONFormatter) for h in logger.handlers):
                return True
            logger = logger.parent if logger.propagate else None
        return False


logging.setLoggerClass(FluxGraphLogger)


def get_logger(name: str = LOGGER_NAME) -> FluxGraphLogger:
    """Get a fluxgraph logger instance.

    Args:
        name: Logger name (children of "fluxgraph" share its handlers)

    Returns:
        FluxGraphLogger instance
    """
    return logging.getLogger(name)  # type: ignore[return-value]


def setup_logging(
    mode: LogMode = LogMode.HUMAN,
    level: int = logging.INFO,
    stream: TextIO | None = None,
) -> None:
    """Configure the fluxgraph logger.

    Args:
        mode: Output mode (human, verbose, json)
        level: Minimum log level
        stream: Output stream (default: stdout)
    """
    stream = stream or sys.stdout

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    if mode == LogMode.JSON:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = ConsoleFormatter(
            show_time=mode == LogMode.VERBOSE,
            use_colors=_is_tty(stream),
        )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def configure_from_cli(
    verbose: bool = False,
    quiet: bool = False,
    ci: bool = False,
) -> None:
    """Configure logging based on CLI flags.

    Args:
        verbose: Enable verbose mode with timestamps and debug output
        quiet: Suppress info messages (warnings and errors only)
        ci: Enable JSON output for CI/CD
    """
    if ci:
        mode = LogMode.JSON
    elif verbose:
        mode = LogMode.VERBOSE
    else:
        mode = LogMode.HUMAN

    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    setup_logging(mode=mode, level=level)
