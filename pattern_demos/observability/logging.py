"""
Logging for the pattern demos.

Demo output is written to stdout with ``print``; everything diagnostic goes
through the loggers defined here, which write to stderr so the two never mix.
Each record can carry the demo it came from, a step number and a duration,
and both formatters render those the same way.
"""

import json
import logging
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

ROOT_LOGGER_NAME = "pattern_demos"

# (record attribute, JSON key, console label)
_CONTEXT_FIELDS: Tuple[Tuple[str, str, str], ...] = (
    ("demo_name", "demo", "demo"),
    ("step", "step", "step"),
    ("duration_ms", "duration_ms", "duration"),
)


class LogLevel(Enum):
    """Log levels understood by :func:`configure_logging`."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


def _context_of(record: logging.LogRecord) -> List[Tuple[str, str, Any]]:
    context = []
    for attr, key, label in _CONTEXT_FIELDS:
        value = getattr(record, attr, None)
        if value is not None:
            context.append((key, label, value))
    return context


class JsonFormatter(logging.Formatter):
    """One JSON object per record. Used for log files and ``json_logs``."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, _label, value in _context_of(record):
            entry[key] = value
        data = getattr(record, "extra_data", None)
        if data:
            entry["data"] = data
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """One readable line per record, optionally colored by level."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        level = f"{record.levelname:8}"
        if self.use_colors and record.levelname in self.COLORS:
            level = f"{self.COLORS[record.levelname]}{level}{self.RESET}"

        parts = [
            f"{label}={value}ms" if label == "duration" else f"{label}={value}"
            for _key, label, value in _context_of(record)
        ]
        context = f" [{', '.join(parts)}]" if parts else ""

        when = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        line = f"{when} | {level} |{context} {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class DemoLogger:
    """Thin wrapper over a standard logger that attaches demo context.

    Usage:
        logger = get_logger("runner", demo_name="observer")
        logger.info("Demo finished", duration_ms=1.2)
        logger.debug("Transition", demo_name="state", step=2, extra={"to": "B"})
    """

    def __init__(self, name: str, demo_name: Optional[str] = None) -> None:
        self._logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
        self._demo_name = demo_name

    @property
    def name(self) -> str:
        return self._logger.name

    def log(
        self,
        level: int,
        message: str,
        *,
        demo_name: Optional[str] = None,
        step: Optional[int] = None,
        duration_ms: Optional[float] = None,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False,
    ) -> None:
        """Log ``message`` with whatever demo context is known.

        Args:
            level: Standard ``logging`` level
            message: Log message
            demo_name: Demo name, overriding the logger's own
            step: Position of the record within a sequence (e.g. transitions)
            duration_ms: Elapsed time, rounded to two decimals
            extra: Free-form data, rendered only by :class:`JsonFormatter`
            exc_info: Whether to attach the current exception
        """
        context: Dict[str, Any] = {
            "demo_name": demo_name or self._demo_name,
            "step": step,
            "duration_ms": None if duration_ms is None else round(duration_ms, 2),
            "extra_data": extra,
        }
        self._logger.log(level, message, extra=context, exc_info=exc_info)

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self.log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log(logging.ERROR, message, **kwargs)


def configure_logging(
    level: Union[LogLevel, str] = LogLevel.WARNING,
    log_file: Optional[Union[str, Path]] = None,
    json_format: bool = False,
    use_colors: bool = True,
) -> None:
    """Install handlers on the ``pattern_demos`` logger, replacing old ones.

    Args:
        level: Minimum log level, as a :class:`LogLevel` or its name
        log_file: Optional file that receives every record as JSON
        json_format: Whether the console gets JSON instead of readable lines
        use_colors: Whether readable console lines are colored

    Raises:
        ValueError: If ``level`` is not a known level name
    """
    if isinstance(level, str):
        try:
            level = LogLevel[level.upper()]
        except KeyError as e:
            raise ValueError(f"Unknown log level: {level}") from e

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level.value)
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(
        JsonFormatter() if json_format else ConsoleFormatter(use_colors=use_colors)
    )
    root.addHandler(console)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(JsonFormatter())
        root.addHandler(file_handler)


def get_logger(name: str, demo_name: Optional[str] = None) -> DemoLogger:
    """Return a :class:`DemoLogger` named ``pattern_demos.<name>``."""
    return DemoLogger(name, demo_name=demo_name)
