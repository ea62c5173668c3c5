"""
Logging setup for the US Constitution reader.

All modules log through loggers handed out by ``LoggerManager``. The root
logger gets a console handler (coloured on a TTY, or JSON when structured
logging is on) and, when enabled, a rotating file handler. Settings come
from ``LogConfig`` and can be overridden per call.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import contextvars
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from pythonjsonlogger.json import JsonFormatter

from usconst.config import LogConfig

# Fields added to every structured record in the current context
log_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar("log_context", default={})


class ColoredFormatter(logging.Formatter):
    """Colours the level name when stderr is a terminal."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record):
        color = self.LEVEL_COLORS.get(record.levelname)
        if color is None or not sys.stderr.isatty():
            return super().format(record)

        levelname = record.levelname
        record.levelname = f"{color}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


class StructuredFormatter(JsonFormatter):
    """JSON records carrying the context fields and any build metrics."""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record.update(log_context.get())
        log_record.update({
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger_name": record.name,
            "function": record.funcName,
            "line": record.lineno,
        })
        metrics = getattr(record, "metrics", None)
        if metrics is not None:
            log_record["metrics"] = metrics
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)


class LogContext:
    """Adds fields to all structured records logged inside the ``with`` block."""

    def __init__(self, **fields):
        self.fields = fields
        self._token = None

    def __enter__(self):
        self._token = log_context.set({**log_context.get(), **self.fields})
        return self

    def __exit__(self, *exc_info):
        log_context.reset(self._token)
        return False


class MetricsLogger:
    """Logs build figures with a ``metrics`` payload for structured output."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def record_duration(self, operation: str, seconds: float, **fields) -> None:
        duration_ms = round(seconds * 1000, 2)
        self.logger.info(
            f"{operation} took {duration_ms} ms",
            extra={"metrics": {"operation": operation, "duration_ms": duration_ms, **fields}},
        )

    def record_count(self, name: str, count: int, **fields) -> None:
        self.logger.info(
            f"{name}: {count}",
            extra={"metrics": {"name": name, "count": count, **fields}},
        )


def _build_handler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


class LoggerManager:
    """Configures the root logger once and hands out module loggers."""

    _initialized: bool = False

    @classmethod
    def setup_logging(
        cls,
        log_level: Optional[str] = None,
        log_file: Optional[Path] = None,
        enable_console: Optional[bool] = None,
        enable_file: Optional[bool] = None,
        structured: Optional[bool] = None,
        context_fields: Optional[Dict[str, Any]] = None,
        force: bool = False,
    ) -> None:
        """
        Configure the root logger.

        Arguments left as None take their value from ``LogConfig.get_config()``.
        Calls after the first one are ignored unless ``force`` is set.

        Args:
            log_level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Target of the rotating file handler
            enable_console: Log to stderr
            enable_file: Log to ``log_file``
            structured: Emit JSON records
            context_fields: Fields added to every structured record
            force: Replace an existing configuration
        """
        if cls._initialized and not force:
            return

        settings = LogConfig.get_config()
        level = getattr(logging, (log_level or settings["log_level"]).upper())
        log_file = Path(log_file or settings["log_file"])
        enable_console = settings["enable_console"] if enable_console is None else enable_console
        enable_file = settings["enable_file"] if enable_file is None else enable_file
        structured = settings["structured"] if structured is None else structured

        if context_fields:
            log_context.set(context_fields)

        root = logging.getLogger()
        root.setLevel(level)
        root.handlers.clear()

        if enable_console:
            formatter = StructuredFormatter() if structured else \
                ColoredFormatter(settings["log_format"], settings["date_format"])
            root.addHandler(_build_handler(logging.StreamHandler(sys.stderr), level, formatter))

        if enable_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=settings["max_bytes"],
                backupCount=settings["backup_count"],
                encoding="utf-8",
            )
            formatter = StructuredFormatter() if structured else \
                logging.Formatter(settings["log_format"], settings["date_format"])
            root.addHandler(_build_handler(file_handler, level, formatter))

        cls._initialized = True

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Return the logger for ``name``, configuring logging on first use."""
        if not cls._initialized:
            cls.setup_logging()
        return logging.getLogger(name)

    @classmethod
    def get_metrics_logger(cls, name: str) -> MetricsLogger:
        return MetricsLogger(cls.get_logger(name))


def get_logger(name: str) -> logging.Logger:
    return LoggerManager.get_logger(name)


__all__ = [
    "ColoredFormatter",
    "StructuredFormatter",
    "LogContext",
    "MetricsLogger",
    "LoggerManager",
    "get_logger",
]
