"""
Logging setup for the plan_dimensions package.

Provides:
- JSON formatter for machine-readable layout traces
- Console formatter for human-readable output
- log_timing / timed helpers around pipeline stages
- LogContext for tagging all records of one layout call

Usage:
    from plan_dimensions.logging_config import setup_logging, get_logger

    setup_logging(level=logging.DEBUG)
    logger = get_logger(__name__)
    logger.debug("Grouped measurements", extra={"groups": 2})
"""

import json
import logging
import sys
import time
from contextlib import contextmanager
from contextvars import ContextVar, Token
from datetime import datetime
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Dict, Optional, TypeVar, Union

F = TypeVar('F', bound=Callable[..., Any])

PACKAGE_LOGGER = "plan_dimensions"

# Attributes every LogRecord carries; anything else came in through `extra`
_RESERVED_KEYS = frozenset({
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'pathname', 'process', 'processName', 'relativeCreated',
    'stack_info', 'exc_info', 'exc_text', 'thread', 'threadName',
    'message', 'asctime', 'taskName',
})


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _RESERVED_KEYS}


class JSONFormatter(logging.Formatter):
    """One JSON object per line.

    Output format:
        {"timestamp": "...", "level": "DEBUG", "logger": "...", "message": "...", ...}
    """

    def __init__(self, include_extra: bool = True):
        super().__init__()
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.levelno >= logging.WARNING:
            entry["location"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        if self.include_extra:
            for key, value in _extra_fields(record).items():
                try:
                    json.dumps(value)
                    entry[key] = value
                except (TypeError, ValueError):
                    entry[key] = str(value)

        return json.dumps(entry, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """Format: [TIME] LEVEL logger: message [key=value ...]"""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
        'RESET': '\033[0m',
    }

    def __init__(self, use_colors: bool = True, show_extra: bool = True):
        super().__init__()
        self.use_colors = use_colors
        self.show_extra = show_extra

    def format(self, record: logging.LogRecord) -> str:
        time_str = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        level = record.levelname
        if self.use_colors and level in self.COLORS:
            level_str = f"{self.COLORS[level]}{level:8}{self.COLORS['RESET']}"
        else:
            level_str = f"{level:8}"

        # plan_dimensions.measurements.packer -> measurements.packer
        logger_name = record.name
        if logger_name.startswith(PACKAGE_LOGGER + "."):
            logger_name = logger_name[len(PACKAGE_LOGGER) + 1:]

        extra_str = ""
        if self.show_extra:
            extras = []
            for key, value in _extra_fields(record).items():
                if isinstance(value, float):
                    extras.append(f"{key}={value:.3f}")
                elif isinstance(value, (list, tuple)) and len(value) > 3:
                    extras.append(f"{key}=[...{len(value)} items]")
                else:
                    extras.append(f"{key}={value}")
            if extras:
                extra_str = " [" + ", ".join(extras) + "]"

        result = f"[{time_str}] {level_str} {logger_name}: {record.getMessage()}{extra_str}"
        if record.exc_info:
            result += "\n" + self.formatException(record.exc_info)
        return result


def setup_logging(
    level: int = logging.INFO,
    json_file: Optional[Union[str, Path]] = None,
    console: bool = True,
    use_colors: bool = True,
) -> logging.Logger:
    """Configure handlers on the package logger.

    Args:
        level: Minimum log level
        json_file: Optional path for a JSON-lines log file
        console: Enable stderr output
        use_colors: Use ANSI colors on the console

    Returns:
        The configured ``plan_dimensions`` logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(ConsoleFormatter(use_colors=use_colors))
        logger.addHandler(console_handler)

    if json_file:
        json_handler = logging.FileHandler(Path(json_file), encoding='utf-8')
        json_handler.setLevel(level)
        json_handler.setFormatter(JSONFormatter())
        logger.addHandler(json_handler)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (typically ``__name__``)."""
    return logging.getLogger(name)


@contextmanager
def log_timing(
    logger: logging.Logger,
    operation: str,
    level: int = logging.DEBUG,
    **extra_fields: Any
):
    """Log start, completion and elapsed time of an operation.

    Example:
        with log_timing(logger, "layout", measurements=len(ms)) as info:
            result = layout_measurements(ms, projection, points)
            info["groups"] = len(result.groups)

    Yields:
        dict merged into the completion record
    """
    timing_info: Dict[str, Any] = {}
    start_time = time.perf_counter()

    logger.log(level, "Starting: %s", operation, extra={
        "event": "start",
        "operation": operation,
        **extra_fields,
    })

    try:
        yield timing_info
    except Exception as e:
        elapsed = time.perf_counter() - start_time
        logger.error("Failed: %s (%.3fs) - %s", operation, elapsed, e, extra={
            "event": "error",
            "operation": operation,
            "elapsed_seconds": elapsed,
            "error": str(e),
            **extra_fields,
        })
        raise

    elapsed = time.perf_counter() - start_time
    timing_info['elapsed_seconds'] = elapsed
    logger.log(level, "Completed: %s (%.3fs)", operation, elapsed, extra={
        "event": "complete",
        "operation": operation,
        **extra_fields,
        **timing_info,
    })


def timed(
    logger: Optional[logging.Logger] = None,
    level: int = logging.DEBUG,
    operation: Optional[str] = None,
) -> Callable[[F], F]:
    """Decorator wrapping a function call in :func:`log_timing`."""
    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            func_logger = logger or logging.getLogger(func.__module__)
            with log_timing(func_logger, operation or func.__name__, level):
                return func(*args, **kwargs)

        return wrapper  # type: ignore
    return decorator


_current_context = ContextVar("plan_dimensions_log_context", default=None)


class LogContext:
    """Attach common fields (view name, storey id, ...) to every record
    emitted by the package logger inside a ``with`` block.

    The active context is tracked per thread and per asyncio task, so a
    layout running elsewhere at the same time does not pick up the fields.
    Nested contexts add their fields on top of the enclosing ones.

    Example:
        with LogContext(view="front", storey="ground"):
            layout_measurements(ms, projection, points)
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self._previous: Optional['LogContext'] = None
        self._token: Optional[Token] = None
        self._filter: Optional[logging.Filter] = None

    def _is_active(self) -> bool:
        ctx = _current_context.get()
        while ctx is not None:
            if ctx is self:
                return True
            ctx = ctx._previous
        return False

    def __enter__(self) -> 'LogContext':
        self._previous = _current_context.get()
        self._token = _current_context.set(self)

        context = self

        class ContextFilter(logging.Filter):
            def filter(self, record: logging.LogRecord) -> bool:
                # filters run in the order contexts were entered, so inner fields win
                if context._is_active():
                    for key, value in context.fields.items():
                        setattr(record, key, value)
                return True

        self._filter = ContextFilter()
        # Logger filters skip records from child loggers; handler filters do not
        for handler in logging.getLogger(PACKAGE_LOGGER).handlers:
            handler.addFilter(self._filter)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._filter:
            for handler in logging.getLogger(PACKAGE_LOGGER).handlers:
                handler.removeFilter(self._filter)
        if self._token is not None:
            _current_context.reset(self._token)
            self._token = None

    @classmethod
    def current(cls) -> Optional['LogContext']:
        return _current_context.get()


def configure_default_logging(verbose: bool = False) -> logging.Logger:
    """Console logging at DEBUG (verbose) or INFO."""
    level = logging.DEBUG if verbose else logging.INFO
    return setup_logging(level=level, console=True, use_colors=True)
