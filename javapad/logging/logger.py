"""
javapad Logger
==============

Every javapad module logs through a namespaced stdlib logger
("javapad.<Module>") whose only handler puts records on a shared queue. A
single QueueListener thread drains that queue into the console and,
optionally, a dated log file, so writing a log line never blocks a run that
is waiting on an execution provider.

Console lines look like:
    [Orchestrator]   ● [INFO]     Trying provider judge0_ce (2/3)
    [Orchestrator]   ⚠ [WARNING]  Provider judge0_ce failed: HTTP 503 ...
    [Orchestrator]   ✓ [SUCCESS]  Classified piston result as success in 1.4s
"""

import atexit
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
import logging
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from queue import Queue
import sys

LOGGER_NAMESPACE = "javapad"
DEFAULT_LOG_DIR = Path("data") / "logs"
LOG_FILE_PATTERN = "javapad_%Y%m%d.log"

_log_queue: Queue = Queue(maxsize=10000)


class LogLevel(str, Enum):
    """Display levels; SUCCESS and PROGRESS are INFO records with their own tag."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    PROGRESS = "PROGRESS"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# display level -> (ANSI colour, symbol)
_STYLES: dict[str, tuple[str, str]] = {
    LogLevel.DEBUG.value: ("\033[90m", "·"),
    LogLevel.INFO.value: ("\033[37m", "●"),
    LogLevel.SUCCESS.value: ("\033[32m", "✓"),
    LogLevel.PROGRESS.value: ("\033[36m", "→"),
    LogLevel.WARNING.value: ("\033[33m", "⚠"),
    LogLevel.ERROR.value: ("\033[31m", "✗"),
    LogLevel.CRITICAL.value: ("\033[35m", "✗"),
}


def symbol_for(display_level: str) -> str:
    return _STYLES.get(display_level, _STYLES[LogLevel.INFO.value])[1]


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


@dataclass
class _PipelineState:
    listener: QueueListener | None = None
    configured: bool = False
    # set when get_logger() configured defaults on first use
    implicit: bool = False


_state = _PipelineState()


class ConsoleFormatter(logging.Formatter):
    """[Module] symbol [LEVEL] message, coloured when writing to a terminal."""

    RESET = "\033[0m"
    DIM = "\033[2m"

    def __init__(self, use_colors: bool | None = None):
        super().__init__()
        self.use_colors = sys.stdout.isatty() if use_colors is None else use_colors

    def format(self, record: logging.LogRecord) -> str:
        display_level = getattr(record, "display_level", record.levelname)
        module = f"[{getattr(record, 'module_name', record.name)}]"
        symbol = getattr(record, "symbol", None) or symbol_for(display_level)
        parts = [module.ljust(16), symbol, f"[{display_level}]".ljust(10), record.getMessage()]

        if self.use_colors:
            colour = _STYLES.get(display_level, _STYLES[LogLevel.INFO.value])[0]
            parts[0] = f"{self.DIM}{parts[0]}{self.RESET}"
            parts[1] = f"{colour}{parts[1]}{self.RESET}"
            parts[2] = f"{colour}{parts[2]}{self.RESET}"

        line = " ".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class FileFormatter(logging.Formatter):
    """Plain, timestamped lines for the log file."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s %(levelname)-8s %(module_name)-14s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        # records from third-party loggers carry no module tag
        record.module_name = getattr(record, "module_name", record.name)
        return super().format(record)


def _build_handlers(
    console_output: bool,
    file_output: bool,
    log_level: str,
    log_dir: str | Path | None,
) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []

    if console_output:
        console = logging.StreamHandler(sys.stdout)
        console.setLevel(_resolve_level(log_level))
        console.setFormatter(ConsoleFormatter())
        handlers.append(console)

    if file_output:
        directory = Path(log_dir) if log_dir is not None else DEFAULT_LOG_DIR
        directory.mkdir(parents=True, exist_ok=True)
        log_file = directory / datetime.now().strftime(LOG_FILE_PATTERN)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(FileFormatter())
        handlers.append(file_handler)

    return handlers


def configure_logging(
    console_output: bool = True,
    file_output: bool = False,
    log_level: str = "INFO",
    log_dir: str | Path | None = None,
) -> None:
    """Start the log pipeline. Call once at application startup.

    Args:
        console_output: Write records to stdout
        file_output: Also write a dated file under log_dir
        log_level: Minimum console level; the file always receives DEBUG
        log_dir: Directory for the log file (default: data/logs)

    Raises:
        RuntimeError: If logging was already configured by an explicit call
    """
    if _state.configured and not _state.implicit:
        raise RuntimeError("configure_logging() already called. Cannot reconfigure.")

    _stop_listener()

    handlers = _build_handlers(console_output, file_output, log_level, log_dir)
    if handlers:
        _state.listener = QueueListener(_log_queue, *handlers, respect_handler_level=True)
        _state.listener.start()

    _state.configured = True
    _state.implicit = False


def _stop_listener() -> None:
    listener, _state.listener = _state.listener, None
    if listener is None:
        return
    try:
        listener.stop()
    except RuntimeError:
        # thread never started or already joined
        pass


def shutdown_logging() -> None:
    """Flush queued records and allow configure_logging() to run again."""
    _stop_listener()
    _state.configured = False
    _state.implicit = False


atexit.register(_stop_listener)


class Logger:
    """
    Module-tagged logger feeding the shared queue.

    Usage:
        logger = Logger("Orchestrator")
        logger.success("Run classified", elapsed=1.2)
    """

    def __init__(self, name: str, level: str = "DEBUG"):
        if not _state.configured:
            raise RuntimeError(
                f"Logger({name}): logging not configured. Call configure_logging() "
                "at application startup before creating loggers."
            )

        self.name = name
        self.level = _resolve_level(level)
        self.logger = logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = True

        # replace the handler left by an earlier wrapper for the same name
        for handler in [h for h in self.logger.handlers if isinstance(h, QueueHandler)]:
            self.logger.removeHandler(handler)
        handler = QueueHandler(_log_queue)
        handler.setLevel(self.level)
        self.logger.addHandler(handler)

    def _log(
        self,
        level: int,
        message: str,
        *args: object,
        display_level: str | None = None,
        symbol: str | None = None,
        **kwargs: object,
    ) -> None:
        display = display_level or logging.getLevelName(level)
        self.logger.log(
            level,
            message,
            *args,
            extra={
                "module_name": self.name,
                "display_level": display,
                "symbol": symbol or symbol_for(display),
            },
            exc_info=kwargs.get("exc_info", False),
            stacklevel=3,
        )

    def success(self, message: str, *args: object, elapsed: float | None = None, **kwargs: object):
        """INFO record tagged SUCCESS; elapsed seconds are appended when given."""
        if elapsed is not None:
            message = f"{message} in {elapsed:.1f}s"
        self._log(logging.INFO, message, *args, display_level=LogLevel.SUCCESS.value, **kwargs)

    def progress(self, message: str, *args: object, **kwargs: object):
        self._log(logging.INFO, message, *args, display_level=LogLevel.PROGRESS.value, **kwargs)


_loggers: dict[tuple[str, str], Logger] = {}


def get_logger(name: str = "Main", level: str = "DEBUG") -> logging.Logger:
    """
    Return the stdlib logger for a javapad module.

    The standard logging API is used as-is; `success` and `progress` from the
    Logger wrapper are attached to it. Logging is configured with defaults
    the first time this is called before configure_logging().
    """
    key = (name, level)
    wrapper = _loggers.get(key)
    if wrapper is None:
        if not _state.configured:
            configure_logging()
            _state.implicit = True
        wrapper = _loggers[key] = Logger(name=name, level=level)

    std_logger = wrapper.logger
    for helper in ("success", "progress"):
        if not hasattr(std_logger, helper):
            setattr(std_logger, helper, getattr(wrapper, helper))
    return std_logger


def reset_logger(name: str | None = None) -> None:
    """Drop cached wrappers (all of them when name is None)."""
    if name is None:
        _loggers.clear()
        return
    for key in [key for key in _loggers if key[0] == name]:
        del _loggers[key]
