"""Log emission helpers bound to a validated configuration.

The library never writes log output directly. Every message goes through the
``log`` callback in the config's logger settings, after being filtered by
severity and prefixed with the library tag, an optional timestamp and the
severity name.
"""
import asyncio
import inspect
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Awaitable, Dict, Optional, Set, Tuple

from .errors import FeatureDeprecatedError
from .types import LIBRARY_VERSION, LogSeverity

# Initialize a logger for this module.
logger = logging.getLogger(__name__)

LOG_TAG = "shopify-api"


def _coerce_level(level: Any) -> Optional[LogSeverity]:
    """Maps a configured level to a `LogSeverity`, or None if it has no meaning."""
    if isinstance(level, LogSeverity):
        return level
    try:
        if isinstance(level, str):
            return LogSeverity[level.strip().upper()]
        return LogSeverity(level)
    except (KeyError, ValueError, TypeError):
        return None


def _version_tuple(version: str) -> Tuple[int, ...]:
    parts = []
    for part in version.split("."):
        digits = "".join(ch for ch in part if ch.isdigit())
        parts.append(int(digits) if digits else 0)
    return tuple(parts)


def version_reached(current: str, target: str) -> bool:
    """Returns True if `current` is the same as or newer than `target`."""
    current_parts = _version_tuple(current)
    target_parts = _version_tuple(target)
    width = max(len(current_parts), len(target_parts))
    return current_parts + (0,) * (width - len(current_parts)) >= target_parts + (0,) * (width - len(target_parts))


# Strong references to in-flight log tasks so they are not collected early.
_pending_tasks: Set[asyncio.Task] = set()


async def _consume(awaitable: Awaitable[Any]) -> None:
    await awaitable


def _report_task_error(task: asyncio.Task) -> None:
    _pending_tasks.discard(task)
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.debug(f"Log callback failed: {error!r}")


def _run_in_background(awaitable: Awaitable[Any]) -> None:
    try:
        asyncio.run(_consume(awaitable))
    except Exception as e:
        logger.debug(f"Log callback failed: {e!r}")


def _dispatch(result: Any) -> None:
    """Lets an awaitable log result complete without blocking the caller.

    Inside a running event loop the awaitable is scheduled as a task. Outside
    of one it runs on its own event loop in a daemon thread. Either way the
    caller returns without waiting for it.
    """
    if not inspect.isawaitable(result):
        return
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop is not None:
        task = loop.create_task(_consume(result))
        _pending_tasks.add(task)
        task.add_done_callback(_report_task_error)
    else:
        threading.Thread(target=_run_in_background, args=(result,), name="shopify-api-log", daemon=True).start()


class Logger:
    """Formats messages and forwards them to the configured log callback.

    Args:
        config: A validated `Config`, or any object with a compatible
            ``logger`` attribute.
    """

    def __init__(self, config: Any) -> None:
        self.settings = config.logger

    def log(self, severity: LogSeverity, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """Sends a message to the log callback if its severity is enabled.

        Args:
            severity (LogSeverity): The severity of the message.
            message (str): The message text.
            context (Optional[Dict[str, Any]]): Extra key/value pairs appended
                to the message.
        """
        level = _coerce_level(self.settings.level)
        if level is not None and severity > level:
            return

        prefix = []
        if self.settings.timestamps:
            prefix.append(datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"))
        prefix.append(LogSeverity(severity).name)

        context_string = ""
        if context:
            context_string = " | " + ", ".join(f"{key}: {value}" for key, value in context.items())

        formatted = f"[{LOG_TAG}/{'|'.join(prefix)}] {message}{context_string}"
        _dispatch(self.settings.log(severity, formatted))

    def debug(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.log(LogSeverity.DEBUG, message, context)

    def info(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.log(LogSeverity.INFO, message, context)

    def warning(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.log(LogSeverity.WARNING, message, context)

    def error(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.log(LogSeverity.ERROR, message, context)

    def deprecated(self, version: str, message: str) -> None:
        """Warns about a deprecated feature, or fails once it is removed.

        Args:
            version (str): The library version that removes the feature.
            message (str): Guidance for moving off the feature.

        Raises:
            FeatureDeprecatedError: If this library release is at or past
                `version`.
        """
        if version_reached(LIBRARY_VERSION, version):
            raise FeatureDeprecatedError(version)
        logger.debug(f"Deprecated feature used, removal in {version}")
        self.warning(f"[Deprecated | {version}] {message}")


def create_logger(config: Any) -> Logger:
    """Returns a `Logger` bound to the given configuration."""
    return Logger(config)
