"""Logging utilities with process setup and tool call timing."""

import functools
import logging
import sys
import time
from collections.abc import Callable
from typing import Any, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for a Meridian process.

    Output always goes to stderr: stdout carries the JSON-RPC stream.

    Args:
        level: Log level name, e.g. "INFO" or "DEBUG".
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def log_tool_call(tool_name: str) -> Callable[[F], F]:
    """Decorator to log tool entry, exit, and timing.

    Args:
        tool_name: Name of the tool for logging.

    Returns:
        Decorated function with logging.
    """

    def decorator(func: F) -> F:
        logger = logging.getLogger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            logger.debug(f"[{tool_name}] Tool started", extra={"tool": tool_name, "event": "tool_started"})
            start_time = time.perf_counter()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.warning(
                    f"[{tool_name}] Tool failed after {duration_ms:.2f}ms: {e}",
                    extra={
                        "tool": tool_name,
                        "duration_ms": round(duration_ms, 2),
                        "error_type": type(e).__name__,
                        "event": "tool_failed",
                    },
                )
                raise

            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                f"[{tool_name}] Tool completed in {duration_ms:.2f}ms",
                extra={"tool": tool_name, "duration_ms": round(duration_ms, 2), "event": "tool_completed"},
            )
            return result

        return wrapper  # type: ignore[return-value]

    return decorator
