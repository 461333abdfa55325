"""Logging setup and helpers for contextual error logging."""

import logging
import traceback
from typing import Optional, Any

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Root of the service's logger hierarchy
logger = logging.getLogger("Feedbacks")


def configure_logging(debug: bool = False) -> None:
    """Configure the root handler once, at DEBUG level when debug is enabled."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
    )
    logger.setLevel(logging.DEBUG if debug else logging.INFO)


def debug_log(message: str, *args, **kwargs) -> None:
    """
    Log a debug message only if the service logger has DEBUG enabled.

    Args:
        message: Log message (supports % formatting)
        *args: Positional arguments for message formatting
        **kwargs: Keyword arguments (level, exc_info, etc.)
    """
    if logger.isEnabledFor(logging.DEBUG):
        level = kwargs.pop("level", logging.DEBUG)
        logger.log(level, message, *args, **kwargs)


def error_log(
    message: str,
    exc: Optional[Exception] = None,
    context: Optional[dict] = None,
) -> None:
    """
    Log an error with optional exception and context.

    Args:
        message: Error message
        exc: Optional exception object
        context: Optional dictionary with additional context (path, ids, ...)
    """
    parts = [message]

    if context:
        context_str = ", ".join(f"{k}={v}" for k, v in context.items())
        parts.append(f"Context: {context_str}")

    if exc:
        parts.append(f"Exception: {type(exc).__name__}: {exc}")
        if logger.isEnabledFor(logging.DEBUG):
            parts.append(
                "Traceback:\n"
                + "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
            )

    full_message = " | ".join(parts)

    if exc:
        logger.error(full_message, exc_info=exc)
    else:
        logger.error(full_message)


def request_context(request: Any) -> dict:
    """Extract path and method from a request for log context."""
    context = {}
    url = getattr(request, "url", None)
    if url is not None:
        context["path"] = getattr(url, "path", str(url))
    method = getattr(request, "method", None)
    if method:
        context["method"] = method
    return context


def log_request_error(
    request: Any,
    exc: Exception,
    message: Optional[str] = None,
) -> None:
    """
    Log an exception with request context.

    Args:
        request: Request object (should have url and method)
        exc: The exception
        message: Optional custom message
    """
    msg = message or f"Unhandled exception: {type(exc).__name__}"
    error_log(msg, exc=exc, context=request_context(request))
