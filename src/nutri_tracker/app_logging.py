"""Logging configuration helpers."""

import asyncio
import logging
import os
import sys
import threading
import time
from types import TracebackType

LOGGER_NAME = "nutri_tracker"


def configure_logging() -> None:
    """Configure application logging with a single stream handler."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def install_crash_handlers(flush_delay_seconds: float = 1.0) -> None:
    """Log uncaught exceptions and terminate the process after a flush delay."""
    logger = logging.getLogger(LOGGER_NAME)

    def _handle(
        exc_type: type[BaseException],
        exc: BaseException,
        tb: TracebackType | None,
    ) -> None:
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc, tb)
            return
        logger.critical("Uncaught exception", exc_info=(exc_type, exc, tb))
        for handler in logger.handlers:
            handler.flush()
        time.sleep(flush_delay_seconds)
        os._exit(1)

    def _handle_thread(args: threading.ExceptHookArgs) -> None:
        if args.exc_value is None:
            return
        _handle(args.exc_type, args.exc_value, args.exc_traceback)

    sys.excepthook = _handle
    threading.excepthook = _handle_thread


def log_unhandled_task_error(
    loop: asyncio.AbstractEventLoop, context: dict[str, object]
) -> None:
    """Event loop exception handler that logs and keeps the loop running."""
    logger = logging.getLogger(LOGGER_NAME)
    exc = context.get("exception")
    message = str(context.get("message") or "Unhandled error in event loop")
    if isinstance(exc, BaseException):
        logger.error(message, exc_info=exc)
    else:
        logger.error(message)
