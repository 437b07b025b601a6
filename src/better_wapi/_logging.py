"""Logging utilities for better_wapi."""

import logging
import sys
import time
from contextvars import ContextVar, Token

_root = logging.getLogger("better_wapi")
_root.addHandler(logging.NullHandler())

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
CLI_HANDLER_NAME = "better_wapi.cli"

# Challenge FQDN being processed by the current present/cleanup call
_current_fqdn: ContextVar[str | None] = ContextVar("current_fqdn", default=None)


def set_fqdn(fqdn: str | None) -> Token[str | None]:
    """Set the challenge FQDN for logging context.

    Args:
        fqdn: The resolved challenge FQDN.

    Returns:
        Token to reset the context.
    """
    return _current_fqdn.set(fqdn)


def reset_fqdn(token: Token[str | None]) -> None:
    """Reset the FQDN context.

    Args:
        token: Token from set_fqdn() call.
    """
    _current_fqdn.reset(token)


def get_fqdn_extra() -> dict[str, str]:
    """Get challenge info for log extra fields.

    Returns:
        Dict with 'fqdn', or empty dict outside a challenge call.
    """
    fqdn = _current_fqdn.get()
    if fqdn is None:
        return {}
    return {"fqdn": fqdn}


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the better_wapi namespace.

    Args:
        name: The module name (typically __name__).

    Returns:
        A logger instance for the module.
    """
    return logging.getLogger(name)


def configure_logging(level: str = "INFO") -> None:
    """Send better_wapi logs to stderr.

    Only the command-line entry point calls this; library consumers
    configure logging themselves.

    Args:
        level: Log level name (e.g. "DEBUG", "INFO").
    """
    for existing in list(_root.handlers):
        if existing.get_name() == CLI_HANDLER_NAME:
            _root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(CLI_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    _root.addHandler(handler)
    _root.setLevel(level.upper())


class Timer:
    """Context manager for timing operations.

    Usage:
        with Timer() as t:
            # do work
        print(f"Elapsed: {t.elapsed_ms}ms")
    """

    def __init__(self) -> None:
        self.elapsed_ms: float = 0
        self._start: float = 0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args: object) -> None:
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000
