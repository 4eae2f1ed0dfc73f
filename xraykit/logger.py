"""Package-wide logging helpers built on the standard logging module.

Messages are formatted lazily: the text is only built when the active
logger will actually emit a record at the requested level.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable

_DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def _default_logger() -> logging.Logger:
    log = logging.getLogger("xraykit")
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
        log.addHandler(handler)
        log.setLevel(logging.INFO)
        log.propagate = False
    return log


_logger: logging.Logger = _default_logger()


def set_logger(logger: logging.Logger) -> logging.Logger:
    """Replace the logger used by the package and return the previous one."""
    global _logger
    if not callable(getattr(logger, "log", None)):
        raise TypeError("logger must provide a callable 'log' method")
    previous = _logger
    _logger = logger
    return previous


def get_logger() -> logging.Logger:
    """Return the logger currently used by the package."""
    return _logger


def _sprint(args: tuple[Any, ...]) -> str:
    # Operands are separated by a space only when neither neighbour is a string.
    parts: list[str] = []
    previous: Any = None
    for position, arg in enumerate(args):
        if position and not isinstance(arg, str) and not isinstance(previous, str):
            parts.append(" ")
        parts.append(str(arg))
        previous = arg
    return "".join(parts)


class _Lazy:
    """Defers building a message until it is rendered."""

    __slots__ = ("_render",)

    def __init__(self, render: Callable[[], str]) -> None:
        self._render = render

    def __str__(self) -> str:
        return self._render()


def _printf(fmt: str, args: tuple[Any, ...]) -> _Lazy:
    return _Lazy(lambda: fmt % args if args else fmt)


def _print(args: tuple[Any, ...]) -> _Lazy:
    return _Lazy(lambda: _sprint(args))


def debug(*args: Any) -> None:
    _logger.log(logging.DEBUG, _print(args))


def debugf(fmt: str, *args: Any) -> None:
    _logger.log(logging.DEBUG, _printf(fmt, args))


def debug_deferred(fn: Callable[[], str]) -> None:
    """Log at debug level the text returned by ``fn``, calling it only if needed."""
    _logger.log(logging.DEBUG, _Lazy(fn))


def info(*args: Any) -> None:
    _logger.log(logging.INFO, _print(args))


def infof(fmt: str, *args: Any) -> None:
    _logger.log(logging.INFO, _printf(fmt, args))


def warn(*args: Any) -> None:
    _logger.log(logging.WARNING, _print(args))


def warnf(fmt: str, *args: Any) -> None:
    _logger.log(logging.WARNING, _printf(fmt, args))


def error(*args: Any) -> None:
    _logger.log(logging.ERROR, _print(args))


def errorf(fmt: str, *args: Any) -> None:
    _logger.log(logging.ERROR, _printf(fmt, args))