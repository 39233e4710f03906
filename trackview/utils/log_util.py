"""Logging helpers shared by the app and the camera layer."""
from __future__ import annotations

import functools
import inspect
import logging
import time
from typing import Any, Callable

LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_MASKED = "***"
_REPR_LIMIT = 120


def _short_repr(value: Any) -> str:
    try:
        text = repr(value)
    except Exception:
        return "<unrepresentable>"
    return text if len(text) <= _REPR_LIMIT else text[:_REPR_LIMIT] + "..."


def _describe_call(signature: inspect.Signature | None, args: tuple, kwargs: dict,
                   mask: tuple[str, ...]) -> str:
    if signature is None:
        bound = {f"arg{i}": a for i, a in enumerate(args)} | kwargs
    else:
        try:
            bound = dict(signature.bind_partial(*args, **kwargs).arguments)
        except TypeError:
            bound = {f"arg{i}": a for i, a in enumerate(args)} | kwargs
    parts = []
    for name, value in bound.items():
        if name in ("self", "cls"):
            continue
        parts.append(f"{name}={_MASKED if name in mask else _short_repr(value)}")
    return ", ".join(parts)


def log_io(level: int = logging.DEBUG,
           mask: tuple[str, ...] = (),
           logger: logging.Logger | None = None):
    """
    Trace calls of the decorated function.

    Entry (arguments), exit (result and elapsed milliseconds) and exceptions
    are written to ``logger``, which defaults to the logger of the module the
    function is defined in. The module's log level therefore decides whether
    a call is traced. Arguments named in ``mask`` are written as ``***``.

    :param level: level of the entry and exit records
    :param mask: argument names whose values are hidden
    :param logger: logger to write to instead of the module logger
    :return: decorator
    """
    def deco(func: Callable):
        log = logger or logging.getLogger(func.__module__)
        name = func.__qualname__
        try:
            signature: inspect.Signature | None = inspect.signature(func)
        except (TypeError, ValueError):
            signature = None

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            traced = log.isEnabledFor(level)
            if traced:
                log.log(level, "-> %s(%s)", name, _describe_call(signature, args, kwargs, mask))
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception:
                log.exception("%s raised", name)
                raise
            if traced:
                elapsed = (time.perf_counter() - started) * 1000.0
                log.log(level, "<- %s = %s (%.1f ms)", name, _short_repr(result), elapsed)
            return result
        return wrapper
    return deco


def level_from_name(value: Any, default: int = logging.INFO) -> int:
    """
    Convert a configured level to a ``logging`` level number.

    Integers are returned unchanged and digit strings are converted to int.
    Other strings are matched case-insensitively, ignoring surrounding
    whitespace, against DEBUG, INFO, WARNING, ERROR and CRITICAL. Anything
    else, including None, gives ``default``.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return default
    text = value.strip()
    if text.isdigit():
        return int(text)
    name = text.upper()
    return getattr(logging, name) if name in LEVEL_NAMES else default
