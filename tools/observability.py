"""Timing and structured logging around engine operations and provider calls."""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Any, Callable, Dict, Mapping, ParamSpec, TypeVar

from fitted_app.logging_config import correlation_context, get_logger, log_event

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")

MAX_SUMMARY_KEYS = 6


def summarise_arguments(kwargs: Mapping[str, Any]) -> Dict[str, Any]:
    """Compact view of keyword arguments: sizes for collections, names for objects."""

    summary: Dict[str, Any] = {}
    for key in list(kwargs)[:MAX_SUMMARY_KEYS]:
        value = kwargs[key]
        if isinstance(value, (list, tuple, set, frozenset)):
            summary[key] = f"<{len(value)} items>"
        elif value is None or isinstance(value, (str, int, float, bool)):
            summary[key] = value
        else:
            summary[key] = type(value).__name__
    if len(kwargs) > MAX_SUMMARY_KEYS:
        summary["truncated"] = True
    return summary


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def instrument_operation(operation_name: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Log the start, completion or failure of a call together with its duration.

    Exceptions are logged with their traceback and re-raised unchanged.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with correlation_context() as correlation_id:
                log_event(
                    LOGGER,
                    logging.INFO,
                    "operation_started",
                    operation=operation_name,
                    correlation_id=correlation_id,
                    arguments=summarise_arguments(kwargs),
                )
                started = time.perf_counter()
                try:
                    result = func(*args, **kwargs)
                except Exception:
                    log_event(
                        LOGGER,
                        logging.ERROR,
                        "operation_failed",
                        operation=operation_name,
                        correlation_id=correlation_id,
                        duration_ms=_elapsed_ms(started),
                        exc_info=True,
                    )
                    raise
                log_event(
                    LOGGER,
                    logging.INFO,
                    "operation_completed",
                    operation=operation_name,
                    correlation_id=correlation_id,
                    duration_ms=_elapsed_ms(started),
                    result_size=len(result) if isinstance(result, list) else None,
                )
                return result

        return wrapper

    return decorator


__all__ = ["instrument_operation", "summarise_arguments"]
