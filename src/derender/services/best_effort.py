"""Helpers for side effects that must not fail the enclosing request."""

import logging
from collections.abc import Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def attempt_best_effort(action: Callable[[], T], *, description: str) -> T | None:
    """Run an action, logging and swallowing any failure.

    Returns the action's result, or None when it raised.
    """
    try:
        return action()
    except Exception:
        logger.exception("Best-effort %s failed", description)
        return None
