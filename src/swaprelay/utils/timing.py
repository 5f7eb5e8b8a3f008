"""Monotonic timing and deadline helpers.

Durations are reported in seconds with five decimals. Formatting is
cosmetic only; callers compare raw floats.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Optional, Type, TypeVar

from swaprelay.errors import SwapTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def format_seconds(seconds: Optional[float]) -> str:
    """Render a duration with fixed 5-decimal precision."""
    if seconds is None:
        return "-"
    return f"{seconds:.5f}"


class Stopwatch:
    """Elapsed-time measurement on the monotonic clock."""

    def __init__(self):
        self._started = time.monotonic()

    def elapsed(self) -> float:
        return time.monotonic() - self._started


@dataclass
class SubmissionTiming:
    """Durations recorded around one relay submission."""

    prepare: Optional[float] = None
    request: Optional[float] = None
    total: Optional[float] = None

    def as_dict(self) -> dict:
        return {
            "prepare": format_seconds(self.prepare),
            "request": format_seconds(self.request),
            "total": format_seconds(self.total),
        }


class Deadline:
    """Absolute expiry on the monotonic clock, shared across pipeline steps."""

    def __init__(self, seconds: float):
        if seconds <= 0:
            raise ValueError("Deadline must be positive")
        self.seconds = seconds
        self.expires_at = time.monotonic() + seconds

    @classmethod
    def after(cls, seconds: Optional[float]) -> Optional["Deadline"]:
        """Build a deadline, or None when no bound is configured."""
        if seconds is None:
            return None
        return cls(seconds)

    def remaining(self) -> float:
        return max(0.0, self.expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        return time.monotonic() >= self.expires_at

    def __repr__(self) -> str:
        return f"Deadline(seconds={self.seconds}, remaining={self.remaining():.3f})"


async def run_within(
    awaitable: Awaitable[T],
    deadline: Optional[Deadline],
    timeout_error: Type[SwapTimeoutError],
    step: str,
) -> T:
    """Await a step, bounded by the deadline when one is given.

    Raises:
        timeout_error: If the deadline expires before the step completes
    """
    if deadline is None:
        return await awaitable

    if deadline.expired:
        # Never started; close it so no "never awaited" warning is emitted
        if asyncio.iscoroutine(awaitable):
            awaitable.close()
        raise timeout_error(f"Deadline of {deadline.seconds}s expired before {step}")

    try:
        return await asyncio.wait_for(awaitable, timeout=deadline.remaining())
    except asyncio.TimeoutError:
        logger.warning(f"Deadline of {deadline.seconds}s expired during {step}")
        raise timeout_error(f"Deadline of {deadline.seconds}s expired during {step}")
