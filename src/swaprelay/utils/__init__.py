"""Timing, deadline and in-flight guard utilities."""

from swaprelay.utils.timing import Deadline, Stopwatch, SubmissionTiming, format_seconds, run_within

__all__ = [
    "Deadline",
    "Stopwatch",
    "SubmissionTiming",
    "format_seconds",
    "run_within",
]
