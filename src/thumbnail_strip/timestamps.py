"""Evenly spaced sample points across a video's duration."""

from __future__ import annotations

from typing import List


def sample_timestamps(duration_ms: int, count: int) -> List[int]:
    """Return ``count`` timestamps (ms) spread evenly over ``duration_ms``.

    Sample ``i`` (1-indexed) sits at ``round(duration_ms / count * i)``, so the
    first sample is one step in and the last one lands on ``duration_ms``.
    Rounding is half-up and done in integers to keep the last sample exact.
    """

    if count <= 0:
        raise ValueError("count must be > 0")
    if duration_ms <= 0:
        raise ValueError("duration_ms must be > 0")

    return [(2 * duration_ms * i + count) // (2 * count) for i in range(1, count + 1)]


def format_duration(ms: int) -> str:
    """Format milliseconds as ``HH:MM:SS``."""

    total_seconds = int(ms) // 1000
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
