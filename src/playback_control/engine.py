"""Playback engine contract and a headless ffprobe-backed implementation."""

from __future__ import annotations

import logging
import os
import subprocess
import time
from pathlib import Path
from typing import Callable, Optional, Protocol


logger = logging.getLogger(__name__)


class PlaybackEngine(Protocol):
    duration_ms: int

    def initialize(self, path: Path) -> bool: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def seek_to(self, position_ms: int) -> None: ...

    def is_playing(self) -> bool: ...

    def position_ms(self) -> int: ...

    def dispose(self) -> None: ...


def probe_duration_ms(video_path: Path | str, ffprobe: str | None = None) -> int | None:
    """Return the container duration in milliseconds, or ``None`` if unknown."""

    ffprobe = ffprobe or os.environ.get("VIDTRIM_FFPROBE", "ffprobe")
    try:
        result = subprocess.run(
            [
                ffprobe,
                "-v",
                "error",
                "-show_entries",
                "format=duration",
                "-of",
                "default=noprint_wrappers=1:nokey=1",
                str(video_path),
            ],
            check=True,
            capture_output=True,
            text=True,
        )
        return int(round(float(result.stdout.strip()) * 1000))
    except (OSError, subprocess.CalledProcessError, ValueError) as exc:
        logger.debug("ffprobe could not read %s: %s", video_path, exc)
        return None


class FfprobePlaybackEngine:
    """Headless player: a wall-clock playhead over the probed duration.

    No frames are decoded. Position advances with ``clock`` while playing and
    stops at the end of the video, which is enough to drive the trimmer from
    scripts and the command line.
    """

    def __init__(
        self,
        ffprobe: str | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ffprobe = ffprobe
        self.clock = clock
        self.duration_ms = 0
        self._path: Optional[Path] = None
        self._anchor_ms = 0
        self._started_at: Optional[float] = None

    def initialize(self, path: Path) -> bool:
        duration = probe_duration_ms(path, self.ffprobe)
        if not duration:
            return False
        self._path = Path(path)
        self.duration_ms = duration
        self._anchor_ms = 0
        self._started_at = None
        logger.info("Initialized %s (%d ms)", self._path.name, duration)
        return True

    def _raw_position(self) -> int:
        if self._started_at is None:
            return self._anchor_ms
        elapsed = int((self.clock() - self._started_at) * 1000)
        return self._anchor_ms + elapsed

    def position_ms(self) -> int:
        position = self._raw_position()
        if position >= self.duration_ms:
            # Ran off the end: behave like a player that stopped there.
            self._anchor_ms = self.duration_ms
            self._started_at = None
            return self.duration_ms
        return position

    def is_playing(self) -> bool:
        self.position_ms()
        return self._started_at is not None

    def play(self) -> None:
        if self._started_at is None and self._anchor_ms < self.duration_ms:
            self._started_at = self.clock()

    def pause(self) -> None:
        self._anchor_ms = self.position_ms()
        self._started_at = None

    def seek_to(self, position_ms: int) -> None:
        position_ms = max(0, min(int(position_ms), self.duration_ms))
        self._anchor_ms = position_ms
        if self._started_at is not None:
            self._started_at = self.clock()

    def dispose(self) -> None:
        self._started_at = None
        self._path = None
