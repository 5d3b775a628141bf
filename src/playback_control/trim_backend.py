"""Trim range, export preferences and the trim backends."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

from .storage import StorageDir


logger = logging.getLogger(__name__)


class FileFormat(enum.Enum):
    MP4 = ".mp4"
    MKV = ".mkv"
    MOV = ".mov"
    AVI = ".avi"
    GIF = ".gif"


@dataclass(frozen=True)
class TrimRange:
    """Selected ``[start_ms, end_ms]`` window of a video."""

    start_ms: int
    end_ms: int

    def __post_init__(self) -> None:
        if self.start_ms < 0:
            raise ValueError("start_ms must be >= 0")
        if self.end_ms <= self.start_ms:
            raise ValueError("end_ms must be greater than start_ms")

    @classmethod
    def from_values(cls, start_value: float, end_value: float) -> "TrimRange":
        # Slider values arrive as floats; truncate like the player does.
        return cls(int(start_value), int(end_value))

    def within(self, duration_ms: int) -> bool:
        return self.end_ms <= duration_ms


@dataclass
class OutputPreferences:
    apply_video_encoding: bool = False
    output_format: Optional[FileFormat] = None
    ffmpeg_command: Optional[str] = None
    custom_video_format: Optional[str] = None
    fps_gif: Optional[int] = None
    scale_gif: Optional[int] = None
    video_folder_name: Optional[str] = None
    video_file_name: Optional[str] = None
    storage_dir: Optional[StorageDir] = None


class TrimBackend(Protocol):
    def trim(
        self,
        source: Optional[Path],
        start_value: float,
        end_value: float,
        preferences: OutputPreferences,
    ) -> Optional[str]: ...


class PassthroughTrimBackend:
    """Trimming is disabled: hand back the source path untouched.

    The range is only logged, so any start/end pair is accepted.
    """

    def trim(
        self,
        source: Optional[Path],
        start_value: float,
        end_value: float,
        preferences: OutputPreferences,
    ) -> Optional[str]:
        logger.warning(
            "Video encoding is disabled; returning the original file for %s-%s ms",
            start_value,
            end_value,
        )
        return str(source) if source is not None else None
