"""Single-frame thumbnail extraction using ffmpeg and Pillow."""

from __future__ import annotations

import io
import logging
import os
import subprocess
from pathlib import Path
from typing import Optional, Protocol

from PIL import Image, UnidentifiedImageError


logger = logging.getLogger(__name__)

DEFAULT_MAX_HEIGHT = 180


class FrameExtractionError(RuntimeError):
    """A single frame could not be produced; callers may fall back."""


class FrameFetcher(Protocol):
    def extract_frame(
        self,
        video_path: str,
        timestamp_ms: int,
        quality: int,
        max_height: int,
    ) -> Optional[bytes]: ...


def default_max_height() -> int:
    try:
        return int(os.environ.get("VIDTRIM_THUMBNAIL_MAX_HEIGHT", DEFAULT_MAX_HEIGHT))
    except ValueError:
        return DEFAULT_MAX_HEIGHT


def _fit_height(image: Image.Image, max_height: int) -> Image.Image:
    """Shrink to ``max_height`` keeping aspect ratio; never upscale."""

    width, height = image.size
    if max_height <= 0 or height <= max_height:
        return image
    new_width = max(1, round(width * max_height / height))
    return image.resize((new_width, max_height), Image.Resampling.LANCZOS)


def encode_thumbnail(raw: bytes, *, quality: int, max_height: int) -> Optional[bytes]:
    """Decode an image, fit it to ``max_height`` and re-encode as JPEG."""

    try:
        image = Image.open(io.BytesIO(raw))
        image.load()
    except (UnidentifiedImageError, OSError):
        return None

    if image.mode != "RGB":
        image = image.convert("RGB")
    image = _fit_height(image, max_height)

    out = io.BytesIO()
    image.save(out, format="JPEG", quality=max(1, min(95, int(quality))))
    return out.getvalue()


class FfmpegFrameFetcher:
    """Grab one frame with ffmpeg and turn it into a JPEG thumbnail."""

    def __init__(self, ffmpeg: str | None = None) -> None:
        self.ffmpeg = ffmpeg or os.environ.get("VIDTRIM_FFMPEG", "ffmpeg")

    def _command(self, video_path: str, timestamp_ms: int) -> list[str]:
        ts_str = f"{timestamp_ms / 1000:.3f}"
        return [
            self.ffmpeg,
            "-v",
            "error",
            "-ss",
            ts_str,
            "-i",
            str(video_path),
            "-frames:v",
            "1",
            "-f",
            "image2pipe",
            "-vcodec",
            "png",
            "-",
        ]

    def extract_frame(
        self,
        video_path: str,
        timestamp_ms: int,
        quality: int,
        max_height: int = DEFAULT_MAX_HEIGHT,
    ) -> Optional[bytes]:
        if not Path(video_path).exists():
            raise FrameExtractionError(f"Video not found: {video_path}")

        try:
            result = subprocess.run(
                self._command(video_path, timestamp_ms),
                check=True,
                capture_output=True,
            )
        except subprocess.CalledProcessError as exc:
            # Past the end of the stream, decode hiccups and the like.
            logger.debug("ffmpeg failed at %sms: %s", timestamp_ms, exc.stderr)
            return None

        if not result.stdout:
            return None
        return encode_thumbnail(result.stdout, quality=quality, max_height=max_height)


__all__ = [
    "DEFAULT_MAX_HEIGHT",
    "FfmpegFrameFetcher",
    "FrameExtractionError",
    "FrameFetcher",
    "default_max_height",
    "encode_thumbnail",
]
