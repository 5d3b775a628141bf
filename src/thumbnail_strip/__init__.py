"""Thumbnail strip sampling for the trimmer timeline."""

from .frame_fetcher import DEFAULT_MAX_HEIGHT, FfmpegFrameFetcher, FrameExtractionError, FrameFetcher
from .generator import ThumbnailPipelineError, generate_thumbnails
from .timestamps import format_duration, sample_timestamps

__all__ = [
    "DEFAULT_MAX_HEIGHT",
    "FfmpegFrameFetcher",
    "FrameExtractionError",
    "FrameFetcher",
    "ThumbnailPipelineError",
    "format_duration",
    "generate_thumbnails",
    "sample_timestamps",
]
