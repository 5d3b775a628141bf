"""Progressive thumbnail strip generation."""

from __future__ import annotations

import logging
from typing import Callable, Iterator, List, Optional

from .frame_fetcher import (
    FfmpegFrameFetcher,
    FrameExtractionError,
    FrameFetcher,
    default_max_height,
)
from .timestamps import format_duration, sample_timestamps


logger = logging.getLogger(__name__)


class ThumbnailPipelineError(RuntimeError):
    """The frame fetcher failed in a way that ends the whole run."""


def generate_thumbnails(
    video_path: str,
    video_duration: int,
    number_of_thumbnails: int,
    quality: int,
    on_thumbnail_loading_complete: Callable[[], None] | None = None,
    *,
    fetcher: FrameFetcher | None = None,
    max_height: int | None = None,
) -> Iterator[List[Optional[bytes]]]:
    """Yield a growing list of thumbnails, one entry per sampled timestamp.

    Each yielded list is a fresh copy holding every thumbnail produced so far,
    in timestamp order, so a UI can redraw the strip after every step. When a
    frame cannot be extracted the last good frame of this run is reused; if
    there is none yet the slot is ``None``.

    Args:
        video_path: Path of the video to sample.
        video_duration: Duration of the video in milliseconds.
        number_of_thumbnails: How many thumbnails to produce.
        quality: Image quality (percentage), passed through to the fetcher.
        on_thumbnail_loading_complete: Called once, right after the last
            thumbnail is appended and before the final list is yielded.
        fetcher: Frame source; defaults to :class:`FfmpegFrameFetcher`.
        max_height: Thumbnail height cap in pixels.

    Raises:
        ValueError: If the duration or the thumbnail count is not positive.
        ThumbnailPipelineError: If the fetcher raises anything other than
            :class:`FrameExtractionError`. Nothing more is yielded after it.
    """

    timestamps = sample_timestamps(video_duration, number_of_thumbnails)
    fetcher = fetcher or FfmpegFrameFetcher()
    height = max_height if max_height is not None else default_max_height()

    thumbnails: List[Optional[bytes]] = []
    last_good: Optional[bytes] = None

    logger.info(
        "Generating %d thumbnails for %s (quality %s%%)",
        number_of_thumbnails,
        video_path,
        quality,
    )

    for index, timestamp in enumerate(timestamps, start=1):
        logger.debug("Generating thumbnail %d / %d", index, number_of_thumbnails)

        try:
            frame = fetcher.extract_frame(video_path, timestamp, quality, height)
        except FrameExtractionError as exc:
            logger.debug("Frame at %s unavailable: %s", format_duration(timestamp), exc)
            frame = None
        except Exception as exc:
            logger.error("Couldn't generate thumbnails: %s", exc)
            raise ThumbnailPipelineError(
                f"Thumbnail {index}/{number_of_thumbnails} at {timestamp}ms failed: {exc}"
            ) from exc

        if frame is not None:
            logger.debug(
                "Timestamp: %s | Size: %.2f kB",
                format_duration(timestamp),
                len(frame) / 1000,
            )
            last_good = frame
        else:
            logger.warning(
                "No frame at %s, reusing previous thumbnail", format_duration(timestamp)
            )
            frame = last_good

        thumbnails.append(frame)

        if len(thumbnails) == number_of_thumbnails and on_thumbnail_loading_complete:
            on_thumbnail_loading_complete()

        yield list(thumbnails)

    logger.info("Thumbnails generated successfully")
