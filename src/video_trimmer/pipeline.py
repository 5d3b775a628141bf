"""Pipeline helpers tying thumbnails, preview playback and saving together."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from playback_control import (
    OutputPreferences,
    Trimmer,
    TrimmerEvent,
    TrimRange,
    create_output_folder,
    probe_duration_ms,
)
from thumbnail_strip import FrameFetcher, generate_thumbnails


logger = logging.getLogger(__name__)


def write_thumbnail_strip(
    video_path: Path,
    *,
    count: int,
    quality: int,
    out_dir: Path,
    duration_ms: int | None = None,
    fetcher: FrameFetcher | None = None,
    max_height: int | None = None,
    on_progress: Callable[[int, int], None] | None = None,
) -> List[Path]:
    """Generate a thumbnail strip and write each frame as ``thumb_###.jpg``.

    Placeholder slots (no frame yet) are skipped. Returns the written paths.
    """

    if duration_ms is None:
        duration_ms = probe_duration_ms(video_path)
    if not duration_ms:
        raise RuntimeError(f"Could not determine the duration of {video_path}")

    done: Dict[str, bool] = {"complete": False}

    def _complete() -> None:
        done["complete"] = True

    strip: List[Optional[bytes]] = []
    for strip in generate_thumbnails(
        str(video_path),
        duration_ms,
        count,
        quality,
        _complete,
        fetcher=fetcher,
        max_height=max_height,
    ):
        if on_progress:
            on_progress(len(strip), count)

    out_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for i, frame in enumerate(strip, start=1):
        if frame is None:
            continue
        path = out_dir / f"thumb_{i:03d}.jpg"
        path.write_bytes(frame)
        written.append(path)

    logger.info("Wrote %d/%d thumbnails to %s (complete=%s)", len(written), count, out_dir, done["complete"])
    return written


def preview_loop(
    trimmer: Trimmer,
    trim_range: TrimRange,
    *,
    iterations: int,
    poll_interval: float = 0.05,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Play ``trim_range`` and keep it looping by polling the playhead.

    The trimmer only wraps to ``start`` when toggled, so this loop watches the
    position and toggles whenever ``end`` is reached until playback resumes:
    once if the player already stopped at the end of the video, twice (pause,
    then wrap and play) if it is still running. Returns how many times
    playback wrapped.
    """

    wraps = 0
    while not trimmer.toggle_playback(trim_range):
        pass

    for _ in range(iterations):
        sleep(poll_interval)
        if trimmer.position_ms() >= trim_range.end_ms:
            while not trimmer.toggle_playback(trim_range):
                pass
            wraps += 1
            logger.debug("Wrapped playback to %d ms", trim_range.start_ms)

    if trimmer.video_player is not None and trimmer.video_player.is_playing():
        trimmer.toggle_playback(trim_range)
    return wraps


def save_passthrough(
    trimmer: Trimmer,
    trim_range: TrimRange,
    preferences: OutputPreferences | None = None,
) -> Optional[str]:
    """Run the save step and return whatever path its callback received."""

    saved: Dict[str, Optional[str]] = {}
    trimmer.save_trimmed_video(
        start_value=trim_range.start_ms,
        end_value=trim_range.end_ms,
        on_save=lambda path: saved.__setitem__("path", path),
        preferences=preferences,
    )
    return saved.get("path")


def run_session(
    *,
    video_path: Path,
    start_ms: int,
    end_ms: int,
    count: int = 10,
    quality: int = 50,
    folder_name: str = "Trimmer",
    base_dir: Path | None = None,
    preview_iterations: int = 0,
    trimmer: Trimmer | None = None,
    fetcher: FrameFetcher | None = None,
) -> Dict[str, Any]:
    """Load -> thumbnails -> preview -> save. Returns a summary dict."""

    summary: Dict[str, Any] = {"steps": []}
    trimmer = trimmer or Trimmer()
    ready: List[TrimmerEvent] = []
    subscription = trimmer.event_stream.subscribe(ready.append)

    try:
        trimmer.load_video(video_path)
        if not ready:
            summary["warning"] = f"Video did not load: {video_path}"
            return summary
        summary["steps"].append("load")

        trim_range = TrimRange(start_ms, end_ms)
        duration = trimmer.duration_ms or 0
        if not trim_range.within(duration):
            raise ValueError(f"Trim range ends at {end_ms} ms, past the {duration} ms video")

        out_dir = create_output_folder(folder_name, base_dir=base_dir)
        thumbs = write_thumbnail_strip(
            video_path,
            count=count,
            quality=quality,
            out_dir=out_dir,
            duration_ms=duration,
            fetcher=fetcher,
        )
        summary["thumbnails"] = [str(p) for p in thumbs]
        summary["steps"].append("thumbnails")

        if preview_iterations:
            summary["wraps"] = preview_loop(trimmer, trim_range, iterations=preview_iterations)
            summary["steps"].append("preview")

        summary["output"] = save_passthrough(trimmer, trim_range)
        summary["steps"].append("save")
        return summary
    finally:
        subscription.cancel()
        trimmer.dispose()
