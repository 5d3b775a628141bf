"""Bounded-loop playback control for trimming a single video."""

from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import Callable, Optional

from .engine import FfprobePlaybackEngine, PlaybackEngine
from .events import EventChannel, TrimmerEvent
from .trim_backend import OutputPreferences, PassthroughTrimBackend, TrimBackend, TrimRange


logger = logging.getLogger(__name__)


class PlaybackState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"


class TrimmerNotReadyError(RuntimeError):
    """Playback was requested before a video finished loading."""


class Trimmer:
    """Owns the player for one loaded video and keeps playback inside a trim range.

    The range is only enforced when :meth:`toggle_playback` is called: if the
    playhead already sits at or past ``end`` it is moved back to ``start``.
    Nothing watches the position in between, so a caller that wants a real
    loop has to poll :meth:`position_ms` and toggle near ``end`` (see
    ``video_trimmer.pipeline.preview_loop``).
    """

    def __init__(
        self,
        engine_factory: Callable[[], PlaybackEngine] = FfprobePlaybackEngine,
        trim_backend: TrimBackend | None = None,
    ) -> None:
        self._engine_factory = engine_factory
        self._trim_backend = trim_backend or PassthroughTrimBackend()
        self._events = EventChannel()
        self._video_player: Optional[PlaybackEngine] = None
        self._state = PlaybackState.UNINITIALIZED
        self.current_video_file: Optional[Path] = None

    @property
    def event_stream(self) -> EventChannel:
        return self._events

    @property
    def video_player(self) -> Optional[PlaybackEngine]:
        return self._video_player

    @property
    def state(self) -> PlaybackState:
        # The player stops by itself at the end of the video.
        if self._state is PlaybackState.PLAYING and not self._require_player().is_playing():
            self._state = PlaybackState.PAUSED
        return self._state

    @property
    def duration_ms(self) -> int | None:
        return self._video_player.duration_ms if self._video_player else None

    def load_video(self, video_file: Path | str) -> None:
        """Load ``video_file`` and announce ``TrimmerEvent.INITIALIZED`` when ready.

        A path that does not exist is ignored: no error, no event, and any
        player from an earlier load is kept. ``current_video_file`` still
        records the requested path.
        """

        video_file = Path(video_file)
        self.current_video_file = video_file

        if not video_file.exists():
            logger.debug("Skipping load, %s does not exist", video_file)
            return

        self._release_player()

        player = self._engine_factory()
        if not player.initialize(video_file):
            logger.warning("Playback engine could not open %s", video_file)
            player.dispose()
            return

        self._video_player = player
        self._state = PlaybackState.READY
        self._events.publish(TrimmerEvent.INITIALIZED)

    def _require_player(self) -> PlaybackEngine:
        if self._video_player is None:
            raise TrimmerNotReadyError("No video loaded; call load_video first")
        return self._video_player

    def position_ms(self) -> int:
        return self._require_player().position_ms()

    def toggle_playback(self, trim_range: TrimRange) -> bool:
        """Pause if playing, otherwise play inside ``trim_range``.

        Returns ``True`` when the video is now playing.
        """

        player = self._require_player()

        if player.is_playing():
            player.pause()
            self._state = PlaybackState.PAUSED
            return False

        if player.position_ms() >= trim_range.end_ms:
            player.seek_to(trim_range.start_ms)
        player.play()
        self._state = PlaybackState.PLAYING
        return True

    def video_playback_control(self, *, start_value: float, end_value: float) -> bool:
        return self.toggle_playback(TrimRange.from_values(start_value, end_value))

    def save_trimmed_video(
        self,
        *,
        start_value: float,
        end_value: float,
        on_save: Callable[[Optional[str]], None],
        preferences: OutputPreferences | None = None,
    ) -> None:
        """Hand the trimmed output path to ``on_save``.

        With the passthrough backend this is always the loaded file's path;
        no file is written.
        """

        output_path = self._trim_backend.trim(
            self.current_video_file,
            start_value,
            end_value,
            preferences or OutputPreferences(),
        )
        on_save(output_path)

    def _release_player(self) -> None:
        if self._video_player is not None:
            self._video_player.dispose()
            self._video_player = None
        self._state = PlaybackState.UNINITIALIZED

    def dispose(self) -> None:
        self._events.close()
        self._release_player()
