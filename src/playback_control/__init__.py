"""Playback control and (passthrough) trimming for a loaded video."""

from .engine import FfprobePlaybackEngine, PlaybackEngine, probe_duration_ms
from .events import ChannelClosedError, EventChannel, Subscription, TrimmerEvent
from .storage import StorageDir, create_output_folder
from .trim_backend import FileFormat, OutputPreferences, PassthroughTrimBackend, TrimBackend, TrimRange
from .trimmer import PlaybackState, Trimmer, TrimmerNotReadyError

__all__ = [
    "ChannelClosedError",
    "EventChannel",
    "FfprobePlaybackEngine",
    "FileFormat",
    "OutputPreferences",
    "PassthroughTrimBackend",
    "PlaybackEngine",
    "PlaybackState",
    "StorageDir",
    "Subscription",
    "TrimBackend",
    "TrimRange",
    "Trimmer",
    "TrimmerEvent",
    "TrimmerNotReadyError",
    "create_output_folder",
    "probe_duration_ms",
]
