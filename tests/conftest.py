"""Shared fakes for the trimmer and thumbnail tests."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest


class FakeEngine:
    """Scriptable stand-in for a playback engine that records every call."""

    def __init__(self, *, duration_ms: int = 10_000, init_ok: bool = True) -> None:
        self.duration_ms = duration_ms
        self.init_ok = init_ok
        self.calls: List[Tuple] = []
        self.playing = False
        self.position = 0
        self.disposed = False

    def initialize(self, path: Path) -> bool:
        self.calls.append(("initialize", Path(path)))
        return self.init_ok

    def play(self) -> None:
        self.calls.append(("play",))
        self.playing = True

    def pause(self) -> None:
        self.calls.append(("pause",))
        self.playing = False

    def seek_to(self, position_ms: int) -> None:
        self.calls.append(("seek_to", position_ms))
        self.position = position_ms

    def is_playing(self) -> bool:
        return self.playing

    def position_ms(self) -> int:
        return self.position

    def dispose(self) -> None:
        self.calls.append(("dispose",))
        self.disposed = True


class FakeFetcher:
    """Frame fetcher returning canned results keyed by timestamp."""

    def __init__(self, results: Optional[Dict[int, object]] = None, default: object = None) -> None:
        self.results = results or {}
        self.default = default
        self.requests: List[Tuple[str, int, int, int]] = []

    def extract_frame(self, video_path: str, timestamp_ms: int, quality: int, max_height: int):
        self.requests.append((video_path, timestamp_ms, quality, max_height))
        result = self.results.get(timestamp_ms, self.default)
        if isinstance(result, BaseException):
            raise result
        if result is None:
            return None
        return result


@pytest.fixture
def video_file(tmp_path: Path) -> Path:
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"not really a video")
    return path


@pytest.fixture
def engines() -> List[FakeEngine]:
    return []


@pytest.fixture
def engine_factory(engines: List[FakeEngine]):
    def _factory() -> FakeEngine:
        engine = FakeEngine()
        engines.append(engine)
        return engine

    return _factory
