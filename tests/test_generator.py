from __future__ import annotations

import pytest

from thumbnail_strip import FrameExtractionError, ThumbnailPipelineError, generate_thumbnails

from conftest import FakeFetcher


TS = [2000, 4000, 6000, 8000, 10_000]


def _run(fetcher, count=5, duration=10_000, on_complete=None):
    return list(
        generate_thumbnails(
            "clip.mp4", duration, count, 75, on_complete, fetcher=fetcher, max_height=120
        )
    )


def test_all_frames_succeed():
    frames = {ts: f"frame-{ts}".encode() for ts in TS}
    fetcher = FakeFetcher(frames)

    snapshots = _run(fetcher)

    assert [len(s) for s in snapshots] == [1, 2, 3, 4, 5]
    assert snapshots[-1] == [frames[ts] for ts in TS]
    assert [r[1] for r in fetcher.requests] == TS
    assert all(r[2] == 75 and r[3] == 120 for r in fetcher.requests)


def test_snapshots_are_independent_prefixes():
    fetcher = FakeFetcher({ts: bytes([i]) for i, ts in enumerate(TS)})

    snapshots = _run(fetcher)

    for earlier, later in zip(snapshots, snapshots[1:]):
        assert later[: len(earlier)] == earlier
        assert later is not earlier
    assert len(snapshots[0]) == 1


def test_failed_frame_reuses_previous():
    fetcher = FakeFetcher({2000: b"a", 4000: None, 6000: b"c", 8000: FrameExtractionError("boom"), 10_000: b"e"})

    final = _run(fetcher)[-1]

    assert final == [b"a", b"a", b"c", b"c", b"e"]


def test_first_failure_gives_placeholder():
    fetcher = FakeFetcher({2000: None, 4000: b"b"})

    final = _run(fetcher, count=3, duration=6000)[-1]

    assert final == [None, b"b", b"b"]


def test_completion_fires_once_after_last_append():
    seen = []
    fetcher = FakeFetcher(default=b"x")
    gen = generate_thumbnails(
        "clip.mp4", 10_000, 5, 50, lambda: seen.append(len(fetcher.requests)), fetcher=fetcher
    )

    for i, snapshot in enumerate(gen, start=1):
        if i < 5:
            assert seen == []
        assert len(snapshot) == i

    assert seen == [5]


def test_fatal_fetcher_error_ends_the_run():
    completed = []
    fetcher = FakeFetcher({2000: b"a", 6000: OSError("ffmpeg missing")}, default=b"z")
    gen = generate_thumbnails(
        "clip.mp4", 10_000, 5, 50, lambda: completed.append(True), fetcher=fetcher
    )

    assert next(gen) == [b"a"]
    assert next(gen) == [b"a", b"z"]
    with pytest.raises(ThumbnailPipelineError) as excinfo:
        next(gen)

    assert isinstance(excinfo.value.__cause__, OSError)
    assert len(fetcher.requests) == 3
    assert completed == []
    with pytest.raises(StopIteration):
        next(gen)


def test_stopping_consumption_stops_extraction():
    fetcher = FakeFetcher(default=b"x")
    gen = generate_thumbnails("clip.mp4", 10_000, 5, 50, fetcher=fetcher)

    next(gen)
    next(gen)
    gen.close()

    assert len(fetcher.requests) == 2


def test_nothing_runs_until_iterated():
    fetcher = FakeFetcher(default=b"x")

    gen = generate_thumbnails("clip.mp4", 10_000, 5, 50, fetcher=fetcher)

    assert fetcher.requests == []
    next(gen)
    assert len(fetcher.requests) == 1


def test_invalid_arguments_surface_on_iteration():
    gen = generate_thumbnails("clip.mp4", 10_000, 0, 50, fetcher=FakeFetcher())

    with pytest.raises(ValueError):
        next(gen)


def test_each_call_starts_fresh():
    fetcher = FakeFetcher({2000: b"a"})

    first = _run(fetcher, count=1, duration=2000)[-1]
    fetcher.results = {2000: None}
    second = _run(fetcher, count=1, duration=2000)[-1]

    assert first == [b"a"]
    assert second == [None]
