from __future__ import annotations

import io
import subprocess
import sys

import pytest
from PIL import Image

from video_trimmer import __version__
from video_trimmer.cli import main


@pytest.fixture(autouse=True)
def no_env_file(monkeypatch):
    monkeypatch.setattr("video_trimmer.cli.load_env_file", lambda: None)


def _run_cli(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["video-trimmer", *argv])
    main()


def _fake_tools(cmd, **kwargs):
    if "ffprobe" in cmd[0]:
        return subprocess.CompletedProcess(cmd, 0, stdout="4.0\n", stderr="")
    buf = io.BytesIO()
    Image.new("RGB", (320, 240)).save(buf, format="PNG")
    return subprocess.CompletedProcess(cmd, 0, stdout=buf.getvalue(), stderr=b"")


def test_version(monkeypatch, capsys):
    _run_cli(monkeypatch, "--version")

    assert capsys.readouterr().out.strip() == __version__


def test_save_prints_original_path(monkeypatch, capsys, tmp_path):
    video = tmp_path / "missing.mp4"

    _run_cli(monkeypatch, "save", "--video", str(video), "--start", "0", "--end", "1000")

    assert capsys.readouterr().out.strip() == str(video)


def test_save_rejects_bad_range(monkeypatch, tmp_path):
    with pytest.raises(SystemExit):
        _run_cli(monkeypatch, "save", "--video", str(tmp_path / "a.mp4"), "--start", "5", "--end", "5")


def test_thumbnails_command(monkeypatch, capsys, tmp_path, video_file):
    monkeypatch.setattr(subprocess, "run", _fake_tools)
    out_dir = tmp_path / "strip"

    _run_cli(
        monkeypatch,
        "thumbnails",
        "--video",
        str(video_file),
        "--count",
        "4",
        "--max-height",
        "60",
        "--outdir",
        str(out_dir),
    )

    lines = capsys.readouterr().out.splitlines()
    assert "[thumbnails] 4/4" in lines
    written = sorted(out_dir.glob("thumb_*.jpg"))
    assert len(written) == 4
    assert Image.open(written[0]).size == (80, 60)


def test_preview_requires_loadable_video(monkeypatch, tmp_path):
    with pytest.raises(SystemExit):
        _run_cli(
            monkeypatch,
            "preview",
            "--video",
            str(tmp_path / "missing.mp4"),
            "--start",
            "0",
            "--end",
            "1000",
        )
