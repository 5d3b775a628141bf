"""Environment-driven settings."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable


def load_env_file(candidates: Iterable[Path] | None = None) -> None:
    """Best-effort load ``KEY=value`` pairs from .env files.

    Checks the repo root .env, the cwd .env and HOME/.env in that order.
    Values already in the environment are never overwritten.
    """

    if candidates is None:
        candidates = [
            Path(__file__).resolve().parents[2] / ".env",  # this repo root
            Path.cwd() / ".env",
            Path.home() / ".env",
        ]

    for path in candidates:
        if not path.exists():
            continue
        for line in path.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            if key in os.environ:
                continue
            os.environ[key] = value.strip().strip('"').strip("'")


def log_level() -> str:
    return os.environ.get("VIDTRIM_LOG_LEVEL", "INFO").upper()
