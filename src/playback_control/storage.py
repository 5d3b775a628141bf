"""Output folder resolution."""

from __future__ import annotations

import enum
import os
import tempfile
from pathlib import Path


class StorageDir(enum.Enum):
    TEMPORARY = "temporaryDirectory"
    APPLICATION_DOCUMENTS = "applicationDocumentsDirectory"
    EXTERNAL_STORAGE = "externalStorageDirectory"


def storage_root(storage_dir: StorageDir | None = None) -> Path:
    """Base directory for a storage location; documents when unspecified."""

    if storage_dir is StorageDir.TEMPORARY:
        return Path(tempfile.gettempdir())
    if storage_dir is StorageDir.EXTERNAL_STORAGE:
        return Path(os.environ.get("VIDTRIM_EXTERNAL_DIR") or Path.home())
    return Path(os.environ.get("VIDTRIM_DOCUMENTS_DIR") or Path.home() / "Documents")


def create_output_folder(
    folder_name: str,
    storage_dir: StorageDir | None = None,
    *,
    base_dir: Path | None = None,
) -> Path:
    """Return ``<root>/<folder_name>``, creating it if needed."""

    root = Path(base_dir) if base_dir else storage_root(storage_dir)
    folder = root / folder_name
    folder.mkdir(parents=True, exist_ok=True)
    return folder
