"""Stable identifier of this device."""

from __future__ import annotations

import uuid
from pathlib import Path

from awkit.dirs import get_data_dir


def get_device_id(data_dir: Path | str | None = None) -> str:
    """Return the stored device id, generating and saving a UUID v4 if none exists."""
    directory = Path(data_dir) if data_dir is not None else get_data_dir()
    path = directory / "device_id"
    if path.exists():
        return path.read_text(encoding="utf-8")
    device_id = str(uuid.uuid4())
    path.write_text(device_id, encoding="utf-8")
    return device_id