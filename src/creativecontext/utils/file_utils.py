# -*- coding: utf-8 -*-
"""File helpers with UTF-8 defaults."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any


def ensure_dir(path: str | Path) -> Path:
    """Create a directory if it does not exist."""
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def read_json_file(path: str | Path) -> dict[str, Any]:
    """Read a JSON file."""
    file_path = Path(path)
    with file_path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError(f"Expected JSON object in {file_path}")
    return data


def write_json_file(path: str | Path, data: dict[str, Any]) -> Path:
    """Write JSON to a file with indentation."""
    file_path = Path(path)
    ensure_dir(file_path.parent)
    with file_path.open("w", encoding="utf-8") as handle:
        json.dump(data, handle, indent=2, ensure_ascii=False)
        handle.write("\n")
    return file_path


def timestamped_path(directory: str | Path, prefix: str, suffix: str) -> Path:
    """Return ``<directory>/<prefix>-<YYYYmmdd-HHMMSS-micro><suffix>``, creating the directory."""
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S-%f")
    return ensure_dir(directory) / f"{prefix}-{timestamp}{suffix}"


def remove_file_quietly(path: str | Path) -> bool:
    """Delete a file, returning False instead of raising when it cannot be removed."""
    try:
        Path(path).unlink(missing_ok=True)
    except OSError:
        return False
    return True
