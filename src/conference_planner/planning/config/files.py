"""JSON file helpers for snapshot loaders."""

import json
from pathlib import Path
from typing import Any

from ...exceptions import InvalidSnapshotError


def read_json(path: Path) -> Any:
    """Read a JSON document.

    Raises:
        InvalidSnapshotError: If the file is not valid JSON
    """
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise InvalidSnapshotError(str(path), str(exc)) from exc


def read_json_list(path: Path | None) -> list[dict[str, Any]]:
    """Read a JSON array of records; a missing file yields an empty list."""
    if path is None or not path.exists():
        return []
    data = read_json(path)
    if not isinstance(data, list):
        raise InvalidSnapshotError(str(path), "expected a JSON array")
    return data


def write_json(path: Path, data: Any) -> None:
    """Write a JSON document, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
