"""Conference configuration loader."""

from pathlib import Path

from ...exceptions import InvalidSnapshotError, SnapshotNotFoundError
from ...models import Conference
from .files import read_json, write_json


class ConferenceConfig:
    """Loader for the conference planning structure from conference.json."""

    def __init__(self, conference_path: Path):
        if not conference_path.exists():
            raise SnapshotNotFoundError(str(conference_path))
        self.path = conference_path
        self.conference = self._load(conference_path)

    def _load(self, path: Path) -> Conference:
        """Load the conference from a JSON file."""
        data = read_json(path)
        if not isinstance(data, dict):
            raise InvalidSnapshotError(str(path), "expected a JSON object")
        try:
            return Conference.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidSnapshotError(str(path), f"malformed record ({exc})") from exc

    def save(self, path: Path | None = None) -> None:
        """Write the conference back (to its own file by default)."""
        write_json(path or self.path, self.conference.to_dict())
