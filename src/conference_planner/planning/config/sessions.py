"""Session and allocation loaders."""

from pathlib import Path

from ...exceptions import InvalidSnapshotError
from ...models import Session, SessionAllocation
from .files import read_json_list, write_json


class SessionConfig:
    """Loader for sessions.json and allocations.json."""

    def __init__(
        self,
        sessions_path: Path | None = None,
        allocations_path: Path | None = None,
    ):
        self.sessions_path = sessions_path
        self.allocations_path = allocations_path
        self.sessions: list[Session] = self._load_sessions(sessions_path)
        self.allocations: list[SessionAllocation] = self._load_allocations(allocations_path)

    def _load_sessions(self, path: Path | None) -> list[Session]:
        try:
            return [Session.from_dict(record) for record in read_json_list(path)]
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidSnapshotError(str(path), f"malformed session ({exc})") from exc

    def _load_allocations(self, path: Path | None) -> list[SessionAllocation]:
        try:
            return [SessionAllocation.from_dict(record) for record in read_json_list(path)]
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidSnapshotError(str(path), f"malformed allocation ({exc})") from exc

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by id."""
        for session in self.sessions:
            if session.id == session_id:
                return session
        return None

    def save_sessions(self, path: Path, sessions: list[Session]) -> None:
        self.sessions = list(sessions)
        write_json(path, [s.to_dict() for s in self.sessions])

    def save_allocations(self, path: Path, allocations: list[SessionAllocation]) -> None:
        self.allocations = list(allocations)
        write_json(path, [a.to_dict() for a in self.allocations])
