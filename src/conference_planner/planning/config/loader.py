"""Unified snapshot loader."""

import logging
from pathlib import Path

from ...constants import (
    ALLOCATIONS_FILE,
    CONFERENCE_FILE,
    SESSIONS_FILE,
    SLOT_TYPES_FILE,
    SPEAKERS_FILE,
)
from ...models import Conference, ConferenceSpeaker, Session, SessionAllocation, SlotType
from ..store import AllocationStore
from .conference import ConferenceConfig
from .sessions import SessionConfig
from .speakers import SlotTypeConfig, SpeakerConfig

logger = logging.getLogger(__name__)


class SnapshotLoader:
    """Loads the planning snapshot of one conference from a directory."""

    def __init__(self, snapshot_dir: Path | str | None = None):
        """
        Initialize snapshot loader.

        Args:
            snapshot_dir: Directory containing the snapshot files.
                         Expected files:
                         - conference.json (required)
                         - sessions.json
                         - allocations.json
                         - speakers.json
                         - slot-types.json
        """
        if snapshot_dir is None:
            snapshot_dir = Path("snapshot")

        self.snapshot_dir = Path(snapshot_dir)

        self.conference_config = ConferenceConfig(self.snapshot_dir / CONFERENCE_FILE)
        self.session_config = SessionConfig(
            sessions_path=self._get_path(SESSIONS_FILE),
            allocations_path=self._get_path(ALLOCATIONS_FILE),
        )
        self.speaker_config = SpeakerConfig(self._get_path(SPEAKERS_FILE))
        self.slot_type_config = SlotTypeConfig(self._get_path(SLOT_TYPES_FILE))

        logger.info(
            f"Loaded snapshot {self.snapshot_dir}: {len(self.conference.days)} days, "
            f"{len(self.sessions)} sessions, {len(self.allocations)} allocations"
        )

    def _get_path(self, filename: str) -> Path | None:
        """Get path to snapshot file if it exists."""
        path = self.snapshot_dir / filename
        return path if path.exists() else None

    @property
    def conference(self) -> Conference:
        return self.conference_config.conference

    @property
    def sessions(self) -> list[Session]:
        return self.session_config.sessions

    @property
    def allocations(self) -> list[SessionAllocation]:
        return self.session_config.allocations

    @property
    def speakers(self) -> list[ConferenceSpeaker]:
        return self.speaker_config.speakers

    @property
    def slot_types(self) -> list[SlotType]:
        return self.slot_type_config.slot_types

    def create_store(self) -> AllocationStore:
        """Create an allocation store over the loaded snapshot."""
        return AllocationStore(
            self.conference,
            self.sessions,
            allocations=self.allocations,
            speakers=self.speakers,
            slot_types=self.slot_types,
        )

    def save_store(self, store: AllocationStore) -> None:
        """Write the allocations and session statuses of a store back to the snapshot."""
        self.session_config.save_allocations(
            self.snapshot_dir / ALLOCATIONS_FILE, store.allocations
        )
        self.session_config.save_sessions(self.snapshot_dir / SESSIONS_FILE, store.sessions)
        logger.info(f"Saved {len(store.allocations)} allocations to {self.snapshot_dir}")

    def save_conference(self) -> None:
        """Write the conference planning structure back to the snapshot."""
        self.conference_config.save()
