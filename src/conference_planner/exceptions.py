"""Custom exceptions for the conference planner."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import SpeakerConflict


class PlannerError(Exception):
    """Base exception for planner errors."""

    pass


class SnapshotError(PlannerError):
    """Base exception for snapshot loading errors."""

    pass


class SnapshotNotFoundError(SnapshotError):
    """Required snapshot file is missing."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Snapshot file not found: {path}")


class InvalidSnapshotError(SnapshotError):
    """Snapshot file could not be decoded into planning records."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Invalid snapshot file '{path}': {message}")


class AllocationError(PlannerError):
    """An allocation could not be written."""

    pass


class UnknownSessionError(AllocationError):
    """Session id does not match any session of the conference."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Unknown session '{session_id}'")


class UnknownSlotError(AllocationError):
    """Day, slot or room does not designate a session-slot of the planning."""

    def __init__(self, day_id: str, slot_id: str, room_id: str, reason: str = ""):
        self.day_id = day_id
        self.slot_id = slot_id
        self.room_id = room_id
        message = f"No session slot '{slot_id}' in room '{room_id}' on day '{day_id}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class SessionTypeMismatchError(AllocationError):
    """Session type differs from the session type of the target slot."""

    def __init__(self, session_id: str, session_type_id: str, slot_session_type_id: str):
        self.session_id = session_id
        self.session_type_id = session_type_id
        self.slot_session_type_id = slot_session_type_id
        super().__init__(
            f"Session '{session_id}' has type '{session_type_id}' "
            f"but the slot expects '{slot_session_type_id}'"
        )


class SpeakerUnavailableError(AllocationError):
    """At least one speaker of the session cannot attend the target slot."""

    def __init__(self, session_id: str, slot_id: str, conflicts: list["SpeakerConflict"]):
        self.session_id = session_id
        self.slot_id = slot_id
        self.conflicts = conflicts
        details = "; ".join(
            f"{c.speaker_label}: {', '.join(c.available_time_ranges) or 'no available slot'}"
            for c in conflicts
        )
        super().__init__(
            f"Speakers of session '{session_id}' are unavailable for slot '{slot_id}' ({details})"
        )
