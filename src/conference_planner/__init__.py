"""Conference Planner - session-to-slot allocation for conference schedules.

This module provides tools to validate the planning structure of a
conference (days, rooms and time slots), place accepted sessions in session
slots while keeping their status in step, and suggest a complete planning
with a greedy auto-allocator that respects speaker availability.

Example usage:
    from conference_planner.planning import SnapshotLoader, suggest

    loader = SnapshotLoader("snapshot")
    store = loader.create_store()

    suggestions = suggest(
        loader.conference, store.sessions, store.allocations,
        loader.speakers, loader.slot_types,
    )
    report = store.apply_suggestions(suggestions)
    print(f"Applied: {report.total_applied}, skipped: {report.total_skipped}")

    # Export the planning
    from conference_planner.exporters import JSONExporter
    from conference_planner.planning import build_report

    planning = build_report(
        loader.conference, store.sessions, store.allocations,
        loader.slot_types, loader.speakers,
    )
    JSONExporter().export(planning, "planning.json")
"""

from .exceptions import (
    AllocationError,
    InvalidSnapshotError,
    PlannerError,
    SessionTypeMismatchError,
    SnapshotError,
    SnapshotNotFoundError,
    SpeakerUnavailableError,
    UnknownSessionError,
    UnknownSlotError,
)
from .exporters import CSVExporter, ExcelExporter, JSONExporter, get_exporter
from .models import (
    Conference,
    ConferenceSpeaker,
    Day,
    PlanningReport,
    Room,
    Session,
    SessionAllocation,
    SessionStatus,
    SessionType,
    Slot,
    SlotError,
    SlotType,
    Suggestion,
    Track,
)

__version__ = "0.1.0"

__all__ = [
    # Models
    "Conference",
    "Day",
    "Room",
    "Slot",
    "SlotType",
    "SessionType",
    "Track",
    "Session",
    "SessionStatus",
    "SessionAllocation",
    "ConferenceSpeaker",
    "Suggestion",
    "SlotError",
    "PlanningReport",
    # Exporters
    "JSONExporter",
    "CSVExporter",
    "ExcelExporter",
    "get_exporter",
    # Exceptions
    "PlannerError",
    "SnapshotError",
    "SnapshotNotFoundError",
    "InvalidSnapshotError",
    "AllocationError",
    "UnknownSessionError",
    "UnknownSlotError",
    "SessionTypeMismatchError",
    "SpeakerUnavailableError",
]
