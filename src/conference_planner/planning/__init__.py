"""Session-to-slot allocation engine.

This package validates the planning structure of a conference (days, rooms
and slots), keeps the allocation of sessions to slots with the matching
session status transitions, and suggests allocations for many slots at once
with a greedy heuristic.

Main entry points:
- validate_slot / filter_compatible: structural checks of slots
- AllocationStore: manual assign / clear with status transitions
- suggest / AutoAllocator: greedy auto-allocation
- SnapshotLoader: loads a conference snapshot from a directory

Usage:
    from conference_planner.planning import SnapshotLoader, suggest

    loader = SnapshotLoader("snapshot")
    store = loader.create_store()
    suggestions = suggest(
        loader.conference,
        store.sessions,
        store.allocations,
        loader.speakers,
        loader.slot_types,
    )
    report = store.apply_suggestions(suggestions)
"""

from .allocator import AutoAllocator, sort_days, suggest
from .availability import (
    available_time_ranges,
    find_speaker_conflicts,
    unavailable_slot_ids,
)
from .batch import (
    copy_day_to_day,
    copy_room_to_room,
    create_consecutive_slots,
    filter_compatible,
    with_slots,
)
from .config import SnapshotLoader
from .report import build_report
from .sessions import eligible_sessions, unallocated_sessions
from .statistics import compute_statistics
from .status import status_after_allocation, status_after_deallocation
from .store import AllocationStore
from .validator import overlaps, validate_day, validate_slot

__all__ = [
    # Slot validation
    "overlaps",
    "validate_slot",
    "validate_day",
    # Batch acceptance
    "filter_compatible",
    "copy_day_to_day",
    "copy_room_to_room",
    "create_consecutive_slots",
    "with_slots",
    # Allocation store
    "AllocationStore",
    "status_after_allocation",
    "status_after_deallocation",
    # Auto-allocation
    "AutoAllocator",
    "suggest",
    "sort_days",
    # Speaker availability
    "available_time_ranges",
    "find_speaker_conflicts",
    "unavailable_slot_ids",
    # Session pool, statistics and report
    "eligible_sessions",
    "unallocated_sessions",
    "compute_statistics",
    "build_report",
    # Snapshot
    "SnapshotLoader",
]
