"""Planning statistics for the conference dashboard."""

from ..constants import (
    ALLOCATED_STATUSES,
    CONFIRMED_STATUSES,
    SPEAKER_COUNT_STATUSES,
    UNKNOWN_SESSION_TYPE_ID,
)
from ..models import (
    Conference,
    PlanningStatistics,
    Session,
    SessionAllocation,
    SlotType,
    TypeCounts,
)


def _empty_counts(conference: Conference) -> TypeCounts:
    return TypeCounts(by_session_type={t.id: 0 for t in conference.session_types})


def session_slot_keys(
    conference: Conference, slot_types: list[SlotType]
) -> set[tuple[str, str, str]]:
    """(day, slot, room) keys of every session slot in an enabled session room."""
    session_slot_types = {t.id for t in slot_types if t.is_session}
    session_rooms = {r.id for r in conference.rooms if r.is_session_room}
    keys: set[tuple[str, str, str]] = set()
    for day in conference.days:
        for slot in day.slots:
            if slot.slot_type_id not in session_slot_types:
                continue
            if slot.room_id not in session_rooms or not day.is_room_enabled(slot.room_id):
                continue
            keys.add((day.id, slot.id, slot.room_id))
    return keys


def compute_statistics(
    conference: Conference,
    sessions: list[Session],
    allocations: list[SessionAllocation],
    slot_types: list[SlotType],
) -> PlanningStatistics:
    """Compute session, speaker and slot counters.

    Args:
        conference: Conference planning structure
        sessions: Sessions submitted to the conference
        allocations: Current allocations
        slot_types: Global slot types

    Returns:
        PlanningStatistics
    """
    stats = PlanningStatistics(
        submitted=_empty_counts(conference),
        confirmed=_empty_counts(conference),
        allocated=_empty_counts(conference),
    )
    speakers: set[str] = set()

    for session in sessions:
        if session.conference is None:
            continue
        status = session.conference.status.value
        session_type_id = session.session_type_id or UNKNOWN_SESSION_TYPE_ID

        stats.submitted.add(session_type_id)
        if status in CONFIRMED_STATUSES:
            stats.confirmed.add(session_type_id)
        if status in ALLOCATED_STATUSES:
            stats.allocated.add(session_type_id)

        if status in SPEAKER_COUNT_STATUSES:
            speaker_ids = session.speaker_ids
            speakers.update(speaker_ids)
            if len(speaker_ids) == 2:
                stats.sessions_with_2_speakers += 1
            elif len(speaker_ids) == 3:
                stats.sessions_with_3_speakers += 1

    stats.total_speakers = len(speakers)

    slot_keys = session_slot_keys(conference, slot_types)
    stats.total_session_slots = len(slot_keys)
    stats.allocated_session_slots = len({a.slot_key for a in allocations} & slot_keys)
    return stats
