"""Flat view of the allocated planning."""

from ..models import (
    Conference,
    ConferenceSpeaker,
    PlanningEntry,
    PlanningReport,
    Session,
    SessionAllocation,
    SlotType,
)
from ..utils import normalize_key, parse_time
from .allocator import sort_days
from .availability import index_speakers
from .statistics import compute_statistics


def build_report(
    conference: Conference,
    sessions: list[Session],
    allocations: list[SessionAllocation],
    slot_types: list[SlotType],
    speakers: list[ConferenceSpeaker] | None = None,
) -> PlanningReport:
    """Build the planning report of a conference.

    Allocations whose day, slot or session no longer exist are left out.
    Entries are sorted by day, start time and room order.
    """
    sessions_by_id = {s.id: s for s in sessions}
    speakers_by_id = index_speakers(speakers or [])
    tracks_by_key = {normalize_key(t.id): t for t in conference.tracks}
    room_order = {r.id: index for index, r in enumerate(conference.rooms)}
    day_order = {d.id: index for index, d in enumerate(sort_days(conference.days))}

    entries: list[PlanningEntry] = []
    for allocation in allocations:
        day = conference.get_day(allocation.day_id)
        slot = day.get_slot(allocation.slot_id) if day else None
        session = sessions_by_id.get(allocation.session_id)
        if day is None or slot is None or session is None:
            continue

        room = conference.get_room(allocation.room_id)
        session_type = conference.get_session_type(session.session_type_id)
        track = tracks_by_key.get(normalize_key(session.track_id))
        speaker_labels = [
            speakers_by_id[sp].label if sp in speakers_by_id else sp
            for sp in session.speaker_ids
        ]
        entries.append(
            PlanningEntry(
                day_id=day.id,
                date=day.date,
                start_time=slot.start_time,
                end_time=slot.end_time,
                room_id=allocation.room_id,
                room_name=room.name if room else allocation.room_id,
                session_id=session.id,
                title=session.title,
                session_type=session_type.name if session_type else session.session_type_id,
                track=track.name if track else session.track_id,
                status=session.status.value if session.status else "",
                speakers=speaker_labels,
            )
        )

    entries.sort(
        key=lambda e: (
            day_order.get(e.day_id, len(day_order)),
            parse_time(e.start_time) or 0,
            room_order.get(e.room_id, len(room_order)),
        )
    )

    return PlanningReport(
        conference_id=conference.id,
        conference_name=conference.name,
        entries=entries,
        statistics=compute_statistics(conference, sessions, allocations, slot_types),
    )
