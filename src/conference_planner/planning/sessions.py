"""Queries over the pool of sessions waiting for a slot."""

from collections.abc import Iterable

from ..constants import MIN_KEYWORD_LENGTH
from ..models import ConferenceSpeaker, Session, SessionAllocation
from .availability import has_constrained_speaker, index_speakers


def eligible_sessions(
    sessions: list[Session], allocations: list[SessionAllocation]
) -> list[Session]:
    """Sessions that can still be placed: eligible status and no allocation.

    Input order is preserved.
    """
    allocated_ids = {a.session_id for a in allocations}
    return [
        session
        for session in sessions
        if session.id and session.id not in allocated_ids and session.is_eligible
    ]


def matches_keyword(session: Session, keyword: str) -> bool:
    """Case-insensitive keyword match on the session search text.

    Keywords shorter than the minimum length match every session.
    """
    query = (keyword or "").strip().lower()
    if len(query) < MIN_KEYWORD_LENGTH:
        return True
    return query in (session.search or session.title).lower()


def unallocated_sessions(
    sessions: list[Session],
    allocations: list[SessionAllocation],
    speakers: list[ConferenceSpeaker] | None = None,
    session_type_ids: Iterable[str] = (),
    track_ids: Iterable[str] = (),
    with_unavailability: bool = False,
    keyword: str = "",
) -> list[Session]:
    """List the sessions waiting for a slot, filtered and sorted by title.

    Args:
        sessions: Sessions of the conference
        allocations: Current allocations
        speakers: Conference speakers, needed by ``with_unavailability``
        session_type_ids: Keep only these session types (all if empty)
        track_ids: Keep only these tracks (all if empty)
        with_unavailability: Keep only sessions with a speaker who declared
            unavailable slots
        keyword: Search text (ignored below 3 characters)

    Returns:
        Matching sessions sorted by title
    """
    type_filter = set(session_type_ids)
    track_filter = set(track_ids)
    speakers_by_id = index_speakers(speakers or [])

    result = []
    for session in eligible_sessions(sessions, allocations):
        if type_filter and session.session_type_id not in type_filter:
            continue
        if track_filter and session.track_id not in track_filter:
            continue
        if with_unavailability and not has_constrained_speaker(session, speakers_by_id):
            continue
        if not matches_keyword(session, keyword):
            continue
        result.append(session)

    return sorted(result, key=lambda s: s.title.lower())
