"""Greedy auto-allocation of sessions to free session slots."""

import logging
import random
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass

from ..models import (
    Conference,
    ConferenceSpeaker,
    Day,
    Room,
    Session,
    SessionAllocation,
    Slot,
    SlotType,
    Suggestion,
)
from .availability import has_constrained_speaker, has_unavailable_speaker, index_speakers
from .sessions import eligible_sessions

logger = logging.getLogger(__name__)

# (day id, start minute, end minute): parallel slots of the same time slice
TimeSlice = tuple[str, int, int]


@dataclass
class FreeSlot:
    """A session slot without allocation, with its sort data resolved."""

    day: Day
    slot: Slot
    room: Room
    day_order: int
    start: int
    end: int

    @property
    def time_slice(self) -> TimeSlice:
        return (self.day.id, self.start, self.end)

    @property
    def sort_key(self) -> tuple[int, int, int, int]:
        # Bigger rooms first within the same time range
        return (self.day_order, self.start, self.end, -self.room.capacity)


def sort_days(days: list[Day]) -> list[Day]:
    """Order days chronologically: by date when every day has one, else by index."""
    if days and all(day.date for day in days):
        return sorted(days, key=lambda d: (d.date, d.day_index))
    return sorted(days, key=lambda d: d.day_index)


class AutoAllocator:
    """Fills free session slots with unallocated sessions in a single pass.

    Free slots are visited in chronological order (bigger rooms first for
    the same time range). For each slot the allocator keeps the pool
    sessions of the slot's session type whose speakers can all attend the
    slot, prefers sessions whose speakers have nothing else that day, then
    ranks the remaining candidates by:

    1. having a speaker with declared unavailabilities
    2. sharing a speaker with a session already placed that day
    3. bringing a track not yet present in the same time slice
    4. review average
    5. a random tie-break

    Decisions are never revisited: a slot without candidate stays free.
    """

    def __init__(
        self,
        conference: Conference,
        conference_speakers: list[ConferenceSpeaker],
        slot_types: list[SlotType],
        rng: Callable[[], float] | None = None,
    ) -> None:
        """Initialize the allocator.

        Args:
            conference: Conference planning structure
            conference_speakers: Speakers with their unavailable slot ids
            slot_types: Global slot types
            rng: Returns a float used as last tie-break (random.random by
                default); pass a seeded generator for reproducible results
        """
        self.conference = conference
        self.speakers_by_id = index_speakers(conference_speakers)
        self.slot_types = slot_types
        self.rng = rng or random.random

    def suggest(
        self, sessions: list[Session], current_allocations: list[SessionAllocation]
    ) -> list[Suggestion]:
        """Suggest allocations for the unallocated eligible sessions.

        Args:
            sessions: Sessions of the conference
            current_allocations: Existing allocations

        Returns:
            Suggestions in the order they were decided
        """
        pool = {s.id: s for s in eligible_sessions(sessions, current_allocations)}
        free_slots = self._collect_free_slots(current_allocations)
        speaker_days, track_coverage = self._seed_state(sessions, current_allocations)

        logger.info(
            f"Auto-allocating {len(pool)} sessions over {len(free_slots)} free slots"
        )

        suggestions: list[Suggestion] = []
        for free in free_slots:
            if not pool:
                break

            candidates = [
                session
                for session in pool.values()
                if session.session_type_id == free.slot.session_type_id
                and not has_unavailable_speaker(session, free.slot.id, self.speakers_by_id)
            ]
            if not candidates:
                logger.debug(f"No candidate for slot {free.slot.id} on day {free.day.id}")
                continue

            day_id = free.day.id
            fresh = [
                session
                for session in candidates
                if not any(day_id in speaker_days[sp] for sp in session.speaker_ids)
            ]
            if fresh:
                candidates = fresh

            best = max(
                candidates,
                key=lambda session: self._score(session, free, speaker_days, track_coverage),
            )

            suggestions.append(
                Suggestion(
                    day_id=day_id,
                    slot_id=free.slot.id,
                    room_id=free.room.id,
                    session_id=best.id,
                )
            )
            del pool[best.id]
            for speaker_id in best.speaker_ids:
                speaker_days[speaker_id].add(day_id)
            if best.track_id:
                track_coverage[free.time_slice].add(best.track_id)

        logger.info(
            f"Suggested {len(suggestions)} allocations, {len(pool)} sessions left unallocated"
        )
        return suggestions

    def _score(
        self,
        session: Session,
        free: FreeSlot,
        speaker_days: dict[str, set[str]],
        track_coverage: dict[TimeSlice, set[str]],
    ) -> tuple[bool, bool, bool, float, float]:
        constrained = has_constrained_speaker(session, self.speakers_by_id)
        same_day = any(free.day.id in speaker_days[sp] for sp in session.speaker_ids)
        new_track = bool(session.track_id) and (
            session.track_id not in track_coverage[free.time_slice]
        )
        return (constrained, same_day, new_track, session.review_average, self.rng())

    def _collect_free_slots(self, allocations: list[SessionAllocation]) -> list[FreeSlot]:
        allocated_keys = {a.slot_key for a in allocations}
        slot_types_by_id = {t.id: t for t in self.slot_types}
        rooms_by_id = {r.id: r for r in self.conference.rooms}

        free_slots: list[FreeSlot] = []
        for day_order, day in enumerate(sort_days(self.conference.days)):
            for slot in day.slots:
                slot_type = slot_types_by_id.get(slot.slot_type_id)
                room = rooms_by_id.get(slot.room_id)
                start, end = slot.start_minute, slot.end_minute
                if slot_type is None or room is None or start is None or end is None:
                    logger.debug(f"Unusable slot {slot.id} on day {day.id}")
                    continue
                if not slot_type.is_session or not room.is_session_room:
                    continue
                if not day.is_room_enabled(room.id):
                    continue
                if (day.id, slot.id, room.id) in allocated_keys:
                    continue
                free_slots.append(
                    FreeSlot(day=day, slot=slot, room=room, day_order=day_order, start=start, end=end)
                )

        free_slots.sort(key=lambda f: f.sort_key)
        return free_slots

    def _seed_state(
        self, sessions: list[Session], allocations: list[SessionAllocation]
    ) -> tuple[dict[str, set[str]], dict[TimeSlice, set[str]]]:
        """Build speaker day usage and track coverage from existing allocations."""
        sessions_by_id = {s.id: s for s in sessions}
        speaker_days: dict[str, set[str]] = defaultdict(set)
        track_coverage: dict[TimeSlice, set[str]] = defaultdict(set)

        for allocation in allocations:
            session = sessions_by_id.get(allocation.session_id)
            if session is None:
                continue
            for speaker_id in session.speaker_ids:
                speaker_days[speaker_id].add(allocation.day_id)

            day = self.conference.get_day(allocation.day_id)
            slot = day.get_slot(allocation.slot_id) if day else None
            if slot is None or not session.track_id:
                continue
            start, end = slot.start_minute, slot.end_minute
            if start is not None and end is not None:
                track_coverage[(allocation.day_id, start, end)].add(session.track_id)

        return speaker_days, track_coverage


def suggest(
    conference: Conference,
    sessions: list[Session],
    current_allocations: list[SessionAllocation],
    conference_speakers: list[ConferenceSpeaker],
    slot_types: list[SlotType],
    rng: Callable[[], float] | None = None,
) -> list[Suggestion]:
    """Suggest allocations for every unallocated eligible session.

    See AutoAllocator for the heuristic. No allocation is written; apply the
    result with AllocationStore.apply_suggestions.
    """
    allocator = AutoAllocator(conference, conference_speakers, slot_types, rng=rng)
    return allocator.suggest(sessions, current_allocations)
