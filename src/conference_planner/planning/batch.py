"""Batch acceptance of candidate slots into a day.

Candidates are validated in input order against a working copy of the target
day that grows with every accepted slot, so later candidates see earlier
accepted ones. On conflicts the first candidate wins.
"""

import logging
from collections.abc import Callable
from dataclasses import replace

from ..models import Day, Room, SessionType, Slot, SlotType
from ..utils import compute_end_time, generate_slot_id, parse_time
from .validator import validate_slot

logger = logging.getLogger(__name__)


def filter_compatible(
    candidates: list[Slot],
    target_day: Day,
    slot_types: list[SlotType],
    session_types: list[SessionType],
    rooms: list[Room],
) -> list[Slot]:
    """Keep the candidates that can be added to the day together.

    Args:
        candidates: Slots proposed for the day, in priority order
        target_day: Day receiving the slots (not modified)
        slot_types: Global slot types
        session_types: Session types of the conference
        rooms: Rooms of the conference

    Returns:
        Accepted candidates, in input order
    """
    working_day = replace(target_day, slots=list(target_day.slots))
    accepted: list[Slot] = []

    for candidate in candidates:
        errors = validate_slot(candidate, working_day, slot_types, session_types, rooms)
        if errors:
            logger.debug(
                f"Rejected slot {candidate.room_id} {candidate.time_range} "
                f"on day {target_day.id}: {', '.join(e.value for e in errors)}"
            )
            continue
        accepted.append(candidate)
        working_day.slots.append(candidate)

    return accepted


def with_slots(day: Day, slots: list[Slot]) -> Day:
    """Return a copy of the day with the given slots appended."""
    return replace(day, slots=[*day.slots, *slots])


def copy_day_to_day(
    source_day: Day,
    target_day: Day,
    slot_types: list[SlotType],
    session_types: list[SessionType],
    rooms: list[Room],
    id_factory: Callable[[], str] = generate_slot_id,
) -> list[Slot]:
    """Copy the structure of one day into another.

    Every source slot is cloned with a fresh id; clones that do not fit the
    target day (disabled room, out of bounds, overlap...) are dropped.

    Returns:
        Accepted clones, to be appended to the target day
    """
    clones = [
        replace(slot, id=id_factory(), overflow_room_ids=list(slot.overflow_room_ids))
        for slot in source_day.slots
    ]
    accepted = filter_compatible(clones, target_day, slot_types, session_types, rooms)
    logger.info(
        f"Copied {len(accepted)}/{len(clones)} slots from day {source_day.id} "
        f"to day {target_day.id}"
    )
    return accepted


def copy_room_to_room(
    day: Day,
    source_room_id: str,
    target_room_id: str,
    slot_types: list[SlotType],
    session_types: list[SessionType],
    rooms: list[Room],
    id_factory: Callable[[], str] = generate_slot_id,
) -> list[Slot]:
    """Copy the slots of one room into another room of the same day.

    Overflow rooms describe the source room and are not carried over.

    Returns:
        Accepted clones, to be appended to the day
    """
    clones = [
        replace(slot, id=id_factory(), room_id=target_room_id, overflow_room_ids=[])
        for slot in day.slots
        if slot.room_id == source_room_id
    ]
    accepted = filter_compatible(clones, day, slot_types, session_types, rooms)
    logger.info(
        f"Copied {len(accepted)}/{len(clones)} slots from room {source_room_id} "
        f"to room {target_room_id} on day {day.id}"
    )
    return accepted


def create_consecutive_slots(
    day: Day,
    start_time: str,
    end_time: str,
    duration: int,
    room_id: str,
    slot_type_id: str,
    slot_types: list[SlotType],
    session_types: list[SessionType],
    rooms: list[Room],
    session_type_id: str = "",
    id_factory: Callable[[], str] = generate_slot_id,
) -> list[Slot]:
    """Create back-to-back slots of one room between two times.

    Slots start at ``start_time`` and follow each other until the next one
    would end after ``end_time``.

    Args:
        day: Day receiving the slots (not modified)
        start_time: Start of the first slot "HH:mm"
        end_time: Latest end time "HH:mm"
        duration: Duration of each slot in minutes
        room_id: Room of the slots
        slot_type_id: Slot type of the slots
        slot_types: Global slot types
        session_types: Session types of the conference
        rooms: Rooms of the conference
        session_type_id: Session type, for session slots
        id_factory: Generates slot ids

    Returns:
        Accepted slots, to be appended to the day
    """
    start = parse_time(start_time)
    end = parse_time(end_time)
    if start is None or end is None or duration <= 0:
        return []

    candidates: list[Slot] = []
    current = start
    while current + duration <= end:
        slot_start = compute_end_time(start_time, current - start)
        candidates.append(
            Slot(
                id=id_factory(),
                start_time=slot_start,
                end_time=compute_end_time(slot_start, duration),
                duration=duration,
                room_id=room_id,
                slot_type_id=slot_type_id,
                session_type_id=session_type_id,
            )
        )
        current += duration

    return filter_compatible(candidates, day, slot_types, session_types, rooms)
