"""Structural validation of planning slots."""

from ..constants import MAX_SLOT_DURATION, MIN_SLOT_DURATION
from ..models import Day, Room, SessionType, Slot, SlotError, SlotType
from ..utils import minutes_between, parse_time


def share_space(a: Slot, b: Slot) -> bool:
    """Check if two slots use the same physical space.

    Slots share space when they are in the same room, or when one of them
    lists the other's room among its overflow rooms.
    """
    return (
        a.room_id == b.room_id
        or a.room_id in b.overflow_room_ids
        or b.room_id in a.overflow_room_ids
    )


def overlaps(existing: Slot, candidate: Slot) -> bool:
    """Check if a candidate slot overlaps an existing slot.

    Intervals are half-open: a slot ending at 10:00 does not overlap a slot
    starting at 10:00. A slot never overlaps itself (same id).

    Args:
        existing: Slot already in the day
        candidate: Slot being checked

    Returns:
        True if both slots share space and their time ranges intersect
    """
    if existing.id and existing.id == candidate.id:
        return False
    if not share_space(existing, candidate):
        return False

    e_start, e_end = existing.start_minute, existing.end_minute
    c_start, c_end = candidate.start_minute, candidate.end_minute
    if None in (e_start, e_end, c_start, c_end):
        return False

    return (
        (e_start <= c_start < e_end)
        or (e_start < c_end <= e_end)
        or (c_start <= e_start and e_end <= c_end)
    )


def validate_slot(
    candidate: Slot,
    day: Day,
    slot_types: list[SlotType],
    session_types: list[SessionType],
    rooms: list[Room],
) -> list[SlotError]:
    """Validate a slot against the structure of its day.

    All checks are evaluated; the returned codes are de-duplicated in the
    order they were found. The candidate is compared to every other slot of
    the day, so a slot being edited in place does not conflict with its own
    previous version.

    Args:
        candidate: Slot to validate
        day: Day the slot belongs to (its slots are the existing ones)
        slot_types: Global slot types
        session_types: Session types of the conference
        rooms: Rooms of the conference

    Returns:
        Error codes; empty when the slot may coexist with the day's slots
    """
    errors: list[SlotError] = []

    start = candidate.start_minute
    end = candidate.end_minute
    times_valid = start is not None and end is not None

    # 1. Time ordering
    if not times_valid or end <= start:
        errors.append(SlotError.START_AFTER_END)

    # 2. Duration bounds
    if not MIN_SLOT_DURATION <= candidate.duration <= MAX_SLOT_DURATION:
        errors.append(SlotError.WRONG_DURATION)

    # 3. Day boundaries
    if times_valid:
        day_begin = parse_time(day.begin_time)
        day_end = parse_time(day.end_time)
        if day_begin is not None and start < day_begin:
            errors.append(SlotError.BEFORE_DAY_BEGIN)
        if day_end is not None and end > day_end:
            errors.append(SlotError.AFTER_DAY_END)

    # 4. Room
    room = next((r for r in rooms if r.id == candidate.room_id), None)
    if room is None:
        errors.append(SlotError.UNEXISTING_ROOM)
    if candidate.room_id in day.disabled_room_ids:
        errors.append(SlotError.ROOM_DISABLED)

    # 5. Slot type, room type and session type
    slot_type = next((t for t in slot_types if t.id == candidate.slot_type_id), None)
    if slot_type is None:
        errors.append(SlotError.WRONG_SLOT_TYPE)
    else:
        if room is not None and room.is_session_room != slot_type.is_session:
            errors.append(SlotError.WRONG_ROOM_TYPE)
        if slot_type.is_session:
            session_type = next(
                (t for t in session_types if t.id == candidate.session_type_id), None
            )
            if session_type is None:
                errors.append(SlotError.WRONG_SESSION_TYPE)
            elif session_type.duration != candidate.duration:
                errors.append(SlotError.WRONG_DURATION_SESSION)

    # 6. Overlap with the other slots of the day
    if times_valid and any(overlaps(existing, candidate) for existing in day.slots):
        errors.append(SlotError.OVERLAP_SLOT)

    # 7. Declared duration matches the time range
    if minutes_between(candidate.start_time, candidate.end_time) != candidate.duration:
        errors.append(SlotError.WRONG_DURATION)

    return list(dict.fromkeys(errors))


def validate_day(
    day: Day,
    slot_types: list[SlotType],
    session_types: list[SessionType],
    rooms: list[Room],
) -> dict[str, list[SlotError]]:
    """Validate every slot of a day against the others.

    Returns:
        Mapping slot id -> error codes, only for slots with errors
    """
    result: dict[str, list[SlotError]] = {}
    for slot in day.slots:
        errors = validate_slot(slot, day, slot_types, session_types, rooms)
        if errors:
            result[slot.id] = errors
    return result
