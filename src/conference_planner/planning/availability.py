"""Speaker availability checks.

Availability is expressed by slot identity: a speaker lists the ids of the
slots they cannot attend, independently of the room the slot is in.
"""

from ..models import ConferenceSpeaker, Day, Session, Slot, SlotType, SpeakerConflict
from ..utils import parse_time


def index_speakers(speakers: list[ConferenceSpeaker]) -> dict[str, ConferenceSpeaker]:
    """Index conference speakers by person id (first record wins)."""
    result: dict[str, ConferenceSpeaker] = {}
    for speaker in speakers:
        if speaker.person_id and speaker.person_id not in result:
            result[speaker.person_id] = speaker
    return result


def is_speaker_unavailable(
    speaker_id: str, slot_id: str, speakers_by_id: dict[str, ConferenceSpeaker]
) -> bool:
    speaker = speakers_by_id.get(speaker_id)
    return speaker is not None and slot_id in speaker.unavailable_slot_ids


def has_unavailable_speaker(
    session: Session, slot_id: str, speakers_by_id: dict[str, ConferenceSpeaker]
) -> bool:
    """Check if any speaker of the session cannot attend the slot."""
    return any(
        is_speaker_unavailable(speaker_id, slot_id, speakers_by_id)
        for speaker_id in session.speaker_ids
    )


def has_constrained_speaker(
    session: Session, speakers_by_id: dict[str, ConferenceSpeaker]
) -> bool:
    """Check if any speaker of the session declared at least one unavailable slot."""
    for speaker_id in session.speaker_ids:
        speaker = speakers_by_id.get(speaker_id)
        if speaker is not None and speaker.has_unavailability:
            return True
    return False


def available_time_ranges(
    day: Day, unavailable_slot_ids: set[str], slot_types: list[SlotType]
) -> list[str]:
    """Time ranges of the day's session slots that remain open to a speaker.

    Returns:
        Sorted, de-duplicated "HH:mm-HH:mm" ranges
    """
    session_type_ids = {t.id for t in slot_types if t.is_session}
    ranges = {
        slot.time_range
        for slot in day.slots
        if slot.slot_type_id in session_type_ids and slot.id not in unavailable_slot_ids
    }
    return sorted(ranges)


def find_speaker_conflicts(
    session: Session,
    day: Day,
    slot: Slot,
    speakers: list[ConferenceSpeaker],
    slot_types: list[SlotType],
) -> list[SpeakerConflict]:
    """Describe why a session cannot be placed in a slot.

    Args:
        session: Session being placed
        day: Day of the slot
        slot: Target slot
        speakers: Conference speakers
        slot_types: Global slot types

    Returns:
        One conflict per speaker who cannot attend the slot; empty when the
        session can be placed
    """
    speakers_by_id = index_speakers(speakers)
    conflicts: list[SpeakerConflict] = []
    for speaker_id in session.speaker_ids:
        speaker = speakers_by_id.get(speaker_id)
        if speaker is None or slot.id not in speaker.unavailable_slot_ids:
            continue
        conflicts.append(
            SpeakerConflict(
                speaker_label=speaker.label,
                available_time_ranges=available_time_ranges(
                    day, speaker.unavailable_slot_ids, slot_types
                ),
            )
        )
    return conflicts


def _clamp_range(
    time_range: tuple[int, int], minimum: int, maximum: int
) -> tuple[int, int]:
    start = max(minimum, min(maximum, time_range[0]))
    end = max(minimum, min(maximum, time_range[1]))
    return (min(start, end), max(start, end))


def unavailable_slot_ids(
    days: list[Day], availability: dict[str, tuple[int, int] | None]
) -> list[str]:
    """Convert per-day availability ranges into unavailable slot ids.

    A slot is unavailable unless it lies entirely inside the available range
    of its day.

    Args:
        days: Conference days
        availability: day id -> (start minute, end minute) the speaker is
            available, or None when the whole day is unavailable. Days not
            listed are fully available.

    Returns:
        Sorted slot ids
    """
    unavailable: set[str] = set()

    for day in days:
        day_begin = parse_time(day.begin_time) or 0
        day_end = parse_time(day.end_time) or day_begin
        if day.id not in availability:
            time_range = (day_begin, day_end)
        elif availability[day.id] is None:
            unavailable.update(slot.id for slot in day.slots)
            continue
        else:
            time_range = _clamp_range(availability[day.id], day_begin, day_end)

        available_start, available_end = time_range
        for slot in day.slots:
            start, end = slot.start_minute, slot.end_minute
            if start is None or end is None:
                unavailable.add(slot.id)
            elif not (start >= available_start and end <= available_end):
                unavailable.add(slot.id)

    return sorted(unavailable)
