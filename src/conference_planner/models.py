"""Data models for the conference planning engine."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from .constants import (
    DEFAULT_DAY_BEGIN,
    DEFAULT_DAY_END,
    DEFAULT_SLOT_TYPES,
    ELIGIBLE_STATUSES,
)
from .utils import format_time_range, parse_time


class SessionStatus(str, Enum):
    """Lifecycle status of a session within a conference."""

    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    REJECTED = "REJECTED"
    WAITLISTED = "WAITLISTED"
    ACCEPTED = "ACCEPTED"
    SPEAKER_CONFIRMED = "SPEAKER_CONFIRMED"
    SCHEDULED = "SCHEDULED"
    DECLINED_BY_SPEAKER = "DECLINED_BY_SPEAKER"
    PROGRAMMED = "PROGRAMMED"
    CANCELLED = "CANCELLED"


class SlotError(str, Enum):
    """Structural violations reported by the slot validator."""

    START_AFTER_END = "START_AFTER_END"
    WRONG_DURATION = "WRONG_DURATION"
    BEFORE_DAY_BEGIN = "BEFORE_DAY_BEGIN"
    AFTER_DAY_END = "AFTER_DAY_END"
    UNEXISTING_ROOM = "UNEXISTING_ROOM"
    ROOM_DISABLED = "ROOM_DISABLED"
    WRONG_SLOT_TYPE = "WRONG_SLOT_TYPE"
    WRONG_ROOM_TYPE = "WRONG_ROOM_TYPE"
    WRONG_SESSION_TYPE = "WRONG_SESSION_TYPE"
    WRONG_DURATION_SESSION = "WRONG_DURATION_SESSION"
    OVERLAP_SLOT = "OVERLAP_SLOT"


@dataclass
class Room:
    """A room of the conference venue."""

    id: str
    name: str = ""
    capacity: int = 0
    is_session_room: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Room":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            capacity=int(data.get("capacity") or 0),
            is_session_room=bool(data.get("isSessionRoom", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "capacity": self.capacity,
            "isSessionRoom": self.is_session_room,
        }


@dataclass
class SlotType:
    """Global slot category (session, break, lunch, ...)."""

    id: str
    is_session: bool = False
    name: dict[str, str] = field(default_factory=dict)
    icon: str = ""
    color: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SlotType":
        return cls(
            id=data["id"],
            is_session=bool(data.get("isSession", False)),
            name=dict(data.get("name") or {}),
            icon=data.get("icon", ""),
            color=data.get("color", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "isSession": self.is_session,
            "name": self.name,
            "icon": self.icon,
            "color": self.color,
        }


def default_slot_types() -> list[SlotType]:
    """Global slot types used when none are supplied."""
    return [SlotType.from_dict(data) for data in DEFAULT_SLOT_TYPES]


@dataclass
class SessionType:
    """Kind of session with a fixed duration (talk, workshop, keynote...)."""

    id: str
    name: str = ""
    duration: int = 0
    max_speakers: int = 1

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionType":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            duration=int(data.get("duration") or 0),
            max_speakers=int(data.get("maxSpeakers") or 1),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "duration": self.duration,
            "maxSpeakers": self.max_speakers,
        }


@dataclass
class Track:
    """Theme of the conference, used for display and track diversity."""

    id: str
    name: str = ""
    color: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Track":
        return cls(id=data["id"], name=data.get("name", ""), color=data.get("color", ""))

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "color": self.color}


@dataclass
class Slot:
    """A time range of one room on one day."""

    id: str
    start_time: str
    end_time: str
    duration: int
    room_id: str
    slot_type_id: str
    session_type_id: str = ""
    overflow_room_ids: list[str] = field(default_factory=list)

    @property
    def start_minute(self) -> int | None:
        return parse_time(self.start_time)

    @property
    def end_minute(self) -> int | None:
        return parse_time(self.end_time)

    @property
    def time_range(self) -> str:
        return format_time_range(self.start_time, self.end_time)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Slot":
        return cls(
            id=data.get("id", ""),
            start_time=data.get("startTime", ""),
            end_time=data.get("endTime", ""),
            duration=int(data.get("duration") or 0),
            room_id=data.get("roomId", ""),
            slot_type_id=data.get("slotTypeId", ""),
            session_type_id=data.get("sessionTypeId") or "",
            overflow_room_ids=list(data.get("overflowRoomIds") or []),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "duration": self.duration,
            "roomId": self.room_id,
            "slotTypeId": self.slot_type_id,
            "sessionTypeId": self.session_type_id,
            "overflowRoomIds": self.overflow_room_ids,
        }


@dataclass
class Day:
    """A conference day and its planning structure."""

    id: str
    date: str = ""
    begin_time: str = DEFAULT_DAY_BEGIN
    end_time: str = DEFAULT_DAY_END
    day_index: int = 0
    name: str = ""
    disabled_room_ids: list[str] = field(default_factory=list)
    slots: list[Slot] = field(default_factory=list)

    def get_slot(self, slot_id: str) -> Slot | None:
        """Get a slot of this day by id."""
        for slot in self.slots:
            if slot.id == slot_id:
                return slot
        return None

    def is_room_enabled(self, room_id: str) -> bool:
        return room_id not in self.disabled_room_ids

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Day":
        return cls(
            id=data["id"],
            date=data.get("date", ""),
            begin_time=data.get("beginTime") or DEFAULT_DAY_BEGIN,
            end_time=data.get("endTime") or DEFAULT_DAY_END,
            day_index=int(data.get("dayIndex") or 0),
            name=data.get("name", ""),
            disabled_room_ids=list(data.get("disabledRoomIds") or []),
            slots=[Slot.from_dict(s) for s in data.get("slots") or []],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "beginTime": self.begin_time,
            "endTime": self.end_time,
            "dayIndex": self.day_index,
            "name": self.name,
            "disabledRoomIds": self.disabled_room_ids,
            "slots": [s.to_dict() for s in self.slots],
        }


@dataclass
class Conference:
    """Planning reference data of a conference."""

    id: str
    name: str = ""
    days: list[Day] = field(default_factory=list)
    rooms: list[Room] = field(default_factory=list)
    session_types: list[SessionType] = field(default_factory=list)
    tracks: list[Track] = field(default_factory=list)

    def get_day(self, day_id: str) -> Day | None:
        for day in self.days:
            if day.id == day_id:
                return day
        return None

    def get_room(self, room_id: str) -> Room | None:
        for room in self.rooms:
            if room.id == room_id:
                return room
        return None

    def get_session_type(self, session_type_id: str) -> SessionType | None:
        for session_type in self.session_types:
            if session_type.id == session_type_id:
                return session_type
        return None

    def get_track(self, track_id: str) -> Track | None:
        for track in self.tracks:
            if track.id == track_id:
                return track
        return None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Conference":
        # Days may be stored under "days" or "planning"
        days = data.get("days") or data.get("planning") or []
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            days=[Day.from_dict(d) for d in days],
            rooms=[Room.from_dict(r) for r in data.get("rooms") or []],
            session_types=[SessionType.from_dict(t) for t in data.get("sessionTypes") or []],
            tracks=[Track.from_dict(t) for t in data.get("tracks") or []],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "days": [d.to_dict() for d in self.days],
            "rooms": [r.to_dict() for r in self.rooms],
            "sessionTypes": [t.to_dict() for t in self.session_types],
            "tracks": [t.to_dict() for t in self.tracks],
        }


@dataclass
class ConferenceSessionInfo:
    """Conference-specific part of a submitted session."""

    conference_id: str
    status: SessionStatus
    session_type_id: str = ""
    track_id: str = ""
    review_average: float = 0.0
    review_votes: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConferenceSessionInfo":
        review = data.get("review") or {}
        return cls(
            conference_id=data.get("conferenceId", ""),
            status=SessionStatus(data.get("status", SessionStatus.SUBMITTED.value)),
            session_type_id=data.get("sessionTypeId") or "",
            track_id=data.get("trackId") or "",
            review_average=float(review.get("average") or 0.0),
            review_votes=int(review.get("votes") or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "conferenceId": self.conference_id,
            "status": self.status.value,
            "sessionTypeId": self.session_type_id,
            "trackId": self.track_id,
            "review": {"average": self.review_average, "votes": self.review_votes},
        }


@dataclass
class Session:
    """A talk, workshop or keynote proposed by up to three speakers."""

    id: str
    title: str = ""
    speaker1_id: str = ""
    speaker2_id: str = ""
    speaker3_id: str = ""
    search: str = ""
    conference: ConferenceSessionInfo | None = None

    @property
    def speaker_ids(self) -> list[str]:
        """Non-empty speaker ids, in order, without duplicates."""
        ids: list[str] = []
        for speaker_id in (self.speaker1_id, self.speaker2_id, self.speaker3_id):
            if speaker_id and speaker_id not in ids:
                ids.append(speaker_id)
        return ids

    @property
    def status(self) -> SessionStatus | None:
        return self.conference.status if self.conference else None

    @property
    def session_type_id(self) -> str:
        return self.conference.session_type_id if self.conference else ""

    @property
    def track_id(self) -> str:
        return self.conference.track_id if self.conference else ""

    @property
    def review_average(self) -> float:
        return self.conference.review_average if self.conference else 0.0

    @property
    def is_eligible(self) -> bool:
        """Whether the status allows the session to be placed in the planning."""
        status = self.status
        return status is not None and status.value in ELIGIBLE_STATUSES

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Session":
        conference = data.get("conference")
        title = data.get("title") or ""
        return cls(
            id=data["id"],
            title=title,
            speaker1_id=data.get("speaker1Id") or "",
            speaker2_id=data.get("speaker2Id") or "",
            speaker3_id=data.get("speaker3Id") or "",
            search=data.get("search") or title.lower(),
            conference=ConferenceSessionInfo.from_dict(conference) if conference else None,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "speaker1Id": self.speaker1_id,
            "speaker2Id": self.speaker2_id,
            "speaker3Id": self.speaker3_id,
            "search": self.search,
        }
        if self.conference:
            result["conference"] = self.conference.to_dict()
        return result


@dataclass
class SessionAllocation:
    """Assignment of one session to one (day, slot, room)."""

    id: str
    conference_id: str
    day_id: str
    slot_id: str
    room_id: str
    session_id: str
    last_updated: str = ""

    @property
    def slot_key(self) -> tuple[str, str, str]:
        return (self.day_id, self.slot_id, self.room_id)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionAllocation":
        return cls(
            id=data.get("id", ""),
            conference_id=data.get("conferenceId", ""),
            day_id=data["dayId"],
            slot_id=data["slotId"],
            room_id=data["roomId"],
            session_id=data["sessionId"],
            last_updated=data.get("lastUpdated", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "conferenceId": self.conference_id,
            "dayId": self.day_id,
            "slotId": self.slot_id,
            "roomId": self.room_id,
            "sessionId": self.session_id,
            "lastUpdated": self.last_updated,
        }


@dataclass
class ConferenceSpeaker:
    """A person speaking at the conference and the slots they cannot attend."""

    person_id: str
    unavailable_slot_ids: set[str] = field(default_factory=set)
    session_ids: list[str] = field(default_factory=list)
    conference_id: str = ""
    display_name: str = ""

    @property
    def label(self) -> str:
        return self.display_name or self.person_id

    @property
    def has_unavailability(self) -> bool:
        return bool(self.unavailable_slot_ids)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConferenceSpeaker":
        unavailable = {
            str(slot_id).strip()
            for slot_id in data.get("unavailableSlotsId") or []
            if str(slot_id or "").strip()
        }
        return cls(
            person_id=str(data.get("personId") or "").strip(),
            unavailable_slot_ids=unavailable,
            session_ids=list(data.get("sessionIds") or []),
            conference_id=data.get("conferenceId", ""),
            display_name=data.get("displayName", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "personId": self.person_id,
            "unavailableSlotsId": sorted(self.unavailable_slot_ids),
            "sessionIds": self.session_ids,
            "conferenceId": self.conference_id,
            "displayName": self.display_name,
        }


@dataclass(frozen=True)
class Suggestion:
    """An allocation proposed by the auto-allocator."""

    day_id: str
    slot_id: str
    room_id: str
    session_id: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "dayId": self.day_id,
            "slotId": self.slot_id,
            "roomId": self.room_id,
            "sessionId": self.session_id,
        }


@dataclass
class SpeakerConflict:
    """A speaker who cannot attend a slot, with the time ranges still open to them."""

    speaker_label: str
    available_time_ranges: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "speakerLabel": self.speaker_label,
            "availableTimeRanges": self.available_time_ranges,
        }


@dataclass
class SkippedSuggestion:
    """A suggestion that was stale when applied."""

    suggestion: Suggestion
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {**self.suggestion.to_dict(), "reason": self.reason}


@dataclass
class ApplyReport:
    """Outcome of applying a batch of suggestions."""

    applied: list[SessionAllocation] = field(default_factory=list)
    skipped: list[SkippedSuggestion] = field(default_factory=list)

    @property
    def total_applied(self) -> int:
        return len(self.applied)

    @property
    def total_skipped(self) -> int:
        return len(self.skipped)

    def to_dict(self) -> dict[str, Any]:
        return {
            "applied": [a.to_dict() for a in self.applied],
            "skipped": [s.to_dict() for s in self.skipped],
        }


@dataclass
class TypeCounts:
    """Session counts, in total and per session type."""

    total: int = 0
    by_session_type: dict[str, int] = field(default_factory=dict)

    def add(self, session_type_id: str) -> None:
        self.total += 1
        self.by_session_type[session_type_id] = self.by_session_type.get(session_type_id, 0) + 1

    def to_dict(self) -> dict[str, Any]:
        return {"total": self.total, "bySessionTypeId": self.by_session_type}


@dataclass
class PlanningStatistics:
    """Counters describing how far the planning is filled."""

    submitted: TypeCounts = field(default_factory=TypeCounts)
    confirmed: TypeCounts = field(default_factory=TypeCounts)
    allocated: TypeCounts = field(default_factory=TypeCounts)
    total_speakers: int = 0
    sessions_with_2_speakers: int = 0
    sessions_with_3_speakers: int = 0
    total_session_slots: int = 0
    allocated_session_slots: int = 0

    @property
    def slot_ratio(self) -> float:
        if self.total_session_slots == 0:
            return 0.0
        return self.allocated_session_slots / self.total_session_slots

    def to_dict(self) -> dict[str, Any]:
        return {
            "submitted": self.submitted.to_dict(),
            "confirmed": self.confirmed.to_dict(),
            "allocated": self.allocated.to_dict(),
            "speakers": {
                "total": self.total_speakers,
                "sessionsWith2Speakers": self.sessions_with_2_speakers,
                "sessionsWith3Speakers": self.sessions_with_3_speakers,
            },
            "slots": {
                "allocated": self.allocated_session_slots,
                "total": self.total_session_slots,
                "ratio": self.slot_ratio,
            },
        }


@dataclass
class PlanningEntry:
    """One allocated slot of the planning, flattened for display and export."""

    day_id: str
    date: str
    start_time: str
    end_time: str
    room_id: str
    room_name: str
    session_id: str
    title: str
    session_type: str
    track: str
    status: str
    speakers: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "dayId": self.day_id,
            "date": self.date,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "roomId": self.room_id,
            "room": self.room_name,
            "sessionId": self.session_id,
            "title": self.title,
            "sessionType": self.session_type,
            "track": self.track,
            "status": self.status,
            "speakers": self.speakers,
        }


@dataclass
class PlanningReport:
    """Allocated planning and its statistics."""

    conference_id: str
    conference_name: str = ""
    entries: list[PlanningEntry] = field(default_factory=list)
    statistics: PlanningStatistics = field(default_factory=PlanningStatistics)
    generation_date: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def total_entries(self) -> int:
        return len(self.entries)

    def to_dict(self) -> dict[str, Any]:
        return {
            "conferenceId": self.conference_id,
            "conferenceName": self.conference_name,
            "generationDate": self.generation_date,
            "entries": [e.to_dict() for e in self.entries],
            "statistics": self.statistics.to_dict(),
        }
