"""Test fixtures for conference planner tests."""

import json

import pytest

from conference_planner.models import (
    Conference,
    ConferenceSessionInfo,
    ConferenceSpeaker,
    Day,
    Room,
    Session,
    SessionAllocation,
    SessionStatus,
    SessionType,
    Slot,
    Track,
    default_slot_types,
)


@pytest.fixture
def slot_types():
    """Default global slot types (session, break, lunch, activity)."""
    return default_slot_types()


@pytest.fixture
def rooms():
    """Two session rooms and a non-session hall."""
    return [
        Room(id="R", name="Room R", capacity=100),
        Room(id="R2", name="Room R2", capacity=50),
        Room(id="HALL", name="Hall", capacity=300, is_session_room=False),
    ]


@pytest.fixture
def session_types():
    """Talk (30 min) and workshop (60 min)."""
    return [
        SessionType(id="talk", name="Talk", duration=30),
        SessionType(id="workshop", name="Workshop", duration=60, max_speakers=2),
    ]


@pytest.fixture
def make_slot():
    """Factory for session slots, by default a 30 minute talk in room R."""

    def _make(
        slot_id,
        start_time,
        end_time,
        room_id="R",
        duration=None,
        slot_type_id="session",
        session_type_id="talk",
        overflow_room_ids=None,
    ):
        if duration is None:
            start_h, start_m = map(int, start_time.split(":"))
            end_h, end_m = map(int, end_time.split(":"))
            duration = (end_h * 60 + end_m) - (start_h * 60 + start_m)
        return Slot(
            id=slot_id,
            start_time=start_time,
            end_time=end_time,
            duration=duration,
            room_id=room_id,
            slot_type_id=slot_type_id,
            session_type_id=session_type_id,
            overflow_room_ids=list(overflow_room_ids or []),
        )

    return _make


@pytest.fixture
def day(make_slot):
    """Day D from 09:00 to 18:00 with talk slots S1 and S2 in room R."""
    return Day(
        id="D",
        date="2025-06-12",
        begin_time="09:00",
        end_time="18:00",
        slots=[
            make_slot("S1", "09:00", "09:30"),
            make_slot("S2", "09:30", "10:00"),
        ],
    )


@pytest.fixture
def conference(day, rooms, session_types):
    """Conference with day D, rooms and session types."""
    return Conference(
        id="conf",
        name="Test Conf",
        days=[day],
        rooms=rooms,
        session_types=session_types,
        tracks=[Track(id="web", name="Web"), Track(id="data", name="Data")],
    )


@pytest.fixture
def make_session():
    """Factory for sessions of the test conference."""

    def _make(
        session_id,
        speakers=("p1",),
        status=SessionStatus.ACCEPTED,
        session_type_id="talk",
        track_id="",
        review=0.0,
        title=None,
    ):
        speaker_ids = list(speakers) + ["", "", ""]
        return Session(
            id=session_id,
            title=title or f"Session {session_id}",
            speaker1_id=speaker_ids[0],
            speaker2_id=speaker_ids[1],
            speaker3_id=speaker_ids[2],
            conference=ConferenceSessionInfo(
                conference_id="conf",
                status=status,
                session_type_id=session_type_id,
                track_id=track_id,
                review_average=review,
            ),
        )

    return _make


@pytest.fixture
def make_allocation():
    """Factory for allocation rows on day D, room R."""

    def _make(allocation_id, slot_id, session_id, day_id="D", room_id="R"):
        return SessionAllocation(
            id=allocation_id,
            conference_id="conf",
            day_id=day_id,
            slot_id=slot_id,
            room_id=room_id,
            session_id=session_id,
        )

    return _make


@pytest.fixture
def make_speaker():
    """Factory for conference speakers."""

    def _make(person_id, unavailable=(), display_name=""):
        return ConferenceSpeaker(
            person_id=person_id,
            unavailable_slot_ids=set(unavailable),
            conference_id="conf",
            display_name=display_name,
        )

    return _make


@pytest.fixture
def snapshot_dir(tmp_path, conference, make_session, make_allocation):
    """Snapshot directory with one allocated and two waiting sessions."""
    allocated = make_session("A", speakers=("p1",), status=SessionStatus.SCHEDULED)
    waiting = make_session("X", speakers=("p2",), title="Waiting talk")
    constrained = make_session("Y", speakers=("p3",), title="Constrained talk")

    (tmp_path / "conference.json").write_text(
        json.dumps(conference.to_dict()), encoding="utf-8"
    )
    (tmp_path / "sessions.json").write_text(
        json.dumps([s.to_dict() for s in (allocated, waiting, constrained)]),
        encoding="utf-8",
    )
    (tmp_path / "allocations.json").write_text(
        json.dumps([make_allocation("a1", "S1", "A").to_dict()]), encoding="utf-8"
    )
    (tmp_path / "speakers.json").write_text(
        json.dumps(
            [
                {"personId": "p1", "lastName": "Doe", "firstName": "Jane", "company": "ACME"},
                {"personId": "p2", "displayName": "John Smith"},
                {"personId": "p3", "displayName": "Ann Lee", "unavailableSlotsId": ["S1"]},
            ]
        ),
        encoding="utf-8",
    )
    return tmp_path
