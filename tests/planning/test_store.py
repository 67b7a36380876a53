"""Tests for the allocation store."""

import itertools

import pytest

from conference_planner.exceptions import (
    SessionTypeMismatchError,
    SpeakerUnavailableError,
    UnknownSessionError,
    UnknownSlotError,
)
from conference_planner.models import SessionStatus, Suggestion
from conference_planner.planning.store import AllocationStore


@pytest.fixture
def make_store(conference, slot_types):
    """Factory for stores over the test conference with deterministic ids."""

    def _make(sessions, allocations=None, speakers=None):
        counter = itertools.count(1)
        return AllocationStore(
            conference,
            sessions,
            allocations=allocations,
            speakers=speakers,
            slot_types=slot_types,
            id_factory=lambda: f"a{next(counter)}",
            clock=lambda: "2025-01-01T00:00:00+00:00",
        )

    return _make


def status_of(store, session_id):
    return store.get_session(session_id).status


class TestAssign:
    """Tests for AllocationStore.assign."""

    def test_assign_then_clear_restores_status(self, make_store, make_session):
        """Test ACCEPTED -> SCHEDULED on assign and back on clear."""
        store = make_store([make_session("X")])
        allocation = store.assign("D", "S1", "R", "X")

        assert allocation.slot_key == ("D", "S1", "R")
        assert allocation.conference_id == "conf"
        assert allocation.last_updated == "2025-01-01T00:00:00+00:00"
        assert status_of(store, "X") == SessionStatus.SCHEDULED

        store.clear(allocation.id)
        assert store.allocations == []
        assert status_of(store, "X") == SessionStatus.ACCEPTED

    def test_speaker_confirmed_becomes_programmed(self, make_store, make_session):
        """Test SPEAKER_CONFIRMED -> PROGRAMMED -> SPEAKER_CONFIRMED."""
        store = make_store([make_session("X", status=SessionStatus.SPEAKER_CONFIRMED)])
        allocation = store.assign("D", "S1", "R", "X")
        assert status_of(store, "X") == SessionStatus.PROGRAMMED
        store.clear(allocation.id)
        assert status_of(store, "X") == SessionStatus.SPEAKER_CONFIRMED

    def test_other_status_unchanged(self, make_store, make_session):
        """Test statuses without transition are left as is."""
        store = make_store([make_session("X", status=SessionStatus.SUBMITTED)])
        store.assign("D", "S1", "R", "X")
        assert status_of(store, "X") == SessionStatus.SUBMITTED

    def test_idempotent(self, make_store, make_session):
        """Test assigning the same session twice gives one row."""
        store = make_store([make_session("X")])
        first = store.assign("D", "S1", "R", "X")
        second = store.assign("D", "S1", "R", "X")
        assert first == second
        assert len(store.allocations) == 1
        assert status_of(store, "X") == SessionStatus.SCHEDULED

    def test_assign_clears_other_rows_on_same_slot(
        self, make_store, make_session, make_allocation
    ):
        """Test re-assigning a slot holding two rows keeps only the session's row."""
        store = make_store(
            [
                make_session("X", status=SessionStatus.SCHEDULED),
                make_session("Y", speakers=("p2",), status=SessionStatus.SCHEDULED),
            ],
            allocations=[make_allocation("a1", "S1", "X"), make_allocation("a2", "S1", "Y")],
        )
        allocation = store.assign("D", "S1", "R", "X")

        assert allocation.id == "a1"
        assert [a.session_id for a in store.allocations] == ["X"]
        assert status_of(store, "X") == SessionStatus.SCHEDULED
        assert status_of(store, "Y") == SessionStatus.ACCEPTED

    def test_replace_rolls_back_previous_session(self, make_store, make_session):
        """Test replacing a session in a slot rolls its status back."""
        store = make_store([make_session("X"), make_session("Y", speakers=("p2",))])
        first = store.assign("D", "S1", "R", "X")
        second = store.assign("D", "S1", "R", "Y")

        assert second.id == first.id
        assert [a.session_id for a in store.allocations] == ["Y"]
        assert status_of(store, "X") == SessionStatus.ACCEPTED
        assert status_of(store, "Y") == SessionStatus.SCHEDULED

    def test_move_session(self, make_store, make_session):
        """Test assigning an allocated session elsewhere moves it."""
        store = make_store([make_session("X")])
        store.assign("D", "S1", "R", "X")
        store.assign("D", "S2", "R", "X")

        assert [a.slot_id for a in store.allocations] == ["S2"]
        assert status_of(store, "X") == SessionStatus.SCHEDULED

    def test_speaker_unavailable(self, make_store, make_session, make_speaker):
        """Test hard speaker conflicts are refused with their explanation."""
        store = make_store(
            [make_session("X", speakers=("p1",))],
            speakers=[make_speaker("p1", unavailable={"S1"}, display_name="Jane Doe")],
        )
        with pytest.raises(SpeakerUnavailableError) as exc_info:
            store.assign("D", "S1", "R", "X")

        conflicts = exc_info.value.conflicts
        assert [c.speaker_label for c in conflicts] == ["Jane Doe"]
        assert conflicts[0].available_time_ranges == ["09:30-10:00"]
        assert store.allocations == []
        assert status_of(store, "X") == SessionStatus.ACCEPTED

    def test_speaker_conflicts_query(self, make_store, make_session, make_speaker):
        """Test conflicts can be queried without assigning."""
        store = make_store(
            [make_session("X", speakers=("p1",))],
            speakers=[make_speaker("p1", unavailable={"S2"})],
        )
        assert store.speaker_conflicts("X", "D", "S1") == []
        conflicts = store.speaker_conflicts("X", "D", "S2")
        assert conflicts[0].available_time_ranges == ["09:00-09:30"]

    def test_unknown_session(self, make_store):
        """Test unknown session id."""
        store = make_store([])
        with pytest.raises(UnknownSessionError):
            store.assign("D", "S1", "R", "missing")

    @pytest.mark.parametrize(
        "day_id,slot_id,room_id",
        [("D9", "S1", "R"), ("D", "S9", "R"), ("D", "S1", "R2")],
    )
    def test_unknown_slot(self, make_store, make_session, day_id, slot_id, room_id):
        """Test unknown day, slot or wrong room."""
        store = make_store([make_session("X")])
        with pytest.raises(UnknownSlotError):
            store.assign(day_id, slot_id, room_id, "X")

    def test_non_session_slot(self, make_store, make_session, make_slot, conference):
        """Test sessions cannot be placed in break slots."""
        conference.days[0].slots.append(
            make_slot("B", "10:00", "10:15", room_id="HALL", slot_type_id="break", session_type_id="")
        )
        store = make_store([make_session("X")])
        with pytest.raises(UnknownSlotError):
            store.assign("D", "B", "HALL", "X")

    def test_session_type_mismatch(self, make_store, make_session):
        """Test session type must match the slot session type."""
        store = make_store([make_session("W", session_type_id="workshop")])
        with pytest.raises(SessionTypeMismatchError):
            store.assign("D", "S1", "R", "W")
        assert status_of(store, "W") == SessionStatus.ACCEPTED

    def test_input_sessions_not_mutated(self, make_store, make_session):
        """Test the store works on copies of the given sessions."""
        session = make_session("X")
        store = make_store([session])
        store.assign("D", "S1", "R", "X")
        assert session.status == SessionStatus.ACCEPTED


class TestClear:
    """Tests for clear, clear_many and reset_day."""

    def test_clear_twice_is_noop(self, make_store, make_session):
        """Test clearing an already cleared allocation does nothing."""
        store = make_store([make_session("X")])
        allocation = store.assign("D", "S1", "R", "X")
        assert store.clear(allocation.id) != []
        assert store.clear(allocation.id) == []
        assert status_of(store, "X") == SessionStatus.ACCEPTED

    def test_clear_many_keeps_status_while_allocated(
        self, make_store, make_session, make_allocation
    ):
        """Test status is kept while another allocation of the session remains."""
        session = make_session("X", status=SessionStatus.SCHEDULED)
        rows = [make_allocation("a1", "S1", "X"), make_allocation("a2", "S2", "X")]
        store = make_store([session], allocations=rows)

        assert store.clear_many([rows[0]]) == []
        assert status_of(store, "X") == SessionStatus.SCHEDULED

        updated = store.clear_many([rows[1]])
        assert [s.id for s in updated] == ["X"]
        assert status_of(store, "X") == SessionStatus.ACCEPTED

    def test_clear_many_all_rows_of_session(self, make_store, make_session, make_allocation):
        """Test removing every row of a session rolls it back once."""
        session = make_session("X", status=SessionStatus.PROGRAMMED)
        rows = [make_allocation("a1", "S1", "X"), make_allocation("a2", "S2", "X")]
        store = make_store([session], allocations=rows)

        updated = store.clear_many(rows)
        assert [s.status for s in updated] == [SessionStatus.SPEAKER_CONFIRMED]
        assert store.allocations == []

    def test_clear_many_failure_rolls_back(
        self, make_store, make_session, make_allocation, monkeypatch
    ):
        """Test a failure part-way leaves rows and statuses untouched."""
        sessions = [
            make_session("X", status=SessionStatus.SCHEDULED),
            make_session("Y", speakers=("p2",), status=SessionStatus.SCHEDULED),
        ]
        rows = [make_allocation("a1", "S1", "X"), make_allocation("a2", "S2", "Y")]
        store = make_store(sessions, allocations=rows)

        original_delete = store._delete_allocation
        calls = []

        def failing_delete(allocation_id):
            calls.append(allocation_id)
            if len(calls) == 2:
                raise RuntimeError("storage failure")
            original_delete(allocation_id)

        monkeypatch.setattr(store, "_delete_allocation", failing_delete)

        with pytest.raises(RuntimeError):
            store.clear_many(rows)

        assert sorted(a.id for a in store.allocations) == ["a1", "a2"]
        assert status_of(store, "X") == SessionStatus.SCHEDULED
        assert status_of(store, "Y") == SessionStatus.SCHEDULED

    def test_clear_slots(self, make_store, make_session, make_allocation):
        """Test clearing by slot ids."""
        sessions = [
            make_session("X", status=SessionStatus.SCHEDULED),
            make_session("Y", speakers=("p2",), status=SessionStatus.SCHEDULED),
        ]
        rows = [make_allocation("a1", "S1", "X"), make_allocation("a2", "S2", "Y")]
        store = make_store(sessions, allocations=rows)

        store.clear_slots(["S2"])
        assert [a.id for a in store.allocations] == ["a1"]
        assert status_of(store, "Y") == SessionStatus.ACCEPTED

    def test_reset_day(self, make_store, make_session, make_allocation):
        """Test every allocation of the day is removed."""
        sessions = [
            make_session("X", status=SessionStatus.SCHEDULED),
            make_session("Y", speakers=("p2",), status=SessionStatus.PROGRAMMED),
        ]
        rows = [make_allocation("a1", "S1", "X"), make_allocation("a2", "S2", "Y")]
        store = make_store(sessions, allocations=rows)

        updated = store.reset_day("D")
        assert store.allocations == []
        assert {s.id: s.status for s in updated} == {
            "X": SessionStatus.ACCEPTED,
            "Y": SessionStatus.SPEAKER_CONFIRMED,
        }

    def test_reset_unknown_day(self, make_store, make_session):
        """Test resetting a day without allocations does nothing."""
        store = make_store([make_session("X")])
        assert store.reset_day("D9") == []


class TestApplySuggestions:
    """Tests for AllocationStore.apply_suggestions."""

    def test_applies_fresh_suggestions(self, make_store, make_session):
        """Test suggestions are written through assign."""
        store = make_store([make_session("X"), make_session("Y", speakers=("p2",))])
        report = store.apply_suggestions(
            [
                Suggestion(day_id="D", slot_id="S1", room_id="R", session_id="X"),
                Suggestion(day_id="D", slot_id="S2", room_id="R", session_id="Y"),
            ]
        )
        assert report.total_applied == 2
        assert report.total_skipped == 0
        assert status_of(store, "X") == SessionStatus.SCHEDULED
        assert status_of(store, "Y") == SessionStatus.SCHEDULED

    def test_skips_stale_suggestions(self, make_store, make_session):
        """Test suggestions made stale since computation are skipped."""
        store = make_store(
            [
                make_session("X"),
                make_session("Y", speakers=("p2",)),
                make_session("Z", speakers=("p3",), status=SessionStatus.REJECTED),
            ]
        )
        store.assign("D", "S1", "R", "X")

        report = store.apply_suggestions(
            [
                Suggestion(day_id="D", slot_id="S2", room_id="R", session_id="X"),
                Suggestion(day_id="D", slot_id="S1", room_id="R", session_id="Y"),
                Suggestion(day_id="D", slot_id="S2", room_id="R", session_id="Z"),
                Suggestion(day_id="D", slot_id="S2", room_id="R", session_id="missing"),
            ]
        )

        assert report.total_applied == 0
        assert [s.reason for s in report.skipped] == [
            "session status is SCHEDULED",
            "slot already allocated",
            "session status is REJECTED",
            "unknown session",
        ]
        assert [a.session_id for a in store.allocations] == ["X"]

    def test_skips_conflicting_suggestion(self, make_store, make_session, make_speaker):
        """Test suggestions rejected by assign are reported, others applied."""
        store = make_store(
            [make_session("X", speakers=("p1",)), make_session("Y", speakers=("p2",))],
            speakers=[make_speaker("p1", unavailable={"S1"})],
        )
        report = store.apply_suggestions(
            [
                Suggestion(day_id="D", slot_id="S1", room_id="R", session_id="X"),
                Suggestion(day_id="D", slot_id="S2", room_id="R", session_id="Y"),
            ]
        )
        assert report.total_applied == 1
        assert report.skipped[0].suggestion.session_id == "X"
        assert "unavailable" in report.skipped[0].reason
