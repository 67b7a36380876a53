"""Tests for speaker availability helpers."""

from conference_planner.planning.availability import (
    available_time_ranges,
    find_speaker_conflicts,
    has_constrained_speaker,
    has_unavailable_speaker,
    index_speakers,
    unavailable_slot_ids,
)


class TestIndexSpeakers:
    """Tests for index_speakers function."""

    def test_first_record_wins(self, make_speaker):
        """Test duplicate person ids keep the first record."""
        first = make_speaker("p1", unavailable={"S1"})
        second = make_speaker("p1")
        assert index_speakers([first, second])["p1"] is first

    def test_empty_person_id_ignored(self, make_speaker):
        """Test records without person id are ignored."""
        assert index_speakers([make_speaker("")]) == {}


class TestUnavailability:
    """Tests for unavailability checks."""

    def test_has_unavailable_speaker(self, make_session, make_speaker):
        """Test any unavailable speaker blocks the slot."""
        session = make_session("X", speakers=("p1", "p2"))
        speakers = index_speakers([make_speaker("p1"), make_speaker("p2", unavailable={"S2"})])
        assert has_unavailable_speaker(session, "S2", speakers)
        assert not has_unavailable_speaker(session, "S1", speakers)

    def test_unknown_speaker_is_available(self, make_session):
        """Test speakers without conference record are always available."""
        assert not has_unavailable_speaker(make_session("X", speakers=("ghost",)), "S1", {})

    def test_has_constrained_speaker(self, make_session, make_speaker):
        """Test a speaker with any unavailability is constrained."""
        speakers = index_speakers([make_speaker("p1", unavailable={"ELSEWHERE"})])
        assert has_constrained_speaker(make_session("X", speakers=("p2", "p1")), speakers)
        assert not has_constrained_speaker(make_session("Y", speakers=("p2",)), speakers)


class TestSpeakerConflicts:
    """Tests for find_speaker_conflicts and available_time_ranges."""

    def test_available_time_ranges(self, make_slot, day, slot_types):
        """Test session slot ranges outside the unavailable set, sorted and unique."""
        day.slots.append(make_slot("P1", "09:00", "09:30", room_id="R2"))
        day.slots.append(
            make_slot("B", "10:00", "10:15", room_id="HALL", slot_type_id="break", session_type_id="")
        )
        assert available_time_ranges(day, {"S2"}, slot_types) == ["09:00-09:30"]
        assert available_time_ranges(day, set(), slot_types) == ["09:00-09:30", "09:30-10:00"]

    def test_conflicts(self, make_session, make_speaker, day, slot_types):
        """Test one conflict per unavailable speaker with open ranges."""
        session = make_session("X", speakers=("p1", "p2", "p3"))
        speakers = [
            make_speaker("p1", unavailable={"S1"}, display_name="Jane Doe"),
            make_speaker("p2"),
            make_speaker("p3", unavailable={"S1", "S2"}),
        ]
        conflicts = find_speaker_conflicts(session, day, day.slots[0], speakers, slot_types)
        assert [(c.speaker_label, c.available_time_ranges) for c in conflicts] == [
            ("Jane Doe", ["09:30-10:00"]),
            ("p3", []),
        ]

    def test_no_conflict(self, make_session, make_speaker, day, slot_types):
        """Test an available slot has no conflicts."""
        session = make_session("X", speakers=("p1",))
        speakers = [make_speaker("p1", unavailable={"S1"})]
        assert find_speaker_conflicts(session, day, day.slots[1], speakers, slot_types) == []


class TestUnavailableSlotIds:
    """Tests for unavailable_slot_ids function."""

    def test_whole_day_available(self, day):
        """Test days not listed are fully available."""
        assert unavailable_slot_ids([day], {}) == []

    def test_whole_day_unavailable(self, day):
        """Test None marks every slot of the day unavailable."""
        assert unavailable_slot_ids([day], {"D": None}) == ["S1", "S2"]

    def test_partial_range(self, day):
        """Test slots not entirely inside the range are unavailable."""
        assert unavailable_slot_ids([day], {"D": (9 * 60 + 30, 12 * 60)}) == ["S1"]
        assert unavailable_slot_ids([day], {"D": (9 * 60 + 15, 12 * 60)}) == ["S1"]

    def test_range_clamped_to_day(self, day):
        """Test ranges are clamped to the day bounds and may be given reversed."""
        assert unavailable_slot_ids([day], {"D": (20 * 60, 6 * 60)}) == []
