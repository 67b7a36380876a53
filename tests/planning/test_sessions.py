"""Tests for session pool queries."""

from conference_planner.models import SessionStatus
from conference_planner.planning.sessions import (
    eligible_sessions,
    matches_keyword,
    unallocated_sessions,
)


class TestEligibleSessions:
    """Tests for eligible_sessions function."""

    def test_filters_status_and_allocation(self, make_session, make_allocation):
        """Test allocated and ineligible sessions are excluded, order kept."""
        sessions = [
            make_session("c"),
            make_session("a", status=SessionStatus.SPEAKER_CONFIRMED),
            make_session("b", status=SessionStatus.WAITLISTED),
            make_session("d"),
        ]
        result = eligible_sessions(sessions, [make_allocation("x", "S1", "d")])
        assert [s.id for s in result] == ["c", "a"]


class TestMatchesKeyword:
    """Tests for matches_keyword function."""

    def test_short_keyword_matches_all(self, make_session):
        """Test keywords under three characters are ignored."""
        assert matches_keyword(make_session("x", title="Kotlin"), "zz")

    def test_case_insensitive(self, make_session):
        """Test keyword match ignores case."""
        session = make_session("x", title="Deep Dive into Python")
        session.search = session.title.lower()
        assert matches_keyword(session, "PYTH")
        assert not matches_keyword(session, "rust")


class TestUnallocatedSessions:
    """Tests for unallocated_sessions function."""

    def _sessions(self, make_session):
        return [
            make_session("1", title="zeta", track_id="web"),
            make_session("2", speakers=("p2",), title="Alpha", session_type_id="workshop"),
            make_session("3", speakers=("p3",), title="beta", track_id="data"),
        ]

    def test_sorted_by_title(self, make_session):
        """Test results are sorted by title, case-insensitively."""
        result = unallocated_sessions(self._sessions(make_session), [])
        assert [s.title for s in result] == ["Alpha", "beta", "zeta"]

    def test_filters(self, make_session, make_speaker):
        """Test type, track, unavailability and keyword filters."""
        sessions = self._sessions(make_session)
        speakers = [make_speaker("p3", unavailable={"S1"})]

        assert [s.id for s in unallocated_sessions(sessions, [], session_type_ids=["workshop"])] == ["2"]
        assert [s.id for s in unallocated_sessions(sessions, [], track_ids=["web", "data"])] == ["3", "1"]
        assert [
            s.id for s in unallocated_sessions(sessions, [], speakers, with_unavailability=True)
        ] == ["3"]
        assert [s.id for s in unallocated_sessions(sessions, [], keyword="zet")] == ["1"]
