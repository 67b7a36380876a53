"""Authoritative set of session allocations of a conference."""

import copy
import logging
import threading
import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime, timezone

from ..exceptions import (
    AllocationError,
    SessionTypeMismatchError,
    SpeakerUnavailableError,
    UnknownSessionError,
    UnknownSlotError,
)
from ..models import (
    ApplyReport,
    Conference,
    ConferenceSpeaker,
    Day,
    Session,
    SessionAllocation,
    SessionStatus,
    SkippedSuggestion,
    Slot,
    SlotType,
    SpeakerConflict,
    Suggestion,
    default_slot_types,
)
from .availability import find_speaker_conflicts
from .status import status_after_allocation, status_after_deallocation

logger = logging.getLogger(__name__)


def _new_allocation_id() -> str:
    return uuid.uuid4().hex


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class AllocationStore:
    """Maps (day, slot, room) to sessions and keeps session statuses in step.

    The store works on its own copies of the sessions and allocations it is
    given. Every mutating operation runs as one transaction: it holds the
    store lock and, if any step fails, every allocation row and session
    status it touched is restored before the error propagates.

    Invariants:
    - at most one allocation per (day, slot, room) is written by ``assign``
    - a session assigned through ``assign`` occupies exactly one slot
    - a session status is rolled back only when no allocation of the
      session remains
    """

    def __init__(
        self,
        conference: Conference,
        sessions: list[Session],
        allocations: list[SessionAllocation] | None = None,
        speakers: list[ConferenceSpeaker] | None = None,
        slot_types: list[SlotType] | None = None,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], str] | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            conference: Conference planning structure
            sessions: Sessions of the conference
            allocations: Existing allocation rows
            speakers: Conference speakers with their unavailable slots
            slot_types: Global slot types (defaults to the built-in list)
            id_factory: Generates ids for new allocation rows
            clock: Returns the ISO timestamp stored in ``last_updated``
        """
        self.conference = conference
        self.speakers = list(speakers or [])
        self.slot_types = list(slot_types) if slot_types is not None else default_slot_types()
        self._id_factory = id_factory or _new_allocation_id
        self._clock = clock or _utc_now
        self._lock = threading.RLock()

        self._sessions: dict[str, Session] = {
            session.id: copy.deepcopy(session) for session in sessions if session.id
        }
        self._allocations: dict[str, SessionAllocation] = {}
        for allocation in allocations or []:
            allocation_id = allocation.id or self._id_factory()
            self._allocations[allocation_id] = replace(allocation, id=allocation_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def sessions(self) -> list[Session]:
        return list(self._sessions.values())

    @property
    def allocations(self) -> list[SessionAllocation]:
        return list(self._allocations.values())

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def allocation_at(self, day_id: str, slot_id: str, room_id: str) -> SessionAllocation | None:
        """Get the allocation of a (day, slot, room), if any."""
        key = (day_id, slot_id, room_id)
        for allocation in self._allocations.values():
            if allocation.slot_key == key:
                return allocation
        return None

    def allocation_for_session(self, session_id: str) -> SessionAllocation | None:
        """Get the allocation of a session, if any."""
        for allocation in self._allocations.values():
            if allocation.session_id == session_id:
                return allocation
        return None

    def speaker_conflicts(self, session_id: str, day_id: str, slot_id: str) -> list[SpeakerConflict]:
        """Explain which speakers of a session cannot attend a slot."""
        session = self._require_session(session_id)
        day = self.conference.get_day(day_id)
        slot = day.get_slot(slot_id) if day else None
        if day is None or slot is None:
            raise UnknownSlotError(day_id, slot_id, "")
        return find_speaker_conflicts(session, day, slot, self.speakers, self.slot_types)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def assign(self, day_id: str, slot_id: str, room_id: str, session_id: str) -> SessionAllocation:
        """Place a session in a slot.

        A session already in the target slot is replaced (and its status
        rolled back when it has no other slot). A session already placed
        elsewhere is moved. The placed session's status moves forward
        (ACCEPTED -> SCHEDULED, SPEAKER_CONFIRMED -> PROGRAMMED).

        Args:
            day_id: Day of the slot
            slot_id: Slot id
            room_id: Room of the slot
            session_id: Session to place

        Returns:
            The allocation row of the session

        Raises:
            UnknownSessionError: Session does not exist
            UnknownSlotError: Slot does not exist or is not a session slot
            SessionTypeMismatchError: Session type differs from the slot's
            SpeakerUnavailableError: A speaker cannot attend the slot
        """
        with self._transaction():
            session = self._require_session(session_id)
            day, slot = self._require_session_slot(day_id, slot_id, room_id)

            if session.session_type_id != slot.session_type_id:
                raise SessionTypeMismatchError(
                    session_id, session.session_type_id, slot.session_type_id
                )

            key = (day_id, slot_id, room_id)
            at_slot = [a for a in self._allocations.values() if a.slot_key == key]
            own = next((a for a in at_slot if a.session_id == session_id), None)
            if own is not None and len(at_slot) == 1:
                return own

            conflicts = find_speaker_conflicts(session, day, slot, self.speakers, self.slot_types)
            if conflicts:
                raise SpeakerUnavailableError(session_id, slot_id, conflicts)

            replaced = [a for a in at_slot if a.session_id != session_id]
            if replaced:
                self._remove_allocations(replaced)

            for previous in [a for a in self._allocations.values() if a.session_id == session_id]:
                self._delete_allocation(previous.id)

            reused = own or (at_slot[0] if at_slot else None)
            allocation = SessionAllocation(
                id=reused.id if reused is not None else self._id_factory(),
                conference_id=self.conference.id,
                day_id=day_id,
                slot_id=slot_id,
                room_id=room_id,
                session_id=session_id,
                last_updated=self._clock(),
            )
            self._allocations[allocation.id] = allocation

            next_status = status_after_allocation(session.status)
            if next_status is not None:
                self._save_session(self._with_status(session, next_status))

            logger.debug(f"Assigned session {session_id} to {day_id}/{slot_id}/{room_id}")
            return allocation

    def clear(self, allocation_id: str) -> list[Session]:
        """Remove one allocation row.

        Clearing an unknown (or already cleared) allocation does nothing.

        Returns:
            Sessions whose status was rolled back
        """
        allocation = self._allocations.get(allocation_id)
        if allocation is None:
            return []
        return self.clear_many([allocation])

    def clear_many(self, allocations: list[SessionAllocation]) -> list[Session]:
        """Remove several allocation rows at once.

        A session's status is rolled back only if no allocation outside the
        removed set still references it.

        Returns:
            Sessions whose status was rolled back
        """
        with self._transaction():
            rows = [self._allocations[a.id] for a in allocations if a.id in self._allocations]
            if not rows:
                return []
            updated = self._remove_allocations(rows)
            logger.debug(f"Cleared {len(rows)} allocations, {len(updated)} statuses rolled back")
            return updated

    def clear_slots(self, slot_ids: list[str]) -> list[Session]:
        """Remove every allocation placed on the given slots."""
        slot_id_set = set(slot_ids)
        return self.clear_many([a for a in self.allocations if a.slot_id in slot_id_set])

    def reset_day(self, day_id: str) -> list[Session]:
        """Remove every allocation of a day."""
        rows = [a for a in self.allocations if a.day_id == day_id]
        updated = self.clear_many(rows)
        logger.info(f"Reset day {day_id}: removed {len(rows)} allocations")
        return updated

    def apply_suggestions(self, suggestions: list[Suggestion]) -> ApplyReport:
        """Apply auto-allocator suggestions to the live store.

        Each suggestion is re-checked when applied; suggestions made stale by
        changes since they were computed are skipped and reported.
        """
        report = ApplyReport()
        for suggestion in suggestions:
            reason = self._stale_reason(suggestion)
            if reason is None:
                try:
                    allocation = self.assign(
                        suggestion.day_id,
                        suggestion.slot_id,
                        suggestion.room_id,
                        suggestion.session_id,
                    )
                except AllocationError as exc:
                    reason = str(exc)
                else:
                    report.applied.append(allocation)
                    continue

            logger.warning(f"Skipped suggestion for session {suggestion.session_id}: {reason}")
            report.skipped.append(SkippedSuggestion(suggestion=suggestion, reason=reason))

        logger.info(
            f"Applied {report.total_applied} suggestions, skipped {report.total_skipped}"
        )
        return report

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        with self._lock:
            sessions_backup = dict(self._sessions)
            allocations_backup = dict(self._allocations)
            try:
                yield
            except Exception:
                self._sessions = sessions_backup
                self._allocations = allocations_backup
                raise

    def _require_session(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None or session.conference is None:
            raise UnknownSessionError(session_id)
        return session

    def _require_session_slot(self, day_id: str, slot_id: str, room_id: str) -> tuple[Day, Slot]:
        day = self.conference.get_day(day_id)
        if day is None:
            raise UnknownSlotError(day_id, slot_id, room_id, "unknown day")
        slot = day.get_slot(slot_id)
        if slot is None:
            raise UnknownSlotError(day_id, slot_id, room_id, "unknown slot")
        if slot.room_id != room_id:
            raise UnknownSlotError(day_id, slot_id, room_id, f"slot is in room '{slot.room_id}'")
        slot_type = next((t for t in self.slot_types if t.id == slot.slot_type_id), None)
        if slot_type is None or not slot_type.is_session:
            raise UnknownSlotError(day_id, slot_id, room_id, "not a session slot")
        return day, slot

    def _stale_reason(self, suggestion: Suggestion) -> str | None:
        session = self._sessions.get(suggestion.session_id)
        if session is None:
            return "unknown session"
        if not session.is_eligible:
            status = session.status.value if session.status else "none"
            return f"session status is {status}"
        if self.allocation_for_session(suggestion.session_id) is not None:
            return "session already allocated"
        if self.allocation_at(suggestion.day_id, suggestion.slot_id, suggestion.room_id):
            return "slot already allocated"
        return None

    def _remove_allocations(self, rows: list[SessionAllocation]) -> list[Session]:
        removed_ids = {row.id for row in rows}
        updated: list[Session] = []

        for session_id in dict.fromkeys(row.session_id for row in rows if row.session_id):
            still_allocated = any(
                a.session_id == session_id and a.id not in removed_ids
                for a in self._allocations.values()
            )
            if still_allocated:
                continue
            session = self._sessions.get(session_id)
            if session is None or session.conference is None:
                continue
            next_status = status_after_deallocation(session.status)
            if next_status is None:
                continue
            updated.append(self._save_session(self._with_status(session, next_status)))

        for allocation_id in removed_ids:
            self._delete_allocation(allocation_id)
        return updated

    def _delete_allocation(self, allocation_id: str) -> None:
        del self._allocations[allocation_id]

    def _save_session(self, session: Session) -> Session:
        self._sessions[session.id] = session
        return session

    @staticmethod
    def _with_status(session: Session, status: SessionStatus) -> Session:
        return replace(session, conference=replace(session.conference, status=status))
