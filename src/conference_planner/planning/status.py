"""Session status transitions caused by allocation changes."""

from ..models import SessionStatus

# Forward transitions applied when a session is placed in a slot
_AFTER_ALLOCATION = {
    SessionStatus.ACCEPTED: SessionStatus.SCHEDULED,
    SessionStatus.SPEAKER_CONFIRMED: SessionStatus.PROGRAMMED,
}

# Backward transitions applied when a session no longer has any slot
_AFTER_DEALLOCATION = {
    SessionStatus.SCHEDULED: SessionStatus.ACCEPTED,
    SessionStatus.PROGRAMMED: SessionStatus.SPEAKER_CONFIRMED,
}


def status_after_allocation(status: SessionStatus) -> SessionStatus | None:
    """Status a session takes once allocated, None if it keeps its status."""
    return _AFTER_ALLOCATION.get(status)


def status_after_deallocation(status: SessionStatus) -> SessionStatus | None:
    """Status a session takes once its last allocation is removed, None if unchanged."""
    return _AFTER_DEALLOCATION.get(status)
