"""Time and label helpers shared by the planning engine."""

import random
import re
import string

from .constants import MINUTES_PER_DAY, SLOT_ID_LENGTH, SLOT_ID_PREFIX

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time(value: str | None) -> int | None:
    """Convert an ``HH:mm`` time of day into minutes since midnight.

    Args:
        value: Time string like "09:30"

    Returns:
        Minutes since midnight, or None when the value is not a valid time
    """
    if not value:
        return None
    match = _TIME_PATTERN.match(value.strip())
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours * 60 + minutes


def format_minutes(minutes: int) -> str:
    """Format minutes since midnight as ``HH:mm`` (wrapping past midnight)."""
    clamped = max(0, int(minutes)) % MINUTES_PER_DAY
    return f"{clamped // 60:02d}:{clamped % 60:02d}"


def compute_end_time(start_time: str, duration: int) -> str:
    """Compute the end time of a slot starting at ``start_time``.

    Args:
        start_time: Start time "HH:mm"
        duration: Duration in minutes

    Returns:
        End time "HH:mm"

    Raises:
        ValueError: If start_time is not a valid time
    """
    start = parse_time(start_time)
    if start is None:
        raise ValueError(f"Invalid time: {start_time!r}")
    return format_minutes(start + duration)


def minutes_between(start_time: str, end_time: str) -> int | None:
    """Number of minutes from start_time to end_time, None if either is invalid."""
    start = parse_time(start_time)
    end = parse_time(end_time)
    if start is None or end is None:
        return None
    return end - start


def format_time_range(start_time: str, end_time: str) -> str:
    """Format a slot time range as ``HH:mm-HH:mm``."""
    return f"{start_time}-{end_time}"


def format_speaker_label(
    last_name: str | None = None,
    first_name: str | None = None,
    company: str | None = None,
) -> str:
    """Build the display label of a speaker.

    Examples:
        format_speaker_label("Doe", "Jane", "ACME") -> "Doe Jane (ACME)"
        format_speaker_label("Doe", "Jane") -> "Doe Jane"
    """
    full_name = " ".join([last_name or "", first_name or ""]).strip()
    if not full_name:
        return ""
    company_part = (company or "").strip()
    return f"{full_name} ({company_part})" if company_part else full_name


def generate_slot_id(rng: random.Random | None = None) -> str:
    """Generate a slot id like ``s4f9k2zq``."""
    chooser = rng or random
    alphabet = string.digits + string.ascii_lowercase
    suffix = "".join(chooser.choice(alphabet) for _ in range(SLOT_ID_LENGTH))
    return f"{SLOT_ID_PREFIX}{suffix}"


def normalize_key(value: str | None) -> str:
    """Normalize an identifier for case-insensitive lookups."""
    return str(value or "").strip().lower()
