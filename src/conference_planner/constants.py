"""Constants for the conference planner."""

# Minutes in a day, for wrapping times of day
MINUTES_PER_DAY = 24 * 60

# Day bounds used when a day does not declare them
DEFAULT_DAY_BEGIN = "09:00"
DEFAULT_DAY_END = "18:00"

# Slot duration bounds (minutes)
MIN_SLOT_DURATION = 0
MAX_SLOT_DURATION = 1000

# Session statuses a session must have to be placed in the planning
ELIGIBLE_STATUSES = frozenset({"ACCEPTED", "SPEAKER_CONFIRMED"})

# Statistics buckets
CONFIRMED_STATUSES = frozenset({"SPEAKER_CONFIRMED", "PROGRAMMED"})
ALLOCATED_STATUSES = frozenset({"SCHEDULED", "PROGRAMMED"})
SPEAKER_COUNT_STATUSES = frozenset(
    {"ACCEPTED", "SPEAKER_CONFIRMED", "PROGRAMMED", "SCHEDULED"}
)
UNKNOWN_SESSION_TYPE_ID = "__unknown__"

# Keyword search only applies from this many characters
MIN_KEYWORD_LENGTH = 3

# Prefix of generated slot ids
SLOT_ID_PREFIX = "s"
SLOT_ID_LENGTH = 7

# Global slot types used when the snapshot does not provide any
DEFAULT_SLOT_TYPES = [
    {
        "id": "session",
        "isSession": True,
        "name": {"EN": "Session", "FR": "Session"},
        "icon": "mic",
        "color": "#cfe9ff",
    },
    {
        "id": "break",
        "isSession": False,
        "name": {"EN": "Break", "FR": "Pause"},
        "icon": "coffee",
        "color": "#e0e0e0",
    },
    {
        "id": "lunch",
        "isSession": False,
        "name": {"EN": "Lunch", "FR": "Déjeuner"},
        "icon": "utensils",
        "color": "#f0f8ff",
    },
    {
        "id": "activity",
        "isSession": False,
        "name": {"EN": "Activity", "FR": "Activité"},
        "icon": "utensils",
        "color": "#f0f8ff",
    },
]

# Snapshot file names
CONFERENCE_FILE = "conference.json"
SESSIONS_FILE = "sessions.json"
ALLOCATIONS_FILE = "allocations.json"
SPEAKERS_FILE = "speakers.json"
SLOT_TYPES_FILE = "slot-types.json"
