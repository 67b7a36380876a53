"""Snapshot loading for the planning engine."""

from .conference import ConferenceConfig
from .loader import SnapshotLoader
from .sessions import SessionConfig
from .speakers import SlotTypeConfig, SpeakerConfig

__all__ = [
    "ConferenceConfig",
    "SessionConfig",
    "SlotTypeConfig",
    "SnapshotLoader",
    "SpeakerConfig",
]
