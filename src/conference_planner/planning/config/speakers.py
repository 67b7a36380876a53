"""Conference speaker and slot type loaders."""

from pathlib import Path

from ...exceptions import InvalidSnapshotError
from ...models import ConferenceSpeaker, SlotType, default_slot_types
from ...utils import format_speaker_label
from .files import read_json_list


class SpeakerConfig:
    """Loader for speakers.json.

    Records follow the ConferenceSpeaker layout. The display name is taken
    from ``displayName`` or built from ``lastName``, ``firstName`` and
    ``company`` when present.
    """

    def __init__(self, speakers_path: Path | None = None):
        self.speakers: list[ConferenceSpeaker] = []
        if speakers_path is not None:
            self._load(speakers_path)

    def _load(self, path: Path) -> None:
        for record in read_json_list(path):
            try:
                speaker = ConferenceSpeaker.from_dict(record)
            except (TypeError, ValueError) as exc:
                raise InvalidSnapshotError(str(path), f"malformed speaker ({exc})") from exc
            if not speaker.display_name:
                speaker.display_name = format_speaker_label(
                    record.get("lastName"), record.get("firstName"), record.get("company")
                )
            self.speakers.append(speaker)

    def get_speaker(self, person_id: str) -> ConferenceSpeaker | None:
        """Get a conference speaker by person id."""
        for speaker in self.speakers:
            if speaker.person_id == person_id:
                return speaker
        return None


class SlotTypeConfig:
    """Loader for slot-types.json, falling back to the default slot types."""

    def __init__(self, slot_types_path: Path | None = None):
        records = read_json_list(slot_types_path)
        try:
            self.slot_types: list[SlotType] = (
                [SlotType.from_dict(r) for r in records] if records else default_slot_types()
            )
        except (KeyError, TypeError) as exc:
            raise InvalidSnapshotError(str(slot_types_path), f"malformed slot type ({exc})") from exc

    def get_session_slot_types(self) -> list[SlotType]:
        """Get the slot types that hold sessions."""
        return [t for t in self.slot_types if t.is_session]
