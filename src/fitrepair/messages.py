"""
Message, sample and lap segment types passed between the repair stages.

Every type here is immutable. Stages build new values instead of updating
the ones they receive, so a failed repair never leaves a half-modified input
behind.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Tuple

from fitrepair.constants import RECORD_FIELD_ORDER


class MessageKind(Enum):
    """Kinds of FIT messages the repair pipeline distinguishes."""

    FILE_ID = "file_id"
    RECORD = "record"
    LAP = "lap"
    SESSION = "session"
    ACTIVITY = "activity"
    EVENT = "event"
    OTHER = "other"

    @classmethod
    def from_name(cls, name: str) -> "MessageKind":
        """Map a FIT message name to its kind, OTHER for anything unrecognized."""
        try:
            kind = cls(name)
        except ValueError:
            return cls.OTHER
        return kind


@dataclass(frozen=True)
class Message:
    """One decoded FIT message: its kind, FIT name and field values."""

    kind: MessageKind
    name: str
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @classmethod
    def create(cls, name: str, fields: Mapping[str, Any]) -> "Message":
        """Build a message from a decoded FIT message name and its fields."""
        return cls(MessageKind.from_name(name), name, fields)

    def get(self, name: str, default: Any = None) -> Any:
        """Return a field value, or default when the field is absent."""
        return self.fields.get(name, default)


def field_sort_key(name: str, field_order: Mapping[str, int] = RECORD_FIELD_ORDER):
    """Sort key placing catalog fields by field number, then unknown fields by name."""
    if name in field_order:
        return (0, field_order[name], "")
    return (1, 0, name)


def _ordered_values(
    values: Iterable[Tuple[str, Any]], field_order: Mapping[str, int]
) -> Tuple[Tuple[str, Any], ...]:
    return tuple(sorted(values, key=lambda item: field_sort_key(item[0], field_order)))


@dataclass(frozen=True)
class Sample:
    """A record reading at one timestamp.

    ``values`` only holds fields that are set, ordered by the field catalog.
    A field missing from ``values`` is unset, which is different from a field
    set to zero.
    """

    timestamp: int
    values: Tuple[Tuple[str, Any], ...] = ()

    @classmethod
    def from_message(
        cls, message: Message, field_order: Mapping[str, int] = RECORD_FIELD_ORDER
    ) -> "Sample":
        """Create a sample from a record message, dropping unset fields."""
        values = [
            (name, value)
            for name, value in message.fields.items()
            if name != "timestamp" and value is not None
        ]
        return cls(int(message.fields["timestamp"]), _ordered_values(values, field_order))

    @property
    def field_names(self) -> Tuple[str, ...]:
        """Names of the fields set on this sample, in emission order."""
        return tuple(name for name, _ in self.values)

    def is_set(self, name: str) -> bool:
        """Check whether a field carries a value."""
        return any(key == name for key, _ in self.values)

    def get(self, name: str, default: Any = None) -> Any:
        """Return a field value, or default when the field is unset."""
        for key, value in self.values:
            if key == name:
                return value
        return default

    def merge_missing(
        self, other: "Sample", field_order: Mapping[str, int] = RECORD_FIELD_ORDER
    ) -> "Sample":
        """Return a new sample with unset fields filled from ``other``.

        Fields already set on this sample are never overwritten.
        """
        current = dict(self.values)
        added = [(name, value) for name, value in other.values if name not in current]
        if not added:
            return self
        return Sample(self.timestamp, _ordered_values(self.values + tuple(added), field_order))

    def to_message(self, field_order: Mapping[str, int] = RECORD_FIELD_ORDER) -> Message:
        """Convert back into a record message with fields in catalog order."""
        items = _ordered_values(self.values + (("timestamp", self.timestamp),), field_order)
        return Message(MessageKind.RECORD, MessageKind.RECORD.value, dict(items))


@dataclass(frozen=True)
class Segment:
    """A run of consecutive samples without a pause: one active lap."""

    index: int
    samples: Tuple[Sample, ...]
    average_intensity: float = 0.0

    @property
    def start_time(self) -> int:
        return self.samples[0].timestamp

    @property
    def end_time(self) -> int:
        return self.samples[-1].timestamp

    @property
    def active_time(self) -> int:
        """Seconds between the first and last sample."""
        return self.end_time - self.start_time


@dataclass(frozen=True)
class ClassifiedMessages:
    """Input messages partitioned by kind."""

    file_id: Message
    lap: Message
    session: Message
    samples: Tuple[Sample, ...]
    passthrough: Tuple[Message, ...] = ()
