"""
FIT file decoding and encoding around the repair pipeline.

Decoding uses fitparse, with a data processor that keeps ``date_time`` fields
as integer Unix timestamps instead of datetime objects. Encoding builds
fit_tool profile messages from the repaired messages.
"""

import logging
import math
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Union

from fit_tool.exceptions import FitEncodingError
from fit_tool.fit_file_builder import FitFileBuilder
from fit_tool.profile import profile_type
from fit_tool.profile.messages.activity_message import ActivityMessage
from fit_tool.profile.messages.device_info_message import DeviceInfoMessage
from fit_tool.profile.messages.event_message import EventMessage
from fit_tool.profile.messages.file_id_message import FileIdMessage
from fit_tool.profile.messages.lap_message import LapMessage
from fit_tool.profile.messages.record_message import RecordMessage
from fit_tool.profile.messages.session_message import SessionMessage
from fit_tool.profile.messages.sport_message import SportMessage
from fit_tool.profile.messages.user_profile_message import UserProfileMessage
from fit_tool.profile.messages.zones_target_message import ZonesTargetMessage
from fitparse import FitFile, FitParseError
from fitparse.processors import FitFileDataProcessor

from fitrepair.constants import TIMESTAMP_FIELDS
from fitrepair.exceptions import FitFileCorruptedError, FitFileError, FitFileNotFoundError
from fitrepair.messages import Message, MessageKind

logger = logging.getLogger(__name__)

__all__ = [
    "EpochSecondsDataProcessor",
    "decode_fit_file",
    "encode_messages",
    "write_fit_file",
    "whole_calories",
]

# Seconds between the Unix epoch and the FIT epoch (1989-12-31T00:00:00Z)
FIT_EPOCH_OFFSET = 631065600

# FIT date_time values below this are relative to device power-on
_MIN_ABSOLUTE_DATE_TIME = 0x10000000

_SEMICIRCLES_TO_DEGREES = 180.0 / 2**31
_SEMICIRCLE_FIELDS = frozenset({"position_lat", "position_long"})

_ROUNDED_FIELDS = frozenset({"total_calories"})

_MESSAGE_TYPES = {
    "file_id": FileIdMessage,
    "record": RecordMessage,
    "event": EventMessage,
    "lap": LapMessage,
    "session": SessionMessage,
    "activity": ActivityMessage,
    "device_info": DeviceInfoMessage,
    "sport": SportMessage,
    "user_profile": UserProfileMessage,
    "zones_target": ZonesTargetMessage,
}

# fit_tool profile type used for enum fields, by (message, field) or field
_ENUM_TYPES = {
    ("file_id", "type"): "FileType",
    ("activity", "type"): "Activity",
    ("session", "trigger"): "SessionTrigger",
    "sport": "Sport",
    "sub_sport": "SubSport",
    "event": "Event",
    "event_type": "EventType",
    "timer_trigger": "TimerTrigger",
    "intensity": "Intensity",
    "lap_trigger": "LapTrigger",
    "manufacturer": "Manufacturer",
    "source_type": "SourceType",
}


class EpochSecondsDataProcessor(FitFileDataProcessor):
    """fitparse data processor that keeps date_time fields as Unix seconds."""

    def process_type_date_time(self, field_data):
        """Convert FIT date_time to integer Unix seconds"""
        value = field_data.value
        if value is not None and value >= _MIN_ABSOLUTE_DATE_TIME:
            field_data.value = FIT_EPOCH_OFFSET + value
            field_data.units = "s"

    def process_type_local_date_time(self, field_data):
        """Convert FIT local_date_time to integer seconds on the Unix scale"""
        if field_data.value is not None:
            field_data.value = FIT_EPOCH_OFFSET + field_data.value
            field_data.units = "s"


def decode_fit_file(path: Union[str, Path]) -> List[Message]:
    """Decode a FIT file into messages in file order.

    The file's CRC is checked while reading.

    Args:
        path: Path to the FIT file.

    Returns:
        One Message per data message in the file.

    Raises:
        FitFileNotFoundError: The file does not exist.
        FitFileCorruptedError: The file fails its integrity check or cannot be decoded.
    """
    path = Path(path)
    if not path.is_file():
        raise FitFileNotFoundError(f"FIT file not found: {path}")

    try:
        ff = FitFile(str(path), check_crc=True, data_processor=EpochSecondsDataProcessor())
        messages = [
            Message.create(m.name, {d.name: d.value for d in m}) for m in ff.get_messages()
        ]
    except FitParseError as exc:
        raise FitFileCorruptedError(f"Cannot decode {path}: {exc}") from exc

    logger.debug("Decoded %d messages from %s", len(messages), path)
    return messages


def _enum_value(message_name: str, field_name: str, value: str) -> Optional[Enum]:
    type_name = _ENUM_TYPES.get((message_name, field_name)) or _ENUM_TYPES.get(field_name)
    enum_type = getattr(profile_type, type_name, None) if type_name else None
    if enum_type is None:
        return None
    return enum_type.__members__.get(value.upper())


def _encode_value(message_name: str, field_name: str, value: Any) -> Any:
    """Convert a decoded field value into what fit_tool expects, None if impossible."""
    if isinstance(value, str):
        return _enum_value(message_name, field_name, value)
    if isinstance(value, tuple):
        return list(value)
    if field_name in TIMESTAMP_FIELDS:
        return int(value) * 1000
    if field_name in _SEMICIRCLE_FIELDS:
        return value * _SEMICIRCLES_TO_DEGREES
    if field_name in _ROUNDED_FIELDS:
        return int(round(value))
    return value


def _to_fit_tool_message(message: Message):
    message_type = _MESSAGE_TYPES.get(message.name)
    if message_type is None:
        raise FitFileError(f"Cannot encode '{message.name}' messages")

    fit_message = message_type()
    for name, value in message.fields.items():
        if value is None:
            continue
        if not isinstance(getattr(message_type, name, None), property):
            logger.debug("Skipping field %s.%s: not in profile", message.name, name)
            continue
        encoded = _encode_value(message.name, name, value)
        if encoded is None:
            logger.debug("Skipping field %s.%s: cannot encode %r", message.name, name, value)
            continue
        setattr(fit_message, name, encoded)
    return fit_message


def whole_calories(values: Sequence[float]) -> List[int]:
    """Round calorie values to whole kcal without changing their rounded sum.

    Uses largest-remainder rounding: every value is floored, then the
    kilocalories lost are handed back to the values with the largest
    fractional parts, earlier values first on ties.

    Example:
        >>> whole_calories([100 / 3, 0, 100 / 3, 0, 100 / 3])
        [34, 0, 33, 0, 33]
    """
    floors = [math.floor(value) for value in values]
    shortfall = int(round(sum(values))) - sum(floors)
    by_remainder = sorted(
        range(len(values)), key=lambda i: values[i] - floors[i], reverse=True
    )
    for i in by_remainder[:shortfall]:
        floors[i] += 1
    return floors


def _round_lap_calories(messages: Iterable[Message]) -> List[Message]:
    messages = list(messages)
    positions = [
        i
        for i, m in enumerate(messages)
        if m.kind is MessageKind.LAP and m.get("total_calories") is not None
    ]
    rounded = whole_calories([messages[i].get("total_calories") for i in positions])
    for i, calories in zip(positions, rounded):
        lap = messages[i]
        messages[i] = Message(lap.kind, lap.name, {**lap.fields, "total_calories": calories})
    return messages


def encode_messages(messages: Iterable[Message]) -> bytes:
    """Encode messages into the bytes of a FIT file.

    Lap calories are rounded to whole kcal so that they add up to the rounded
    session total.

    Raises:
        FitFileError: A message or value cannot be encoded.
    """
    builder = FitFileBuilder(auto_define=True)
    try:
        for message in _round_lap_calories(messages):
            builder.add(_to_fit_tool_message(message))
        return builder.build().to_bytes()
    except FitEncodingError as exc:
        raise FitFileError(f"Cannot encode FIT file: {exc}") from exc


def write_fit_file(messages: Iterable[Message], path: Union[str, Path]) -> Path:
    """Encode messages and write them to ``path``.

    Returns:
        The path written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(encode_messages(messages))
    logger.debug("Wrote %s", path)
    return path
