"""Shared fixtures for fitrepair tests."""

import pytest

from fitrepair.messages import Message, MessageKind

# 2025-06-01T08:00:00Z
START = 1748764800


def record(timestamp, **fields):
    """Build a decoded record message."""
    return Message.create("record", {"timestamp": timestamp, **fields})


@pytest.fixture
def file_id():
    return Message.create(
        "file_id",
        {"type": "activity", "manufacturer": "bosch", "time_created": START, "serial_number": 42},
    )


@pytest.fixture
def source_lap():
    # Flow stamps lap and session with the file creation time
    return Message.create(
        "lap",
        {"timestamp": START, "start_time": START, "total_elapsed_time": 9999.0, "sport": "cycling"},
    )


@pytest.fixture
def source_session():
    return Message.create(
        "session",
        {
            "timestamp": START,
            "start_time": START,
            "total_elapsed_time": 9999.0,
            "total_timer_time": 1234.0,
            "total_calories": 12,
            "total_distance": 15300.0,
            "sport": "cycling",
            "sub_sport": "road",
            "trigger": "fitness_equipment",
            "avg_heart_rate": 131,
        },
    )


@pytest.fixture
def make_export(file_id, source_lap, source_session):
    """Factory building a decoded export from (offset, fields) record pairs."""

    def _make(records, extra=(), start=0):
        messages = [file_id, *extra]
        messages.extend(record(start + offset, **fields) for offset, fields in records)
        messages.append(source_lap)
        messages.append(source_session)
        return messages

    return _make


@pytest.fixture
def two_lap_export(make_export):
    """Records at 0, 1, 2 and 70, 71, 72 with constant power 100 then 200."""
    return make_export(
        [(t, {"power": 100}) for t in (0, 1, 2)] + [(t, {"power": 200}) for t in (70, 71, 72)]
    )


@pytest.fixture
def make_record():
    return record
