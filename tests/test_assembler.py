"""Tests for output message ordering."""

import pytest

from fitrepair.assembler import assemble_messages
from fitrepair.messages import Message, MessageKind, Sample, Segment


def msg(name, **fields):
    return Message.create(name, fields)


@pytest.fixture
def parts():
    segments = [
        Segment(0, (Sample(0), Sample(1))),
        Segment(1, (Sample(70), Sample(71))),
    ]
    return {
        "file_id": msg("file_id", tag="file_id"),
        "passthrough": [msg("device_info", tag="device")],
        "segments": segments,
        "timer_events": [
            (msg("event", tag="start0"), msg("event", tag="stop0")),
            (msg("event", tag="start1"), msg("event", tag="stop1")),
        ],
        "laps": [msg("lap", tag="lap0"), msg("lap", tag="lap1")],
        "pause_laps": [msg("lap", tag="pause1")],
        "session": msg("session", tag="session"),
        "activity": msg("activity", tag="activity"),
    }


def labels(messages):
    return [m.get("tag") if m.kind is not MessageKind.RECORD else m.get("timestamp") for m in messages]


def test_emission_order(parts):
    output = assemble_messages(**parts)

    assert labels(output) == [
        "file_id",
        "device",
        "start0",
        0,
        1,
        "stop0",
        "lap0",
        "start1",
        70,
        71,
        "stop1",
        "pause1",
        "lap1",
        "session",
        "activity",
    ]


def test_without_pause_laps(parts):
    parts["pause_laps"] = []

    output = assemble_messages(**parts)

    assert "pause1" not in labels(output)
    assert len(output) == 14


def test_records_are_record_messages(parts):
    output = assemble_messages(**parts)
    records = [m for m in output if m.kind is MessageKind.RECORD]
    assert [r.name for r in records] == ["record"] * 4


def test_pause_lap_count_checked(parts):
    parts["pause_laps"] = parts["pause_laps"] * 2
    with pytest.raises(ValueError):
        assemble_messages(**parts)
