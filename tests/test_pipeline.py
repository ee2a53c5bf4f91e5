"""
End-to-end tests for repair_messages.
Tests the documented scenarios and the timing and energy invariants.
"""

import random

import pytest

from fitrepair import RepairConfig, repair_messages
from fitrepair.constants import (
    ENERGY_RELATIVE_TOLERANCE,
    PASSTHROUGH_MESSAGES,
    PAUSE_THRESHOLD_SECONDS,
    RECORD_FIELD_ORDER,
    TIMER_OFFSET_SECONDS,
)
from fitrepair.exceptions import (
    CardinalityError,
    StructuralError,
    UnsupportedMessageKind,
    ZeroIntensityError,
)
from fitrepair.messages import Message, MessageKind


def of_kind(messages, kind):
    return [m for m in messages if m.kind is kind]


def only(messages, kind):
    found = of_kind(messages, kind)
    assert len(found) == 1
    return found[0]


class TestScenarios:
    """The reference scenarios."""

    def test_single_lap(self, make_export):
        """Three samples without gaps give one lap of two seconds."""
        output = repair_messages(make_export([(t, {"power": 100}) for t in (0, 1, 2)]))

        laps = of_kind(output, MessageKind.LAP)
        session = only(output, MessageKind.SESSION)
        assert len(laps) == 1
        assert laps[0].get("total_elapsed_time") == 2
        assert laps[0].get("total_timer_time") == 2
        assert session.get("total_elapsed_time") == 2
        assert session.get("total_timer_time") == 2

    def test_pause_between_laps(self, two_lap_export):
        """A 68 s gap splits the activity and adds a 68 s rest lap."""
        output = repair_messages(two_lap_export)

        laps = of_kind(output, MessageKind.LAP)
        session = only(output, MessageKind.SESSION)
        assert [lap.get("intensity") for lap in laps] == ["active", "rest", "active"]
        assert laps[1].get("total_elapsed_time") == 68
        assert laps[1].get("total_timer_time") == 0
        assert session.get("total_elapsed_time") == 72
        assert session.get("total_timer_time") == 4
        assert session.get("num_laps") == 3

    def test_duplicate_samples_merged(self, make_export):
        """Duplicates at t=5 merge into one record with both values."""
        output = repair_messages(
            make_export(
                [(4, {"power": 100}), (5, {"power": 150}), (5, {"heart_rate": 140}), (6, {})]
            )
        )

        records = of_kind(output, MessageKind.RECORD)
        assert [r.get("timestamp") for r in records] == [4, 5, 6]
        assert records[1].get("power") == 150
        assert records[1].get("heart_rate") == 140

    def test_energy_split_by_power(self, two_lap_export):
        """300 kcal over laps at 100 W and 200 W gives 100 and 200."""
        output = repair_messages(two_lap_export, total_energy=300)

        active = [lap for lap in of_kind(output, MessageKind.LAP) if lap.get("intensity") == "active"]
        assert [lap.get("total_calories") for lap in active] == pytest.approx([100.0, 200.0])
        assert only(output, MessageKind.SESSION).get("total_calories") == 300


class TestOutputStructure:
    """Emission order and message content."""

    def test_emission_order(self, two_lap_export):
        output = repair_messages(two_lap_export)

        summary = [
            (m.name, m.get("event_type") if m.kind is MessageKind.EVENT else m.get("timestamp"))
            for m in output
        ]
        assert summary == [
            ("file_id", None),
            ("event", "start"),
            ("record", 0),
            ("record", 1),
            ("record", 2),
            ("event", "stop_all"),
            ("lap", 2),
            ("event", "start"),
            ("record", 70),
            ("record", 71),
            ("record", 72),
            ("event", "stop_all"),
            ("lap", 70),
            ("lap", 72),
            ("session", 72),
            ("activity", 72),
        ]

    def test_timer_event_timestamps(self, two_lap_export):
        output = repair_messages(two_lap_export)

        events = [(e.get("event_type"), e.get("timestamp")) for e in of_kind(output, MessageKind.EVENT)]
        assert events == [("start", 0), ("stop_all", 3), ("start", 69), ("stop_all", 72)]

    def test_passthrough_follows_file_id(self, make_export):
        device = Message.create("device_info", {"device_index": 0, "manufacturer": "bosch"})
        output = repair_messages(make_export([(0, {}), (1, {})], extra=[device]))

        assert output[1] is device

    def test_no_energy_fields_without_total(self, two_lap_export):
        output = repair_messages(two_lap_export)
        assert all("total_calories" not in m.fields for m in output)

    def test_session_corrected(self, two_lap_export, source_session):
        session = only(repair_messages(two_lap_export), MessageKind.SESSION)

        assert session.get("sport") == "e_biking"
        assert session.get("trigger") == "activity_end"
        assert session.get("total_distance") == source_session.get("total_distance")

    def test_activity(self, two_lap_export):
        activity = only(repair_messages(two_lap_export), MessageKind.ACTIVITY)

        assert activity.get("num_sessions") == 1
        assert activity.get("timestamp") == 72
        assert activity.get("total_timer_time") == 4

    def test_input_not_modified(self, two_lap_export):
        before = [(m.name, dict(m.fields)) for m in two_lap_export]
        repair_messages(two_lap_export, total_energy=300)
        assert [(m.name, dict(m.fields)) for m in two_lap_export] == before


class TestConfiguration:
    """RepairConfig and keyword overrides."""

    def test_defaults(self):
        config = RepairConfig()

        assert config.pause_threshold == PAUSE_THRESHOLD_SECONDS
        assert config.timer_offset == TIMER_OFFSET_SECONDS
        assert config.intensity_field == "power"
        assert config.emit_pause_laps
        assert config.field_order is RECORD_FIELD_ORDER
        assert config.passthrough is PASSTHROUGH_MESSAGES
        assert RepairConfig() == config

    def test_without_pause_laps(self, two_lap_export):
        output = repair_messages(two_lap_export, config=RepairConfig(emit_pause_laps=False))

        laps = of_kind(output, MessageKind.LAP)
        assert len(laps) == 2
        assert only(output, MessageKind.SESSION).get("num_laps") == 2

    def test_keyword_threshold(self, two_lap_export):
        output = repair_messages(two_lap_export, pause_threshold=120)
        assert len(of_kind(output, MessageKind.LAP)) == 1

    def test_short_threshold(self, make_export):
        export = make_export([(t, {"power": 100}) for t in (0, 1, 2, 8, 9)])
        output = repair_messages(export, config=RepairConfig(pause_threshold=5))

        session = only(output, MessageKind.SESSION)
        assert session.get("total_elapsed_time") == 9
        assert session.get("total_timer_time") == 3


class TestInvariants:
    """Timing and energy conservation over generated activities."""

    @staticmethod
    def random_records(seed):
        rng = random.Random(seed)
        records, t = [], 0
        for _ in range(rng.randint(2, 6)):
            for _ in range(rng.randint(2, 40)):
                fields = {"power": rng.randint(0, 400)} if rng.random() < 0.8 else {}
                records.append((t, fields))
                if rng.random() < 0.2:
                    records.append((t, {"heart_rate": rng.randint(90, 180)}))
                t += rng.randint(1, 10)
            t += rng.randint(61, 900)
        return records

    @pytest.mark.parametrize("seed", range(10))
    def test_timing_conservation(self, make_export, seed):
        output = repair_messages(make_export(self.random_records(seed)))

        session = only(output, MessageKind.SESSION)
        laps = of_kind(output, MessageKind.LAP)
        active = [lap for lap in laps if lap.get("intensity") == "active"]
        records = of_kind(output, MessageKind.RECORD)

        assert session.get("total_elapsed_time") == records[-1].get("timestamp") - records[0].get("timestamp")
        assert session.get("total_timer_time") == sum(lap.get("total_timer_time") for lap in active)
        assert session.get("total_elapsed_time") == sum(lap.get("total_elapsed_time") for lap in laps)

    @pytest.mark.parametrize("seed", range(10))
    def test_energy_conservation(self, make_export, seed):
        output = repair_messages(make_export(self.random_records(seed)), total_energy=987)

        laps = of_kind(output, MessageKind.LAP)
        assert sum(lap.get("total_calories") for lap in laps) == pytest.approx(
            987, rel=ENERGY_RELATIVE_TOLERANCE
        )

    @pytest.mark.parametrize("seed", range(5))
    def test_records_unique_and_sorted(self, make_export, seed):
        records = of_kind(repair_messages(make_export(self.random_records(seed))), MessageKind.RECORD)
        times = [r.get("timestamp") for r in records]
        assert all(a < b for a, b in zip(times, times[1:]))


class TestFailures:
    """Errors abort the whole repair."""

    def test_missing_session(self, make_export):
        messages = [m for m in make_export([(0, {}), (1, {})]) if m.kind is not MessageKind.SESSION]
        with pytest.raises(CardinalityError):
            repair_messages(messages)

    def test_unsupported_message(self, make_export):
        messages = make_export([(0, {}), (1, {})], extra=[Message.create("hrv", {})])
        with pytest.raises(UnsupportedMessageKind):
            repair_messages(messages)

    def test_no_records(self, make_export):
        with pytest.raises(StructuralError):
            repair_messages(make_export([]))

    def test_single_record_lap(self, make_export):
        with pytest.raises(StructuralError) as exc_info:
            repair_messages(make_export([(0, {}), (1, {}), (500, {})]))
        assert exc_info.value.segment_index == 1

    def test_energy_without_power(self, make_export):
        with pytest.raises(ZeroIntensityError):
            repair_messages(make_export([(0, {"heart_rate": 120}), (1, {})]), total_energy=100)

    def test_no_energy_without_power_is_fine(self, make_export):
        output = repair_messages(make_export([(0, {"heart_rate": 120}), (1, {})]))
        assert only(output, MessageKind.SESSION).get("total_timer_time") == 1
