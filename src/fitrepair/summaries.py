"""
Rebuild lap, session and activity summaries from the segmented records.

The exporting app stamps its lap and session with the file creation time and
leaves elapsed and timer time inconsistent with the records. Nothing timing
related is taken from the source summaries; it is all recomputed here.
"""

from typing import Any, Dict, Optional, Sequence

from fitrepair.constants import (
    ACTIVITY_OVERRIDES,
    CORRECTED_SPORT,
    CORRECTED_SUB_SPORT,
    SESSION_OVERRIDES,
    SESSION_TIMING_FIELDS,
)
from fitrepair.messages import Message, MessageKind, Segment

__all__ = [
    "build_lap_summary",
    "build_pause_lap_summary",
    "build_session_summary",
    "build_activity_summary",
    "total_timer_time",
]


def _lap(fields: Dict[str, Any]) -> Message:
    return Message(MessageKind.LAP, MessageKind.LAP.value, fields)


def build_lap_summary(segment: Segment, energy: Optional[float] = None) -> Message:
    """Create the lap message for an active segment.

    A segment has no pause inside it, so its elapsed and timer time are equal.
    ``total_calories`` is only written when an energy value is given.
    """
    fields = {
        "timestamp": segment.end_time,
        "start_time": segment.start_time,
        "total_elapsed_time": segment.active_time,
        "total_timer_time": segment.active_time,
        "event": "lap",
        "event_type": "stop",
        "intensity": "active",
        "sport": CORRECTED_SPORT,
        "sub_sport": CORRECTED_SUB_SPORT,
    }
    if energy is not None:
        fields["total_calories"] = energy
    return _lap(fields)


def build_pause_lap_summary(
    previous: Segment, following: Segment, with_energy: bool = False
) -> Message:
    """Create a rest lap covering the pause between two segments.

    With it, the elapsed times of all laps add up to the session's elapsed time.
    """
    fields = {
        "timestamp": following.start_time,
        "start_time": previous.end_time,
        "total_elapsed_time": following.start_time - previous.end_time,
        "total_timer_time": 0,
        "event": "lap",
        "event_type": "stop",
        "intensity": "rest",
        "sport": CORRECTED_SPORT,
        "sub_sport": CORRECTED_SUB_SPORT,
    }
    if with_energy:
        fields["total_calories"] = 0
    return _lap(fields)


def total_timer_time(segments: Sequence[Segment]) -> int:
    """Sum of the active time of all segments."""
    return sum(segment.active_time for segment in segments)


def build_session_summary(
    source: Message,
    segments: Sequence[Segment],
    num_laps: int,
    total_energy: Optional[float] = None,
) -> Message:
    """Rewrite the session message.

    Descriptive fields of the source session are kept. Its timing, calorie and
    lap index fields are dropped and recomputed, and the categorical fields the
    exporting app gets wrong are forced to fixed values.

    Args:
        source: The session message from the export.
        segments: All active segments, in order.
        num_laps: Number of lap messages written, pause laps included.
        total_energy: Total calories, or None to leave them out.

    Returns:
        The corrected session message.
    """
    start = segments[0].start_time
    end = segments[-1].end_time
    fields = {
        name: value for name, value in source.fields.items() if name not in SESSION_TIMING_FIELDS
    }
    fields.update(
        {
            "timestamp": end,
            "start_time": start,
            "total_elapsed_time": end - start,
            "total_timer_time": total_timer_time(segments),
            "first_lap_index": 0,
            "num_laps": num_laps,
        }
    )
    if total_energy is not None:
        fields["total_calories"] = total_energy
    fields.update(SESSION_OVERRIDES)
    return Message(MessageKind.SESSION, MessageKind.SESSION.value, fields)


def build_activity_summary(session: Message) -> Message:
    """Create the activity message closing the file."""
    fields = {
        "timestamp": session.get("timestamp"),
        "total_timer_time": session.get("total_timer_time"),
    }
    fields.update(ACTIVITY_OVERRIDES)
    return Message(MessageKind.ACTIVITY, MessageKind.ACTIVITY.value, fields)
