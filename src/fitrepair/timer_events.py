"""
Timer start/stop events marking the active parts of the activity.
"""

from typing import Tuple

from fitrepair.constants import (
    EVENT_TYPE_START,
    EVENT_TYPE_STOP_ALL,
    TIMER_EVENT,
    TIMER_EVENT_GROUP,
    TIMER_OFFSET_SECONDS,
    TIMER_TRIGGER,
)
from fitrepair.messages import Message, MessageKind, Segment

__all__ = ["make_start_timer_event", "make_stop_timer_event", "timer_events_for_segment"]


def _timer_event(timestamp: int, event_type: str) -> Message:
    return Message(
        MessageKind.EVENT,
        MessageKind.EVENT.value,
        {
            "timestamp": timestamp,
            "event": TIMER_EVENT,
            "event_type": event_type,
            "timer_trigger": TIMER_TRIGGER,
            "event_group": TIMER_EVENT_GROUP,
        },
    )


def make_start_timer_event(timestamp: int) -> Message:
    """Create a timer start event."""
    return _timer_event(timestamp, EVENT_TYPE_START)


def make_stop_timer_event(timestamp: int) -> Message:
    """Create a timer stop_all event."""
    return _timer_event(timestamp, EVENT_TYPE_STOP_ALL)


def timer_events_for_segment(
    segment: Segment, is_first: bool, is_last: bool, offset: int = TIMER_OFFSET_SECONDS
) -> Tuple[Message, Message]:
    """Return the (start, stop) timer events bracketing a segment.

    At a pause, the stop event goes ``offset`` seconds after the segment's last
    record and the next start event ``offset`` seconds before its first record,
    so no event shares a timestamp with a record. The activity's very first
    start and very last stop sit on the record timestamps themselves.
    """
    start = segment.start_time if is_first else segment.start_time - offset
    stop = segment.end_time if is_last else segment.end_time + offset
    return make_start_timer_event(start), make_stop_timer_event(stop)
