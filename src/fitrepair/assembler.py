"""
Put the repaired messages into emission order.
"""

from typing import List, Mapping, Sequence, Tuple

from fitrepair.constants import RECORD_FIELD_ORDER
from fitrepair.messages import Message, Segment

__all__ = ["assemble_messages"]


def assemble_messages(
    file_id: Message,
    passthrough: Sequence[Message],
    segments: Sequence[Segment],
    timer_events: Sequence[Tuple[Message, Message]],
    laps: Sequence[Message],
    pause_laps: Sequence[Message],
    session: Message,
    activity: Message,
    field_order: Mapping[str, int] = RECORD_FIELD_ORDER,
) -> List[Message]:
    """Concatenate all output messages in the order encoders expect.

    The order is: file_id, passthrough messages, then for every segment its
    start timer event, records, stop timer event, the pause lap preceding it
    (not for the first segment) and its own lap, then session and activity.
    Summaries always follow the records they describe.

    Args:
        file_id: The source file_id message.
        passthrough: Whitelisted messages in their original order.
        segments: Active segments in time order.
        timer_events: (start, stop) events, one pair per segment.
        laps: One active lap message per segment.
        pause_laps: Rest laps between consecutive segments, or empty.
        session: Rewritten session message.
        activity: Activity message.
        field_order: Record field ordering for the emitted records.
    """
    if pause_laps and len(pause_laps) != len(segments) - 1:
        raise ValueError(
            f"Expected {len(segments) - 1} pause laps for {len(segments)} laps, "
            f"got {len(pause_laps)}"
        )

    output = [file_id, *passthrough]
    for index, (segment, (start, stop), lap) in enumerate(zip(segments, timer_events, laps)):
        output.append(start)
        output.extend(sample.to_message(field_order) for sample in segment.samples)
        output.append(stop)
        if index > 0 and pause_laps:
            output.append(pause_laps[index - 1])
        output.append(lap)
    output.append(session)
    output.append(activity)
    return output
