"""
Repair the decoded messages of an inconsistent FIT export.

This module ties the stages together: classify the messages, consolidate the
duplicate records, split them into laps at pauses, spread the calories, add
timer events and rewrite the lap, session and activity summaries.
"""

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Mapping, Optional

from fitrepair.assembler import assemble_messages
from fitrepair.classifier import classify_messages
from fitrepair.constants import (
    INTENSITY_FIELD,
    PASSTHROUGH_MESSAGES,
    PAUSE_THRESHOLD_SECONDS,
    RECORD_FIELD_ORDER,
    TIMER_OFFSET_SECONDS,
)
from fitrepair.consolidator import consolidate_samples
from fitrepair.energy import distribute_energy
from fitrepair.messages import Message
from fitrepair.segmenter import split_into_segments
from fitrepair.summaries import (
    build_activity_summary,
    build_lap_summary,
    build_pause_lap_summary,
    build_session_summary,
)
from fitrepair.timer_events import timer_events_for_segment

logger = logging.getLogger(__name__)

__all__ = ["RepairConfig", "repair_messages"]


@dataclass(frozen=True)
class RepairConfig:
    """Configuration for repairing a FIT export."""

    pause_threshold: float = PAUSE_THRESHOLD_SECONDS
    timer_offset: int = TIMER_OFFSET_SECONDS
    intensity_field: str = INTENSITY_FIELD
    emit_pause_laps: bool = True
    field_order: Mapping[str, int] = field(default_factory=lambda: RECORD_FIELD_ORDER)
    passthrough: FrozenSet[str] = field(default=PASSTHROUGH_MESSAGES)


def repair_messages(
    messages: Iterable[Message],
    total_energy: Optional[float] = None,
    config: RepairConfig = None,
    **kwargs,
) -> List[Message]:
    """Rebuild a consistent message sequence from a decoded FIT export.

    Can accept either a config object or individual RepairConfig fields as
    keyword arguments.

    Args:
        messages: Decoded messages in file order. They are not modified.
        total_energy: Total calories to spread over the laps, or None to
            write no calorie fields at all.
        config: RepairConfig with the pause threshold, timer offset and
            the other repair parameters.

    Returns:
        The repaired messages in emission order, ready to be encoded.

    Raises:
        CardinalityError: file_id, session or lap is missing or repeated.
        UnsupportedMessageKind: The export holds a message that cannot be passed on.
        StructuralError: No records, or a lap with a single record.
        ZeroIntensityError: Calories were given but no lap has power data.
        ConfigurationError: Calories are negative.
    """
    config = config or RepairConfig(**kwargs)

    classified = classify_messages(messages, config.passthrough, config.field_order)
    samples = consolidate_samples(classified.samples, config.field_order)
    logger.debug(
        "Consolidated %d records into %d", len(classified.samples), len(samples)
    )

    segments = split_into_segments(samples, config.pause_threshold, config.intensity_field)
    energies = distribute_energy(segments, total_energy)

    last = len(segments) - 1
    timer_events = [
        timer_events_for_segment(segment, i == 0, i == last, config.timer_offset)
        for i, segment in enumerate(segments)
    ]
    laps = [
        build_lap_summary(segment, energies[i] if energies is not None else None)
        for i, segment in enumerate(segments)
    ]
    pause_laps = []
    if config.emit_pause_laps:
        pause_laps = [
            build_pause_lap_summary(previous, following, with_energy=energies is not None)
            for previous, following in zip(segments, segments[1:])
        ]

    session = build_session_summary(
        classified.session, segments, len(laps) + len(pause_laps), total_energy
    )
    activity = build_activity_summary(session)

    logger.info(
        "Repaired %d records into %d laps (%d pauses), timer time %ss of %ss elapsed",
        len(samples),
        len(segments),
        len(segments) - 1,
        session.get("total_timer_time"),
        session.get("total_elapsed_time"),
    )
    return assemble_messages(
        classified.file_id,
        classified.passthrough,
        segments,
        timer_events,
        laps,
        pause_laps,
        session,
        activity,
        config.field_order,
    )
