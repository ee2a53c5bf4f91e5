"""
Split consolidated samples into laps at pauses.

The exporting app records no pause events. A gap between two records longer
than the pause threshold is taken as a pause, and each run of records between
pauses becomes one active lap.
"""

import logging
from typing import List, Sequence

from fitrepair.constants import INTENSITY_FIELD, PAUSE_THRESHOLD_SECONDS
from fitrepair.exceptions import StructuralError
from fitrepair.intensity import estimate_intensity
from fitrepair.messages import Sample, Segment

logger = logging.getLogger(__name__)

__all__ = ["split_into_segments"]


def split_into_segments(
    samples: Sequence[Sample],
    threshold: float = PAUSE_THRESHOLD_SECONDS,
    intensity_field: str = INTENSITY_FIELD,
) -> List[Segment]:
    """Group timestamp-ordered samples into segments separated by pauses.

    Args:
        samples: Consolidated samples, strictly ordered by timestamp.
        threshold: Gap in seconds that must be exceeded to start a new segment.
        intensity_field: Record field used for each segment's average intensity.

    Returns:
        Segments in time order. Concatenating their samples gives back the input.

    Raises:
        StructuralError: There are no samples, or a segment has a single sample.
    """
    if not samples:
        raise StructuralError("Expected at least one record message")

    groups: List[List[Sample]] = [[samples[0]]]
    for previous, current in zip(samples, samples[1:]):
        if current.timestamp - previous.timestamp > threshold:
            groups.append([])
        groups[-1].append(current)

    segments = []
    for index, group in enumerate(groups):
        if len(group) < 2:
            raise StructuralError(
                f"Expected more than one record in lap {index} "
                f"(record at timestamp {group[0].timestamp})",
                segment_index=index,
            )
        segments.append(
            Segment(
                index=index,
                samples=tuple(group),
                average_intensity=estimate_intensity(group, intensity_field),
            )
        )

    logger.debug("Split %d records into %d laps", len(samples), len(segments))
    return segments
