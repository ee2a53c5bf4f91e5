"""
Collapse record samples that share a timestamp.

Some exports write several partial records for the same second, e.g. one with
power and another with heart rate. They are views of one reading, so they are
merged: the first value seen for a field wins and later duplicates only fill
fields that are still unset.
"""

from typing import Dict, Iterable, List, Mapping

from fitrepair.constants import RECORD_FIELD_ORDER
from fitrepair.messages import Sample

__all__ = ["consolidate_samples"]


def consolidate_samples(
    samples: Iterable[Sample], field_order: Mapping[str, int] = RECORD_FIELD_ORDER
) -> List[Sample]:
    """Merge duplicate-timestamp samples into one sample per timestamp.

    Args:
        samples: Samples in input order, possibly with repeated timestamps.
        field_order: Explicit field ordering applied to every merged sample.

    Returns:
        New samples sorted by timestamp, each timestamp appearing once.

    Example:
        >>> merged = consolidate_samples([
        ...     Sample(5, (("power", 150),)),
        ...     Sample(5, (("heart_rate", 140), ("power", 90))),
        ... ])
        >>> merged[0].get("power"), merged[0].get("heart_rate")
        (150, 140)
    """
    by_timestamp: Dict[int, Sample] = {}
    for sample in samples:
        existing = by_timestamp.get(sample.timestamp)
        if existing is None:
            by_timestamp[sample.timestamp] = sample
        else:
            by_timestamp[sample.timestamp] = existing.merge_missing(sample, field_order)
    return [by_timestamp[timestamp] for timestamp in sorted(by_timestamp)]
