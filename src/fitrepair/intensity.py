"""
Lap intensity estimate used to weight the calorie split.

The estimate is only a weight. It is not written back into any record or lap.
"""

from numbers import Real
from typing import Sequence

import numpy as np

from fitrepair.constants import INTENSITY_FIELD
from fitrepair.messages import Sample

__all__ = ["estimate_intensity"]


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def estimate_intensity(samples: Sequence[Sample], field: str = INTENSITY_FIELD) -> float:
    """Estimate the time-weighted average of a power-like field.

    Only samples carrying a numeric value for ``field`` take part. Each of
    them after the first contributes its value multiplied by the seconds
    since the previous qualifying sample, and the sum is divided by the time
    between the first and last qualifying sample. Many samples may lack power,
    so this is an approximation.

    Args:
        samples: Consolidated samples of one lap, in timestamp order.
        field: Name of the record field to average.

    Returns:
        The weighted average, the single value when only one sample qualifies,
        or 0.0 when none does.
    """
    readings = [(s.timestamp, s.get(field)) for s in samples if _is_number(s.get(field))]
    if not readings:
        return 0.0
    if len(readings) == 1:
        return float(readings[0][1])

    times = np.array([t for t, _ in readings], dtype=float)
    values = np.array([v for _, v in readings], dtype=float)
    weighted = float(np.sum(values[1:] * np.diff(times)))
    return weighted / float(times[-1] - times[0])
