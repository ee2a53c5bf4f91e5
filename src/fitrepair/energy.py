"""
Distribute a total energy value across laps.
"""

from typing import List, Optional, Sequence

from fitrepair.exceptions import ConfigurationError, ZeroIntensityError
from fitrepair.messages import Segment

__all__ = ["distribute_energy"]


def distribute_energy(
    segments: Sequence[Segment], total_energy: Optional[float]
) -> Optional[List[float]]:
    """Split ``total_energy`` between segments in proportion to their intensity.

    Args:
        segments: Laps with their estimated average intensity.
        total_energy: Total calories for the activity, or None to skip.

    Returns:
        One energy value per segment, or None when no total was given. The
        values add up to the total within ENERGY_RELATIVE_TOLERANCE.

    Raises:
        ConfigurationError: The total is negative.
        ZeroIntensityError: A total was given but no segment has any intensity.
    """
    if total_energy is None:
        return None
    if total_energy < 0:
        raise ConfigurationError(f"Total energy must not be negative, got {total_energy}")

    total_intensity = sum(segment.average_intensity for segment in segments)
    if total_intensity == 0:
        raise ZeroIntensityError(
            f"Cannot distribute {total_energy} over {len(segments)} laps without power data"
        )
    return [total_energy * (s.average_intensity / total_intensity) for s in segments]
