"""
FIT Repair - Rebuild consistent timing and lap summaries for FIT exports.

This package provides tools for:
- Merging duplicate record samples that share a timestamp
- Detecting pauses and splitting the activity into laps
- Distributing a calorie total across laps by estimated power
- Rewriting lap, session and activity summaries from the records
"""

from .classifier import classify_messages
from .consolidator import consolidate_samples
from .energy import distribute_energy
from .intensity import estimate_intensity
from .messages import Message, MessageKind, Sample, Segment
from .pipeline import RepairConfig, repair_messages
from .segmenter import split_into_segments

__version__ = "0.1.0"
__author__ = "FIT Repair Contributors"

__all__ = [
    "repair_messages",
    "RepairConfig",
    "Message",
    "MessageKind",
    "Sample",
    "Segment",
    "classify_messages",
    "consolidate_samples",
    "split_into_segments",
    "estimate_intensity",
    "distribute_energy",
]
