"""
Custom exceptions for fitrepair.

Defines specific exception types so callers can tell a broken input file
apart from an export whose structure cannot be repaired.
"""

from typing import Optional


class FitRepairError(Exception):
    """Base exception for all fitrepair errors."""


class FitFileError(FitRepairError):
    """Exception raised for FIT file decoding or encoding errors."""


class FitFileNotFoundError(FitFileError):
    """Exception raised when a FIT file cannot be found."""


class FitFileCorruptedError(FitFileError):
    """Exception raised when a FIT file fails its integrity check or cannot be decoded."""


class ConfigurationError(FitRepairError):
    """Exception raised for invalid repair parameters."""


class ValidationError(FitRepairError):
    """Exception raised when the decoded messages cannot be repaired."""


class CardinalityError(ValidationError):
    """Exception raised when a message that must appear exactly once does not."""

    def __init__(self, kind: str, count: int):
        super().__init__(f"Expected exactly one {kind} message, found {count}")
        self.kind = kind
        self.count = count


class UnsupportedMessageKind(ValidationError):
    """Exception raised for a message that is neither repaired nor passed through."""

    def __init__(self, name: str, position: int):
        super().__init__(f"Unsupported message type '{name}' at position {position}")
        self.name = name
        self.position = position


class StructuralError(ValidationError):
    """Exception raised when the record samples cannot form valid laps."""

    def __init__(self, message: str, segment_index: Optional[int] = None):
        super().__init__(message)
        self.segment_index = segment_index


class ZeroIntensityError(FitRepairError, ZeroDivisionError):
    """Exception raised when energy must be distributed over laps with no intensity."""
