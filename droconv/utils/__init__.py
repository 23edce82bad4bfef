"""Utility functions for droconv."""

from droconv.utils.byte_io import ByteCursor, GrowableByteSink
from droconv.utils.errors import FormatError, FormatErrorReason
from droconv.utils.timing import DelayAccumulator
from droconv.utils.validation import ValidationError

__all__ = [
    "ByteCursor",
    "GrowableByteSink",
    "FormatError",
    "FormatErrorReason",
    "DelayAccumulator",
    "ValidationError",
]
