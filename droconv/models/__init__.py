"""Data models for DRO and IMF conversion."""

from droconv.models.dro import DROFile, DROHeader, DROVersion
from droconv.models.events import ChipWarning, DecodedEvent
from droconv.models.options import ConvertOptions, ImfFlavor

__all__ = [
    "DROFile",
    "DROHeader",
    "DROVersion",
    "ChipWarning",
    "DecodedEvent",
    "ConvertOptions",
    "ImfFlavor",
]
