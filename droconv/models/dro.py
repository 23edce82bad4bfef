"""
DRO file model.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional

from droconv.models.events import DecodedEvent


class DROVersion(IntEnum):
    """Raw version field values accepted in the DRO header."""

    V1 = 0x00010000
    V2 = 0x00000002

    @property
    def label(self) -> str:
        return "1.0" if self is DROVersion.V1 else "2.0"


@dataclass
class DROHeader:
    """
    Body header fields of a DRO capture.

    Fields that only exist in one version are None for the other.

    Attributes:
        version: Container version
        length_ms: Song length in milliseconds
        length_bytes: Opcode stream size (v1)
        length_pairs: Number of index/data records (v2)
        hardware_type: Recorded OPL hardware type
        hardware_type_width: Width of the hardware type field in bytes (v1)
        short_delay_code: Index byte for short delays (v2)
        long_delay_code: Index byte for long delays (v2)
        codemap: Index to register table (v2)
    """

    version: DROVersion
    length_ms: int = 0
    length_bytes: Optional[int] = None
    length_pairs: Optional[int] = None
    hardware_type: int = 0
    hardware_type_width: int = 1
    short_delay_code: Optional[int] = None
    long_delay_code: Optional[int] = None
    codemap: bytes = b""

    @property
    def data_length(self) -> int:
        """Size of the register stream in bytes."""
        if self.version == DROVersion.V2:
            return (self.length_pairs or 0) << 1
        return self.length_bytes or 0


@dataclass
class DROFile:
    """
    A fully decoded DRO capture.

    Attributes:
        header: Parsed header fields
        events: Register writes in source order
        multiple_chips: True if second-chip usage was detected
    """

    header: DROHeader
    events: List[DecodedEvent] = field(default_factory=list)
    multiple_chips: bool = False

    @property
    def total_delay(self) -> int:
        """Milliseconds covered by the decoded events."""
        return sum(event.delay for event in self.events)
