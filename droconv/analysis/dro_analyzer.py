"""
DRO capture analyzer.

Summarizes a DRO file without converting it:
- Header fields for either version
- Register write counts and the most used registers
- Total delay and the IMF length it maps to at a given rate
- Second chip usage
"""

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

from droconv.formats.dro.reader import DROReader
from droconv.models.dro import DROFile
from droconv.models.options import RATE_KEEN


@dataclass
class DROAnalysis:
    """Summary of one DRO capture."""

    filepath: str
    filesize: int
    version: str
    length_ms: int
    data_length: int
    hardware_type: int
    hardware_type_width: int
    short_delay_code: Optional[int]
    long_delay_code: Optional[int]
    codemap: bytes
    event_count: int
    total_delay_ms: int
    multiple_chips: bool
    rate: float
    imf_ticks: int
    top_registers: List[Tuple[int, int]] = field(default_factory=list)

    @property
    def duration_seconds(self) -> float:
        return self.total_delay_ms / 1000.0


class DROAnalyzer:
    """
    Analyzer for DRO captures.

    Example:
        analysis = DROAnalyzer().analyze_file("song.dro")
        print(analysis.event_count, analysis.duration_seconds)
    """

    def __init__(self, rate: float = RATE_KEEN):
        self.rate = rate
        self.dro: Optional[DROFile] = None

    def analyze_file(self, filepath: Union[str, Path]) -> DROAnalysis:
        filepath = Path(filepath)

        with open(filepath, "rb") as f:
            data = f.read()

        return self.analyze_bytes(data, str(filepath))

    def analyze_bytes(self, data: bytes, filepath: str = "") -> DROAnalysis:
        """
        Analyze DRO data.

        Args:
            data: Raw DRO file contents
            filepath: Name shown in reports

        Returns:
            DROAnalysis for the data
        """
        self.dro = DROReader().parse_bytes(data)
        header = self.dro.header

        registers = Counter(event.register for event in self.dro.events)
        total_delay = self.dro.total_delay

        return DROAnalysis(
            filepath=filepath,
            filesize=len(data),
            version=header.version.label,
            length_ms=header.length_ms,
            data_length=header.data_length,
            hardware_type=header.hardware_type,
            hardware_type_width=header.hardware_type_width,
            short_delay_code=header.short_delay_code,
            long_delay_code=header.long_delay_code,
            codemap=header.codemap,
            event_count=len(self.dro.events),
            total_delay_ms=total_delay,
            multiple_chips=self.dro.multiple_chips,
            rate=self.rate,
            imf_ticks=int(total_delay * self.rate // 1000),
            top_registers=registers.most_common(8),
        )
