"""
Register write events decoded from a DRO capture.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DecodedEvent:
    """
    A single OPL register write.

    Attributes:
        delay: Milliseconds elapsed since the previous event
        register: OPL register address (0x00-0xFF)
        data: Value written to the register
    """

    delay: int
    register: int
    data: int

    def __str__(self) -> str:
        return f"+{self.delay}ms {self.register:02X}={self.data:02X}"


class ChipWarning:
    """
    One-shot flag for reporting multiple OPL chip usage.

    A fresh instance belongs to each decode, so the warning is issued at
    most once per conversion.
    """

    def __init__(self):
        self.triggered = False

    def trigger(self, logger) -> None:
        """Log the multi-chip warning the first time only."""
        if self.triggered:
            return
        self.triggered = True
        logger.warning(
            "This song uses multiple OPL chips, which the IMF format doesn't support!"
        )
