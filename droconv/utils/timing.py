"""
Delay re-quantization from DRO milliseconds to IMF ticks.
"""

import math

from droconv.utils.errors import FormatError, FormatErrorReason

# DRO delays are counted in milliseconds
SOURCE_RATE = 1000.0

MAX_IMF_DELAY = 0xFFFF


class DelayAccumulator:
    """
    Converts source delays to output ticks, carrying the fraction.

    The carried remainder stays in [0, 1), so the running total of emitted
    ticks never drifts more than one tick from the exact value.

    Attributes:
        rate: Output tick rate in Hz
        carry: Fractional tick not yet emitted
    """

    def __init__(self, rate: float):
        self.rate = rate
        self.carry = 0.0

    def advance(self, source_delay: int) -> int:
        """
        Add a source delay and return the whole ticks now due.

        Args:
            source_delay: Delay in milliseconds since the previous event

        Returns:
            Tick count for the 16-bit IMF delay field

        Raises:
            FormatError: If the tick count does not fit 16 bits
        """
        self.carry += source_delay * self.rate / SOURCE_RATE
        ticks = math.floor(self.carry)
        self.carry -= ticks

        if ticks > MAX_IMF_DELAY:
            raise FormatError(
                FormatErrorReason.DELAY_OVERFLOW,
                f"Delay of {source_delay} ms is {ticks} ticks at {self.rate} Hz, "
                f"which exceeds the IMF limit of {MAX_IMF_DELAY}",
            )

        return ticks
