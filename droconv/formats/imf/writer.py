"""
IMF file writer.

Writes register events as an id Software music file:

    Type-0:  4 zero bytes, then the stream
    Type-1:  UINT16LE stream length, then the stream, then optional tags

    Stream:  UINT16LE 0 (silence), then per event UINT16LE delay,
             BYTE register, BYTE data, and a closing UINT16LE 0.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from droconv.formats.imf.tags import build_tag_block
from droconv.models.events import DecodedEvent
from droconv.models.options import ConvertOptions, ImfFlavor
from droconv.utils.byte_io import GrowableByteSink
from droconv.utils.timing import DelayAccumulator

logger = logging.getLogger(__name__)

MAX_TYPE1_LENGTH = 0xFFFF


class IMFWriter:
    """
    Writer for IMF type-0 and type-1 files.

    Delays arrive in milliseconds and are re-quantized to the output rate.

    Example:
        writer = IMFWriter(ConvertOptions(rate=700, flavor=ImfFlavor.TYPE_1))
        data = writer.to_bytes(events)
    """

    def __init__(self, options: Optional[ConvertOptions] = None):
        self.options = options or ConvertOptions()
        self._sink = GrowableByteSink()
        self.event_count = 0

    @classmethod
    def write(
        cls,
        events: Iterable[DecodedEvent],
        filepath: Union[str, Path],
        options: Optional[ConvertOptions] = None,
    ) -> None:
        """
        Write events to an IMF file.

        Args:
            events: Register writes in playback order
            filepath: Output file path
            options: Rate, type and tags
        """
        data = cls(options).to_bytes(events)

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "wb") as f:
            f.write(data)

    def to_bytes(self, events: Iterable[DecodedEvent]) -> bytes:
        """
        Encode events as IMF data.

        Args:
            events: Register writes in playback order

        Returns:
            Complete IMF file data
        """
        self._sink = GrowableByteSink()
        self.event_count = 0
        flavor = self.options.flavor

        self._write_header(flavor)
        self._write_events(events)

        # Finish with a zero delay
        self._sink.write_u16(0)

        if flavor == ImfFlavor.TYPE_1:
            self._write_length()
            tags = build_tag_block(self.options.title, self.options.composer, self.options.remarks)
            if tags:
                self._sink.write_bytes(tags)

        return self._sink.getvalue()

    def _write_header(self, flavor: ImfFlavor) -> None:
        """Write the type-specific header and the initial silence."""
        if flavor == ImfFlavor.TYPE_1:
            # Stream length, filled in by _write_length()
            self._sink.write_u16(0)
        else:
            self._sink.write_u32(0)

        self._sink.write_u16(0)

    def _write_events(self, events: Iterable[DecodedEvent]) -> None:
        accumulator = DelayAccumulator(self.options.rate)
        sink = self._sink

        for event in events:
            sink.write_u16(accumulator.advance(event.delay))
            sink.write_u8(event.register)
            sink.write_u8(event.data)
            self.event_count += 1

    def _write_length(self) -> None:
        """Store the stream length in the type-1 header."""
        length = self._sink.tell() - 2
        if length > MAX_TYPE1_LENGTH:
            logger.warning(
                "IMF stream is %d bytes, type-1 length field wraps to %d.",
                length,
                length & MAX_TYPE1_LENGTH,
            )
        self._sink.patch_u16(0, length & MAX_TYPE1_LENGTH)
