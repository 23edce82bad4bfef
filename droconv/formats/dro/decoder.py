"""
DRO body decoders.

Each decoder reads the version-specific part of the header and then walks
the register stream, yielding DecodedEvent objects. Delays are summed into
the next register write; writes for a second OPL chip are detected and
dropped.

Version 1.0 body:
    UINT32LE  Length in milliseconds
    UINT32LE  Length of the opcode stream in bytes
    BYTE      Hardware type (some writers store it as UINT32LE)
    ...       Opcode stream

    Opcodes:
        0x00 nn     Delay nn + 1 ms
        0x01 nnnn   Delay nnnn + 1 ms (UINT16LE)
        0x02/0x03   Select first/second chip
        0x04 rr dd  Escape: write dd to register rr
        rr dd       Write dd to register rr

Version 2.0 body:
    UINT32LE  Number of index/data pairs
    UINT32LE  Length in milliseconds
    BYTE      Hardware type
    BYTE      Data format (0 = interleaved)
    BYTE      Compression (0 = none)
    BYTE      Short delay code
    BYTE      Long delay code
    BYTE      Codemap length (max 128)
    ...       Codemap
    ...       Index/data pairs
"""

import logging
from typing import Iterator, Optional

from droconv.models.dro import DROHeader, DROVersion
from droconv.models.events import ChipWarning, DecodedEvent
from droconv.utils.byte_io import ByteCursor
from droconv.utils.errors import FormatError, FormatErrorReason

logger = logging.getLogger(__name__)

MAX_CODEMAP_LENGTH = 128

# Key-on bit in the 0xB0-0xB8 block/frequency registers
KEY_ON_MASK = 0x20


class BodyDecoder:
    """
    Base class for version-specific DRO body decoders.

    Attributes:
        cursor: Cursor positioned just after the common header
        chip_warning: One-shot multi-chip flag for this conversion
        header: Parsed body header, set by read_header()
    """

    version: DROVersion

    def __init__(self, cursor: ByteCursor, chip_warning: Optional[ChipWarning] = None):
        self.cursor = cursor
        self.chip_warning = chip_warning or ChipWarning()
        self.header: Optional[DROHeader] = None

    def read_header(self) -> DROHeader:
        raise NotImplementedError

    def events(self) -> Iterator[DecodedEvent]:
        raise NotImplementedError

    def decode(self) -> Iterator[DecodedEvent]:
        """Read the header if needed, then iterate over register writes."""
        if self.header is None:
            self.read_header()
        return self.events()


class V1BodyDecoder(BodyDecoder):
    """Decoder for DRO version 1.0 (raw version value 0x10000)."""

    version = DROVersion.V1

    OP_DELAY_BYTE = 0x00
    OP_DELAY_WORD = 0x01
    OP_CHIP_LOW = 0x02
    OP_CHIP_HIGH = 0x03
    OP_ESCAPE = 0x04

    def read_header(self) -> DROHeader:
        cursor = self.cursor
        length_ms = cursor.read_u32()
        length_bytes = cursor.read_u32()
        hardware_type = cursor.read_u8()

        # Early captures store the hardware type as UINT32LE. There is no
        # flag for this, so take three following zero bytes as its padding.
        width = 1
        if cursor.peek(3) == b"\x00\x00\x00":
            cursor.read_bytes(3)
            width = 4

        logger.info("Data is %d bytes long.", length_bytes)

        self.header = DROHeader(
            version=self.version,
            length_ms=length_ms,
            length_bytes=length_bytes,
            hardware_type=hardware_type,
            hardware_type_width=width,
        )
        return self.header

    def events(self) -> Iterator[DecodedEvent]:
        cursor = self.cursor
        limit = self.header.length_bytes
        consumed = 0
        pending = 0

        while consumed < limit:
            start = cursor.tell()
            opcode = cursor.read_u8()

            if opcode == self.OP_DELAY_BYTE:
                pending += 1 + cursor.read_u8()
            elif opcode == self.OP_DELAY_WORD:
                pending += 1 + cursor.read_u16()
            elif opcode in (self.OP_CHIP_LOW, self.OP_CHIP_HIGH):
                self.chip_warning.trigger(logger)
            else:
                register = cursor.read_u8() if opcode == self.OP_ESCAPE else opcode
                data = cursor.read_u8()
                yield DecodedEvent(pending, register, data)
                pending = 0

            consumed += cursor.tell() - start


class V2BodyDecoder(BodyDecoder):
    """Decoder for DRO version 2.0."""

    version = DROVersion.V2

    def read_header(self) -> DROHeader:
        cursor = self.cursor
        length_pairs = cursor.read_u32()
        length_ms = cursor.read_u32()
        hardware_type = cursor.read_u8()

        data_format = cursor.read_u8()
        if data_format != 0:
            raise FormatError(
                FormatErrorReason.UNSUPPORTED_ARRANGEMENT,
                "Unknown data arrangement detected; File format unsupported.",
            )

        compression = cursor.read_u8()
        if compression != 0:
            raise FormatError(
                FormatErrorReason.COMPRESSED,
                "Compression has been detected. Thus, file is unsupported.",
            )

        short_delay_code = cursor.read_u8()
        long_delay_code = cursor.read_u8()

        codemap_length = cursor.read_u8()
        if codemap_length > MAX_CODEMAP_LENGTH:
            raise FormatError(
                FormatErrorReason.CODEMAP_TOO_LONG,
                "Too long codemap size detected; File format unrecognized.",
            )
        codemap = cursor.read_bytes(codemap_length)

        logger.info("Data is %d bytes long.", length_pairs << 1)

        self.header = DROHeader(
            version=self.version,
            length_ms=length_ms,
            length_pairs=length_pairs,
            hardware_type=hardware_type,
            short_delay_code=short_delay_code,
            long_delay_code=long_delay_code,
            codemap=codemap,
        )
        return self.header

    def events(self) -> Iterator[DecodedEvent]:
        cursor = self.cursor
        header = self.header
        codemap = header.codemap
        pending = 0

        for _ in range(header.length_pairs):
            index = cursor.read_u8()
            data = cursor.read_u8()

            if index == header.short_delay_code:
                pending += 1 + data
            elif index == header.long_delay_code:
                pending += (1 + data) << 8
            elif index & 0x80:
                # Second chip: only used to detect dual-OPL songs
                slot = index & 0x7F
                if slot < len(codemap) and self._is_key_on(codemap[slot], data):
                    self.chip_warning.trigger(logger)
            else:
                if index >= len(codemap):
                    raise FormatError(
                        FormatErrorReason.CODEMAP_INDEX_OUT_OF_RANGE,
                        f"Register index {index} is outside the {len(codemap)} entry codemap "
                        f"at offset {cursor.tell() - 2}",
                    )
                yield DecodedEvent(pending, codemap[index], data)
                pending = 0

    @staticmethod
    def _is_key_on(register: int, data: int) -> bool:
        return 0xB0 <= register <= 0xB8 and bool(data & KEY_ON_MASK)


DECODERS = {
    DROVersion.V1: V1BodyDecoder,
    DROVersion.V2: V2BodyDecoder,
}


def create_decoder(
    version: DROVersion, cursor: ByteCursor, chip_warning: Optional[ChipWarning] = None
) -> BodyDecoder:
    """Return the body decoder for a DRO version."""
    return DECODERS[version](cursor, chip_warning)
