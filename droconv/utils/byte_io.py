"""
Little-endian byte reading and writing helpers.

ByteCursor walks an input buffer with bounds-checked reads, GrowableByteSink
collects output bytes and allows a reserved field to be filled in later.
"""

import struct
from typing import Union

from droconv.utils.errors import FormatError, FormatErrorReason


class ByteCursor:
    """
    Sequential little-endian reader over an in-memory buffer.

    Every read checks that enough bytes remain and raises
    FormatError(TRUNCATED) instead of reading past the end.

    Example:
        cursor = ByteCursor(data)
        signature = cursor.read_bytes(8)
        version = cursor.read_u32()
    """

    def __init__(self, data: Union[bytes, bytearray, memoryview], offset: int = 0):
        self._data = bytes(data)
        self._offset = offset

    def __len__(self) -> int:
        return len(self._data)

    def tell(self) -> int:
        """Return the current read offset."""
        return self._offset

    def seek(self, offset: int) -> None:
        """Move the read offset to an absolute position."""
        if not 0 <= offset <= len(self._data):
            raise FormatError(
                FormatErrorReason.TRUNCATED,
                f"Cannot seek to offset {offset} in a {len(self._data)} byte buffer",
            )
        self._offset = offset

    @property
    def remaining(self) -> int:
        """Number of unread bytes."""
        return len(self._data) - self._offset

    def _require(self, count: int) -> None:
        if count > self.remaining:
            raise FormatError(
                FormatErrorReason.TRUNCATED,
                f"Unexpected end of data at offset {self._offset}: "
                f"needed {count} bytes, {self.remaining} left",
            )

    def peek(self, count: int) -> bytes:
        """Return up to count bytes without advancing."""
        return self._data[self._offset : self._offset + count]

    def read_bytes(self, count: int) -> bytes:
        self._require(count)
        chunk = self._data[self._offset : self._offset + count]
        self._offset += count
        return chunk

    def read_u8(self) -> int:
        self._require(1)
        value = self._data[self._offset]
        self._offset += 1
        return value

    def read_u16(self) -> int:
        self._require(2)
        (value,) = struct.unpack_from("<H", self._data, self._offset)
        self._offset += 2
        return value

    def read_u32(self) -> int:
        self._require(4)
        (value,) = struct.unpack_from("<I", self._data, self._offset)
        self._offset += 4
        return value


class GrowableByteSink:
    """
    Append-only little-endian output buffer.

    Backed by a bytearray, so appends are amortized O(1). Fields can be
    reserved and patched after the rest of the stream has been written.
    """

    def __init__(self):
        self._buffer = bytearray()

    def __len__(self) -> int:
        return len(self._buffer)

    def tell(self) -> int:
        """Return the number of bytes written so far."""
        return len(self._buffer)

    def write_bytes(self, data: Union[bytes, bytearray]) -> int:
        self._buffer += data
        return len(self._buffer)

    def write_u8(self, value: int) -> int:
        self._buffer.append(value & 0xFF)
        return len(self._buffer)

    def write_u16(self, value: int) -> int:
        self._buffer += struct.pack("<H", value)
        return len(self._buffer)

    def write_u32(self, value: int) -> int:
        self._buffer += struct.pack("<I", value)
        return len(self._buffer)

    def patch_u16(self, offset: int, value: int) -> None:
        """Overwrite a previously written 16-bit field."""
        struct.pack_into("<H", self._buffer, offset, value)

    def getvalue(self) -> bytes:
        """Return exactly the bytes written."""
        return bytes(self._buffer)
