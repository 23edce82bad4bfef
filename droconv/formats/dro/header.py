"""
DRO file header parser.

Layout of the common header:
    0x00  8 bytes  Signature "DBRAWOPL"
    0x08  4 bytes  Version (UINT32LE)

The rest of the header depends on the version and is read by the
matching body decoder.
"""

from droconv.models.dro import DROVersion
from droconv.utils.byte_io import ByteCursor
from droconv.utils.errors import FormatError, FormatErrorReason

SIGNATURE = b"DBRAWOPL"
HEADER_SIZE = 12


class HeaderParser:
    """
    Validates the DRO signature and version.

    Example:
        cursor = ByteCursor(data)
        version = HeaderParser().parse(cursor)
    """

    def parse(self, cursor: ByteCursor) -> DROVersion:
        """
        Read the common header.

        Args:
            cursor: Cursor positioned at the start of the file

        Returns:
            Container version; the cursor is left after the version field

        Raises:
            FormatError: If the signature or version is not recognized
        """
        if cursor.peek(len(SIGNATURE)) != SIGNATURE:
            raise FormatError(
                FormatErrorReason.BAD_SIGNATURE, "Input file is not in DOSBox .dro format!"
            )
        cursor.read_bytes(len(SIGNATURE))

        version = cursor.read_u32()
        try:
            return DROVersion(version)
        except ValueError:
            raise FormatError(
                FormatErrorReason.UNSUPPORTED_VERSION,
                "Only version 0.1 (1.0) and 2.0 files are supported - "
                f"this is version {version & 0xFFFF}.{version >> 16}",
            ) from None


def has_signature(data: bytes) -> bool:
    """Check whether data starts with the DRO signature."""
    return data[: len(SIGNATURE)] == SIGNATURE
