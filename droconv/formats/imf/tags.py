"""
IMF type-1 tag block.

Layout:
    BYTE     0x1A signature
    ASCIIZ   Title
    ASCIIZ   Composer
    ASCIIZ   Remarks
    9 bytes  Program name, NUL padded
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)

TAG_SIGNATURE = 0x1A
PROGRAM_NAME = b"DRO2IMF\x00\x00"

# Each field must be shorter than this many UTF-16 code units
MAX_TAG_LENGTH = 255


def build_tag_block(title: str = "", composer: str = "", remarks: str = "") -> Optional[bytes]:
    """
    Build the tag block appended to type-1 IMF files.

    Args:
        title: Song title
        composer: Composer name
        remarks: Free text remarks

    Returns:
        Tag block bytes, or None if all fields are empty or one is too long
    """
    if not (title or composer or remarks):
        return None

    for name, value in (("Title", title), ("Composer", composer), ("Remarks", remarks)):
        if len(value.encode("utf-16-le", "surrogatepass")) // 2 >= MAX_TAG_LENGTH:
            logger.error(
                "%s field must be less than %d characters, ignoring IMF tags.",
                name,
                MAX_TAG_LENGTH,
            )
            return None

    block = bytearray([TAG_SIGNATURE])
    for value in (title, composer, remarks):
        block += value.encode("utf-8") + b"\x00"
    block += PROGRAM_NAME

    return bytes(block)
