"""id Software music (IMF) format handlers."""

from droconv.formats.imf.tags import build_tag_block
from droconv.formats.imf.writer import IMFWriter

__all__ = ["IMFWriter", "build_tag_block"]
