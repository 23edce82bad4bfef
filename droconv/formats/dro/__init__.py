"""DOSBox raw OPL (DRO) format handlers."""

from droconv.formats.dro.decoder import V1BodyDecoder, V2BodyDecoder, create_decoder
from droconv.formats.dro.header import HeaderParser
from droconv.formats.dro.reader import DROReader

__all__ = ["HeaderParser", "V1BodyDecoder", "V2BodyDecoder", "create_decoder", "DROReader"]
