"""
droconv - Converter from DOSBox DRO captures to id Software IMF music.

This library provides tools to:
- Read DOSBox raw OPL captures (.dro, versions 1.0 and 2.0)
- Write IMF type-0 and type-1 files, with optional tags
- Convert between the two, re-quantizing delays to the IMF tick rate

Example usage:
    from droconv import convert, ConvertOptions, ImfFlavor

    with open("song.dro", "rb") as f:
        imf_data = convert(f.read(), ConvertOptions(rate=700, flavor=ImfFlavor.TYPE_1))
"""

__version__ = "0.1.0"
__author__ = "droconv Contributors"

from droconv.converters.dro_to_imf import DROToIMFConverter, convert, convert_dro_to_imf
from droconv.formats.dro.reader import DROReader
from droconv.formats.imf.writer import IMFWriter
from droconv.models.events import DecodedEvent
from droconv.models.options import ConvertOptions, ImfFlavor
from droconv.utils.errors import FormatError, FormatErrorReason
from droconv.utils.validation import ValidationError

__all__ = [
    "convert",
    "convert_dro_to_imf",
    "DROToIMFConverter",
    "DROReader",
    "IMFWriter",
    "DecodedEvent",
    "ConvertOptions",
    "ImfFlavor",
    "FormatError",
    "FormatErrorReason",
    "ValidationError",
]
