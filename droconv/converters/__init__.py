"""
Converters from DRO captures to IMF files.

Example:
    from droconv.converters import convert_dro_to_imf

    convert_dro_to_imf("song.dro", "song.imf")
"""

from droconv.converters.dro_to_imf import DROToIMFConverter, convert, convert_dro_to_imf

__all__ = [
    "DROToIMFConverter",
    "convert",
    "convert_dro_to_imf",
]
