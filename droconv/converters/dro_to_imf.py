"""
DRO to IMF format converter.

Converts DOSBox raw OPL captures (.dro, versions 1.0 and 2.0) to id Software
music files (.imf, type-0 or type-1).

The conversion process:
1. Validate the DRO signature and version
2. Read the version-specific header
3. Decode register writes, summing delays and dropping second-chip writes
4. Re-quantize delays from milliseconds to IMF ticks
5. Write the IMF framing and, for type-1, the optional tag block

Nothing is returned if any step fails.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Union

from droconv.formats.dro.decoder import create_decoder
from droconv.formats.dro.header import HeaderParser
from droconv.formats.imf.writer import IMFWriter
from droconv.models.dro import DROHeader
from droconv.models.events import ChipWarning
from droconv.models.options import ConvertOptions
from droconv.utils.byte_io import ByteCursor

logger = logging.getLogger(__name__)


class DROToIMFConverter:
    """
    Converter from DRO captures to IMF files.

    State from the last conversion is kept for reporting; nothing carries
    over into the next one.

    Attributes:
        options: Validated conversion options
        header: DRO header of the last conversion
        event_count: Register writes in the last output
        multiple_chips: True if the last input used a second OPL chip
    """

    def __init__(self, options: Optional[ConvertOptions] = None, **overrides):
        """
        Initialize converter.

        Args:
            options: Conversion options, defaults if None
            **overrides: Individual option values replacing those in options
        """
        options = options or ConvertOptions()
        if overrides:
            options = replace(options, **overrides)
        self.options = options.validate()

        self.header: Optional[DROHeader] = None
        self.event_count = 0
        self.multiple_chips = False

    def convert(self, source_path: Union[str, Path]) -> bytes:
        """
        Convert a DRO file to IMF data.

        Args:
            source_path: Path to .dro file

        Returns:
            Complete IMF file data
        """
        source_path = Path(source_path)

        with open(source_path, "rb") as f:
            dro_data = f.read()

        return self.convert_bytes(dro_data)

    def convert_bytes(self, dro_data: bytes) -> bytes:
        """
        Convert DRO bytes to IMF data.

        Args:
            dro_data: Raw DRO file data

        Returns:
            Complete IMF file data

        Raises:
            FormatError: If the input is malformed or unsupported
        """
        cursor = ByteCursor(dro_data)
        version = HeaderParser().parse(cursor)

        chip_warning = ChipWarning()
        decoder = create_decoder(version, cursor, chip_warning)
        header = decoder.read_header()

        writer = IMFWriter(self.options)
        imf_data = writer.to_bytes(decoder.events())

        self.header = header
        self.event_count = writer.event_count
        self.multiple_chips = chip_warning.triggered

        logger.debug(
            "Converted DRO %s: %d events, %d bytes at %d Hz",
            version.label,
            writer.event_count,
            len(imf_data),
            self.options.rate,
        )
        return imf_data

    def convert_and_save(
        self, source_path: Union[str, Path], output_path: Union[str, Path]
    ) -> Path:
        """
        Convert a DRO file and write the IMF result.

        Args:
            source_path: Path to .dro file
            output_path: Path for the .imf file

        Returns:
            Path of the written file
        """
        imf_data = self.convert(source_path)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "wb") as f:
            f.write(imf_data)

        return output_path


def convert(source: bytes, options: Optional[ConvertOptions] = None, **overrides) -> bytes:
    """
    Convert DRO data to IMF data.

    Args:
        source: Raw DRO file data
        options: Conversion options
        **overrides: Individual option values, e.g. rate=700

    Returns:
        Complete IMF file data
    """
    return DROToIMFConverter(options, **overrides).convert_bytes(source)


def convert_dro_to_imf(
    source_path: Union[str, Path],
    output_path: Union[str, Path],
    options: Optional[ConvertOptions] = None,
) -> None:
    """
    Convert a DRO file to an IMF file.

    Args:
        source_path: Path to .dro file
        output_path: Path for the .imf file
        options: Conversion options
    """
    DROToIMFConverter(options).convert_and_save(source_path, output_path)
