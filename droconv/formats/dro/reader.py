"""
DRO file reader.

Reads DOSBox .dro captures into the DROFile model.
"""

from pathlib import Path
from typing import Union

from droconv.formats.dro.decoder import create_decoder
from droconv.formats.dro.header import SIGNATURE, HeaderParser, has_signature
from droconv.models.dro import DROFile, DROHeader
from droconv.models.events import ChipWarning
from droconv.utils.byte_io import ByteCursor


class DROReader:
    """
    Reader for DOSBox raw OPL captures, versions 1.0 and 2.0.

    Example:
        dro = DROReader.read("song.dro")
        print(f"{len(dro.events)} writes, {dro.header.length_ms} ms")
    """

    def __init__(self):
        self.parser = HeaderParser()
        self._raw_data: bytes = b""

    @classmethod
    def read(cls, filepath: Union[str, Path]) -> DROFile:
        """
        Read a DRO file.

        Args:
            filepath: Path to .dro file

        Returns:
            Decoded DROFile
        """
        reader = cls()
        return reader.parse_file(filepath)

    def parse_file(self, filepath: Union[str, Path]) -> DROFile:
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        with open(filepath, "rb") as f:
            self._raw_data = f.read()

        return self.parse_bytes(self._raw_data)

    def parse_bytes(self, data: bytes) -> DROFile:
        """
        Decode DRO data from bytes.

        Args:
            data: Raw DRO file contents

        Returns:
            DROFile with every register write materialized
        """
        self._raw_data = data

        cursor = ByteCursor(data)
        version = self.parser.parse(cursor)

        chip_warning = ChipWarning()
        decoder = create_decoder(version, cursor, chip_warning)
        header = decoder.read_header()
        events = list(decoder.events())

        return DROFile(header=header, events=events, multiple_chips=chip_warning.triggered)

    def parse_header(self, data: bytes) -> DROHeader:
        """Read only the header fields of DRO data."""
        cursor = ByteCursor(data)
        version = self.parser.parse(cursor)
        return create_decoder(version, cursor).read_header()

    @classmethod
    def can_read(cls, filepath: Union[str, Path]) -> bool:
        """
        Check if a file looks like a DRO capture.

        Args:
            filepath: Path to check

        Returns:
            True if the file starts with the DRO signature
        """
        filepath = Path(filepath)

        if not filepath.is_file():
            return False

        with open(filepath, "rb") as f:
            return has_signature(f.read(len(SIGNATURE)))

    @classmethod
    def get_file_info(cls, filepath: Union[str, Path]) -> dict:
        """
        Get header information about a DRO file without decoding the body.

        Args:
            filepath: Path to .dro file

        Returns:
            Dictionary with file info
        """
        filepath = Path(filepath)

        with open(filepath, "rb") as f:
            data = f.read()

        info = {
            "valid": has_signature(data),
            "size": len(data),
        }

        if info["valid"]:
            header = cls().parse_header(data)
            info["version"] = header.version.label
            info["length_ms"] = header.length_ms
            info["data_length"] = header.data_length
            info["hardware_type"] = header.hardware_type
            if header.codemap:
                info["codemap_length"] = len(header.codemap)

        return info
