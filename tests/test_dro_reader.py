"""Tests for DRO header parsing and body decoding."""

import logging
import struct

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from droconv.formats.dro.decoder import V1BodyDecoder, V2BodyDecoder, create_decoder
from droconv.formats.dro.header import HeaderParser
from droconv.formats.dro.reader import DROReader
from droconv.models.dro import DROVersion
from droconv.models.events import DecodedEvent
from droconv.utils.byte_io import ByteCursor
from droconv.utils.errors import FormatError, FormatErrorReason

MULTI_CHIP_MESSAGE = "multiple OPL chips"


class TestHeaderParser:
    """Test cases for the common DRO header."""

    def test_parse_versions(self, sample_v1_data, sample_v2_data):
        """Test both supported versions are recognized."""
        parser = HeaderParser()

        cursor = ByteCursor(sample_v1_data)
        assert parser.parse(cursor) == DROVersion.V1
        assert cursor.tell() == 12

        assert parser.parse(ByteCursor(sample_v2_data)) == DROVersion.V2

    def test_bad_signature(self, sample_v2_data):
        """Test that a wrong signature is rejected."""
        data = b"DBRAWOPX" + sample_v2_data[8:]

        with pytest.raises(FormatError, match="not in DOSBox .dro format") as exc_info:
            HeaderParser().parse(ByteCursor(data))

        assert exc_info.value.reason == FormatErrorReason.BAD_SIGNATURE

    def test_short_input_is_bad_signature(self):
        """Test that input shorter than the signature is rejected as such."""
        with pytest.raises(FormatError) as exc_info:
            HeaderParser().parse(ByteCursor(b"DBRAW"))

        assert exc_info.value.reason == FormatErrorReason.BAD_SIGNATURE

    @pytest.mark.parametrize(
        "version, label",
        [(0x00000001, "1.0"), (0x00010001, "1.1"), (0x00000003, "3.0"), (0x00020000, "0.2")],
    )
    def test_unsupported_version(self, version, label):
        """Test that unknown versions are rejected with minor.major in the message."""
        data = b"DBRAWOPL" + struct.pack("<I", version) + bytes(16)

        with pytest.raises(FormatError, match=f"this is version {label}") as exc_info:
            HeaderParser().parse(ByteCursor(data))

        assert exc_info.value.reason == FormatErrorReason.UNSUPPORTED_VERSION


class TestV1BodyDecoder:
    """Test cases for DRO 1.0 bodies."""

    def _decode(self, data):
        cursor = ByteCursor(data)
        version = HeaderParser().parse(cursor)
        decoder = create_decoder(version, cursor)
        assert isinstance(decoder, V1BodyDecoder)
        return decoder, list(decoder.decode())

    def test_all_opcodes(self, sample_v1_data):
        """Test delays, chip select, escape and plain writes."""
        decoder, events = self._decode(sample_v1_data)

        assert events == [
            DecodedEvent(1010, 0x01, 0x20),
            DecodedEvent(0, 0xB0, 0x31),
        ]
        assert decoder.header.length_ms == 1010
        assert decoder.chip_warning.triggered

    def test_one_byte_hardware_type(self, build_v1):
        """Test the hardware type is one byte when not followed by three zeros."""
        decoder, events = self._decode(build_v1([0xB0, 0x00, 0x20, 0x00], hardware_type=1))

        assert decoder.header.hardware_type == 1
        assert decoder.header.hardware_type_width == 1
        assert events == [DecodedEvent(0, 0xB0, 0x00), DecodedEvent(0, 0x20, 0x00)]

    def test_four_byte_hardware_type(self, build_v1):
        """Test three zero bytes after the hardware type are taken as padding."""
        decoder, events = self._decode(
            build_v1([0x20, 0x01], hardware_type=2, wide_hardware=True)
        )

        assert decoder.header.hardware_type == 2
        assert decoder.header.hardware_type_width == 4
        assert events == [DecodedEvent(0, 0x20, 0x01)]

    def test_hardware_probe_consumes_zero_stream_bytes(self, build_v1):
        """Test the width probe also swallows a stream starting with three zeros."""
        # Written as a 1-byte type followed by "delay 1, delay 1, write 0x20"
        stream = [0x00, 0x00, 0x00, 0x00, 0x20, 0x05, 0x01]
        decoder, events = self._decode(build_v1(stream, length_bytes=4))

        assert decoder.header.hardware_type_width == 4
        # What is left is read as "delay 33, write 0x05"
        assert events == [DecodedEvent(33, 0x05, 0x01)]

    def test_length_bounds_stream(self, build_v1):
        """Test decoding stops once length_bytes have been consumed."""
        data = build_v1([0x20, 0x01, 0x40, 0x3F, 0x60, 0xF0], length_bytes=4)
        _, events = self._decode(data)

        assert events == [DecodedEvent(0, 0x20, 0x01), DecodedEvent(0, 0x40, 0x3F)]

    def test_operands_count_toward_length(self, build_v1):
        """Test an opcode that starts before the limit is read in full."""
        data = build_v1([0x00, 0x04, 0x20, 0x01, 0x40, 0x3F], length_bytes=3)
        _, events = self._decode(data)

        assert events == [DecodedEvent(5, 0x20, 0x01)]

    def test_trailing_delay_is_dropped(self, build_v1):
        """Test a delay after the last write produces no event."""
        _, events = self._decode(build_v1([0x20, 0x01, 0x01, 0xFF, 0xFF]))

        assert events == [DecodedEvent(0, 0x20, 0x01)]

    def test_truncated_stream(self, build_v1):
        """Test that a stream shorter than length_bytes is rejected."""
        data = build_v1([0x20, 0x01, 0x40], length_bytes=4)

        with pytest.raises(FormatError) as exc_info:
            self._decode(data)

        assert exc_info.value.reason == FormatErrorReason.TRUNCATED

    def test_chip_warning_once(self, build_v1, caplog):
        """Test the multi-chip warning is logged once per decode."""
        data = build_v1([0x02, 0x20, 0x01, 0x03, 0x02, 0x40, 0x00])

        with caplog.at_level(logging.WARNING):
            _, events = self._decode(data)

        assert len(events) == 2
        warnings = [r for r in caplog.records if MULTI_CHIP_MESSAGE in r.getMessage()]
        assert len(warnings) == 1

    def test_data_length_logged(self, sample_v1_data, caplog):
        """Test the stream size is reported."""
        with caplog.at_level(logging.INFO):
            self._decode(sample_v1_data)

        assert "Data is 11 bytes long." in caplog.text


class TestV2BodyDecoder:
    """Test cases for DRO 2.0 bodies."""

    def _decode(self, data):
        cursor = ByteCursor(data)
        version = HeaderParser().parse(cursor)
        decoder = create_decoder(version, cursor)
        assert isinstance(decoder, V2BodyDecoder)
        return decoder, list(decoder.decode())

    def test_sample(self, sample_v2_data):
        """Test delays and codemap lookups."""
        decoder, events = self._decode(sample_v2_data)

        assert events == [
            DecodedEvent(0, 0x20, 0x01),
            DecodedEvent(10, 0xB0, 0x31),
            DecodedEvent(256, 0x20, 0x02),
        ]
        assert decoder.header.codemap == b"\x20\xb0"
        assert decoder.header.data_length == 12
        assert decoder.chip_warning.triggered

    def test_long_delay(self, build_v2):
        """Test long delays are (data + 1) * 256 ms."""
        _, events = self._decode(build_v2([(0xFE, 0xFF), (0xFE, 0x01), (0x00, 0x07)]))

        assert events == [DecodedEvent(65536 + 512, 0x20, 0x07)]

    def test_short_delay_checked_before_codemap(self, build_v2):
        """Test an index equal to the short delay code is always a delay."""
        data = build_v2([(0x00, 0x05)], codemap=b"\x20", short_delay=0x00, long_delay=0x01)
        _, events = self._decode(data)

        assert events == []

    def test_second_chip_dropped(self, build_v2, caplog):
        """Test second-chip writes are never emitted and warn once."""
        records = [(0x80, 0x20), (0x80, 0x3F), (0x00, 0x01), (0x80, 0x20)]

        with caplog.at_level(logging.WARNING):
            decoder, events = self._decode(build_v2(records, codemap=b"\xb4"))

        assert events == [DecodedEvent(0, 0xB4, 0x01)]
        warnings = [r for r in caplog.records if MULTI_CHIP_MESSAGE in r.getMessage()]
        assert len(warnings) == 1

    def test_second_chip_without_key_on(self, build_v2, caplog):
        """Test second-chip writes that are not key-on do not warn."""
        records = [(0x80, 0x1F), (0x81, 0x20)]

        with caplog.at_level(logging.WARNING):
            decoder, events = self._decode(build_v2(records, codemap=b"\xb0\x40"))

        assert events == []
        assert not decoder.chip_warning.triggered
        assert MULTI_CHIP_MESSAGE not in caplog.text

    def test_second_chip_outside_codemap(self, build_v2):
        """Test a second-chip index past the codemap is dropped quietly."""
        decoder, events = self._decode(build_v2([(0x85, 0x20), (0x00, 0x01)]))

        assert events == [DecodedEvent(0, 0x20, 0x01)]
        assert not decoder.chip_warning.triggered

    def test_codemap_index_out_of_range(self, build_v2):
        """Test a first-chip index past the codemap is rejected."""
        with pytest.raises(FormatError, match="outside the 1 entry codemap") as exc_info:
            self._decode(build_v2([(0x05, 0x01)]))

        assert exc_info.value.reason == FormatErrorReason.CODEMAP_INDEX_OUT_OF_RANGE

    def test_nonzero_format(self, build_v2):
        """Test a non-interleaved data arrangement is rejected."""
        with pytest.raises(FormatError, match="Unknown data arrangement") as exc_info:
            self._decode(build_v2([], data_format=1))

        assert exc_info.value.reason == FormatErrorReason.UNSUPPORTED_ARRANGEMENT

    def test_compressed(self, build_v2):
        """Test compressed bodies are rejected."""
        with pytest.raises(FormatError, match="Compression") as exc_info:
            self._decode(build_v2([], compression=1))

        assert exc_info.value.reason == FormatErrorReason.COMPRESSED

    def test_codemap_limit(self, build_v2):
        """Test 128 codemap entries are accepted and 129 are not."""
        _, events = self._decode(build_v2([(0x7F, 0x01)], codemap=bytes(range(128))))
        assert events == [DecodedEvent(0, 0x7F, 0x01)]

        with pytest.raises(FormatError, match="Too long codemap") as exc_info:
            self._decode(build_v2([], codemap=bytes(129)))

        assert exc_info.value.reason == FormatErrorReason.CODEMAP_TOO_LONG

    def test_truncated_records(self, build_v2):
        """Test fewer records than length_pairs is rejected."""
        with pytest.raises(FormatError) as exc_info:
            self._decode(build_v2([(0x00, 0x01)], length_pairs=2))

        assert exc_info.value.reason == FormatErrorReason.TRUNCATED


class TestDROReader:
    """Test cases for DROReader."""

    def test_read_file(self, dro_file):
        """Test reading a DRO file from disk."""
        dro = DROReader.read(dro_file)

        assert dro.header.version == DROVersion.V2
        assert len(dro.events) == 3
        assert dro.total_delay == 266
        assert dro.multiple_chips is True

    def test_missing_file(self, tmp_path):
        """Test a missing path raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            DROReader.read(tmp_path / "missing.dro")

    def test_can_read_check(self, dro_file, tmp_path):
        """Test file format detection."""
        assert DROReader.can_read(dro_file) is True

        other = tmp_path / "song.imf"
        other.write_bytes(bytes(16))
        assert DROReader.can_read(other) is False
        assert DROReader.can_read(tmp_path / "missing.dro") is False

    def test_get_file_info(self, dro_file):
        """Test getting header info without decoding the body."""
        info = DROReader.get_file_info(dro_file)

        assert info["valid"] is True
        assert info["version"] == "2.0"
        assert info["length_ms"] == 266
        assert info["data_length"] == 12
        assert info["codemap_length"] == 2
