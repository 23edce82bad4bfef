"""Test configuration and fixtures."""

import struct

import pytest

SIGNATURE = b"DBRAWOPL"
VERSION_1 = 0x00010000
VERSION_2 = 0x00000002

# Delay codes that do not collide with low codemap indices
SHORT_DELAY = 0xFF
LONG_DELAY = 0xFE


def build_dro_v1(stream, length_bytes=None, length_ms=0, hardware_type=0, wide_hardware=False):
    """Build a DRO 1.0 file around an opcode stream."""
    stream = bytes(stream)
    if length_bytes is None:
        length_bytes = len(stream)

    data = SIGNATURE + struct.pack("<III", VERSION_1, length_ms, length_bytes)
    if wide_hardware:
        data += struct.pack("<I", hardware_type)
    else:
        data += bytes([hardware_type])
    return data + stream


def build_dro_v2(
    records,
    codemap=b"\x20",
    short_delay=SHORT_DELAY,
    long_delay=LONG_DELAY,
    length_pairs=None,
    length_ms=0,
    data_format=0,
    compression=0,
    codemap_length=None,
):
    """Build a DRO 2.0 file from (index, data) records."""
    codemap = bytes(codemap)
    if length_pairs is None:
        length_pairs = len(records)
    if codemap_length is None:
        codemap_length = len(codemap)

    data = SIGNATURE + struct.pack(
        "<III6B",
        VERSION_2,
        length_pairs,
        length_ms,
        0,
        data_format,
        compression,
        short_delay,
        long_delay,
        codemap_length,
    )
    data += codemap
    for index, value in records:
        data += bytes([index, value])
    return data


def parse_imf(data, imf_type=0):
    """Split IMF data into (delay, register, data) records and the trailing bytes."""
    offset = 4 if imf_type == 0 else 2
    # Initial silence
    assert data[offset : offset + 2] == b"\x00\x00"
    offset += 2

    if imf_type == 1:
        end = struct.unpack_from("<H", data, 0)[0]
    else:
        end = len(data) - 2

    records = []
    while offset < end:
        delay, register, value = struct.unpack_from("<HBB", data, offset)
        records.append((delay, register, value))
        offset += 4

    # Closing zero delay
    assert data[offset : offset + 2] == b"\x00\x00"
    return records, data[offset + 2 :]


@pytest.fixture
def empty_v2_data():
    """DRO 2.0 file with no codemap and no records."""
    return build_dro_v2([], codemap=b"")


@pytest.fixture
def sample_v1_data():
    """DRO 1.0 file using every opcode."""
    stream = [
        0x00, 0x09,  # delay 10 ms
        0x01, 0xE7, 0x03,  # delay 1000 ms
        0x02,  # chip select
        0x04, 0x01, 0x20,  # escaped write 0x01 = 0x20
        0xB0, 0x31,  # write 0xB0 = 0x31
    ]
    return build_dro_v1(stream, length_ms=1010)


@pytest.fixture
def sample_v2_data():
    """DRO 2.0 file with delays, two registers and a second-chip write."""
    records = [
        (0x00, 0x01),  # 0x20 = 0x01
        (SHORT_DELAY, 0x09),  # delay 10 ms
        (0x01, 0x31),  # 0xB0 = 0x31
        (0x81, 0x20),  # second chip key on, dropped
        (LONG_DELAY, 0x00),  # delay 256 ms
        (0x00, 0x02),  # 0x20 = 0x02
    ]
    return build_dro_v2(records, codemap=b"\x20\xb0", length_ms=266)


@pytest.fixture
def dro_file(tmp_path, sample_v2_data):
    """Write the sample DRO 2.0 data to a file."""
    path = tmp_path / "song.dro"
    path.write_bytes(sample_v2_data)
    return path


@pytest.fixture
def build_v1():
    """Return the DRO 1.0 builder."""
    return build_dro_v1


@pytest.fixture
def build_v2():
    """Return the DRO 2.0 builder."""
    return build_dro_v2


@pytest.fixture
def read_imf():
    """Return the IMF record parser."""
    return parse_imf
