import base64
import struct
import zlib

import pytest

from geodeio.vtk_decoding import (
    HeaderType,
    ValueType,
    VTKDecodeError,
    decode_base64,
    decode_compressed,
    decode_uncompressed,
    nb_char_needed,
    read_ascii_floats,
    read_ascii_integers,
    read_ascii_uint8,
)


def _uncompressed(values, fmt, header_fmt="I"):
    payload = struct.pack(f"<{len(values)}{fmt}", *values)
    raw = struct.pack("<" + header_fmt, len(payload)) + payload
    return base64.b64encode(raw).decode()


def _compressed(values, fmt, header_fmt="I"):
    payload = struct.pack(f"<{len(values)}{fmt}", *values)
    block = zlib.compress(payload)
    header = struct.pack(f"<4{header_fmt}", 1, len(payload), len(payload), len(block))
    return base64.b64encode(header).decode() + base64.b64encode(block).decode()


def test_nb_char_needed_for_headers():
    assert nb_char_needed(4, 3) == 16
    assert nb_char_needed(8, 3) == 32


def test_value_type_sizes_drive_char_count():
    assert nb_char_needed(ValueType.UINT8.size, 3) == 4
    assert nb_char_needed(ValueType.FLOAT64.size, 1) == 12
    assert nb_char_needed(HeaderType.UINT64.size, 3) == 32


def test_decode_base64_round_trip_and_missing_padding():
    assert decode_base64(base64.b64encode(b"vtk data").decode()) == b"vtk data"
    assert decode_base64("YQ") == b"a"


def test_decode_base64_invalid():
    with pytest.raises(VTKDecodeError):
        decode_base64("a!b?")


@pytest.mark.parametrize(
    "values, value_type",
    [
        ([1, 2, 3], ValueType.UINT32),
        ([-5, 7], ValueType.INT64),
        ([0.5, -1.25, 3.0], ValueType.FLOAT64),
        ([0, 255, 17], ValueType.UINT8),
    ],
)
def test_decode_uncompressed_round_trip(values, value_type):
    text = _uncompressed(values, value_type.value)
    assert decode_uncompressed(text, value_type) == values


def test_decode_uncompressed_uint64_header():
    text = _uncompressed([10, 20], "I", header_fmt="Q")
    assert decode_uncompressed(text, ValueType.UINT32, HeaderType.UINT64) == [10, 20]


@pytest.mark.parametrize("header", [HeaderType.UINT32, HeaderType.UINT64])
def test_decode_compressed_round_trip(header):
    values = [1.5, 2.5, -3.75, 100.0]
    text = _compressed(values, "d", header_fmt=header.value)
    assert decode_compressed(text, ValueType.FLOAT64, header) == values


def test_decode_compressed_multiple_blocks():
    first = struct.pack("<4I", 1, 2, 3, 4)
    second = struct.pack("<2I", 5, 6)
    blocks = [zlib.compress(first), zlib.compress(second)]
    header = struct.pack(
        "<5I", 2, len(first), len(second), len(blocks[0]), len(blocks[1])
    )
    text = base64.b64encode(header).decode() + base64.b64encode(b"".join(blocks)).decode()
    assert decode_compressed(text, ValueType.UINT32) == [1, 2, 3, 4, 5, 6]


def test_decode_compressed_no_block():
    text = base64.b64encode(struct.pack("<3I", 0, 0, 0)).decode()
    assert decode_compressed(text, ValueType.UINT32) == []


def test_decode_compressed_corrupted_data():
    header = struct.pack("<4I", 1, 8, 8, 6)
    text = base64.b64encode(header).decode() + base64.b64encode(b"notzlb").decode()
    with pytest.raises(VTKDecodeError):
        decode_compressed(text, ValueType.UINT32)


def test_read_ascii_integers():
    assert read_ascii_integers("1  -2\n\t+3 ") == [1, -2, 3]
    with pytest.raises(VTKDecodeError):
        read_ascii_integers("1 2.5")
    with pytest.raises(VTKDecodeError):
        read_ascii_integers("")


def test_read_ascii_floats():
    assert read_ascii_floats("0.5 1e3 -2") == [0.5, 1000.0, -2.0]
    with pytest.raises(VTKDecodeError):
        read_ascii_floats("1.0 abc")


def test_read_ascii_uint8_is_lenient():
    assert read_ascii_uint8("12 255 0") == [12, 255, 0]
    assert read_ascii_uint8("abc 7x") == [0, 7]
    assert read_ascii_uint8("256") == [0]