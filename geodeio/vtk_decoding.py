"""Decoding of VTK XML data arrays: base64 binary, zlib-compressed and ASCII."""

from __future__ import annotations

import base64
import binascii
import math
import re
import struct
import zlib
from enum import Enum


class VTKDecodeError(ValueError):
    """Raised when VTK data cannot be decoded."""


class ValueType(Enum):
    """Binary value types, each mapped to its little-endian struct code."""

    INT8 = "b"
    UINT8 = "B"
    INT32 = "i"
    UINT32 = "I"
    INT64 = "q"
    UINT64 = "Q"
    FLOAT32 = "f"
    FLOAT64 = "d"

    @property
    def size(self) -> int:
        return struct.calcsize("<" + self.value)


class HeaderType(Enum):
    """Integer type of the byte-count headers in binary data."""

    UINT32 = "I"
    UINT64 = "Q"

    @property
    def size(self) -> int:
        return struct.calcsize("<" + self.value)


def nb_char_needed(item_size: int, nb_values: int) -> int:
    """Number of base64 characters encoding nb_values items of item_size bytes."""
    return int(4 * math.ceil(nb_values * 8.0 * item_size / (6.0 * 4.0)))


def decode_base64(text: str) -> bytes:
    text = text.strip()
    padding = -len(text) % 4
    try:
        return base64.b64decode(text + "=" * padding, validate=True)
    except (binascii.Error, ValueError) as error:
        raise VTKDecodeError(
            "[VTKInput::decode_base64] Error in decoding base64 data"
        ) from error


def _unpack(data: bytes, fmt: str, count: int) -> list:
    return list(struct.unpack_from(f"<{count}{fmt}", data))


def _unpack_values(data: bytes, value_type: ValueType) -> list:
    count = len(data) // value_type.size
    return _unpack(data, value_type.value, count)


def decode_uncompressed(
    text: str, value_type: ValueType, header_type: HeaderType = HeaderType.UINT32
) -> list:
    """Decode a base64 block made of a byte-count header followed by raw values."""
    header_size = header_type.size
    nb_chars = nb_char_needed(header_size, 1)
    header = decode_base64(text[:nb_chars])
    if len(header) < header_size:
        raise VTKDecodeError("[VTKInput::decode] Data header is truncated")
    nb_bytes = _unpack(header, header_type.value, 1)[0]
    nb_data = nb_bytes // value_type.size
    nb_chars_data = nb_char_needed(value_type.size, nb_data)
    decoded = decode_base64(text[: nb_chars + nb_chars_data])
    return _unpack_values(decoded[header_size:], value_type)


def decode_compressed(
    text: str, value_type: ValueType, header_type: HeaderType = HeaderType.UINT32
) -> list:
    """Decode zlib-compressed VTK data: a base64 header of block sizes, then the blocks."""
    header_size = header_type.size
    fixed_length = nb_char_needed(header_size, 3)
    fixed_header = decode_base64(text[:fixed_length])
    if len(fixed_header) < 3 * header_size:
        raise VTKDecodeError("[VTKInput::decode] Compression header is truncated")
    nb_blocks, uncompressed_block_size, _ = _unpack(fixed_header, header_type.value, 3)
    if nb_blocks == 0:
        return []
    nb_characters = nb_char_needed(header_size, nb_blocks)
    optional_header = decode_base64(text[fixed_length : fixed_length + nb_characters])
    if len(optional_header) < nb_blocks * header_size:
        raise VTKDecodeError(
            "[VTKInput::decode] Optional header size is wrong (should be "
            f"{nb_blocks * header_size} bytes, got {len(optional_header)} bytes)"
        )
    block_sizes = _unpack(optional_header, header_type.value, nb_blocks)

    data_offset = nb_char_needed(header_size, 3 + nb_blocks)
    nb_data_chars = math.ceil(sum(block_sizes) * 4.0 / 3.0)
    compressed = decode_base64(text[data_offset : data_offset + nb_data_chars])

    result: list = []
    offset = 0
    for block_size in block_sizes:
        decompressor = zlib.decompressobj()
        try:
            block = decompressor.decompress(compressed[offset:])
        except zlib.error as error:
            raise VTKDecodeError(
                "[VTKInput::decode] Error in zlib decompressing data"
            ) from error
        if not decompressor.eof or len(block) > uncompressed_block_size:
            raise VTKDecodeError("[VTKInput::decode] Error in zlib decompressing data")
        result.extend(_unpack_values(block, value_type))
        offset += block_size
    return result


def _tokens(text: str) -> list[str]:
    return " ".join(text.split()).split(" ")


_INTEGER = re.compile(r"[+-]?\d+")
_INTEGER_PREFIX = re.compile(r"\s*([+-]?\d+)")


def read_ascii_integers(text: str) -> list[int]:
    values = []
    for token in _tokens(text):
        if not _INTEGER.fullmatch(token):
            raise VTKDecodeError("[VTKINPUT::read_ascii_data_array] Failed to read value")
        values.append(int(token))
    return values


def read_ascii_floats(text: str) -> list[float]:
    values = []
    for token in _tokens(text):
        try:
            if "_" in token:
                raise ValueError(token)
            values.append(float(token))
        except ValueError as error:
            raise VTKDecodeError(
                "[VTKINPUT::read_ascii_data_array] Failed to read value"
            ) from error
    return values


def read_ascii_uint8(text: str) -> list[int]:
    """Read bytes leniently: each token's leading integer, 0 if none, wrapped to 0..255."""
    values = []
    for token in _tokens(text):
        found = _INTEGER_PREFIX.match(token)
        values.append(int(found.group(1)) % 256 if found else 0)
    return values