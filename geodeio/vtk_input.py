"""Reading VTK XML files: root checks, appended data and data arrays as attributes."""

from __future__ import annotations

import os
import re
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Optional, Sequence, Union

from .attributes import AttributeManager
from .vtk_decoding import (
    HeaderType,
    ValueType,
    decode_compressed,
    decode_uncompressed,
    read_ascii_floats,
    read_ascii_integers,
    read_ascii_uint8,
)

_INDEX_MAX = 2**32 - 1
_INDEX = re.compile(r"\+?\d+")
_UINT_PREFIX = re.compile(r"\s*\+?(\d+)")


class VTKError(ValueError):
    """Raised when a VTK file is missing, malformed or unsupported."""


def match(query: str, ref: str) -> bool:
    """True when query both starts and ends with ref."""
    return query.startswith(ref) and query.endswith(ref)


def _parse_index(text: str) -> Optional[int]:
    stripped = text.strip()
    if not _INDEX.fullmatch(stripped):
        return None
    value = int(stripped)
    return value if value <= _INDEX_MAX else None


def _parse_uint_prefix(text: str) -> int:
    found = _UINT_PREFIX.match(text)
    return int(found.group(1)) if found else 0


def _parse_document(filename: str, context: str) -> ET.Element:
    try:
        content = Path(filename).read_bytes()
    except OSError as error:
        raise VTKError(f"{context} Error while opening file: {filename}") from error
    try:
        return ET.fromstring(content)
    except ET.ParseError as error:
        raise VTKError(
            f"{context} Error {error} while parsing file: {filename}"
        ) from error


class VTKReader(ABC):
    """Base reader of VTK XML files holding objects of one VTK type."""

    def __init__(self, filename: Union[str, os.PathLike], vtk_type: str) -> None:
        self.filename = os.fspath(filename)
        self.vtk_type = vtk_type
        document = _parse_document(self.filename, "[VTKInput]")
        self._root = document if document.tag == "VTKFile" else ET.Element("VTKFile")
        self.mesh: Any = None
        self.little_endian = True
        self.compressed = False
        self.header_type = HeaderType.UINT32
        self._appended_data = ""

    def read_file(self) -> Any:
        """Read every VTK object of the file and return the resulting mesh."""
        self._read_root_attributes()
        self._read_appended_data()
        for vtk_object in self._root.findall(self.vtk_type):
            self.read_vtk_object(vtk_object)
        return self.mesh

    @abstractmethod
    def read_vtk_object(self, vtk_object: ET.Element) -> None:
        """Fill the mesh from one VTK object node."""

    def read_attribute(self, node: ET.Element, name: str) -> int:
        value = _parse_index(node.get(name, ""))
        if value is None:
            raise VTKError(
                f"[VTKInput::read_attribute] Failed to read attribute: {name}"
            )
        return value

    def _read_array(
        self,
        data: ET.Element,
        value_type: ValueType,
        ascii_reader: Callable[[str], list],
    ) -> list:
        data_format = data.get("format", "")
        if match(data_format, "appended"):
            return self.decode(self._appended_slice(data), value_type)
        text = (data.text or "").strip()
        if match(data_format, "ascii"):
            return ascii_reader(text)
        return self.decode(text, value_type)

    def read_integer_data_array(self, data: ET.Element, value_type: ValueType) -> list[int]:
        return self._read_array(data, value_type, read_ascii_integers)

    def read_uint8_data_array(self, data: ET.Element) -> list[int]:
        return self._read_array(data, ValueType.UINT8, read_ascii_uint8)

    def read_float_data_array(self, data: ET.Element) -> list[float]:
        return self._read_array(data, ValueType.FLOAT64, read_ascii_floats)

    def build_attribute(
        self,
        manager: AttributeManager,
        name: str,
        values: Sequence,
        nb_components: int,
        offset: int,
    ) -> None:
        """Store values as attribute name, grouped by nb_components, from element offset."""
        values = list(values)
        if nb_components < 1 or len(values) % nb_components:
            raise VTKError(
                "[VTKInput::build_attribute] Number of attribute values is not "
                "a multiple of number of components"
            )
        if name in manager:
            return
        zero = type(values[0])() if values else 0
        if nb_components == 1:
            attribute = manager.find_or_create_attribute(name, zero)
            for index, value in enumerate(values):
                attribute.set_value(index + offset, value)
            return
        attribute = manager.find_or_create_attribute(name, [zero] * nb_components)
        starts = range(0, len(values), nb_components)
        for index, start in enumerate(starts):
            attribute.set_value(index + offset, values[start : start + nb_components])

    def read_attribute_data(
        self, data: ET.Element, offset: int, manager: AttributeManager
    ) -> None:
        name = data.get("Name", "")
        data_type = data.get("type", "")
        nb_components = 1
        if data.get("NumberOfComponents") is not None:
            nb_components = self.read_attribute(data, "NumberOfComponents")
        if match(data_type, "Float64") or match(data_type, "Float32"):
            values = self.read_float_data_array(data)
            self.build_attribute(manager, name, values, nb_components, offset)
        elif any(match(data_type, kind) for kind in ("Int64", "Int32", "UInt64")):
            self.read_attribute(data, "RangeMin")
            max_value = self.read_attribute(data, "RangeMax")
            value_type = ValueType.UINT32 if max_value < _INDEX_MAX else ValueType.INT64
            values = self.read_integer_data_array(data, value_type)
            self.build_attribute(manager, name, values, nb_components, offset)
        elif match(data_type, "Int8"):
            return
        elif match(data_type, "UInt8"):
            values = self.read_uint8_data_array(data)
            self.build_attribute(manager, name, values, nb_components, offset)
        else:
            raise VTKError(
                f"[VTKInput::read_data] Attribute of type {data_type} is not supported"
            )

    def read_data(
        self, data_node: Optional[ET.Element], offset: int, manager: AttributeManager
    ) -> None:
        if data_node is None:
            return
        for data in data_node.findall("DataArray"):
            self.read_attribute_data(data, offset, manager)

    def decode(self, text: str, value_type: ValueType) -> list:
        if self.compressed:
            return decode_compressed(text, value_type, self.header_type)
        return decode_uncompressed(text, value_type, self.header_type)

    def _appended_slice(self, data: ET.Element) -> str:
        offset = _parse_uint_prefix(data.get("offset", ""))
        return self._appended_data[offset:]

    def _read_root_attributes(self) -> None:
        root = self._root
        if not match(root.get("type", ""), self.vtk_type):
            raise VTKError(
                "[VTKInput::read_root_attributes] VTK File type should be "
                f"{self.vtk_type}"
            )
        self.little_endian = match(root.get("byte_order", ""), "LittleEndian")
        if not self.little_endian:
            raise VTKError(
                "[VTKInput::read_root_attributes] Big Endian not supported"
            )
        compressor = root.get("compressor", "")
        if compressor and not match(compressor, "vtkZLibDataCompressor"):
            raise VTKError(
                "[VTKInput::read_root_attributes] Only vtkZLibDataCompressor "
                "is supported for now"
            )
        self.compressed = bool(compressor)
        header_type = root.get("header_type")
        if header_type is None:
            return
        if match(header_type, "UInt64"):
            self.header_type = HeaderType.UINT64
        elif match(header_type, "UInt32"):
            self.header_type = HeaderType.UINT32
        else:
            raise VTKError(
                "[VTKInput::read_root_attributes] Cannot read VTKFile with "
                f"header_type {header_type}. Only UInt32 and Uint64 are accepted"
            )

    def _read_appended_data(self) -> None:
        node = self._root.find("AppendedData")
        if node is None:
            return
        if not match(node.get("encoding", ""), "base64"):
            raise VTKError(
                "[VTKInput::read_appended_data] VTK AppendedData section "
                "should be encoded"
            )
        self._appended_data = (node.text or "").strip()[1:]