"""Reading regular grids from VTK ImageData (.vti) files."""

from __future__ import annotations

import math
import os
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Callable, TypeVar, Union

from .attributes import AttributeManager
from .vtk_input import VTKError, VTKReader, _parse_document

_T = TypeVar("_T")


@dataclass
class GridAttributes:
    """Geometry of a grid as described by an ImageData node."""

    origin: list[float]
    cells_number: list[int]
    cells_length: list[float]
    cell_directions: list[list[float]]

    @classmethod
    def default(cls, dimension: int) -> "GridAttributes":
        return cls(
            origin=[0.0] * dimension,
            cells_number=[0] * dimension,
            cells_length=[1.0] * dimension,
            cell_directions=[
                [1.0 if i == d else 0.0 for i in range(dimension)]
                for d in range(dimension)
            ],
        )


@dataclass
class Grid:
    """A regular grid with attributes on its vertices and cells."""

    origin: list[float]
    cells_number: list[int]
    cell_directions: list[list[float]]
    grid_vertex_attribute_manager: AttributeManager = field(default_factory=AttributeManager)
    cell_attribute_manager: AttributeManager = field(default_factory=AttributeManager)

    @property
    def dimension(self) -> int:
        return len(self.cells_number)

    def nb_cells(self) -> int:
        return math.prod(self.cells_number)

    def nb_grid_vertices(self) -> int:
        return math.prod(n + 1 for n in self.cells_number)


def _convert(tokens: list[str], index: int, converter: Callable[[str], _T], name: str) -> _T:
    try:
        return converter(tokens[index])
    except (IndexError, ValueError) as error:
        raise VTKError(f"[VTIGridInput] Failed to read {name} value") from error


def _to_index(text: str) -> int:
    value = int(text)
    if value < 0:
        raise ValueError(text)
    return value


def read_grid_attributes(node: ET.Element, dimension: int) -> GridAttributes:
    """Read WholeExtent, Origin, Spacing and Direction; directions are scaled by spacing."""
    attributes = GridAttributes.default(dimension)
    for name, value in node.attrib.items():
        tokens = value.split()
        if name == "WholeExtent":
            for d in range(dimension):
                start = _convert(tokens, 2 * d, _to_index, name)
                end = _convert(tokens, 2 * d + 1, _to_index, name)
                if end < start:
                    raise VTKError("[VTIGridInput] WholeExtent end is before its start")
                attributes.cells_number[d] = end - start
        elif name == "Origin":
            attributes.origin = [_convert(tokens, d, float, name) for d in range(dimension)]
        elif name == "Spacing":
            attributes.cells_length = [
                _convert(tokens, d, float, name) for d in range(dimension)
            ]
        elif name == "Direction":
            attributes.cell_directions = [
                [_convert(tokens, 3 * d + i, float, name) for i in range(dimension)]
                for d in range(dimension)
            ]
    attributes.cell_directions = [
        [component * length for component in direction]
        for direction, length in zip(attributes.cell_directions, attributes.cells_length)
    ]
    return attributes


def is_loadable(filename: Union[str, os.PathLike], dimension: int) -> bool:
    """Whether the file holds a grid of the given dimension (2D grids have no third extent)."""
    path = os.fspath(filename)
    document = _parse_document(path, "[VTIGridInput::is_loadable]")
    node = document.find("ImageData") if document.tag == "VTKFile" else None
    if node is None:
        node = ET.Element("ImageData")
    nb_cells_3d = read_grid_attributes(node, 3).cells_number[2]
    return nb_cells_3d == 0 if dimension == 2 else nb_cells_3d > 0


class VTIGridReader(VTKReader):
    """Reads a .vti file into a Grid with its point and cell data."""

    def __init__(self, filename: Union[str, os.PathLike], dimension: int) -> None:
        super().__init__(filename, "ImageData")
        self.dimension = dimension

    def read_vtk_object(self, vtk_object: ET.Element) -> None:
        self.build_grid(vtk_object)
        for piece in vtk_object.findall("Piece"):
            self.read_data(
                piece.find("PointData"), 0, self.mesh.grid_vertex_attribute_manager
            )
            self.read_data(piece.find("CellData"), 0, self.mesh.cell_attribute_manager)

    def build_grid(self, vtk_object: ET.Element) -> None:
        attributes = read_grid_attributes(vtk_object, self.dimension)
        self.mesh = Grid(
            origin=attributes.origin,
            cells_number=attributes.cells_number,
            cell_directions=attributes.cell_directions,
        )