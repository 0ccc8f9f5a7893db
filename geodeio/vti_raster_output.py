"""Writing raster images as VTK ImageData (.vti) files."""

from __future__ import annotations

import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import ClassVar, Union

from .image_input import RasterImage


def _image_extent(raster: RasterImage) -> str:
    parts = [
        f"0 {raster.nb_cells_in_direction(d) - 1}" for d in range(raster.dimension)
    ]
    parts.extend("0 0" for _ in range(raster.dimension, 3))
    return " ".join(parts)


def _write_point_data(piece: ET.Element, raster: RasterImage) -> None:
    point_data = ET.SubElement(piece, "PointData", {"Scalars": "Color"})
    data_array = ET.SubElement(
        point_data,
        "DataArray",
        {
            "type": "UInt8",
            "Name": "Color",
            "format": "ascii",
            "NumberOfComponents": "3",
        },
    )
    low, high = 255, 0
    values = []
    for cell in range(raster.nb_cells()):
        color = raster.color(cell)
        channels = (color.red, color.green, color.blue)
        values.append(f"{color.red} {color.green} {color.blue} ")
        low = min(low, *channels)
        high = max(high, *channels)
    data_array.set("RangeMin", str(low))
    data_array.set("RangeMax", str(high))
    data_array.text = "".join(values)


def raster_to_xml(raster: RasterImage) -> str:
    """Return the VTK ImageData document describing the raster colors."""
    root = ET.Element(
        "VTKFile",
        {
            "type": "ImageData",
            "version": "1.0",
            "byte_order": "LittleEndian",
            "header_type": "UInt32",
        },
    )
    extent = _image_extent(raster)
    image_data = ET.SubElement(
        root,
        "ImageData",
        {
            "WholeExtent": extent,
            "Origin": "0 0 0",
            "Spacing": "1 1 1",
            "Direction": "1 0 0 0 1 0 0 0 1",
        },
    )
    piece = ET.SubElement(image_data, "Piece", {"Extent": extent})
    _write_point_data(piece, raster)
    ET.indent(root, space="  ")
    return '<?xml version="1.0"?>\n' + ET.tostring(root, encoding="unicode") + "\n"


class VTIRasterImageOutput:
    """Writer of 2D or 3D raster images to .vti files."""

    extension: ClassVar[str] = "vti"

    def __init__(self, filename: Union[str, os.PathLike]) -> None:
        self.filename = os.fspath(filename)

    def write(self, raster: RasterImage) -> list[str]:
        Path(self.filename).write_text(raster_to_xml(raster), encoding="utf-8")
        return [self.filename]