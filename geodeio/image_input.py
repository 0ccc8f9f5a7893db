"""Reading raster images (BMP, JPEG, PNG, TIFF) into RGB raster images."""

from __future__ import annotations

import math
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Iterable, Sequence, Union

from PIL import Image


class ImageReadError(Exception):
    """Raised when an image file cannot be read."""


@dataclass(frozen=True)
class RGBColor:
    """An 8-bit RGB color."""

    red: int = 0
    green: int = 0
    blue: int = 0

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue):
            if not 0 <= channel <= 255:
                raise ValueError(f"Color component {channel} is outside 0..255")


ColorLike = Union[RGBColor, Sequence[int]]


class RasterImage:
    """A 2D or 3D grid of cells, each holding an RGB color."""

    def __init__(self, cells_number: Iterable[int]) -> None:
        dims = tuple(int(n) for n in cells_number)
        if len(dims) not in (2, 3):
            raise ValueError("A raster image must have 2 or 3 dimensions")
        if any(n < 0 for n in dims):
            raise ValueError("Number of cells cannot be negative")
        self._cells_number = dims
        self._colors = [RGBColor()] * math.prod(dims)

    @property
    def dimension(self) -> int:
        return len(self._cells_number)

    def nb_cells_in_direction(self, direction: int) -> int:
        return self._cells_number[direction]

    def nb_cells(self) -> int:
        return len(self._colors)

    def _check_cell(self, cell: int) -> None:
        if not 0 <= cell < len(self._colors):
            raise IndexError(f"Cell {cell} is out of range")

    def color(self, cell: int) -> RGBColor:
        self._check_cell(cell)
        return self._colors[cell]

    def set_color(self, cell: int, color: ColorLike) -> None:
        self._check_cell(cell)
        if not isinstance(color, RGBColor):
            color = RGBColor(*color)
        self._colors[cell] = color


def _to_byte(value: float) -> int:
    return min(255, max(0, int(round(value))))


def _band_values(image: Image.Image, band: int) -> list[int]:
    return [_to_byte(value) for value in image.getdata(band)]


def _rgb_band_indices(image: Image.Image) -> tuple[int, int, int]:
    bands = image.getbands()
    try:
        return bands.index("R"), bands.index("G"), bands.index("B")
    except ValueError as error:
        raise ImageReadError(
            "[ImageInputImpl] Failed to read color component"
        ) from error


def _raster_from_image(image: Image.Image, reverse_y_axis: bool) -> RasterImage:
    if image.mode in ("YCbCr", "CMYK"):
        image = image.convert("RGB")
    elif image.mode == "1":
        image = image.convert("L")
    width, height = image.size
    raster = RasterImage((width, height))
    rows = range(height - 1, -1, -1) if reverse_y_axis else range(height)
    pixels = (i + width * j for j in rows for i in range(width))
    nb_bands = len(image.getbands())
    if nb_bands <= 2:
        grey = _band_values(image, 0)
        for cell, pixel in enumerate(pixels):
            value = grey[pixel]
            raster.set_color(cell, RGBColor(value, value, value))
    elif nb_bands <= 4:
        red_id, green_id, blue_id = _rgb_band_indices(image)
        red = _band_values(image, red_id)
        green = _band_values(image, green_id)
        blue = _band_values(image, blue_id)
        for cell, pixel in enumerate(pixels):
            raster.set_color(cell, RGBColor(red[pixel], green[pixel], blue[pixel]))
    return raster


def read_image(filename: Union[str, os.PathLike], reverse_y_axis: bool = False) -> RasterImage:
    """Read an image file; with reverse_y_axis the first cell is the bottom-left pixel."""
    path = os.fspath(filename)
    try:
        with Image.open(path) as image:
            image.load()
            return _raster_from_image(image, reverse_y_axis)
    except OSError as error:
        raise ImageReadError(f"[ImageInputImpl] Failed to load {path}") from error


class RasterImageInput(ABC):
    """Base of the readers producing a 2D raster image from a file."""

    extensions: ClassVar[tuple[str, ...]] = ()

    def __init__(self, filename: Union[str, os.PathLike]) -> None:
        self.filename = os.fspath(filename)

    @abstractmethod
    def read(self) -> RasterImage:
        """Read the file into a raster image."""


class BMPInput(RasterImageInput):
    extensions = ("bmp",)

    def read(self) -> RasterImage:
        return read_image(self.filename, reverse_y_axis=False)


class JPGInput(RasterImageInput):
    extensions = ("jpg",)

    def read(self) -> RasterImage:
        return read_image(self.filename, reverse_y_axis=True)


class PNGInput(RasterImageInput):
    extensions = ("png",)

    def read(self) -> RasterImage:
        return read_image(self.filename, reverse_y_axis=True)


class TIFFInput(RasterImageInput):
    extensions = ("tif", "tiff")

    def read(self) -> RasterImage:
        return read_image(self.filename, reverse_y_axis=True)