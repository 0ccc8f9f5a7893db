"""Registration of raster image formats and format-dispatching load and save."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

from .image_input import (
    BMPInput,
    JPGInput,
    PNGInput,
    RasterImage,
    RasterImageInput,
    TIFFInput,
)
from .vti_raster_output import VTIRasterImageOutput


class UnknownFormatError(ValueError):
    """Raised when no reader or writer is registered for a file extension."""


_INPUTS: dict[str, type[RasterImageInput]] = {}
_OUTPUTS: dict[int, dict[str, type[VTIRasterImageOutput]]] = {2: {}, 3: {}}


def _register_raster_input() -> None:
    for reader in (JPGInput, PNGInput, BMPInput, TIFFInput):
        for extension in reader.extensions:
            _INPUTS[extension] = reader


def _register_raster_output() -> None:
    for dimension in (2, 3):
        _OUTPUTS[dimension][VTIRasterImageOutput.extension] = VTIRasterImageOutput


class IOImageLibrary:
    """Registers the image readers and writers once."""

    _initialized = False

    @classmethod
    def initialize(cls) -> None:
        if cls._initialized:
            return
        _register_raster_input()
        _register_raster_output()
        cls._initialized = True

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._initialized


def _extension(filename: Union[str, os.PathLike]) -> str:
    return Path(filename).suffix.lstrip(".").lower()


def input_extensions() -> tuple[str, ...]:
    IOImageLibrary.initialize()
    return tuple(_INPUTS)


def output_extensions(dimension: int) -> tuple[str, ...]:
    IOImageLibrary.initialize()
    return tuple(_OUTPUTS.get(dimension, {}))


def load_raster_image(filename: Union[str, os.PathLike]) -> RasterImage:
    """Read a 2D raster image with the reader registered for its extension."""
    IOImageLibrary.initialize()
    extension = _extension(filename)
    reader = _INPUTS.get(extension)
    if reader is None:
        raise UnknownFormatError(f"No raster image reader for extension '{extension}'")
    return reader(filename).read()


def save_raster_image(raster: RasterImage, filename: Union[str, os.PathLike]) -> list[str]:
    """Write a raster image with the writer registered for its extension."""
    IOImageLibrary.initialize()
    extension = _extension(filename)
    writer = _OUTPUTS.get(raster.dimension, {}).get(extension)
    if writer is None:
        raise UnknownFormatError(
            f"No {raster.dimension}D raster image writer for extension '{extension}'"
        )
    return writer(filename).write(raster)