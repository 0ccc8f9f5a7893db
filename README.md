# geodeio

Readers and writers for raster images, reading of VTK XML data arrays and
ImageData grids, and building of boundary-representation models from Gmsh
element records.

## Installation

```
pip install geodeio
```

## Raster images

`geodeio.image_input` reads BMP, JPEG, PNG and TIFF files (through Pillow)
into a `RasterImage`, a 2D or 3D grid of cells that each hold an `RGBColor`.
Images with one or two bands give grey colours; for images with three or four
bands the `R`, `G` and `B` bands are picked out. JPEG, PNG and TIFF are read
with the rows reversed, so cell 0 is the lower-left pixel; BMP keeps the top
row first. A file that cannot be opened raises `ImageReadError`.

```python
from geodeio.image_library import IOImageLibrary, load_raster_image, save_raster_image

IOImageLibrary.initialize()
raster = load_raster_image("picture.png")
print(raster.nb_cells_in_direction(0), raster.nb_cells_in_direction(1))
print(raster.color(0))

save_raster_image(raster, "picture.vti")
```

`input_extensions()` lists the readable extensions (`jpg`, `png`, `bmp`,
`tif`, `tiff`) and `output_extensions(dimension)` the writable ones (`vti`,
for 2D and 3D). An unregistered extension raises `UnknownFormatError`. The
readers can be used directly, for instance `PNGInput("picture.png").read()`.

`geodeio.vti_raster_output` writes a raster as a VTK ImageData file with an
ASCII `UInt8` `Color` point array: `VTIRasterImageOutput("out.vti").write(raster)`
returns the list of written files, and `raster_to_xml(raster)` returns the
document as a string.

## VTK XML input

`geodeio.vtk_decoding` decodes VTK data arrays: base64 blocks with a byte-count
header (`decode_uncompressed`), zlib-compressed blocks (`decode_compressed`),
with `UInt32` or `UInt64` headers (`HeaderType`), and ASCII values
(`read_ascii_integers`, `read_ascii_floats`, `read_ascii_uint8`). Errors raise
`VTKDecodeError`.

`geodeio.vtk_input.VTKReader` is the base class of VTK XML readers. It checks
the root `VTKFile` element (file type, little-endian byte order, optional
`vtkZLibDataCompressor`, header type), loads the `AppendedData` section, and
turns `DataArray` nodes of type `Float32`, `Float64`, `Int32`, `Int64`,
`UInt64` and `UInt8` into attributes of an `AttributeManager`
(`geodeio.attributes`); `Int8` arrays are skipped, other types raise
`VTKError`. Subclasses implement `read_vtk_object`.

`geodeio.vti_grid.VTIGridReader(filename, dimension).read_file()` reads an
ImageData file into a `Grid` holding its origin, cell counts, cell directions
scaled by the spacing, and its point and cell data. `is_loadable(filename,
dimension)` tells 2D grids (no third extent) from 3D ones.

## Gmsh elements

`geodeio.gmsh` turns single Gmsh element records (points, edges, triangles,
quadrangles, tetrahedra, hexahedra, prisms and pyramids) into components of a
`BRep` from `geodeio.brep`. Each elementary entity becomes one corner, line,
surface or block; element vertices are linked to unique vertices numbered from
the Gmsh node tags minus one.

```python
from geodeio.brep import BRep, ComponentType
from geodeio.gmsh import GmshIdMaps, create_gmsh_element

brep = BRep()
ids = GmshIdMaps()
triangle = create_gmsh_element(2, 1, 1, ["1", "2", "3"])
triangle.add_element(brep, ids)
print(brep.components(ComponentType.SURFACE))
```

`registered_element_types()` lists the Gmsh element type numbers understood;
any other number raises `GmshError`.

## What it does not do

- There is no reader for whole `.msh` files: node sections, element sections
  and physical groups are not parsed, only individual element records are
  turned into model components.
- Meshes and models are not written to files; the only writer is the raster
  image `.vti` writer.
- There are no readers for VTK PolyData or UnstructuredGrid files beyond the
  `VTKReader` base class and the ImageData grid reader.
- There is no command-line tool.

## Tests

```
pip install geodeio[test]
pytest
```