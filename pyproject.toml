[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "geodeio"
version = "0.1.0"
description = "Raster image readers, a VTI writer, VTK XML grid reading and Gmsh element building"
requires-python = ">=3.10"
keywords = ["vtk", "vti", "gmsh", "raster", "image", "mesh", "geometry"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["geodeio"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
