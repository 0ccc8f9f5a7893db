"""Raster image readers and VTI writer, VTK XML grid reading, and Gmsh elements into BRep models."""

__version__ = "0.1.0"