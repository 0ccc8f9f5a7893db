"""GMSH elements and how each one is added to a boundary representation."""

from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, ClassVar, Dict, Sequence, Tuple, Union

from .brep import BRep, ComponentType

_LOGGER = logging.getLogger(__name__)

GMSH_OFFSET_START = 1

VertexTag = Union[str, int]


class GmshError(ValueError):
    """Raised when a GMSH element is invalid or unknown."""


@dataclass(frozen=True)
class GmshElementID:
    """A GMSH entity identifier for a component type."""

    type: ComponentType
    id: int


@dataclass
class GmshIdMaps:
    """Maps GMSH entity identifiers to the model components created for them."""

    elementary_ids: Dict[GmshElementID, uuid.UUID] = field(default_factory=dict)
    physical_ids: Dict[GmshElementID, uuid.UUID] = field(default_factory=dict)

    def contains_elementary_id(self, elementary_id: GmshElementID) -> bool:
        return elementary_id in self.elementary_ids

    def contains_physical_id(self, physical_id: GmshElementID) -> bool:
        return physical_id in self.physical_ids


def _string_to_index(text: VertexTag) -> int:
    value = int(str(text).strip())
    if value < 0:
        raise ValueError(text)
    return value


class GMSHElement(ABC):
    """A GMSH element with its entity tags and vertex tags."""

    component_type: ClassVar[ComponentType]

    def __init__(
        self,
        physical_entity_id: int,
        elementary_entity_id: int,
        nb_vertices: int,
        vertex_ids: Sequence[VertexTag],
    ) -> None:
        if elementary_entity_id <= 0:
            raise GmshError(
                "[GMSHElement] GMSH tag for elementary entity "
                "(second tag) should not be null"
            )
        self.physical_entity_id = physical_entity_id
        self.elementary_entity_id = elementary_entity_id
        self.nb_vertices = nb_vertices
        self.vertex_ids = [0] * nb_vertices
        try:
            for n in range(nb_vertices):
                self.vertex_ids[n] = _string_to_index(vertex_ids[n])
        except (ValueError, IndexError):
            _LOGGER.error("Wrong GMSH element number of vertices")

    def _component(self, brep: BRep, id_map: GmshIdMaps) -> uuid.UUID:
        gmsh_id = GmshElementID(self.component_type, self.elementary_entity_id)
        if id_map.contains_elementary_id(gmsh_id):
            return id_map.elementary_ids[gmsh_id]
        uid = brep.add_component(self.component_type)
        id_map.elementary_ids[gmsh_id] = uid
        return uid

    def _link_unique_vertices(self, brep: BRep, uid: uuid.UUID, element: int) -> None:
        mesh = brep.component(uid)
        for local, tag in enumerate(self.vertex_ids):
            brep.set_unique_vertex(
                mesh.component_id,
                mesh.element_vertex(element, local),
                tag - GMSH_OFFSET_START,
            )

    @abstractmethod
    def add_element(self, brep: BRep, id_map: GmshIdMaps) -> None:
        """Add this element to the component mapped to its elementary entity."""


class GMSHPoint(GMSHElement):
    component_type = ComponentType.CORNER

    def __init__(
        self,
        physical_entity_id: int,
        elementary_entity_id: int,
        vertex_ids: Sequence[VertexTag],
    ) -> None:
        super().__init__(physical_entity_id, elementary_entity_id, 1, vertex_ids)

    def add_element(self, brep: BRep, id_map: GmshIdMaps) -> None:
        uid = self._component(brep, id_map)
        mesh = brep.component(uid)
        vertex = mesh.create_vertices(1)
        brep.set_unique_vertex(
            mesh.component_id, vertex, self.vertex_ids[0] - GMSH_OFFSET_START
        )


class GMSHEdge(GMSHElement):
    component_type = ComponentType.LINE

    def __init__(
        self,
        physical_entity_id: int,
        elementary_entity_id: int,
        vertex_ids: Sequence[VertexTag],
    ) -> None:
        super().__init__(physical_entity_id, elementary_entity_id, 2, vertex_ids)

    def add_element(self, brep: BRep, id_map: GmshIdMaps) -> None:
        uid = self._component(brep, id_map)
        mesh = brep.component(uid)
        first = mesh.create_vertices(len(self.vertex_ids))
        edge = mesh.create_element((first, first + 1))
        self._link_unique_vertices(brep, uid, edge)


class GMSHSurfacePolygon(GMSHElement):
    component_type = ComponentType.SURFACE

    def add_element(self, brep: BRep, id_map: GmshIdMaps) -> None:
        uid = self._component(brep, id_map)
        mesh = brep.component(uid)
        first = mesh.create_vertices(len(self.vertex_ids))
        polygon = mesh.create_element(range(first, first + len(self.vertex_ids)))
        self._link_unique_vertices(brep, uid, polygon)


class GMSHTriangle(GMSHSurfacePolygon):
    def __init__(
        self,
        physical_entity_id: int,
        elementary_entity_id: int,
        vertex_ids: Sequence[VertexTag],
    ) -> None:
        super().__init__(physical_entity_id, elementary_entity_id, 3, vertex_ids)


class GMSHQuadrangle(GMSHSurfacePolygon):
    def __init__(
        self,
        physical_entity_id: int,
        elementary_entity_id: int,
        vertex_ids: Sequence[VertexTag],
    ) -> None:
        super().__init__(physical_entity_id, elementary_entity_id, 4, vertex_ids)


class GMSHSolidPolyhedron(GMSHElement):
    component_type = ComponentType.BLOCK

    @abstractmethod
    def faces(self) -> Tuple[Tuple[int, ...], ...]:
        """Faces of the polyhedron as local vertex indices, in GMSH ordering."""

    def add_element(self, brep: BRep, id_map: GmshIdMaps) -> None:
        uid = self._component(brep, id_map)
        mesh = brep.component(uid)
        first = mesh.create_vertices(len(self.vertex_ids))
        polyhedron = mesh.create_element(
            range(first, first + len(self.vertex_ids)), self.faces()
        )
        self._link_unique_vertices(brep, uid, polyhedron)


class _FixedPolyhedron(GMSHSolidPolyhedron):
    NB_VERTICES: ClassVar[int]
    FACES: ClassVar[Tuple[Tuple[int, ...], ...]]

    def __init__(
        self,
        physical_entity_id: int,
        elementary_entity_id: int,
        vertex_ids: Sequence[VertexTag],
    ) -> None:
        super().__init__(
            physical_entity_id, elementary_entity_id, self.NB_VERTICES, vertex_ids
        )

    def faces(self) -> Tuple[Tuple[int, ...], ...]:
        return self.FACES


class GMSHTetrahedron(_FixedPolyhedron):
    NB_VERTICES = 4
    FACES = ((0, 1, 2), (0, 2, 3), (1, 3, 2), (0, 3, 1))


class GMSHHexahedron(_FixedPolyhedron):
    NB_VERTICES = 8
    FACES = (
        (0, 1, 2, 3),
        (7, 6, 5, 4),
        (0, 3, 7, 4),
        (1, 5, 6, 2),
        (2, 6, 7, 3),
        (0, 4, 5, 1),
    )


class GMSHPrism(_FixedPolyhedron):
    NB_VERTICES = 6
    FACES = ((0, 1, 2), (5, 4, 3), (0, 2, 5, 3), (0, 3, 4, 1), (1, 4, 5, 2))


class GMSHPyramid(_FixedPolyhedron):
    NB_VERTICES = 5
    FACES = ((0, 3, 4), (0, 4, 1), (4, 3, 2), (1, 4, 2), (0, 1, 2, 3))


_ElementCreator = Callable[[int, int, Sequence[VertexTag]], GMSHElement]

_FACTORY: Dict[int, _ElementCreator] = {
    15: GMSHPoint,
    1: GMSHEdge,
    2: GMSHTriangle,
    3: GMSHQuadrangle,
    4: GMSHTetrahedron,
    5: GMSHHexahedron,
    6: GMSHPrism,
    7: GMSHPyramid,
}


def create_gmsh_element(
    element_type: int,
    physical_entity_id: int,
    elementary_entity_id: int,
    vertex_ids: Sequence[VertexTag],
) -> GMSHElement:
    """Build the GMSH element registered for a GMSH element type number."""
    creator = _FACTORY.get(element_type)
    if creator is None:
        raise GmshError(f"[GMSHElement] GMSH element type {element_type} is not supported")
    return creator(physical_entity_id, elementary_entity_id, vertex_ids)


def registered_element_types() -> Tuple[int, ...]:
    """GMSH element type numbers that can be created, in registration order."""
    return tuple(_FACTORY)