"""A boundary representation model made of meshed components sharing unique vertices."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple


class ComponentType(Enum):
    """Kinds of components making up a boundary representation."""

    CORNER = "Corner"
    LINE = "Line"
    SURFACE = "Surface"
    BLOCK = "Block"


@dataclass(frozen=True)
class ComponentID:
    """Identifies a component by its type and its unique identifier."""

    type: ComponentType
    id: uuid.UUID


@dataclass
class ComponentMesh:
    """Mesh of one component: vertices and elements given by their vertices.

    Elements of blocks also carry their faces, as local vertex indices.
    """

    component_id: ComponentID
    nb_vertices: int = 0
    elements: List[Tuple[int, ...]] = field(default_factory=list)
    faces: List[Tuple[Tuple[int, ...], ...]] = field(default_factory=list)

    def create_vertices(self, count: int) -> int:
        """Add count vertices and return the index of the first one."""
        if count < 0:
            raise ValueError("Cannot create a negative number of vertices")
        first = self.nb_vertices
        self.nb_vertices += count
        return first

    def create_element(
        self,
        vertices: Sequence[int],
        faces: Optional[Iterable[Sequence[int]]] = None,
    ) -> int:
        """Add an element over existing vertices and return its index."""
        element = tuple(int(v) for v in vertices)
        if not element:
            raise ValueError("An element needs at least one vertex")
        for vertex in element:
            if not 0 <= vertex < self.nb_vertices:
                raise IndexError(f"Vertex {vertex} is out of range")
        element_faces = tuple(tuple(int(v) for v in face) for face in faces or ())
        for face in element_faces:
            for local in face:
                if not 0 <= local < len(element):
                    raise IndexError(f"Local vertex {local} is out of range")
        self.elements.append(element)
        self.faces.append(element_faces)
        return len(self.elements) - 1

    def element_vertex(self, element: int, local_vertex: int) -> int:
        """Mesh vertex at the given position of an element."""
        if element < 0 or local_vertex < 0:
            raise IndexError("Element and local vertex indices cannot be negative")
        return self.elements[element][local_vertex]


class BRep:
    """Components with meshes, linked through shared unique vertices."""

    def __init__(self) -> None:
        self._components: Dict[uuid.UUID, ComponentMesh] = {}
        self._unique_vertices: Dict[Tuple[ComponentID, int], int] = {}
        self._mesh_vertices: Dict[int, List[Tuple[ComponentID, int]]] = {}

    def add_component(self, component_type: ComponentType) -> uuid.UUID:
        """Create an empty component of the given type and return its identifier."""
        uid = uuid.uuid4()
        self._components[uid] = ComponentMesh(ComponentID(component_type, uid))
        return uid

    def component(self, uid: uuid.UUID) -> ComponentMesh:
        try:
            return self._components[uid]
        except KeyError:
            raise KeyError(f"No component with id {uid}") from None

    def components(self, component_type: ComponentType) -> List[ComponentMesh]:
        """Components of the given type, in creation order."""
        return [
            mesh
            for mesh in self._components.values()
            if mesh.component_id.type is component_type
        ]

    def set_unique_vertex(
        self, component_id: ComponentID, vertex: int, unique_vertex: int
    ) -> None:
        """Link a component mesh vertex to a unique vertex of the model."""
        mesh = self.component(component_id.id)
        if mesh.component_id != component_id:
            raise ValueError(f"Component {component_id.id} has another type")
        if not 0 <= vertex < mesh.nb_vertices:
            raise IndexError(f"Vertex {vertex} is out of range")
        if unique_vertex < 0:
            raise ValueError(f"Unique vertex {unique_vertex} cannot be negative")
        key = (component_id, vertex)
        previous = self._unique_vertices.get(key)
        if previous is not None:
            self._mesh_vertices[previous].remove(key)
            if not self._mesh_vertices[previous]:
                del self._mesh_vertices[previous]
        self._unique_vertices[key] = unique_vertex
        self._mesh_vertices.setdefault(unique_vertex, []).append(key)

    def unique_vertex(self, component_id: ComponentID, vertex: int) -> Optional[int]:
        """Unique vertex linked to a component mesh vertex, or None."""
        return self._unique_vertices.get((component_id, vertex))

    def component_mesh_vertices(self, unique_vertex: int) -> List[Tuple[ComponentID, int]]:
        """Component mesh vertices linked to a unique vertex."""
        return list(self._mesh_vertices.get(unique_vertex, ()))