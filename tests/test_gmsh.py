import logging

import pytest

from geodeio.brep import BRep, ComponentType
from geodeio.gmsh import (
    GMSH_OFFSET_START,
    GMSHEdge,
    GMSHHexahedron,
    GMSHPoint,
    GMSHPrism,
    GMSHPyramid,
    GMSHQuadrangle,
    GMSHSurfacePolygon,
    GMSHTetrahedron,
    GMSHTriangle,
    GmshElementID,
    GmshError,
    GmshIdMaps,
    create_gmsh_element,
    registered_element_types,
)


def test_registered_element_types():
    assert set(registered_element_types()) == {15, 1, 2, 3, 4, 5, 6, 7}


@pytest.mark.parametrize(
    "element_type, cls, tags",
    [
        (15, GMSHPoint, ["1"]),
        (1, GMSHEdge, ["1", "2"]),
        (2, GMSHTriangle, ["1", "2", "3"]),
        (3, GMSHQuadrangle, ["1", "2", "3", "4"]),
        (4, GMSHTetrahedron, ["1", "2", "3", "4"]),
        (5, GMSHHexahedron, [str(i) for i in range(1, 9)]),
        (6, GMSHPrism, [str(i) for i in range(1, 7)]),
        (7, GMSHPyramid, [str(i) for i in range(1, 6)]),
    ],
)
def test_factory_creates_expected_class(element_type, cls, tags):
    element = create_gmsh_element(element_type, 0, 1, tags)
    assert type(element) is cls
    assert element.nb_vertices == len(tags)
    assert element.vertex_ids == [int(t) for t in tags]


def test_unknown_element_type_raises():
    with pytest.raises(GmshError):
        create_gmsh_element(99, 0, 1, ["1"])


def test_null_elementary_tag_raises():
    with pytest.raises(GmshError):
        GMSHPoint(0, 0, ["1"])


def test_bad_vertex_tag_is_logged(caplog):
    with caplog.at_level(logging.ERROR):
        element = GMSHTriangle(0, 1, ["1", "x", "3"])
    assert "Wrong GMSH element number of vertices" in caplog.text
    assert element.vertex_ids[0] == 1


def test_id_maps_contains():
    maps = GmshIdMaps()
    key = GmshElementID(ComponentType.LINE, 3)
    assert not maps.contains_elementary_id(key)
    brep = BRep()
    maps.elementary_ids[key] = brep.add_component(ComponentType.LINE)
    assert maps.contains_elementary_id(key)
    assert maps.contains_elementary_id(GmshElementID(ComponentType.LINE, 3))
    assert not maps.contains_physical_id(key)


def test_points_with_same_entity_share_corner():
    brep, maps = BRep(), GmshIdMaps()
    GMSHPoint(0, 2, ["5"]).add_element(brep, maps)
    GMSHPoint(0, 2, ["6"]).add_element(brep, maps)
    corners = brep.components(ComponentType.CORNER)
    assert len(corners) == 1
    corner = corners[0]
    assert corner.nb_vertices == 2
    assert brep.unique_vertex(corner.component_id, 0) == 5 - GMSH_OFFSET_START
    assert brep.unique_vertex(corner.component_id, 1) == 6 - GMSH_OFFSET_START
    assert maps.elementary_ids[GmshElementID(ComponentType.CORNER, 2)] == corner.component_id.id


def test_points_with_different_entities_make_two_corners():
    brep, maps = BRep(), GmshIdMaps()
    GMSHPoint(0, 1, ["1"]).add_element(brep, maps)
    GMSHPoint(0, 2, ["2"]).add_element(brep, maps)
    assert len(brep.components(ComponentType.CORNER)) == 2


def test_edge_added_to_line():
    brep, maps = BRep(), GmshIdMaps()
    GMSHEdge(0, 1, ["3", "4"]).add_element(brep, maps)
    (line,) = brep.components(ComponentType.LINE)
    assert line.elements == [(0, 1)]
    assert [brep.unique_vertex(line.component_id, v) for v in (0, 1)] == [
        3 - GMSH_OFFSET_START,
        4 - GMSH_OFFSET_START,
    ]


def test_triangles_sharing_tags_share_unique_vertices():
    brep, maps = BRep(), GmshIdMaps()
    GMSHTriangle(0, 1, ["1", "2", "3"]).add_element(brep, maps)
    GMSHTriangle(0, 1, ["2", "3", "4"]).add_element(brep, maps)
    (surface,) = brep.components(ComponentType.SURFACE)
    assert len(surface.elements) == 2
    assert surface.nb_vertices == 6
    shared = brep.component_mesh_vertices(2 - GMSH_OFFSET_START)
    assert len(shared) == 2
    assert {component for component, _ in shared} == {surface.component_id}


def test_general_polygon():
    brep, maps = BRep(), GmshIdMaps()
    tags = ["1", "2", "3", "4", "5"]
    GMSHSurfacePolygon(0, 1, len(tags), tags).add_element(brep, maps)
    (surface,) = brep.components(ComponentType.SURFACE)
    assert len(surface.elements[0]) == len(tags)


def test_tetrahedron_faces_and_block():
    brep, maps = BRep(), GmshIdMaps()
    tetra = GMSHTetrahedron(0, 1, ["1", "2", "3", "4"])
    assert tetra.faces() == ((0, 1, 2), (0, 2, 3), (1, 3, 2), (0, 3, 1))
    tetra.add_element(brep, maps)
    (block,) = brep.components(ComponentType.BLOCK)
    assert block.faces[0] == tetra.faces()
    assert brep.unique_vertex(block.component_id, 3) == 4 - GMSH_OFFSET_START


def test_hexahedron_faces():
    hexa = GMSHHexahedron(0, 1, [str(i) for i in range(1, 9)])
    faces = hexa.faces()
    assert faces[1] == (7, 6, 5, 4)
    assert sorted(v for face in faces for v in face) == sorted(list(range(8)) * 3)


def test_prism_and_pyramid_faces_cover_all_vertices():
    prism = GMSHPrism(0, 1, [str(i) for i in range(1, 7)])
    pyramid = GMSHPyramid(0, 1, [str(i) for i in range(1, 6)])
    assert {v for face in prism.faces() for v in face} == set(range(6))
    assert {v for face in pyramid.faces() for v in face} == set(range(5))
    assert pyramid.faces()[-1] == (0, 1, 2, 3)


def test_solid_element_types_go_to_separate_blocks_per_entity():
    brep, maps = BRep(), GmshIdMaps()
    create_gmsh_element(4, 0, 1, ["1", "2", "3", "4"]).add_element(brep, maps)
    create_gmsh_element(6, 0, 2, [str(i) for i in range(1, 7)]).add_element(brep, maps)
    blocks = brep.components(ComponentType.BLOCK)
    assert [block.nb_vertices for block in blocks] == [4, 6]