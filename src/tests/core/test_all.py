"""
Comprehensive Tests for core_topology presets
=============================================

Tests the invariants every preset must satisfy:
- V, E, F counts and Euler characteristic
- Face/connectivity consistency (every face segment is an edge)
- Closed, consistently wound surface
- Snapshot is a frozen value copy
- Graphviz text layout

Run: python -m pytest tests/core/test_all.py -v
"""

import dataclasses

import pytest

from core_topology.analysis import degree_table, same_graph, to_dot, verify_polyhedron, write_dot
from core_topology.builders import (
    build_cube,
    build_dodecahedron,
    build_icosahedron,
    build_octahedron,
    build_preset,
    build_tetrahedron,
)
from core_topology.operators import truncate
from core_topology.skeleton import Distance
from core_topology.spec import normalize_edge, validate_snapshot


PRESET_COUNTS = [
    # name, n, V, E, F
    ("tetrahedron", None, 4, 6, 4),
    ("cube", None, 8, 12, 6),
    ("octahedron", None, 6, 12, 8),
    ("icosahedron", None, 12, 30, 20),
    ("dodecahedron", None, 20, 30, 12),
    ("prism", 3, 6, 9, 5),
    ("prism", 5, 10, 15, 7),
    ("antiprism", 4, 8, 16, 10),
    ("pyramid", 6, 7, 12, 7),
]


# =============================================================================
# TEST A: Preset topology
# =============================================================================

@pytest.mark.parametrize("name, n, V, E, F", PRESET_COUNTS)
def test_preset_counts(name, n, V, E, F):
    """V, E, F match the reference numbers and χ = 2."""
    report = verify_polyhedron(build_preset(name, n))

    assert (report['V'], report['E'], report['F']) == (V, E, F), \
        f"{name}: got V={report['V']}, E={report['E']}, F={report['F']}"
    assert report['chi'] == 2


@pytest.mark.parametrize("name, n, V, E, F", PRESET_COUNTS)
def test_preset_is_polyhedral(name, n, V, E, F):
    """Consistent, closed, connected, every vertex degree >= 3."""
    report = verify_polyhedron(build_preset(name, n))

    assert report['is_consistent'], f"{name}: {report['errors']}"
    assert report['is_closed'], f"{name}: some edge does not bound exactly two faces"
    assert report['is_connected']
    assert report['is_polyhedral']


@pytest.mark.parametrize("name, n, V, E, F", PRESET_COUNTS)
def test_face_segments_are_edges(name, n, V, E, F):
    """Every circularly adjacent pair in every face is an edge."""
    shape = build_preset(name, n)
    edges = set(shape.distance.edges())

    for face in shape.cycles:
        for k in range(len(face)):
            assert normalize_edge((face[k], face[k + 1])) in edges, \
                f"{name}: face {face} steps {face[k]}->{face[k + 1]} off the graph"


def test_tetrahedron_matches_distance_preset():
    """The tetrahedron Shape and Distance.tetrahedron() agree: K4."""
    shape = build_tetrahedron()

    assert shape.distance == Distance.tetrahedron()
    assert all(shape.distance.degree(v) == 3 for v in range(4))
    assert len(shape.distance.edges()) == 6
    assert all(len(face) == 3 for face in shape.cycles)


def test_regular_degrees():
    """Platonic solids are vertex- and face-regular."""
    expected = {
        "tetrahedron": ({3: 4}, {3: 4}),
        "cube": ({3: 8}, {4: 6}),
        "octahedron": ({4: 6}, {3: 8}),
        "icosahedron": ({5: 12}, {3: 20}),
        "dodecahedron": ({3: 20}, {5: 12}),
    }
    for name, (degrees, faces) in expected.items():
        report = verify_polyhedron(build_preset(name))
        assert report['degree_histogram'] == degrees, f"{name}: {report['degree_histogram']}"
        assert report['face_histogram'] == faces, f"{name}: {report['face_histogram']}"


def test_diameters():
    """Graph diameters: K4 = 1, octahedron = 2, cube = icosahedron = 3, dodecahedron = 5."""
    assert build_tetrahedron().distance.diameter() == 1
    assert build_octahedron().distance.diameter() == 2
    assert build_cube().distance.diameter() == 3
    assert build_icosahedron().distance.diameter() == 3
    assert build_dodecahedron().distance.diameter() == 5


def test_prism3_is_not_octahedron():
    """Same V, different E: triangular prism and octahedron differ."""
    assert not same_graph(build_preset("prism", 3), build_octahedron())
    assert same_graph(build_preset("antiprism", 3), build_octahedron())


# =============================================================================
# TEST B: Snapshot contract
# =============================================================================

def test_snapshot_is_frozen():
    """Consumers cannot write into a snapshot."""
    snap = build_cube().snapshot()

    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.faces = ()


def test_snapshot_survives_mutation():
    """A snapshot taken before truncate() still shows the old polyhedron."""
    shape = build_tetrahedron()
    before = shape.snapshot()

    truncate(shape)

    assert before.n_V == 4 and before.n_E == 6 and before.n_F == 4
    assert shape.snapshot().n_V == 12
    assert before.faces == ((0, 2, 1), (0, 3, 2), (0, 1, 3), (1, 2, 3))


def test_snapshot_passes_contract():
    """Snapshots of presets validate; degrees come from the edge list."""
    snap = build_preset("pyramid", 5).snapshot()

    is_valid, errors = validate_snapshot(snap, strict=False)
    assert is_valid, errors
    assert snap.vertices == tuple(range(6))
    assert snap.degrees() == (3, 3, 3, 3, 3, 5)
    assert snap.degree(5) == 5
    assert snap.name == "pyramid5"


# =============================================================================
# TEST C: Graphviz export
# =============================================================================

def test_dot_tetrahedron():
    """Degree 3 → red; one line per vertex, one per edge."""
    expected = (
        "graph G{\n"
        "layout=neato\n"
        '\tV0 [color="red"];\n'
        '\tV1 [color="red"];\n'
        '\tV2 [color="red"];\n'
        '\tV3 [color="red"];\n'
        "\tV0 -- V1;\n"
        "\tV0 -- V2;\n"
        "\tV0 -- V3;\n"
        "\tV1 -- V2;\n"
        "\tV1 -- V3;\n"
        "\tV2 -- V3;\n"
        "}"
    )
    assert to_dot(Distance.tetrahedron()) == expected


def test_dot_colors_by_degree():
    """Degree 4 → green, degree 5 → blue."""
    assert to_dot(build_octahedron().distance).count('color="green"') == 6
    assert to_dot(build_icosahedron().distance).count('color="blue"') == 12
    assert degree_table(build_preset("pyramid", 4).distance)[-1] == (4, 4)


def test_write_dot(tmp_path):
    """write_dot creates parent directories and writes the DOT text."""
    d = build_cube().distance
    path = write_dot(d, tmp_path / "out" / "cube.dot")

    assert path.read_text() == to_dot(d)
    assert path.read_text().count(" -- ") == 12
