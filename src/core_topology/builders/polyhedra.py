"""
Named Polyhedra
===============

Reference polyhedra used as operator seeds and test oracles.

POLYHEDRA INCLUDED:
    - Tetrahedron (V=4, E=6, F=4)      combinatorial, fixed labeling
    - Cube (V=8, E=12, F=6)            from coordinates
    - Octahedron (V=6, E=12, F=8)      from coordinates
    - Icosahedron (V=12, E=30, F=20)   from coordinates
    - Dodecahedron (V=20, E=30, F=12)  dual of the icosahedron
    - Prism(n), Antiprism(n), Pyramid(n)   combinatorial, n >= 3

Every builder returns a Shape whose faces are consistently wound:
each edge is walked once in each direction by its two faces.
Geometric builders wind faces CCW seen from outside; coordinates are
only used to find that order and are not kept.
"""

import numpy as np
from typing import Callable, Dict, List, Optional

from ..skeleton import Shape
from ..spec.constants import EDGE_TOL_POLY, EPS_CLOSE, MIN_PRISM_SIDES, PHI


def _order_ccw(coords: np.ndarray, face_idx: List[int], normal: np.ndarray) -> List[int]:
    """Order face vertices CCW seen from the tip of `normal`."""
    pts = coords[face_idx]
    centroid = pts.mean(axis=0)
    normal = normal / np.linalg.norm(normal)

    # Build local frame (u, v, normal), right-handed
    if abs(normal[0]) < 0.9:
        u = np.cross(normal, [1, 0, 0])
    else:
        u = np.cross(normal, [0, 1, 0])
    u = u / np.linalg.norm(u)
    v = np.cross(normal, u)

    angles = [np.arctan2(np.dot(p - centroid, v), np.dot(p - centroid, u)) for p in pts]
    order = np.argsort(angles)
    return [face_idx[o] for o in order]


def _check_counts(name: str, shape: Shape, V: int, E: int, F: int) -> Shape:
    snap = shape.snapshot()
    if snap.n_V != V:
        raise ValueError(f"{name}: expected {V} vertices, got {snap.n_V}")
    if snap.n_E != E:
        raise ValueError(f"{name}: expected {E} edges, got {snap.n_E}")
    if snap.n_F != F:
        raise ValueError(f"{name}: expected {F} faces, got {snap.n_F}")
    return shape


def _check_sides(name: str, n: Optional[int]) -> int:
    if n is None or n < MIN_PRISM_SIDES:
        raise ValueError(f"{name} needs n >= {MIN_PRISM_SIDES}, got {n}")
    return int(n)


def build_tetrahedron() -> Shape:
    """
    Tetrahedron, K4.

    Faces [0,2,1], [0,3,2], [0,1,3], [1,2,3]: going around vertex 0 from
    its lowest neighbor visits 1, 2, 3. split_vertex(0) relies on this
    to put the new corners 4, 5 next to neighbors 2, 3.

    TOPOLOGY:
        V = 4, E = 6, F = 4, χ = 2, every vertex degree 3
    """
    faces = [[0, 2, 1], [0, 3, 2], [0, 1, 3], [1, 2, 3]]
    return _check_counts("tetrahedron", Shape.from_faces(faces, n=4, name="tetrahedron"), 4, 6, 4)


def build_cube() -> Shape:
    """
    Cube from the corners (±1, ±1, ±1).

    TOPOLOGY:
        V = 8 vertices, E = 12 edges, F = 6 squares
        χ = 8 - 12 + 6 = 2
    """
    vertices = sorted((x, y, z) for x in [-1, 1] for y in [-1, 1] for z in [-1, 1])
    coords = np.array(vertices, dtype=float)

    # 6 faces (squares at ±1 on each axis)
    faces = []
    for axis in range(3):
        for sign in [-1, 1]:
            face_idx = [i for i, v in enumerate(vertices) if v[axis] == sign]
            normal = np.zeros(3)
            normal[axis] = sign
            faces.append(_order_ccw(coords, face_idx, normal))

    return _check_counts("cube", Shape.from_faces(faces, n=8, name="cube"), 8, 12, 6)


def build_octahedron() -> Shape:
    """
    Octahedron from the six unit axis points.

    TOPOLOGY:
        V = 6 vertices, E = 12 edges, F = 8 triangles (one per octant)
        χ = 6 - 12 + 8 = 2
    """
    vertices = sorted([
        (1, 0, 0), (-1, 0, 0),
        (0, 1, 0), (0, -1, 0),
        (0, 0, 1), (0, 0, -1),
    ])
    coords = np.array(vertices, dtype=float)

    faces = []
    for sx in [-1, 1]:
        for sy in [-1, 1]:
            for sz in [-1, 1]:
                octant = np.array([sx, sy, sz], dtype=float)
                # Axis point lies on this octant's face iff it points into the octant
                face_idx = [i for i in range(6) if np.dot(coords[i], octant) > EPS_CLOSE]
                faces.append(_order_ccw(coords, face_idx, octant))

    return _check_counts("octahedron", Shape.from_faces(faces, n=6, name="octahedron"), 6, 12, 8)


def build_icosahedron() -> Shape:
    """
    Icosahedron from cyclic permutations of (0, ±1, ±φ).

    Edges are the shortest vertex pairs; faces are the 20 mutually
    adjacent triples (the icosahedron graph has no other triangles).

    TOPOLOGY:
        V = 12, E = 30, F = 20, χ = 2, every vertex degree 5
    """
    vertices = []
    for a in [-1, 1]:
        for b in [-PHI, PHI]:
            vertices.extend([(0, a, b), (a, b, 0), (b, 0, a)])
    vertices = sorted(vertices)
    coords = np.array(vertices, dtype=float)
    n = len(vertices)

    # Find edge length (minimum distance)
    dist = np.linalg.norm(coords[:, None, :] - coords[None, :, :], axis=-1)
    min_dist = dist[dist > EPS_CLOSE].min()
    adjacent = np.abs(dist - min_dist) < EDGE_TOL_POLY

    faces = []
    for i in range(n):
        for j in range(i + 1, n):
            if not adjacent[i, j]:
                continue
            for k in range(j + 1, n):
                if adjacent[i, k] and adjacent[j, k]:
                    tri = [i, j, k]
                    faces.append(_order_ccw(coords, tri, coords[tri].mean(axis=0)))

    return _check_counts("icosahedron", Shape.from_faces(faces, n=n, name="icosahedron"), 12, 30, 20)


def build_dodecahedron() -> Shape:
    """
    Dodecahedron as the dual of the icosahedron.

    TOPOLOGY:
        V = 20, E = 30, F = 12 pentagons, every vertex degree 3
    """
    from ..operators.conway import dual

    shape = build_icosahedron()
    dual(shape)
    shape.name = "dodecahedron"
    return _check_counts("dodecahedron", shape, 20, 30, 12)


def build_prism(n: int) -> Shape:
    """
    n-gonal prism: bottom ring 0..n-1, top ring n..2n-1.

    TOPOLOGY:
        V = 2n, E = 3n, F = n + 2
    """
    n = _check_sides("prism", n)
    faces = [list(range(n - 1, -1, -1)), list(range(n, 2 * n))]
    for i in range(n):
        j = (i + 1) % n
        faces.append([i, j, n + j, n + i])
    return _check_counts(f"prism({n})", Shape.from_faces(faces, n=2 * n, name=f"prism{n}"),
                         2 * n, 3 * n, n + 2)


def build_antiprism(n: int) -> Shape:
    """
    n-gonal antiprism: bottom ring 0..n-1, top ring n..2n-1, twisted
    so every side is a triangle.

    TOPOLOGY:
        V = 2n, E = 4n, F = 2n + 2
    """
    n = _check_sides("antiprism", n)
    faces = [list(range(n - 1, -1, -1)), list(range(n, 2 * n))]
    for i in range(n):
        j = (i + 1) % n
        faces.append([i, j, n + i])
        faces.append([j, n + j, n + i])
    return _check_counts(f"antiprism({n})", Shape.from_faces(faces, n=2 * n, name=f"antiprism{n}"),
                         2 * n, 4 * n, 2 * n + 2)


def build_pyramid(n: int) -> Shape:
    """
    n-gonal pyramid: base ring 0..n-1, apex n.

    TOPOLOGY:
        V = n + 1, E = 2n, F = n + 1
    """
    n = _check_sides("pyramid", n)
    faces = [list(range(n - 1, -1, -1))]
    for i in range(n):
        faces.append([i, (i + 1) % n, n])
    return _check_counts(f"pyramid({n})", Shape.from_faces(faces, n=n + 1, name=f"pyramid{n}"),
                         n + 1, 2 * n, n + 1)


PRESETS: Dict[str, Callable[..., Shape]] = {
    "tetrahedron": build_tetrahedron,
    "cube": build_cube,
    "octahedron": build_octahedron,
    "icosahedron": build_icosahedron,
    "dodecahedron": build_dodecahedron,
    "prism": build_prism,
    "antiprism": build_antiprism,
    "pyramid": build_pyramid,
}

SIDED_PRESETS = ("prism", "antiprism", "pyramid")


def build_preset(name: str, n: Optional[int] = None) -> Shape:
    """
    Build a named preset.

    Args:
        name: one of PRESETS
        n: number of sides, required for prism/antiprism/pyramid

    Returns:
        Shape
    """
    if name not in PRESETS:
        raise ValueError(f"Unknown preset {name!r}, expected one of {sorted(PRESETS)}")
    if name in SIDED_PRESETS:
        return PRESETS[name](n)
    if n is not None:
        raise ValueError(f"Preset {name!r} takes no side count, got n={n}")
    return PRESETS[name]()
