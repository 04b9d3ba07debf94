"""
Composite Operators
===================

Fixed sequences of the primitives, plus the dual.

    ambo   = truncate, then contract the surviving original edges
             (each original edge shrinks to the midpoint vertex)
    bevel  = ambo, then truncate
    expand = ambo, then ambo
    dual   = faces become vertices, vertices become faces

Each composite runs on one working copy and commits once, so a failure
halfway leaves the input untouched.

DUAL WINDING:
    Around vertex v, face f steps v -> b; the face g that steps b -> v is
    next around v. Listing f, g, ... for every v gives dual faces that
    cross each dual edge once in each direction.
"""

import logging
from typing import Dict, List

from ..skeleton import Shape
from ..spec.errors import InvalidTopology
from ..spec.structures import Edge
from .contraction import contract
from .truncation import truncate

logger = logging.getLogger(__name__)


def _ambo(work: Shape):
    ring = truncate(work)
    original = set(work.distance.edges()) - ring
    contract(work, original)


def ambo(shape: Shape):
    """Rectify: vertices move to edge midpoints. Tetrahedron -> octahedron."""
    work = shape.copy()
    _ambo(work)
    shape.commit(work)
    logger.debug("ambo -> %r", shape)


def bevel(shape: Shape):
    """Truncate the rectified shape. Cube -> truncated cuboctahedron."""
    work = shape.copy()
    _ambo(work)
    truncate(work)
    shape.commit(work)
    logger.debug("bevel -> %r", shape)


def expand(shape: Shape):
    """Cantellate: ambo twice. Cube -> rhombicuboctahedron."""
    work = shape.copy()
    _ambo(work)
    _ambo(work)
    shape.commit(work)
    logger.debug("expand -> %r", shape)


def dual(shape: Shape):
    """
    Replace the shape with its dual, rebuilt wholesale.

    Dual vertex f is original face f; dual face v lists the faces around
    original vertex v.

    Raises:
        InvalidTopology if some vertex is not surrounded by a closed fan
        of faces (open or non-manifold surface)
    """
    owner: Dict[Edge, int] = {}
    for f, cycle in enumerate(shape.cycles):
        for seg in cycle.segments():
            owner[seg] = f

    dual_faces: List[List[int]] = []
    for v in shape.distance.vertices():
        around = shape.cycles.containing(v)
        if not around:
            raise InvalidTopology(f"Vertex {v} lies on no face, dual undefined")
        start = around[0]
        ring = [start]
        f = start
        while True:
            face = shape.cycles[f]
            b = face[face.index(v) + 1]
            g = owner.get((b, v))
            if g is None:
                raise InvalidTopology(f"Edge ({v},{b}) has only one face, dual undefined")
            if g == start:
                break
            ring.append(g)
            f = g
            if len(ring) > len(around):
                break
        if len(ring) != len(around):
            raise InvalidTopology(f"Faces around vertex {v} do not form one fan")
        dual_faces.append(ring)

    result = Shape.from_faces(dual_faces, n=len(shape.cycles), name=shape.name)
    shape.commit(result)
    logger.debug("dual -> %r", shape)
