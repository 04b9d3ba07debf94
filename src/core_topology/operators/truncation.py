"""
Vertex Split and Truncation
===========================

split_vertex(v): a vertex of degree d becomes a ring of d corners.

    rotation(v) = [r0, r1, ..., r_{d-1}]    (cyclic order around v)
    corners     = [v,  n,  ..., n+d-2]      (v keeps corner 0)

    corner k -- r_k              (inherits one old edge)
    corner k -- corner k+1       (ring, the NEW edges)

    Face  ... r_k, v, r_{k+1} ...  becomes  ... r_k, c_k, c_{k+1}, r_{k+1} ...
    New face = ring wound against its neighbors (they step c_k -> c_{k+1}).

truncate(): split every original vertex. Ids of original vertices never
move (corner 0 keeps the id, corners append), so the splits compose.

INVERSE:
    Contracting the returned ring edges collapses every ring back onto
    corner 0, the lowest id of its class, so the pre-split labeling and
    adjacency come back exactly.
"""

import logging
from typing import Optional, Set

from ..skeleton import Cycle, Shape
from ..spec.constants import MIN_SPLIT_DEGREE
from ..spec.errors import InvalidTopology, MalformedBoundary
from ..spec.structures import Edge, VertexId, normalize_edge

logger = logging.getLogger(__name__)


def _split(work: Shape, v: VertexId) -> Set[Edge]:
    """Split v inside an uncommitted working copy. Returns the ring edges."""
    distance, cycles = work.distance, work.cycles
    rotation = work.rotation(v)
    d = len(rotation)
    if d < MIN_SPLIT_DEGREE:
        raise InvalidTopology(f"Cannot split vertex {v} of degree {d} (need >= {MIN_SPLIT_DEGREE})")

    corners = [v]
    for nbr in rotation[1:]:
        distance[v, nbr] = 0
        corners.append(distance.insert([nbr]))
    corner_of = dict(zip(rotation, corners))

    ring = set()
    for k in range(d):
        a, b = corners[k], corners[(k + 1) % d]
        distance[a, b] = 1
        ring.add(normalize_edge((a, b)))

    for idx in cycles.containing(v):
        face = cycles[idx]
        i = face.index(v)
        face.expand(v, [corner_of[face[i - 1]], corner_of[face[i + 1]]])

    try:
        new_face = Cycle.from_edges(ring)
    except MalformedBoundary as e:
        raise InvalidTopology(f"Split of vertex {v} left a broken ring: {e}") from e
    cycles.append(new_face.oriented(corners[1], corners[0]))
    return ring


def split_vertex(shape: Shape, v: VertexId) -> Set[Edge]:
    """
    Replace vertex v by a small face.

    Args:
        shape: modified in place (all or nothing)
        v: vertex id, degree >= 3, with a closed fan of faces

    Returns:
        set of new ring edges (i, j), i < j

    Raises:
        InvalidTopology if v does not exist or its faces are not a closed fan
    """
    shape.distance.check_vertex(v)
    work = shape.copy()
    ring = _split(work, v)
    shape.commit(work)
    logger.debug("split vertex %d into %d corners -> %r", v, len(ring), shape)
    return ring


def truncate(shape: Shape, degree: Optional[int] = None) -> Set[Edge]:
    """
    Cut every vertex (or every vertex of the given degree) off into a face.

    Args:
        shape: modified in place (all or nothing)
        degree: if given, only vertices of this degree are truncated

    Returns:
        union of the ring edges of all splits
    """
    work = shape.copy()
    targets = [v for v in work.distance.vertices()
               if degree is None or work.distance.degree(v) == degree]
    new_edges = set()
    for v in targets:
        new_edges |= _split(work, v)
    shape.commit(work)
    logger.debug("truncated %d vertices -> %r", len(targets), shape)
    return new_edges
