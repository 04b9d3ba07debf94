"""
Contraction-based simplification.

contract() is the inverse of split_vertex/truncate when handed the edges
they returned. collapse_faces() shrinks every face of one size to a point.
"""

import logging
from typing import Iterable, Set

import numpy as np

from ..skeleton import Shape
from ..spec.constants import MIN_FACE_LENGTH
from ..spec.structures import Edge

logger = logging.getLogger(__name__)


def contract(shape: Shape, edges: Iterable[Edge]) -> np.ndarray:
    """
    Contract a set of edges on a shape (all or nothing).

    Returns:
        labels: old id -> new id
    """
    edges = list(edges)
    labels = shape.contract_edges(edges)
    logger.debug("contracted %d edges -> %r", len(edges), shape)
    return labels


def face_edges(shape: Shape, length: int) -> Set[Edge]:
    """Edges of every face with exactly `length` vertices."""
    return {e for c in shape.cycles if len(c) == length for e in c.edges()}


def collapse_faces(shape: Shape, length: int) -> np.ndarray:
    """
    Collapse every face with `length` vertices into a single vertex.

    After truncate() on a polyhedron whose vertices all have degree 3
    (tetrahedron, cube, prisms), collapse_faces(shape, 3) restores it:
    the vertex faces are triangles, the old faces doubled to >= 6 sides.
    """
    if length < MIN_FACE_LENGTH:
        raise ValueError(f"Face length must be >= {MIN_FACE_LENGTH}, got {length}")
    return contract(shape, face_edges(shape, length))
