"""
Topology Verification Functions
===============================

Verify structural properties of a Shape.

These functions are in analysis/ layer because they drive operators
(round_trip) and read whole snapshots.

    verify_polyhedron   - V, E, F, χ, consistency, closedness, degrees
    round_trip          - operator then contract its edges == original?
    same_graph          - connectivity isomorphism (networkx)
"""

from collections import Counter
from typing import Any, Callable, Dict, Iterable, Set

import networkx as nx
import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import connected_components

from ..skeleton import Distance, Shape
from ..spec.constants import MIN_SPLIT_DEGREE
from ..spec.structures import Edge, face_edge_counts, validate_snapshot


def verify_polyhedron(shape: Shape) -> Dict[str, Any]:
    """
    Verify that a shape is a closed, connected, consistently wound polyhedron.

    Args:
        shape: the shape to inspect (not modified)

    Returns:
        dict with V, E, F, chi, is_consistent, errors, is_closed,
        is_connected, degree_histogram, face_histogram, is_polyhedral
    """
    snap = shape.snapshot()
    is_consistent, errors = validate_snapshot(snap, strict=False)

    # Closed surface: every edge bounds exactly two faces
    counts = face_edge_counts(snap.faces)
    is_closed = (snap.n_E > 0
                 and set(counts) == set(snap.edges)
                 and all(c == 2 for c in counts.values()))

    A = np.zeros((snap.n_V, snap.n_V), dtype=int)
    for i, j in snap.edges:
        A[i, j] = A[j, i] = 1
    if snap.n_V:
        n_comp, _ = connected_components(csr_matrix(A), directed=False)
    else:
        n_comp = 0
    is_connected = n_comp == 1

    degrees = snap.degrees()
    degree_histogram = dict(sorted(Counter(degrees).items()))
    face_histogram = dict(sorted(Counter(len(f) for f in snap.faces).items()))

    is_polyhedral = (is_consistent and is_closed and is_connected and snap.chi == 2
                     and all(d >= MIN_SPLIT_DEGREE for d in degrees))

    return {
        'V': snap.n_V,
        'E': snap.n_E,
        'F': snap.n_F,
        'chi': snap.chi,
        'is_consistent': is_consistent,
        'errors': errors,
        'is_closed': is_closed,
        'is_connected': is_connected,
        'n_components': int(n_comp),
        'degree_histogram': degree_histogram,
        'face_histogram': face_histogram,
        'is_polyhedral': is_polyhedral,
    }


def round_trip(shape: Shape, operator: Callable[[Shape], Iterable[Edge]]) -> Dict[str, Any]:
    """
    Apply an edge-returning operator to a copy, contract what it returned,
    and compare against the original.

    Args:
        shape: untouched
        operator: e.g. truncate, or lambda s: split_vertex(s, 0)

    Returns:
        dict with new_edges, V_after_operator, V_after_contract,
        distance_recovered, faces_recovered
    """
    work = shape.copy()
    new_edges: Set[Edge] = set(operator(work))
    V_after_operator = len(work)
    work.contract_edges(new_edges)

    return {
        'new_edges': sorted(new_edges),
        'V_after_operator': V_after_operator,
        'V_after_contract': len(work),
        'distance_recovered': work.distance == shape.distance,
        'faces_recovered': work.cycles.canonical() == shape.cycles.canonical(),
    }


def same_graph(a, b) -> bool:
    """Isomorphism of two connectivity structures (Distance or Shape)."""
    da = a.distance if isinstance(a, Shape) else a
    db = b.distance if isinstance(b, Shape) else b
    if not isinstance(da, Distance) or not isinstance(db, Distance):
        raise TypeError(f"Expected Distance or Shape, got {type(a).__name__}, {type(b).__name__}")
    if len(da) != len(db) or len(da.edges()) != len(db.edges()):
        return False
    return nx.is_isomorphic(da.to_networkx(), db.to_networkx())
