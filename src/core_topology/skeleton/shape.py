"""
Shape - Connectivity and Faces Together
=======================================

Distance and Cycles are two views of one polyhedron. Neither can be
rebuilt from the other in general, so every topological edit goes
through Shape, which changes both in one step.

TRANSACTIONS:
    1. work = shape.copy()
    2. mutate work.distance / work.cycles
    3. shape.commit(work)  -> contiguity check, validate_snapshot, swap

If step 2 or 3 raises, the live shape is untouched.

The `distance` and `cycles` properties hand out the live objects so
operators can edit a working copy in place. Code outside the operator
layer reads snapshot() instead.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from ..spec.constants import MIN_FACE_LENGTH
from ..spec.errors import ContiguityError, InvalidTopology, MalformedBoundary
from ..spec.structures import (
    Edge,
    PolyhedronSnapshot,
    VertexId,
    face_segments,
    normalize_edge,
    validate_snapshot,
)
from .cycles import Cycle, Cycles
from .distance import Distance

logger = logging.getLogger(__name__)


class Shape:
    """A polyhedron: connectivity (Distance) plus faces (Cycles)."""

    def __init__(self, distance: Distance, cycles: Optional[Cycles] = None,
                 name: str = "unnamed", validate: bool = True):
        self._distance = distance
        self._cycles = cycles if cycles is not None else Cycles()
        self.name = name
        if validate:
            validate_snapshot(self.snapshot(), strict=True)

    @classmethod
    def from_faces(cls, faces: Iterable[Sequence[VertexId]], n: Optional[int] = None,
                   name: str = "unnamed") -> "Shape":
        """
        Build connectivity from face boundaries: every segment becomes an edge.

        Args:
            faces: circular vertex lists, consistently wound
            n: vertex count (default: max id + 1)
            name: label carried into snapshots
        """
        cycles = Cycles(faces)
        if n is None:
            n = max((max(c) for c in cycles if len(c)), default=-1) + 1
        distance = Distance(n)
        for cycle in cycles:
            for i, j in cycle.segments():
                distance[i, j] = 1
        return cls(distance, cycles, name=name)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def distance(self) -> Distance:
        """
        Live connectivity, shared with this shape.

        Mutate it only on a working copy that is then passed to commit().
        Editing a live shape's distance alone leaves the faces behind;
        the next commit() rejects that state. Consumers read snapshot().
        """
        return self._distance

    @property
    def cycles(self) -> Cycles:
        """Live faces, same rules as `distance`."""
        return self._cycles

    def __len__(self) -> int:
        return len(self._distance)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Shape):
            return NotImplemented
        return (self._distance == other._distance
                and self._cycles.canonical() == other._cycles.canonical())

    def __repr__(self) -> str:
        return (f"Shape({self.name!r}, V={len(self._distance)}, "
                f"E={len(self._distance.edges())}, F={len(self._cycles)})")

    def copy(self) -> "Shape":
        return Shape(self._distance.copy(), self._cycles.copy(), name=self.name, validate=False)

    def snapshot(self) -> PolyhedronSnapshot:
        """Frozen value copy for renderers and exporters."""
        return PolyhedronSnapshot(
            vertices=tuple(self._distance.vertices()),
            edges=tuple(self._distance.edges()),
            faces=self._cycles.to_tuples(),
            name=self.name,
        )

    def rotation(self, v: VertexId) -> List[VertexId]:
        """
        Neighbors of v in cyclic order around it, read off the faces.

        A face ... a, v, b ... makes b follow a. Starts at the lowest neighbor.

        Raises:
            InvalidTopology if the faces around v are not one closed fan
            covering every neighbor
        """
        self._distance.check_vertex(v)
        follow: Dict[VertexId, VertexId] = {}
        for k in self._cycles.containing(v):
            face = self._cycles[k]
            i = face.index(v)
            prev, nxt = face[i - 1], face[i + 1]
            if prev in follow:
                raise InvalidTopology(f"Vertex {v}: neighbor {prev} opens two faces (non-manifold)")
            follow[prev] = nxt

        neighbors = self._distance.connections(v)
        if not neighbors and not follow:
            return []
        if set(follow) != neighbors:
            raise InvalidTopology(
                f"Vertex {v}: faces cover neighbors {sorted(follow)}, edges give {sorted(neighbors)}"
            )
        start = min(neighbors)
        ring = [start]
        while follow[ring[-1]] != start:
            ring.append(follow[ring[-1]])
            if len(ring) > len(neighbors):
                break
        if len(ring) != len(neighbors):
            raise InvalidTopology(f"Vertex {v}: faces around it form more than one fan")
        return ring

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def commit(self, work: "Shape"):
        """
        Swap in the state of `work` after checking it.

        Raises:
            ContiguityError if face ids left the 0..n-1 range
            InvalidTopology if faces and connectivity disagree
        """
        n = len(work._distance)
        stray = sorted({v for c in work._cycles for v in c if not 0 <= v < n})
        if stray:
            raise ContiguityError(f"Face ids {stray} outside contiguous range [0, {n - 1}]")
        try:
            validate_snapshot(work.snapshot(), strict=True)
        except InvalidTopology:
            logger.warning("rejected edit on %r", self)
            raise
        self._distance = work._distance
        self._cycles = work._cycles

    # ------------------------------------------------------------------
    # Edits (each one transactional)
    # ------------------------------------------------------------------

    def delete_vertex(self, v: VertexId):
        """
        Remove v and its edges; ids above v shift down by one.

        The faces around v merge into one face, rebuilt from their edges
        that avoid v and wound like the faces it replaces.
        """
        self._distance.check_vertex(v)
        work = self.copy()
        around = work._cycles.containing(v)
        if around:
            link = []
            for k in around:
                link.extend(s for s in work._cycles[k].segments() if v not in s)
            try:
                merged = Cycle.from_edges(link)
            except MalformedBoundary as e:
                raise InvalidTopology(f"Cannot delete vertex {v}: {e}") from e
            merged = merged.oriented(*link[0])
            work._cycles.remove_at(around)
            work._cycles.insert(around[0], merged)
        work._distance.delete(v)
        work._cycles.delete(v)
        self.commit(work)
        logger.debug("deleted vertex %d -> %r", v, self)

    def contract_edge(self, edge: Edge) -> VertexId:
        """
        Merge the endpoints of one edge into the lower id.

        Returns:
            the surviving id
        """
        kept, removed = normalize_edge(edge)
        if not self._distance.has_edge((kept, removed)):
            raise InvalidTopology(f"Cannot contract {(kept, removed)}: not an edge")
        work = self.copy()
        work._distance.contract_edge((kept, removed))
        work._cycles.replace(removed, kept)
        # removed no longer occurs, so delete() only renumbers
        work._cycles.delete(removed)
        work._cycles.prune(MIN_FACE_LENGTH)
        self.commit(work)
        logger.debug("contracted %s -> %r", (kept, removed), self)
        return kept

    def contract_edges(self, edges: Iterable[Edge]):
        """Contract a set of edges named with current ids; renumber once."""
        work = self.copy()
        labels = work._distance.contract_edges(edges)
        work._cycles.relabel(labels)
        work._cycles.prune(MIN_FACE_LENGTH)
        self.commit(work)
        return labels
