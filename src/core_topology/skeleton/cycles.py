"""
Cycles - Face Model
===================

A Cycle is one face: an ordered, circular list of vertex ids.
Indexing wraps modulo the length, so face[-1] and face[len(face)]
are the two neighbors of face[0].

A Cycle does NOT check that its segments are edges. Shape keeps
Distance and Cycles in step and validates before committing.

BOUNDARY RECONSTRUCTION (Cycle.from_edges):
    Greedy walk that grows a path from both ends.
        1. Seed with one endpoint of the first edge
        2. Extend the active end (back first) with any edge touching it
        3. When the active end has no edge, switch to the other end
    A simple closed walk never stalls twice in a row. Two consecutive
    switches without progress mean the pool is not one cycle, and we
    raise MalformedBoundary instead of looping.
"""

from collections import Counter, deque
from typing import Iterable, Iterator, List, Optional, Sequence

from ..spec.constants import MAX_STALLED_SWITCHES, MIN_FACE_LENGTH
from ..spec.errors import InvalidTopology, MalformedBoundary
from ..spec.structures import Edge, VertexId, canonical_face, face_segments, normalize_edge


def _collapse(vertices: List[VertexId]) -> List[VertexId]:
    """Drop circularly adjacent repeats: [a, a, b, b, a] -> [a, b]."""
    out = []
    for v in vertices:
        if not out or out[-1] != v:
            out.append(v)
    while len(out) > 1 and out[0] == out[-1]:
        out.pop()
    return out


class Cycle:
    """One face boundary walk."""

    def __init__(self, vertices: Iterable[VertexId] = ()):
        self._vertices = [int(v) for v in vertices]

    @classmethod
    def from_edges(cls, edges: Iterable[Edge]) -> "Cycle":
        """
        Rebuild the circular vertex order from an unordered edge pool.

        Args:
            edges: undirected edges, any order and orientation, forming
                   exactly one simple closed walk

        Returns:
            Cycle visiting each vertex once (orientation arbitrary)

        Raises:
            MalformedBoundary if the pool is empty, has a vertex of degree
            != 2, or splits into more than one piece
        """
        pool = [tuple(int(v) for v in e) for e in edges]
        if not pool:
            raise MalformedBoundary("Cannot build a face from an empty edge set")
        for e in pool:
            if len(e) != 2 or e[0] == e[1]:
                raise MalformedBoundary(f"Not an edge: {e}")

        degree = Counter(v for e in pool for v in e)
        bad = sorted(v for v, d in degree.items() if d != 2)
        if bad:
            raise MalformedBoundary(f"Vertices {bad} do not have exactly two boundary edges")
        n_unique = len({normalize_edge(e) for e in pool})

        face = deque([pool[0][0]])
        at_front = False
        stalled = 0
        while pool:
            end = face[0] if at_front else face[-1]
            idx = next((i for i, e in enumerate(pool) if end in e), None)
            if idx is None:
                stalled += 1
                if stalled >= MAX_STALLED_SWITCHES:
                    raise MalformedBoundary(
                        f"Edges do not form a single closed walk: {len(pool)} left over "
                        f"after {list(face)}"
                    )
                at_front = not at_front
                continue
            stalled = 0
            a, b = pool.pop(idx)
            nxt = b if a == end else a
            if nxt not in face:
                if at_front:
                    face.appendleft(nxt)
                else:
                    face.append(nxt)

        if len(face) != n_unique or len(face) < MIN_FACE_LENGTH:
            raise MalformedBoundary(
                f"Walk {list(face)} does not use each of the {n_unique} edges once"
            )
        return cls(face)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[VertexId]:
        return iter(self._vertices)

    def __contains__(self, v) -> bool:
        return v in self._vertices

    def __getitem__(self, index: int) -> VertexId:
        if not self._vertices:
            raise IndexError("Empty cycle")
        return self._vertices[index % len(self._vertices)]

    def __setitem__(self, index: int, v: VertexId):
        if not self._vertices:
            raise IndexError("Empty cycle")
        self._vertices[index % len(self._vertices)] = int(v)

    def __eq__(self, other) -> bool:
        if isinstance(other, Cycle):
            return self._vertices == other._vertices
        if isinstance(other, (list, tuple)):
            return self._vertices == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Cycle({self._vertices})"

    def index(self, v: VertexId) -> int:
        return self._vertices.index(v)

    def segments(self) -> List[Edge]:
        return face_segments(self._vertices)

    def edges(self) -> List[Edge]:
        """Undirected segments as (min, max)."""
        return [normalize_edge(s) for s in self.segments()]

    def canonical(self) -> tuple:
        return canonical_face(self._vertices)

    def to_tuple(self) -> tuple:
        return tuple(self._vertices)

    def copy(self) -> "Cycle":
        return Cycle(self._vertices)

    def reversed(self) -> "Cycle":
        return Cycle(reversed(self._vertices))

    def oriented(self, a: VertexId, b: VertexId) -> "Cycle":
        """Return this cycle wound so that it steps a -> b."""
        segs = self.segments()
        if (a, b) in segs:
            return self.copy()
        if (b, a) in segs:
            return self.reversed()
        raise InvalidTopology(f"Segment ({a},{b}) is not on {self!r}")

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def delete(self, v: VertexId):
        """Remove every v, shift ids above v down by one."""
        self._vertices = [u - 1 if u > v else u for u in self._vertices if u != v]

    def replace(self, old: VertexId, new: VertexId):
        """Substitute old -> new without renumbering; adjacent repeats collapse."""
        self._vertices = _collapse([new if u == old else u for u in self._vertices])

    def relabel(self, labels: Sequence[int]):
        """Map every id through labels[old]; adjacent repeats collapse."""
        self._vertices = _collapse([int(labels[u]) for u in self._vertices])

    def expand(self, v: VertexId, run: Sequence[VertexId]):
        """Replace the single occurrence of v with a run of vertices."""
        k = self._vertices.index(v)
        self._vertices[k:k + 1] = [int(u) for u in run]


class Cycles:
    """All faces of a polyhedron, in a stable order. Indexing wraps like Cycle."""

    def __init__(self, cycles: Iterable = ()):
        self._cycles = [c.copy() if isinstance(c, Cycle) else Cycle(c) for c in cycles]

    def __len__(self) -> int:
        return len(self._cycles)

    def __iter__(self) -> Iterator[Cycle]:
        return iter(self._cycles)

    def __getitem__(self, index: int) -> Cycle:
        if not self._cycles:
            raise IndexError("No faces")
        return self._cycles[index % len(self._cycles)]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Cycles):
            return NotImplemented
        return self._cycles == other._cycles

    def __repr__(self) -> str:
        return f"Cycles(F={len(self)})"

    def copy(self) -> "Cycles":
        return Cycles(self._cycles)

    def append(self, cycle):
        self._cycles.append(cycle.copy() if isinstance(cycle, Cycle) else Cycle(cycle))

    def insert(self, index: int, cycle):
        self._cycles.insert(index, cycle.copy() if isinstance(cycle, Cycle) else Cycle(cycle))

    def remove_at(self, indices: Iterable[int]):
        drop = set(indices)
        self._cycles = [c for k, c in enumerate(self._cycles) if k not in drop]

    def containing(self, v: VertexId) -> List[int]:
        """Indices of faces whose boundary passes through v."""
        return [k for k, c in enumerate(self._cycles) if v in c]

    def edges(self) -> set:
        return {e for c in self._cycles for e in c.edges()}

    def canonical(self) -> List[tuple]:
        """Sorted canonical forms; equal for face sets equal up to rotation and order."""
        return sorted(c.canonical() for c in self._cycles)

    def to_tuples(self) -> tuple:
        return tuple(c.to_tuple() for c in self._cycles)

    def delete(self, v: VertexId):
        for cycle in self._cycles:
            cycle.delete(v)

    def replace(self, old: VertexId, new: VertexId):
        """Replace all occurrences of one vertex with another."""
        for cycle in self._cycles:
            cycle.replace(old, new)

    def relabel(self, labels: Sequence[int]):
        for cycle in self._cycles:
            cycle.relabel(labels)

    def prune(self, min_length: Optional[int] = None) -> int:
        """Drop degenerate faces. Returns how many were dropped."""
        min_length = MIN_FACE_LENGTH if min_length is None else min_length
        before = len(self._cycles)
        self._cycles = [c for c in self._cycles if len(c) >= min_length]
        return before - len(self._cycles)
