"""
Distance - Connectivity Model
=============================

Symmetric 0/1 adjacency matrix over the dense vertex id space 0..n-1.

    A[i, j] = A[j, i] = 1   iff vertices i and j share an edge
    A[i, i] = 0             (no self-loops)

RENUMBERING:
    Removing a vertex deletes its row and column, so every id above it
    shifts down by one. Callers holding ids elsewhere (Cycles) must apply
    the same shift in the same step; Shape does this for them.

CONTRACTION:
    contract_edges() resolves all edges against the labels they were
    named with (union-find), then renumbers once. Each merged class takes
    the rank of its lowest member, so the result does not depend on the
    order the edges are listed in.
"""

import logging
from typing import Iterable, List, Set, Tuple

import networkx as nx
import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import connected_components, shortest_path

from ..spec.errors import InvalidTopology
from ..spec.structures import Edge, VertexId, normalize_edge

logger = logging.getLogger(__name__)


def contraction_labels(n: int, edges: Iterable[Edge]) -> Tuple[np.ndarray, int]:
    """
    Label every vertex with the id it gets after contracting `edges`.

    Args:
        n: vertex count before contraction
        edges: edges named with pre-contraction ids

    Returns:
        labels: (n,) int array, labels[old] = new id
        k: vertex count after contraction
    """
    parent = list(range(n))

    def find(x):
        while parent[x] != x:
            parent[x] = parent[parent[x]]
            x = parent[x]
        return x

    for a, b in edges:
        ra, rb = find(a), find(b)
        if ra != rb:
            # Root is always the lowest id of its class
            parent[max(ra, rb)] = min(ra, rb)

    roots = np.array([find(v) for v in range(n)], dtype=int)
    if n == 0:
        return roots, 0
    reps, labels = np.unique(roots, return_inverse=True)
    return labels.astype(int), len(reps)


class Distance:
    """
    Connectivity structure of a polyhedron.

    Indexed by unordered pairs: d[i, j] reads or writes the edge bit,
    and d[i, j] = 1 is the same as d[j, i] = 1.
    """

    def __init__(self, n: int = 0):
        if n < 0:
            raise ValueError(f"Vertex count must be >= 0, got {n}")
        self._adj = np.zeros((n, n), dtype=int)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_edges(cls, n: int, edges: Iterable[Edge]) -> "Distance":
        d = cls(n)
        for i, j in edges:
            d[i, j] = 1
        return d

    @classmethod
    def from_matrix(cls, matrix) -> "Distance":
        """Build from a square matrix; nonzero entries are edges."""
        A = (np.asarray(matrix) != 0).astype(int)
        if A.ndim != 2 or A.shape[0] != A.shape[1]:
            raise ValueError(f"Adjacency matrix must be square, got shape {A.shape}")
        if not np.array_equal(A, A.T):
            raise InvalidTopology("Adjacency matrix is not symmetric")
        if np.any(np.diag(A)):
            raise InvalidTopology("Adjacency matrix has self-loops")
        d = cls(0)
        d._adj = A
        return d

    @classmethod
    def tetrahedron(cls) -> "Distance":
        """K4: 4 vertices, 6 edges, every pair connected."""
        return cls.from_edges(4, [(i, j) for i in range(4) for j in range(i + 1, 4)])

    def copy(self) -> "Distance":
        d = Distance(0)
        d._adj = self._adj.copy()
        return d

    # ------------------------------------------------------------------
    # Pair access
    # ------------------------------------------------------------------

    def check_vertex(self, v: VertexId) -> int:
        # Explicit bound check: numpy would silently accept negative ids
        if isinstance(v, (bool, np.bool_)) or not isinstance(v, (int, np.integer)):
            raise InvalidTopology(f"Vertex id must be an integer, got {v!r}")
        if v < 0 or v >= len(self):
            raise InvalidTopology(f"Vertex {v} out of range [0, {len(self) - 1}]")
        return int(v)

    def __getitem__(self, pair) -> int:
        i, j = pair
        return int(self._adj[self.check_vertex(i), self.check_vertex(j)])

    def __setitem__(self, pair, value):
        i, j = pair
        i, j = self.check_vertex(i), self.check_vertex(j)
        bit = 1 if value else 0
        if i == j and bit:
            raise InvalidTopology(f"Self-loop on vertex {i}")
        self._adj[i, j] = bit
        self._adj[j, i] = bit

    def __len__(self) -> int:
        return self._adj.shape[0]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Distance):
            return NotImplemented
        return np.array_equal(self._adj, other._adj)

    def __repr__(self) -> str:
        return f"Distance(V={len(self)}, E={len(self.edges())})"

    @property
    def matrix(self) -> np.ndarray:
        """Read-only copy of the adjacency matrix."""
        A = self._adj.copy()
        A.flags.writeable = False
        return A

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def vertices(self) -> range:
        return range(len(self))

    def connections(self, v: VertexId) -> Set[VertexId]:
        return {int(u) for u in np.flatnonzero(self._adj[self.check_vertex(v)])}

    def degree(self, v: VertexId) -> int:
        return int(self._adj[self.check_vertex(v)].sum())

    def edges(self) -> List[Edge]:
        """All edges as (i, j) with i < j, each once, sorted."""
        return [(int(i), int(j)) for i, j in np.argwhere(np.triu(self._adj, k=1))]

    def has_edge(self, edge: Edge) -> bool:
        i, j = edge
        if not (0 <= i < len(self) and 0 <= j < len(self)):
            return False
        return bool(self._adj[i, j])

    def distances(self) -> np.ndarray:
        """
        All-pairs graph distance (number of edges on a shortest path).

        Returns:
            (n, n) float array, np.inf between disconnected vertices
        """
        return shortest_path(csr_matrix(self._adj), directed=False, unweighted=True)

    def diameter(self) -> int:
        if len(self) == 0:
            return 0
        D = self.distances()
        if np.isinf(D).any():
            raise InvalidTopology("Diameter undefined: graph is disconnected")
        return int(D.max())

    def is_connected(self) -> bool:
        if len(self) == 0:
            return True
        n_comp, _ = connected_components(csr_matrix(self._adj), directed=False)
        return n_comp == 1

    def to_networkx(self) -> nx.Graph:
        G = nx.Graph()
        G.add_nodes_from(self.vertices())
        G.add_edges_from(self.edges())
        return G

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def insert(self, connections: Iterable[VertexId] = ()) -> VertexId:
        """Append a vertex (id = old n) and connect it. Returns the new id."""
        connections = [self.check_vertex(u) for u in connections]
        n = len(self)
        A = np.zeros((n + 1, n + 1), dtype=int)
        A[:n, :n] = self._adj
        self._adj = A
        for u in connections:
            self[n, u] = 1
        return n

    def delete(self, v: VertexId):
        """Remove v and its edges; ids above v shift down by one."""
        v = self.check_vertex(v)
        self._adj = np.delete(np.delete(self._adj, v, axis=0), v, axis=1)

    def contract_edge(self, edge: Edge) -> Tuple[VertexId, VertexId]:
        """
        Merge the endpoints of one edge into the lower id.

        Returns:
            (kept, removed) ids, both pre-contraction
        """
        kept, removed = normalize_edge(edge)
        self.contract_edges([(kept, removed)])
        return kept, removed

    def contract_edges(self, edges: Iterable[Edge]) -> np.ndarray:
        """
        Contract every edge in `edges`, all named with current ids.

        Returns:
            labels: (n,) int array mapping old ids to new ids

        Raises:
            InvalidTopology if any edge is not present (nothing is changed)
        """
        edges = [normalize_edge(e) for e in edges]
        for e in edges:
            if not self.has_edge(e):
                raise InvalidTopology(f"Cannot contract {e}: not an edge of {self!r}")

        n = len(self)
        labels, k = contraction_labels(n, edges)

        # P[v, labels[v]] = 1, so P.T A P sums adjacency between classes
        P = np.zeros((n, k), dtype=int)
        P[np.arange(n), labels] = 1
        merged = P.T @ self._adj @ P
        np.fill_diagonal(merged, 0)
        self._adj = np.minimum(merged, 1)

        logger.debug("contracted %d edges: V %d -> %d", len(edges), n, k)
        return labels
