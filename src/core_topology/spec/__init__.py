"""Constants, error taxonomy and the snapshot contract."""

from .constants import *
from .errors import TopologyError, InvalidTopology, MalformedBoundary, ContiguityError
from .structures import (
    VertexId,
    Edge,
    normalize_edge,
    canonical_face,
    face_segments,
    face_edge_counts,
    PolyhedronSnapshot,
    validate_snapshot,
)
