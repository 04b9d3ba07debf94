"""Topological operators - every one edits connectivity and faces together."""

from .truncation import split_vertex, truncate
from .contraction import contract, collapse_faces, face_edges
from .conway import ambo, bevel, expand, dual
