"""
Analysis functions - read shapes and report, never edit the shape passed in.

Separated from builders to maintain clean layering:
    builders  → skeleton → spec
    operators → skeleton → spec
    analysis  → skeleton → spec

Includes:
- verify_topology: polyhedron report, round-trip check, graph isomorphism
- graphviz: DOT text export of the connectivity graph
"""

from .verify_topology import verify_polyhedron, round_trip, same_graph
from .graphviz import degree_table, to_dot, write_dot
