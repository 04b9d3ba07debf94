"""
Global constants for core_topology
==================================

All tolerances and magic numbers in ONE place.
"""

# Face structure
MIN_FACE_LENGTH = 3    # Faces shorter than this are degenerate and get dropped
MIN_SPLIT_DEGREE = 3   # A vertex needs at least this many neighbors to become a face

# Boundary reconstruction (Cycle.from_edges)
MAX_STALLED_SWITCHES = 2   # Consecutive end switches without consuming an edge
# One switch is normal (the back end ran dry, try the front).
# Two in a row means neither end can grow: the edge pool is not one closed walk.

# Geometry tolerances (geometric presets only, topology itself is exact)
EPS_CLOSE = 1e-10      # For "are these equal?" (integer-derived coordinates)
EDGE_TOL_POLY = 1e-3   # abs(d - min_dist) < EDGE_TOL_POLY for icosahedron edges

# Geometry constants (derived, not arbitrary)
PHI = 1.618033988749895    # golden ratio, icosahedron coordinates

# Presets
MIN_PRISM_SIDES = 3    # prism / antiprism / pyramid need an n-gon with n >= 3

# Graphviz export
GRAPHVIZ_LAYOUT = "neato"
DEGREE_COLORS = ("red", "green", "blue")   # indexed by degree % len(DEGREE_COLORS)
