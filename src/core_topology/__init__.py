"""
CORE_TOPOLOGY - Combinatorial polyhedron engine
===============================================

NO rendering. NO geometry kept. NO GPU.

Structure:
    spec/       - Constants, errors, snapshot contract
    skeleton/   - Distance (connectivity), Cycles (faces), Shape (both)
    builders/   - Named presets (tetrahedron, cube, prism(n), ...)
    operators/  - split_vertex, truncate, contract, ambo, dual, ...
    analysis/   - Verification reports, Graphviz export

Consumers read Shape.snapshot(), a frozen PolyhedronSnapshot with:
    - vertices, edges, faces
    - name

Requirements:
    Python >= 3.9
    numpy >= 1.20
    scipy >= 1.11
    networkx >= 2.6
"""

import logging
import sys

# Python version check
if sys.version_info < (3, 9):
    raise ImportError(f"core_topology requires Python >= 3.9, got {sys.version}")

# scipy version check (csgraph shortest_path / connected_components)
import scipy
_scipy_version = tuple(int(p) for p in scipy.__version__.split('.')[:2] if p.isdigit())
if _scipy_version < (1, 11):
    raise ImportError(f"core_topology requires scipy >= 1.11, got {scipy.__version__}")

# numpy version check
import numpy as np
_numpy_version = tuple(int(p) for p in np.__version__.split('.')[:2] if p.isdigit())
if _numpy_version < (1, 20):
    raise ImportError(f"core_topology requires numpy >= 1.20, got {np.__version__}")

# Library logging: applications configure handlers
logging.getLogger(__name__).addHandler(logging.NullHandler())

from . import spec
from . import skeleton
from . import builders
from . import operators
from . import analysis

from .skeleton import Distance, Cycle, Cycles, Shape
from .spec import InvalidTopology, MalformedBoundary, ContiguityError, PolyhedronSnapshot

__version__ = "0.1.0"
