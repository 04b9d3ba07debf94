"""
Preset builders - every builder returns a consistently wound Shape.

EXPORTS:
- Platonic: build_tetrahedron, build_cube, build_octahedron,
  build_icosahedron, build_dodecahedron
- Families: build_prism, build_antiprism, build_pyramid (n >= 3)
- Dispatch: build_preset(name, n=None), PRESETS
"""

from .polyhedra import (
    build_tetrahedron,
    build_cube,
    build_octahedron,
    build_icosahedron,
    build_dodecahedron,
    build_prism,
    build_antiprism,
    build_pyramid,
    build_preset,
    PRESETS,
)
