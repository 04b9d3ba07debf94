"""
Graphviz export of the connectivity graph.

Output is plain DOT text for an external layout tool:

    graph G{
    layout=neato
    	V0 [color="blue"];
    	V0 -- V1;
    }

Vertices are colored by degree % len(DEGREE_COLORS). Rendering the text
to an image is left to the caller.
"""

import logging
from pathlib import Path
from typing import List, Tuple, Union

from ..skeleton import Distance
from ..spec.constants import DEGREE_COLORS, GRAPHVIZ_LAYOUT

logger = logging.getLogger(__name__)


def degree_table(distance: Distance) -> List[Tuple[int, int]]:
    """(vertex, degree) for every vertex."""
    return [(v, distance.degree(v)) for v in distance.vertices()]


def to_dot(distance: Distance) -> str:
    lines = ["graph G{", f"layout={GRAPHVIZ_LAYOUT}"]
    for v, deg in degree_table(distance):
        lines.append(f'\tV{v} [color="{DEGREE_COLORS[deg % len(DEGREE_COLORS)]}"];')
    for v, u in distance.edges():
        lines.append(f"\tV{v} -- V{u};")
    return "\n".join(lines) + "\n}"


def write_dot(distance: Distance, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_dot(distance))
    logger.debug("wrote %s (%d vertices)", path, len(distance))
    return path
