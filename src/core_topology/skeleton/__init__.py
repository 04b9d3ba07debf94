"""Connectivity (Distance), faces (Cycle/Cycles) and the Shape that keeps them in step."""

from .distance import Distance, contraction_labels
from .cycles import Cycle, Cycles
from .shape import Shape
