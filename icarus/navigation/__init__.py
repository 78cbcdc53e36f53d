"""Navigation primitives for exploring an unknown maze."""

from .coordinates import (
    ORIGIN,
    Coordinate,
    Direction,
    delta,
    direction_between,
    opposite,
)
from .graph import MazeGraph
from .junctions import JunctionTable
from .heuristics import Boundary, prioritize, unexplored_beyond
from .router import (
    coordinates_to_directions,
    route_to_nearest_junction,
)

__all__ = [
    "ORIGIN",
    "Coordinate",
    "Direction",
    "delta",
    "opposite",
    "direction_between",
    "MazeGraph",
    "JunctionTable",
    "Boundary",
    "prioritize",
    "unexplored_beyond",
    "coordinates_to_directions",
    "route_to_nearest_junction",
]
