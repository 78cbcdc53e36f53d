"""
Icarus - online maze exploration.

Find the treasure room of a maze you have never seen, one surveyed room at
a time, in as few steps as possible.

No global state. No built-in maze server. Every session owns its engine,
and the maze oracle is injected by the user.
"""

__version__ = "0.1.0"

# Configuration
from .config import Config

# Main session driver
from .explorer import Explorer

# Exploration strategies
from .engine import (
    EngineState,
    ExplorationEngine,
    ExplorationStrategy,
    ExplorationError,
    UnreachableGoalError,
    InvalidJunctionError,
    ProtocolViolationError,
    SessionClosedError,
)
from .baseline import TremauxEngine

# Oracle interface
from .oracle import MazeOracle, InMemoryMaze, Room

# Navigation primitives
from .navigation import (
    ORIGIN,
    Coordinate,
    Direction,
    MazeGraph,
    JunctionTable,
    Boundary,
    delta,
    opposite,
    direction_between,
    prioritize,
    route_to_nearest_junction,
)

# Core schemas
from .schemas import Survey, Reply, ExplorationResult

# Statistics
from .stats import RunStatistics, LabelStats

__all__ = [
    # Configuration
    "Config",
    # Main class
    "Explorer",
    # Strategies
    "EngineState",
    "ExplorationEngine",
    "ExplorationStrategy",
    "TremauxEngine",
    # Errors
    "ExplorationError",
    "UnreachableGoalError",
    "InvalidJunctionError",
    "ProtocolViolationError",
    "SessionClosedError",
    # Oracle
    "MazeOracle",
    "InMemoryMaze",
    "Room",
    # Navigation
    "ORIGIN",
    "Coordinate",
    "Direction",
    "MazeGraph",
    "JunctionTable",
    "Boundary",
    "delta",
    "opposite",
    "direction_between",
    "prioritize",
    "route_to_nearest_junction",
    # Schemas
    "Survey",
    "Reply",
    "ExplorationResult",
    # Statistics
    "RunStatistics",
    "LabelStats",
]
