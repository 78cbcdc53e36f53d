"""Discovered maze graph.

Rooms become nodes the first time they are seen from a survey, and an edge
is recorded whenever a survey shows no wall between two neighbouring rooms.
The graph is append-only: walls never reappear once a passage is known.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

from .coordinates import Coordinate


@dataclass
class MazeGraph:
    """Undirected adjacency map over discovered coordinates."""

    adjacency: Dict[Coordinate, List[Coordinate]] = field(default_factory=dict)

    def add_node(self, node: Coordinate) -> None:
        self.adjacency.setdefault(node, [])

    def add_edge(self, a: Coordinate, b: Coordinate) -> bool:
        """Connect ``a`` and ``b`` in both directions.

        Returns True if the edge is new. Re-adding a known edge is a no-op.

        Raises:
            ValueError: If the coordinates are not orthogonal neighbours.
        """

        if not a.is_adjacent(b):
            raise ValueError(f"cannot connect non-adjacent rooms {a} and {b}")
        a_neighbors = self.adjacency.setdefault(a, [])
        b_neighbors = self.adjacency.setdefault(b, [])
        if b in a_neighbors:
            return False
        a_neighbors.append(b)
        b_neighbors.append(a)
        return True

    def neighbors(self, node: Coordinate) -> List[Coordinate]:
        return self.adjacency.get(node, [])

    def has_node(self, node: Coordinate) -> bool:
        return node in self.adjacency

    def has_edge(self, a: Coordinate, b: Coordinate) -> bool:
        return b in self.adjacency.get(a, ())

    def edges(self) -> Iterator[Tuple[Coordinate, Coordinate]]:
        """Yield every edge once, smaller coordinate first."""

        for node, neighbors in self.adjacency.items():
            for neighbor in neighbors:
                if node < neighbor:
                    yield node, neighbor

    def __contains__(self, node: object) -> bool:
        return node in self.adjacency

    def __len__(self) -> int:
        return len(self.adjacency)
