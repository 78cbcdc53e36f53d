"""Routing helpers over the discovered maze graph."""

from __future__ import annotations

import heapq
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .coordinates import Coordinate, Direction, direction_between
from .graph import MazeGraph


def coordinates_to_directions(path: List[Coordinate]) -> List[Direction]:
    """Convert a coordinate path (start included) into the moves that walk it."""

    return [direction_between(src, dest) for src, dest in zip(path, path[1:])]


def route_to_nearest_junction(
    source: Coordinate,
    graph: MazeGraph,
    junctions: Iterable[Coordinate],
) -> Optional[List[Direction]]:
    """Return the moves from ``source`` to the closest junction, or None.

    Runs Dijkstra from ``source`` over discovered rooms only (every passage
    costs one step) with all junctions as targets. The search stops as soon
    as every junction has been settled or the frontier is empty. Heap entries
    are ``(distance, coordinate)`` so rooms at equal distance are settled in
    coordinate order, and the chosen junction is the smallest
    ``(distance, coordinate)`` pair. Returns None when no junction is
    reachable, which means the known maze has nothing left to explore.
    """

    targets: Set[Coordinate] = {junction for junction in junctions if junction in graph}
    if not targets or source not in graph:
        return None

    # Distances are final once a room is popped (unit weights, no negative edges).
    distances: Dict[Coordinate, int] = {source: 0}
    parents: Dict[Coordinate, Coordinate] = {}
    settled: Set[Coordinate] = set()
    reached: List[Tuple[int, Coordinate]] = []
    frontier: List[Tuple[int, Coordinate]] = [(0, source)]

    while frontier:
        dist, current = heapq.heappop(frontier)
        # Stale heap entry left behind by a later improvement
        if current in settled:
            continue
        settled.add(current)

        if current in targets:
            reached.append((dist, current))
            targets.discard(current)
            if not targets:
                break

        for neighbor in graph.neighbors(current):
            if neighbor in settled:
                continue
            candidate = dist + 1
            if candidate < distances.get(neighbor, candidate + 1):
                distances[neighbor] = candidate
                parents[neighbor] = current
                heapq.heappush(frontier, (candidate, neighbor))

    if not reached:
        return None

    _, junction = min(reached)

    # Walk parent pointers back to the source, then flip into travel order
    path = [junction]
    while path[-1] != source:
        path.append(parents[path[-1]])
    path.reverse()
    return coordinates_to_directions(path)
