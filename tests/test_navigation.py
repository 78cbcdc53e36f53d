"""Tests for coordinates, the discovered graph, junctions, routing, and the heuristic."""

import pytest

from icarus.navigation import (
    ORIGIN,
    Boundary,
    Coordinate,
    Direction,
    JunctionTable,
    MazeGraph,
    coordinates_to_directions,
    delta,
    direction_between,
    opposite,
    prioritize,
    route_to_nearest_junction,
    unexplored_beyond,
)


def test_direction_delta_round_trip():
    for direction in Direction:
        assert delta(direction) + delta(opposite(direction)) == ORIGIN
        assert opposite(opposite(direction)) == direction


def test_rows_grow_downward():
    assert ORIGIN.step(Direction.NORTH) == Coordinate(0, -1)
    assert ORIGIN.step(Direction.SOUTH) == Coordinate(0, 1)
    assert ORIGIN.step(Direction.EAST) == Coordinate(1, 0)
    assert ORIGIN.step(Direction.WEST) == Coordinate(-1, 0)


def test_direction_between_adjacent_and_not():
    assert direction_between(Coordinate(2, 2), Coordinate(2, 1)) is Direction.NORTH
    assert direction_between(Coordinate(2, 2), Coordinate(1, 2)) is Direction.WEST

    with pytest.raises(ValueError):
        direction_between(Coordinate(0, 0), Coordinate(1, 1))


def test_coordinates_order_lexicographically():
    assert sorted([Coordinate(1, 0), Coordinate(0, 5), Coordinate(0, -1)]) == [
        Coordinate(0, -1),
        Coordinate(0, 5),
        Coordinate(1, 0),
    ]


def test_graph_edges_are_symmetric_and_idempotent():
    graph = MazeGraph()
    a, b = Coordinate(0, 0), Coordinate(1, 0)

    assert graph.add_edge(a, b) is True
    assert graph.add_edge(b, a) is False  # already known from the other side
    assert graph.neighbors(a) == [b]
    assert graph.neighbors(b) == [a]
    assert list(graph.edges()) == [(a, b)]
    assert len(graph) == 2


def test_graph_rejects_non_adjacent_edge():
    graph = MazeGraph()
    with pytest.raises(ValueError):
        graph.add_edge(Coordinate(0, 0), Coordinate(2, 0))
    assert len(graph) == 0


def test_graph_unknown_node_has_no_neighbors():
    graph = MazeGraph()
    graph.add_node(ORIGIN)
    assert ORIGIN in graph
    assert graph.neighbors(ORIGIN) == []
    assert graph.neighbors(Coordinate(9, 9)) == []


def test_junction_prune_removes_visited_everywhere():
    table = JunctionTable()
    shared = Coordinate(1, 1)
    table.remember(Coordinate(0, 1), [shared])
    table.remember(Coordinate(1, 0), [shared, Coordinate(2, 0)])

    table.prune(shared)

    # A junction whose only candidate was visited disappears entirely
    assert Coordinate(0, 1) not in table
    assert table.candidates(Coordinate(1, 0)) == [Coordinate(2, 0)]
    assert len(table) == 1


def test_junction_remember_empty_list_drops_entry():
    table = JunctionTable()
    table.remember(ORIGIN, [Coordinate(1, 0)])
    table.remember(ORIGIN, [])
    assert not table
    assert table.candidates(ORIGIN) == []


def test_junction_candidates_returns_copy():
    table = JunctionTable()
    table.remember(ORIGIN, [Coordinate(1, 0)])
    table.candidates(ORIGIN).clear()
    assert table.candidates(ORIGIN) == [Coordinate(1, 0)]


def _line_graph(length: int) -> MazeGraph:
    graph = MazeGraph()
    for x in range(length - 1):
        graph.add_edge(Coordinate(x, 0), Coordinate(x + 1, 0))
    return graph


def test_route_picks_nearest_junction():
    graph = _line_graph(4)
    route = route_to_nearest_junction(Coordinate(1, 0), graph, [Coordinate(3, 0), Coordinate(0, 0)])
    assert route == [Direction.WEST]


def test_route_breaks_ties_by_coordinate_order():
    graph = MazeGraph()
    graph.add_edge(ORIGIN, Coordinate(1, 0))
    graph.add_edge(ORIGIN, Coordinate(0, 1))

    # Both junctions are one step away; (0, 1) sorts before (1, 0)
    route = route_to_nearest_junction(ORIGIN, graph, [Coordinate(1, 0), Coordinate(0, 1)])
    assert route == [Direction.SOUTH]


def test_route_takes_shortcut_through_loop():
    graph = MazeGraph()
    ring = [
        Coordinate(0, 0),
        Coordinate(1, 0),
        Coordinate(2, 0),
        Coordinate(2, 1),
        Coordinate(1, 1),
        Coordinate(0, 1),
    ]
    for a, b in zip(ring, ring[1:] + ring[:1]):
        graph.add_edge(a, b)

    route = route_to_nearest_junction(Coordinate(1, 1), graph, [Coordinate(0, 0)])
    assert route == [Direction.WEST, Direction.NORTH]


def test_route_returns_none_without_reachable_junction():
    graph = _line_graph(3)
    graph.add_edge(Coordinate(5, 5), Coordinate(5, 6))

    assert route_to_nearest_junction(ORIGIN, graph, []) is None
    assert route_to_nearest_junction(ORIGIN, graph, [Coordinate(5, 6)]) is None
    # Junctions outside the discovered graph are ignored
    assert route_to_nearest_junction(ORIGIN, graph, [Coordinate(-4, 0)]) is None


def test_coordinate_path_becomes_moves():
    path = [ORIGIN, Coordinate(1, 0), Coordinate(1, 1), Coordinate(0, 1)]
    assert coordinates_to_directions(path) == [Direction.EAST, Direction.SOUTH, Direction.WEST]
    assert coordinates_to_directions([ORIGIN]) == []

    with pytest.raises(ValueError):
        coordinates_to_directions([ORIGIN, Coordinate(2, 0)])


def test_route_from_a_junction_is_empty():
    graph = _line_graph(2)
    assert route_to_nearest_junction(ORIGIN, graph, [ORIGIN]) == []


def test_boundary_only_widens():
    boundary = Boundary()
    boundary.extend(Coordinate(2, -1))
    boundary.extend(Coordinate(1, 0))
    assert boundary.as_tuple() == (0, -1, 2, 0)
    assert boundary.width == 3
    assert boundary.height == 2


def test_unexplored_beyond_counts_half_planes():
    boundary = Boundary(xmin=-2, ymin=-2, xmax=2, ymax=2)
    visited = {ORIGIN}

    # Each half-plane includes the row/column of the target room: 2 x 5 cells
    assert unexplored_beyond(ORIGIN, Coordinate(0, -1), visited, boundary) == 10
    assert unexplored_beyond(ORIGIN, Coordinate(0, 1), visited, boundary) == 10
    assert unexplored_beyond(ORIGIN, Coordinate(1, 0), visited, boundary) == 10
    assert unexplored_beyond(ORIGIN, Coordinate(-1, 0), visited, boundary) == 10

    with pytest.raises(ValueError):
        unexplored_beyond(ORIGIN, Coordinate(2, 2), visited, boundary)


def test_prioritize_moves_largest_region_first_and_keeps_order():
    boundary = Boundary(xmin=-2, ymin=-2, xmax=2, ymax=2)
    visited = {ORIGIN, Coordinate(-2, -2), Coordinate(-1, -2)}
    north, west, east, south = (
        Coordinate(0, -1),
        Coordinate(-1, 0),
        Coordinate(1, 0),
        Coordinate(0, 1),
    )

    # north and west lose two cells each; east and south tie, east comes first
    ordered = prioritize(ORIGIN, [north, west, east, south], visited, boundary)
    assert ordered == [east, north, west, south]


def test_prioritize_is_noop_for_single_candidate():
    boundary = Boundary()
    only = [Coordinate(1, 0)]
    assert prioritize(ORIGIN, only, set(), boundary) == only
    assert prioritize(ORIGIN, [], set(), boundary) == []
