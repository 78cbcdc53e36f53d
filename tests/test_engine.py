"""Tests for the exploration engine state machine."""

import random

import pytest

from icarus.engine import (
    EngineState,
    ExplorationEngine,
    InvalidJunctionError,
    ProtocolViolationError,
    SessionClosedError,
    UnreachableGoalError,
)
from icarus.navigation import ORIGIN, Coordinate, Direction
from icarus.oracle import InMemoryMaze
from icarus.schemas import Reply, Survey


class NoShuffle(random.Random):
    """Keeps open exits in compass order so decisions are predictable."""

    def shuffle(self, x, *args, **kwargs):
        return None


# Start room open to the east and south only
START = Survey(north=True, west=True)


def test_goal_on_first_reply_closes_session():
    engine = ExplorationEngine(seed=1)

    assert engine.step(Reply.goal_reached()) is None
    assert engine.state is EngineState.SUCCEEDED
    assert engine.rooms_visited == 1

    with pytest.raises(SessionClosedError):
        engine.step(Survey())


def test_closed_start_room_is_unreachable():
    engine = ExplorationEngine(seed=1)

    with pytest.raises(UnreachableGoalError) as excinfo:
        engine.step(Survey.closed())

    assert excinfo.value.rooms_visited == 1
    assert excinfo.value.position == ORIGIN
    assert engine.state is EngineState.FAILED


def test_first_move_stores_spare_exit_as_junction():
    engine = ExplorationEngine(rng=NoShuffle())

    # East and south regions are the same size; east is listed first
    assert engine.step(START) is Direction.EAST
    assert engine.position == Coordinate(1, 0)
    assert engine.junctions.as_dict() == {ORIGIN: [Coordinate(0, 1)]}
    assert engine.graph.has_edge(ORIGIN, Coordinate(0, 1))
    assert engine.boundary.as_tuple() == (0, 0, 1, 1)


def test_dead_end_replays_route_then_takes_junction_exit():
    engine = ExplorationEngine(rng=NoShuffle())
    engine.step(START)

    # (1, 0) only leads back west: dead end, backtrack to the start junction
    assert engine.step(Survey(north=True, east=True, south=True)) is Direction.WEST
    assert engine.state is EngineState.BACKTRACKING
    assert engine.backtrack_steps == 1

    # The reply for the replayed move is consumed before the next command
    assert engine.step(START) is Direction.SOUTH
    assert engine.state is EngineState.EXPLORING
    assert engine.position == Coordinate(0, 1)
    assert not engine.junctions

    # (0, 1) only leads back north and nothing is left to try
    with pytest.raises(UnreachableGoalError) as excinfo:
        engine.step(Survey(east=True, south=True, west=True))
    assert excinfo.value.rooms_visited == 3
    assert engine.commands == [Direction.EAST, Direction.WEST, Direction.SOUTH]


def test_rejected_move_is_protocol_violation():
    engine = ExplorationEngine(rng=NoShuffle())
    engine.step(START)

    with pytest.raises(ProtocolViolationError):
        engine.step(Reply.rejected("Can't walk through walls"))
    assert engine.state is EngineState.FAILED

    with pytest.raises(SessionClosedError):
        engine.step(START)


def test_wall_over_known_passage_is_protocol_violation():
    engine = ExplorationEngine(rng=NoShuffle())
    engine.step(START)

    with pytest.raises(ProtocolViolationError) as excinfo:
        engine.step(Survey.closed())
    assert "passage is already known" in excinfo.value.reason


def test_revisited_room_with_different_walls_is_protocol_violation():
    engine = ExplorationEngine(rng=NoShuffle())
    engine.step(START)
    engine.step(Survey(north=True, east=True, south=True))

    with pytest.raises(ProtocolViolationError) as excinfo:
        engine.step(Survey(north=True, west=True, south=True))
    assert "revisited" in excinfo.value.reason


def test_opening_into_walled_room_is_protocol_violation():
    engine = ExplorationEngine(rng=NoShuffle())
    assert engine.step(Survey(north=True, south=True, west=True)) is Direction.EAST
    assert engine.step(Survey(north=True, east=True)) is Direction.SOUTH
    assert engine.step(Survey(east=True, south=True)) is Direction.WEST

    # (0, 1) claims an opening north, but the start room reported a south wall
    with pytest.raises(ProtocolViolationError) as excinfo:
        engine.step(Survey(south=True, west=True))
    assert "reported a wall" in excinfo.value.reason


def test_arriving_at_exhausted_junction_is_invalid(monkeypatch):
    monkeypatch.setattr(
        "icarus.engine.route_to_nearest_junction",
        lambda source, graph, junctions: [Direction.WEST],
    )
    engine = ExplorationEngine(rng=NoShuffle())
    corridor_start = Survey(north=True, south=True, west=True)

    assert engine.step(corridor_start) is Direction.EAST
    assert engine.step(Survey(north=True, east=True, south=True)) is Direction.WEST

    with pytest.raises(InvalidJunctionError) as excinfo:
        engine.step(corridor_start)
    assert excinfo.value.position == ORIGIN
    assert engine.state is EngineState.FAILED


async def _explore_checking_invariants(maze: InMemoryMaze, engine: ExplorationEngine) -> None:
    reply = await maze.awake()
    command = engine.step(reply)
    while command is not None:
        edges_before = set(engine.graph.edges())
        visited_before = set(engine.visited)
        backtracks_before = engine.backtrack_steps

        reply = await maze.move(command)
        command = engine.step(reply)

        # Passages and visits are never forgotten
        assert edges_before <= set(engine.graph.edges())
        assert visited_before <= engine.visited

        # Junctions only hold non-empty lists of unvisited rooms
        for junction, candidates in engine.junctions.as_dict().items():
            assert candidates
            assert not set(candidates) & engine.visited
            assert junction in engine.visited

        # Adjacency stays symmetric
        for node, neighbors in engine.graph.adjacency.items():
            for neighbor in neighbors:
                assert node in engine.graph.neighbors(neighbor)

        # A forward move never targets an already visited room
        if command is not None and engine.backtrack_steps == backtracks_before:
            if engine.state is EngineState.EXPLORING:
                assert engine.position not in visited_before


BRAIDED = """
+--+--+--+--+--+
|S       |     |
+  +--+  +  +  +
|     |        |
+--+  +--+--+  +
|              |
+  +--+  +--+--+
|     |       T|
+--+--+--+--+--+
"""


@pytest.mark.asyncio
@pytest.mark.parametrize("seed", range(6))
async def test_invariants_hold_on_braided_maze(seed):
    maze = InMemoryMaze.from_ascii(BRAIDED)
    engine = ExplorationEngine(seed=seed)

    await _explore_checking_invariants(maze, engine)

    assert engine.state is EngineState.SUCCEEDED
    assert maze.position == maze.treasure
    assert len(engine.commands) == maze.steps_taken


@pytest.mark.asyncio
@pytest.mark.parametrize("seed", range(4))
async def test_invariants_hold_on_open_room(seed):
    maze = InMemoryMaze.empty(5, 4)
    maze.set_treasure(4, 3)
    engine = ExplorationEngine(seed=seed)

    await _explore_checking_invariants(maze, engine)

    assert engine.state is EngineState.SUCCEEDED
    assert engine.position == Coordinate(4, 3)
    assert len(engine.commands) >= 7


@pytest.mark.asyncio
async def test_same_seed_reproduces_the_same_run():
    runs = []
    for _ in range(2):
        maze = InMemoryMaze.from_ascii(BRAIDED)
        engine = ExplorationEngine(rng=random.Random(42))
        await _explore_checking_invariants(maze, engine)
        runs.append(engine.commands)

    assert runs[0] == runs[1]


@pytest.mark.asyncio
async def test_exhaustion_visits_every_reachable_room():
    maze = InMemoryMaze.empty(3, 3)
    maze.set_treasure(2, 2)
    # Seal the treasure room off from the rest of the maze
    maze.add_wall(2, 2, Direction.NORTH)
    maze.add_wall(2, 2, Direction.WEST)
    engine = ExplorationEngine(seed=3)

    with pytest.raises(UnreachableGoalError) as excinfo:
        await _explore_checking_invariants(maze, engine)

    assert excinfo.value.rooms_visited == 8
    assert engine.visited == {
        Coordinate(x, y) for x in range(3) for y in range(3) if (x, y) != (2, 2)
    }
