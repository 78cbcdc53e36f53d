"""
MazeOracle interface for pluggable maze providers.

The explorer never sees the maze. It talks to an oracle that answers two
requests: ``awake`` (survey the starting room) and ``move`` (step one room
in a direction and survey the room arrived in). Where the maze comes from
(an HTTP server, a generator, a hand-drawn fixture) is the oracle's
business.

Included implementation:
- InMemoryMaze - rectangular grid of rooms held in memory (tests, benchmarks)

Async design rationale:
- Remote oracles are I/O bound; an async interface lets them await the
  network without blocking anything else in the process
- The explorer awaits each reply before issuing the next command, so at
  most one command is ever outstanding

Usage pattern:
    maze = InMemoryMaze.from_ascii(drawing)
    reply = await maze.awake()
    reply = await maze.move(Direction.EAST)
"""

import textwrap
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .navigation import Direction
from .schemas import Reply, Survey


class MazeOracle(ABC):
    """Abstract base class for maze sessions consumed by an explorer.

    Protocol:
    - ``awake`` is called once, before any command, and returns the survey
      of the starting room
    - ``move`` is called once per command and returns the survey of the
      room arrived in, a victory reply on the treasure room, or an error
      reply if the move is impossible
    """

    @abstractmethod
    async def awake(self) -> Reply:
        """Start the session and return the survey of the starting room."""
        pass

    @abstractmethod
    async def move(self, direction: Direction) -> Reply:
        """Move one room in ``direction`` and return the reply for the new room."""
        pass


@dataclass
class Room:
    """Minimum information kept about a room of an in-memory maze."""

    walls: Survey = field(default_factory=Survey)
    treasure: bool = False
    start: bool = False


class InMemoryMaze(MazeOracle):
    """Grid maze held in memory; ``(0, 0)`` is the top-left room.

    Walls are kept symmetric: adding or removing a wall updates both rooms
    it separates. The treasure may be left unset, in which case no move ever
    produces a victory reply.
    """

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise ValueError("maze needs at least one room")
        self._rooms: List[List[Room]] = [[Room() for _ in range(width)] for _ in range(height)]
        self._rooms[0][0].start = True
        self._start: Tuple[int, int] = (0, 0)
        self._treasure: Optional[Tuple[int, int]] = None
        self._position: Tuple[int, int] = (0, 0)
        self.steps_taken = 0

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def empty(cls, width: int, height: int) -> "InMemoryMaze":
        """Maze without inner walls, closed by perimeter walls."""

        maze = cls(width, height)
        for x in range(width):
            maze.get_room(x, 0).walls.north = True
            maze.get_room(x, height - 1).walls.south = True
        for y in range(height):
            maze.get_room(0, y).walls.west = True
            maze.get_room(width - 1, y).walls.east = True
        return maze

    @classmethod
    def full(cls, width: int, height: int) -> "InMemoryMaze":
        """Maze with every wall in place, ready for carving passages."""

        maze = cls(width, height)
        for row in maze._rooms:
            for room in row:
                room.walls = Survey.closed()
        return maze

    @classmethod
    def from_ascii(cls, drawing: str) -> "InMemoryMaze":
        """Build a maze from a drawing such as::

            +--+--+
            |S    |
            +  +--+
            |    T|
            +--+--+

        Every room is two characters wide. ``|`` marks a wall between rooms
        on the same row, ``-`` a wall between rows. ``S`` marks the start
        room (required) and ``T`` the treasure room (optional).

        Raises:
            ValueError: If the drawing is not a well-formed grid.
        """

        lines = [line.rstrip() for line in textwrap.dedent(drawing).strip("\n").splitlines()]
        if len(lines) < 3 or len(lines) % 2 == 0:
            raise ValueError("drawing needs an odd number of lines (walls around every row)")
        top = lines[0]
        if len(top) < 4 or (len(top) - 1) % 3 != 0:
            raise ValueError("top border must look like '+--+--+'")

        width = (len(top) - 1) // 3
        height = (len(lines) - 1) // 2
        maze = cls(width, height)

        def char(row: int, col: int) -> str:
            line = lines[row]
            return line[col] if col < len(line) else " "

        start = None
        treasure = None
        for y in range(height):
            row = 2 * y + 1
            for x in range(width):
                col = 3 * x
                maze.get_room(x, y).walls = Survey(
                    north=char(row - 1, col + 1) == "-",
                    south=char(row + 1, col + 1) == "-",
                    west=char(row, col) == "|",
                    east=char(row, col + 3) == "|",
                )
                content = char(row, col + 1) + char(row, col + 2)
                if "S" in content:
                    if start is not None:
                        raise ValueError("drawing has more than one start room")
                    start = (x, y)
                if "T" in content:
                    if treasure is not None:
                        raise ValueError("drawing has more than one treasure room")
                    treasure = (x, y)

        if start is None:
            raise ValueError("drawing has no start room 'S'")
        maze.set_start_point(*start)
        if treasure is not None:
            maze.set_treasure(*treasure)
        return maze

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        return len(self._rooms[0])

    @property
    def height(self) -> int:
        return len(self._rooms)

    @property
    def position(self) -> Tuple[int, int]:
        return self._position

    @property
    def start(self) -> Tuple[int, int]:
        return self._start

    @property
    def treasure(self) -> Optional[Tuple[int, int]]:
        return self._treasure

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_room(self, x: int, y: int) -> Room:
        if not self.in_bounds(x, y):
            raise ValueError("room outside of maze boundaries")
        return self._rooms[y][x]

    def add_wall(self, x: int, y: int, direction: Direction) -> None:
        """Put a wall on ``direction`` side of (x, y) and the matching side next door."""

        self._set_wall(x, y, direction, True)

    def remove_wall(self, x: int, y: int, direction: Direction) -> None:
        """Open a passage on ``direction`` side of (x, y) and the matching side next door."""

        self._set_wall(x, y, direction, False)

    def _set_wall(self, x: int, y: int, direction: Direction, present: bool) -> None:
        setattr(self.get_room(x, y).walls, direction.value, present)
        nx, ny = x + direction.delta.x, y + direction.delta.y
        if self.in_bounds(nx, ny):
            setattr(self.get_room(nx, ny).walls, direction.opposite.value, present)

    def set_start_point(self, x: int, y: int) -> None:
        room = self.get_room(x, y)
        if room.treasure:
            raise ValueError("can't start in the treasure")
        self.get_room(*self._start).start = False
        room.start = True
        self._start = (x, y)
        self._position = (x, y)

    def set_treasure(self, x: int, y: int) -> None:
        room = self.get_room(x, y)
        if room.start:
            raise ValueError("can't have the treasure at the start")
        if self._treasure is not None:
            self.get_room(*self._treasure).treasure = False
        room.treasure = True
        self._treasure = (x, y)

    # ------------------------------------------------------------------
    # Oracle protocol
    # ------------------------------------------------------------------

    def look_around(self) -> Reply:
        """Survey the current room, or report victory on the treasure room."""

        if self._treasure is not None and self._position == self._treasure:
            return Reply.goal_reached(f"Victory achieved in {self.steps_taken} steps")
        x, y = self._position
        return Reply.from_survey(self.get_room(x, y).walls.model_copy())

    async def awake(self) -> Reply:
        self._position = self._start
        self.steps_taken = 0
        return self.look_around()

    async def move(self, direction: Direction) -> Reply:
        if self._treasure is not None and self._position == self._treasure:
            return Reply.rejected("treasure already found")

        x, y = self._position
        if self.get_room(x, y).walls.has_wall(direction):
            return Reply.rejected("Can't walk through walls")

        nx, ny = x + direction.delta.x, y + direction.delta.y
        if not self.in_bounds(nx, ny):
            return Reply.rejected("room outside of maze boundaries")

        self._position = (nx, ny)
        self.steps_taken += 1
        return self.look_around()
