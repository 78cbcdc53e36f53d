"""Coordinates and compass directions for relative maze navigation.

The explorer never learns absolute positions. Every room is addressed
relative to the room it woke up in, which is always ``Coordinate(0, 0)``.
Rows grow downward, so moving north decrements ``y``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, order=True)
class Coordinate:
    """Room position relative to the starting room.

    Ordering is lexicographic (``x`` then ``y``) and is what makes route
    selection deterministic when two junctions are equally far away.
    """

    x: int
    y: int

    def __add__(self, other: "Coordinate") -> "Coordinate":
        return Coordinate(self.x + other.x, self.y + other.y)

    def step(self, direction: "Direction") -> "Coordinate":
        """Return the neighbouring coordinate in ``direction``."""

        return self + direction.delta

    def is_adjacent(self, other: "Coordinate") -> bool:
        return abs(self.x - other.x) + abs(self.y - other.y) == 1


ORIGIN = Coordinate(0, 0)


class Direction(Enum):
    """The four cardinal moves accepted by a maze oracle."""

    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    @property
    def delta(self) -> Coordinate:
        return _DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_DELTAS = {
    Direction.NORTH: Coordinate(0, -1),
    Direction.SOUTH: Coordinate(0, 1),
    Direction.EAST: Coordinate(1, 0),
    Direction.WEST: Coordinate(-1, 0),
}

_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}


def delta(direction: Direction) -> Coordinate:
    """Unit offset for ``direction``."""

    return direction.delta


def opposite(direction: Direction) -> Direction:
    """Reverse of ``direction``."""

    return direction.opposite


def direction_between(src: Coordinate, dest: Coordinate) -> Direction:
    """Return the direction that moves from ``src`` to the adjacent ``dest``.

    Raises:
        ValueError: If the two coordinates are not orthogonal neighbours.
    """

    offset = Coordinate(dest.x - src.x, dest.y - src.y)
    for direction, unit in _DELTAS.items():
        if unit == offset:
            return direction
    raise ValueError(f"{src} and {dest} are not adjacent")
