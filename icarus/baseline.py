"""Tremaux baseline explorer.

Plain depth-first exploration that leaves a dead end by retracing its own
trail one room at a time. It is not used to solve mazes in production; it
exists as the yardstick ``ExplorationEngine`` is measured against. On
perfect (tree) mazes both explorers walk the same number of steps.
"""

from __future__ import annotations

import random
from typing import List, Optional, Set

from .engine import (
    EngineState,
    ExplorationError,
    ExplorationStrategy,
    OracleReply,
    ProtocolViolationError,
    SessionClosedError,
    UnreachableGoalError,
    as_reply,
)
from .navigation import ORIGIN, Coordinate, Direction, direction_between


class TremauxEngine(ExplorationStrategy):
    """Trail-retracing explorer sharing the ``step`` protocol of ``ExplorationEngine``."""

    def __init__(self, *, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        self.rng = rng if rng is not None else random.Random(seed)
        self.position: Coordinate = ORIGIN
        self.state = EngineState.EXPLORING
        self.error: Optional[ExplorationError] = None
        self.visited: Set[Coordinate] = set()
        # Rooms between the start and the current room, most recent last
        self.trail: List[Coordinate] = []
        self.commands: List[Direction] = []
        self.backtrack_steps = 0

    @property
    def rooms_visited(self) -> int:
        return len(self.visited)

    def step(self, reply: OracleReply) -> Optional[Direction]:
        if self.done:
            raise SessionClosedError(state=self.state)
        reply = as_reply(reply)

        if reply.victory:
            self.visited.add(self.position)
            self.state = EngineState.SUCCEEDED
            return None
        if reply.error:
            self._fail(
                ProtocolViolationError(
                    position=self.position,
                    reason=f"the last move was rejected ({reply.message or 'no message'})",
                )
            )

        here = self.position
        self.visited.add(here)
        directions = reply.survey.open_directions()
        self.rng.shuffle(directions)

        for direction in directions:
            if here.step(direction) not in self.visited:
                self.trail.append(here)
                self.state = EngineState.EXPLORING
                return self._move(direction)

        if not self.trail:
            self._fail(UnreachableGoalError(position=here, rooms_visited=len(self.visited)))

        previous = self.trail.pop()
        self.state = EngineState.BACKTRACKING
        self.backtrack_steps += 1
        return self._move(direction_between(here, previous))

    def _move(self, direction: Direction) -> Direction:
        self.position = self.position.step(direction)
        self.commands.append(direction)
        return direction

    def _fail(self, error: ExplorationError) -> None:
        self.state = EngineState.FAILED
        self.error = error
        raise error
