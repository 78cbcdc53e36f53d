"""
Pydantic schemas for the icarus exploration protocol.

Everything that crosses the boundary between the explorer and a maze oracle
is defined here, together with the summary produced at the end of a run.

Design Philosophy:
- Wire-level models mirror what a maze server replies with (survey, victory
  flag, error flag, free-form message)
- Engine-internal bookkeeping (graph, junctions, boundary) stays in plain
  dataclasses under ``icarus.navigation``; only data that leaves the engine
  is validated here
"""

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, Field

from icarus.navigation import Direction


# ============================================================================
# Oracle Protocol Schemas
# ============================================================================


class Survey(BaseModel):
    """Walls around the room the explorer currently occupies.

    ``True`` means a wall is present on that side. The oracle only ever
    reports the room the explorer is standing in.
    """

    north: bool = Field(False, description="Wall on the north side")
    east: bool = Field(False, description="Wall on the east side")
    south: bool = Field(False, description="Wall on the south side")
    west: bool = Field(False, description="Wall on the west side")

    def has_wall(self, direction: Direction) -> bool:
        return getattr(self, direction.value)

    def open_directions(self) -> List[Direction]:
        """Directions without a wall, in compass order (N, E, S, W)."""

        return [direction for direction in Direction if not self.has_wall(direction)]

    @classmethod
    def closed(cls) -> "Survey":
        return cls(north=True, east=True, south=True, west=True)


class Reply(BaseModel):
    """Oracle response to ``awake`` or to a single move command.

    Exactly one reply answers each command. ``victory`` is the goal-reached
    signal and carries no meaningful survey. ``error`` means the oracle
    refused the move (wall or maze edge) and ``message`` explains why.
    """

    survey: Survey = Field(default_factory=Survey, description="Walls of the current room")
    victory: bool = Field(False, description="True once the treasure room is reached")
    error: bool = Field(False, description="True if the oracle rejected the command")
    message: Optional[str] = Field(None, description="Human-readable detail from the oracle")

    @classmethod
    def from_survey(cls, survey: Survey) -> "Reply":
        return cls(survey=survey)

    @classmethod
    def goal_reached(cls, message: Optional[str] = None) -> "Reply":
        return cls(victory=True, message=message)

    @classmethod
    def rejected(cls, message: str) -> "Reply":
        return cls(error=True, message=message)


# ============================================================================
# Run Summary Schemas
# ============================================================================


class ExplorationResult(BaseModel):
    """Summary of a finished exploration session.

    ``steps`` counts every command sent to the oracle, ``backtrack_steps``
    the subset spent replaying known routes back to a junction.
    """

    outcome: Literal["goal_reached"] = "goal_reached"
    steps: int = Field(..., ge=0, description="Commands sent to the oracle")
    backtrack_steps: int = Field(0, ge=0, description="Commands spent replaying known routes")
    rooms_visited: int = Field(..., ge=1, description="Distinct rooms entered, start included")
    final_position: Tuple[int, int] = Field(
        ..., description="Treasure room relative to the start room (x, y)",
    )
    directions: List[Direction] = Field(
        default_factory=list, description="Every command in the order it was sent",
    )
