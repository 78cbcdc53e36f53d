"""
Exploration session driver.

Fully decoupled from where the maze lives: the oracle and the exploration
strategy are injected by the caller.

Runs the handshake loop:
1. Wake up in the start room (``oracle.awake``)
2. Feed the reply to the strategy and get one command back
3. Send that command (``oracle.move``) and wait for its reply
4. Repeat until the strategy closes the session
"""

import random
from typing import Callable, List, Optional

from .config import Config
from .engine import EngineState, ExplorationEngine, ExplorationError, ExplorationStrategy
from .logging_utils import (
    log_backtrack,
    log_error,
    log_explore,
    log_info,
    log_success,
    LOG_TAG_BACKTRACK,
    LOG_TAG_ERROR,
    LOG_TAG_EXPLORE,
    LOG_TAG_INFO,
    LOG_TAG_SUCCESS,
)
from .navigation import Direction
from .oracle import MazeOracle
from .schemas import ExplorationResult, Reply


StepListener = Callable[[int, Direction, Reply], None]


class Explorer:
    """
    Drives one exploration session against one maze oracle.

    The strategy defaults to a fresh ``ExplorationEngine``; pass a
    ``TremauxEngine`` (or any ``ExplorationStrategy``) to compare.
    One Explorer owns one strategy; explore another maze with another
    Explorer.
    """

    def __init__(
        self,
        oracle: MazeOracle,
        *,
        strategy: Optional[ExplorationStrategy] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        label: str = "maze",
        verbose: Optional[bool] = None,
        step_listeners: Optional[List[StepListener]] = None,
    ):
        """Initialize the explorer with its dependencies injected.

        Args:
            oracle: Maze session to explore
            strategy: Optional exploration strategy (defaults to ExplorationEngine)
            seed: Seed for the default engine; falls back to ICARUS_SEED
            rng: Random source for the default engine (takes precedence over seed)
            label: Name used in console output
            verbose: Print one line per command (defaults to ICARUS_VERBOSE)
            step_listeners: Optional callables invoked after every reply with
                (step, direction, reply).
        """
        self.oracle = oracle
        if strategy is None:
            if seed is None and rng is None:
                # A malformed ICARUS_SEED must not silently fall back to unseeded runs
                Config.validate()
                seed = Config.DEFAULT_SEED
            strategy = ExplorationEngine(rng=rng, seed=seed)
        self.strategy = strategy
        self.label = label
        self.verbose = Config.VERBOSE if verbose is None else verbose
        self.step_listeners = step_listeners or []
        self.steps = 0

    async def run(self) -> ExplorationResult:
        """Explore until the treasure is found.

        Returns:
            ExplorationResult summarising the session

        Raises:
            ExplorationError: If the strategy ends the session abnormally
        """
        if self.strategy.done or self.steps:
            raise RuntimeError("Explorer.run() can only be called once per session")

        log_info(f"{LOG_TAG_INFO} [{self.label}] Waking up in the start room")
        reply = await self.oracle.awake()

        try:
            command = self.strategy.step(reply)
            while command is not None:
                reply = await self.oracle.move(command)
                self.steps += 1
                self._trace(command, reply)
                self._notify(command, reply)
                command = self.strategy.step(reply)
        except ExplorationError as exc:
            log_error(f"{LOG_TAG_ERROR} [{self.label}] {type(exc).__name__} after {self.steps} steps")
            raise

        position = self.strategy.position
        result = ExplorationResult(
            steps=self.steps,
            backtrack_steps=self.strategy.backtrack_steps,
            rooms_visited=self.strategy.rooms_visited,
            final_position=(position.x, position.y),
            directions=list(self.strategy.commands),
        )
        log_success(
            f"{LOG_TAG_SUCCESS} [{self.label}] Treasure found in {result.steps} steps "
            f"({result.backtrack_steps} backtracking, {result.rooms_visited} rooms)"
        )
        return result

    def _trace(self, command: Direction, reply: Reply) -> None:
        if not self.verbose:
            return
        position = self.strategy.position
        line = f"step {self.steps}: {command.value} -> ({position.x}, {position.y})"
        if self.strategy.state is EngineState.BACKTRACKING:
            log_backtrack(f"  {LOG_TAG_BACKTRACK} {line}")
        else:
            log_explore(f"  {LOG_TAG_EXPLORE} {line}")

    def _notify(self, command: Direction, reply: Reply) -> None:
        # Listener failures are reported but don't end the session
        for listener in self.step_listeners:
            try:
                listener(self.steps, command, reply)
            except Exception as exc:
                log_error(
                    f"  {LOG_TAG_ERROR} [{self.label}] step listener failed at step "
                    f"{self.steps}: {exc}"
                )
