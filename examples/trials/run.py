"""Batch runner comparing the junction-routing engine with the Tremaux baseline.

Example usage (runs 50 trials per maze, base seed 42):

    python -m examples.trials.run --runs 50 --base-seed 42

Every trial explores a fresh copy of a fixed maze with a fresh strategy, so
runs never share state. Results are grouped per ``<maze>/<strategy>`` label
and printed as step averages at the end.
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Callable, Dict, Optional

from icarus import (
    Config,
    ExplorationEngine,
    ExplorationError,
    ExplorationStrategy,
    Explorer,
    InMemoryMaze,
    RunStatistics,
    TremauxEngine,
)
from icarus.logging_utils import log_info


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

TREE = """
+--+--+--+--+--+--+
|S    |        |  |
+--+  +  +--+  +  +
|     |  |  |     |
+  +--+  +  +--+  +
|  |     |        |
+  +  +--+--+--+  +
|     |T          |
+--+--+--+--+--+--+
"""


def _empty_room() -> InMemoryMaze:
    maze = InMemoryMaze.empty(15, 10)
    maze.set_treasure(14, 9)
    return maze


MAZES: Dict[str, Callable[[], InMemoryMaze]] = {
    "braided": lambda: InMemoryMaze.from_ascii(BRAIDED),
    "tree": lambda: InMemoryMaze.from_ascii(TREE),
    "empty": _empty_room,
}

STRATEGIES: Dict[str, Callable[[Optional[int]], ExplorationStrategy]] = {
    "engine": lambda seed: ExplorationEngine(seed=seed),
    "tremaux": lambda seed: TremauxEngine(seed=seed),
}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compare maze exploration strategies")
    parser.add_argument("--runs", type=int, default=20, help="Trials per maze and strategy")
    parser.add_argument(
        "--base-seed",
        type=int,
        default=Config.DEFAULT_SEED or 0,
        help="Base seed (each run adds its index); 0 disables deterministic seeding",
    )
    parser.add_argument(
        "--maze",
        choices=sorted(MAZES),
        action="append",
        help="Maze to run (repeatable); defaults to all of them",
    )
    parser.add_argument("--verbose", action="store_true", help="Trace every command")
    return parser.parse_args()


def _seed_for_index(base_seed: int, index: int) -> int | None:
    if base_seed <= 0:
        return None
    return base_seed + index


async def run_trial(maze_name: str, strategy_name: str, *, seed: int | None, verbose: bool):
    explorer = Explorer(
        MAZES[maze_name](),
        strategy=STRATEGIES[strategy_name](seed),
        label=f"{maze_name}/{strategy_name}",
        verbose=verbose,
    )
    return await explorer.run()


async def run_batch(args: argparse.Namespace) -> RunStatistics:
    stats = RunStatistics()
    for maze_name in args.maze or sorted(MAZES):
        for strategy_name in STRATEGIES:
            label = f"{maze_name}/{strategy_name}"
            for idx in range(args.runs):
                seed = _seed_for_index(args.base_seed, idx)
                try:
                    result = await run_trial(
                        maze_name, strategy_name, seed=seed, verbose=args.verbose
                    )
                except ExplorationError:
                    stats.record_failure(label)
                    continue
                stats.record(result, label)
    return stats


def main() -> None:
    Config.validate()
    args = parse_args()
    log_info(Config.display())
    stats = asyncio.run(run_batch(args))
    print()
    print(stats.summary())


if __name__ == "__main__":
    main()
