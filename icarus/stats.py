"""Aggregated statistics across many exploration runs.

The aggregator is owned by whoever runs the mazes and passed around
explicitly; nothing here is process-wide.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from .schemas import ExplorationResult


@dataclass
class LabelStats:
    """Totals for one group of runs (for example one maze family)."""

    steps: int = 0
    solved: int = 0
    failed: int = 0

    @property
    def runs(self) -> int:
        return self.solved + self.failed

    @property
    def average_steps(self) -> int:
        """Average steps over solved runs (integer division, 0 if none)."""

        if self.solved == 0:
            return 0
        return self.steps // self.solved


class RunStatistics:
    """Collects results per label and reports step averages."""

    def __init__(self) -> None:
        self._labels: Dict[str, LabelStats] = {}

    def _bucket(self, label: str) -> LabelStats:
        return self._labels.setdefault(label, LabelStats())

    def record(self, result: ExplorationResult, label: str = "default") -> None:
        bucket = self._bucket(label)
        bucket.steps += result.steps
        bucket.solved += 1

    def record_failure(self, label: str = "default") -> None:
        self._bucket(label).failed += 1

    def labels(self) -> List[str]:
        return list(self._labels)

    def get(self, label: str) -> Optional[LabelStats]:
        return self._labels.get(label)

    @property
    def total(self) -> LabelStats:
        combined = LabelStats()
        for bucket in self._labels.values():
            combined.steps += bucket.steps
            combined.solved += bucket.solved
            combined.failed += bucket.failed
        return combined

    def summary(self) -> str:
        """One line per label plus an overall line."""

        lines = []
        for label, bucket in self._labels.items():
            lines.append(
                f"{label}: solved {bucket.solved}/{bucket.runs} "
                f"with an avg of {bucket.average_steps} steps"
            )
        total = self.total
        lines.append(
            f"Labyrinth solved {total.solved} times with an avg of {total.average_steps} steps"
        )
        return "\n".join(lines)
