"""Junction bookkeeping for branch-and-backtrack exploration."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List

from .coordinates import Coordinate


class JunctionTable:
    """Tracks visited rooms that still have untried, unvisited neighbours.

    Junction A and junction B may both list the same room as a candidate.
    Once that room is visited it has to disappear from both lists, and a
    junction whose list runs empty is dropped. Every stored list is
    therefore non-empty and only ever holds unvisited coordinates.
    """

    def __init__(self) -> None:
        self._candidates: Dict[Coordinate, List[Coordinate]] = {}

    def remember(self, junction: Coordinate, candidates: Iterable[Coordinate]) -> None:
        """Store ``candidates`` as the untried exits of ``junction``.

        An empty candidate list removes the junction instead of storing it.
        """

        remaining = list(candidates)
        if remaining:
            self._candidates[junction] = remaining
        else:
            self._candidates.pop(junction, None)

    def candidates(self, junction: Coordinate) -> List[Coordinate]:
        """Return a copy of the untried exits of ``junction`` (empty if unknown)."""

        return list(self._candidates.get(junction, ()))

    def prune(self, visited: Coordinate) -> None:
        """Forget ``visited`` as a candidate everywhere."""

        for junction in list(self._candidates):
            paths = self._candidates[junction]
            if visited not in paths:
                continue
            kept = [path for path in paths if path != visited]
            if kept:
                self._candidates[junction] = kept
            else:
                del self._candidates[junction]

    def as_dict(self) -> Dict[Coordinate, List[Coordinate]]:
        return {junction: list(paths) for junction, paths in self._candidates.items()}

    def __contains__(self, junction: object) -> bool:
        return junction in self._candidates

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self._candidates)

    def __len__(self) -> int:
        return len(self._candidates)

    def __bool__(self) -> bool:
        return bool(self._candidates)
