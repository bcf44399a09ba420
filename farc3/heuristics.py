"""Heuristics that decide which constraint a search explores first."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from .constraint import Constraint


class Heuristic(ABC):
    """Ranks constraints; the highest rank is explored first."""

    @abstractmethod
    def rank(self, constraint: Constraint, overlaps: Sequence[Constraint]) -> Any:
        """Return an orderable rank for ``constraint``.

        ``overlaps`` holds every constraint sharing a variable with it.
        """


class DefaultHeuristic(Heuristic):
    """Prefer constraints with the fewest assignments, then the most overlaps."""

    def rank(
        self, constraint: Constraint, overlaps: Sequence[Constraint]
    ) -> tuple[int, int]:
        return (-constraint.size(), len(overlaps))