"""A generic constraint solving algorithm for a system of constraints."""

from __future__ import annotations

import copy
from collections.abc import Callable, Hashable, Iterable, Iterator
from typing import Any, Generic, Optional, TypeVar

from .constraint import Assignment, ConflictError, Constraint
from .heuristics import DefaultHeuristic, Heuristic

C = TypeVar("C", bound=Constraint)

SolutionFactory = Optional[Callable[[], Assignment]]


def _merge(first: Optional[Assignment], second: Optional[Assignment]) -> Optional[Assignment]:
    """Union two optional assignments."""
    if first is None:
        return second
    if second is None:
        return first
    return first.union(second)


class System(Generic[C]):
    """A set of constraints that can be minimised and solved.

    Invariants kept by the system:

    1. no constraint appears twice;
    2. every variable of every constraint has a back reference to it.
    """

    def __init__(self, constraints: Iterable[C] = ()) -> None:
        self._constraints: list[C] = []
        self._keys: list[int] = []
        self._index: dict[int, int] = {}
        self._references: dict[Hashable, set[int]] = {}
        self._to_minimise: set[int] = set()
        self.extend(constraints)

    def __len__(self) -> int:
        return len(self._constraints)

    def __iter__(self) -> Iterator[C]:
        return iter(list(self._constraints))

    def __repr__(self) -> str:
        return f"System({self._constraints!r})"

    # ------------------------------------------------------------------
    # Set-like methods
    # ------------------------------------------------------------------

    def extend(self, constraints: Iterable[C]) -> None:
        """Add every constraint from ``constraints``."""
        for constraint in constraints:
            self.insert(constraint)

    def insert(self, constraint: C) -> bool:
        """Add ``constraint``; return whether it was already in the system."""
        key = hash(constraint)
        if key in self._index:
            return True

        idx = len(self._constraints)
        for var in constraint.variables():
            self._references.setdefault(var, set()).add(idx)
        self._index[key] = idx
        self._keys.append(key)
        self._constraints.append(constraint)
        self._to_minimise.add(idx)
        return False

    def _remove_idx(self, idx: int) -> Optional[C]:
        """Remove and return the constraint at ``idx`` by swapping with the last."""
        if not self._constraints:
            return None

        last = len(self._constraints) - 1
        for var in self._constraints[last].variables():
            refs = self._references.get(var)
            if refs is not None:
                refs.discard(last)

        if idx != last:
            for var in self._constraints[idx].variables():
                refs = self._references.get(var)
                if refs is not None:
                    refs.discard(idx)
            self._constraints[idx], self._constraints[last] = (
                self._constraints[last],
                self._constraints[idx],
            )
            self._keys[idx], self._keys[last] = self._keys[last], self._keys[idx]
            for var in self._constraints[idx].variables():
                self._references.setdefault(var, set()).add(idx)
            self._index[self._keys[idx]] = idx

            queued = last in self._to_minimise
            self._to_minimise.discard(last)
            if queued:
                self._to_minimise.add(idx)
            else:
                self._to_minimise.discard(idx)
        else:
            self._to_minimise.discard(last)

        removed = self._constraints.pop()
        self._index.pop(self._keys.pop(), None)
        return removed

    def remove(self, constraint: C) -> Optional[C]:
        """Remove ``constraint`` and return it, or None if it is not present."""
        idx = self._index.get(hash(constraint))
        if idx is None:
            return None
        return self._remove_idx(idx)

    def queue_all(self) -> "System[C]":
        """Queue every constraint to be minimised again."""
        self._to_minimise = set(range(len(self._constraints)))
        return self

    # ------------------------------------------------------------------
    # Solving
    # ------------------------------------------------------------------

    def pop_solution(self, solution_factory: SolutionFactory = None) -> Optional[Assignment]:
        """Remove and return the solution for every decided variable.

        Minimises first when needed, raising ConflictError on a contradiction.
        When nothing is decided, ``solution_factory()`` is returned if given,
        otherwise None.
        """
        if self._to_minimise:
            self.minimise()

        solution: Optional[Assignment] = None
        for idx, constraint in enumerate(self._constraints):
            before = set(constraint.variables())
            popped = constraint.pop_solution()
            if popped is None:
                continue
            solution = _merge(solution, popped)
            for var in before.difference(constraint.variables()):
                refs = self._references.get(var)
                if refs is not None:
                    refs.discard(idx)

        self._remove_empty()

        if solution is None and solution_factory is not None:
            solution = solution_factory()
        return solution

    def _remove_empty(self) -> None:
        """Drop every constraint that affects no variables."""
        empty = [
            idx
            for idx, constraint in enumerate(self._constraints)
            if next(iter(constraint.variables()), _MISSING) is _MISSING
        ]
        if len(empty) == len(self._constraints):
            self._constraints.clear()
            self._keys.clear()
            self._index.clear()
            self._references.clear()
            self._to_minimise.clear()
            return
        for idx in reversed(empty):
            self._remove_idx(idx)

    def minimise(self) -> "System[C]":
        """Reduce overlapping constraints against each other until stable.

        Raises ConflictError when two constraints contradict.
        """
        while self._to_minimise:
            idx = min(self._to_minimise)
            self._to_minimise.discard(idx)
            overlaps = sorted(self._overlaps_at(idx))

            for other in overlaps:
                for var in self._constraints[other].variables():
                    refs = self._references.get(var)
                    if refs is not None:
                        refs.discard(other)

            constraint = self._constraints[idx]
            reduced: list[int] = []
            try:
                for other in overlaps:
                    if self._constraints[other].reduce(constraint):
                        reduced.append(other)
            finally:
                for other in overlaps:
                    for var in self._constraints[other].variables():
                        self._references.setdefault(var, set()).add(other)

            self._to_minimise.update(reduced)
        return self

    def _overlaps_at(self, idx: int) -> set[int]:
        """Indexes of constraints sharing a variable with the one at ``idx``."""
        overlaps: set[int] = set()
        for var in self._constraints[idx].variables():
            overlaps.update(self._references.get(var, ()))
        overlaps.discard(idx)
        return overlaps

    def _best_constraint(self, heuristic: Heuristic) -> Optional[C]:
        """The highest ranked constraint; later ones win ties."""
        best: Optional[C] = None
        best_rank: Any = None
        for idx, constraint in enumerate(self._constraints):
            overlaps = [self._constraints[other] for other in self._overlaps_at(idx)]
            rank = heuristic.rank(constraint, overlaps)
            if best is None or rank >= best_rank:
                best, best_rank = constraint, rank
        return best

    def copy(self) -> "System[C]":
        """An independent copy of this system and its constraints."""
        clone: System[C] = type(self)()
        clone._constraints = [copy.deepcopy(c) for c in self._constraints]
        clone._keys = list(self._keys)
        clone._index = dict(self._index)
        clone._references = {var: set(idxs) for var, idxs in self._references.items()}
        clone._to_minimise = set(self._to_minimise)
        return clone

    __copy__ = copy

    def solve(self, solution_factory: SolutionFactory = None) -> "SystemIter[C]":
        """Iterate over every solution using the default heuristic."""
        return self.solve_with(DefaultHeuristic(), solution_factory)

    def solve_with(
        self, heuristic: Heuristic, solution_factory: SolutionFactory = None
    ) -> "SystemIter[C]":
        """Iterate over every solution, exploring constraints ranked by ``heuristic``."""
        return SystemIter(self, heuristic, solution_factory)


_MISSING = object()


class SystemIter(Iterator, Generic[C]):
    """Depth-first iterator over the solutions of a system."""

    def __init__(
        self,
        system: System[C],
        heuristic: Optional[Heuristic] = None,
        solution_factory: SolutionFactory = None,
    ) -> None:
        self._heuristic = heuristic if heuristic is not None else DefaultHeuristic()
        self._solution_factory = solution_factory
        start = system.copy()
        self._stack: list[tuple[System[C], Optional[Assignment]]]
        try:
            solution = start.pop_solution(solution_factory)
        except ConflictError:
            self._stack = []
        else:
            self._stack = [(start, solution)]

    def __iter__(self) -> "SystemIter[C]":
        return self

    def __next__(self) -> Optional[Assignment]:
        while self._stack:
            system, solution = self._stack.pop()
            if not len(system):
                return solution

            best = system._best_constraint(self._heuristic)
            if best is None:
                raise RuntimeError("a non-empty system should have a best constraint")
            for decomposition in best.decompositions():
                branch = system.copy()
                branch.insert(decomposition)
                try:
                    found = branch.pop_solution(self._solution_factory)
                except ConflictError:
                    continue
                self._stack.append((branch, _merge(solution, found)))
        raise StopIteration