"""Generic constraints and assignments for variables with discrete values.

These store every possible assignment explicitly, so they are flexible but
far less efficient than specialised constraints such as those in
:mod:`farc3.mines`.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator, Sequence
from typing import Any, Optional, TypeVar

from .constraint import Assignment, ConflictError, Constraint

T = TypeVar("T")


def partition_idxs(items: Iterable[T], idxs: Iterable[int]) -> tuple[list[T], list[T]]:
    """Split ``items`` into those at the positions in ``idxs`` and the rest.

    ``idxs`` must be in ascending order.
    """
    pointers = iter(idxs)
    pointer = next(pointers, None)
    picked: list[T] = []
    rest: list[T] = []
    for position, item in enumerate(items):
        if pointer is None or position < pointer:
            rest.append(item)
        else:
            picked.append(item)
            pointer = next(pointers, None)
    return picked, rest


class DiscreteAssignment(Assignment):
    """A map from variables to discrete values."""

    def __init__(self, pairs: Iterable[tuple[Hashable, Any]] = ()) -> None:
        self._values: dict = dict(pairs)

    def intersection(self, other: "DiscreteAssignment") -> "DiscreteAssignment":
        return DiscreteAssignment(
            (var, value)
            for var, value in self._values.items()
            if var in other._values and other._values[var] == value
        )

    def union(self, other: "DiscreteAssignment") -> "DiscreteAssignment":
        merged = dict(self._values)
        for var, value in other._values.items():
            if var not in merged:
                merged[var] = value
            elif merged[var] != value:
                del merged[var]
        return DiscreteAssignment(merged.items())

    def __iter__(self) -> Iterator[tuple[Hashable, Any]]:
        """Yield ``(variable, value)`` pairs."""
        return iter(self._values.items())

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DiscreteAssignment):
            return NotImplemented
        return self._values == other._values

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"DiscreteAssignment({self._values!r})"


class DiscreteConstraint(Constraint):
    """A constraint holding every allowed assignment to its variables."""

    def __init__(self, assignments: Iterable[Iterable[tuple[Hashable, Any]]] = ()) -> None:
        rows = iter(assignments)
        first = next(rows, None)
        self._variables: list = []
        self._assignments: set[tuple] = set()
        if first is None:
            return

        first_pairs = list(first)
        self._variables = [var for var, _ in first_pairs]
        self._assignments.add(tuple(value for _, value in first_pairs))

        expected = set(self._variables)
        for row in rows:
            mapping = dict(row)
            if len(mapping) != len(self._variables) or set(mapping) != expected:
                raise ValueError(
                    "variables are not consistent when constructing generic "
                    f"constraint; expected all assignments to use the variables "
                    f"{self._variables!r}"
                )
            self._assignments.add(tuple(mapping[var] for var in self._variables))

    @classmethod
    def _build(cls, variables: Sequence, assignments: Iterable[tuple]) -> "DiscreteConstraint":
        constraint = cls()
        constraint._variables = list(variables)
        constraint._assignments = set(assignments)
        return constraint

    def size(self) -> int:
        return len(self._assignments)

    def variables(self) -> Iterator[Hashable]:
        return iter(list(self._variables))

    def decompositions(self) -> Iterator["DiscreteConstraint"]:
        for values in list(self._assignments):
            yield DiscreteConstraint._build(self._variables, [values])

    def reduce(self, other: "DiscreteConstraint") -> bool:
        positions = {var: idx for idx, var in enumerate(other._variables)}
        shared = [
            (idx, positions[var])
            for idx, var in enumerate(self._variables)
            if var in positions
        ]

        before = len(self._assignments)
        self._assignments = {
            values0
            for values0 in self._assignments
            if any(
                all(values0[i0] == values1[i1] for i0, i1 in shared)
                for values1 in other._assignments
            )
        }
        after = len(self._assignments)
        if after == 0:
            raise ConflictError("no assignment satisfies both constraints")
        return after < before

    def _common_idxs(self) -> Optional[list[int]]:
        """Positions whose value is the same in every assignment."""
        rows = iter(self._assignments)
        first = next(rows, None)
        if first is None:
            return None
        common = list(enumerate(first))
        for values in rows:
            common = [(idx, value) for idx, value in common if values[idx] == value]
        return [idx for idx, _ in common]

    def _pop_idxs(self, idxs: list[int]) -> Optional["DiscreteConstraint"]:
        """Remove the given positions and return them as a new constraint."""
        if not self._variables:
            return None
        variables, self._variables = partition_idxs(self._variables, idxs)
        popped: set[tuple] = set()
        remaining: set[tuple] = set()
        for values in self._assignments:
            picked, rest = partition_idxs(values, idxs)
            popped.add(tuple(picked))
            remaining.add(tuple(rest))
        self._assignments = remaining
        return DiscreteConstraint._build(variables, popped)

    def pop_solution(self) -> Optional[DiscreteAssignment]:
        idxs = self._common_idxs()
        if idxs is None:
            return None
        popped = self._pop_idxs(idxs)
        if popped is None:
            return None
        values = next(iter(popped._assignments), None)
        if values is None:
            return None
        return DiscreteAssignment(zip(popped._variables, values))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DiscreteConstraint):
            return NotImplemented
        return (
            self._variables == other._variables
            and self._assignments == other._assignments
        )

    def __hash__(self) -> int:
        return hash((tuple(self._variables), frozenset(self._assignments)))

    def __repr__(self) -> str:
        return (
            f"DiscreteConstraint(variables={self._variables!r}, "
            f"assignments={self._assignments!r})"
        )