"""Abstract interfaces for assignments and constraints."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Generic, Optional, TypeVar

Var = TypeVar("Var")
Sol = TypeVar("Sol", bound="Assignment")
A = TypeVar("A", bound="Assignment")
C = TypeVar("C", bound="Constraint")


class ConflictError(Exception):
    """Raised when two constraints admit no common assignment."""


class Assignment(ABC):
    """A map from variables in a problem to the values they take.

    In a minesweeper game the variables are tile positions and the values
    say whether each tile holds a mine.
    """

    @abstractmethod
    def intersection(self: A, other: A) -> A:
        """Keep only variables assigned in both, with values that agree."""

    @abstractmethod
    def union(self: A, other: A) -> A:
        """Combine both assignments, dropping variables whose values clash.

        Contradictions are hidden here on purpose; they are meant to be
        caught while reducing constraints.
        """


class Constraint(ABC, Generic[Var, Sol]):
    """A set of possible assignments to some of a problem's variables.

    Invariants:

    1. a constraint with no variables has size 1 (the empty solution);
    2. a constraint with variables has at least one decomposition.
    """

    @abstractmethod
    def size(self) -> int:
        """Approximate count of distinct assignments.

        Must be 1 when exactly one solution remains and 0 when none does.
        """

    @abstractmethod
    def variables(self) -> Iterator[Var]:
        """Iterate over every variable this constraint affects."""

    @abstractmethod
    def decompositions(self: C) -> Iterator[C]:
        """Yield constraints on a subset of the variables, each with a
        single solution that this constraint allows."""

    @abstractmethod
    def reduce(self: C, other: C) -> bool:
        """Remove the overlap with ``other`` from this constraint.

        Returns whether ``other`` reduced this constraint, and raises
        ConflictError when no assignment satisfies both.
        """

    @abstractmethod
    def pop_solution(self) -> Optional[Sol]:
        """Remove and return every variable that has a unique value here."""