"""Constraints and assignments for solving minesweeper mine placement."""

from __future__ import annotations

import math
from collections.abc import Hashable, Iterable, Iterator
from typing import Optional

from .constraint import Assignment, ConflictError, Constraint


def choose_num(n: int, r: int) -> int:
    """Number of ways to choose ``r`` unordered items from ``n``."""
    if r > n:
        raise ValueError(
            f"Unable to choose {r} items from a collection with {n} items"
        )
    return math.comb(n, r)


class MineConflict(ConflictError):
    """Raised when two mine constraints conflict."""


class MineAssignment(Assignment):
    """Which tiles are known to be safe and which are known to be mines."""

    def __init__(
        self, safe_tiles: Iterable[Hashable] = (), mine_tiles: Iterable[Hashable] = ()
    ) -> None:
        self.safe_tiles: set = set(safe_tiles)
        self.mine_tiles: set = set(mine_tiles)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[Hashable, bool]]) -> "MineAssignment":
        """Build from ``(tile, is_mine)`` pairs."""
        assignment = cls()
        for tile, mine in pairs:
            (assignment.mine_tiles if mine else assignment.safe_tiles).add(tile)
        return assignment

    @classmethod
    def all_safe(cls, tiles: Iterable[Hashable]) -> "MineAssignment":
        """An assignment where every given tile is safe."""
        return cls(safe_tiles=tiles)

    @classmethod
    def all_mine(cls, tiles: Iterable[Hashable]) -> "MineAssignment":
        """An assignment where every given tile is a mine."""
        return cls(mine_tiles=tiles)

    def intersection(self, other: "MineAssignment") -> "MineAssignment":
        return MineAssignment(
            self.safe_tiles & other.safe_tiles,
            self.mine_tiles & other.mine_tiles,
        )

    def union(self, other: "MineAssignment") -> "MineAssignment":
        safe = self.safe_tiles | other.safe_tiles
        mines = self.mine_tiles | other.mine_tiles
        clashing = safe & mines
        return MineAssignment(safe - clashing, mines - clashing)

    def __iter__(self) -> Iterator[tuple[Hashable, bool]]:
        """Yield ``(tile, False)`` for safe tiles, then ``(tile, True)`` for mines."""
        for tile in self.safe_tiles:
            yield tile, False
        for tile in self.mine_tiles:
            yield tile, True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MineAssignment):
            return NotImplemented
        return self.safe_tiles == other.safe_tiles and self.mine_tiles == other.mine_tiles

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"MineAssignment(safe_tiles={self.safe_tiles!r}, mine_tiles={self.mine_tiles!r})"


class MineConstraint(Constraint):
    """The number of mines present among a set of tiles."""

    def __init__(self, tiles: Iterable[Hashable], count: int) -> None:
        if count < 0:
            raise ValueError("mine count cannot be negative")
        self.tiles: frozenset = frozenset(tiles)
        self.count: int = count

    def size(self) -> int:
        return choose_num(len(self.tiles), self.count)

    def variables(self) -> Iterator[Hashable]:
        return iter(self.tiles)

    def decompositions(self) -> Iterator["MineConstraint"]:
        for tile in self.tiles:
            if self.count > 0:
                yield MineConstraint([tile], 1)
            if self.count < len(self.tiles):
                yield MineConstraint([tile], 0)

    def reduce(self, other: "MineConstraint") -> bool:
        remaining = self.tiles - other.tiles

        # other holds no mines: its tiles are all safe
        if other.count == 0:
            if len(remaining) < self.count:
                raise MineConflict("more mines than remaining tiles")
            self.tiles = remaining
            return True

        # other's tiles are all mines
        if other.count == len(other.tiles):
            overlap = len(self.tiles & other.tiles)
            if self.count < overlap:
                raise MineConflict("fewer mines than known mine tiles")
            self.count -= overlap
            self.tiles = remaining
            return True

        # other is a subset of this constraint
        if other.tiles <= self.tiles:
            if self.count < other.count or len(remaining) < self.count - other.count:
                raise MineConflict("mine counts of subset are inconsistent")
            self.count -= other.count
            self.tiles = remaining
            return True

        return False

    def pop_solution(self) -> Optional[MineAssignment]:
        if self.count == 0:
            tiles, self.tiles = self.tiles, frozenset()
            return MineAssignment.all_safe(tiles)
        if self.count == len(self.tiles):
            tiles, self.tiles = self.tiles, frozenset()
            self.count = 0
            return MineAssignment.all_mine(tiles)
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MineConstraint):
            return NotImplemented
        return self.tiles == other.tiles and self.count == other.count

    def __hash__(self) -> int:
        return hash((self.tiles, self.count))

    def __repr__(self) -> str:
        return f"MineConstraint({set(self.tiles)!r}, {self.count})"