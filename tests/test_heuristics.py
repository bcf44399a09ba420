import pytest

from farc3.heuristics import DefaultHeuristic, Heuristic
from farc3.mines import MineConstraint


def test_default_rank_values():
    cons = MineConstraint([0, 1, 2], 2)
    overlaps = [MineConstraint([0, 1], 1), MineConstraint([1, 2], 1)]
    assert DefaultHeuristic().rank(cons, overlaps) == (-3, 2)


def test_fewer_assignments_rank_higher():
    heuristic = DefaultHeuristic()
    decided = MineConstraint([0, 1, 2], 0)
    undecided = MineConstraint([0, 1, 2], 2)
    assert heuristic.rank(decided, []) > heuristic.rank(undecided, [])


def test_more_overlaps_break_ties():
    heuristic = DefaultHeuristic()
    cons = MineConstraint([0, 1], 1)
    other = MineConstraint([1, 2], 1)
    assert heuristic.rank(cons, [other, other]) > heuristic.rank(cons, [other])


def test_max_picks_smallest_constraint():
    heuristic = DefaultHeuristic()
    constraints = [
        MineConstraint([0, 1, 2], 2),
        MineConstraint([3, 4], 1),
        MineConstraint([5, 6, 7, 8], 2),
    ]
    best = max(constraints, key=lambda c: heuristic.rank(c, []))
    assert best == MineConstraint([3, 4], 1)


def test_heuristic_is_abstract():
    with pytest.raises(TypeError):
        Heuristic()