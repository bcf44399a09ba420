import pytest

from farc3.constraint import ConflictError
from farc3.mines import (
    MineAssignment,
    MineConflict,
    MineConstraint,
    choose_num,
)

FIRST = [(0, True), (1, False), (2, True)]
SECOND = [(1, False), (2, False), (3, True)]


# choose_num


@pytest.mark.parametrize("n, r, expected", [(3, 0, 1), (3, 2, 3), (3, 3, 1)])
def test_choose_num(n, r, expected):
    assert choose_num(n, r) == expected


def test_choose_num_too_many():
    with pytest.raises(ValueError):
        choose_num(2, 3)


# assignments


@pytest.mark.parametrize(
    "make, expected",
    [
        (lambda: MineAssignment([0, 2], [1, 3]), {0: False, 2: False, 1: True, 3: True}),
        (lambda: MineAssignment.from_pairs(FIRST), dict(FIRST)),
        (lambda: MineAssignment.all_safe({0, 1}), {0: False, 1: False}),
        (lambda: MineAssignment.all_mine({0, 1}), {0: True, 1: True}),
    ],
)
def test_assignment_construction_and_iteration(make, expected):
    assert dict(make()) == expected


@pytest.mark.parametrize(
    "operation, expected",
    [
        ("intersection", {1: False}),
        ("union", {0: True, 1: False, 3: True}),
    ],
)
def test_assignment_set_operations(operation, expected):
    left = MineAssignment.from_pairs(FIRST)
    right = MineAssignment.from_pairs(SECOND)
    assert dict(getattr(left, operation)(right)) == expected


def test_assignment_equality():
    base = MineAssignment([0], [1])
    assert base == MineAssignment.from_pairs([(1, True), (0, False)])
    assert not (base == MineAssignment([1], [0]))
    assert MineAssignment().union(base) == base


# constraints


def test_constraint_construction():
    constraint = MineConstraint([0, 1, 2], 2)
    assert (set(constraint.variables()), constraint.count) == ({0, 1, 2}, 2)


def test_constraint_negative_count():
    with pytest.raises(ValueError):
        MineConstraint([0, 1], -1)


@pytest.mark.parametrize("count, expected", [(0, 1), (2, 3), (3, 1)])
def test_constraint_size(count, expected):
    assert MineConstraint([0, 1, 2], count).size() == expected


def test_constraint_decompositions():
    parts = list(MineConstraint([0, 1, 2], 2).decompositions())
    assert parts
    assert all(part.size() == 1 for part in parts)
    assert all(set(part.variables()) <= {0, 1, 2} for part in parts)


@pytest.mark.parametrize("count, kept", [(0, {0}), (2, {1})])
def test_decided_constraint_decompositions_keep_value(count, kept):
    assert {part.count for part in MineConstraint([0, 1], count).decompositions()} == kept


@pytest.mark.parametrize(
    "tiles, count, expected",
    [
        ([0, 1, 2], 0, {0: False, 1: False, 2: False}),
        ([0, 1], 2, {0: True, 1: True}),
    ],
)
def test_constraint_pop_solution(tiles, count, expected):
    constraint = MineConstraint(tiles, count)
    assert dict(constraint.pop_solution()) == expected
    assert (constraint.size(), constraint.count) == (1, 0)
    assert set(constraint.variables()) == set()


def test_constraint_pop_solution_undecided():
    constraint = MineConstraint([0, 1], 1)
    assert constraint.pop_solution() is None
    assert constraint == MineConstraint([0, 1], 1)


@pytest.mark.parametrize(
    "other, solution",
    [
        (MineConstraint([0, 1], 1), {2: True}),
        (MineConstraint([0, 1, 3], 3), {2: False}),
    ],
)
def test_reduce_then_pop(other, solution):
    constraint = MineConstraint([0, 1, 2], 2)
    assert constraint.reduce(other) is True
    assert (constraint.size(), set(constraint.variables())) == (1, {2})

    assert dict(constraint.pop_solution()) == solution
    assert (constraint.size(), set(constraint.variables())) == (1, set())


@pytest.mark.parametrize(
    "start, other, changed, result",
    [
        (([0, 1, 2], 1), ([0], 0), True, ([1, 2], 1)),
        (([0, 1], 1), ([1, 2], 1), False, ([0, 1], 1)),
    ],
)
def test_reduce_outcomes(start, other, changed, result):
    constraint = MineConstraint(*start)
    assert constraint.reduce(MineConstraint(*other)) is changed
    assert constraint == MineConstraint(*result)


@pytest.mark.parametrize(
    "start, other",
    [
        (([0, 1], 1), ([0, 1], 2)),
        (([0, 1], 2), ([0], 0)),
        (([0, 1, 2], 1), ([0, 1, 2], 2)),
    ],
)
def test_reduce_conflicts(start, other):
    with pytest.raises(MineConflict) as info:
        MineConstraint(*start).reduce(MineConstraint(*other))
    assert isinstance(info.value, ConflictError)


def test_constraint_equality_and_hash():
    left = MineConstraint([0, 1], 1)
    right = MineConstraint([1, 0], 1)
    assert left == right
    assert hash(left) == hash(right)
    assert len({left, right, MineConstraint([0, 1], 2)}) == 2