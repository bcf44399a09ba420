# farc3

A small, semi-generic solver for constraint satisfaction problems. The
constraints in a system are reduced against each other until nothing more can
be learnt. The solver then branches on the most promising constraint and yields
every complete solution.

The package is a library. It has no command-line program, and it does not read
puzzles or boards from files. You build constraints in Python and hand them to
a `System`.

## Modules

- `farc3.constraint`: the abstract `Assignment` and `Constraint` classes, and
  `ConflictError`.
- `farc3.heuristics`: the abstract `Heuristic` class and `DefaultHeuristic`.
- `farc3.generic`: `DiscreteConstraint` and `DiscreteAssignment`. A
  `DiscreteConstraint` lists every allowed assignment of values to a fixed set
  of variables. It is flexible, but it stores every possibility. The module
  also has the helper `partition_idxs`.
- `farc3.mines`: `MineConstraint`, `MineAssignment`, `MineConflict` and
  `choose_num`. A `MineConstraint` says how many mines lie among a set of
  tiles, as in a game of minesweeper.
- `farc3.system`: `System` and `SystemIter`.

You can write your own constraint by subclassing `farc3.constraint.Constraint`.
It must provide `size`, `variables`, `decompositions`, `reduce` and
`pop_solution`. It must also be hashable, because `System` uses the hash to
recognise a constraint that is already present. Its solutions subclass
`Assignment` and provide `intersection` and `union`.

## Installing

```
pip install .
```

## Minesweeper example

```python
from farc3.mines import MineAssignment, MineConstraint
from farc3.system import System

system = System([
    MineConstraint([0, 1, 2], 2),
    MineConstraint([1, 2], 1),
    MineConstraint([0, 1], 1),
])

solution = system.pop_solution(MineAssignment)
print(dict(solution) == {0: True, 1: False, 2: True})   # True
print(len(system))                                      # 0, everything was decided
```

`System.pop_solution` minimises the system first if needed. It then removes
every variable whose value is already forced and returns them merged into one
assignment. Constraints that are still undecided stay in the system.

When nothing is decided, the return value depends on the argument:

- With a `solution_factory`, such as `MineAssignment` or `DiscreteAssignment`,
  it returns an empty assignment made by calling it.
- With no argument, it returns `None`.

Iterating over a `MineAssignment` or a `DiscreteAssignment` yields
`(variable, value)` pairs. For mines, the value is `True` for a mine and
`False` for a safe tile.

## Enumerating every solution

```python
from farc3.generic import DiscreteAssignment, DiscreteConstraint
from farc3.system import System

either = DiscreteConstraint([
    [("a", True), ("b", False)],
    [("a", False), ("b", True)],
])

for solution in System([either]).solve(DiscreteAssignment):
    print(dict(solution))
```

`System.solve` returns a `SystemIter`. It works on a copy of the system and
searches depth first. At each step it explores the constraint that
`farc3.heuristics.DefaultHeuristic` ranks highest: fewest possible assignments
first, then most overlaps with other constraints. On a tie, the later
constraint wins.

To use another ranking, pass a `Heuristic` subclass to
`System.solve_with(heuristic, solution_factory)`. Its `rank(constraint,
overlaps)` must return an orderable value.

## Managing a system

- `insert(constraint)` adds a constraint. It returns `True` if the constraint
  was already present, in which case nothing changes.
- `extend(constraints)` adds several constraints.
- `remove(constraint)` removes a constraint and returns it. It returns `None`
  if the constraint is not present.
- `minimise()` reduces overlapping constraints until they are stable and
  returns the system.
- `queue_all()` queues every constraint to be minimised again.
- `copy()` returns an independent copy.
- `len(system)` and iterating over a system give its constraints.

## Conflicts

When two constraints cannot both be satisfied, `reduce`, `System.minimise` and
`System.pop_solution` raise `farc3.constraint.ConflictError`. Mine constraints
raise its subclass `farc3.mines.MineConflict`. During `solve`, branches that
conflict are dropped. A system that conflicts from the start yields no
solutions.

Some invalid inputs raise `ValueError`:

- a `DiscreteConstraint` whose rows use different variables;
- a `MineConstraint` with a negative count;
- `choose_num(n, r)` with `r > n`.

## Running the tests

```
pip install .[test]
pytest
```