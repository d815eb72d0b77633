from togglelock.solvers.base import Attempt, LockBox, Move, Solver, apply_plan
from togglelock.solvers.cross_toggle import CrossToggleSolver
from togglelock.solvers.row_sweep import RowSweepSolver

METHODS = ("cells", "rows")


def make_solver(name: str, params: dict | None = None) -> Solver:
    name = name.lower()
    if name == "cells":
        return CrossToggleSolver(
            min_weight=(params or {}).get("min_weight", True),
            max_nullspace_dim=(params or {}).get("max_nullspace_dim", 10),
        )
    if name == "rows":
        return RowSweepSolver()
    raise ValueError(f"Unknown solver: {name}")


def solve(box: LockBox, method: str = "cells", **params) -> bool:
    """Open the box in place; True means it is still locked."""
    return make_solver(method, params).solve(box)
