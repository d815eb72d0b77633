from togglelock.board import InvalidDimensionsError, ToggleGrid
from togglelock.box import attempt_open, open_box
from togglelock.solvers import (
    CrossToggleSolver,
    LockBox,
    RowSweepSolver,
    make_solver,
    solve,
)

__version__ = "0.1.0"
