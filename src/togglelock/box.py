from __future__ import annotations

import logging

import numpy as np

from .board import ToggleGrid, check_dimensions
from .solvers import Attempt, make_solver

logger = logging.getLogger(__name__)


def attempt_open(
    rows: int,
    cols: int,
    seed: int | np.random.Generator | None = None,
    method: str = "cells",
    min_weight: bool = True,
    max_nullspace_dim: int = 10,
    max_shuffle: int = 1000,
) -> Attempt:
    """Build a shuffled rows x cols box, solve it and report what happened."""
    rows, cols = check_dimensions(rows, cols)
    solver = make_solver(
        method,
        {"min_weight": min_weight, "max_nullspace_dim": max_nullspace_dim},
    )
    box = ToggleGrid(rows, cols, seed=seed, max_shuffle=max_shuffle)
    logger.info("Opening %r with %s solver", box, method)

    attempt = solver.attempt(box)
    logger.info(
        "Box %s after %d toggles",
        "still locked" if attempt.locked else "opened",
        len(attempt.plan),
    )
    return attempt


def open_box(rows: int, cols: int, **kwargs) -> bool:
    """True if the box is still locked afterwards, False if it opened."""
    return attempt_open(rows, cols, **kwargs).locked
