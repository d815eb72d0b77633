from __future__ import annotations

import logging

import numpy as np

from ..algebra import (
    build_parity_system,
    expand_parities,
    gf2_min_weight_solution,
    gf2_solve,
)
from .base import Move, Solver

logger = logging.getLogger(__name__)


class CrossToggleSolver(Solver):
    """
    One unknown per cell. The full toggle system is solved through its
    row/column parities (rows + cols unknowns) and expanded back to cells;
    presses come out in row-major order. Picks the minimum-weight plan when
    the nullspace is small enough to enumerate.
    """

    name = "cells"

    def __init__(self, min_weight: bool = True, max_nullspace_dim: int = 10):
        self.min_weight = min_weight
        self.max_nullspace_dim = int(max_nullspace_dim)

    def toggles(self, state: np.ndarray) -> np.ndarray | None:
        """Return the rows x cols 0/1 toggle matrix, or None if unreachable."""
        state = np.asarray(state, dtype=bool)
        M, rhs = build_parity_system(state)

        if self.min_weight:
            parities = gf2_min_weight_solution(
                M,
                rhs,
                max_nullspace_dim=self.max_nullspace_dim,
                weight=lambda p: int(expand_parities(state, p).sum()),
            )
        else:
            parities, _ = gf2_solve(M, rhs)
        if parities is None:
            return None
        return expand_parities(state, parities)

    def plan(self, state: np.ndarray) -> list[Move]:
        state = np.asarray(state, dtype=bool)
        if not state.any():
            return []

        toggles = self.toggles(state)
        if toggles is None:
            logger.warning(
                "State with %d locked cells is not reachable by toggles",
                int(state.sum()),
            )
            return []
        return [(int(r), int(c)) for r, c in np.argwhere(toggles)]
