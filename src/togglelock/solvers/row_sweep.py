from __future__ import annotations

import logging

import numpy as np

from ..algebra import build_sweep_operator, gf2_eliminate
from .base import Move, Solver

logger = logging.getLogger(__name__)


class RowSweepSolver(Solver):
    """
    One unknown per grid row: sweep a toggle across every column of that row.
    Sweeps only ever flip whole rows, so only row-uniform states in their
    span can be opened; anything else is left for the lock check.
    """

    name = "rows"

    def decisions(self, state: np.ndarray) -> np.ndarray:
        """Return the 0/1 sweep decision for every row.

        Every grid column is solved as its own right-hand side against the
        same sweep operator; the first column's answer is the one applied.
        """
        state = np.asarray(state, dtype=bool)
        rows, cols = state.shape
        per_column = gf2_eliminate(
            build_sweep_operator(rows, cols), state.astype(np.uint8)
        )
        decisions = per_column[:, 0]
        if (per_column != decisions[:, None]).any():
            logger.info("Columns disagree, state is not row-uniform")
        logger.debug("%d of %d rows selected for a sweep", decisions.sum(), rows)
        return decisions

    def plan(self, state: np.ndarray) -> list[Move]:
        state = np.asarray(state, dtype=bool)
        cols = state.shape[1]
        return [
            (int(i), j)
            for i in np.flatnonzero(self.decisions(state))
            for j in range(cols)
        ]
