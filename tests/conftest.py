from __future__ import annotations

import logging

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from togglelock.board import ToggleGrid


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger = logging.getLogger("togglelock")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def fx_rng() -> np.random.Generator:
    return np.random.default_rng(25)


class RecordingGrid(ToggleGrid):
    """ToggleGrid that remembers every toggle it receives."""

    def __init__(self, *args, **kwargs):
        self.moves: list[tuple[int, int]] = []
        super().__init__(*args, **kwargs)
        # shuffle toggles are not part of a solve
        self.moves.clear()

    def toggle(self, row: int, col: int) -> None:
        super().toggle(row, col)
        self.moves.append((row, col))


@pytest.fixture
def recording_grid():
    def make(state):
        state = np.asarray(state, dtype=bool)
        grid = RecordingGrid(state.shape[0], state.shape[1], max_shuffle=0)
        grid.state = state.copy()
        return grid

    return make
