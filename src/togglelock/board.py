from __future__ import annotations

import numpy as np


class InvalidDimensionsError(ValueError):
    """Raised when a grid is built with non-positive or non-integer dimensions."""

    pass


def check_dimensions(rows, cols) -> tuple[int, int]:
    for name, value in (("rows", rows), ("cols", cols)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidDimensionsError(
                f"{name} must be an integer, got {value!r}"
            )
        if value <= 0:
            raise InvalidDimensionsError(f"{name} must be positive, got {value}")
    return int(rows), int(cols)


class ToggleGrid:
    """A rows x cols box of lock cells; True means locked.

    Toggling a cell flips its whole row and its whole column, the shared
    cell exactly once. A new grid starts cleared and is then shuffled by a
    random number of random toggles, so every initial state is reachable.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        seed: int | np.random.Generator | None = None,
        max_shuffle: int = 1000,
    ):
        self.rows, self.cols = check_dimensions(rows, cols)
        self.state = np.zeros((self.rows, self.cols), dtype=bool)
        if isinstance(seed, np.random.Generator):
            self.rng = seed
        else:
            self.rng = np.random.default_rng(seed)
        if max_shuffle > 0:
            self.shuffle(max_shuffle)

    @classmethod
    def from_state(cls, state) -> "ToggleGrid":
        state = np.asarray(state, dtype=bool)
        if state.ndim != 2:
            raise InvalidDimensionsError(
                f"Expected a 2-D state, got shape {state.shape}"
            )
        grid = cls(state.shape[0], state.shape[1], max_shuffle=0)
        grid.state = state.copy()
        return grid

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    def shuffle(self, max_shuffle: int) -> int:
        """Apply a random number (below max_shuffle) of random toggles."""
        n_toggles = int(self.rng.integers(0, max_shuffle))
        for _ in range(n_toggles):
            self.toggle(
                int(self.rng.integers(self.rows)),
                int(self.rng.integers(self.cols)),
            )
        return n_toggles

    def toggle(self, row: int, col: int) -> None:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(
                f"Cell ({row}, {col}) outside {self.rows}x{self.cols} grid"
            )
        self.state[row, :] ^= True
        self.state[:, col] ^= True
        # row and column sweeps both hit the intersection
        self.state[row, col] ^= True

    def snapshot(self) -> np.ndarray:
        return self.state.copy()

    def is_locked(self) -> bool:
        return bool(self.state.any())

    def count_locked(self) -> int:
        return int(self.state.sum())

    def __repr__(self):
        return (
            f"ToggleGrid(rows={self.rows}, cols={self.cols}, "
            f"locked={self.count_locked()})"
        )

    def __str__(self) -> str:
        return "\n".join(
            "".join("1" if cell else "0" for cell in row) for row in self.state
        )
