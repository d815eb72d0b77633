from __future__ import annotations

import logging
from typing import Iterable, NamedTuple, Protocol

import numpy as np

logger = logging.getLogger(__name__)

Move = tuple[int, int]


class LockBox(Protocol):
    """Everything a solver needs from a box."""

    def toggle(self, row: int, col: int) -> None: ...
    def snapshot(self) -> np.ndarray: ...
    def is_locked(self) -> bool: ...


class Attempt(NamedTuple):
    before: np.ndarray
    plan: list[Move]
    after: np.ndarray
    locked: bool


def apply_plan(box: LockBox, plan: Iterable[Move]) -> int:
    """Replay toggles in order and return how many were issued."""
    issued = 0
    for row, col in plan:
        box.toggle(row, col)
        issued += 1
    return issued


class Solver(Protocol):
    name: str

    def plan(self, state: np.ndarray) -> list[Move]: ...

    def attempt(self, box: LockBox) -> Attempt:
        """Plan from one snapshot, apply it and re-check the lock."""
        before = np.asarray(box.snapshot(), dtype=bool)
        moves = self.plan(before)
        apply_plan(box, moves)
        locked = box.is_locked()
        logger.debug(
            "%s: %d toggles on %dx%d grid, locked=%s",
            self.name,
            len(moves),
            before.shape[0],
            before.shape[1],
            locked,
        )
        return Attempt(before, moves, np.asarray(box.snapshot(), dtype=bool), locked)

    def solve(self, box: LockBox) -> bool:
        """True if the box is still locked after the attempt."""
        return self.attempt(box).locked
