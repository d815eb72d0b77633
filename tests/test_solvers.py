from __future__ import annotations

import itertools
import time

import numpy as np
import pytest

from togglelock.board import ToggleGrid
from togglelock.solvers import (
    CrossToggleSolver,
    RowSweepSolver,
    apply_plan,
    make_solver,
    solve,
)

SIZES = (1, 2, 3, 4, 5)


@pytest.mark.parametrize(("rows", "cols"), itertools.product(SIZES, SIZES))
def test_opens_every_reachable_state(rows: int, cols: int) -> None:
    solver = CrossToggleSolver()
    for seed in range(8):
        grid = ToggleGrid(rows, cols, seed=seed)
        assert solver.solve(grid) is False
        assert not grid.is_locked()


@pytest.mark.parametrize(("rows", "cols"), [(2, 2), (3, 4), (5, 5), (1, 6)])
def test_opens_without_min_weight(rows: int, cols: int) -> None:
    solver = CrossToggleSolver(min_weight=False)
    for seed in range(5):
        grid = ToggleGrid(rows, cols, seed=100 + seed)
        assert solver.solve(grid) is False


def test_single_cell(recording_grid) -> None:
    grid = recording_grid([[True]])
    assert solve(grid) is False
    assert grid.moves == [(0, 0)]


def test_single_locked_corner(recording_grid) -> None:
    grid = recording_grid([[True, False], [False, False]])
    assert solve(grid) is False
    assert grid.moves == [(0, 0), (0, 1), (1, 0)]


@pytest.mark.parametrize("method", ["cells", "rows"])
def test_cleared_grid_needs_no_toggles(recording_grid, method: str) -> None:
    grid = recording_grid(np.zeros((3, 4), dtype=bool))
    assert solve(grid, method=method) is False
    assert grid.moves == []


@pytest.mark.parametrize("method", ["cells", "rows"])
def test_non_square_grid_terminates(method: str) -> None:
    for seed in range(10):
        grid = ToggleGrid(3, 2, seed=seed)
        result = solve(grid, method=method)
        assert isinstance(result, bool)
        assert result == grid.is_locked()
        if method == "cells":
            assert result is False


def test_plan_is_deterministic() -> None:
    a = ToggleGrid(4, 5, seed=42)
    b = ToggleGrid(4, 5, seed=42)
    solver = CrossToggleSolver()
    plan_a = solver.plan(a.snapshot())
    plan_b = CrossToggleSolver().plan(b.snapshot())
    assert plan_a == plan_b
    assert solver.solve(a) == solver.solve(b)
    assert np.array_equal(a.snapshot(), b.snapshot())


def test_plan_is_row_major(fx_rng) -> None:
    grid = ToggleGrid(4, 4, seed=fx_rng)
    plan = CrossToggleSolver().plan(grid.snapshot())
    assert plan == sorted(plan)
    assert len(set(plan)) == len(plan)


def test_min_weight_never_longer_than_particular() -> None:
    for seed in range(6):
        state = ToggleGrid(3, 5, seed=seed).snapshot()
        best = CrossToggleSolver().plan(state)
        plain = CrossToggleSolver(min_weight=False).plan(state)
        assert len(best) <= len(plain)


def test_unreachable_state_stays_locked(recording_grid) -> None:
    # a single row only ever flips as a whole
    grid = recording_grid([[True, False, False]])
    assert solve(grid) is True
    assert grid.moves == []


def test_row_sweep_single_cell(recording_grid) -> None:
    grid = recording_grid([[True]])
    assert RowSweepSolver().solve(grid) is False
    assert grid.moves == [(0, 0)]


def test_row_sweep_opens_uniform_rows(recording_grid) -> None:
    grid = recording_grid([[True, True], [False, False]])
    solver = RowSweepSolver()
    assert solver.decisions(grid.snapshot()).tolist() == [0, 1]
    assert solver.solve(grid) is False
    assert grid.moves == [(1, 0), (1, 1)]


def test_row_sweep_odd_cols_flips_whole_grid(recording_grid) -> None:
    grid = recording_grid(np.ones((3, 3), dtype=bool))
    solver = RowSweepSolver()
    assert solver.decisions(grid.snapshot()).tolist() == [1, 0, 0]
    assert solver.solve(grid) is False
    assert grid.moves == [(0, 0), (0, 1), (0, 2)]


@pytest.mark.parametrize(("rows", "cols"), [(2, 2), (4, 2), (2, 6), (4, 4)])
def test_row_sweep_opens_any_uniform_state_on_even_grids(
    fx_rng, rows: int, cols: int
) -> None:
    for _ in range(10):
        pattern = fx_rng.uniform(size=rows) < 0.5
        state = np.repeat(pattern[:, None], cols, axis=1)
        grid = ToggleGrid.from_state(state)
        assert RowSweepSolver().solve(grid) is False


def test_row_sweep_cannot_open_mixed_rows(recording_grid) -> None:
    grid = recording_grid([[True, False], [False, False]])
    assert RowSweepSolver().solve(grid) is True


def test_row_sweep_plan_covers_whole_rows() -> None:
    state = np.array([[True, True, True, True], [False] * 4])
    plan = RowSweepSolver().plan(state)
    rows = {r for r, _ in plan}
    for r in rows:
        assert [c for rr, c in plan if rr == r] == [0, 1, 2, 3]


def test_apply_plan_counts_moves() -> None:
    grid = ToggleGrid(2, 2, max_shuffle=0)
    assert apply_plan(grid, [(0, 0), (1, 1), (0, 0)]) == 3
    assert grid.snapshot().tolist() == [[False, True], [True, True]]


def test_make_solver() -> None:
    solver = make_solver("CELLS", {"min_weight": False, "max_nullspace_dim": 3})
    assert isinstance(solver, CrossToggleSolver)
    assert solver.min_weight is False
    assert solver.max_nullspace_dim == 3
    assert isinstance(make_solver("rows"), RowSweepSolver)
    with pytest.raises(ValueError):
        make_solver("columns")


@pytest.mark.parametrize(("rows", "cols"), [(200, 200), (201, 199), (300, 8)])
def test_large_grids_open_quickly(rows: int, cols: int) -> None:
    grid = ToggleGrid(rows, cols, seed=1)
    start = time.perf_counter()
    assert CrossToggleSolver().solve(grid) is False
    assert time.perf_counter() - start < 10.0


def test_toggle_matrix_has_grid_shape() -> None:
    state = ToggleGrid(3, 5, seed=4).snapshot()
    toggles = CrossToggleSolver().toggles(state)
    assert toggles.shape == (3, 5)
    assert CrossToggleSolver().plan(state) == [
        (int(r), int(c)) for r, c in np.argwhere(toggles)
    ]


def test_toggle_matrix_none_when_unreachable() -> None:
    assert CrossToggleSolver().toggles(np.array([[True, False, False]])) is None


def test_attempt_reports_before_and_after(recording_grid) -> None:
    grid = recording_grid([[True, False], [False, False]])
    attempt = CrossToggleSolver().attempt(grid)
    assert attempt.before.tolist() == [[True, False], [False, False]]
    assert attempt.plan == grid.moves
    assert not attempt.after.any()
    assert attempt.locked is False
