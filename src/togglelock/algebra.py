from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)


def build_sweep_operator(rows: int, cols: int) -> np.ndarray:
    """Return the rows x rows effect of row sweeps over GF(2).

    Sweeping row i toggles (i, 0) .. (i, cols-1). Row i flips once per
    toggle, every other row flips once through the toggled columns, so the
    effect is uniform along each row: entry [a, i] is the flip of row a.
    """
    S = np.ones((rows, rows), dtype=np.uint8)
    np.fill_diagonal(S, cols % 2)
    return S


def build_parity_system(state: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Reduce the cross-toggle system of a state to its row/column parities.

    A plan x flips cell (i, j) by x_ij + R_i + C_j (mod 2), where R and C
    are the row and column parities of x. Clearing s therefore means
    x = s + a 1^T + 1 b^T with a = R, b = C, and (a, b) must satisfy

        (1 + cols) a_i + sum(b) = rowpar(s)_i
        (1 + rows) b_j + sum(a) = colpar(s)_j

    Returns the (rows+cols) square matrix and right-hand side of that system.
    """
    s = np.asarray(state, dtype=np.uint8)
    rows, cols = s.shape
    M = np.zeros((rows + cols, rows + cols), dtype=np.uint8)
    M[:rows, rows:] = 1
    M[rows:, :rows] = 1
    M[:rows, :rows] = np.eye(rows, dtype=np.uint8) * ((1 + cols) % 2)
    M[rows:, rows:] = np.eye(cols, dtype=np.uint8) * ((1 + rows) % 2)
    rhs = np.concatenate([s.sum(axis=1) % 2, s.sum(axis=0) % 2]).astype(np.uint8)
    return M, rhs


def expand_parities(state: np.ndarray, parities: np.ndarray) -> np.ndarray:
    """Turn a solution of the parity system into the per-cell toggle plan."""
    s = np.asarray(state, dtype=np.uint8)
    rows = s.shape[0]
    a = parities[:rows].astype(np.uint8)
    b = parities[rows:].astype(np.uint8)
    return s ^ a[:, None] ^ b[None, :]


def gf2_eliminate(A: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Solve A x = b over GF(2) by forward elimination and back substitution.

    Pivots stay on the diagonal: column c is pivoted into row c or skipped
    when no row at or below c has a 1 there. Skipped unknowns keep whatever
    value back substitution leaves in their slot, so the result is only
    exact when every column up to min(m, n) found a pivot. `b` may hold one
    right-hand side per column; the result then has one column per
    right-hand side. Unknowns past the last equation are zero.
    """
    M = (A % 2).astype(np.uint8)
    rhs = (np.asarray(b) % 2).astype(np.uint8)
    single = rhs.ndim == 1
    rhs = rhs.reshape(M.shape[0], -1).copy()
    m, n = M.shape
    span = min(m, n)

    for col in range(span):
        candidates = np.flatnonzero(M[col:, col])
        if candidates.size == 0:
            continue
        pivot = col + int(candidates[0])
        if pivot != col:
            M[[col, pivot]] = M[[pivot, col]]
            rhs[[col, pivot]] = rhs[[pivot, col]]
        below = col + 1 + np.flatnonzero(M[col + 1 :, col])
        if below.size:
            M[below, col:] ^= M[col, col:]
            rhs[below] ^= rhs[col]

    for row in range(span - 1, -1, -1):
        for col in range(row + 1, span):
            if M[row, col]:
                rhs[row] ^= rhs[col]

    x = np.zeros((n, rhs.shape[1]), dtype=np.uint8)
    x[:span] = rhs[:span]
    return x[:, 0] if single else x


def gf2_rref(
    A: np.ndarray, b: np.ndarray
) -> Tuple[np.ndarray, np.ndarray, List[int]]:
    """Gauss-Jordan reduce A x = b over GF(2).

    Returns the reduced matrix, the reduced right-hand side and the pivot
    column of each of the leading nonzero rows.
    """
    R = (A % 2).astype(np.uint8)
    r = (np.asarray(b) % 2).astype(np.uint8).reshape(-1).copy()
    m, n = R.shape
    pivots: List[int] = []
    for col in range(n):
        top = len(pivots)
        if top == m:
            break
        hits = np.flatnonzero(R[top:, col])
        if hits.size == 0:
            continue
        hit = top + int(hits[0])
        if hit != top:
            R[[top, hit]] = R[[hit, top]]
            r[[top, hit]] = r[[hit, top]]
        mask = R[:, col].astype(bool)
        mask[top] = False
        R[mask] ^= R[top]
        r[mask] ^= r[top]
        pivots.append(col)
    return R, r, pivots


def gf2_solve(
    A: np.ndarray, b: np.ndarray
) -> Tuple[Optional[np.ndarray], List[np.ndarray]]:
    """Particular solution (free unknowns zero) and nullspace basis of A x = b.

    The solution is None when the system is inconsistent.
    """
    R, r, pivots = gf2_rref(A, b)
    rank = len(pivots)
    if r[rank:].any():
        return None, []

    n = R.shape[1]
    pivcols = np.asarray(pivots, dtype=np.intp)
    x0 = np.zeros(n, dtype=np.uint8)
    x0[pivcols] = r[:rank]

    basis = []
    for f in np.setdiff1d(np.arange(n), pivcols):
        v = np.zeros(n, dtype=np.uint8)
        v[f] = 1
        v[pivcols] = R[:rank, f]
        basis.append(v)
    return x0, basis


def gf2_min_weight_solution(
    A: np.ndarray,
    b: np.ndarray,
    max_nullspace_dim: int | None = None,
    weight: Callable[[np.ndarray], int] | None = None,
) -> Optional[np.ndarray]:
    """Lightest solution of A x = b, or None when there is none.

    `weight` scores a candidate (Hamming weight by default). The 2^k
    solutions are walked in Gray-code order, one basis XOR per step; with
    more than max_nullspace_dim basis vectors the particular solution is
    returned unchanged.
    """
    x0, basis = gf2_solve(A, b)
    if x0 is None:
        return None
    if weight is None:
        weight = lambda x: int(x.sum())  # noqa: E731

    k = len(basis)
    if max_nullspace_dim is not None and k > max_nullspace_dim:
        logger.info(
            "Nullspace dimension %d exceeds %d, keeping particular solution",
            k,
            max_nullspace_dim,
        )
        return x0

    best, best_w = x0, weight(x0)
    cand = x0.copy()
    for step in range(1, 1 << k):
        cand ^= basis[(step & -step).bit_length() - 1]
        w = weight(cand)
        if w < best_w:
            best, best_w = cand.copy(), w
    return best
