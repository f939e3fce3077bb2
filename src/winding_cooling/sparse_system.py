from __future__ import annotations

import logging
import warnings
from typing import Dict, Tuple

import numpy as np
from scipy.sparse import csr_matrix, diags
from scipy.sparse.linalg import MatrixRankWarning, spsolve

logger = logging.getLogger(__name__)


class SparseSystem:
    """
    Square sparse matrix of fixed dimension, filled entry by entry and solved
    against a dense right-hand side. Cleared and refilled between Picard
    passes instead of being reallocated.
    """

    def __init__(self, dimension: int):
        if dimension < 1:
            raise ValueError(f"Dimension must be positive, got {dimension}")
        self.dimension = int(dimension)
        self._entries: Dict[Tuple[int, int], float] = {}

    def _check(self, row: int, col: int) -> None:
        n = self.dimension
        if not (0 <= row < n and 0 <= col < n):
            raise IndexError(f"Entry ({row}, {col}) outside {n}x{n} system")

    def set(self, row: int, col: int, value: float) -> None:
        self._check(row, col)
        self._entries[(row, col)] = float(value)

    def add(self, row: int, col: int, value: float) -> None:
        self._check(row, col)
        self._entries[(row, col)] = self._entries.get((row, col), 0.0) + float(value)

    def get(self, row: int, col: int) -> float:
        self._check(row, col)
        return self._entries.get((row, col), 0.0)

    def clear(self) -> None:
        self._entries.clear()

    @property
    def nnz(self) -> int:
        return len(self._entries)

    def to_csr(self) -> csr_matrix:
        n = self.dimension
        if not self._entries:
            return csr_matrix((n, n), dtype=np.float64)
        keys = list(self._entries.keys())
        rows = [r for r, _ in keys]
        cols = [c for _, c in keys]
        data = [self._entries[k] for k in keys]
        return csr_matrix((data, (rows, cols)), shape=(n, n), dtype=np.float64)

    def solve(self, rhs) -> np.ndarray:
        """
        Direct solve. Returns an empty array when the system is singular or the
        result is not finite; callers decide how to report that.
        """
        b = np.asarray(rhs, dtype=np.float64)
        n = self.dimension
        if b.shape != (n,):
            raise ValueError(f"Right-hand side shape {b.shape} does not match dimension {n}")

        A = self.to_csr()

        # ---------------- Row equilibration ----------------
        # rows mix pressures, mass flows and heat flows, so scale each to unit max
        row_max = np.asarray(abs(A).max(axis=1).todense()).ravel()
        if np.any(row_max == 0.0):
            logger.debug("System has %d empty rows", int(np.sum(row_max == 0.0)))
            return np.empty(0)
        scale = 1.0 / row_max
        D = diags(scale, 0, shape=(n, n), format="csr")
        A2 = (D @ A).tocsc()
        b2 = scale * b

        # ---------------- Solve ----------------
        with warnings.catch_warnings():
            warnings.simplefilter("error", MatrixRankWarning)
            try:
                x = spsolve(A2, b2)
            except (MatrixRankWarning, RuntimeError) as exc:
                logger.debug("Sparse solve failed: %s", exc)
                return np.empty(0)

        x = np.atleast_1d(np.asarray(x, dtype=np.float64))
        if x.shape != (n,) or not np.all(np.isfinite(x)):
            return np.empty(0)
        return x
