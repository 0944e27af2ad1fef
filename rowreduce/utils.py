# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from typing import Tuple

import numpy as np

from .matrix import Matrix

EPS: float = 1e-12


def scale_tol(A: np.ndarray) -> float:
    """
    Return an absolute tolerance scaled to the matrix magnitude.

    There is no lower floor: a matrix whose entries are all tiny gets a
    tiny tolerance, and an all-zero matrix gets 0.
    """
    A = np.asarray(A)
    if A.size == 0:
        return 0.0
    return EPS * float(np.linalg.norm(A, ord=np.inf))


def default_rtol(matrix: Matrix) -> float:
    """
    Relative cancellation tolerance the elimination passes use when the
    caller gives none.

    Float and complex storage get `EPS`: a row sum smaller than EPS times
    the magnitude of its operands is rounding noise and becomes an exact
    zero. Object storage (Fraction, Decimal, ...) is exact, so 0.
    """
    if matrix.dtype.kind in "fc":
        return EPS
    return 0.0


def is_zero(value, tol: float = 0.0) -> bool:
    """True when abs(value) <= tol; with tol == 0 only an exact zero."""
    return abs(value) <= tol


def random_augmented_system(n, low=-10, high=10, seed=None) -> Tuple[Matrix, np.ndarray]:
    """
    Build a random n-by-(n+1) augmented system [A | b] with a known solution.

    A is made strictly diagonally dominant so it is always nonsingular.

    Returns
    -------
    system : Matrix   (n, n+1), float64
    x      : ndarray  (n,) the exact solution of A x = b
    """
    rng = np.random.default_rng(seed)
    A = rng.uniform(low, high, size=(n, n))
    # push every diagonal entry past the sum of its row
    A[np.diag_indices(n)] = np.abs(A).sum(axis=1) + 1.0
    x = rng.uniform(low, high, size=n)
    b = A @ x
    return Matrix.from_array(np.column_stack([A, b])), x
