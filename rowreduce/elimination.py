# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .matrix import Matrix
from .utils import default_rtol, is_zero

logger = logging.getLogger(__name__)


def _require_matrix(matrix: Matrix) -> None:
    if not isinstance(matrix, Matrix):
        raise TypeError("matrix must be a rowreduce.Matrix")
    # in-place scaling by 1 / pivot would be truncated by integer storage
    if matrix.dtype.kind not in "fcO":
        raise TypeError(
            f"elimination needs float, complex or object storage, got {matrix.dtype}"
        )


def _require_wide(matrix: Matrix) -> None:
    _require_matrix(matrix)
    if matrix.rows > matrix.cols:
        raise ValueError(
            f"elimination needs rows <= cols, got a {matrix.rows}x{matrix.cols} matrix"
        )


def _find_pivot_row(matrix: Matrix, start: int, col: int, tol: float) -> Optional[int]:
    """First row at or below `start` with a nonzero entry in `col`."""
    for r in range(start, matrix.rows):
        if not is_zero(matrix[r, col], tol):
            return r
    return None


def to_echelon_form(
    matrix: Matrix, tol: float = 0.0, rtol: Optional[float] = None
) -> List[int]:
    """
    Reduce `matrix` to row-echelon form, in place.

    The pivot row is first scaled so its leading entry is -1. Every lower
    row with a nonzero entry in the pivot column is scaled so that entry is
    1, and the pivot row is added into it. Finally the pivot row is negated
    back, leaving a leading entry of 1.

    Parameters
    ----------
    matrix : Matrix            (m, n), m <= n
    tol    : float
        Entries with abs(x) <= tol count as zero. The default 0.0 means
        only an exact zero is zero.
    rtol   : float | None
        Row additions whose result is below rtol times the size of the
        operands are stored as exact zeros (rounding noise from
        cancellation). Defaults to `utils.default_rtol(matrix)`.

    Returns
    -------
    pivots : list[int]
        Column index of each pivot, one per nonzero row.
    """
    _require_wide(matrix)
    if rtol is None:
        rtol = default_rtol(matrix)

    pivots: List[int] = []
    row = 0
    for col in range(matrix.cols):
        if row == matrix.rows:
            break

        pivot_row = _find_pivot_row(matrix, row, col, tol)
        if pivot_row is None:
            logger.debug(f"column {col}: no pivot at or below row {row}")
            continue
        if pivot_row != row:
            logger.debug(f"column {col}: swapping rows {row} and {pivot_row}")
            matrix.swap_rows(row, pivot_row)

        matrix.multiply_row(row, -1 / matrix[row, col])
        for r in range(row + 1, matrix.rows):
            entry = matrix[r, col]
            if not is_zero(entry, tol):
                matrix.multiply_row(r, 1 / entry)
                matrix.add_row(r, row, rtol=rtol)
        matrix.multiply_row(row, -1)

        pivots.append(col)
        row += 1

    return pivots


def to_reduced_echelon_form(
    matrix: Matrix, tol: float = 0.0, rtol: Optional[float] = None
) -> List[int]:
    """
    Clear the entries above every pivot of an echelon-form matrix, in place.

    Expects the output of `to_echelon_form` (pivots equal to 1). Each row r
    above a pivot row p is updated as row[r] += row[p] * (-row[r][c]).
    `tol` and `rtol` mean the same as for `to_echelon_form`.
    """
    _require_wide(matrix)
    if rtol is None:
        rtol = default_rtol(matrix)

    pivots: List[int] = []
    row = 0
    for col in range(matrix.cols):
        if row == matrix.rows:
            break
        if is_zero(matrix[row, col], tol):
            continue

        for r in range(row):
            matrix.add_row_multiple(r, row, -matrix[r, col], rtol=rtol)

        pivots.append(col)
        row += 1

    return pivots


def rref(
    matrix: Matrix, tol: float = 0.0, rtol: Optional[float] = None
) -> Tuple[Matrix, List[int]]:
    """
    Return the reduced row-echelon form R of `matrix` and its pivot
    columns. `matrix` itself is left untouched.
    """
    R = matrix.copy()
    to_echelon_form(R, tol, rtol)
    pivots = to_reduced_echelon_form(R, tol, rtol)
    return R, pivots


def rank_elimination(matrix: Matrix, tol: float = 0.0, rtol: Optional[float] = None) -> int:
    """Matrix rank is the number of pivot columns"""
    _require_matrix(matrix)
    if matrix.rows > matrix.cols:
        # row rank == column rank, and the passes need a wide matrix
        matrix = Matrix.from_array(matrix.to_array().T, dtype=matrix.dtype)
    U = matrix.copy()
    return len(to_echelon_form(U, tol, rtol))


def solve_system_of_linear_equations(
    system: Matrix, tol: float = 0.0, rtol: Optional[float] = None
) -> Optional[list]:
    """
    Solve the augmented system [A | b] by Gauss-Jordan elimination.

    Reads one value per row: for each row the column cursor moves right
    until it meets a nonzero entry, and that row's last-column value is
    taken. When the cursor runs off the end of a row the call returns None.

    This also happens for dependent systems (a row that reduces to all
    zeros), so None means "no unique reading", not strictly "inconsistent".
    `classify_system` tells the two apart.

    Returns
    -------
    list | None
        Solution values in row order, or None when unsolvable.
    """
    _require_wide(system)
    system = system.copy()

    to_echelon_form(system, tol, rtol)
    to_reduced_echelon_form(system, tol, rtol)

    solution = []
    last = system.cols - 1
    col = 0
    for row in range(system.rows):
        while col < system.cols and is_zero(system[row, col], tol):
            col += 1
        if col >= system.cols:
            logger.debug(f"row {row} has no pivot, no solution")
            return None
        solution.append(system[row, last])
    return solution


class SolutionKind(enum.Enum):
    UNIQUE = "unique"
    INCONSISTENT = "inconsistent"
    INFINITE = "infinite"


@dataclass
class SystemSolution:
    """
    Outcome of `classify_system`.

    kind     : SolutionKind
    values   : list | None    one value per unknown, only for UNIQUE
    pivots   : list[int]      pivot columns of the reduced augmented matrix
    """

    kind: SolutionKind
    values: Optional[list] = None
    pivots: List[int] = field(default_factory=list)

    @property
    def is_unique(self) -> bool:
        return self.kind is SolutionKind.UNIQUE


def classify_system(
    system: Matrix, tol: float = 0.0, rtol: Optional[float] = None
) -> SystemSolution:
    """
    Solve the augmented system [A | b] and say which of the three cases
    it falls in.

    - a pivot in the right-hand-side column means 0 = nonzero: INCONSISTENT
    - fewer pivots than unknowns leaves free variables: INFINITE
    - otherwise UNIQUE, with the value of every unknown
    """
    _require_matrix(system)
    if system.cols == 0:
        raise ValueError("an augmented system needs at least one column")
    R, pivots = rref(system, tol, rtol)
    unknowns = system.cols - 1

    if pivots and pivots[-1] == unknowns:
        logger.debug(f"pivot in the right-hand side column {unknowns}: inconsistent")
        return SystemSolution(SolutionKind.INCONSISTENT, pivots=pivots)
    if len(pivots) < unknowns:
        free = sorted(set(range(unknowns)) - set(pivots))
        logger.debug(f"free columns {free}: infinitely many solutions")
        return SystemSolution(SolutionKind.INFINITE, pivots=pivots)

    values = [R[r, unknowns] for r in range(len(pivots))]
    return SystemSolution(SolutionKind.UNIQUE, values=values, pivots=pivots)
