# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
rowreduce
=========

A small dense-matrix container and a Gauss-Jordan solver for systems of
linear equations.

Public API
~~~~~~~~~~
- Container
    - `Matrix` with `Row`, `RowMut`, `Col`, `ColMut` views
    - `identity`
- Elimination
    - `to_echelon_form`, `to_reduced_echelon_form`, `rref`
    - `rank_elimination`
- Linear systems
    - `solve_system_of_linear_equations`
    - `classify_system`, `SolutionKind`, `SystemSolution`

Everything else lives in sub-modules and is **not** considered part of the
stable interface.

Example
-------
>>> import rowreduce as rr
>>> system = rr.Matrix(2, 3, [4.0, 3.0, 5.0, 2.0, 4.0, 7.0])
>>> [round(v, 10) for v in rr.solve_system_of_linear_equations(system)]
[-0.1, 1.8]
"""

from importlib.metadata import version as _pkg_version

from .elimination import (
    SolutionKind,
    SystemSolution,
    classify_system,
    rank_elimination,
    rref,
    solve_system_of_linear_equations,
    to_echelon_form,
    to_reduced_echelon_form,
)

# ---------------------------------------------------------------------
# Re-export the high-level names users are expected to call.
# Each of these names is implemented in one of the internal sub-modules.
# ---------------------------------------------------------------------
from .matrix import Col, ColMut, Matrix, Row, RowMut, identity
from .utils import EPS, default_rtol, random_augmented_system, scale_tol

__all__ = [
    "Matrix",
    "Row",
    "RowMut",
    "Col",
    "ColMut",
    "identity",
    "to_echelon_form",
    "to_reduced_echelon_form",
    "rref",
    "rank_elimination",
    "solve_system_of_linear_equations",
    "classify_system",
    "SolutionKind",
    "SystemSolution",
    "EPS",
    "scale_tol",
    "default_rtol",
    "random_augmented_system",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show rowreduce”, Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Lightweight default logging config so users see debug output
# only if they deliberately enable it.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
