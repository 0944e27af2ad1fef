# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Dense matrix container
======================

`Matrix` keeps its elements in one flat, row-major NumPy array: the
element at (r, c) lives at index ``r * cols + c``.

Rows and columns are exposed through small view objects (`Row`, `RowMut`,
`Col`, `ColMut`). A view is only a (matrix, index) pair; every access goes
back to the matrix's storage, so a view never holds a stale copy.

The element type is generic. Anything with ``+``, ``*`` and ``abs()`` works:
floats, complex numbers, `fractions.Fraction`, `decimal.Decimal`. Integer
input is promoted to float64, exotic scalars are kept in an object array.
"""

import abc
import operator
from typing import Any, Generic, Iterator, List, Protocol, Tuple, TypeVar

import numpy as np


class SupportsArithmetic(Protocol):
    def __add__(self, other: Any) -> Any: ...

    def __mul__(self, other: Any) -> Any: ...

    def __abs__(self) -> Any: ...


T = TypeVar("T", bound=SupportsArithmetic)


def _check_index(index, bound: int, axis: str) -> int:
    try:
        index = operator.index(index)
    except TypeError:
        raise TypeError(
            f"{axis} index must be an integer, got {type(index).__name__}"
        ) from None
    if not 0 <= index < bound:
        raise IndexError(f"{axis} index {index} out of range [0, {bound})")
    return index


def _check_dim(value, name: str) -> int:
    try:
        value = operator.index(value)
    except TypeError:
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}") from None
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


def _scalar(value):
    # unwrap numpy scalars, object arrays already hold python objects
    if isinstance(value, np.generic):
        return value.item()
    return value


class Matrix(Generic[T]):
    """
    A rows-by-cols matrix over a numeric element type.

    Parameters
    ----------
    rows, cols : int
        Fixed dimensions.
    elements : sequence
        Exactly ``rows * cols`` values in row-major order. They are copied.
    dtype : numpy dtype, optional
        Storage type. By default ints/bools become float64, floats and
        complex numbers keep their NumPy type and anything else (Fraction,
        Decimal, ...) is stored as ``object``.

    Raises
    ------
    ValueError : if ``len(elements) != rows * cols``.
    """

    __slots__ = ("_elements", "_rows", "_cols")
    __hash__ = None  # mutable

    def __init__(self, rows: int, cols: int, elements, dtype=None):
        rows = _check_dim(rows, "rows")
        cols = _check_dim(cols, "cols")

        if not isinstance(elements, np.ndarray):
            elements = list(elements)
        data = np.array(elements, dtype=dtype)

        if data.ndim != 1:
            raise ValueError(f"elements must be a flat sequence, got shape {data.shape}")
        if data.size != rows * cols:
            raise ValueError(
                f"{rows}x{cols} matrix needs {rows * cols} elements, got {data.size}"
            )
        if data.dtype.kind not in "biufcO":
            raise TypeError(f"unsupported element type {data.dtype}")
        if dtype is None and data.dtype.kind in "biu":
            data = data.astype(float)

        self._elements = data
        self._rows = rows
        self._cols = cols

    @classmethod
    def from_array(cls, array, dtype=None) -> "Matrix":
        """Build a matrix from a 2-D array-like (nested lists or ndarray)."""
        array = np.asarray(array)
        if array.ndim != 2:
            raise ValueError(f"expected a 2-D array, got {array.ndim}-D")
        rows, cols = array.shape
        return cls(rows, cols, array.reshape(-1), dtype=dtype)

    # -----------------------------------------------------------------
    # Shape & storage
    # -----------------------------------------------------------------
    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> Tuple[int, int]:
        return self._rows, self._cols

    @property
    def dtype(self) -> np.dtype:
        return self._elements.dtype

    def _grid(self) -> np.ndarray:
        # a (rows, cols) view onto the flat storage, not a copy
        return self._elements.reshape(self._rows, self._cols)

    def to_array(self) -> np.ndarray:
        return self._grid().copy()

    def tolist(self) -> List[List[T]]:
        return self._grid().tolist()

    def copy(self) -> "Matrix[T]":
        return Matrix(self._rows, self._cols, self._elements, dtype=self.dtype)

    # -----------------------------------------------------------------
    # Element access
    # -----------------------------------------------------------------
    def _offset(self, row, col) -> int:
        row = _check_index(row, self._rows, "row")
        col = _check_index(col, self._cols, "column")
        return row * self._cols + col

    def get(self, row: int, col: int) -> T:
        return _scalar(self._elements[self._offset(row, col)])

    def set(self, row: int, col: int, value: T) -> None:
        self._elements[self._offset(row, col)] = value

    def __getitem__(self, key: Tuple[int, int]) -> T:
        row, col = self._unpack(key)
        return self.get(row, col)

    def __setitem__(self, key: Tuple[int, int], value: T) -> None:
        row, col = self._unpack(key)
        self.set(row, col, value)

    @staticmethod
    def _unpack(key):
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError("matrix indices must be a (row, col) pair")
        return key

    def row(self, row: int) -> "Row[T]":
        return Row(self, _check_index(row, self._rows, "row"))

    def row_mut(self, row: int) -> "RowMut[T]":
        return RowMut(self, _check_index(row, self._rows, "row"))

    def col(self, col: int) -> "Col[T]":
        return Col(self, _check_index(col, self._cols, "column"))

    def col_mut(self, col: int) -> "ColMut[T]":
        return ColMut(self, _check_index(col, self._cols, "column"))

    # -----------------------------------------------------------------
    # Elementary row operations (in place)
    # -----------------------------------------------------------------
    def swap_rows(self, a: int, b: int) -> None:
        a = _check_index(a, self._rows, "row")
        b = _check_index(b, self._rows, "row")
        grid = self._grid()
        grid[[a, b]] = grid[[b, a]]

    def multiply_row(self, row: int, f: T) -> None:
        """row <- row * f"""
        row = _check_index(row, self._rows, "row")
        grid = self._grid()
        grid[row] = grid[row] * f

    def add_row(self, a: int, b: int, rtol: float = 0.0) -> None:
        """
        row a <- row a + row b

        With rtol > 0, a sum with abs(a[c] + b[c]) <= rtol * (abs(a[c]) + abs(b[c]))
        is cancellation noise and is stored as an exact zero.
        """
        a = _check_index(a, self._rows, "row")
        b = _check_index(b, self._rows, "row")
        grid = self._grid()
        total = grid[a] + grid[b]
        if rtol > 0:
            noise = np.abs(total) <= rtol * (np.abs(grid[a]) + np.abs(grid[b]))
            total[noise] = 0
        grid[a] = total

    def add_row_multiple(self, a: int, b: int, f: T, rtol: float = 0.0) -> None:
        """
        row a <- row a + row b * f, without building the scaled row first.
        `rtol` snaps cancellation noise to zero as in `add_row`.
        """
        a = _check_index(a, self._rows, "row")
        b = _check_index(b, self._rows, "row")
        grid = self._grid()
        for c in range(self._cols):
            addend = grid[b, c] * f
            value = grid[a, c] + addend
            if rtol > 0 and abs(value) <= rtol * (abs(grid[a, c]) + abs(addend)):
                value = 0
            grid[a, c] = value

    # -----------------------------------------------------------------
    # Arithmetic
    # -----------------------------------------------------------------
    def __matmul__(self, other: "Matrix[T]") -> "Matrix[T]":
        """
        Standard product C = A @ B, C[i, j] = sum_k A[i, k] * B[k, j].

        Raises
        ------
        ValueError : if A.cols != B.rows.
        """
        if not isinstance(other, Matrix):
            return NotImplemented
        if self._cols != other._rows:
            raise ValueError(
                f"inner dimensions differ: {self._rows}x{self._cols} @ "
                f"{other._rows}x{other._cols}"
            )
        product = np.matmul(self._grid(), other._grid())
        return Matrix(self._rows, other._cols, product.reshape(-1))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(
            np.all(self._elements == other._elements)
        )

    # -----------------------------------------------------------------
    # Display
    # -----------------------------------------------------------------
    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self._rows}, {self._cols}, "
            f"{self._elements.tolist()!r})"
        )

    def __str__(self) -> str:
        return "\n".join(" ".join(str(v) for v in line) for line in self.tolist())

    def display(self, file=None) -> None:
        print(self, file=file)


class _Line(abc.ABC, Generic[T]):
    """A (matrix, index) handle addressing one row or one column."""

    __slots__ = ("_matrix", "_index")

    def __init__(self, matrix: Matrix[T], index: int):
        self._matrix = matrix
        self._index = index

    @property
    def index(self) -> int:
        return self._index

    @abc.abstractmethod
    def __len__(self) -> int: ...

    @abc.abstractmethod
    def _offset(self, idx) -> int:
        """Backing-store index of element `idx` of this line."""

    def __getitem__(self, idx: int) -> T:
        return _scalar(self._matrix._elements[self._offset(idx)])

    def __iter__(self) -> Iterator[T]:
        for i in range(len(self)):
            yield self[i]

    def tolist(self) -> List[T]:
        return list(self)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._index}, {self.tolist()!r})"


class Row(_Line[T]):
    __slots__ = ()

    def __len__(self) -> int:
        return self._matrix.cols

    def _offset(self, idx) -> int:
        cols = self._matrix.cols
        return self._index * cols + _check_index(idx, cols, "column")


class RowMut(Row[T]):
    __slots__ = ()

    def __setitem__(self, idx: int, value: T) -> None:
        self._matrix._elements[self._offset(idx)] = value


class Col(_Line[T]):
    __slots__ = ()

    def __len__(self) -> int:
        return self._matrix.rows

    def _offset(self, idx) -> int:
        idx = _check_index(idx, self._matrix.rows, "row")
        return self._index + idx * self._matrix.cols


class ColMut(Col[T]):
    __slots__ = ()

    def __setitem__(self, idx: int, value: T) -> None:
        self._matrix._elements[self._offset(idx)] = value


def identity(n: int, dtype=None) -> Matrix:
    return Matrix.from_array(np.eye(n), dtype=dtype)

