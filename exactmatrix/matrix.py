#!/usr/bin/env python3
#
# Copyright 2022 Max Planck Insitute Magdeburg
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
#
#
"""
Dense matrix of exact entries.

The matrix stores sympy expressions row-major in a flat list. It implements
the container operations (element access, arithmetic, transposition,
elementwise maps, comparison) and delegates the elimination based algorithms
to the determinant, echelon, solver and matrix_operations modules. Every
operation returns a new matrix; only set() and the row/column swaps used by
the elimination strategies modify a matrix in place.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple
import numpy as np
import sympy as sp
from scipy import sparse

from .errors import DimensionMismatch, IndexOutOfRange, InvalidArgument, NotSquare
from .names import AUTOMATIC
from .rational_math import RationalMath, ZERO, ONE, Element

LOG = logging.getLogger(__name__)


class Matrix:
    """
    Matrix with exact (sympy) entries.

    Attributes:
        rows: Number of rows
        cols: Number of columns
        data: Entries in row-major order, data[r * cols + c]
    """

    def __init__(self, rows: int, cols: int, elements: Optional[Iterable[Element]] = None):
        """
        Initialize a rows x cols matrix.

        Args:
            rows: Number of rows (at least 1)
            cols: Number of columns (at least 1)
            elements: Optional flat list of entries in row-major order. Missing
                entries are zero, surplus entries are ignored.
        """
        if rows < 1 or cols < 1:
            raise InvalidArgument(f"Matrix dimensions must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self.data = [ZERO] * (rows * cols)
        if elements is not None:
            for i, value in enumerate(elements):
                if i >= rows * cols:
                    break
                self.data[i] = RationalMath.to_element(value)

    @classmethod
    def _from_data(cls, rows: int, cols: int, data: List[sp.Expr]) -> 'Matrix':
        """Wrap an already converted entry list without copying it."""
        matrix = cls.__new__(cls)
        matrix.rows = rows
        matrix.cols = cols
        matrix.data = data
        return matrix

    @classmethod
    def from_rows(cls, nested: Iterable[Iterable[Element]]) -> 'Matrix':
        """
        Create a matrix from a list of rows.

        Raises:
            InvalidArgument: If the list is empty or rows differ in length
        """
        rows = [list(row) for row in nested]
        if not rows or not rows[0]:
            raise InvalidArgument("Matrix needs at least one row and one column")
        width = len(rows[0])
        for row in rows:
            if len(row) != width:
                raise InvalidArgument("Matrix rows have inconsistent width")
        return cls(len(rows), width, (value for row in rows for value in row))

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> 'Matrix':
        """
        Create a Matrix from a two-dimensional numpy array.

        Float entries become exact rationals, see RationalMath.to_element.
        """
        array = np.asarray(array)
        if array.ndim != 2:
            raise InvalidArgument(f"Expected a two-dimensional array, got {array.ndim} dimensions")
        rows, cols = array.shape
        return cls._from_data(rows, cols, list(RationalMath.array_to_elements(array).flat))

    @classmethod
    def from_sparse(cls, sparse_matrix: sparse.spmatrix) -> 'Matrix':
        """
        Create a Matrix from a scipy sparse matrix.

        Storage stays dense, only the nonzero entries are converted.
        """
        rows, cols = sparse_matrix.shape
        matrix = cls(rows, cols)
        coo = sparse.coo_matrix(sparse_matrix)
        LOG.debug(f"Converting sparse {rows}x{cols} matrix with {coo.nnz} stored entries")
        for i, j, v in zip(coo.row, coo.col, coo.data):
            matrix.data[int(i) * cols + int(j)] = RationalMath.to_element(v)
        return matrix

    def to_numpy(self) -> np.ndarray:
        """Object array holding the entries."""
        result = np.empty((self.rows, self.cols), dtype=object)
        for r in range(self.rows):
            for c in range(self.cols):
                result[r, c] = self.data[r * self.cols + c]
        return result

    def to_list(self) -> List[List[sp.Expr]]:
        return [self.data[r * self.cols:(r + 1) * self.cols] for r in range(self.rows)]

    # -------------------------------------------------------------------------
    # Archiving
    # -------------------------------------------------------------------------

    def archive(self) -> Tuple[int, int, List[sp.Expr]]:
        """Persisted form: (rows, cols, row-major element list)."""
        return (self.rows, self.cols, list(self.data))

    @classmethod
    def read_archive(cls, archived: Tuple[int, int, Sequence[Element]]) -> 'Matrix':
        """
        Restore a matrix written by archive().

        Raises:
            InvalidArgument: If the element count does not match rows*cols
        """
        rows, cols, elements = archived
        if len(elements) != rows * cols:
            raise InvalidArgument(f"Archived matrix {rows}x{cols} holds {len(elements)} elements")
        return cls(rows, cols, elements)

    # -------------------------------------------------------------------------
    # Element access
    # -------------------------------------------------------------------------

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    def _check_index(self, row: int, col: int):
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexOutOfRange(f"Index ({row}, {col}) out of range for {self.rows}x{self.cols} matrix")

    def get(self, row: int, col: int) -> sp.Expr:
        """
        Get entry at position (row, col).

        Raises:
            IndexOutOfRange: If row or col is outside the matrix
        """
        self._check_index(row, col)
        return self.data[row * self.cols + col]

    def set(self, row: int, col: int, value: Element):
        """
        Set entry at position (row, col).

        Raises:
            IndexOutOfRange: If row or col is outside the matrix
        """
        self._check_index(row, col)
        self.data[row * self.cols + col] = RationalMath.to_element(value)

    def __getitem__(self, key: Tuple[int, int]) -> sp.Expr:
        row, col = key
        return self.get(row, col)

    def __setitem__(self, key: Tuple[int, int], value: Element):
        row, col = key
        self.set(row, col, value)

    def copy(self) -> 'Matrix':
        return Matrix._from_data(self.rows, self.cols, list(self.data))

    def swap_rows(self, row1: int, row2: int, start: int = 0):
        """Swap two rows in place, from column start onwards."""
        n = self.cols
        for c in range(start, n):
            self.data[row1 * n + c], self.data[row2 * n + c] = self.data[row2 * n + c], self.data[row1 * n + c]

    def swap_columns(self, col1: int, col2: int):
        """Swap two columns in place."""
        n = self.cols
        for r in range(self.rows):
            self.data[r * n + col1], self.data[r * n + col2] = self.data[r * n + col2], self.data[r * n + col1]

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def add(self, other: 'Matrix') -> 'Matrix':
        """Sum of matrices."""
        if self.rows != other.rows or self.cols != other.cols:
            raise DimensionMismatch(f"Cannot add {self.rows}x{self.cols} and {other.rows}x{other.cols} matrices")
        return Matrix._from_data(self.rows, self.cols, [a + b for a, b in zip(self.data, other.data)])

    def sub(self, other: 'Matrix') -> 'Matrix':
        """Difference of matrices."""
        if self.rows != other.rows or self.cols != other.cols:
            raise DimensionMismatch(f"Cannot subtract {other.rows}x{other.cols} from {self.rows}x{self.cols} matrix")
        return Matrix._from_data(self.rows, self.cols, [a - b for a, b in zip(self.data, other.data)])

    def mul(self, other: 'Matrix') -> 'Matrix':
        """Product of matrices."""
        if self.cols != other.rows:
            raise DimensionMismatch(f"Cannot multiply {self.rows}x{self.cols} by {other.rows}x{other.cols} matrix")
        prod = [ZERO] * (self.rows * other.cols)
        for r1 in range(self.rows):
            for c in range(self.cols):
                factor = self.data[r1 * self.cols + c]
                if RationalMath.is_zero(factor):
                    continue
                for r2 in range(other.cols):
                    prod[r1 * other.cols + r2] += factor * other.data[c * other.cols + r2]
        return Matrix._from_data(self.rows, other.cols, prod)

    def mul_scalar(self, scalar: Element) -> 'Matrix':
        """Product of matrix and scalar expression."""
        scalar = RationalMath.to_element(scalar)
        return Matrix._from_data(self.rows, self.cols, [value * scalar for value in self.data])

    def __add__(self, other: 'Matrix') -> 'Matrix':
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: 'Matrix') -> 'Matrix':
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.sub(other)

    def __neg__(self) -> 'Matrix':
        return self.mul_scalar(RationalMath.MINUS_ONE)

    def __mul__(self, other) -> 'Matrix':
        if isinstance(other, Matrix):
            return self.mul(other)
        return self.mul_scalar(other)

    def __rmul__(self, other) -> 'Matrix':
        return self.mul_scalar(other)

    def __matmul__(self, other: 'Matrix') -> 'Matrix':
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.mul(other)

    def __pow__(self, exponent) -> 'Matrix':
        return self.pow(exponent)

    def transpose(self) -> 'Matrix':
        """New cols x rows matrix holding the transposed entries."""
        trans = [ZERO] * (self.rows * self.cols)
        for r in range(self.cols):
            for c in range(self.rows):
                trans[r * self.rows + c] = self.data[c * self.cols + r]
        return Matrix._from_data(self.cols, self.rows, trans)

    @property
    def T(self) -> 'Matrix':
        return self.transpose()

    # -------------------------------------------------------------------------
    # Elementwise maps
    # -------------------------------------------------------------------------

    def _map_elements(self, func: Callable[[sp.Expr], sp.Expr]) -> 'Matrix':
        """Apply func to every entry, returning self if nothing changes."""
        mapped = None
        for i, value in enumerate(self.data):
            new_value = func(value)
            if mapped is not None:
                mapped.append(new_value)
            elif new_value is not value and new_value != value:
                mapped = self.data[:i]
                mapped.append(new_value)
        if mapped is None:
            return self
        return Matrix._from_data(self.rows, self.cols, mapped)

    def conjugate(self) -> 'Matrix':
        """Complex conjugate every entry."""
        return self._map_elements(sp.conjugate)

    def real_part(self) -> 'Matrix':
        return self._map_elements(sp.re)

    def imag_part(self) -> 'Matrix':
        return self._map_elements(sp.im)

    def subs(self, mapping: Dict) -> 'Matrix':
        """Substitute into every entry."""
        return self._map_elements(lambda value: value.subs(mapping))

    # -------------------------------------------------------------------------
    # Comparison and predicates
    # -------------------------------------------------------------------------

    def compare(self, other: 'Matrix') -> int:
        """
        Canonical ordering of matrices.

        Compares the number of rows, then the number of columns, then the
        entries in row-major order.

        Returns:
            -1, 0 or 1
        """
        if self.rows != other.rows:
            return -1 if self.rows < other.rows else 1
        if self.cols != other.cols:
            return -1 if self.cols < other.cols else 1
        for a, b in zip(self.data, other.data):
            cmpval = a.compare(b)
            if cmpval != 0:
                return cmpval
        return 0

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.rows == other.rows and self.cols == other.cols and self.data == other.data

    __hash__ = None

    def is_zero_matrix(self) -> bool:
        """Check that all entries are exactly zero."""
        return all(RationalMath.is_zero(value) for value in self.data)

    def trace(self) -> sp.Expr:
        """
        Sum of the diagonal entries.

        The result is normalized if it is a proper rational function and only
        expanded otherwise, so the trace of [[a/(a-b), x], [y, b/(b-a)]] is 1.

        Raises:
            NotSquare: If the matrix is not square
        """
        if self.rows != self.cols:
            raise NotSquare(f"Trace of non-square {self.rows}x{self.cols} matrix")
        tr = sp.Add(*(self.data[r * self.cols + r] for r in range(self.rows)))
        return RationalMath.normal_or_expand(tr, RationalMath.is_proper_rational_function(tr))

    # -------------------------------------------------------------------------
    # Algorithms
    # -------------------------------------------------------------------------

    def determinant(self, algorithm: str = AUTOMATIC) -> sp.Expr:
        """Determinant, see determinant.determinant."""
        from .determinant import determinant
        return determinant(self, algorithm)

    def charpoly(self, lam: sp.Expr) -> sp.Expr:
        """Characteristic polynomial det(self - lam*1), see matrix_operations.charpoly."""
        from .matrix_operations import charpoly
        return charpoly(self, lam)

    def inverse(self, algorithm: str = AUTOMATIC) -> 'Matrix':
        from .matrix_operations import inverse
        return inverse(self, algorithm)

    def solve(self, variables: 'Matrix', rhs: 'Matrix', algorithm: str = AUTOMATIC) -> 'Matrix':
        """Solve self * variables == rhs, see solver.solve."""
        from .solver import solve
        return solve(self, variables, rhs, algorithm)

    def rank(self, algorithm: str = AUTOMATIC) -> int:
        from .matrix_operations import rank
        return rank(self, algorithm)

    def pow(self, exponent) -> 'Matrix':
        from .matrix_operations import matrix_power
        return matrix_power(self, exponent)

    def echelon_form(self, algorithm: str = AUTOMATIC, n: Optional[int] = None):
        """Row echelon form of a copy, see echelon.echelon_form."""
        from .echelon import echelon_form
        return echelon_form(self, algorithm, n)

    # -------------------------------------------------------------------------
    # Printing
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return "[" + ",".join("[" + ",".join(str(value) for value in row) + "]" for row in self.to_list()) + "]"

    def __repr__(self) -> str:
        return f"Matrix({self.to_list()!r})"


# =============================================================================
# Factories
# =============================================================================


def lst_to_matrix(nested: Iterable[Iterable[Element]]) -> Matrix:
    """
    Create a matrix from a list of rows of possibly different length.

    The width is that of the longest row, shorter rows are padded with zeros.
    """
    rows = [list(row) for row in nested]
    if not rows:
        raise InvalidArgument("lst_to_matrix: argument must be a non-empty list of lists")
    width = max(len(row) for row in rows)
    matrix = Matrix(len(rows), max(width, 1))
    for r, row in enumerate(rows):
        for c, value in enumerate(row):
            matrix.data[r * matrix.cols + c] = RationalMath.to_element(value)
    return matrix


def diag_matrix(elements: Iterable[Element]) -> Matrix:
    """Square matrix with the given diagonal."""
    diagonal = list(elements)
    matrix = Matrix(len(diagonal), len(diagonal))
    for i, value in enumerate(diagonal):
        matrix.data[i * matrix.cols + i] = RationalMath.to_element(value)
    return matrix


def unit_matrix(rows: int, cols: Optional[int] = None) -> Matrix:
    """Identity matrix, or the rows x cols matrix with ones on its main diagonal."""
    if cols is None:
        cols = rows
    matrix = Matrix(rows, cols)
    for i in range(min(rows, cols)):
        matrix.data[i * cols + i] = ONE
    return matrix


def symbolic_matrix(rows: int, cols: int, base_name: str) -> Matrix:
    """
    Matrix filled with fresh symbols named after their position.

    Vectors get a single index (a0, a1, ...), matrices two (a01, a10, ...),
    and large matrices separate the indices (a_10_3).
    """
    long_format = rows > 10 or cols > 10
    single_row = rows == 1 or cols == 1
    matrix = Matrix(rows, cols)
    for i in range(rows):
        for j in range(cols):
            if single_row:
                name = f"{base_name}{i if cols == 1 else j}"
            elif long_format:
                name = f"{base_name}_{i}_{j}"
            else:
                name = f"{base_name}{i}{j}"
            matrix.data[i * cols + j] = sp.Symbol(name)
    return matrix


def reduced_matrix(matrix: Matrix, row: int, col: int) -> Matrix:
    """
    Matrix with one row and one column deleted, as used for minors.

    Raises:
        IndexOutOfRange: If row or col is outside the matrix or the matrix
            is smaller than 2x2
    """
    if row + 1 > matrix.rows or col + 1 > matrix.cols or matrix.rows < 2 or matrix.cols < 2:
        raise IndexOutOfRange(f"reduced_matrix: ({row}, {col}) out of bounds for {matrix.rows}x{matrix.cols}")
    data = [matrix.data[r * matrix.cols + c]
            for r in range(matrix.rows) if r != row
            for c in range(matrix.cols) if c != col]
    return Matrix._from_data(matrix.rows - 1, matrix.cols - 1, data)


def sub_matrix(matrix: Matrix, row: int, nrows: int, col: int, ncols: int) -> Matrix:
    """
    Contiguous nrows x ncols block starting at (row, col).

    Raises:
        IndexOutOfRange: If the block does not fit into the matrix
    """
    if row + nrows > matrix.rows or col + ncols > matrix.cols:
        raise IndexOutOfRange(f"sub_matrix: block out of bounds for {matrix.rows}x{matrix.cols}")
    data = [matrix.data[(row + r) * matrix.cols + col + c] for r in range(nrows) for c in range(ncols)]
    return Matrix(nrows, ncols, data)
