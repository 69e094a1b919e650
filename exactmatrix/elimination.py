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
Elimination strategies for exact matrices.

Each strategy brings a matrix the caller owns into upper echelon form in
place and reports an EchelonResult:

- gauss_elimination: ordinary Gaussian elimination, fine for numeric and
  lightly symbolic matrices.
- division_free_elimination: cross multiplication without any division.
  Entries grow quickly, use it for small dense symbolic matrices only.
- fraction_free_elimination: Bareiss' one-step scheme, the cross
  multiplication divided exactly by the previous pivot.
- markowitz_elimination: full pivoting that minimizes fill-in, for large
  sparse matrices. The only strategy that permutes columns.

With det=True the strategies only keep what a determinant needs, zero out
everything else and give up with sign 0 as soon as a column vanishes; the
matrix is left in an unusable state in that case.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import InvalidArgument
from .matrix import Matrix
from .names import GAUSS, DIVFREE, BAREISS
from .rational_math import RationalMath, ZERO, ONE

LOG = logging.getLogger(__name__)


@dataclass
class EchelonResult:
    """
    Outcome of an elimination.

    Attributes:
        sign: 1 for an even and -1 for an odd number of swaps, 0 if a
            vanishing column was found (singular matrix)
        column_permutation: Original column index of each working column
    """
    sign: int
    column_permutation: List[int] = field(default_factory=list)


def _identity_permutation(matrix: Matrix) -> List[int]:
    return list(range(matrix.cols))


def pivot(matrix: Matrix, ro: int, co: int, symbolic: bool = True) -> int:
    """
    Partial pivoting on column co, starting at row ro.

    Symbolic pivoting takes the first entry that does not expand to zero,
    numeric pivoting the entry of largest absolute value. The chosen row is
    swapped into row ro.

    Returns:
        -1 if all candidates vanish, 0 if no swap was needed, otherwise the
        index of the row swapped with ro
    """
    rows, cols = matrix.rows, matrix.cols
    data = matrix.data
    k = ro
    if symbolic:
        while k < rows and RationalMath.is_zero(RationalMath.expand(data[k * cols + co])):
            k += 1
    else:
        largest = abs(data[ro * cols + co])
        for r in range(ro + 1, rows):
            candidate = abs(data[r * cols + co])
            if candidate > largest:
                largest = candidate
                k = r
        if RationalMath.is_zero(largest):
            k = rows
    if k == rows:
        return -1
    if k == ro:
        return 0
    matrix.swap_rows(k, ro)
    return k


def gauss_elimination(matrix: Matrix, det: bool = False) -> EchelonResult:
    """
    Ordinary Gaussian elimination.

    Purely real-numeric matrices are pivoted on the entry of largest
    magnitude, all others on the first nonzero entry. Entries that are not
    plain numbers are normalized after every update.

    Args:
        matrix: Matrix to reduce (modified in-place)
        det: Only keep the diagonal, for determinants

    Returns:
        EchelonResult with the sign of the row permutation
    """
    m, n = matrix.rows, matrix.cols
    data = matrix.data
    symbolic = not all(RationalMath.is_real_number(value) for value in data)
    sign = 1

    r0 = 0
    c0 = 0
    while c0 < n and r0 < m - 1:
        indx = pivot(matrix, r0, c0, symbolic)
        if indx == -1:
            sign = 0
            if det:
                LOG.debug(f"Gauss elimination: column {c0} vanishes, matrix is singular")
                return EchelonResult(0, _identity_permutation(matrix))
        if indx >= 0:
            if indx > 0:
                sign = -sign
            pivot_value = data[r0 * n + c0]
            for r2 in range(r0 + 1, m):
                if not RationalMath.is_zero(data[r2 * n + c0]):
                    factor = data[r2 * n + c0] / pivot_value
                    for c in range(c0 + 1, n):
                        value = data[r2 * n + c] - factor * data[r0 * n + c]
                        if not RationalMath.is_numeric(value):
                            value = RationalMath.normal(value)
                        data[r2 * n + c] = value
                # fill up left hand side with zeros
                for c in range(r0, c0 + 1):
                    data[r2 * n + c] = ZERO
            if det:
                # save space by deleting no longer needed elements
                for c in range(r0 + 1, n):
                    data[r0 * n + c] = ZERO
            r0 += 1
        c0 += 1
    # clear remaining rows
    for r in range(r0 + 1, m):
        for c in range(n):
            data[r * n + c] = ZERO
    return EchelonResult(sign, _identity_permutation(matrix))


def division_free_elimination(matrix: Matrix, det: bool = False) -> EchelonResult:
    """
    Division free elimination.

    Updates every entry below the pivot as
        m[r][c] = m[r0][c0] * m[r][c] - m[r][c0] * m[r0][c]
    so that no division is ever performed.

    Args:
        matrix: Matrix to reduce (modified in-place)
        det: Only keep the diagonal, for determinants

    Returns:
        EchelonResult with the sign of the row permutation
    """
    m, n = matrix.rows, matrix.cols
    data = matrix.data
    sign = 1

    r0 = 0
    c0 = 0
    while c0 < n and r0 < m - 1:
        indx = pivot(matrix, r0, c0, True)
        if indx == -1:
            sign = 0
            if det:
                LOG.debug(f"Division free elimination: column {c0} vanishes, matrix is singular")
                return EchelonResult(0, _identity_permutation(matrix))
        if indx >= 0:
            if indx > 0:
                sign = -sign
            for r2 in range(r0 + 1, m):
                for c in range(c0 + 1, n):
                    data[r2 * n + c] = RationalMath.normal(data[r0 * n + c0] * data[r2 * n + c] -
                                                           data[r2 * n + c0] * data[r0 * n + c])
                # fill up left hand side with zeros
                for c in range(r0, c0 + 1):
                    data[r2 * n + c] = ZERO
            if det:
                # save space by deleting no longer needed elements
                for c in range(r0 + 1, n):
                    data[r0 * n + c] = ZERO
            r0 += 1
        c0 += 1
    # clear remaining rows
    for r in range(r0 + 1, m):
        for c in range(n):
            data[r * n + c] = ZERO
    return EchelonResult(sign, _identity_permutation(matrix))


def fraction_free_elimination(matrix: Matrix, det: bool = False) -> EchelonResult:
    """
    Bareiss' one-step fraction free elimination.

    The division free update at step k is divided by the pivot of step k-1,
    which divides exactly by the Sylvester identity. Rational function entries
    are handled by keeping numerators and denominators in separate lists and
    dividing both exactly:
        N{m'(r,c)} = N{p}*N{m(r,c)}*D{m(r,k)}*D{m(k,c)} - N{m(r,k)}*N{m(k,c)}*D{p}*D{m(r,c)}
        D{m'(r,c)} = D{p}*D{m(r,c)}*D{m(r,k)}*D{m(k,c)}
    where p = m(k,k), divided by N and D of the previous pivot respectively.

    Args:
        matrix: Matrix to reduce (modified in-place)
        det: Only keep the last entry, for determinants

    Returns:
        EchelonResult with the sign of the row permutation
    """
    m, n = matrix.rows, matrix.cols
    sign = 1
    if m == 1:
        return EchelonResult(1, _identity_permutation(matrix))
    divisor_n = ONE
    divisor_d = ONE

    # Work on separate numerator and denominator lists: a quotient entry may
    # be simplified by sympy before the exact division sees it.
    tmp_n = []
    tmp_d = []
    for value in matrix.data:
        numer, denom = RationalMath.numer_denom(value)
        tmp_n.append(numer)
        tmp_d.append(denom)

    r0 = 0
    c0 = 0
    while c0 < n and r0 < m - 1:
        # cheap zero test on the expanded numerator instead of a full pivot()
        indx = r0
        while indx < m and RationalMath.is_zero(RationalMath.expand(tmp_n[indx * n + c0])):
            indx += 1
        if indx == m:
            # all elements in column c0 below row r0 vanish
            sign = 0
            if det:
                LOG.debug(f"Fraction free elimination: column {c0} vanishes, matrix is singular")
                return EchelonResult(0, _identity_permutation(matrix))
        else:
            if indx > r0:
                sign = -sign
                for c in range(c0, n):
                    tmp_n[n * indx + c], tmp_n[n * r0 + c] = tmp_n[n * r0 + c], tmp_n[n * indx + c]
                    tmp_d[n * indx + c], tmp_d[n * r0 + c] = tmp_d[n * r0 + c], tmp_d[n * indx + c]
            for r2 in range(r0 + 1, m):
                for c in range(c0 + 1, n):
                    dividend_n = RationalMath.expand(
                        tmp_n[r0 * n + c0] * tmp_n[r2 * n + c] * tmp_d[r2 * n + c0] * tmp_d[r0 * n + c] -
                        tmp_n[r2 * n + c0] * tmp_n[r0 * n + c] * tmp_d[r0 * n + c0] * tmp_d[r2 * n + c])
                    dividend_d = RationalMath.expand(
                        tmp_d[r2 * n + c0] * tmp_d[r0 * n + c] * tmp_d[r0 * n + c0] * tmp_d[r2 * n + c])
                    tmp_n[r2 * n + c] = RationalMath.exact_divide(dividend_n, divisor_n)
                    tmp_d[r2 * n + c] = RationalMath.exact_divide(dividend_d, divisor_d)
                # fill up left hand side with zeros
                for c in range(r0, c0 + 1):
                    tmp_n[r2 * n + c] = ZERO
            # next iteration's divisor
            divisor_n = RationalMath.expand(tmp_n[r0 * n + c0])
            divisor_d = RationalMath.expand(tmp_d[r0 * n + c0])
            if det:
                # save space by deleting no longer needed elements
                for c in range(n):
                    tmp_n[r0 * n + c] = ZERO
                    tmp_d[r0 * n + c] = ONE
            r0 += 1
        c0 += 1
    # clear remaining rows
    for r in range(r0 + 1, m):
        for c in range(n):
            tmp_n[r * n + c] = ZERO

    matrix.data[:] = [numer / denom for numer, denom in zip(tmp_n, tmp_d)]
    return EchelonResult(sign, _identity_permutation(matrix))


def markowitz_elimination(matrix: Matrix, n: Optional[int] = None) -> EchelonResult:
    """
    Gaussian elimination with Markowitz-ordered full pivoting.

    Pivots are chosen among the first n columns only, so that right hand
    sides attached to an augmented matrix keep their place. The pivot
    minimizes (row_count - 1) * (col_count - 1) over the live nonzero counts,
    which keeps fill-in low on sparse matrices. All entries are kept
    normalized, so the zero test stays syntactic.

    Args:
        matrix: Matrix to reduce (modified in-place)
        n: Number of leading columns available for pivoting (default: all)

    Returns:
        EchelonResult whose column_permutation maps each working column to
        its original index; it is the identity on columns >= n
    """
    rows, cols = matrix.rows, matrix.cols
    if n is None:
        n = cols
    if not 0 <= n <= cols:
        raise InvalidArgument(f"Pivot column count {n} outside 0..{cols}")
    data = matrix.data
    sign = 1
    rowcnt = [0] * rows
    colcnt = [0] * cols
    # normalize everything up front and keep it that way
    for r in range(rows):
        for c in range(cols):
            if not RationalMath.is_zero(data[r * cols + c]):
                data[r * cols + c] = RationalMath.normal(data[r * cols + c])
                if not RationalMath.is_zero(data[r * cols + c]):
                    rowcnt[r] += 1
                    colcnt[c] += 1
    colid = list(range(cols))
    ab = [ZERO] * rows
    none_found = rows * cols

    k = 0
    while k < cols and k < rows - 1:
        pivot_r = rows + 1
        pivot_c = cols + 1
        pivot_m = none_found
        for r in range(k, rows):
            for c in range(k, n):
                if RationalMath.is_zero(data[r * cols + c]):
                    continue
                measure = (rowcnt[r] - 1) * (colcnt[c] - 1)
                if measure < pivot_m:
                    pivot_m = measure
                    pivot_r = r
                    pivot_c = c
        if pivot_m == none_found:
            # the rest of the matrix is zero
            if k < min(rows, n):
                sign = 0
            break
        # swap the pivot into (k, k)
        if pivot_c != k:
            matrix.swap_columns(pivot_c, k)
            colid[pivot_c], colid[k] = colid[k], colid[pivot_c]
            colcnt[pivot_c], colcnt[k] = colcnt[k], colcnt[pivot_c]
            sign = -sign
        if pivot_r != k:
            matrix.swap_rows(pivot_r, k, start=k)
            rowcnt[pivot_r], rowcnt[k] = rowcnt[k], rowcnt[pivot_r]
            sign = -sign
        a = data[k * cols + k]
        # subtract the pivot row column by column to skip its zeros
        for r in range(k + 1, rows):
            b = data[r * cols + k]
            if not RationalMath.is_zero(b):
                ab[r] = b / a
                rowcnt[r] -= 1
        colcnt[k] = rowcnt[k] = 0
        for c in range(k + 1, cols):
            mr0c = data[k * cols + c]
            if RationalMath.is_zero(mr0c):
                continue
            colcnt[c] -= 1
            for r in range(k + 1, rows):
                if RationalMath.is_zero(ab[r]):
                    continue
                waszero = RationalMath.is_zero(data[r * cols + c])
                data[r * cols + c] = RationalMath.normal(data[r * cols + c] - ab[r] * mr0c)
                iszero = RationalMath.is_zero(data[r * cols + c])
                if waszero and not iszero:
                    rowcnt[r] += 1
                    colcnt[c] += 1
                if not waszero and iszero:
                    rowcnt[r] -= 1
                    colcnt[c] -= 1
        for r in range(k + 1, rows):
            ab[r] = data[r * cols + k] = ZERO
        k += 1
    return EchelonResult(sign, colid)


# Row-only strategies taking the det flag; markowitz takes the pivot column bound instead
STRATEGIES = {
    GAUSS: gauss_elimination,
    DIVFREE: division_free_elimination,
    BAREISS: fraction_free_elimination,
}
