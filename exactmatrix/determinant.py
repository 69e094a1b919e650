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
Determinant engine.

determinant() only gathers statistics about the matrix and decides which
algorithm to run: Gaussian, fraction free (Bareiss) or division free
elimination, or the memoized minor expansion of determinant_minor(), which
is the default for symbolic matrices.

If all entries belong to an integral domain the determinant is returned
expanded, if one of them is a proper rational function it is returned
normalized. The determinant of [[a/(a-b), 1], [b/(a-b), 1]] is therefore 1.
"""

import logging
from itertools import combinations
from typing import Dict, List, Sequence, Tuple

import sympy as sp

from .elimination import STRATEGIES
from .errors import InvalidArgument, NotSquare
from .matrix import Matrix
from .names import (AUTOMATIC, GAUSS, DIVFREE, BAREISS, LAPLACE, DETERMINANT_ALGORITHMS, BAREISS_MIN_ROWS,
                    BAREISS_SPARSITY)
from .rational_math import RationalMath, ZERO, ONE

LOG = logging.getLogger(__name__)


class MatrixStatistics:
    """Statistics the determinant heuristic is based on."""

    def __init__(self, matrix: Matrix):
        self.all_numeric = True
        self.needs_normalization = False
        self.sparse_count = 0  # counts nonzero entries
        for value in matrix.data:
            if self.all_numeric and not RationalMath.is_numeric(value):
                self.all_numeric = False
            numer, denom = RationalMath.rational_form(value)
            if not RationalMath.is_zero(numer):
                self.sparse_count += 1
            if not denom.is_number:
                self.needs_normalization = True

    def __repr__(self):
        return (f"MatrixStatistics(all_numeric={self.all_numeric}, sparse_count={self.sparse_count}, "
                f"needs_normalization={self.needs_normalization})")


def choose_determinant_algorithm(matrix: Matrix, stats: MatrixStatistics) -> str:
    """
    Minor expansion is generally a good guess. Sparse matrices with more than
    BAREISS_MIN_ROWS rows go to Bareiss, and purely numeric matrices to Gauss,
    overriding everything else.
    """
    algorithm = LAPLACE
    if matrix.rows > BAREISS_MIN_ROWS and BAREISS_SPARSITY * stats.sparse_count <= matrix.rows * matrix.cols:
        algorithm = BAREISS
    if stats.all_numeric:
        algorithm = GAUSS
    return algorithm


def permutation_sign(permutation: Sequence[int]) -> int:
    """Sign of a permutation of distinct integers: 1 if even, -1 if odd."""
    sign = 1
    values = list(permutation)
    for i in range(len(values)):
        for j in range(i + 1, len(values)):
            if values[i] > values[j]:
                sign = -sign
    return sign


def determinant(matrix: Matrix, algorithm: str = AUTOMATIC) -> sp.Expr:
    """
    Determinant of a square matrix.

    Args:
        matrix: Square matrix, left untouched
        algorithm: AUTOMATIC or one of GAUSS, BAREISS, DIVFREE, LAPLACE

    Returns:
        The determinant, expanded or normalized (see module docstring)

    Raises:
        NotSquare: If the matrix is not square
        InvalidArgument: If the algorithm is unknown
    """
    if matrix.rows != matrix.cols:
        raise NotSquare(f"Determinant of non-square {matrix.rows}x{matrix.cols} matrix")
    if algorithm != AUTOMATIC and algorithm not in DETERMINANT_ALGORITHMS:
        raise InvalidArgument(f"Unknown determinant algorithm '{algorithm}'")

    stats = MatrixStatistics(matrix)
    if algorithm == AUTOMATIC:
        algorithm = choose_determinant_algorithm(matrix, stats)
        LOG.debug(f"Determinant of {matrix.rows}x{matrix.cols} matrix ({stats}): using {algorithm}")

    normalize = stats.needs_normalization
    # trivial case, some algorithms don't like it
    if matrix.rows == 1:
        return RationalMath.normal_or_expand(matrix.data[0], normalize)

    n = matrix.rows
    if algorithm == GAUSS:
        work = matrix.copy()
        sign = STRATEGIES[GAUSS](work, det=True).sign
        det = sp.Mul(*(work.data[d * n + d] for d in range(n)))
        det = RationalMath.normal(sign * det)
        if normalize:
            return det
        return RationalMath.expand(det)
    elif algorithm == BAREISS:
        work = matrix.copy()
        sign = STRATEGIES[BAREISS](work, det=True).sign
        return RationalMath.normal_or_expand(sign * work.data[n * n - 1], normalize)
    elif algorithm == DIVFREE:
        work = matrix.copy()
        sign = STRATEGIES[DIVFREE](work, det=True).sign
        if sign == 0:
            return ZERO
        det = work.data[n * n - 1]
        # divide out the pivots the division free recurrence multiplied in
        for d in range(n - 2):
            for _ in range(n - d - 2):
                det = RationalMath.normal(det / work.data[d * n + d])
        return RationalMath.normal_or_expand(sign * det, normalize)
    else:
        return _laplace_determinant(matrix, normalize)


def _laplace_determinant(matrix: Matrix, normalize: bool) -> sp.Expr:
    """
    Minor expansion with the sparsest columns moved to the right.

    Expanding such that the emptiest columns end up on the right hand side
    (where the trivial 1x1 minors are formed) is fastest in practice.
    """
    n = matrix.cols
    zeros_per_column: List[Tuple[int, int]] = []
    for c in range(n):
        zeros = sum(1 for r in range(n) if RationalMath.is_zero(matrix.data[r * n + c]))
        zeros_per_column.append((zeros, c))
    pre_sort = [c for _, c in sorted(zeros_per_column)]
    sign = permutation_sign(pre_sort)
    sorted_data = [matrix.data[r * n + c] for r in range(n) for c in pre_sort]
    det = sign * determinant_minor(Matrix._from_data(n, n, sorted_data))
    if normalize:
        return RationalMath.normal(det)
    return det


def determinant_minor(matrix: Matrix) -> sp.Expr:
    """
    Laplace expansion with memoized minors.

    Naive Laplace expansion computes each of the binomial(n, k) minors of
    size k up to factorial(n - k) times. Instead, the columns are processed
    right to left: the minors of the trailing n - c columns are computed from
    those of the trailing n - c - 1 columns, stored in a dict keyed by the
    sorted tuple of rows they are formed from. Only two generations of minors
    are alive at any time.

    Args:
        matrix: Square matrix

    Returns:
        The determinant in expanded form
    """
    n = matrix.cols
    data = matrix.data
    # dummy unit, used as factor in the rightmost column
    minors: Dict[Tuple[int, ...], sp.Expr] = {(): ONE}
    det = ZERO
    for c in range(n - 1, -1, -1):
        next_minors: Dict[Tuple[int, ...], sp.Expr] = {}
        for key in combinations(range(n), n - c):
            terms = []
            for position, r in enumerate(key):
                entry = data[r * n + c]
                if RationalMath.is_zero(entry):
                    continue
                minor = minors.get(key[:position] + key[position + 1:])
                if minor is None:
                    continue
                terms.append(-entry * minor if position % 2 else entry * minor)
            det = RationalMath.expand(sp.Add(*terms))
            if not RationalMath.is_zero(det):
                next_minors[key] = det
        if not next_minors:
            LOG.debug(f"Minor expansion: all minors of column {c} vanish")
            return ZERO
        minors = next_minors
    return det
