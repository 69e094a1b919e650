"""
Echelon form dispatcher.

Picks an elimination strategy from cheap statistics of the matrix when the
caller leaves the choice to the kernel, and runs it on a private copy.
"""

import logging
from typing import Optional, Tuple

from .elimination import EchelonResult, STRATEGIES, markowitz_elimination
from .errors import InvalidArgument
from .matrix import Matrix
from .names import (AUTOMATIC, GAUSS, DIVFREE, BAREISS, MARKOWITZ, SOLVE_ALGORITHMS, MARKOWITZ_MIN_CELLS,
                    SMALL_SYMBOLIC_CELLS, TINY_SYMBOLIC_CELLS)
from .rational_math import RationalMath

LOG = logging.getLogger(__name__)


def select_algorithm(matrix: Matrix) -> str:
    """
    Choose an elimination strategy for the matrix.

    Gauss is good for numeric matrices, Markowitz becomes better for large
    sparse ones. For symbolic matrices Markowitz is good, but Bareiss or
    division free elimination beat it on small dense matrices.

    Args:
        matrix: Matrix (usually augmented) about to be eliminated

    Returns:
        One of GAUSS, DIVFREE, BAREISS, MARKOWITZ
    """
    numeric = all(RationalMath.is_numeric(value) for value in matrix.data)
    density = sum(1 for value in matrix.data if not RationalMath.is_zero(value))
    ncells = matrix.rows * matrix.cols
    if numeric:
        if ncells > MARKOWITZ_MIN_CELLS and density < ncells // 2:
            return MARKOWITZ
        return GAUSS
    if ncells < SMALL_SYMBOLIC_CELLS and density * 5 > ncells * 3:
        if ncells <= TINY_SYMBOLIC_CELLS:
            return DIVFREE
        return BAREISS
    return MARKOWITZ


def echelon_form(matrix: Matrix, algorithm: str = AUTOMATIC, n: Optional[int] = None) -> Tuple[Matrix, EchelonResult]:
    """
    Bring a copy of the matrix into upper echelon form.

    Args:
        matrix: Matrix to eliminate, left untouched
        algorithm: AUTOMATIC or one of GAUSS, DIVFREE, BAREISS, MARKOWITZ
        n: Number of leading columns that may hold pivots. Only Markowitz
            elimination permutes columns and it never touches columns >= n.

    Returns:
        Tuple of (reduced copy, EchelonResult)

    Raises:
        InvalidArgument: If the algorithm is unknown or n is outside 0..cols
    """
    if n is None:
        n = matrix.cols
    if not 0 <= n <= matrix.cols:
        raise InvalidArgument(f"Pivot column count {n} outside 0..{matrix.cols}")
    if algorithm == AUTOMATIC:
        algorithm = select_algorithm(matrix)
        LOG.debug(f"Echelon form of {matrix.rows}x{matrix.cols} matrix: using {algorithm} elimination")
    if algorithm not in SOLVE_ALGORITHMS:
        raise InvalidArgument(f"Unknown elimination algorithm '{algorithm}'")

    work = matrix.copy()
    if algorithm == MARKOWITZ:
        result = markowitz_elimination(work, n)
    else:
        result = STRATEGIES[algorithm](work)
    return work, result
