"""
Linear system solver.

Solves A * X == B for an m x n matrix A and an m x p right hand side B by
eliminating the augmented matrix [A | B] and back substituting column by
column. Under-determined systems are parametrized by the unknowns
themselves.
"""

import logging
from typing import List, Union

import sympy as sp

from .echelon import echelon_form
from .errors import DimensionMismatch, Inconsistent, InvalidArgument
from .matrix import Matrix
from .names import AUTOMATIC
from .rational_math import RationalMath, Element

LOG = logging.getLogger(__name__)


def _as_matrix(value: Union[Matrix, List[Element]]) -> Matrix:
    """Accept flat lists as column vectors."""
    if isinstance(value, Matrix):
        return value
    values = list(value)
    return Matrix(len(values), 1, values)


def solve(matrix: Matrix, variables: Union[Matrix, List[sp.Symbol]], rhs: Union[Matrix, List[Element]],
          algorithm: str = AUTOMATIC) -> Matrix:
    """
    Solve a linear system.

    Args:
        matrix: m x n coefficient matrix
        variables: n x p matrix of symbols, the unknowns
        rhs: m x p right hand side
        algorithm: Elimination algorithm, see echelon.echelon_form

    Returns:
        n x p solution matrix. Unknowns the system does not determine are
        returned as themselves.

    Raises:
        DimensionMismatch: If the shapes do not fit together
        InvalidArgument: If an unknown is not a symbol
        Inconsistent: If the system has no solution
    """
    variables = _as_matrix(variables)
    rhs = _as_matrix(rhs)
    m = matrix.rows
    n = matrix.cols
    p = rhs.cols

    if rhs.rows != m or variables.rows != n or variables.cols != p:
        raise DimensionMismatch(f"Cannot solve {m}x{n} system for {variables.rows}x{variables.cols} unknowns "
                                f"with {rhs.rows}x{rhs.cols} right hand side")
    for value in variables.data:
        if not RationalMath.is_atomic_symbol(value):
            raise InvalidArgument(f"Unknowns must be symbols, got {value}")

    # augmented matrix with rhs attached to the right
    aug = Matrix(m, n + p)
    for r in range(m):
        aug.data[r * (n + p):r * (n + p) + n] = matrix.data[r * n:(r + 1) * n]
        aug.data[r * (n + p) + n:(r + 1) * (n + p)] = rhs.data[r * p:(r + 1) * p]

    LOG.debug(f"Solving {m}x{n} system with {p} right hand side(s)")
    aug, result = echelon_form(aug, algorithm, n)
    colid = result.column_permutation
    width = n + p

    sol = Matrix(n, p)
    for co in range(p):
        last_assigned = n
        for r in range(m - 1, -1, -1):
            # first nonzero coefficient in this row
            fnz = 0
            while fnz < n and RationalMath.is_zero(RationalMath.normal(aug.data[r * width + fnz])):
                fnz += 1
            if fnz == n:
                # zero row, the right hand side must vanish too
                if not RationalMath.is_zero(RationalMath.normal(aug.data[r * width + n + co])):
                    raise Inconsistent(f"Inconsistent linear system (row {r}, right hand side column {co})")
                continue
            # unknowns between this pivot and the last one are free parameters
            for c in range(fnz + 1, last_assigned):
                sol.data[colid[c] * p + co] = variables.data[colid[c] * p + co]
            e = aug.data[r * width + n + co]
            for c in range(fnz + 1, n):
                e -= aug.data[r * width + c] * sol.data[colid[c] * p + co]
            sol.data[colid[fnz] * p + co] = RationalMath.normal(e / aug.data[r * width + fnz])
            last_assigned = fnz
        # unknowns in front of the first pivot are free as well
        for c in range(last_assigned):
            sol.data[colid[c] * p + co] = variables.data[colid[c] * p + co]
    return sol
