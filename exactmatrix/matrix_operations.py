"""
Operations derived from elimination and determinants: inverse, rank,
characteristic polynomial and integer powers.
"""

import logging
from numbers import Integral

import sympy as sp

from .determinant import determinant
from .echelon import echelon_form
from .errors import Inconsistent, InvalidArgument, NotSquare, Singular
from .matrix import Matrix, unit_matrix
from .names import AUTOMATIC
from .rational_math import RationalMath
from .solver import solve

LOG = logging.getLogger(__name__)


def inverse(matrix: Matrix, algorithm: str = AUTOMATIC) -> Matrix:
    """
    Inverse of a square matrix, computed by solving A * X == 1.

    Args:
        matrix: Square matrix to invert
        algorithm: Elimination algorithm, see echelon.echelon_form

    Returns:
        The inverse matrix

    Raises:
        NotSquare: If the matrix is not square
        Singular: If the matrix is singular
    """
    if matrix.rows != matrix.cols:
        raise NotSquare(f"Inverse of non-square {matrix.rows}x{matrix.cols} matrix")
    n = matrix.rows
    identity = unit_matrix(n)
    # solve() wants a matrix of unknowns, anonymous symbols will do
    variables = Matrix(n, n, [RationalMath.fresh_symbol() for _ in range(n * n)])
    try:
        return solve(matrix, variables, identity, algorithm)
    except Inconsistent as e:
        raise Singular(f"Matrix is singular: {e}") from e


def rank(matrix: Matrix, algorithm: str = AUTOMATIC) -> int:
    """
    Rank of a matrix: the number of nonzero rows of its echelon form.

    Args:
        matrix: Input matrix
        algorithm: Elimination algorithm, see echelon.echelon_form

    Returns:
        The rank
    """
    reduced, _ = echelon_form(matrix, algorithm, matrix.cols)
    for index in range(len(reduced.data) - 1, -1, -1):
        if not RationalMath.is_zero(reduced.data[index]):
            return 1 + index // reduced.cols
    return 0


def charpoly(matrix: Matrix, lam: sp.Expr) -> sp.Expr:
    """
    Characteristic polynomial det(A - lam*1), collected in powers of lam.

    Some systems define it as det(lam*1 - A), which differs by a sign for odd
    dimensions. Numeric matrices use Leverrier's algorithm, which needs n
    matrix multiplications; all others go through the determinant.

    Args:
        matrix: Square matrix
        lam: Symbol (or expression) of the polynomial

    Returns:
        The characteristic polynomial

    Raises:
        NotSquare: If the matrix is not square
    """
    if matrix.rows != matrix.cols:
        raise NotSquare(f"Characteristic polynomial of non-square {matrix.rows}x{matrix.cols} matrix")
    n = matrix.rows
    lam = RationalMath.to_element(lam)

    if all(RationalMath.is_numeric(value) for value in matrix.data):
        LOG.debug(f"Characteristic polynomial of numeric {n}x{n} matrix by Leverrier's algorithm")
        B = matrix.copy()
        c = B.trace()
        poly = lam**n - c * lam**(n - 1)
        for i in range(1, n):
            for j in range(n):
                B.data[j * n + j] -= c
            B = matrix.mul(B)
            c = B.trace() / (i + 1)
            poly -= c * lam**(n - i - 1)
        if n % 2:
            return -poly
        return poly

    M = matrix.copy()
    for r in range(n):
        M.data[r * n + r] -= lam
    return sp.collect(determinant(M), lam)


def matrix_power(matrix: Matrix, exponent) -> Matrix:
    """
    Integer power of a square matrix by repeated squaring.

    Args:
        matrix: Square matrix
        exponent: Integer exponent, negative exponents invert first

    Returns:
        The matrix power

    Raises:
        NotSquare: If the matrix is not square
        InvalidArgument: If the exponent is not an integer
        Singular: If the exponent is negative and the matrix singular
    """
    if matrix.rows != matrix.cols:
        raise NotSquare(f"Power of non-square {matrix.rows}x{matrix.cols} matrix")
    if isinstance(exponent, bool) or not isinstance(exponent, (Integral, sp.Integer)):
        raise InvalidArgument(f"Cannot raise a matrix to the non-integer power {exponent!r}")
    b = int(exponent)
    n = matrix.rows
    if b < 0:
        b = -b
        A = inverse(matrix)
    else:
        A = matrix
    C = unit_matrix(n)
    if b == 0:
        return C
    # binary representation of b from right to left, multiplying the
    # factors whenever needed: A^4 == (A*A)*(A*A)
    while b != 1:
        if b % 2:
            C = C.mul(A)
            b -= 1
        b //= 2
        A = A.mul(A)
    return A.mul(C)
