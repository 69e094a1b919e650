"""Exceptions raised by the exactmatrix package."""


class ExactMatrixError(Exception):
    """Base class of all matrix kernel errors."""


class DimensionMismatch(ExactMatrixError, ValueError):
    """Operands have incompatible shapes."""


class NotSquare(ExactMatrixError, ValueError):
    """Operation needs a square matrix."""


class IndexOutOfRange(ExactMatrixError, IndexError):
    """Row or column index outside the matrix."""


class InvalidArgument(ExactMatrixError, ValueError):
    """Argument of the right type but with an unusable value."""


class Singular(ExactMatrixError, ArithmeticError):
    """Matrix has no inverse."""


class Inconsistent(ExactMatrixError, ArithmeticError):
    """Linear system has no solution."""
