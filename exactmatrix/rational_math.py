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
Exact element arithmetic for the matrix kernel.

Matrix entries are sympy expressions. This module is the only place that
knows how entries are canonicalized, split into numerator and denominator,
classified and divided exactly; the elimination and determinant code goes
through RationalMath for all of it.
"""

from fractions import Fraction
from typing import Tuple, Union
import numpy as np
import sympy as sp
from sympy import Rational
from sympy.polys.polyerrors import BasePolynomialError

from .names import MAX_DENOMINATOR

# Type alias for values that can be turned into matrix entries
Element = Union[sp.Basic, int, float, Fraction, str]


class RationalMath:
    """Utility class for operations on exact matrix entries."""

    # Commonly used constants
    ZERO = sp.S.Zero
    ONE = sp.S.One
    MINUS_ONE = sp.S.NegativeOne

    @staticmethod
    def to_element(value: Element) -> sp.Expr:
        """
        Convert a value to a sympy expression usable as a matrix entry.

        Floats are turned into exact rationals with a bounded denominator,
        the same way a stoichiometric coefficient would be.

        Args:
            value: sympy expression, int, float, Fraction, numpy scalar or string

        Returns:
            sympy representation of the value
        """
        if isinstance(value, sp.Basic):
            return value
        elif isinstance(value, Fraction):
            return Rational(value.numerator, value.denominator)
        elif isinstance(value, (int, np.integer)):
            return sp.Integer(int(value))
        elif isinstance(value, (float, np.floating)):
            frac = Fraction(float(value)).limit_denominator(MAX_DENOMINATOR)
            return Rational(frac.numerator, frac.denominator)
        elif isinstance(value, (complex, np.complexfloating)):
            return RationalMath.to_element(value.real) + sp.I * RationalMath.to_element(value.imag)
        else:
            return sp.sympify(value)

    @staticmethod
    def is_zero(value: sp.Expr) -> bool:
        """Syntactic zero test, no simplification is attempted."""
        return value == 0

    @staticmethod
    def is_numeric(value: sp.Expr) -> bool:
        """
        Check if an entry is a plain number.

        Rationals, floats and complex numbers with numeric real and imaginary
        parts count, irrational constants like sqrt(2) do not.
        """
        if value.is_Number:
            return True
        if value.is_number and value.has(sp.I):
            re, im = value.as_real_imag()
            return re.is_Number and im.is_Number
        return False

    @staticmethod
    def is_real_number(value: sp.Expr) -> bool:
        return bool(value.is_Number)

    @staticmethod
    def is_atomic_symbol(value: sp.Expr) -> bool:
        return isinstance(value, sp.Symbol)

    @staticmethod
    def normal(value: sp.Expr) -> sp.Expr:
        """Canonical numerator/denominator form with common factors cancelled."""
        return sp.cancel(value)

    @staticmethod
    def expand(value: sp.Expr) -> sp.Expr:
        """Sum-of-monomials form."""
        return sp.expand(value)

    @staticmethod
    def rational_form(value: sp.Expr) -> Tuple[sp.Expr, sp.Expr]:
        """
        Split an entry over a common denominator without cancelling.

        This is the cheap decomposition used for matrix statistics.

        Returns:
            Tuple of (numerator, denominator)
        """
        return sp.fraction(sp.together(value))

    @staticmethod
    def numer_denom(value: sp.Expr) -> Tuple[sp.Expr, sp.Expr]:
        """
        Split an entry into numerator and denominator after normalization.

        Returns:
            Tuple of (numerator, denominator), both polynomials
        """
        return sp.fraction(sp.cancel(value))

    @staticmethod
    def is_proper_rational_function(value: sp.Expr) -> bool:
        """True if the entry has a non-constant denominator."""
        _, denom = RationalMath.rational_form(value)
        return not denom.is_number

    @staticmethod
    def normal_or_expand(value: sp.Expr, normalize: bool) -> sp.Expr:
        """Normalize results that live in a quotient field, expand the others."""
        if normalize:
            return sp.cancel(value)
        return sp.expand(value)

    @staticmethod
    def exact_divide(dividend: sp.Expr, divisor: sp.Expr) -> sp.Expr:
        """
        Divide two polynomials that are known to divide exactly.

        Args:
            dividend: Polynomial to be divided
            divisor: Nonzero polynomial dividing the dividend

        Returns:
            The quotient

        Raises:
            ArithmeticError: If the division leaves a remainder
        """
        if divisor == 1:
            return dividend
        if dividend == 0:
            return RationalMath.ZERO
        if dividend.is_number and divisor.is_number:
            return dividend / divisor
        try:
            quotient, remainder = sp.div(dividend, divisor)
        except BasePolynomialError:
            # generators sympy cannot polify, e.g. both sides constant after all
            return sp.cancel(dividend / divisor)
        if remainder != 0:
            raise ArithmeticError(f"Division of {dividend} by {divisor} is not exact")
        return quotient

    @staticmethod
    def fresh_symbol() -> sp.Symbol:
        """Anonymous symbol that never clashes with user symbols."""
        return sp.Dummy()

    @staticmethod
    def array_to_elements(arr: np.ndarray) -> np.ndarray:
        """
        Convert a numpy array to an object array of exact entries.

        Args:
            arr: Numpy array of numeric values

        Returns:
            Object array containing sympy values
        """
        result = np.empty(arr.shape, dtype=object)
        flat_result = result.flat
        for i, val in enumerate(arr.flat):
            flat_result[i] = RationalMath.to_element(val)
        return result


# Module-level constants for compatibility
ZERO = RationalMath.ZERO
ONE = RationalMath.ONE
