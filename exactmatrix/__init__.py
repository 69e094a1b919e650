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
"""Dense exact matrix algebra over symbolic and rational entries"""

from .names import *
import logging


class DisableLogger():
    """Environment in which logging is disabled"""

    def __enter__(self):
        logging.disable(logging.CRITICAL)

    def __exit__(self, exit_type, exit_value, exit_traceback):
        logging.disable(logging.NOTSET)


from .errors import *
from .rational_math import RationalMath
from .matrix import Matrix, lst_to_matrix, diag_matrix, unit_matrix, symbolic_matrix, reduced_matrix, sub_matrix
from .elimination import (EchelonResult, pivot, gauss_elimination, division_free_elimination,
                          fraction_free_elimination, markowitz_elimination)
from .echelon import echelon_form, select_algorithm
from .determinant import determinant, determinant_minor, permutation_sign
from .solver import solve
from .matrix_operations import inverse, rank, charpoly, matrix_power
