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
"""Static strings and tuning constants used in the exactmatrix package

    Algorithms

        AUTOMATIC = 'automatic'

        GAUSS = 'gauss'

        DIVFREE = 'divfree'

        BAREISS = 'bareiss'

        MARKOWITZ = 'markowitz'

        LAPLACE = 'laplace'

    Elimination heuristics

        MARKOWITZ_MIN_CELLS = 200

        SMALL_SYMBOLIC_CELLS = 120

        TINY_SYMBOLIC_CELLS = 12

        BAREISS_MIN_ROWS = 3

        BAREISS_SPARSITY = 5

    Conversion

        MAX_DENOMINATOR = 1000000
"""

# Algorithms
AUTOMATIC = 'automatic'
GAUSS = 'gauss'
DIVFREE = 'divfree'
BAREISS = 'bareiss'
MARKOWITZ = 'markowitz'
LAPLACE = 'laplace'

SOLVE_ALGORITHMS = (GAUSS, DIVFREE, BAREISS, MARKOWITZ)
DETERMINANT_ALGORITHMS = (GAUSS, DIVFREE, BAREISS, LAPLACE)

# Echelon dispatcher: numeric matrices switch to Markowitz above this many
# cells when less than half of them are nonzero.
MARKOWITZ_MIN_CELLS = 200
# Symbolic matrices below this many cells are eliminated fraction-free
# (or division-free below TINY_SYMBOLIC_CELLS) when dense enough.
SMALL_SYMBOLIC_CELLS = 120
TINY_SYMBOLIC_CELLS = 12

# Determinant engine: Bareiss instead of minor expansion for matrices with
# more than BAREISS_MIN_ROWS rows and at most one nonzero in BAREISS_SPARSITY cells.
BAREISS_MIN_ROWS = 3
BAREISS_SPARSITY = 5

# Largest denominator used when converting floats to exact rationals
MAX_DENOMINATOR = 1000000
