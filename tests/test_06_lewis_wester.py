"""Lewis-Wester benchmark M2: determinant of a sparse 101x101 symbolic matrix from graph theory."""
import pytest
import sympy as sp
import exactmatrix as em
from exactmatrix.names import *


def lewis_wester_m2(blocks=10):
    """
    Build the M2 matrix, or a smaller instance with the same structure.

    Row r = 10*b + i (1-based, i = 1..9) of block b holds a 1 on the diagonal
    and the block symbol at column 10*g + i + 1 of every other block g. The
    last row of each block links it to the final row and column.
    """
    symbols = sp.symbols('xA x9 x8 x7 x6 x5 x4 x3 x2 x1')[:blocks]
    size = 10 * blocks + 1
    matrix = em.Matrix(size, size)
    for b in range(blocks):
        for i in range(1, 10):
            r = 10 * b + i
            for g in range(blocks):
                if g == b:
                    matrix[r - 1, r - 1] = 1
                else:
                    matrix[r - 1, 10 * g + i] = symbols[g]
        r = 10 * b + 10
        matrix[r - 1, r - 1] = 1
        matrix[r - 1, size - 1] = 1
    for g in range(blocks):
        matrix[size - 1, 10 * g] = symbols[g]
    return matrix


@pytest.mark.timeout(120)
def test_small_instance_algorithms_agree():
    matrix = lewis_wester_m2(blocks=2)
    assert (matrix.shape == (21, 21))
    reference = em.determinant(matrix)
    values = {symbol: k + 2 for k, symbol in enumerate(sp.symbols('xA x9'))}
    assert (reference.subs(values) == sp.Matrix(matrix.subs(values).to_list()).det())
    assert (sp.expand(em.determinant(matrix, GAUSS) - reference) == 0)


@pytest.mark.timeout(120)
@pytest.mark.parametrize("algorithm", [AUTOMATIC, BAREISS, GAUSS])
def test_small_instance_exact_determinant(algorithm):
    # one off-diagonal entry per row leaves two 11-cycles, both even
    xA, x9 = sp.symbols('xA x9')
    det = sp.expand(em.determinant(lewis_wester_m2(blocks=2), algorithm))
    assert (det == 2 * xA**5 * x9**5)
    assert (len(sp.Add.make_args(det)) == 1)


@pytest.mark.timeout(300)
def test_mid_instance():
    xA, x9, x8 = sp.symbols('xA x9 x8')
    matrix = lewis_wester_m2(blocks=3)
    assert (matrix.shape == (31, 31))
    det = sp.expand(em.determinant(matrix))
    values = {xA: 2, x9: 3, x8: 5}
    assert (det.subs(values) == sp.Matrix(matrix.subs(values).to_list()).det())
    # relabelling blocks permutes the symbols
    assert (sp.expand(det.subs({xA: x9, x9: xA}, simultaneous=True) - det) == 0)
    assert (sp.expand(det.subs({x9: x8, x8: x9}, simultaneous=True) - det) == 0)
    assert (det.free_symbols == {xA, x9, x8})
    # with x8 gone the last block decouples into an identity
    assert (det.subs(x8, 0) == 2 * xA**5 * x9**5)


@pytest.mark.slow
@pytest.mark.timeout(7200)
@pytest.mark.parametrize("algorithm", [AUTOMATIC, BAREISS, GAUSS])
def test_m2_determinant_terms(algorithm):
    matrix = lewis_wester_m2()
    assert (matrix.shape == (101, 101))
    det = em.determinant(matrix, algorithm)
    assert (len(sp.Add.make_args(det)) == 85228)
