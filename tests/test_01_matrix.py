"""Matrix container, factories and conversions."""
from fractions import Fraction
import numpy as np
import pytest
import sympy as sp
from scipy.sparse import csr_matrix
import exactmatrix as em


def test_zero_matrix_and_flat_fill():
    m = em.Matrix(2, 3)
    assert (m.shape == (2, 3))
    assert (m.is_zero_matrix())
    m = em.Matrix(2, 2, [1, 2, 3])
    assert (m.to_list() == [[1, 2], [3, 0]])
    m = em.Matrix(1, 2, [1, 2, 3, 4])
    assert (m.to_list() == [[1, 2]])


def test_invalid_dimensions():
    with pytest.raises(em.InvalidArgument):
        em.Matrix(0, 3)
    with pytest.raises(em.InvalidArgument):
        em.Matrix.from_rows([[1, 2], [3]])
    with pytest.raises(em.InvalidArgument):
        em.Matrix.from_rows([])


def test_element_conversion():
    x = sp.Symbol('x')
    m = em.Matrix.from_rows([[Fraction(1, 3), 0.5], ['x + 1', x]])
    assert (m[0, 0] == sp.Rational(1, 3))
    assert (m[0, 1] == sp.Rational(1, 2))
    assert (m[1, 0] == x + 1)
    assert (isinstance(m[0, 0], sp.Basic))


def test_get_set_bounds(numeric_2x2):
    m = numeric_2x2.copy()
    m.set(1, 1, 7)
    assert (m.get(1, 1) == 7)
    assert (numeric_2x2.get(1, 1) == 4)
    for r, c in [(2, 0), (0, 2), (-1, 0)]:
        with pytest.raises(em.IndexOutOfRange):
            m.get(r, c)
        with pytest.raises(IndexError):
            m[r, c] = 1


def test_add_sub(numeric_2x2):
    total = numeric_2x2 + numeric_2x2
    assert (total == em.Matrix.from_rows([[2, 4], [6, 8]]))
    assert ((total - numeric_2x2) == numeric_2x2)
    assert ((numeric_2x2 - numeric_2x2).is_zero_matrix())
    with pytest.raises(em.DimensionMismatch):
        numeric_2x2.add(em.Matrix(2, 3))
    with pytest.raises(em.DimensionMismatch):
        numeric_2x2.sub(em.Matrix(3, 2))


def test_mul(numeric_2x2):
    assert (numeric_2x2 * numeric_2x2 == em.Matrix.from_rows([[7, 10], [15, 22]]))
    column = em.Matrix(2, 1, [1, 1])
    assert ((numeric_2x2 @ column).to_list() == [[3], [7]])
    with pytest.raises(em.DimensionMismatch):
        column.mul(numeric_2x2)
    # zero factors are skipped but still give the right product
    sparse_left = em.Matrix.from_rows([[0, 1], [0, 0]])
    assert (sparse_left * numeric_2x2 == em.Matrix.from_rows([[3, 4], [0, 0]]))


def test_scalar_mul(numeric_2x2, abcd):
    a = abcd[0]
    assert ((numeric_2x2 * a).to_list() == [[a, 2 * a], [3 * a, 4 * a]])
    assert ((2 * numeric_2x2) == numeric_2x2.mul_scalar(2))
    assert ((-numeric_2x2).to_list() == [[-1, -2], [-3, -4]])


def test_associativity(symbolic_3x3):
    A = symbolic_3x3
    B = em.Matrix.from_rows([[1, 2], [0, 1], [3, 0]])
    C = em.Matrix.from_rows([[1, -1, 2], [sp.Symbol('t'), 0, 1]])
    left = (A * B) * C
    right = A * (B * C)
    assert (all(sp.expand(l - r) == 0 for l, r in zip(left.data, right.data)))


def test_transpose():
    m = em.Matrix.from_rows([[1, 2, 3], [4, 5, 6]])
    t = m.transpose()
    assert (t.shape == (3, 2))
    assert (t.to_list() == [[1, 4], [2, 5], [3, 6]])
    assert (t.transpose() == m)
    t.set(0, 1, 9)
    assert (m.get(1, 0) == 4)


def test_conjugate_short_circuit():
    real = em.Matrix.from_rows([[1, 2], [sp.Rational(1, 2), 0]])
    assert (real.conjugate() is real)
    assert (real.real_part() is real)
    cplx = em.Matrix.from_rows([[1 + 2 * sp.I, 3]])
    assert (cplx.conjugate().to_list() == [[1 - 2 * sp.I, 3]])
    assert (cplx.real_part().to_list() == [[1, 3]])
    assert (cplx.imag_part().to_list() == [[2, 0]])
    assert (cplx.to_list() == [[1 + 2 * sp.I, 3]])


def test_subs(abcd):
    a, b, c, d = abcd
    m = em.Matrix.from_rows([[a, b], [c, d]])
    assert (m.subs({a: 1, d: 4}).to_list() == [[1, b], [c, 4]])
    assert (m.subs({sp.Symbol('z'): 1}) is m)


def test_compare(numeric_2x2):
    assert (numeric_2x2.compare(numeric_2x2.copy()) == 0)
    assert (numeric_2x2.compare(em.Matrix(3, 2)) == -1)
    assert (numeric_2x2.compare(em.Matrix(2, 1)) == 1)
    other = em.Matrix.from_rows([[1, 2], [3, 5]])
    assert (numeric_2x2.compare(other) == -other.compare(numeric_2x2))
    assert (numeric_2x2.compare(other) != 0)
    assert (numeric_2x2 != other)


def test_trace(abcd):
    a, b, x, y = abcd
    m = em.Matrix.from_rows([[a / (a - b), x], [y, b / (b - a)]])
    assert (m.trace() == 1)
    assert (em.Matrix.from_rows([[1, 2], [3, 4]]).trace() == 5)
    with pytest.raises(em.NotSquare):
        em.Matrix(2, 3).trace()


def test_archive(numeric_2x2):
    archived = numeric_2x2.archive()
    assert (archived[0] == 2 and archived[1] == 2)
    assert (em.Matrix.read_archive(archived) == numeric_2x2)
    with pytest.raises(em.InvalidArgument):
        em.Matrix.read_archive((2, 2, [1, 2, 3]))


def test_factories(numeric_2x2):
    assert (em.unit_matrix(2).to_list() == [[1, 0], [0, 1]])
    assert (em.unit_matrix(2, 3).to_list() == [[1, 0, 0], [0, 1, 0]])
    assert (em.diag_matrix([1, 2]).to_list() == [[1, 0], [0, 2]])
    assert (em.lst_to_matrix([[1], [2, 3]]).to_list() == [[1, 0], [2, 3]])
    assert (em.reduced_matrix(numeric_2x2, 0, 1).to_list() == [[3]])
    assert (em.sub_matrix(em.unit_matrix(3), 1, 2, 0, 2).to_list() == [[0, 1], [0, 0]])
    with pytest.raises(em.IndexOutOfRange):
        em.reduced_matrix(numeric_2x2, 2, 0)
    with pytest.raises(em.IndexOutOfRange):
        em.sub_matrix(numeric_2x2, 1, 2, 0, 1)


def test_symbolic_matrix_names():
    assert (str(em.symbolic_matrix(2, 2, 'a').get(1, 0)) == 'a10')
    assert (str(em.symbolic_matrix(1, 3, 'v').get(0, 2)) == 'v2')
    assert (str(em.symbolic_matrix(3, 1, 'v').get(2, 0)) == 'v2')
    assert (str(em.symbolic_matrix(11, 2, 'b').get(10, 1)) == 'b_10_1')


def test_numpy_and_sparse_conversion():
    arr = np.array([[1.0, 0.25], [0.0, 3.0]])
    m = em.Matrix.from_numpy(arr)
    assert (m.to_list() == [[1, sp.Rational(1, 4)], [0, 3]])
    assert (m.to_numpy().shape == (2, 2))
    assert (m.to_numpy()[0, 1] == sp.Rational(1, 4))
    s = em.Matrix.from_sparse(csr_matrix(np.array([[0, 2], [5, 0]])))
    assert (s.to_list() == [[0, 2], [5, 0]])
    with pytest.raises(em.InvalidArgument):
        em.Matrix.from_numpy(np.array([1, 2]))


def test_str(numeric_2x2):
    assert (str(numeric_2x2) == "[[1,2],[3,4]]")
