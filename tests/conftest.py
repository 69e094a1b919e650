import pytest
import sympy as sp
import exactmatrix as em
from exactmatrix.names import *


def pytest_addoption(parser):
    parser.addoption("--runslow", action="store_true", default=False, help="run slow benchmark-sized tests")


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: benchmark-sized test, only run with --runslow")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--runslow"):
        return
    skip_slow = pytest.mark.skip(reason="needs --runslow")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture(params=[GAUSS, BAREISS, DIVFREE, LAPLACE], scope="session")
def det_algorithm(request: pytest.FixtureRequest) -> str:
    """Provide session-level fixture for parametrized determinant algorithms."""
    return request.param


@pytest.fixture(params=[AUTOMATIC, GAUSS, BAREISS, DIVFREE, MARKOWITZ], scope="session")
def solve_algorithm(request: pytest.FixtureRequest) -> str:
    """Provide session-level fixture for parametrized elimination algorithms."""
    return request.param


@pytest.fixture
def abcd():
    return sp.symbols('a b c d')


@pytest.fixture
def numeric_2x2():
    return em.Matrix.from_rows([[1, 2], [3, 4]])


@pytest.fixture
def singular_2x2():
    return em.Matrix.from_rows([[1, 2], [2, 4]])


@pytest.fixture
def symbolic_3x3():
    return em.symbolic_matrix(3, 3, 'm')


@pytest.fixture
def sparse_numeric_15x15():
    """Sparse, strictly diagonally dominant numeric matrix large enough for Markowitz elimination."""
    n = 15
    matrix = em.Matrix(n, n)
    for i in range(n):
        matrix[i, i] = i + 3
        matrix[i, (i + 3) % n] = 1
        matrix[i, (i + 7) % n] = -1
    return matrix
