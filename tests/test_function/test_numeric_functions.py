import numpy as np
import pytest

from optconduit.diagnostics import check_gradient
from optconduit.function import (
    ConstantFunction,
    IdentityFunction,
    LinearFunction,
    NumericLinearFunction,
    NumericQuadraticFunction,
)


@pytest.mark.parametrize("m, n", [(1, 1), (1, 4), (3, 2), (5, 5)])
def test_numeric_linear_function_properties(rng, m, n):
    a = rng.normal(size=(m, n))
    b = rng.normal(size=m)
    f = NumericLinearFunction(a, b)
    assert isinstance(f, LinearFunction)
    assert (f.input_size, f.output_size) == (n, m)
    for _ in range(5):
        x = rng.normal(size=n)
        assert np.allclose(f(x), a @ x + b)
        assert np.allclose(f.jacobian(x), a)
        for i in range(m):
            assert np.allclose(f.gradient(x, i), a[i])
            assert np.array_equal(f.hessian(x, i), np.zeros((n, n)))


def test_numeric_linear_hessian_zero_after_mutating_returned_arrays(rng):
    a = rng.normal(size=(2, 3))
    b = rng.normal(size=2)
    f = NumericLinearFunction(a, b)
    x = rng.normal(size=3)

    jac = f.jacobian(x)
    jac[:] = 100.0
    grad = f.gradient(x, 0)
    grad[:] = -7.0
    hess = f.hessian(x, 1)
    hess[:] = 3.0
    a[:] = 0.0

    assert np.allclose(f.jacobian(x), f.a)
    assert not np.allclose(f.a, 0.0)
    assert np.array_equal(f.hessian(x, 1), np.zeros((3, 3)))
    assert np.array_equal(f.hessian(x, 0), np.zeros((3, 3)))


def test_numeric_linear_coefficients_are_read_only():
    f = NumericLinearFunction(np.eye(2), np.zeros(2))
    with pytest.raises(ValueError):
        f.a[0, 0] = 5.0


def test_numeric_linear_dimension_mismatch():
    with pytest.raises(ValueError):
        NumericLinearFunction(np.eye(2), np.zeros(3))
    with pytest.raises(ValueError):
        NumericLinearFunction(np.zeros(3), np.zeros(3))


def test_numeric_linear_str():
    f = NumericLinearFunction(np.array([[1.0, 2.0]]), np.array([3.0]), "g")
    text = str(f)
    assert text.startswith("g (linear function")
    assert "A = " in text and "b = " in text


def test_numeric_quadratic_function(rng):
    m = rng.normal(size=(3, 3))
    a = m + m.T
    b = rng.normal(size=3)
    f = NumericQuadraticFunction(a, b, 2.0)
    x = rng.normal(size=3)
    assert f(x)[0] == pytest.approx(0.5 * x @ a @ x + b @ x + 2.0)
    assert np.allclose(f.gradient(x), a @ x + b)
    assert np.allclose(f.hessian(x), a)
    assert np.allclose(f.hessian(rng.normal(size=3)), a)
    assert check_gradient(f, x)


def test_numeric_quadratic_requires_symmetric_matrix():
    with pytest.raises(ValueError, match="symmetric"):
        NumericQuadraticFunction(np.array([[1.0, 2.0], [0.0, 1.0]]), np.zeros(2))


def test_constant_function():
    f = ConstantFunction(3, np.array([1.0, -2.0]))
    x = np.array([4.0, 5.0, 6.0])
    assert np.array_equal(f(x), [1.0, -2.0])
    assert np.array_equal(f.jacobian(x), np.zeros((2, 3)))
    assert np.array_equal(f.hessian(x, 1), np.zeros((3, 3)))


def test_identity_function():
    f = IdentityFunction(np.array([1.0, 2.0]))
    x = np.array([3.0, -1.0])
    assert np.array_equal(f(x), [4.0, 1.0])
    assert np.array_equal(f.jacobian(x), np.eye(2))
    assert np.array_equal(f.gradient(x, 1), [0.0, 1.0])
