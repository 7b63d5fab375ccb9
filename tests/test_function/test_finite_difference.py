import numpy as np
import pytest

from optconduit.core import BadGradientError, OutOfRangeError
from optconduit.diagnostics import (
    check_gradient,
    check_gradient_and_raise,
    finite_difference_gradient,
    gradient_error,
)
from optconduit.function import DerivableFunction, FiniteDifferenceGradient, Function


class Rosenbrock(Function):
    def __init__(self):
        super().__init__(2, 1, "rosenbrock")

    def impl_compute(self, x):
        return np.array([(1 - x[0]) ** 2 + 100 * (x[1] - x[0] ** 2) ** 2])


class WrongGradient(DerivableFunction):
    def __init__(self):
        super().__init__(2, 1, "wrong")

    def impl_compute(self, x):
        return np.array([x[0] ** 2 + x[1] ** 2])

    def impl_gradient(self, x, index):
        return np.array([x[0], x[1]])


def rosen_grad(x):
    return np.array([
        -2 * (1 - x[0]) - 400 * x[0] * (x[1] - x[0] ** 2),
        200 * (x[1] - x[0] ** 2),
    ])


def test_finite_difference_gradient_matches_analytic(rng):
    f = Rosenbrock()
    for _ in range(5):
        x = rng.uniform(-1.5, 1.5, size=2)
        assert np.allclose(finite_difference_gradient(f, x), rosen_grad(x), atol=1e-4)


def test_finite_difference_wrapper_is_derivable(rng):
    f = FiniteDifferenceGradient(Rosenbrock())
    assert isinstance(f, DerivableFunction)
    assert f.name == "rosenbrock"
    x = rng.uniform(-1.0, 1.0, size=2)
    assert np.allclose(f(x), Rosenbrock()(x))
    assert np.allclose(f.jacobian(x)[0], rosen_grad(x), atol=1e-4)
    assert "finite differences" in str(f)


def test_finite_difference_invalid_arguments():
    with pytest.raises(ValueError):
        FiniteDifferenceGradient(Rosenbrock(), epsilon=0.0)
    with pytest.raises(OutOfRangeError):
        finite_difference_gradient(Rosenbrock(), np.zeros(2), index=1)


def test_hs71_gradients_match_finite_differences(hs71_functions, rng):
    for function in hs71_functions:
        for _ in range(5):
            x = rng.uniform(1.0, 5.0, size=4)
            assert check_gradient(function, x, threshold=1e-4)


def test_check_gradient_detects_wrong_gradient():
    f = WrongGradient()
    x = np.array([1.0, 2.0])
    assert not check_gradient(f, x)
    assert gradient_error(f, x) == pytest.approx(2.0, rel=1e-4)
    with pytest.raises(BadGradientError) as excinfo:
        check_gradient_and_raise(f, x)
    assert excinfo.value.index == 0
    assert np.array_equal(excinfo.value.x, x)
