"""Tests for autograd-backed functions."""

from __future__ import annotations

import numpy as np
import pytest
import torch

from optconduit.core import OutOfRangeError
from optconduit.function import TwiceDerivableFunction
from optconduit.torch import TorchFunction


def hs71_objective(x: torch.Tensor) -> torch.Tensor:
    return x[0] * x[3] * (x[0] + x[1] + x[2]) + x[2]


def test_torch_function_matches_analytic_hs71(hs71_functions, rng) -> None:
    """Autograd derivatives agree with the hand-written HS71 objective."""
    analytic = hs71_functions[0]
    f = TorchFunction(hs71_objective, 4, 1, "hs71")
    assert isinstance(f, TwiceDerivableFunction)
    for _ in range(3):
        x = rng.uniform(1.0, 5.0, size=4)
        assert np.allclose(f(x), analytic(x))
        assert np.allclose(f.gradient(x), analytic.gradient(x))
        assert np.allclose(f.hessian(x), analytic.hessian(x))


def test_torch_function_vector_output() -> None:
    """Jacobian and per-output hessians of a two-output map."""

    def fn(x: torch.Tensor) -> torch.Tensor:
        return torch.stack([x[0] ** 2 * x[1], torch.sin(x[1])])

    f = TorchFunction(fn, 2, 2)
    x = np.array([1.5, 0.5])
    jac = f.jacobian(x)
    expected = np.array([[2 * 1.5 * 0.5, 1.5**2], [0.0, np.cos(0.5)]])
    assert np.allclose(jac, expected)
    assert np.allclose(f.gradient(x, 1), expected[1])
    assert np.allclose(f.hessian(x, 0), [[2 * 0.5, 2 * 1.5], [2 * 1.5, 0.0]])
    assert np.allclose(f.hessian(x, 1), [[0.0, 0.0], [0.0, -np.sin(0.5)]])


def test_torch_function_checks_output_size() -> None:
    """A callable returning the wrong number of outputs is rejected."""
    f = TorchFunction(lambda x: x * 2.0, 3, 1)
    with pytest.raises(OutOfRangeError):
        f.evaluate(np.ones(3))


def test_torch_function_returns_float64() -> None:
    f = TorchFunction(lambda x: (x**2).sum(), 2)
    assert f(np.array([1.0, 2.0])).dtype == np.float64
    assert f.gradient(np.array([1.0, 2.0])).dtype == np.float64
