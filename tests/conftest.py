"""Pytest configuration and shared fixtures for Opt Conduit tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- The Hock-Schittkowski problem 71 (objective and both constraints)
"""

import os

import numpy as np
import pytest
import torch

from optconduit.core import make_interval, make_lower_interval
from optconduit.function import TwiceDerivableFunction
from optconduit.problem import Problem

HS71_START = np.array([1.0, 5.0, 5.0, 1.0])


class HS71Objective(TwiceDerivableFunction):
    """x₀ x₃ (x₀ + x₁ + x₂) + x₂"""

    def __init__(self):
        super().__init__(4, 1, "x₀ * x₃ * (x₀ + x₁ + x₂) + x₂")

    def impl_compute(self, x):
        return np.array([x[0] * x[3] * (x[0] + x[1] + x[2]) + x[2]])

    def impl_gradient(self, x, index):
        return np.array([
            x[0] * x[3] + x[3] * (x[0] + x[1] + x[2]),
            x[0] * x[3],
            x[0] * x[3] + 1.0,
            x[0] * (x[0] + x[1] + x[2]),
        ])

    def impl_hessian(self, x, index):
        return np.array([
            [2 * x[3], x[3], x[3], 2 * x[0] + x[1] + x[2]],
            [x[3], 0.0, 0.0, x[0]],
            [x[3], 0.0, 0.0, x[0]],
            [2 * x[0] + x[1] + x[2], x[0], x[0], 0.0],
        ])


class HS71Product(TwiceDerivableFunction):
    """x₀ x₁ x₂ x₃"""

    def __init__(self):
        super().__init__(4, 1, "x₀ * x₁ * x₂ * x₃")

    def impl_compute(self, x):
        return np.array([x[0] * x[1] * x[2] * x[3]])

    def impl_gradient(self, x, index):
        return np.array([
            x[1] * x[2] * x[3],
            x[0] * x[2] * x[3],
            x[0] * x[1] * x[3],
            x[0] * x[1] * x[2],
        ])

    def impl_hessian(self, x, index):
        return np.array([
            [0.0, x[2] * x[3], x[1] * x[3], x[1] * x[2]],
            [x[2] * x[3], 0.0, x[0] * x[3], x[0] * x[2]],
            [x[1] * x[3], x[0] * x[3], 0.0, x[0] * x[1]],
            [x[1] * x[2], x[0] * x[2], x[0] * x[1], 0.0],
        ])


class HS71SquaredNorm(TwiceDerivableFunction):
    """x₀² + x₁² + x₂² + x₃²"""

    def __init__(self):
        super().__init__(4, 1, "x₀² + x₁² + x₂² + x₃²")

    def impl_compute(self, x):
        return np.array([x @ x])

    def impl_gradient(self, x, index):
        return 2.0 * x

    def impl_hessian(self, x, index):
        return 2.0 * np.eye(4)


def build_hs71_problem() -> Problem:
    problem = Problem(
        HS71Objective(),
        argument_bounds=[make_interval(1.0, 5.0)] * 4,
        starting_point=HS71_START,
    )
    problem.add_constraint(HS71Product(), make_lower_interval(25.0), 1.0)
    problem.add_constraint(HS71SquaredNorm(), make_interval(40.0, 40.0), 1.0)
    return problem


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set global random seeds for reproducibility."""
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    np.random.seed(seed)
    torch.manual_seed(seed)


@pytest.fixture
def hs71_problem() -> Problem:
    """Fresh, unfrozen Hock-Schittkowski 71 problem."""
    return build_hs71_problem()


@pytest.fixture
def hs71_functions():
    """The objective and the two constraint functions of HS71."""
    return HS71Objective(), HS71Product(), HS71SquaredNorm()
