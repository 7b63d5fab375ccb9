"""Finite-difference gradient estimates and checks.

These helpers are for tests and for users validating hand-written derivatives;
nothing in the problem or solver layers calls them implicitly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from optconduit.core.errors import BadGradientError, OutOfRangeError

if TYPE_CHECKING:
    from optconduit.function import DerivableFunction, Function

DEFAULT_EPSILON = 1e-6
DEFAULT_THRESHOLD = 1e-4


def finite_difference_gradient(
    function: "Function", x: np.ndarray, index: int = 0, epsilon: float = DEFAULT_EPSILON
) -> np.ndarray:
    """Central-difference gradient of output ``index`` of ``function`` at ``x``.

    Parameters
    ----------
    function:
        Any function; only ``evaluate`` is used.
    x:
        Point where the gradient is approximated.
    index:
        Output component.
    epsilon:
        Perturbation size.
    """
    if epsilon <= 0:
        raise ValueError("epsilon must be positive")
    if not 0 <= index < function.output_size:
        raise OutOfRangeError(
            f"Output index {index} out of range for function with "
            f"{function.output_size} output(s)"
        )
    x = np.asarray(x, dtype=float).copy()
    grad = np.zeros_like(x)
    for j in range(x.size):
        ej = np.zeros_like(x)
        ej[j] = epsilon
        f_plus = function.evaluate(x + ej)[index]
        f_minus = function.evaluate(x - ej)[index]
        grad[j] = (f_plus - f_minus) / (2.0 * epsilon)
    return grad


def gradient_error(
    function: "DerivableFunction", x: np.ndarray, index: int = 0, epsilon: float = DEFAULT_EPSILON
) -> float:
    """Max absolute difference between analytic and finite-difference gradients."""
    analytic = function.gradient(x, index)
    approx = finite_difference_gradient(function, x, index, epsilon)
    return float(np.max(np.abs(analytic - approx))) if analytic.size else 0.0


def check_gradient(
    function: "DerivableFunction",
    x: np.ndarray,
    index: int = 0,
    threshold: float = DEFAULT_THRESHOLD,
    epsilon: float = DEFAULT_EPSILON,
) -> bool:
    """Return True if the analytic gradient matches within ``threshold``."""
    return gradient_error(function, x, index, epsilon) <= threshold


def check_gradient_and_raise(
    function: "DerivableFunction",
    x: np.ndarray,
    index: int = 0,
    threshold: float = DEFAULT_THRESHOLD,
    epsilon: float = DEFAULT_EPSILON,
) -> None:
    """
    Raise :class:`BadGradientError` if the analytic gradient is off.

    The exception carries the point, the output index and the largest
    component-wise deviation.
    """
    delta = gradient_error(function, x, index, epsilon)
    if delta > threshold:
        raise BadGradientError(
            f"Gradient of {function.name or type(function).__name__!r} "
            f"(output {index}) deviates from finite differences by {delta:.3e} "
            f"(threshold {threshold:g})",
            x=np.asarray(x, dtype=float).copy(),
            index=index,
            max_delta=delta,
        )


__all__ = [
    "DEFAULT_EPSILON",
    "DEFAULT_THRESHOLD",
    "finite_difference_gradient",
    "gradient_error",
    "check_gradient",
    "check_gradient_and_raise",
]
