"""Lift a value-only function to the derivable tier with finite differences."""

from __future__ import annotations

from optconduit.diagnostics.gradient import DEFAULT_EPSILON, finite_difference_gradient

from .base import Array, DerivableFunction, Function


class FiniteDifferenceGradient(DerivableFunction):
    """
    Derivable wrapper around any :class:`Function`.

    Values are forwarded to the wrapped function; gradients are central
    differences with step ``epsilon``. Useful for handing a function that
    only knows its values to a bridge that requires gradients.
    """

    def __init__(self, function: Function, epsilon: float = DEFAULT_EPSILON) -> None:
        if epsilon <= 0:
            raise ValueError("epsilon must be positive")
        super().__init__(function.input_size, function.output_size, function.name)
        self._function = function
        self._epsilon = float(epsilon)

    @property
    def function(self) -> Function:
        return self._function

    @property
    def epsilon(self) -> float:
        return self._epsilon

    def impl_compute(self, x: Array) -> Array:
        return self._function.evaluate(x)

    def impl_gradient(self, x: Array, index: int) -> Array:
        return finite_difference_gradient(self._function, x, index, self._epsilon)

    def __str__(self) -> str:
        return f"{self._function} (finite differences, epsilon = {self._epsilon:g})"


__all__ = ["FiniteDifferenceGradient"]
