"""Mutable working record of one solve attempt."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Type, TypeVar

import numpy as np

from optconduit.core.errors import OutOfRangeError

from .parameter import Parameter, ParameterStore

if TYPE_CHECKING:
    from optconduit.problem import Problem

T = TypeVar("T")


class SolverState:
    """
    Iterate, optional cost and constraint violation, and named diagnostics.

    A state belongs to a single solve attempt. Bridges update it while
    iterating and pass it to the iteration callback; callers must not keep it
    past that attempt.

    Parameters
    ----------
    problem:
        Problem being solved; fixes the size of ``x``.

    Example
    -------
    >>> state = SolverState(problem)           # doctest: +SKIP
    >>> state.x[:] = problem.starting_point    # doctest: +SKIP
    >>> state.cost = 3.5                       # doctest: +SKIP
    >>> state.set_parameter("step", 0.1, "line search step")  # doctest: +SKIP
    >>> state.get_parameter("step", float)     # doctest: +SKIP
    0.1
    """

    def __init__(self, problem: "Problem") -> None:
        self._x = np.zeros(problem.input_size)
        self._cost: Optional[float] = None
        self._constraint_violation: Optional[float] = None
        self._parameters = ParameterStore()

    @property
    def x(self) -> np.ndarray:
        """Current iterate; the returned array may be modified in place."""
        return self._x

    @x.setter
    def x(self, value: np.ndarray) -> None:
        arr = np.array(value, dtype=float).reshape(-1)
        if arr.shape != self._x.shape:
            raise OutOfRangeError(
                f"Iterate has {arr.shape[0]} entries, expected {self._x.shape[0]}"
            )
        self._x[:] = arr

    @property
    def cost(self) -> Optional[float]:
        """Objective value at ``x``, or None if not computed."""
        return self._cost

    @cost.setter
    def cost(self, value: Optional[float]) -> None:
        self._cost = None if value is None else float(value)

    @property
    def constraint_violation(self) -> Optional[float]:
        """Scalar measure of constraint violation at ``x``, or None."""
        return self._constraint_violation

    @constraint_violation.setter
    def constraint_violation(self, value: Optional[float]) -> None:
        self._constraint_violation = None if value is None else float(value)

    @property
    def parameters(self) -> ParameterStore:
        """All named parameters, in insertion order."""
        return self._parameters

    def set_parameter(self, key: str, value: Any, description: str = "") -> Parameter:
        return self._parameters.set_parameter(key, value, description)

    def get_parameter(self, key: str, type_: Type[T]) -> T:
        """
        Return the parameter ``key`` stored as ``type_``.

        Raises:
            KeyNotFoundError: If ``key`` is absent.
            TypeMismatchError: If the stored type differs from ``type_``.
        """
        return self._parameters.get_parameter(key, type_)

    def update_parameter(self, key: str, value: Any) -> None:
        self._parameters.update_parameter(key, value)

    def __str__(self) -> str:
        lines = ["Solver state:", f"  x: {np.array2string(self._x)}"]
        if self._cost is not None:
            lines.append(f"  Cost: {self._cost:g}")
        if self._constraint_violation is not None:
            lines.append(f"  Constraint violation: {self._constraint_violation:g}")
        if self._parameters:
            lines.append("  Parameters:")
            lines.extend(self._parameters.format_lines(indent="    "))
        return "\n".join(lines)


__all__ = ["SolverState"]
