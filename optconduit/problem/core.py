"""
Optimization problem aggregate.

A :class:`Problem` holds one objective function, an ordered list of
constraints (each with one bound interval and one scale per output) and one
bound interval and scale per argument. The problem is declared for an
objective tier ``F`` and a closed set of constraint tiers ``C``; a solver for
the class of problems ``(F, C)`` may request exactly that much derivative
information and no more.

Every structural check happens when the data is supplied, so a solver never
discovers an ill-formed problem halfway through solving.

Example
-------
>>> import numpy as np
>>> from optconduit.function import NumericLinearFunction
>>> from optconduit.core import make_lower_interval
>>> f = NumericLinearFunction(np.array([[1.0, 1.0]]), np.zeros(1))
>>> pb = Problem(f)
>>> pb.add_constraint(NumericLinearFunction(np.array([[1.0, -1.0]]), np.zeros(1)),
...                   make_lower_interval(0.0))
>>> len(pb.constraints)
1
"""

from __future__ import annotations

import copy
import math
import numbers
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple, Type

import numpy as np

from optconduit.core.errors import InvalidProblemError, OutOfRangeError
from optconduit.core.interval import Interval
from optconduit.function.base import Function, function_tier
from optconduit.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Constraint:
    """A constraint function with one bound and one scale per output."""

    function: Function
    bounds: Tuple[Interval, ...]
    scales: Tuple[float, ...]

    @property
    def output_size(self) -> int:
        return self.function.output_size

    def violation(self, x: np.ndarray) -> float:
        """Sum of distances of the outputs at ``x`` to their intervals."""
        value = self.function.evaluate(x)
        return float(sum(iv.distance(v) for iv, v in zip(self.bounds, value)))


def _check_scale(value: float, what: str) -> float:
    scale = float(value)
    if not math.isfinite(scale) or scale <= 0.0:
        raise InvalidProblemError(f"{what} must be positive and finite, got {value!r}")
    return scale


def _as_interval(value, what: str) -> Interval:
    if isinstance(value, Interval):
        return value
    if isinstance(value, tuple) and len(value) == 2:
        return Interval(*value)
    raise InvalidProblemError(f"{what} must be an Interval or a (lower, upper) pair")


class Problem:
    """
    Optimization problem over an objective of tier ``objective_type`` and
    constraints drawn from ``constraint_types``.

    Args:
        function: Objective function; its output size is normally 1.
        objective_type: Tier class the objective is declared at. Defaults to
            the most informative tier of ``function``.
        constraint_types: Closed tuple of tier classes permitted for
            constraints. Defaults to ``(objective_type,)``.
        argument_bounds: ``n`` intervals (default: all free).
        argument_scales: ``n`` positive scales (default: all 1).
        starting_point: Optional initial guess of length ``n``.
        argument_names: Optional ``n`` display names.

    Raises:
        InvalidProblemError: On any count, tier or dimension mismatch.
        InvalidBoundError: If a ``(lower, upper)`` pair is inverted.
    """

    def __init__(
        self,
        function: Function,
        *,
        objective_type: Optional[Type[Function]] = None,
        constraint_types: Optional[Sequence[Type[Function]]] = None,
        argument_bounds: Optional[Sequence[Interval]] = None,
        argument_scales: Optional[Sequence[float]] = None,
        starting_point: Optional[np.ndarray] = None,
        argument_names: Optional[Sequence[str]] = None,
    ) -> None:
        if not isinstance(function, Function):
            raise InvalidProblemError(
                f"Objective must be a Function, got {type(function).__name__}"
            )
        self._objective_type = objective_type or function_tier(function)
        self._check_tier_class(self._objective_type, "objective_type")
        if not isinstance(function, self._objective_type):
            raise InvalidProblemError(
                f"Objective {function!s} is not a {self._objective_type.__name__}"
            )
        if constraint_types is None:
            constraint_types = (self._objective_type,)
        self._constraint_types = tuple(constraint_types)
        if not self._constraint_types:
            raise InvalidProblemError("constraint_types must not be empty")
        for tier in self._constraint_types:
            self._check_tier_class(tier, "constraint_types")

        self._function = function
        self._constraints: list[Constraint] = []
        self._frozen = False

        n = function.input_size
        if argument_bounds is None:
            self._argument_bounds = [Interval() for _ in range(n)]
        else:
            bounds = [_as_interval(b, "argument bound") for b in argument_bounds]
            if len(bounds) != n:
                raise InvalidProblemError(
                    f"Expected {n} argument bounds, got {len(bounds)}"
                )
            self._argument_bounds = bounds

        if argument_scales is None:
            self._argument_scales = [1.0] * n
        else:
            scales = [_check_scale(s, "argument scale") for s in argument_scales]
            if len(scales) != n:
                raise InvalidProblemError(
                    f"Expected {n} argument scales, got {len(scales)}"
                )
            self._argument_scales = scales

        self._starting_point: Optional[np.ndarray] = None
        if starting_point is not None:
            self.starting_point = starting_point

        self._argument_names: Optional[Tuple[str, ...]] = None
        if argument_names is not None:
            names = tuple(str(a) for a in argument_names)
            if len(names) != n:
                raise InvalidProblemError(
                    f"Expected {n} argument names, got {len(names)}"
                )
            self._argument_names = names

    @staticmethod
    def _check_tier_class(tier, what: str) -> None:
        if not (isinstance(tier, type) and issubclass(tier, Function)):
            raise InvalidProblemError(f"{what} must contain Function subclasses, got {tier!r}")

    def _check_mutable(self) -> None:
        if self._frozen:
            raise InvalidProblemError(
                "Problem is frozen: it is owned by a solver and cannot be modified"
            )

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def function(self) -> Function:
        return self._function

    @property
    def input_size(self) -> int:
        return self._function.input_size

    @property
    def objective_type(self) -> Type[Function]:
        return self._objective_type

    @property
    def constraint_types(self) -> Tuple[Type[Function], ...]:
        return self._constraint_types

    @property
    def constraints(self) -> Tuple[Constraint, ...]:
        return tuple(self._constraints)

    @property
    def constraint_output_size(self) -> int:
        """Total number of constraint outputs."""
        return sum(c.output_size for c in self._constraints)

    @property
    def argument_bounds(self) -> Tuple[Interval, ...]:
        return tuple(self._argument_bounds)

    @property
    def argument_scales(self) -> Tuple[float, ...]:
        return tuple(self._argument_scales)

    @property
    def argument_names(self) -> Optional[Tuple[str, ...]]:
        return self._argument_names

    @property
    def starting_point(self) -> Optional[np.ndarray]:
        if self._starting_point is None:
            return None
        return self._starting_point.copy()

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Mutation (rejected once frozen)
    # ------------------------------------------------------------------

    @starting_point.setter
    def starting_point(self, value: Optional[np.ndarray]) -> None:
        self._check_mutable()
        if value is None:
            self._starting_point = None
            return
        point = np.array(value, dtype=float).reshape(-1)
        if point.shape[0] != self.input_size:
            raise InvalidProblemError(
                f"Starting point has {point.shape[0]} entries, expected {self.input_size}"
            )
        self._starting_point = point

    def set_argument_bound(self, index: int, bound: Interval) -> None:
        self._check_mutable()
        self._check_argument_index(index)
        self._argument_bounds[index] = _as_interval(bound, "argument bound")

    def set_argument_bounds(self, bounds: Sequence[Interval]) -> None:
        """Replace all ``n`` argument bounds at once."""
        self._check_mutable()
        new_bounds = [_as_interval(b, "argument bound") for b in bounds]
        if len(new_bounds) != self.input_size:
            raise InvalidProblemError(
                f"Expected {self.input_size} argument bounds, got {len(new_bounds)}"
            )
        self._argument_bounds = new_bounds

    def set_argument_scale(self, index: int, scale: float) -> None:
        self._check_mutable()
        self._check_argument_index(index)
        self._argument_scales[index] = _check_scale(scale, "argument scale")

    def _check_argument_index(self, index: int) -> None:
        if not 0 <= index < self.input_size:
            raise InvalidProblemError(
                f"Argument index {index} out of range for input size {self.input_size}"
            )

    def add_constraint(
        self,
        function: Function,
        bounds: Interval | Sequence[Interval],
        scales: Optional[float | Sequence[float]] = None,
    ) -> None:
        """
        Append a constraint.

        Args:
            function: Constraint function; must be an instance of one of the
                problem's ``constraint_types`` with input size ``n``.
            bounds: One interval per output. A single interval is accepted for
                one-output constraints.
            scales: One scale per output (default: all 1). A single number is
                accepted for one-output constraints.

        Raises:
            InvalidProblemError: On tier, dimension or count mismatch, or if
                the problem is frozen.
        """
        self._check_mutable()
        if not isinstance(function, Function):
            raise InvalidProblemError(
                f"Constraint must be a Function, got {type(function).__name__}"
            )
        if not isinstance(function, self._constraint_types):
            allowed = ", ".join(t.__name__ for t in self._constraint_types)
            raise InvalidProblemError(
                f"Constraint {function!s} is not one of the permitted types ({allowed})"
            )
        if function.input_size != self.input_size:
            raise InvalidProblemError(
                f"Constraint input size {function.input_size} does not match "
                f"problem input size {self.input_size}"
            )
        m = function.output_size

        if isinstance(bounds, (Interval, tuple)) and not _is_interval_sequence(bounds):
            bounds = [bounds]
        intervals = tuple(_as_interval(b, "constraint bound") for b in bounds)
        if len(intervals) != m:
            raise InvalidProblemError(
                f"Constraint has {m} output(s) but {len(intervals)} bound(s) were given"
            )

        if scales is None:
            scale_values: Tuple[float, ...] = (1.0,) * m
        else:
            if isinstance(scales, numbers.Real):
                scales = [scales]
            scale_values = tuple(_check_scale(s, "constraint scale") for s in scales)
        if len(scale_values) != m:
            raise InvalidProblemError(
                f"Constraint has {m} output(s) but {len(scale_values)} scale(s) were given"
            )

        self._constraints.append(Constraint(function, intervals, scale_values))
        logger.debug("Added constraint %d: %s", len(self._constraints) - 1, function)

    def freeze(self) -> None:
        """Forbid any further structural change."""
        self._frozen = True

    def _unfreeze(self) -> None:
        # Only for a factory discarding the solver it has just built.
        self._frozen = False

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------

    def copy(self) -> "Problem":
        """Unfrozen copy sharing the (immutable) function objects."""
        other = copy.copy(self)
        other._constraints = list(self._constraints)
        other._argument_bounds = list(self._argument_bounds)
        other._argument_scales = list(self._argument_scales)
        other._starting_point = self.starting_point
        other._frozen = False
        return other

    def widen(
        self,
        objective_type: Optional[Type[Function]] = None,
        constraint_types: Optional[Sequence[Type[Function]]] = None,
    ) -> "Problem":
        """
        Return a copy declared at less (or equally) informative tiers.

        Each requested tier must be a base class of the tier it replaces: the
        new objective type must be a base of the current one, and every
        current constraint type must derive from one of the new constraint
        types. Converting towards a more informative tier is rejected.

        Raises:
            InvalidProblemError: If a requested tier is more informative than
                the declared one.
        """
        new_objective = objective_type or self._objective_type
        self._check_tier_class(new_objective, "objective_type")
        if not issubclass(self._objective_type, new_objective):
            raise InvalidProblemError(
                f"Cannot convert objective from {self._objective_type.__name__} "
                f"to the more specific {new_objective.__name__}"
            )

        new_constraints = (
            tuple(constraint_types) if constraint_types is not None else self._constraint_types
        )
        if not new_constraints:
            raise InvalidProblemError("constraint_types must not be empty")
        for tier in new_constraints:
            self._check_tier_class(tier, "constraint_types")
        for tier in self._constraint_types:
            if not any(issubclass(tier, target) for target in new_constraints):
                raise InvalidProblemError(
                    f"Cannot convert constraint type {tier.__name__}: no requested "
                    "type is at least as general"
                )

        other = self.copy()
        other._objective_type = new_objective
        other._constraint_types = new_constraints
        return other

    # ------------------------------------------------------------------
    # Evaluation helpers
    # ------------------------------------------------------------------

    def constraint_violation(self, x: np.ndarray) -> float:
        """
        Total distance of ``x`` and of every constraint output to its bounds.

        A NaN argument or constraint value counts as infinitely far.

        Raises:
            OutOfRangeError: If ``x`` is not a vector of length ``n``.
        """
        arg = np.array(x, dtype=float)
        if arg.shape != (self.input_size,):
            raise OutOfRangeError(
                f"Argument of shape {arg.shape} does not match input size {self.input_size}"
            )
        total = sum(iv.distance(v) for iv, v in zip(self._argument_bounds, arg))
        return float(total + sum(c.violation(arg) for c in self._constraints))

    def is_feasible(self, x: np.ndarray, tol: float = 1e-8) -> bool:
        return self.constraint_violation(x) <= tol

    def __str__(self) -> str:
        lines = ["Problem:", f"  {self._function}"]
        if self._argument_names is not None:
            lines.append(f"  Argument names: {', '.join(self._argument_names)}")
        lines.append(
            "  Argument bounds: " + ", ".join(str(b) for b in self._argument_bounds)
        )
        lines.append(
            "  Argument scales: " + ", ".join(f"{s:g}" for s in self._argument_scales)
        )
        if self._constraints:
            lines.append(f"  Number of constraints: {len(self._constraints)}")
        for i, constraint in enumerate(self._constraints):
            lines.append(f"  Constraint {i}")
            lines.append(f"    {constraint.function}")
            lines.append("    Bounds: " + ", ".join(str(b) for b in constraint.bounds))
            lines.append("    Scales: " + ", ".join(f"{s:g}" for s in constraint.scales))
            if self._starting_point is not None:
                value = constraint.function.evaluate(self._starting_point)
                satisfied = all(
                    iv.contains(v) for iv, v in zip(constraint.bounds, value)
                )
                status = "satisfied" if satisfied else "not satisfied"
                lines.append(f"    Initial value: {np.array2string(value)} ({status})")
        if self._starting_point is not None:
            lines.append(f"  Starting point: {np.array2string(self._starting_point)}")
            start_value = self._function.evaluate(self._starting_point)
            lines.append(f"  Starting value: {np.array2string(start_value)}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"Problem(function={self._function!r}, "
            f"constraints={len(self._constraints)}, frozen={self._frozen})"
        )


def _is_interval_sequence(value: Iterable) -> bool:
    # A (lower, upper) pair of numbers is one interval, not a sequence of them.
    if isinstance(value, Interval):
        return False
    return all(isinstance(v, (Interval, tuple)) for v in value)


__all__ = ["Constraint", "Problem"]
