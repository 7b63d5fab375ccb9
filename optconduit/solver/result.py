"""
Outcome of a solve attempt.

The outcome is a closed union of four variants, each tagged with a
:class:`ResultTag`:

- :class:`NoSolution`: nothing has been solved yet. Internal to the solver;
  never handed to callers of :meth:`GenericSolver.minimum`.
- :class:`Result`: success.
- :class:`ResultWithWarnings`: success with non-fatal advisory messages.
- :class:`SolverError`: failure, with an explanation.

Consumers are expected to dispatch on every variant, for instance::

    match solver.minimum():
        case Result() | ResultWithWarnings() as res:
            use(res.x)
        case SolverError(message=msg):
            report(msg)
        case NoSolution():
            raise AssertionError("unreachable")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

import numpy as np


class ResultTag(Enum):
    """Discriminant of :data:`SolverOutcome`."""

    NO_SOLUTION = "no_solution"
    RESULT = "result"
    RESULT_WITH_WARNINGS = "result_with_warnings"
    SOLVER_ERROR = "solver_error"


def _vector(value) -> np.ndarray:
    out = np.atleast_1d(np.array(value, dtype=float)).reshape(-1)
    out.setflags(write=False)
    return out


@dataclass(frozen=True)
class NoSolution:
    """Placeholder stored before the first solve and after a reset."""

    tag = ResultTag.NO_SOLUTION
    success = False

    def __str__(self) -> str:
        return "No solution"


@dataclass(frozen=True, eq=False)
class _Solution:
    x: np.ndarray
    value: np.ndarray
    constraints: np.ndarray = field(default_factory=lambda: np.zeros(0))
    lambda_: np.ndarray = field(default_factory=lambda: np.zeros(0))

    success = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", _vector(self.x))
        object.__setattr__(self, "value", _vector(self.value))
        object.__setattr__(self, "constraints", _vector(self.constraints))
        object.__setattr__(self, "lambda_", _vector(self.lambda_))

    @property
    def input_size(self) -> int:
        return self.x.shape[0]

    @property
    def output_size(self) -> int:
        return self.value.shape[0]

    def _payload_lines(self) -> list[str]:
        lines = [
            f"  x: {np.array2string(self.x)}",
            f"  Value: {np.array2string(self.value)}",
        ]
        if self.constraints.size:
            lines.append(f"  Constraints values: {np.array2string(self.constraints)}")
        if self.lambda_.size:
            lines.append(f"  Lambda: {np.array2string(self.lambda_)}")
        return lines

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return (
            np.array_equal(self.x, other.x)
            and np.array_equal(self.value, other.value)
            and np.array_equal(self.constraints, other.constraints)
            and np.array_equal(self.lambda_, other.lambda_)
        )

    __hash__ = None


@dataclass(frozen=True, eq=False)
class Result(_Solution):
    """
    Successful outcome.

    Attributes:
        x: Solution point ``x*``.
        value: Objective value at ``x*``.
        constraints: Concatenated constraint values at ``x*`` (may be empty).
        lambda_: Lagrange multipliers if the back-end reports them.
    """

    tag = ResultTag.RESULT

    def __str__(self) -> str:
        return "\n".join(["Result:"] + self._payload_lines())


@dataclass(frozen=True, eq=False)
class ResultWithWarnings(_Solution):
    """
    Successful outcome with advisory messages (e.g. minor numerical trouble).

    ``warnings`` is an ordered, non-empty tuple of free-text messages.

    Raises:
        ValueError: If ``warnings`` is empty.
    """

    warnings: Tuple[str, ...] = ()

    tag = ResultTag.RESULT_WITH_WARNINGS

    def __post_init__(self) -> None:
        super().__post_init__()
        if isinstance(self.warnings, str):
            warnings = (self.warnings,)
        else:
            warnings = tuple(str(w) for w in self.warnings)
        if not warnings:
            raise ValueError("ResultWithWarnings requires at least one warning")
        object.__setattr__(self, "warnings", warnings)

    def __eq__(self, other: object) -> bool:
        equal = super().__eq__(other)
        if equal is NotImplemented or not equal:
            return equal
        return self.warnings == other.warnings

    __hash__ = None

    def __str__(self) -> str:
        lines = ["Result with warnings:"] + self._payload_lines()
        lines.append("  Warnings:")
        lines.extend(f"    - {w}" for w in self.warnings)
        return "\n".join(lines)


@dataclass(frozen=True)
class SolverError:
    """
    Failed outcome.

    Attributes:
        message: Human-readable explanation.
        last_state: Last point reached by the back-end, when it has one.
    """

    message: str
    last_state: Optional[Result] = None

    tag = ResultTag.SOLVER_ERROR
    success = False

    def __str__(self) -> str:
        lines = [f"Solver error: {self.message}"]
        if self.last_state is not None:
            lines.append("  Last state:")
            lines.extend("  " + line for line in str(self.last_state).splitlines())
        return "\n".join(lines)


SolverOutcome = Union[NoSolution, Result, ResultWithWarnings, SolverError]

TERMINAL_OUTCOMES = (Result, ResultWithWarnings, SolverError)


__all__ = [
    "ResultTag",
    "NoSolution",
    "Result",
    "ResultWithWarnings",
    "SolverError",
    "SolverOutcome",
    "TERMINAL_OUTCOMES",
]
