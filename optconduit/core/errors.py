"""Exception types raised for structural and programming errors.

Solving outcomes are never reported through these classes; they are data
(see :mod:`optconduit.solver.result`). Each class also derives from the
closest builtin so callers can catch either.
"""

from __future__ import annotations


class OptConduitError(Exception):
    """Root of every exception raised by Opt Conduit."""


class OutOfRangeError(OptConduitError, IndexError):
    """Argument size or output index does not match a function's dimensions."""


class InvalidProblemError(OptConduitError, ValueError):
    """A problem is ill-formed or was mutated after being frozen."""


class InvalidBoundError(OptConduitError, ValueError):
    """An interval has ``lower > upper`` or a NaN limit."""


class KeyNotFoundError(OptConduitError, KeyError):
    """A named parameter does not exist."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""


class TypeMismatchError(OptConduitError, TypeError):
    """A parameter was requested or stored with the wrong type."""


class SolverContractError(OptConduitError, RuntimeError):
    """A bridge returned from ``solve`` without storing an outcome."""


class BadGradientError(OptConduitError, AssertionError):
    """An analytic gradient disagrees with its finite-difference estimate."""

    def __init__(self, message: str, x=None, index: int = 0, max_delta: float = 0.0) -> None:
        super().__init__(message)
        self.x = x
        self.index = index
        self.max_delta = max_delta


__all__ = [
    "OptConduitError",
    "OutOfRangeError",
    "InvalidProblemError",
    "InvalidBoundError",
    "KeyNotFoundError",
    "TypeMismatchError",
    "SolverContractError",
    "BadGradientError",
]
