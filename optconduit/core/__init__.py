"""Core types shared by functions, problems and solvers."""

from .capability import Capability
from .errors import (
    BadGradientError,
    InvalidBoundError,
    InvalidProblemError,
    KeyNotFoundError,
    OptConduitError,
    OutOfRangeError,
    SolverContractError,
    TypeMismatchError,
)
from .interval import (
    INFINITY,
    Interval,
    interval_arrays,
    make_equality,
    make_infinite_interval,
    make_interval,
    make_lower_interval,
    make_upper_interval,
)

__all__ = [
    "Capability",
    "OptConduitError",
    "OutOfRangeError",
    "InvalidProblemError",
    "InvalidBoundError",
    "KeyNotFoundError",
    "TypeMismatchError",
    "SolverContractError",
    "BadGradientError",
    "INFINITY",
    "Interval",
    "interval_arrays",
    "make_interval",
    "make_lower_interval",
    "make_upper_interval",
    "make_equality",
    "make_infinite_interval",
]
