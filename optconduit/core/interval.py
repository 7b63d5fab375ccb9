"""
Bound intervals for arguments and constraint outputs.

An interval is a closed range ``[lower, upper]`` where either side may be
infinite. The collapsed case ``lower == upper`` encodes an equality. ``np.inf``
is used for open sides so that intervals compose with vectorized NumPy checks.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .errors import InvalidBoundError

INFINITY = math.inf


def _format_limit(value: float) -> str:
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return f"{value:g}"


@dataclass(frozen=True)
class Interval:
    """
    Closed interval ``[lower, upper]``.

    Raises:
        InvalidBoundError: If a limit is NaN or ``lower > upper``.
    """

    lower: float = -INFINITY
    upper: float = INFINITY

    def __post_init__(self) -> None:
        lower = float(self.lower)
        upper = float(self.upper)
        if math.isnan(lower) or math.isnan(upper):
            raise InvalidBoundError("Interval limits must not be NaN")
        if lower > upper:
            raise InvalidBoundError(
                f"Invalid interval: lower bound {lower:g} is greater than upper bound {upper:g}"
            )
        object.__setattr__(self, "lower", lower)
        object.__setattr__(self, "upper", upper)

    @property
    def is_free(self) -> bool:
        return math.isinf(self.lower) and math.isinf(self.upper)

    @property
    def is_equality(self) -> bool:
        return self.lower == self.upper

    @property
    def is_lower_bounded(self) -> bool:
        return not math.isinf(self.lower)

    @property
    def is_upper_bounded(self) -> bool:
        return not math.isinf(self.upper)

    def contains(self, value: float, tol: float = 0.0) -> bool:
        """Return True if ``value`` lies in the interval widened by ``tol``.

        NaN is never contained.
        """
        return self.lower - tol <= value <= self.upper + tol

    def distance(self, value: float) -> float:
        """Distance from ``value`` to the interval (0 when inside, inf for NaN)."""
        if math.isnan(value):
            return INFINITY
        if value < self.lower:
            return self.lower - value
        if value > self.upper:
            return value - self.upper
        return 0.0

    def __str__(self) -> str:
        return f"({_format_limit(self.lower)}, {_format_limit(self.upper)})"


def make_interval(lower: float, upper: float) -> Interval:
    return Interval(lower, upper)


def make_lower_interval(lower: float) -> Interval:
    """Interval bounded from below only."""
    return Interval(lower, INFINITY)


def make_upper_interval(upper: float) -> Interval:
    """Interval bounded from above only."""
    return Interval(-INFINITY, upper)


def make_equality(value: float) -> Interval:
    return Interval(value, value)


def make_infinite_interval() -> Interval:
    return Interval()


def interval_arrays(intervals) -> tuple[np.ndarray, np.ndarray]:
    """Split a sequence of intervals into ``(lower, upper)`` arrays."""
    lower = np.array([iv.lower for iv in intervals], dtype=float)
    upper = np.array([iv.upper for iv in intervals], dtype=float)
    return lower, upper


__all__ = [
    "INFINITY",
    "Interval",
    "make_interval",
    "make_lower_interval",
    "make_upper_interval",
    "make_equality",
    "make_infinite_interval",
    "interval_arrays",
]
