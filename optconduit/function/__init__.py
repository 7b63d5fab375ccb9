"""Function hierarchy: value, gradient and hessian tiers plus numeric leaves."""

from .base import (
    TIERS,
    Array,
    DerivableFunction,
    Function,
    LinearFunction,
    QuadraticFunction,
    TwiceDerivableFunction,
    function_tier,
)
from .finite_difference import FiniteDifferenceGradient
from .numeric import (
    ConstantFunction,
    IdentityFunction,
    NumericLinearFunction,
    NumericQuadraticFunction,
)

__all__ = [
    "Array",
    "Function",
    "DerivableFunction",
    "TwiceDerivableFunction",
    "QuadraticFunction",
    "LinearFunction",
    "TIERS",
    "function_tier",
    "NumericLinearFunction",
    "NumericQuadraticFunction",
    "ConstantFunction",
    "IdentityFunction",
    "FiniteDifferenceGradient",
]
