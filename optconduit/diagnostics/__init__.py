"""Diagnostics and debugging utilities for Opt Conduit."""

from .core import assert_symmetric, is_symmetric
from .debug_mode import (
    check_hessian,
    check_jacobian_rows,
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)
from .gradient import (
    check_gradient,
    check_gradient_and_raise,
    finite_difference_gradient,
    gradient_error,
)

__all__ = [
    "is_symmetric",
    "assert_symmetric",
    "finite_difference_gradient",
    "gradient_error",
    "check_gradient",
    "check_gradient_and_raise",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    "check_hessian",
    "check_jacobian_rows",
]
