"""Debug mode for Opt Conduit.

In debug mode, derivative calls verify the structural promises of their tier:
hessians must be symmetric and every jacobian row must equal the gradient of
the same output. The checks cost extra evaluations, so they are off unless
``OPTCONDUIT_DEBUG`` is set or :func:`debug_context` enables them.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

import numpy as np

from .core import assert_symmetric

if TYPE_CHECKING:
    from optconduit.function import DerivableFunction

_DEBUG_ENV_VAR = "OPTCONDUIT_DEBUG"
_TRUE_VALUES = ("1", "true", "yes", "on")


def _flag_from_env() -> bool:
    return os.getenv(_DEBUG_ENV_VAR, "0").strip().lower() in _TRUE_VALUES


_debug_enabled: bool = _flag_from_env()


def is_debug_enabled() -> bool:
    """Return whether tier checks run on derivative calls."""
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """Globally enable or disable the tier checks."""
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Temporarily enable or disable the tier checks.

    Example
    -------
    >>> with debug_context(True):
    ...     # hessians are checked for symmetry inside this block
    ...     pass
    """
    global _debug_enabled
    prev = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = prev


def check_hessian(hessian: np.ndarray) -> None:
    """In debug mode, raise ``ValueError`` unless ``hessian`` is symmetric."""
    if _debug_enabled:
        assert_symmetric(hessian)


def check_jacobian_rows(
    function: "DerivableFunction", x: np.ndarray, jacobian: np.ndarray
) -> None:
    """In debug mode, raise ``ValueError`` if a jacobian row differs from its gradient."""
    if not _debug_enabled:
        return
    for i in range(jacobian.shape[0]):
        if not np.allclose(jacobian[i], function.gradient(x, i)):
            label = repr(function.name) if function.name else type(function).__name__
            raise ValueError(f"Jacobian row {i} of {label} does not match its gradient")


__all__ = [
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    "check_hessian",
    "check_jacobian_rows",
]
