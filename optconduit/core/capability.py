"""Differentiability tiers of functions."""

from __future__ import annotations

from enum import IntEnum


class Capability(IntEnum):
    """
    Maximum derivative information a function promises.

    Tiers are ordered: a function of a given tier may be used wherever a
    lower or equal tier is expected.
    """

    VALUE = 0
    GRADIENT = 1
    HESSIAN = 2

    def satisfies(self, required: "Capability") -> bool:
        """Return True if this tier provides at least ``required``."""
        return self >= required


__all__ = ["Capability"]
