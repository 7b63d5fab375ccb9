"""Optimization problem: objective, constraints, bounds and scales."""

from .core import Constraint, Problem

__all__ = ["Constraint", "Problem"]
