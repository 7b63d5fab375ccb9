"""Registry and factory for solver bridges.

The registry maps names to bridge classes only, the way plugins are looked up
by name. It never holds solver instances, problems or outcomes: every
:func:`create_solver` call builds a fresh solver whose cached result belongs to
that instance alone.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Type

from optconduit.core.errors import TypeMismatchError
from optconduit.logging import get_logger
from optconduit.problem import Problem

from .core import Solver
from .dummy import DummyLastStateSolver, DummySolver
from .parameter import Parameter

logger = get_logger(__name__)

_REGISTRY: Dict[str, Type[Solver]] = {}


@dataclass(frozen=True)
class SolverConfig:
    """
    Configuration for creating a solver bridge.

    Args:
        name: Registered bridge name (case-insensitive), e.g. "dummy".
        parameters: Values copied into the solver's parameter store. Each value
            must be a supported parameter type (float, int, bool, str or a
            NumPy vector).
    """

    name: str
    parameters: Dict[str, Any] = field(default_factory=dict)


def register_solver(name: str, cls: Type[Solver], *, overwrite: bool = False) -> None:
    """
    Register a bridge under ``name``.

    Raises:
        TypeError: If ``cls`` is not a :class:`Solver` subclass.
        ValueError: If ``name`` is taken and ``overwrite`` is False.
    """
    if not (isinstance(cls, type) and issubclass(cls, Solver)):
        raise TypeError(f"{cls!r} is not a Solver subclass")
    key = name.lower()
    if key in _REGISTRY and not overwrite and _REGISTRY[key] is not cls:
        raise ValueError(f"A solver is already registered under {name!r}")
    _REGISTRY[key] = cls


def unregister_solver(name: str) -> None:
    _REGISTRY.pop(name.lower(), None)


def available_solvers() -> List[str]:
    return sorted(_REGISTRY)


def create_solver(config: SolverConfig, problem: Problem) -> Solver:
    """
    Build the bridge named in ``config`` around ``problem``.

    Every configured value is checked before the solver is built, so a bad
    configuration leaves ``problem`` exactly as it was (in particular, not
    frozen).

    Args:
        config: Bridge name and parameters.
        problem: Problem to solve; frozen by the solver.

    Returns:
        The constructed solver, with ``config.parameters`` stored in its
        parameter store.

    Raises:
        ValueError: If no bridge is registered under ``config.name``.
        TypeMismatchError: If a parameter value has an unsupported type, or a
            type different from the default the bridge declares for it.
    """
    key = config.name.lower()
    if key not in _REGISTRY:
        raise ValueError(
            f"Unsupported solver name '{config.name}'. "
            f"Supported names: {available_solvers()}"
        )
    params = {name: Parameter(value) for name, value in config.parameters.items()}

    was_frozen = problem.is_frozen
    solver = _REGISTRY[key](problem)
    try:
        for name, param in params.items():
            if name in solver.parameters:
                solver.parameters.update_parameter(name, param.value)
            else:
                solver.parameters[name] = param
    except TypeMismatchError:
        # The solver is discarded, so the caller keeps an editable problem.
        if not was_frozen:
            problem._unfreeze()
        raise
    logger.debug("Created solver %r (%s)", config.name, type(solver).__name__)
    return solver


register_solver("dummy", DummySolver)
register_solver("dummy-laststate", DummyLastStateSolver)


__all__ = [
    "SolverConfig",
    "register_solver",
    "unregister_solver",
    "available_solvers",
    "create_solver",
]
