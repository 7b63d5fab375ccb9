"""Solver lifecycle, result variants, solver state and bridge registry."""

from .core import GenericSolver, IterationCallback, Solver
from .dummy import DummyLastStateSolver, DummySolver
from .factory import (
    SolverConfig,
    available_solvers,
    create_solver,
    register_solver,
    unregister_solver,
)
from .parameter import Parameter, ParameterStore, ParameterType
from .result import (
    TERMINAL_OUTCOMES,
    NoSolution,
    Result,
    ResultTag,
    ResultWithWarnings,
    SolverError,
    SolverOutcome,
)
from .state import SolverState

__all__ = [
    # Lifecycle
    "GenericSolver",
    "Solver",
    "IterationCallback",
    # Outcomes
    "ResultTag",
    "NoSolution",
    "Result",
    "ResultWithWarnings",
    "SolverError",
    "SolverOutcome",
    "TERMINAL_OUTCOMES",
    # State
    "SolverState",
    "Parameter",
    "ParameterStore",
    "ParameterType",
    # Bridges
    "DummySolver",
    "DummyLastStateSolver",
    "SolverConfig",
    "register_solver",
    "unregister_solver",
    "available_solvers",
    "create_solver",
]
