"""Opt Conduit - a NumPy-native plumbing layer between optimization problems and solvers."""

__version__ = "0.1.0"

# Core types
from .core import (
    BadGradientError,
    Capability,
    Interval,
    InvalidBoundError,
    InvalidProblemError,
    KeyNotFoundError,
    OptConduitError,
    OutOfRangeError,
    SolverContractError,
    TypeMismatchError,
    make_equality,
    make_infinite_interval,
    make_interval,
    make_lower_interval,
    make_upper_interval,
)

# Diagnostics
from .diagnostics import (
    check_gradient,
    check_gradient_and_raise,
    debug_context,
    finite_difference_gradient,
    is_debug_enabled,
    set_debug_enabled,
)

# Function hierarchy
from .function import (
    ConstantFunction,
    DerivableFunction,
    FiniteDifferenceGradient,
    Function,
    IdentityFunction,
    LinearFunction,
    NumericLinearFunction,
    NumericQuadraticFunction,
    QuadraticFunction,
    TwiceDerivableFunction,
    function_tier,
)
from .logging import configure_logging, get_logger, set_log_level

# Problem
from .problem import Constraint, Problem

# Solvers
from .solver import (
    DummyLastStateSolver,
    DummySolver,
    GenericSolver,
    NoSolution,
    Parameter,
    ParameterType,
    Result,
    ResultTag,
    ResultWithWarnings,
    Solver,
    SolverConfig,
    SolverError,
    SolverOutcome,
    SolverState,
    available_solvers,
    create_solver,
    register_solver,
)

# PyTorch integration
from .torch import TorchFunction

# Reporting
from .viz import print_summary, problem_summary

__all__ = [
    "__version__",
    # Core
    "Capability",
    "Interval",
    "make_interval",
    "make_lower_interval",
    "make_upper_interval",
    "make_equality",
    "make_infinite_interval",
    "OptConduitError",
    "OutOfRangeError",
    "InvalidProblemError",
    "InvalidBoundError",
    "KeyNotFoundError",
    "TypeMismatchError",
    "SolverContractError",
    "BadGradientError",
    # Functions
    "Function",
    "DerivableFunction",
    "TwiceDerivableFunction",
    "QuadraticFunction",
    "LinearFunction",
    "NumericLinearFunction",
    "NumericQuadraticFunction",
    "ConstantFunction",
    "IdentityFunction",
    "FiniteDifferenceGradient",
    "TorchFunction",
    "function_tier",
    # Problem
    "Problem",
    "Constraint",
    # Solvers
    "GenericSolver",
    "Solver",
    "ResultTag",
    "NoSolution",
    "Result",
    "ResultWithWarnings",
    "SolverError",
    "SolverOutcome",
    "SolverState",
    "Parameter",
    "ParameterType",
    "DummySolver",
    "DummyLastStateSolver",
    "SolverConfig",
    "register_solver",
    "available_solvers",
    "create_solver",
    # Diagnostics
    "finite_difference_gradient",
    "check_gradient",
    "check_gradient_and_raise",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
    # Reporting
    "problem_summary",
    "print_summary",
]
