"""Problem summaries and text reporting.

Every reportable object (functions, problems, outcomes, solvers and solver
states) renders itself through ``str()``; this module adds a dictionary view of
a problem and a printer for any of them.
"""

from __future__ import annotations

import sys
from typing import IO, Any, Dict, Optional

from optconduit.function.base import function_tier
from optconduit.problem import Problem


def problem_summary(problem: Problem) -> Dict[str, Any]:
    """
    Generate a summary dictionary for a problem.

    Parameters
    ----------
    problem:
        Problem to analyze.

    Returns
    -------
    Dict[str, Any]
        Dictionary containing:
        - input_size: int
        - objective: str
        - objective_tier: str
        - n_constraints: int
        - constraint_outputs: int
        - n_equalities: int
        - n_bounded_arguments: int
        - has_starting_point: bool
        - frozen: bool
    """
    n_equalities = sum(
        1 for c in problem.constraints for bound in c.bounds if bound.is_equality
    )
    n_bounded = sum(1 for bound in problem.argument_bounds if not bound.is_free)
    return {
        "input_size": problem.input_size,
        "objective": str(problem.function),
        "objective_tier": function_tier(problem.objective_type).__name__,
        "n_constraints": len(problem.constraints),
        "constraint_outputs": problem.constraint_output_size,
        "n_equalities": n_equalities,
        "n_bounded_arguments": n_bounded,
        "has_starting_point": problem.starting_point is not None,
        "frozen": problem.is_frozen,
    }


def print_summary(obj: object, file: Optional[IO[str]] = None) -> None:
    """
    Pretty-print a function, problem, outcome, solver or solver state.

    This is a utility function for human-readable output, so it uses print()
    intentionally. Library code never calls it.

    Parameters
    ----------
    obj:
        Object to render with ``str()``.
    file:
        File-like object to write to. If None, writes to sys.stdout.
    """
    if file is None:
        file = sys.stdout
    print(str(obj), file=file)


__all__ = ["problem_summary", "print_summary"]
