"""Minimal bridges used to exercise the solver plumbing.

Neither bridge solves anything. They are the smallest complete examples of
the bridge contract and a starting point for writing a real one.
"""

from __future__ import annotations

import numpy as np

from optconduit.logging import get_logger

from .core import Solver
from .result import Result, SolverError
from .state import SolverState

logger = get_logger(__name__)


class DummySolver(Solver):
    """Bridge that always fails."""

    def solve(self) -> None:
        self.result = SolverError("The dummy solver always fails.")


class DummyLastStateSolver(Solver):
    """
    Bridge that records one iteration and then fails.

    It fills a :class:`SolverState` at the starting point (zeros when the
    problem has none), hands it to the iteration callback once and stores a
    :class:`SolverError` whose ``last_state`` is the point it stopped at.
    """

    def solve(self) -> None:
        problem = self.problem
        state = SolverState(problem)
        if problem.starting_point is not None:
            state.x = problem.starting_point

        x = state.x.copy()
        value = problem.function.evaluate(x)
        state.cost = float(value[0])
        state.constraint_violation = problem.constraint_violation(x)
        state.set_parameter("dummy-parameter", 42.0, "dummy parameter")
        state.set_parameter("dummy-iteration", 0, "iteration counter")

        self.notify_iteration(state)
        logger.debug("Dummy iteration:\n%s", state)

        constraint_values = [c.function.evaluate(x) for c in problem.constraints]
        last = Result(
            x,
            value,
            constraints=np.concatenate(constraint_values) if constraint_values else np.zeros(0),
        )
        self.result = SolverError("The dummy solver always fails.", last_state=last)


__all__ = ["DummySolver", "DummyLastStateSolver"]
