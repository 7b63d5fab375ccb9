"""
Solver lifecycle.

:class:`GenericSolver` memoizes the outcome of :meth:`solve`: the first call to
:meth:`~GenericSolver.minimum` runs it, later calls return the cached outcome
until :meth:`~GenericSolver.reset`. :class:`Solver` adds ownership of a frozen
:class:`~optconduit.problem.Problem` and an optional iteration callback.

Bridges subclass :class:`Solver` and implement ``solve`` by converting the
problem to their back-end, running it and assigning exactly one of
:class:`Result`, :class:`ResultWithWarnings` or :class:`SolverError` to
``self.result``. Back-end failures (non-convergence, infeasibility, numerical
blow-up) are reported as :class:`SolverError`, not raised.

Example
-------
>>> class Evaluate(Solver):          # doctest: +SKIP
...     def solve(self):
...         x = self.problem.starting_point
...         self.result = Result(x, self.problem.function(x))
>>> solver = Evaluate(problem)      # doctest: +SKIP
>>> solver.minimum().tag            # doctest: +SKIP
<ResultTag.RESULT: 'result'>
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, ClassVar, Optional, Tuple, Type

from optconduit.core.errors import SolverContractError
from optconduit.function.base import Function
from optconduit.logging import get_logger
from optconduit.problem import Problem

from .parameter import ParameterStore
from .result import TERMINAL_OUTCOMES, NoSolution, SolverOutcome
from .state import SolverState

logger = get_logger(__name__)

IterationCallback = Callable[[Problem, SolverState], None]


class GenericSolver(ABC):
    """
    Root of the solver hierarchy: memoizing ``solve`` / ``minimum`` / ``reset``.

    The cached outcome is private to the instance. Solving the same problem
    concurrently requires independent solver instances.
    """

    def __init__(self) -> None:
        self._result: SolverOutcome = NoSolution()
        self._parameters = ParameterStore()

    @abstractmethod
    def solve(self) -> None:
        """Run the back-end and assign the outcome to ``self.result``."""
        raise NotImplementedError

    @property
    def result(self) -> SolverOutcome:
        """Cached outcome (``NoSolution`` until a solve completes)."""
        return self._result

    @result.setter
    def result(self, outcome: SolverOutcome) -> None:
        if not isinstance(outcome, TERMINAL_OUTCOMES):
            raise TypeError(
                "solve() must store a Result, ResultWithWarnings or SolverError, "
                f"got {type(outcome).__name__}; use reset() to clear the outcome"
            )
        self._result = outcome

    @property
    def has_solution(self) -> bool:
        return not isinstance(self._result, NoSolution)

    @property
    def parameters(self) -> ParameterStore:
        """Solver configuration exposed by the bridge."""
        return self._parameters

    def minimum(self) -> SolverOutcome:
        """
        Return the outcome, solving first if nothing is cached.

        Returns:
            A ``Result``, ``ResultWithWarnings`` or ``SolverError``; never
            ``NoSolution``.

        Raises:
            SolverContractError: If ``solve`` returned without storing an
                outcome.
        """
        if isinstance(self._result, NoSolution):
            logger.debug("Solving with %s", type(self).__name__)
            self.solve()
            if isinstance(self._result, NoSolution):
                raise SolverContractError(
                    f"{type(self).__name__}.solve() returned without storing an outcome"
                )
            logger.debug("%s finished: %s", type(self).__name__, self._result.tag.value)
        return self._result

    get_minimum = minimum

    def reset(self) -> None:
        """Forget the cached outcome; the next ``minimum`` solves again."""
        self._result = NoSolution()


class Solver(GenericSolver):
    """
    Solver for one class of problems.

    A bridge declares the class of problems it handles with the class
    attributes ``objective_type`` and ``constraint_types`` (None accepts the
    problem's own declaration). A problem declared at more informative tiers
    is converted with :meth:`Problem.widen`; a less informative one is
    rejected.

    The problem passed in is frozen when the solver is built and the solver
    keeps it (or its widened copy) for its whole lifetime.

    Args:
        problem: Problem to solve.

    Raises:
        InvalidProblemError: If the problem cannot be expressed at the
            solver's tiers.
    """

    objective_type: ClassVar[Optional[Type[Function]]] = None
    constraint_types: ClassVar[Optional[Tuple[Type[Function], ...]]] = None

    def __init__(self, problem: Problem) -> None:
        super().__init__()
        if not isinstance(problem, Problem):
            raise TypeError(f"Expected a Problem, got {type(problem).__name__}")
        objective_type = self.objective_type or problem.objective_type
        constraint_types = self.constraint_types or problem.constraint_types
        if (
            objective_type is problem.objective_type
            and tuple(constraint_types) == problem.constraint_types
        ):
            self._problem = problem
        else:
            self._problem = problem.widen(objective_type, constraint_types)
        problem.freeze()
        self._problem.freeze()
        self._iteration_callback: Optional[IterationCallback] = None

    @property
    def problem(self) -> Problem:
        return self._problem

    @property
    def iteration_callback(self) -> Optional[IterationCallback]:
        return self._iteration_callback

    def set_iteration_callback(self, callback: Optional[IterationCallback]) -> None:
        """Register ``callback(problem, state)``, called by the bridge per iteration."""
        if callback is not None and not callable(callback):
            raise TypeError("Iteration callback must be callable")
        self._iteration_callback = callback

    def notify_iteration(self, state: SolverState) -> None:
        """Hand ``state`` to the iteration callback, if one is registered."""
        if self._iteration_callback is not None:
            self._iteration_callback(self._problem, state)

    def __str__(self) -> str:
        lines = [f"{type(self).__name__}:"]
        lines.extend("  " + line for line in str(self._problem).splitlines())
        if self._parameters:
            lines.append("  Parameters:")
            lines.extend(self._parameters.format_lines(indent="    "))
        lines.extend("  " + line for line in str(self._result).splitlines())
        return "\n".join(lines)


__all__ = ["GenericSolver", "Solver", "IterationCallback"]
