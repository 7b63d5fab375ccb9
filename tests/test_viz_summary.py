"""Tests for problem summaries and printing."""

from io import StringIO

import numpy as np

from optconduit.solver import DummyLastStateSolver
from optconduit.viz import print_summary, problem_summary


def test_problem_summary_hs71(hs71_problem) -> None:
    summary = problem_summary(hs71_problem)
    assert summary["input_size"] == 4
    assert summary["objective_tier"] == "TwiceDerivableFunction"
    assert summary["n_constraints"] == 2
    assert summary["constraint_outputs"] == 2
    assert summary["n_equalities"] == 1
    assert summary["n_bounded_arguments"] == 4
    assert summary["has_starting_point"] is True
    assert summary["frozen"] is False


def test_problem_summary_reports_frozen(hs71_problem) -> None:
    DummyLastStateSolver(hs71_problem)
    assert problem_summary(hs71_problem)["frozen"] is True


def test_print_summary_writes_str(hs71_problem) -> None:
    stream = StringIO()
    print_summary(hs71_problem, file=stream)
    assert stream.getvalue() == str(hs71_problem) + "\n"

    stream = StringIO()
    solver = DummyLastStateSolver(hs71_problem)
    solver.minimum()
    print_summary(solver.result, file=stream)
    output = stream.getvalue()
    assert output.startswith("Solver error:")
    assert np.array2string(np.array([1.0, 5.0, 5.0, 1.0])) in output
