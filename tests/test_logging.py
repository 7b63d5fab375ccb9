"""Tests for logging utilities."""

import logging
from io import StringIO

import numpy as np

from optconduit.logging import (
    configure_logging,
    get_logger,
    set_log_level,
)
from optconduit.problem import Problem
from optconduit.solver import DummySolver


def test_get_logger_returns_logger():
    """Test that get_logger returns a logger instance."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name.startswith("optconduit.")


def test_get_logger_caching():
    """Test that get_logger caches loggers."""
    logger1 = get_logger("test_module")
    logger2 = get_logger("test_module")
    assert logger1 is logger2


def test_get_logger_package_name_not_prefixed_twice():
    assert get_logger("optconduit.solver.core").name == "optconduit.solver.core"
    assert get_logger().name == "optconduit"


def test_set_log_level_string():
    """Test that set_log_level accepts string levels."""
    logger = get_logger("test_module")

    set_log_level("DEBUG")
    assert logger.level == logging.DEBUG

    set_log_level("ERROR")
    assert logger.level == logging.ERROR

    set_log_level(logging.WARNING)
    assert logger.level == logging.WARNING


def test_configure_logging():
    """Test configure_logging function."""
    stream = StringIO()
    try:
        configure_logging(level=logging.DEBUG, stream=stream)
        logger = get_logger("test_module")
        logger.debug("Debug message")
        assert "Debug message" in stream.getvalue()
        assert "optconduit.test_module" in stream.getvalue()
    finally:
        configure_logging(level=logging.WARNING)


def test_solver_lifecycle_is_logged(hs71_problem):
    """minimum() reports the solve and its outcome at debug level."""
    stream = StringIO()
    try:
        configure_logging(level=logging.DEBUG, stream=stream)
        DummySolver(hs71_problem).minimum()
        output = stream.getvalue()
        assert "Solving with DummySolver" in output
        assert "solver_error" in output
    finally:
        configure_logging(level=logging.WARNING)


def test_constraint_insertion_is_logged(hs71_functions):
    stream = StringIO()
    try:
        configure_logging(level=logging.DEBUG, stream=stream)
        objective, product, _ = hs71_functions
        problem = Problem(objective, starting_point=np.ones(4))
        problem.add_constraint(product, (25.0, np.inf))
        assert "Added constraint 0" in stream.getvalue()
    finally:
        configure_logging(level=logging.WARNING)


def test_logger_does_not_propagate():
    """Test that loggers don't propagate to root logger."""
    logger = get_logger("test_module")
    assert logger.propagate is False
