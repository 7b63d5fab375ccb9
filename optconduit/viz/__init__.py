"""Text reporting for problems and solver outcomes."""

from .summary import print_summary, problem_summary

__all__ = ["print_summary", "problem_summary"]
