"""
ProblemSolver - heuristic solver for free-form math problems.

Classifies a problem into a topic and solves it step by step.
"""

__version__ = "0.1.0"

from .engine import ProblemSolver, classify, solve
from .models import Solution, SolutionStep, Topic

__all__ = [
    "ProblemSolver",
    "Solution",
    "SolutionStep",
    "Topic",
    "classify",
    "solve",
    "__version__",
]
