"""
Base solver interface and the topic registry.

All solvers inherit from BaseSolver and return a Solution; solver-level
errors become failure Solutions here so they never reach the caller.
"""

import logging
import math
import time
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from ..models import Solution, SolutionStep, Topic, ErrorAnswer
from ..utils.errors import ProblemSolverError

logger = logging.getLogger(__name__)


class BaseSolver(ABC):
    """
    Abstract base class for topic solvers.

    Subclasses implement _solve() for their topic and raise
    ProblemSolverError subclasses on failure.
    """

    # Human-readable name for this solver
    name: str = "BaseSolver"

    # Topic this solver is registered under
    topic: Topic = Topic.GENERIC

    # Explanation carried by a failure Solution from this solver
    failure_message: str = "An error occurred while solving the problem."

    @abstractmethod
    def _solve(self, problem: str, steps: List[SolutionStep]) -> Solution:
        """
        Solve a normalized problem.

        Args:
            problem: Normalized problem text
            steps: Step list to append to; kept on failure

        Returns:
            Solution with answer, steps and explanation
        """
        pass

    def solve(self, problem: str) -> Solution:
        """
        Solve the problem, converting solver errors into a failure Solution.
        """
        steps: List[SolutionStep] = []
        try:
            return self._solve(problem, steps)
        except ProblemSolverError as e:
            logger.warning("%s failed on %r: %s", self.name, problem, e)
            return self._failure(problem, steps, e)

    def _failure(
        self,
        problem: str,
        steps: List[SolutionStep],
        error: ProblemSolverError,
        explanation: Optional[str] = None,
    ) -> Solution:
        """Build the recovered failure Solution."""
        detail = error.user_message
        if error.technical_details:
            detail += f" ({error.technical_details})"
        return Solution(
            problem=problem,
            answer=ErrorAnswer(),
            steps=steps,
            explanation=explanation or self.failure_message,
            error=detail,
            error_type=type(error).__name__,
        )

    def _add_step(
        self,
        steps: List[SolutionStep],
        description: str,
        expression: str,
        explanation: str = "",
    ) -> SolutionStep:
        """Append the next numbered step."""
        step = SolutionStep(
            step_number=len(steps) + 1,
            description=description,
            expression=expression,
            explanation=explanation,
        )
        steps.append(step)
        return step


def format_step_value(value: float) -> str:
    """Render a number inside step text: whole numbers without .0, others to 10 significant digits."""
    if math.isfinite(value) and value == int(value) and abs(value) < 1e15:
        return str(int(value))
    return f"{value:.10g}"


def timed_solve(solver: BaseSolver, problem: str):
    """
    Wrapper that times a solve.

    Returns (solution, elapsed_seconds)
    """
    start = time.perf_counter()
    solution = solver.solve(problem)
    elapsed = time.perf_counter() - start
    return solution, elapsed


class SolverRegistry:
    """
    Registry of topic solvers.

    Maps each Topic to one solver; topics without a solver go to the
    fallback solver.
    """

    def __init__(self, fallback: Optional[BaseSolver] = None):
        self._solvers: Dict[Topic, BaseSolver] = {}
        self._fallback = fallback

    def register(self, solver: BaseSolver, topic: Optional[Topic] = None):
        """Register a solver under its own topic (or the one given)."""
        self._solvers[topic or solver.topic] = solver

    def set_fallback(self, solver: BaseSolver):
        self._fallback = solver

    def get_solver(self, topic: Topic) -> Optional[BaseSolver]:
        """
        Get the solver for a topic, or the fallback if none is registered.
        """
        return self._solvers.get(topic, self._fallback)

    @property
    def solvers(self) -> List[BaseSolver]:
        """Get all registered solvers."""
        return list(self._solvers.values())
