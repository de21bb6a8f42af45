"""
Problem solving pipeline: normalize, classify, dispatch, time.

ProblemSolver.solve() never raises. Solver errors are turned into
failure Solutions by the solver base class, and anything unexpected
is logged and converted here.
"""

import logging
from datetime import datetime
from typing import Optional

from .classification import ProblemClassifier
from .input.normalizer import normalize
from .models import Solution, Topic, ErrorAnswer
from .solvers import GeneralSolver, SolverRegistry, get_default_registry
from .solvers.base import timed_solve
from .utils.errors import (
    EmptyProblemError,
    ErrorContext,
    ProblemSolverError,
    UnrecognizedProblemError,
)

logger = logging.getLogger(__name__)


class ProblemSolver:
    """
    Entry point for solving free-form math problems.

    Usage:
        solver = ProblemSolver()
        solution = solver.solve("2x + 3 = 7")
        print(solution.answer)
    """

    def __init__(
        self,
        registry: Optional[SolverRegistry] = None,
        classifier: Optional[ProblemClassifier] = None,
    ):
        self.registry = registry or get_default_registry()
        self.classifier = classifier or ProblemClassifier()

    def classify(self, problem: str) -> Topic:
        return self.classifier.classify(problem)

    def solve(self, problem: str, topic: Optional[Topic] = None) -> Solution:
        """
        Solve a problem, optionally forcing its topic.

        Args:
            problem: Raw problem text
            topic: Topic to use instead of classifying

        Returns:
            Solution; check solution.failed for the error sentinel
        """
        start = datetime.now()
        text = normalize(problem or "")

        if not text:
            return self._recover(problem or "", EmptyProblemError(), topic, start)

        try:
            if topic is None:
                topic = self.classifier.classify(text)

            solver = self.registry.get_solver(topic)
            if solver is None:
                solver = GeneralSolver()
            logger.debug("Dispatching %r (%s) to %s", text, topic.value, solver.name)

            solution, elapsed = timed_solve(solver, text)
        except Exception as e:
            logger.exception("Unexpected error while solving %r", text)
            ctx = ErrorContext.from_exception(e, context=f"solving {text!r}")
            return self._recover(
                text,
                UnrecognizedProblemError(text, reason=ctx.technical_details or ctx.message),
                topic,
                start,
                explanation=ctx.message,
            )

        solution.topic = topic
        solution.solve_time_seconds = elapsed
        solution.timestamp = start
        return solution

    def _recover(
        self,
        problem: str,
        error: ProblemSolverError,
        topic: Optional[Topic],
        start: datetime,
        explanation: Optional[str] = None,
    ) -> Solution:
        detail = error.user_message
        if error.technical_details:
            detail += f" ({error.technical_details})"
        return Solution(
            problem=problem,
            answer=ErrorAnswer(),
            explanation=explanation or error.user_message,
            topic=topic,
            solve_time_seconds=(datetime.now() - start).total_seconds(),
            timestamp=start,
            error=detail,
            error_type=type(error).__name__,
        )


_default_solver: Optional[ProblemSolver] = None


def get_default_solver() -> ProblemSolver:
    """Get the shared ProblemSolver instance."""
    global _default_solver
    if _default_solver is None:
        _default_solver = ProblemSolver()
    return _default_solver


def solve(problem: str, topic: Optional[Topic] = None) -> Solution:
    """Solve a problem with the shared ProblemSolver."""
    return get_default_solver().solve(problem, topic)


def classify(problem: str) -> Topic:
    """Classify a problem with the shared classifier."""
    return get_default_solver().classify(problem)
