"""
General-purpose fallback solver.

Evaluates the whole normalized problem as a numeric expression. Used
for the GENERIC topic and for any topic without a registered solver.
"""

from typing import List

from .base import BaseSolver, format_step_value
from ..models import NumberAnswer, Solution, SolutionStep, Topic
from ..utils.errors import ExpressionEvaluationError, UnrecognizedProblemError
from ..utils.evaluator import evaluate


class GeneralSolver(BaseSolver):
    """
    Last-resort solver: raw numeric evaluation of the input.

    On failure the Solution carries a single step asking the user to
    rephrase the problem.
    """

    name = "GeneralSolver"
    topic = Topic.GENERIC
    failure_message = "Unknown problem type. Please state the problem more precisely."

    def _solve(self, problem: str, steps: List[SolutionStep]) -> Solution:
        try:
            result = evaluate(problem)
        except ExpressionEvaluationError as e:
            self._add_step(
                steps,
                "Error",
                problem,
                "Could not determine the problem type. Please rephrase it.",
            )
            raise UnrecognizedProblemError(problem, reason=e.user_message) from e

        shown = format_step_value(result)
        self._add_step(steps, "Evaluate", f"{problem} = {shown}", "Expression evaluated")

        return Solution(
            problem=problem,
            answer=NumberAnswer(result),
            steps=steps,
            explanation=f"Result: {shown}",
        )
