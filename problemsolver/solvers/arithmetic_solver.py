"""
Arithmetic solver: evaluate a plain numeric expression.
"""

import re
from typing import List

from .base import BaseSolver, format_step_value
from ..models import NumberAnswer, Solution, SolutionStep, Topic
from ..utils.errors import EmptyExpressionError
from ..utils.evaluator import evaluate

# Everything except digits, + - * / ( ) and the decimal point
_NON_ARITHMETIC_RE = re.compile(r"[^0-9+\-*/().]")


class ArithmeticSolver(BaseSolver):
    """
    Strips the problem down to digits and operators, then evaluates it
    with standard precedence ("2 + 3 * 4" is 14, not 20).
    """

    name = "ArithmeticSolver"
    topic = Topic.ARITHMETIC
    failure_message = "The arithmetic expression could not be evaluated."

    def _solve(self, problem: str, steps: List[SolutionStep]) -> Solution:
        expression = _NON_ARITHMETIC_RE.sub("", problem)
        if not expression:
            raise EmptyExpressionError(problem)

        self._add_step(steps, "Original expression", expression, "The given expression")

        result = evaluate(expression)
        shown = format_step_value(result)
        self._add_step(
            steps,
            "Evaluate",
            f"{expression} = {shown}",
            "Multiplication and division before addition and subtraction",
        )

        return Solution(
            problem=problem,
            answer=NumberAnswer(result),
            steps=steps,
            explanation=f"The expression {expression} evaluates to {shown}.",
        )
