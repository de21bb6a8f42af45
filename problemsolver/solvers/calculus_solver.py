"""
Calculus solver for derivatives and a small table of integrals.

Derivatives go to the symbolic differentiation collaborator; integrals
are looked up, not integrated.
"""

import re
from typing import List

from .base import BaseSolver
from ..models import ExpressionAnswer, Solution, SolutionStep, Topic
from ..utils.constants import INTEGRAL_FALLBACK, INTEGRAL_TABLE
from ..utils.errors import (
    CalculusError,
    ExpressionEvaluationError,
    UnknownCalculusOperationError,
)
from ..utils.evaluator import derivative

# Everything up to and including the derivative keyword
_DERIVATIVE_PREFIX_RE = re.compile(r"^.*?(?:derivative\s+of|derivative|d/dx)\s*")
_INTEGRAL_PREFIX_RE = re.compile(r"^.*?(?:integral\s+of|integral)\s*")
_DX_RE = re.compile(r"\bdx\b")


def _strip_wrapping_parens(expr: str) -> str:
    """Remove one pair of parentheses that encloses the whole expression."""
    if not (expr.startswith("(") and expr.endswith(")")):
        return expr

    depth = 0
    for i, ch in enumerate(expr):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            # Closed before the end: "(x+1)*(x-1)" is not wrapped
            if depth == 0 and i < len(expr) - 1:
                return expr
    return expr[1:-1].strip()


def extract_derivative_expression(problem: str) -> str:
    """
    "find the derivative of x**3" -> "x**3", "d/dx (sin(x))" -> "sin(x)"
    """
    expr = _DERIVATIVE_PREFIX_RE.sub("", problem, count=1).strip()
    return _strip_wrapping_parens(expr)


def extract_integrand(problem: str) -> str:
    """
    "integral of x^2 dx" -> "x**2", "∫ sin(x) dx" -> "sin(x)"

    Spaces are removed so the result can be used as a table key.
    """
    expr = problem.replace("∫", "")
    expr = _INTEGRAL_PREFIX_RE.sub("", expr, count=1)
    expr = _DX_RE.sub("", expr)
    return expr.replace(" ", "")


class CalculusSolver(BaseSolver):
    """
    Solver for calculus operations.

    Handles:
    - Derivatives ("derivative of ...", "d/dx ...")
    - Indefinite integrals of x, x², x³, 1/x, sin x, cos x, eˣ

    Limits are classified here but not solved.
    """

    name = "CalculusSolver"
    topic = Topic.CALCULUS
    failure_message = "The calculus problem could not be solved."

    def _solve(self, problem: str, steps: List[SolutionStep]) -> Solution:
        if "derivative" in problem or "d/dx" in problem:
            return self._solve_derivative(problem, steps)

        if "∫" in problem or "integral" in problem:
            return self._solve_integral(problem, steps)

        raise UnknownCalculusOperationError(problem)

    def _solve_derivative(self, problem: str, steps: List[SolutionStep]) -> Solution:
        """Differentiate with respect to x."""
        expr = extract_derivative_expression(problem)

        self._add_step(steps, "Find the derivative", f"d/dx({expr})", "The given function")

        try:
            result = derivative(expr, "x")
        except ExpressionEvaluationError as e:
            raise CalculusError(
                "The derivative could not be computed.",
                technical_details=e.user_message,
            ) from e

        self._add_step(steps, "Result", result, "Derivative found")

        return Solution(
            problem=problem,
            answer=ExpressionAnswer(result),
            steps=steps,
            explanation=f"The derivative of {expr} is {result}",
        )

    def _solve_integral(self, problem: str, steps: List[SolutionStep]) -> Solution:
        """Look up the antiderivative in the table."""
        expr = extract_integrand(problem)

        self._add_step(steps, "Find the integral", f"∫ {expr} dx", "The given function")

        result = INTEGRAL_TABLE.get(expr, INTEGRAL_FALLBACK)
        self._add_step(steps, "Result", result, "Indefinite integral")

        return Solution(
            problem=problem,
            answer=ExpressionAnswer(result),
            steps=steps,
            explanation=f"∫ {expr} dx = {result}",
        )
