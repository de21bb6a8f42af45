"""
Algebra solver for linear and quadratic equations in x.

Recognizes two fixed shapes, ax + b = c and ax² + bx + c = 0, and
derives the answer step by step. Anything else gets one generic
SymPy solve attempt before the problem is reported as unsolvable.
"""

import logging
import math
from typing import List

from .base import BaseSolver, format_step_value
from ..input.parser import (
    LinearCoefficients,
    QuadraticCoefficients,
    is_quadratic,
    parse_linear,
    parse_quadratic,
)
from ..models import (
    EquationRoots,
    NoRealRoots,
    NumberAnswer,
    QuadraticRoots,
    Solution,
    SolutionStep,
    Topic,
)
from ..utils.constants import ANSWER_PRECISION, FLOAT_TOLERANCE
from ..utils.errors import (
    CoefficientParseError,
    ExpressionEvaluationError,
    MalformedEquationError,
    UnsolvableEquationError,
    ZeroCoefficientError,
)
from ..utils.evaluator import solve_equation

logger = logging.getLogger(__name__)


def _signed(value: float) -> str:
    """Render a term with its sign: 3 -> "+ 3", -3 -> "- 3"."""
    sign = "-" if value < 0 else "+"
    return f"{sign} {format_step_value(abs(value))}"


class AlgebraSolver(BaseSolver):
    """
    Solver for single-variable equations.

    Handles:
    - Quadratic equations ax² + bx + c = 0 (discriminant and roots)
    - Linear equations ax + b = c (isolation, division, verification)
    - Anything else via one SymPy solve() attempt
    """

    name = "AlgebraSolver"
    topic = Topic.ALGEBRA
    failure_message = "The algebraic equation could not be solved."

    def _solve(self, problem: str, steps: List[SolutionStep]) -> Solution:
        try:
            if is_quadratic(problem):
                return self.solve_quadratic(problem, parse_quadratic(problem), steps)
            return self.solve_linear(problem, parse_linear(problem), steps)
        except (CoefficientParseError, MalformedEquationError) as e:
            logger.debug("Shape parse failed (%s), trying generic solve", e)
            return self._solve_generic(problem, steps)

    def solve_linear(
        self, problem: str, coeffs: LinearCoefficients, steps: List[SolutionStep]
    ) -> Solution:
        """Solve ax + b = c in four steps."""
        a, b, c = coeffs.a, coeffs.b, coeffs.c
        if a == 0:
            raise ZeroCoefficientError("x")

        fa, fc = format_step_value(a), format_step_value(c)
        self._add_step(
            steps,
            "Original equation",
            f"{fa}x {_signed(b)} = {fc}",
            "Linear equation of the form ax + b = c",
        )

        isolated = c - b
        self._add_step(
            steps,
            "Move the constant to the right side",
            f"{fa}x = {format_step_value(isolated)}",
            f"{fc} - ({format_step_value(b)}) = {format_step_value(isolated)}",
        )

        x = isolated / a
        self._add_step(
            steps,
            f"Divide both sides by {fa}",
            f"x = {format_step_value(x)}",
            f"{format_step_value(isolated)} / {fa} = {format_step_value(x)}",
        )

        check = a * x + b
        verified = math.isclose(check, c, rel_tol=FLOAT_TOLERANCE, abs_tol=FLOAT_TOLERANCE)
        self._add_step(
            steps,
            "Verify",
            f"{fa}({format_step_value(x)}) {_signed(b)} = {format_step_value(check)}",
            "✓ Correct" if verified else f"⚠ Check gives {format_step_value(check)}, expected {fc}",
        )

        return Solution(
            problem=problem,
            answer=NumberAnswer(x),
            steps=steps,
            explanation=f"The value of x is {format_step_value(x)}.",
        )

    def solve_quadratic(
        self, problem: str, coeffs: QuadraticCoefficients, steps: List[SolutionStep]
    ) -> Solution:
        """
        Solve ax² + bx + c = 0 with the discriminant.

        Three steps when there are no real roots, five otherwise.
        """
        a, b, c = coeffs.a, coeffs.b, coeffs.c
        if a == 0:
            raise ZeroCoefficientError("x²")

        fa, fb, fc = format_step_value(a), format_step_value(b), format_step_value(c)
        self._add_step(
            steps,
            "Quadratic equation",
            f"{fa}x² {_signed(b)}x {_signed(c)} = 0",
            "Standard form: ax² + bx + c = 0",
        )

        discriminant = b * b - 4 * a * c
        fd = format_step_value(discriminant)
        self._add_step(
            steps,
            "Discriminant",
            f"D = b² - 4ac = ({fb})² - 4({fa})({fc}) = {fd}",
            "Discriminant formula",
        )

        if discriminant < 0:
            self._add_step(
                steps,
                "Nature of the roots",
                f"D = {fd} < 0",
                "A negative discriminant means there are no real roots",
            )
            return Solution(
                problem=problem,
                answer=NoRealRoots(discriminant),
                steps=steps,
                explanation="D < 0, so the equation has no real roots.",
            )

        if discriminant == 0:
            nature = "D = 0, so there is one repeated root"
        else:
            nature = "D > 0, so there are two distinct real roots"
        self._add_step(steps, "Nature of the roots", f"D = {fd}", nature)

        sqrt_d = math.sqrt(discriminant)
        self._add_step(
            steps,
            "Square root of the discriminant",
            f"√D = √{fd} = {format_step_value(sqrt_d)}",
            "Needed by the quadratic formula",
        )

        x1 = (-b + sqrt_d) / (2 * a)
        x2 = (-b - sqrt_d) / (2 * a)
        p = ANSWER_PRECISION
        self._add_step(
            steps,
            "Roots",
            f"x₁ = {x1:.{p}f}, x₂ = {x2:.{p}f}",
            "By the formula x = (-b ± √D) / 2a",
        )

        if discriminant == 0:
            explanation = f"The equation has a single root: x = {x1:.{p}f}"
        else:
            explanation = f"The equation has two roots: x₁ = {x1:.{p}f}, x₂ = {x2:.{p}f}"

        return Solution(
            problem=problem,
            answer=QuadraticRoots(x1=x1, x2=x2, discriminant=discriminant),
            steps=steps,
            explanation=explanation,
        )

    def _solve_generic(self, problem: str, steps: List[SolutionStep]) -> Solution:
        """Last attempt for equations outside the two shapes."""
        try:
            variable, roots = solve_equation(problem)
        except ExpressionEvaluationError as e:
            raise UnsolvableEquationError(problem, reason=e.user_message) from e

        shown = ", ".join(roots)
        self._add_step(
            steps,
            "Equation solution",
            f"{variable} = {shown}",
            "Solved directly; the equation is outside the linear and quadratic forms",
        )
        return Solution(
            problem=problem,
            answer=EquationRoots(variable=variable, roots=roots),
            steps=steps,
            explanation=f"{variable} = {shown}",
        )
