"""
Trigonometry solver: sin, cos and tan of a single angle.
"""

import math
from typing import List

from .base import BaseSolver, format_step_value
from ..input.parser import parse_angle
from ..models import Solution, SolutionStep, Topic, TrigValues
from ..utils.constants import ANSWER_PRECISION, TAN_ASYMPTOTE_EPSILON


def _f(value: float) -> str:
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"
    return f"{value:.{ANSWER_PRECISION}f}"


class TrigonometrySolver(BaseSolver):
    """
    Evaluates the three basic functions at the first angle in the text.

    The angle is in degrees unless the problem says "radian"; with no
    number at all the default angle is used. At 90° + 180°k tan is
    reported as ±∞.
    """

    name = "TrigonometrySolver"
    topic = Topic.TRIGONOMETRY
    failure_message = "The trigonometry problem could not be solved."

    def _solve(self, problem: str, steps: List[SolutionStep]) -> Solution:
        angle, found = parse_angle(problem)
        in_radians = "radian" in problem
        radians = angle if in_radians else math.radians(angle)

        unit = "rad" if in_radians else "°"
        fa = format_step_value(angle)
        self._add_step(
            steps,
            "Given angle",
            f"θ = {fa}{unit} = {radians:.{ANSWER_PRECISION}f} rad",
            "Angle in degrees and radians" if found else "No angle given; using the default",
        )

        sin_value = math.sin(radians)
        cos_value = math.cos(radians)
        if abs(cos_value) < TAN_ASYMPTOTE_EPSILON:
            tan_value = math.copysign(math.inf, sin_value)
            tan_note = "Tangent is undefined here (cos θ = 0)"
        else:
            tan_value = math.tan(radians)
            tan_note = "Tangent value"

        self._add_step(steps, "Sine", f"sin({fa}{unit}) = {_f(sin_value)}", "Sine value")
        self._add_step(steps, "Cosine", f"cos({fa}{unit}) = {_f(cos_value)}", "Cosine value")
        self._add_step(steps, "Tangent", f"tan({fa}{unit}) = {_f(tan_value)}", tan_note)

        identity = sin_value ** 2 + cos_value ** 2
        self._add_step(
            steps,
            "Pythagorean identity",
            f"sin²θ + cos²θ = {_f(identity)} ≈ 1",
            "sin²θ + cos²θ = 1 (check)",
        )

        return Solution(
            problem=problem,
            answer=TrigValues(
                angle=angle,
                radians=radians,
                sin=sin_value,
                cos=cos_value,
                tan=tan_value,
                unit="radians" if in_radians else "degrees",
            ),
            steps=steps,
            explanation=f"Trigonometric functions computed for the angle {fa}{unit}.",
        )
