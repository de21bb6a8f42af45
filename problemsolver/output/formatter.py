"""
Answer formatting and solution export.

Renders every answer shape as display text and serializes whole
solutions for the CLI.
"""

import json
import math
from dataclasses import dataclass, fields
from typing import Any, Dict

from .step_generator import StepGenerator
from ..models import (
    Answer,
    EquationRoots,
    NumberAnswer,
    QuadraticRoots,
    Solution,
    StatisticsSummary,
    TrigValues,
)
from ..utils.constants import ANSWER_PRECISION, DISPLAY_PRECISION


def format_number(value: float, precision: int = ANSWER_PRECISION) -> str:
    """
    Round to `precision` decimals and strip trailing zeros.

    format_number(14.0) -> "14", format_number(1/3) -> "0.3333"
    """
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"
    if math.isnan(value):
        return "nan"
    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def _measure(value: Any) -> str:
    if isinstance(value, list):
        return "[" + ", ".join(_measure(v) for v in value) + "]"
    if isinstance(value, float):
        return format_number(value, DISPLAY_PRECISION)
    return str(value)


def format_answer(answer: Answer) -> str:
    """Render an answer for display."""
    if isinstance(answer, NumberAnswer):
        return format_number(answer.value)

    if isinstance(answer, QuadraticRoots):
        x1 = format_number(answer.x1)
        x2 = format_number(answer.x2)
        return f"x₁ = {x1}, x₂ = {x2}"

    if isinstance(answer, EquationRoots):
        if not answer.roots:
            return f"No solution for {answer.variable}"
        return ", ".join(f"{answer.variable} = {r}" for r in answer.roots)

    if isinstance(answer, (StatisticsSummary, TrigValues)) or _is_measures(answer):
        parts = [
            f"{f.name.replace('_', ' ')} = {_measure(getattr(answer, f.name))}"
            for f in fields(answer)
            if f.name != "unit"
        ]
        return ", ".join(parts)

    # Labels, expressions, sentinels
    return str(answer)


def _is_measures(answer: Answer) -> bool:
    return answer.kind in (
        "circle",
        "rectangle",
        "triangle",
        "square",
        "sphere",
        "cube",
    )


@dataclass
class FormatOptions:
    """Options for solution output."""

    show_steps: bool = False
    show_topic: bool = True
    indent: int = 2


class SolutionFormatter:
    """
    Format a Solution as plain text or JSON.

    Usage:
        formatter = SolutionFormatter(solution)
        print(formatter.to_text(show_steps=True))
    """

    def __init__(self, solution: Solution, options: FormatOptions = None):
        self.solution = solution
        self.options = options or FormatOptions()
        self.steps = StepGenerator()

    def to_text(self, show_steps: bool = None) -> str:
        sol = self.solution
        if show_steps is None:
            show_steps = self.options.show_steps

        lines = [f"Problem: {sol.problem}"]
        if self.options.show_topic and sol.topic is not None:
            lines.append(f"Topic: {sol.topic.icon} {sol.topic.value}")

        if show_steps and sol.steps:
            lines.append("")
            lines.append("Steps:")
            lines.append(self.steps.steps_to_text(sol.steps, indent=self.options.indent))
            lines.append("")

        lines.append(f"Answer: {format_answer(sol.answer)}")
        if sol.explanation:
            lines.append(sol.explanation)
        if sol.failed and sol.error:
            lines.append(f"Error: {sol.error}")

        return "\n".join(lines)

    def to_dict(self, show_steps: bool = None) -> Dict[str, Any]:
        if show_steps is None:
            show_steps = self.options.show_steps
        data = self.solution.as_dict()
        data["answer_text"] = format_answer(self.solution.answer)
        if not show_steps:
            data.pop("steps", None)
        return data

    def to_json(self, show_steps: bool = None) -> str:
        """
        Serialize the solution as JSON.

        Infinite trig values are emitted as strings so the output stays
        valid JSON.
        """
        data = _json_safe(self.to_dict(show_steps))
        return json.dumps(data, indent=self.options.indent, ensure_ascii=False)


def _json_safe(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_json_safe(v) for v in value]
    if isinstance(value, float) and not math.isfinite(value):
        return format_number(value)
    return value
