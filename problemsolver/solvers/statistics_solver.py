"""
Descriptive statistics solver.
"""

import math
from collections import Counter
from typing import List

from .base import BaseSolver, format_step_value
from ..input.normalizer import extract_numbers
from ..models import Solution, SolutionStep, StatisticsSummary, Topic
from ..utils.constants import DISPLAY_PRECISION
from ..utils.errors import NoDataError


def median(data: List[float]) -> float:
    ordered = sorted(data)
    n = len(ordered)
    mid = n // 2
    if n % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


def modes(data: List[float]) -> List[float]:
    """All values sharing the highest frequency, in first-seen order."""
    counts = Counter(data)
    top = max(counts.values())
    return [value for value, count in counts.items() if count == top]


class StatisticsSolver(BaseSolver):
    """
    Mean, median, mode, population variance and standard deviation of
    every number in the problem, always computed together.
    """

    name = "StatisticsSolver"
    topic = Topic.STATISTICS
    failure_message = "The statistics problem could not be solved."

    def _solve(self, problem: str, steps: List[SolutionStep]) -> Solution:
        data = extract_numbers(problem)
        if not data:
            raise NoDataError()

        n = len(data)
        p = DISPLAY_PRECISION
        self._add_step(
            steps, "Data", ", ".join(format_step_value(v) for v in data), f"{n} values"
        )

        mean = sum(data) / n
        self._add_step(
            steps, "Mean", f"x̄ = Σx/n = {mean:.{p}f}", "Sum of the values divided by their count"
        )

        med = median(data)
        self._add_step(steps, "Median", f"Med = {format_step_value(med)}", "The middle value")

        mode = modes(data)
        self._add_step(
            steps,
            "Mode",
            f"Mode = {', '.join(format_step_value(v) for v in mode)}",
            "The most frequent value(s)",
        )

        variance = sum((x - mean) ** 2 for x in data) / n
        std_dev = math.sqrt(variance)
        self._add_step(
            steps,
            "Standard deviation",
            f"σ = √({variance:.{p}f}) = {std_dev:.{p}f}",
            "Spread of the data (population)",
        )

        return Solution(
            problem=problem,
            answer=StatisticsSummary(
                count=n,
                mean=mean,
                median=med,
                mode=mode,
                variance=variance,
                std_dev=std_dev,
            ),
            steps=steps,
            explanation=(
                f"Mean {mean:.{p}f}, median {format_step_value(med)}, "
                f"standard deviation {std_dev:.{p}f}."
            ),
        )
