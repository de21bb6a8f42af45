"""
Word problem solver: a keyword heuristic over the numbers in the text.
"""

import logging
import re
from functools import reduce
from typing import List, Optional, Tuple

from .base import BaseSolver, format_step_value
from ..input.normalizer import extract_numbers
from ..models import NumberAnswer, Solution, SolutionStep, Topic
from ..utils.errors import (
    DivisionByZeroError,
    NoNumbersFoundError,
    UnknownOperationError,
)

logger = logging.getLogger(__name__)

UNKNOWN_OPERATION = "unknown"

# Operation families, checked in order. The Uzbek stems allow a missing
# apostrophe because normalization strips quote characters.
OPERATION_PATTERNS: List[Tuple[str, "re.Pattern[str]"]] = [
    ("addition", re.compile(r"\b(qo'?sh|plus|add|sum)\b")),
    ("subtraction", re.compile(r"\b(ayir|minus|subtract|difference)\b")),
    ("multiplication", re.compile(r"\b(ko'?payt|times|multiply|product)\b")),
    ("division", re.compile(r"\b(bo'?l|divide|quotient)\b")),
]


def detect_operation(problem: str) -> Optional[str]:
    for operation, pattern in OPERATION_PATTERNS:
        if pattern.search(problem):
            return operation
    return None


def _divide(a: float, b: float) -> float:
    if b == 0:
        raise ZeroDivisionError
    return a / b


def apply_operation(operation: str, numbers: List[float]) -> float:
    """
    Fold the numbers left to right.

    Sum starts from 0 and product from 1; subtraction and division
    start from the first number.
    """
    if operation == "addition":
        return reduce(lambda a, b: a + b, numbers, 0.0)
    if operation == "subtraction":
        return reduce(lambda a, b: a - b, numbers)
    if operation == "multiplication":
        return reduce(lambda a, b: a * b, numbers, 1.0)
    if operation == "division":
        try:
            return reduce(_divide, numbers)
        except ZeroDivisionError:
            raise DivisionByZeroError(numbers)
    raise ValueError(f"Unknown operation: {operation}")


class WordProblemSolver(BaseSolver):
    """
    Finds the numbers and one operation keyword, then folds.

    With no operation keyword the lenient solver reports operation
    "unknown" and a result of 0; a strict solver fails with
    UnknownOperationError instead.
    """

    name = "WordProblemSolver"
    topic = Topic.WORD
    failure_message = "The word problem could not be solved."

    def __init__(self, strict: bool = False):
        self.strict = strict

    def _solve(self, problem: str, steps: List[SolutionStep]) -> Solution:
        numbers = extract_numbers(problem)
        if not numbers:
            raise NoNumbersFoundError()

        self._add_step(steps, "Read the problem", problem, "The given word problem")

        operation = detect_operation(problem)
        if operation is None:
            if self.strict:
                raise UnknownOperationError()
            logger.info("No operation keyword in %r; result defaults to 0", problem)
            operation, result = UNKNOWN_OPERATION, 0.0
        else:
            result = apply_operation(operation, numbers)

        shown = ", ".join(format_step_value(n) for n in numbers)
        self._add_step(
            steps, "Detected operation", f"Operation: {operation}", f"Numbers: {shown}"
        )
        self._add_step(
            steps, "Calculate", f"Result = {format_step_value(result)}", f"Result of {operation}"
        )

        return Solution(
            problem=problem,
            answer=NumberAnswer(result),
            steps=steps,
            explanation=f"Word problem solved. Result: {format_step_value(result)}",
        )
