"""
Matrix placeholder.

Matrix problems are recognized but not parsed; the answer asks the
user for the dedicated matrix input format.
"""

from typing import List

from .base import BaseSolver
from ..models import LabelAnswer, Solution, SolutionStep, Topic
from ..utils.constants import MATRIX_PLACEHOLDER


class MatrixSolver(BaseSolver):
    name = "MatrixSolver"
    topic = Topic.MATRIX
    failure_message = "The matrix problem could not be solved."

    def _solve(self, problem: str, steps: List[SolutionStep]) -> Solution:
        self._add_step(steps, "Matrix", "Matrix operations", "Working with matrices")
        return Solution(
            problem=problem,
            answer=LabelAnswer(MATRIX_PLACEHOLDER),
            steps=steps,
            explanation="Please enter matrices in the dedicated matrix format.",
        )
