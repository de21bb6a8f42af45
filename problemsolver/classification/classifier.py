"""
Problem classifier for routing to topic solvers.

Priority-based classification: an ordered chain of keyword and regex
predicates where the first match wins.
"""

import logging
import re
from typing import Callable, List, Optional, Tuple

from ..input.normalizer import normalize
from ..models import Topic
from ..utils.constants import WORD_PROBLEM_MIN_TOKENS

logger = logging.getLogger(__name__)

CALCULUS_KEYWORDS = ("∫", "integral", "derivative", "d/dx", "limit")
MATRIX_KEYWORDS = ("matrix", "determinant")

TRIG_RE = re.compile(r"\b(sin|cos|tan|cot|sec|csc)\b")
GEOMETRY_RE = re.compile(
    r"\b(area|perimeter|volume|circumference|radius|diameter"
    r"|triangle|circle|square|rectangle|cube|sphere)\b"
)
STATISTICS_RE = re.compile(r"\b(mean|median|mode|average|standard deviation|variance)\b")
ASSIGNMENT_RE = re.compile(r"[a-z]\s*=")
SQUARED_LETTER_RE = re.compile(r"\w(?:\^|\*\*)2")
MATH_SYMBOLS_RE = re.compile(r"[+\-*/=²³√∫]")


def is_calculus(problem: str) -> bool:
    return any(keyword in problem for keyword in CALCULUS_KEYWORDS)


def is_trigonometry(problem: str) -> bool:
    return bool(TRIG_RE.search(problem))


def is_geometry(problem: str) -> bool:
    return bool(GEOMETRY_RE.search(problem))


def is_statistics(problem: str) -> bool:
    return bool(STATISTICS_RE.search(problem))


def is_matrix(problem: str) -> bool:
    if "[" in problem and "]" in problem:
        return True
    return any(keyword in problem for keyword in MATRIX_KEYWORDS)


def is_algebra(problem: str) -> bool:
    """
    Any assignment-like "letter =", any x or y, a ² or letter^2,
    or "solve for".

    The bare x/y test also fires on prose ("six boxes"), so wordy
    problems containing those letters land here before the word check.
    """
    return bool(
        ASSIGNMENT_RE.search(problem)
        or "x" in problem
        or "y" in problem
        or "²" in problem
        or SQUARED_LETTER_RE.search(problem)
        or "solve for" in problem
    )


def is_word_problem(problem: str) -> bool:
    return (
        len(problem.split(" ")) > WORD_PROBLEM_MIN_TOKENS
        and not MATH_SYMBOLS_RE.search(problem)
    )


class ProblemClassifier:
    """
    Classifies problems to route them to topic solvers.

    Classification priority (highest first):
    1. Calculus (∫, integral, derivative, d/dx, limit)
    2. Trigonometry (sin, cos, tan, cot, sec, csc)
    3. Geometry (shape and measure words)
    4. Statistics (mean, median, mode, ...)
    5. Matrix (brackets, matrix, determinant)
    6. Algebra (equations, x or y, squares, "solve for")
    7. Word problem (long prose without math symbols)
    8. Arithmetic (fallback)

    The predicates overlap, so the order is part of the contract.

    Usage:
        classifier = ProblemClassifier()
        topic = classifier.classify("integral of x^2")  # Topic.CALCULUS
    """

    PREDICATES: List[Tuple[Topic, Callable[[str], bool]]] = [
        (Topic.CALCULUS, is_calculus),
        (Topic.TRIGONOMETRY, is_trigonometry),
        (Topic.GEOMETRY, is_geometry),
        (Topic.STATISTICS, is_statistics),
        (Topic.MATRIX, is_matrix),
        (Topic.ALGEBRA, is_algebra),
        (Topic.WORD, is_word_problem),
    ]

    DEFAULT_TOPIC = Topic.ARITHMETIC

    def classify(self, problem: str) -> Topic:
        """
        Classify a problem by topic.

        Args:
            problem: Raw or normalized problem text

        Returns:
            Exactly one Topic
        """
        topic, _ = self.explain(problem)
        return topic

    def explain(self, problem: str) -> Tuple[Topic, Optional[str]]:
        """
        Classify and report which predicate fired.

        Returns:
            (Topic, predicate name) or (ARITHMETIC, None) for the fallback
        """
        text = normalize(problem)

        for topic, predicate in self.PREDICATES:
            if predicate(text):
                logger.debug("Classified %r as %s via %s", text, topic.value, predicate.__name__)
                return topic, predicate.__name__

        logger.debug("Classified %r as %s (fallback)", text, self.DEFAULT_TOPIC.value)
        return self.DEFAULT_TOPIC, None
