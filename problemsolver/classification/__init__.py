"""Classification layer: ordered topic predicates."""

from .classifier import ProblemClassifier

__all__ = ["ProblemClassifier"]
