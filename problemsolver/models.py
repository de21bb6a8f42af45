"""
Core data structures for the problem solver.

These dataclasses define the contract between layers. Answers are a
tagged family: every topic returns the answer shape that suits it, and
the output layer formats each shape on its own.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Optional, List, Dict, Any, Union, ClassVar
from enum import Enum

from .utils.constants import (
    ERROR_ANSWER,
    NO_REAL_ROOTS,
    TOPIC_ICONS,
    DEFAULT_ICON,
)


class Topic(Enum):
    """Classification categories for problems."""

    ARITHMETIC = "arithmetic"
    ALGEBRA = "algebra"
    CALCULUS = "calculus"
    GEOMETRY = "geometry"
    TRIGONOMETRY = "trigonometry"
    STATISTICS = "statistics"
    MATRIX = "matrix"
    WORD = "word"
    GENERIC = "generic"  # Fallback when no topic solver applies

    @property
    def icon(self) -> str:
        return TOPIC_ICONS.get(self.value, DEFAULT_ICON)


@dataclass
class SolutionStep:
    """A single step in a solution derivation."""

    step_number: int
    description: str  # Short label, e.g. "Discriminant"
    expression: str  # Formatted expression, e.g. "D = b² - 4ac = 1"
    explanation: str = ""

    def __post_init__(self):
        if self.step_number < 1:
            raise ValueError("step_number must be >= 1")


# === Answer variants ===


@dataclass
class Answer:
    """Base class for answer shapes."""

    kind: ClassVar[str] = "answer"

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind
        return data


@dataclass
class NumberAnswer(Answer):
    """A single numeric result."""

    kind: ClassVar[str] = "number"
    value: float

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class LabelAnswer(Answer):
    """A short label in place of a value."""

    kind: ClassVar[str] = "label"
    label: str

    def __str__(self) -> str:
        return self.label


@dataclass
class ExpressionAnswer(Answer):
    """A symbolic result rendered as text (derivative, integral)."""

    kind: ClassVar[str] = "expression"
    expression: str

    def __str__(self) -> str:
        return self.expression


@dataclass
class QuadraticRoots(Answer):
    kind: ClassVar[str] = "quadratic_roots"
    x1: float
    x2: float
    discriminant: float

    @property
    def repeated(self) -> bool:
        return self.discriminant == 0


@dataclass
class NoRealRoots(Answer):
    """Quadratic with a negative discriminant."""

    kind: ClassVar[str] = "no_real_roots"
    discriminant: float
    label: str = NO_REAL_ROOTS

    def __str__(self) -> str:
        return self.label


@dataclass
class EquationRoots(Answer):
    """Roots found by the generic equation-solve attempt."""

    kind: ClassVar[str] = "equation_roots"
    variable: str
    roots: List[str] = field(default_factory=list)


@dataclass
class CircleMeasures(Answer):
    kind: ClassVar[str] = "circle"
    radius: float
    circumference: float
    area: float


@dataclass
class RectangleMeasures(Answer):
    kind: ClassVar[str] = "rectangle"
    length: float
    width: float
    perimeter: float
    area: float


@dataclass
class TriangleMeasures(Answer):
    kind: ClassVar[str] = "triangle"
    sides: List[float]
    perimeter: float
    semi_perimeter: float
    area: float


@dataclass
class SquareMeasures(Answer):
    kind: ClassVar[str] = "square"
    side: float
    perimeter: float
    area: float
    diagonal: float


@dataclass
class SphereMeasures(Answer):
    kind: ClassVar[str] = "sphere"
    radius: float
    surface_area: float
    volume: float


@dataclass
class CubeMeasures(Answer):
    kind: ClassVar[str] = "cube"
    edge: float
    surface_area: float
    volume: float


@dataclass
class TrigValues(Answer):
    kind: ClassVar[str] = "trigonometry"
    angle: float
    radians: float
    sin: float
    cos: float
    tan: float
    unit: str = "degrees"


@dataclass
class StatisticsSummary(Answer):
    kind: ClassVar[str] = "statistics"
    count: int
    mean: float
    median: float
    mode: List[float]
    variance: float
    std_dev: float


@dataclass
class ErrorAnswer(Answer):
    """The failure sentinel carried by a recovered Solution."""

    kind: ClassVar[str] = "error"
    label: str = ERROR_ANSWER

    def __str__(self) -> str:
        return self.label


AnswerType = Union[
    NumberAnswer,
    LabelAnswer,
    ExpressionAnswer,
    QuadraticRoots,
    NoRealRoots,
    EquationRoots,
    CircleMeasures,
    RectangleMeasures,
    TriangleMeasures,
    SquareMeasures,
    SphereMeasures,
    CubeMeasures,
    TrigValues,
    StatisticsSummary,
    ErrorAnswer,
]


@dataclass
class Solution:
    """
    Complete solution for one problem.

    Solvers fill answer, steps and explanation; the engine attaches
    topic, solve time and timestamp once solving completes. A failed
    solve is still a Solution: its answer is ErrorAnswer and error
    holds the diagnostic detail.
    """

    problem: str
    answer: AnswerType
    steps: List[SolutionStep] = field(default_factory=list)
    explanation: str = ""
    topic: Optional[Topic] = None
    solve_time_seconds: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)
    error: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def failed(self) -> bool:
        return isinstance(self.answer, ErrorAnswer)

    def as_dict(self) -> Dict[str, Any]:
        """Plain-data view used by JSON export and the history database."""
        data = {
            "problem": self.problem,
            "topic": self.topic.value if self.topic else None,
            "answer": self.answer.as_dict(),
            "steps": [asdict(s) for s in self.steps],
            "explanation": self.explanation,
            "solve_time_seconds": self.solve_time_seconds,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.failed:
            data["error"] = self.error
            data["error_type"] = self.error_type
        return data
