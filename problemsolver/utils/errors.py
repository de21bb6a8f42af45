"""
Centralized error handling for the problem solver.

Provides a hierarchy of custom exceptions with user-friendly messages,
suggestions for fixes, and error recovery hints. Solvers raise these
internally; the solver base class turns them into failure Solutions so
nothing escapes ``solve()``.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, List


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    INFO = auto()  # Informational, operation may have partially succeeded
    WARNING = auto()  # Non-fatal, can continue with degraded functionality
    ERROR = auto()  # Operation failed, but can retry
    CRITICAL = auto()  # Unrecoverable error


@dataclass
class ErrorContext:
    """
    Rich context for error reporting.

    Provides user-friendly information beyond the raw exception.
    """

    title: str  # Short title for a status line
    message: str  # User-friendly message
    technical_details: Optional[str]  # Debug info
    suggestions: List[str]  # Actionable suggestions
    severity: ErrorSeverity
    recoverable: bool = True  # Can user retry?

    @classmethod
    def from_exception(cls, exc: Exception, context: str = "") -> "ErrorContext":
        """Create ErrorContext from any exception using smart detection."""
        exc_type = type(exc).__name__
        exc_msg = str(exc)

        if isinstance(exc, ProblemSolverError):
            return exc.to_context()

        if isinstance(exc, ZeroDivisionError):
            return cls(
                title="Division by Zero",
                message="The problem divides by zero.",
                technical_details=f"{exc_type}: {exc_msg}",
                suggestions=["Check the divisors in the problem"],
                severity=ErrorSeverity.ERROR,
            )

        if isinstance(exc, ImportError):
            return cls(
                title="Missing Dependency",
                message="A required component is not installed.",
                technical_details=f"{exc_type}: {exc_msg}",
                suggestions=[
                    "Check that all dependencies are installed",
                    "Run: pip install -e .[test]",
                ],
                severity=ErrorSeverity.CRITICAL,
                recoverable=False,
            )

        # Generic fallback
        return cls(
            title="Error",
            message=f"An unexpected error occurred: {exc_msg}",
            technical_details=f"{exc_type}: {exc_msg}\nContext: {context}",
            suggestions=["Try again", "Rephrase the problem"],
            severity=ErrorSeverity.ERROR,
        )


class ProblemSolverError(Exception):
    """
    Base exception for all problem solver errors.

    Subclasses provide rich error context for user-friendly reporting.
    """

    default_title = "Error"
    default_suggestions: List[str] = []
    default_severity = ErrorSeverity.ERROR

    def __init__(
        self,
        message: str,
        *,
        suggestions: Optional[List[str]] = None,
        technical_details: Optional[str] = None,
        severity: Optional[ErrorSeverity] = None,
    ):
        super().__init__(message)
        self.user_message = message
        self.suggestions = suggestions or self.default_suggestions.copy()
        self.technical_details = technical_details
        self.severity = severity or self.default_severity

    def to_context(self) -> ErrorContext:
        """Convert to ErrorContext for display."""
        return ErrorContext(
            title=self.default_title,
            message=self.user_message,
            technical_details=self.technical_details,
            suggestions=self.suggestions,
            severity=self.severity,
            recoverable=self.severity != ErrorSeverity.CRITICAL,
        )


# === Evaluation Errors ===


class ExpressionEvaluationError(ProblemSolverError):
    """Raised when the numeric evaluator cannot produce a finite real number."""

    default_title = "Evaluation Error"
    default_suggestions = [
        "Check for unbalanced parentheses",
        "Use only numbers, operators and sqrt/sin/cos/tan/log",
    ]

    def __init__(self, message: str, *, expression: str = "", **kwargs):
        super().__init__(message, **kwargs)
        self.expression = expression


# === Solver Errors ===


class SolveError(ProblemSolverError):
    """Raised when a problem cannot be solved."""

    default_title = "Solve Error"
    default_suggestions = [
        "Check that the problem is written correctly",
        "Simplify the problem if possible",
    ]


class EmptyProblemError(SolveError):
    """Raised when the problem text is blank."""

    default_title = "Empty Problem"
    default_severity = ErrorSeverity.INFO

    def __init__(self):
        super().__init__(
            "Please enter a problem to solve.",
            suggestions=["Type an expression such as 2 + 3 * 4"],
        )


class EmptyExpressionError(SolveError):
    """Raised when no arithmetic expression remains after stripping."""

    default_title = "No Expression"

    def __init__(self, problem: str = ""):
        super().__init__(
            "No arithmetic expression was found.",
            suggestions=["Use digits and + - * / ( ) only"],
            technical_details=f"Problem: {problem}" if problem else None,
        )


class MalformedEquationError(SolveError):
    """Raised when a linear equation does not have the form ax + b = c."""

    default_title = "Malformed Equation"
    default_suggestions = ["Write the equation as ax + b = c, e.g. 2x + 3 = 7"]


class ZeroCoefficientError(SolveError):
    """Raised when the leading coefficient is zero."""

    default_title = "Zero Coefficient"

    def __init__(self, term: str = "x"):
        super().__init__(
            f"The coefficient of {term} cannot be 0.",
            suggestions=[f"Give {term} a non-zero coefficient"],
        )


class CoefficientParseError(SolveError):
    """Raised when no quadratic-shaped substring is found."""

    default_title = "Coefficient Parse Error"
    default_suggestions = ["Write the equation as ax² + bx + c = 0"]


class UnsolvableEquationError(SolveError):
    """Raised when the generic equation-solve attempt finds nothing."""

    default_title = "No Solution"
    default_severity = ErrorSeverity.WARNING

    def __init__(self, equation: str, reason: str = ""):
        super().__init__(
            "The equation could not be solved.",
            suggestions=[
                "Check if the equation is correctly entered",
                "Try the form ax + b = c or ax² + bx + c = 0",
            ],
            technical_details=f"Equation: {equation}"
            + (f"\nReason: {reason}" if reason else ""),
        )


class SolveTimeoutError(SolveError):
    """Raised when a symbolic computation runs past its time limit."""

    default_title = "Timeout"
    default_severity = ErrorSeverity.WARNING
    default_suggestions = [
        "The problem is too complex to solve quickly",
        "Try a simpler form of the problem",
    ]

    def __init__(self, timeout_seconds: float, expression: str = ""):
        super().__init__(
            f"Solving timed out after {timeout_seconds:.1f} seconds",
            technical_details=f"Expression: {expression}" if expression else None,
        )
        self.timeout_seconds = timeout_seconds


class CalculusError(SolveError):
    """Raised when a derivative cannot be computed."""

    default_title = "Calculus Error"
    default_suggestions = ["Write the function in x, e.g. derivative of x^3 + 2x"]


class UnknownCalculusOperationError(CalculusError):
    """Raised when the problem is neither a derivative nor an integral."""

    default_title = "Unknown Calculus Operation"

    def __init__(self, problem: str = ""):
        super().__init__(
            "Could not tell which calculus operation is requested.",
            suggestions=[
                "Use 'derivative of ...' or 'd/dx ...'",
                "Use 'integral of ...' or '∫ ... dx'",
            ],
            technical_details=f"Problem: {problem}" if problem else None,
        )


class UnknownShapeError(SolveError):
    """Raised when a geometry problem names no supported shape."""

    default_title = "Unknown Shape"

    def __init__(self):
        super().__init__(
            "The geometric shape could not be determined.",
            suggestions=["Name one of: circle, rectangle, triangle, square, sphere, cube"],
        )


class InsufficientDimensionsError(SolveError):
    """Raised when a shape is given fewer numbers than its formulas need."""

    default_title = "Missing Dimensions"

    def __init__(self, shape: str, required: int, found: int):
        super().__init__(
            f"A {shape} needs {required} dimension(s), found {found}.",
            suggestions=[f"Give all {required} dimension(s) of the {shape}"],
        )
        self.shape = shape
        self.required = required
        self.found = found


class GeometricDomainError(SolveError):
    """Raised when dimensions describe an impossible figure."""

    default_title = "Invalid Figure"
    default_suggestions = ["Each side of a triangle must be shorter than the other two combined"]


class NoDataError(SolveError):
    """Raised when a statistics problem contains no numbers."""

    default_title = "No Data"

    def __init__(self):
        super().__init__(
            "No numbers were found in the data set.",
            suggestions=["List the data values, e.g. mean of 2 4 4 5"],
        )


class NoNumbersFoundError(SolveError):
    """Raised when a word problem contains no numbers."""

    default_title = "No Numbers"

    def __init__(self):
        super().__init__(
            "No numbers were found in the word problem.",
            suggestions=["Include the quantities as digits"],
        )


class UnknownOperationError(SolveError):
    """Raised in strict mode when a word problem names no operation."""

    default_title = "Unknown Operation"

    def __init__(self):
        super().__init__(
            "Could not tell which operation the word problem asks for.",
            suggestions=["Use a word such as add, subtract, multiply or divide"],
        )


class DivisionByZeroError(SolveError):
    """Raised when a fold would divide by zero."""

    default_title = "Division by Zero"

    def __init__(self, numbers: Optional[List[float]] = None):
        super().__init__(
            "Cannot divide by zero.",
            suggestions=["Check the divisors in the problem"],
            technical_details=f"Numbers: {numbers}" if numbers else None,
        )


class UnrecognizedProblemError(SolveError):
    """Raised when the generic fallback cannot evaluate the problem."""

    default_title = "Unrecognized Problem"
    default_severity = ErrorSeverity.WARNING

    def __init__(self, problem: str, reason: str = ""):
        super().__init__(
            "The problem type could not be recognized.",
            suggestions=["Rephrase the problem more precisely"],
            technical_details=f"Problem: {problem}"
            + (f"\nReason: {reason}" if reason else ""),
        )


# === Persistence Errors ===


class HistoryError(ProblemSolverError):
    """Raised when the history database cannot be read or written."""

    default_title = "History Error"
    default_suggestions = [
        "Check that you have write permission to the database location",
        "Use --no-save to skip persistence",
    ]


# === Utility functions ===


def format_error_for_user(exc: Exception, context: str = "") -> str:
    """
    Format an exception into a user-friendly string.

    Returns a single string suitable for a status line.
    """
    ctx = ErrorContext.from_exception(exc, context)

    result = ctx.message
    if ctx.suggestions:
        result += f" Try: {ctx.suggestions[0]}"

    return result
