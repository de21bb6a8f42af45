"""
Shape parsers for normalized problem text.

Each parser recognizes one fixed equation shape with a regular
expression and returns the coefficients as a small typed record.
They are deliberately not a general equation parser: anything outside
the shape raises the parser's own error so the caller can fall back.
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from ..utils.constants import DEFAULT_ANGLE_DEGREES
from ..utils.errors import MalformedEquationError, CoefficientParseError

# Unsigned decimal literal: 3, 3., 3.5, .5
_NUM = r"(?:\d+\.?\d*|\.\d+)"

# ax + b = c
#   a: optional signed coefficient before x ("", "-", "3", "- 2.5")
#   b: optional signed constant after x; "+ -3" folds to -3
#   c: signed constant on the right-hand side
_LINEAR_RE = re.compile(
    rf"(?<![\w.])(?P<a>[+-]?\s*{_NUM}?)\s*\*?\s*x"
    rf"\s*(?P<b>[+-]\s*[+-]?\s*{_NUM})?"
    rf"\s*=\s*(?P<c>[+-]?\s*{_NUM})(?![\w.(*])"
)

# ax² + bx + c = k   (² or **2 as the square marker)
#   a: optional signed coefficient of x²
#   b: optional signed coefficient of x, a bare sign means ±1
#   c: optional signed constant
#   rhs: optional numeric right-hand side, moved to the left
_QUADRATIC_RE = re.compile(
    rf"(?<![\w.])(?P<a>[+-]?\s*{_NUM}?)\s*\*?\s*x\s*(?:²|\*\*\s*2)(?![\d.])"
    rf"(?:\s*(?P<b>[+-]\s*[+-]?\s*{_NUM}?)\s*\*?\s*x(?!\s*(?:²|\*\*)|\w))?"
    rf"(?:\s*(?P<c>[+-]\s*[+-]?\s*{_NUM})(?!\s*\*?\s*x|[\w.]))?"
    rf"(?:\s*=\s*(?P<rhs>[+-]?\s*{_NUM})(?![\w.*(]))?"
)

QUADRATIC_MARKER_RE = re.compile(r"²|x\s*\*\*\s*2(?![\d.])")

# First number in the text, optionally followed by a degree unit
_ANGLE_RE = re.compile(r"(\d+\.?\d*)\s*(degrees?|deg|°)?")

_TERM_CHARS_RE = re.compile(r"[\d+\-*/=().²³]")


@dataclass(frozen=True)
class LinearCoefficients:
    """Coefficients of a * x + b = c."""

    a: float
    b: float
    c: float


@dataclass(frozen=True)
class QuadraticCoefficients:
    """Coefficients of a * x² + b * x + c = 0."""

    a: float
    b: float
    c: float


def _coefficient(token: Optional[str], default: float) -> float:
    """
    Convert a captured coefficient to a float.

    A missing or empty token gives the default; bare signs give ±1
    (x and -x carry an implicit unit coefficient). Doubled signs are
    folded: "+-3" is -3, "--3" is 3.
    """
    if token is None:
        return default
    cleaned = token.replace(" ", "")
    if cleaned == "":
        return default

    digits = cleaned.lstrip("+-")
    negative = cleaned[: len(cleaned) - len(digits)].count("-") % 2 == 1
    value = float(digits) if digits else 1.0
    return -value if negative else value


def _starts_equation(text: str, start: int) -> bool:
    """
    True if the match at start is not the tail of a longer expression.

    "solve 2x + 3 = 7" starts after a prose word; in "3x + 2x = 10"
    the candidate "2x = 10" follows another term and is rejected.
    """
    prefix = text[:start].rstrip()
    if not prefix:
        return True
    last_token = prefix.split(" ")[-1]
    if _TERM_CHARS_RE.search(last_token):
        return False
    return len(last_token) > 1


def parse_linear(text: str) -> LinearCoefficients:
    """
    Parse "ax + b = c".

    Raises:
        MalformedEquationError: if the text does not contain the shape.
    """
    match = _LINEAR_RE.search(text)
    if not match or not _starts_equation(text, match.start()):
        raise MalformedEquationError(
            "The linear equation is not in the form ax + b = c.",
            technical_details=f"Text: {text}",
        )

    return LinearCoefficients(
        a=_coefficient(match.group("a"), 1.0),
        b=_coefficient(match.group("b"), 0.0),
        c=_coefficient(match.group("c"), 0.0),
    )


def parse_quadratic(text: str) -> QuadraticCoefficients:
    """
    Parse "ax² + bx + c = k" and move k to the left-hand side.

    Raises:
        CoefficientParseError: if no quadratic-shaped substring is found,
            or terms follow it that the shape cannot account for.
    """
    match = _QUADRATIC_RE.search(text)
    if not match or not _starts_equation(text, match.start()):
        raise CoefficientParseError(
            "No quadratic equation of the form ax² + bx + c = 0 was found.",
            technical_details=f"Text: {text}",
        )

    rest = text[match.end():].lstrip()
    if rest and rest[0] in "=+-*/":
        raise CoefficientParseError(
            "The quadratic equation has terms outside ax² + bx + c = k.",
            technical_details=f"Unparsed remainder: {rest}",
        )

    rhs = _coefficient(match.group("rhs"), 0.0)
    return QuadraticCoefficients(
        a=_coefficient(match.group("a"), 1.0),
        b=_coefficient(match.group("b"), 0.0),
        c=_coefficient(match.group("c"), 0.0) - rhs,
    )


def is_quadratic(text: str) -> bool:
    """True if the text carries a square marker on x (x², x**2) or any ²."""
    return bool(QUADRATIC_MARKER_RE.search(text))


def parse_angle(text: str) -> Tuple[float, bool]:
    """
    Extract the first number as an angle.

    Returns:
        (angle, found) where found is False when the default was used.
    """
    match = _ANGLE_RE.search(text)
    if not match:
        return DEFAULT_ANGLE_DEGREES, False
    return float(match.group(1)), True
