"""
SymPy-backed collaborators for the solvers.

- evaluate(): numeric expression evaluation with standard precedence
- derivative(): symbolic differentiation of a plain-text expression
- solve_equation(): last-resort equation solving for the algebra solver

All three parse plain text the same way, with the implicit
multiplication and ^ conversion the input layer allows.
"""

import logging
import math
import re
import signal
from typing import Callable, List, Tuple, TypeVar

import sympy as sp
from sympy.parsing.sympy_parser import (
    parse_expr,
    standard_transformations,
    implicit_multiplication_application,
    convert_xor,
)

from .constants import MAX_POWER_DIGITS, SOLVE_TIMEOUT_SECONDS, SUPPORTED_FUNCTIONS
from .errors import ExpressionEvaluationError, SolveTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSFORMATIONS = standard_transformations + (
    implicit_multiplication_application,
    convert_xor,
)

# Names bound for parsing; "ln" is the natural log and "e" Euler's number
_LOCAL_DICT = {
    "sqrt": sp.sqrt,
    "sin": sp.sin,
    "cos": sp.cos,
    "tan": sp.tan,
    "log": sp.log,
    "ln": sp.log,
    "exp": sp.exp,
    "abs": sp.Abs,
    "pi": sp.pi,
    "e": sp.E,
}

# parse_expr evaluates generated code; keep its namespace to the names
# the standard transformations and the unevaluated parse emit
_GLOBAL_DICT = {
    "__builtins__": {},
    "Add": sp.Add,
    "Mul": sp.Mul,
    "Pow": sp.Pow,
    "Integer": sp.Integer,
    "Float": sp.Float,
    "Rational": sp.Rational,
    "Symbol": sp.Symbol,
    "Function": sp.Function,
    "factorial": sp.factorial,
}

_ALLOWED_CHARS_RE = re.compile(r"^[0-9a-z+\-*/().,\s]*$")
# Underscores, attribute access and container syntax are never math
_UNSAFE_RE = re.compile(r"_|\.\s*[a-z]|[\[\]{}:;\"'\\]")
_IDENTIFIER_RE = re.compile(r"[a-z_][a-z0-9_]*")
_ROOT_NUMBER_RE = re.compile(r"√\s*(\d+\.?\d*)")
_MATH_TOKEN_RE = re.compile(r"[\d=+\-*/()²³√]")


def _prepare(text: str) -> str:
    """Rewrite the remaining unicode math glyphs into parseable text."""
    result = text.replace("π", "pi")
    result = _ROOT_NUMBER_RE.sub(r"sqrt(\1)", result)
    result = result.replace("√", "sqrt")
    result = result.replace("²", "**2").replace("³", "**3")
    return result.strip()


def _check_identifiers(text: str) -> None:
    """Reject characters and names the numeric evaluator does not know."""
    if not _ALLOWED_CHARS_RE.match(text):
        raise ExpressionEvaluationError(
            "The expression contains unsupported characters.", expression=text
        )
    unknown = set(_IDENTIFIER_RE.findall(text)) - SUPPORTED_FUNCTIONS
    if unknown:
        raise ExpressionEvaluationError(
            f"Unknown name(s) in expression: {', '.join(sorted(unknown))}",
            expression=text,
        )


def _run_with_timeout(
    func: Callable[..., T], expression: str, *args, timeout_seconds: float = SOLVE_TIMEOUT_SECONDS
) -> T:
    """
    Run a SymPy computation with a time limit.

    Uses SIGALRM on Unix; where the signal is unavailable (Windows, or
    outside the main thread) the call runs without a limit.

    Raises:
        SolveTimeoutError: If the computation runs past the limit.
    """

    def timeout_handler(signum, frame):
        raise SolveTimeoutError(timeout_seconds, expression)

    try:
        old_handler = signal.signal(signal.SIGALRM, timeout_handler)
    except (AttributeError, ValueError):
        return func(expression, *args)

    signal.setitimer(signal.ITIMER_REAL, timeout_seconds)
    try:
        return func(expression, *args)
    finally:
        signal.setitimer(signal.ITIMER_REAL, 0)
        signal.signal(signal.SIGALRM, old_handler)


def _power_digits(node: sp.Pow) -> float:
    """Approximate decimal digits of a numeric power, inf if unknown."""
    try:
        base = abs(complex(node.base.evalf()))
        exponent = abs(complex(node.exp.evalf()))
    except OverflowError:
        return math.inf
    except SolveTimeoutError:
        raise
    except Exception:
        return 0.0
    if base == 0 or base == 1 or math.isnan(base) or math.isnan(exponent):
        return 0.0
    return exponent * abs(math.log10(base)) if math.isfinite(base) else math.inf


def _check_magnitude(expr: sp.Basic, text: str) -> None:
    """Reject exact numeric powers too large to build, such as 9^9^9."""
    for node in sp.preorder_traversal(expr):
        if isinstance(node, sp.Pow) and node.base.is_number and node.exp.is_number:
            if _power_digits(node) > MAX_POWER_DIGITS:
                raise ExpressionEvaluationError(
                    "The expression is too large to compute exactly.", expression=text
                )


def parse_plain_text(text: str, restricted: bool = False, evaluate: bool = True) -> sp.Basic:
    """
    Parse a plain-text expression into SymPy.

    The text is parsed unevaluated first so oversized powers can be
    rejected before SymPy tries to compute them exactly.

    Args:
        text: Expression such as "3x^2 + sin(x)"
        restricted: Only allow numbers, operators and SUPPORTED_FUNCTIONS
        evaluate: Return the evaluated expression instead of the parse tree

    Raises:
        ExpressionEvaluationError: If the text cannot be parsed.
    """
    prepared = _prepare(text)
    if not prepared:
        raise ExpressionEvaluationError("Empty expression", expression=text)
    if _UNSAFE_RE.search(prepared):
        raise ExpressionEvaluationError(
            "The expression contains unsupported syntax.", expression=text
        )
    if restricted:
        _check_identifiers(prepared)

    try:
        expr = parse_expr(
            prepared,
            local_dict=dict(_LOCAL_DICT),
            global_dict=dict(_GLOBAL_DICT),
            transformations=TRANSFORMATIONS,
            evaluate=False,
        )
    except SolveTimeoutError:
        raise
    except Exception as e:
        raise ExpressionEvaluationError(
            f"Failed to parse expression: {e}", expression=text
        ) from e

    if not isinstance(expr, sp.Basic):
        raise ExpressionEvaluationError(
            "The text is not a mathematical expression.", expression=text
        )
    _check_magnitude(expr, text)
    return expr.doit() if evaluate else expr


def _evaluate(expression: str) -> float:
    expr = parse_plain_text(expression, restricted=True, evaluate=False)

    if not isinstance(expr, sp.Expr) or expr.free_symbols:
        raise ExpressionEvaluationError(
            "The expression is not purely numeric.", expression=expression
        )

    try:
        value = complex(expr.evalf())
    except SolveTimeoutError:
        raise
    except Exception as e:
        raise ExpressionEvaluationError(
            f"The expression has no numeric value: {expr}", expression=expression
        ) from e

    if not (math.isfinite(value.real) and math.isfinite(value.imag)):
        raise ExpressionEvaluationError(
            "The result is undefined (division by zero?)", expression=expression
        )
    if abs(value.imag) > 1e-12:
        raise ExpressionEvaluationError(
            "The result is not a real number.", expression=expression
        )

    logger.debug("Evaluated %r -> %s", expression, value.real)
    return value.real


def evaluate(expression: str) -> float:
    """
    Evaluate a numeric expression with standard operator precedence.

    "2 + 3 * 4" -> 14.0, "sqrt(16) + 2**3" -> 12.0

    Raises:
        ExpressionEvaluationError: On parse failure or a non-finite,
            non-real or non-numeric result (e.g. division by zero).
        SolveTimeoutError: If evaluation runs past the time limit.
    """
    return _run_with_timeout(_evaluate, expression)


def _derivative(expression: str, variable: str) -> str:
    expr = parse_plain_text(expression)
    try:
        return str(sp.diff(expr, sp.Symbol(variable)))
    except SolveTimeoutError:
        raise
    except Exception as e:
        raise ExpressionEvaluationError(
            f"Cannot differentiate: {e}", expression=expression
        ) from e


def derivative(expression: str, variable: str = "x") -> str:
    """
    Differentiate a plain-text expression.

    Returns:
        The derivative as SymPy's plain-text form, e.g. "3*x**2 + 2".
    """
    return _run_with_timeout(_derivative, expression, variable)


def _equation_text(text: str) -> str:
    """Drop leading prose words ("solve", "find") before the equation."""
    tokens = text.split(" ")
    for i, token in enumerate(tokens):
        if _MATH_TOKEN_RE.search(token) or (len(token) == 1 and token.isalpha()):
            return " ".join(tokens[i:])
    return text


def _solve_equation(text: str) -> Tuple[str, List[str]]:
    equation = _equation_text(text)

    if equation.count("=") > 1:
        raise ExpressionEvaluationError(
            "Only a single equation can be solved.", expression=text
        )
    if "=" in equation:
        lhs, rhs = (parse_plain_text(side) for side in equation.split("="))
    else:
        lhs, rhs = parse_plain_text(equation), sp.Integer(0)

    try:
        expr = sp.Eq(lhs, rhs)
    except (TypeError, ValueError, sp.SympifyError) as e:
        raise ExpressionEvaluationError(
            f"Not an equation: {e}", expression=text
        ) from e

    if expr in (sp.true, sp.false):
        raise ExpressionEvaluationError(
            "The equation has no variable to solve for.", expression=text
        )

    variables = sorted(expr.free_symbols, key=str)
    if not variables:
        raise ExpressionEvaluationError(
            "The equation has no variable to solve for.", expression=text
        )
    target = sp.Symbol("x")
    if target not in variables:
        target = variables[0]

    try:
        roots = sp.solve(expr, target)
    except SolveTimeoutError:
        raise
    except Exception as e:
        raise ExpressionEvaluationError(
            f"SymPy solve() failed: {e}", expression=text
        ) from e

    if not roots:
        raise ExpressionEvaluationError(
            f"No solution found for {target}", expression=text
        )
    return str(target), [str(root) for root in roots]


def solve_equation(text: str) -> Tuple[str, List[str]]:
    """
    Solve a one-equation problem for x (or its first variable).

    "lhs = rhs" is solved as an equation; a bare expression is set to zero.

    Returns:
        (variable name, list of root strings)

    Raises:
        ExpressionEvaluationError: If the text cannot be parsed or solved.
        SolveTimeoutError: If SymPy runs past the time limit.
    """
    return _run_with_timeout(_solve_equation, text)
