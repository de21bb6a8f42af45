"""
Tests for the topic solvers.

Solvers receive normalized text, so problems here are written in
normalized form (lowercase, ** for powers).
"""

import math
import signal
import sys
import time
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))


class TestArithmeticSolver:
    """Test plain expression evaluation."""

    @pytest.mark.parametrize(
        "problem, expected",
        [
            ("2 + 3 * 4", 14),
            ("(2 + 3) * 4", 20),
            ("10 / 4", 2.5),
            ("what is 7 * 6", 42),
            ("2**10", 1024),
        ],
    )
    def test_evaluates(self, problem, expected):
        from problemsolver.solvers import ArithmeticSolver

        solution = ArithmeticSolver().solve(problem)
        assert solution.answer.value == pytest.approx(expected)
        assert len(solution.steps) == 2

    def test_no_expression(self):
        from problemsolver.solvers import ArithmeticSolver

        solution = ArithmeticSolver().solve("hello")
        assert solution.failed
        assert solution.error_type == "EmptyExpressionError"
        assert solution.explanation == ArithmeticSolver.failure_message

    def test_division_by_zero(self):
        from problemsolver.solvers import ArithmeticSolver

        solution = ArithmeticSolver().solve("10 / 0")
        assert solution.failed
        assert solution.error_type == "ExpressionEvaluationError"
        # The original expression step is kept
        assert len(solution.steps) == 1


class TestLinearEquations:
    """Test ax + b = c."""

    def test_basic(self):
        from problemsolver.solvers import AlgebraSolver

        solution = AlgebraSolver().solve("2x + 3 = 7")
        assert solution.answer.value == 2
        assert len(solution.steps) == 4
        assert "✓" in solution.steps[-1].explanation

    @pytest.mark.parametrize(
        "problem, expected",
        [
            ("x - 5 = 10", 15),
            ("-x + 4 = 1", 3),
            ("3x = 12", 4),
            ("0.5x + 1 = 2", 2),
            ("solve 4x - 2 = 10", 3),
        ],
    )
    def test_shapes(self, problem, expected):
        from problemsolver.solvers import AlgebraSolver

        assert AlgebraSolver().solve(problem).answer.value == pytest.approx(expected)

    def test_zero_coefficient(self):
        from problemsolver.solvers import AlgebraSolver

        solution = AlgebraSolver().solve("0x + 3 = 7")
        assert solution.failed
        assert solution.error_type == "ZeroCoefficientError"

    @pytest.mark.parametrize(
        "a, b, c",
        [
            (2, -3, 5),
            (1.5, -2, 4),
            (-4, -1, 7),
            (3, 4, -5),
            (-2, -6, -10),
            (0.5, -0.25, 1),
        ],
    )
    def test_signed_constants(self, a, b, c):
        """A constant written as "+ -3" keeps its sign through to the check."""
        from problemsolver import solve
        from problemsolver.models import NumberAnswer

        solution = solve(f"{a}x + {b} = {c}")

        assert isinstance(solution.answer, NumberAnswer)
        assert a * solution.answer.value + b == pytest.approx(c)
        assert solution.steps[-1].description == "Verify"
        assert "✓" in solution.steps[-1].explanation

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("2x + -3 = 5", -3),
            ("2x - -3 = 5", 3),
            ("2x - - 3 = 5", 3),
            ("2x + +3 = 5", 3),
        ],
    )
    def test_doubled_sign_folds(self, text, expected):
        from problemsolver.input.parser import parse_linear

        assert parse_linear(text).b == expected


class TestQuadraticEquations:
    """Test ax² + bx + c = 0."""

    def test_two_roots(self):
        from problemsolver.models import QuadraticRoots
        from problemsolver.solvers import AlgebraSolver

        solution = AlgebraSolver().solve("x**2 - 5x + 6 = 0")
        answer = solution.answer
        assert isinstance(answer, QuadraticRoots)
        assert (answer.x1, answer.x2) == (3, 2)
        assert answer.discriminant == 1
        assert len(solution.steps) == 5

    def test_repeated_root(self):
        from problemsolver.solvers import AlgebraSolver

        answer = AlgebraSolver().solve("x² - 2x + 1 = 0").answer
        assert answer.repeated
        assert answer.x1 == answer.x2 == 1

    def test_missing_linear_term(self):
        from problemsolver.solvers import AlgebraSolver

        answer = AlgebraSolver().solve("x² - 4 = 0").answer
        assert (answer.x1, answer.x2) == (2, -2)

    def test_nonzero_right_side(self):
        from problemsolver.solvers import AlgebraSolver

        answer = AlgebraSolver().solve("2x² + 3x = 2").answer
        assert answer.x1 == pytest.approx(0.5)
        assert answer.x2 == pytest.approx(-2)

    def test_no_real_roots(self):
        from problemsolver.models import NoRealRoots
        from problemsolver.solvers import AlgebraSolver

        solution = AlgebraSolver().solve("x² + 1 = 0")
        assert isinstance(solution.answer, NoRealRoots)
        assert solution.answer.discriminant == -4
        assert len(solution.steps) == 3
        assert not solution.failed

    def test_zero_leading_coefficient(self):
        from problemsolver.solvers import AlgebraSolver

        solution = AlgebraSolver().solve("0x² + 2x + 1 = 0")
        assert solution.failed
        assert solution.error_type == "ZeroCoefficientError"


class TestGenericEquations:
    """Test the fallback solve for equations outside both shapes."""

    def test_cubic(self):
        from problemsolver.models import EquationRoots
        from problemsolver.solvers import AlgebraSolver

        solution = AlgebraSolver().solve("x**3 = 8")
        assert isinstance(solution.answer, EquationRoots)
        assert solution.answer.variable == "x"
        assert "2" in solution.answer.roots

    def test_other_variable(self):
        from problemsolver.solvers import AlgebraSolver

        answer = AlgebraSolver().solve("y + y = 10").answer
        assert answer.variable == "y"
        assert answer.roots == ["5"]

    def test_unsolvable(self):
        from problemsolver.solvers import AlgebraSolver

        solution = AlgebraSolver().solve("x + 1 = x + 2")
        assert solution.failed
        assert solution.error_type == "UnsolvableEquationError"


class TestCalculusSolver:
    """Test derivatives and the integral table."""

    def test_derivative(self):
        from problemsolver.solvers import CalculusSolver

        solution = CalculusSolver().solve("derivative of x**3 + 2x")
        assert str(solution.answer) == "3*x**2 + 2"
        assert len(solution.steps) == 2

    def test_derivative_ddx(self):
        from problemsolver.solvers import CalculusSolver

        assert str(CalculusSolver().solve("d/dx (sin(x))").answer) == "cos(x)"

    def test_extract_derivative_keeps_inner_parens(self):
        from problemsolver.solvers.calculus_solver import extract_derivative_expression

        assert extract_derivative_expression("derivative of (x+1)*(x-1)") == "(x+1)*(x-1)"
        assert extract_derivative_expression("find the derivative of (x**2)") == "x**2"

    @pytest.mark.parametrize(
        "problem, expected",
        [
            ("integral of x**2 dx", "x³/3 + C"),
            ("∫ sin(x) dx", "-cos(x) + C"),
            ("integral of 1/x dx", "ln|x| + C"),
            ("integral of e**x", "e^x + C"),
            ("integral of tan(x) dx", "F(x) + C"),
        ],
    )
    def test_integral_table(self, problem, expected):
        from problemsolver.solvers import CalculusSolver

        solution = CalculusSolver().solve(problem)
        assert str(solution.answer) == expected
        assert len(solution.steps) == 2

    def test_unknown_operation(self):
        from problemsolver.solvers import CalculusSolver

        solution = CalculusSolver().solve("limit of 1/x as x approaches 0")
        assert solution.failed
        assert solution.error_type == "UnknownCalculusOperationError"

    def test_derivative_without_expression(self):
        from problemsolver.solvers import CalculusSolver

        solution = CalculusSolver().solve("derivative of")
        assert solution.failed
        assert solution.error_type == "CalculusError"
        assert len(solution.steps) == 1


class TestGeometrySolver:
    """Test the six shapes."""

    def test_circle(self):
        from problemsolver.models import CircleMeasures
        from problemsolver.solvers import GeometrySolver

        solution = GeometrySolver().solve("area of circle with radius 5")
        answer = solution.answer
        assert isinstance(answer, CircleMeasures)
        assert answer.area == pytest.approx(math.pi * 25)
        assert answer.circumference == pytest.approx(10 * math.pi)
        assert len(solution.steps) == 3

    def test_bare_radius_is_circle(self):
        from problemsolver.models import CircleMeasures
        from problemsolver.solvers import GeometrySolver

        answer = GeometrySolver().solve("radius 2").answer
        assert isinstance(answer, CircleMeasures)

    def test_rectangle(self):
        from problemsolver.solvers import GeometrySolver

        answer = GeometrySolver().solve("rectangle 4 by 6").answer
        assert (answer.perimeter, answer.area) == (20, 24)

    def test_triangle(self):
        from problemsolver.solvers import GeometrySolver

        solution = GeometrySolver().solve("triangle with sides 3 4 5")
        answer = solution.answer
        assert answer.perimeter == 12
        assert answer.semi_perimeter == 6
        assert answer.area == pytest.approx(6)
        assert len(solution.steps) == 4

    def test_degenerate_triangle(self):
        from problemsolver.solvers import GeometrySolver

        assert GeometrySolver().solve("triangle 1 2 3").answer.area == 0

    def test_impossible_triangle(self):
        from problemsolver.solvers import GeometrySolver

        solution = GeometrySolver().solve("triangle 1 2 10")
        assert solution.failed
        assert solution.error_type == "GeometricDomainError"

    def test_square(self):
        from problemsolver.solvers import GeometrySolver

        answer = GeometrySolver().solve("square side 3").answer
        assert (answer.perimeter, answer.area) == (12, 9)
        assert answer.diagonal == pytest.approx(3 * math.sqrt(2))

    def test_sphere_not_circle(self):
        """A named sphere wins over the radius keyword."""
        from problemsolver.models import SphereMeasures
        from problemsolver.solvers import GeometrySolver

        answer = GeometrySolver().solve("volume of sphere with radius 3").answer
        assert isinstance(answer, SphereMeasures)
        assert answer.volume == pytest.approx(36 * math.pi)
        assert answer.surface_area == pytest.approx(36 * math.pi)

    def test_cube(self):
        from problemsolver.solvers import GeometrySolver

        answer = GeometrySolver().solve("cube 2").answer
        assert (answer.surface_area, answer.volume) == (24, 8)

    def test_missing_dimensions(self):
        from problemsolver.solvers import GeometrySolver

        solution = GeometrySolver().solve("rectangle 4")
        assert solution.failed
        assert solution.error_type == "InsufficientDimensionsError"

    def test_unknown_shape(self):
        from problemsolver.solvers import GeometrySolver

        solution = GeometrySolver().solve("area of a polygon 5")
        assert solution.failed
        assert solution.error_type == "UnknownShapeError"


class TestTrigonometrySolver:
    """Test sin, cos and tan of one angle."""

    def test_degrees(self):
        from problemsolver.solvers import TrigonometrySolver

        solution = TrigonometrySolver().solve("sin 30")
        answer = solution.answer
        assert answer.sin == pytest.approx(0.5)
        assert answer.cos == pytest.approx(math.sqrt(3) / 2)
        assert answer.tan == pytest.approx(1 / math.sqrt(3))
        assert answer.unit == "degrees"
        assert len(solution.steps) == 5

    def test_default_angle(self):
        from problemsolver.solvers import TrigonometrySolver

        assert TrigonometrySolver().solve("cos of the angle").answer.angle == 30

    def test_radians(self):
        from problemsolver.solvers import TrigonometrySolver

        answer = TrigonometrySolver().solve("sin 0 radians").answer
        assert answer.unit == "radians"
        assert answer.sin == 0
        assert answer.cos == 1

    def test_tangent_asymptote(self):
        from problemsolver.solvers import TrigonometrySolver

        solution = TrigonometrySolver().solve("tan 90 degrees")
        assert solution.answer.tan == math.inf
        assert "∞" in solution.steps[3].expression

    def test_identity_step(self):
        from problemsolver.solvers import TrigonometrySolver

        steps = TrigonometrySolver().solve("cos 47").steps
        assert "1.0000" in steps[-1].expression


class TestStatisticsSolver:
    """Test descriptive statistics."""

    def test_summary(self):
        from problemsolver.solvers import StatisticsSolver

        solution = StatisticsSolver().solve("mean of 2 4 4 5")
        answer = solution.answer
        assert answer.count == 4
        assert answer.mean == pytest.approx(3.75)
        assert answer.median == 4
        assert answer.mode == [4]
        assert answer.variance == pytest.approx(1.1875)
        assert answer.std_dev == pytest.approx(math.sqrt(1.1875))
        assert len(solution.steps) == 5

    def test_even_median_and_multimode(self):
        from problemsolver.solvers import StatisticsSolver

        answer = StatisticsSolver().solve("median of 3 1 4 2").answer
        assert answer.median == 2.5
        # All values tie; first-seen order
        assert answer.mode == [3, 1, 4, 2]

    def test_no_data(self):
        from problemsolver.solvers import StatisticsSolver

        solution = StatisticsSolver().solve("mean of nothing")
        assert solution.failed
        assert solution.error_type == "NoDataError"


class TestMatrixSolver:
    def test_placeholder(self):
        from problemsolver.solvers import MatrixSolver
        from problemsolver.utils.constants import MATRIX_PLACEHOLDER

        solution = MatrixSolver().solve("determinant of [[1,2],[3,4]]")
        assert str(solution.answer) == MATRIX_PLACEHOLDER
        assert len(solution.steps) == 1
        assert not solution.failed


class TestWordProblemSolver:
    """Test the keyword heuristic."""

    def test_addition(self):
        from problemsolver.solvers import WordProblemSolver

        problem = "ali has 5 apples and gets 3 more apples, add them together now"
        solution = WordProblemSolver().solve(problem)
        assert solution.answer.value == 8
        assert len(solution.steps) == 3
        assert "addition" in solution.steps[1].expression

    def test_uzbek_keyword(self):
        from problemsolver.solvers import WordProblemSolver

        solution = WordProblemSolver().solve("12 va 4 sonlarini ayir")
        assert solution.answer.value == 8

    def test_multiplication(self):
        from problemsolver.solvers import WordProblemSolver

        answer = WordProblemSolver().solve("the product of 2 3 and 4").answer
        assert answer.value == 24

    def test_unknown_operation_lenient(self):
        from problemsolver.solvers import WordProblemSolver

        solution = WordProblemSolver().solve("there are 5 cats and 3 dogs")
        assert solution.answer.value == 0
        assert "unknown" in solution.steps[1].expression

    def test_unknown_operation_strict(self):
        from problemsolver.solvers import WordProblemSolver

        solution = WordProblemSolver(strict=True).solve("there are 5 cats and 3 dogs")
        assert solution.failed
        assert solution.error_type == "UnknownOperationError"

    def test_no_numbers(self):
        from problemsolver.solvers import WordProblemSolver

        solution = WordProblemSolver().solve("add some apples together")
        assert solution.failed
        assert solution.error_type == "NoNumbersFoundError"

    def test_division_by_zero(self):
        from problemsolver.solvers import WordProblemSolver

        solution = WordProblemSolver().solve("divide 10 apples among 0 friends")
        assert solution.failed
        assert solution.error_type == "DivisionByZeroError"

    def test_apply_operation(self):
        from problemsolver.solvers.word_problem_solver import apply_operation

        assert apply_operation("subtraction", [10, 3, 2]) == 5
        assert apply_operation("division", [100, 5, 2]) == 10


class TestGeneralSolver:
    """Test the fallback solver."""

    def test_evaluates(self):
        from problemsolver.solvers import GeneralSolver

        solution = GeneralSolver().solve("sqrt(16) + 2**3")
        assert solution.answer.value == 12

    def test_unrecognized(self):
        from problemsolver.solvers import GeneralSolver

        solution = GeneralSolver().solve("hello world")
        assert solution.failed
        assert solution.error_type == "UnrecognizedProblemError"
        assert len(solution.steps) == 1
        assert solution.steps[0].description == "Error"
        assert solution.steps[0].expression == "hello world"


class TestEvaluator:
    """Test the SymPy-backed evaluator."""

    def test_precedence(self):
        from problemsolver.utils.evaluator import evaluate

        assert evaluate("2 + 3 * 4") == 14

    def test_functions_and_constants(self):
        from problemsolver.utils.evaluator import evaluate

        assert evaluate("√16 + 1") == pytest.approx(5)
        assert evaluate("2π") == pytest.approx(2 * math.pi)
        assert evaluate("ln(e)") == pytest.approx(1)

    @pytest.mark.parametrize(
        "expression",
        ["", "1/0", "sqrt(-1)", "foo(2)", "__import__(os)", "x + 1", "(1).real"],
    )
    def test_rejects(self, expression):
        from problemsolver.utils.errors import ExpressionEvaluationError
        from problemsolver.utils.evaluator import evaluate

        with pytest.raises(ExpressionEvaluationError):
            evaluate(expression)

    def test_derivative(self):
        from problemsolver.utils.evaluator import derivative

        assert derivative("x**2") == "2*x"

    @pytest.mark.parametrize("expression", ["9**9**9", "2**(10**6)", "(1 + 1)**99999"])
    def test_oversized_power_rejected(self, expression):
        from problemsolver.utils.errors import ExpressionEvaluationError
        from problemsolver.utils.evaluator import evaluate

        with pytest.raises(ExpressionEvaluationError, match="too large"):
            evaluate(expression)

    def test_moderate_power_still_evaluates(self):
        from problemsolver.utils.evaluator import evaluate

        assert evaluate("2**10 + 9**9") == 1024 + 9**9

    def test_oversized_power_in_derivative(self):
        from problemsolver.utils.errors import ExpressionEvaluationError
        from problemsolver.utils.evaluator import derivative

        with pytest.raises(ExpressionEvaluationError):
            derivative("x + 9**9**9")

    def test_oversized_power_in_equation(self):
        from problemsolver.utils.errors import ExpressionEvaluationError
        from problemsolver.utils.evaluator import solve_equation

        with pytest.raises(ExpressionEvaluationError):
            solve_equation("x**3 = 9**9**9")

    @pytest.mark.skipif(not hasattr(signal, "setitimer"), reason="needs SIGALRM")
    def test_slow_call_times_out(self):
        from problemsolver.utils.errors import SolveTimeoutError
        from problemsolver.utils.evaluator import _run_with_timeout

        with pytest.raises(SolveTimeoutError) as exc_info:
            _run_with_timeout(lambda expression: time.sleep(5), "slow", timeout_seconds=0.2)

        assert exc_info.value.timeout_seconds == 0.2
        assert "slow" in exc_info.value.technical_details

    @pytest.mark.skipif(not hasattr(signal, "setitimer"), reason="needs SIGALRM")
    def test_timer_cleared_after_call(self):
        from problemsolver.utils.evaluator import _run_with_timeout

        assert _run_with_timeout(lambda expression, n: n * 2, "fast", 21) == 42
        assert signal.getitimer(signal.ITIMER_REAL) == (0.0, 0.0)


class TestStepValues:
    """Test number rendering inside step text."""

    @pytest.mark.parametrize(
        "value, expected",
        [(14.0, "14"), (-3.0, "-3"), (2.5, "2.5"), (1 / 3, "0.3333333333")],
    )
    def test_format_step_value(self, value, expected):
        from problemsolver.solvers.base import format_step_value

        assert format_step_value(value) == expected

    def test_differs_from_answer_format(self):
        """Steps keep 10 significant digits; final answers round to 4 decimals."""
        from problemsolver.output import format_number
        from problemsolver.solvers.base import format_step_value

        assert format_step_value(1 / 3) != format_number(1 / 3)
        assert format_number(1 / 3) == "0.3333"
