"""
Geometry solver: closed-form measures for six shapes.

Dimensions are the leading numbers of the problem in textual order;
there is no attempt to tell which number names which dimension.
"""

import math
from typing import List

from .base import BaseSolver, format_step_value
from ..input.normalizer import extract_numbers
from ..models import (
    CircleMeasures,
    CubeMeasures,
    RectangleMeasures,
    Solution,
    SolutionStep,
    SphereMeasures,
    SquareMeasures,
    Topic,
    TriangleMeasures,
)
from ..utils.constants import DISPLAY_PRECISION
from ..utils.errors import (
    GeometricDomainError,
    InsufficientDimensionsError,
    UnknownShapeError,
)

# Numbers each shape needs
REQUIRED_DIMENSIONS = {
    "circle": 1,
    "rectangle": 2,
    "triangle": 3,
    "square": 1,
    "sphere": 1,
    "cube": 1,
}


def _r(value: float) -> str:
    """Round for display."""
    return f"{value:.{DISPLAY_PRECISION}f}"


def detect_shape(problem: str) -> str:
    """
    Pick the shape a geometry problem is about.

    Explicit shape names are checked first so "sphere with radius 3"
    is a sphere; a bare radius or circumference means a circle.
    """
    if "circle" in problem:
        return "circle"
    if "rectangle" in problem or "rectangular" in problem:
        return "rectangle"
    for shape in ("triangle", "square", "sphere", "cube"):
        if shape in problem:
            return shape
    if "radius" in problem or "circumference" in problem:
        return "circle"
    raise UnknownShapeError()


class GeometrySolver(BaseSolver):
    """
    Solver for circle, rectangle, triangle, square, sphere and cube.

    Measures keep full precision in the answer; steps and explanation
    round to two decimals.
    """

    name = "GeometrySolver"
    topic = Topic.GEOMETRY
    failure_message = "The geometry problem could not be solved."

    def _solve(self, problem: str, steps: List[SolutionStep]) -> Solution:
        shape = detect_shape(problem)
        numbers = extract_numbers(problem)
        required = REQUIRED_DIMENSIONS[shape]
        if len(numbers) < required:
            raise InsufficientDimensionsError(shape, required, len(numbers))

        handler = getattr(self, f"_solve_{shape}")
        return handler(problem, numbers[:required], steps)

    def _solve_circle(self, problem, dims, steps) -> Solution:
        r = dims[0]
        fr = format_step_value(r)
        self._add_step(steps, "Given", f"Radius (r) = {fr}", "Radius of the circle")

        circumference = 2 * math.pi * r
        self._add_step(
            steps,
            "Circumference",
            f"C = 2πr = 2 × π × {fr} = {_r(circumference)}",
            "Formula: C = 2πr",
        )

        area = math.pi * r * r
        self._add_step(
            steps, "Area", f"S = πr² = π × {fr}² = {_r(area)}", "Formula: S = πr²"
        )

        return Solution(
            problem=problem,
            answer=CircleMeasures(radius=r, circumference=circumference, area=area),
            steps=steps,
            explanation=(
                f"A circle of radius {fr} has circumference {_r(circumference)} "
                f"and area {_r(area)}."
            ),
        )

    def _solve_rectangle(self, problem, dims, steps) -> Solution:
        length, width = dims
        fl, fw = format_step_value(length), format_step_value(width)
        self._add_step(
            steps, "Given", f"Length = {fl}, Width = {fw}", "Rectangle dimensions"
        )

        perimeter = 2 * (length + width)
        self._add_step(
            steps,
            "Perimeter",
            f"P = 2(l + w) = 2({fl} + {fw}) = {format_step_value(perimeter)}",
            "Formula: P = 2(l + w)",
        )

        area = length * width
        self._add_step(
            steps,
            "Area",
            f"S = l × w = {fl} × {fw} = {format_step_value(area)}",
            "Formula: S = l × w",
        )

        return Solution(
            problem=problem,
            answer=RectangleMeasures(
                length=length, width=width, perimeter=perimeter, area=area
            ),
            steps=steps,
            explanation=(
                f"The rectangle has perimeter {format_step_value(perimeter)} "
                f"and area {format_step_value(area)}."
            ),
        )

    def _solve_triangle(self, problem, dims, steps) -> Solution:
        a, b, c = dims
        fa, fb, fc = (format_step_value(v) for v in dims)
        self._add_step(steps, "Given sides", f"a = {fa}, b = {fb}, c = {fc}", "Triangle sides")

        perimeter = a + b + c
        fp = format_step_value(perimeter)
        self._add_step(
            steps,
            "Perimeter",
            f"P = a + b + c = {fa} + {fb} + {fc} = {fp}",
            "Sum of all sides",
        )

        s = perimeter / 2
        self._add_step(
            steps,
            "Semi-perimeter",
            f"s = P/2 = {fp}/2 = {format_step_value(s)}",
            "Needed by Heron's formula",
        )

        radicand = s * (s - a) * (s - b) * (s - c)
        if radicand < 0:
            raise GeometricDomainError(
                f"Sides {fa}, {fb}, {fc} do not form a triangle.",
                technical_details=f"s(s-a)(s-b)(s-c) = {format_step_value(radicand)} < 0",
            )

        area = math.sqrt(radicand)
        self._add_step(
            steps,
            "Area (Heron's formula)",
            f"S = √[s(s-a)(s-b)(s-c)] = {_r(area)}",
            "S = √[s(s-a)(s-b)(s-c)]",
        )

        return Solution(
            problem=problem,
            answer=TriangleMeasures(
                sides=[a, b, c], perimeter=perimeter, semi_perimeter=s, area=area
            ),
            steps=steps,
            explanation=f"The triangle has perimeter {fp} and area {_r(area)}.",
        )

    def _solve_square(self, problem, dims, steps) -> Solution:
        side = dims[0]
        fs = format_step_value(side)
        self._add_step(steps, "Given", f"Side (a) = {fs}", "Side of the square")

        perimeter = 4 * side
        self._add_step(
            steps,
            "Perimeter",
            f"P = 4a = 4 × {fs} = {format_step_value(perimeter)}",
            "Formula: P = 4a",
        )

        area = side * side
        self._add_step(
            steps, "Area", f"S = a² = {fs}² = {format_step_value(area)}", "Formula: S = a²"
        )

        diagonal = side * math.sqrt(2)
        self._add_step(
            steps, "Diagonal", f"d = a√2 = {fs}√2 = {_r(diagonal)}", "Formula: d = a√2"
        )

        return Solution(
            problem=problem,
            answer=SquareMeasures(
                side=side, perimeter=perimeter, area=area, diagonal=diagonal
            ),
            steps=steps,
            explanation=(
                f"The square has perimeter {format_step_value(perimeter)}, "
                f"area {format_step_value(area)} and diagonal {_r(diagonal)}."
            ),
        )

    def _solve_sphere(self, problem, dims, steps) -> Solution:
        r = dims[0]
        fr = format_step_value(r)
        self._add_step(steps, "Given", f"Radius (r) = {fr}", "Radius of the sphere")

        surface = 4 * math.pi * r * r
        self._add_step(
            steps,
            "Surface area",
            f"S = 4πr² = 4 × π × {fr}² = {_r(surface)}",
            "Formula: S = 4πr²",
        )

        volume = (4 / 3) * math.pi * r ** 3
        self._add_step(
            steps,
            "Volume",
            f"V = (4/3)πr³ = (4/3) × π × {fr}³ = {_r(volume)}",
            "Formula: V = (4/3)πr³",
        )

        return Solution(
            problem=problem,
            answer=SphereMeasures(radius=r, surface_area=surface, volume=volume),
            steps=steps,
            explanation=f"The sphere has surface area {_r(surface)} and volume {_r(volume)}.",
        )

    def _solve_cube(self, problem, dims, steps) -> Solution:
        a = dims[0]
        fa = format_step_value(a)
        self._add_step(steps, "Given", f"Edge (a) = {fa}", "Edge of the cube")

        surface = 6 * a * a
        self._add_step(
            steps,
            "Surface area",
            f"S = 6a² = 6 × {fa}² = {format_step_value(surface)}",
            "Formula: S = 6a²",
        )

        volume = a ** 3
        self._add_step(
            steps,
            "Volume",
            f"V = a³ = {fa}³ = {format_step_value(volume)}",
            "Formula: V = a³",
        )

        return Solution(
            problem=problem,
            answer=CubeMeasures(edge=a, surface_area=surface, volume=volume),
            steps=steps,
            explanation=(
                f"The cube has surface area {format_step_value(surface)} "
                f"and volume {format_step_value(volume)}."
            ),
        )
