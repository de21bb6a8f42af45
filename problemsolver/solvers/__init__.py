"""Solver layer: one solver per problem topic."""

from .base import BaseSolver, SolverRegistry
from .arithmetic_solver import ArithmeticSolver
from .algebra_solver import AlgebraSolver
from .calculus_solver import CalculusSolver
from .geometry_solver import GeometrySolver
from .trig_solver import TrigonometrySolver
from .statistics_solver import StatisticsSolver
from .matrix_solver import MatrixSolver
from .word_problem_solver import WordProblemSolver
from .general import GeneralSolver

__all__ = [
    "BaseSolver",
    "SolverRegistry",
    "ArithmeticSolver",
    "AlgebraSolver",
    "CalculusSolver",
    "GeometrySolver",
    "TrigonometrySolver",
    "StatisticsSolver",
    "MatrixSolver",
    "WordProblemSolver",
    "GeneralSolver",
    "get_default_registry",
]


def get_default_registry(strict_word_problems: bool = False) -> SolverRegistry:
    """
    Create and return a registry with a solver for every topic.

    GENERIC, and any topic left unregistered, goes to GeneralSolver.
    """
    general = GeneralSolver()
    registry = SolverRegistry(fallback=general)
    registry.register(ArithmeticSolver())
    registry.register(AlgebraSolver())
    registry.register(CalculusSolver())
    registry.register(GeometrySolver())
    registry.register(TrigonometrySolver())
    registry.register(StatisticsSolver())
    registry.register(MatrixSolver())
    registry.register(WordProblemSolver(strict=strict_word_problems))
    registry.register(general)
    return registry
