"""Output layer: answer formatting, step text, and export."""

from .formatter import FormatOptions, SolutionFormatter, format_answer, format_number
from .step_generator import StepGenerator

__all__ = [
    "FormatOptions",
    "SolutionFormatter",
    "StepGenerator",
    "format_answer",
    "format_number",
]
