"""Input layer: problem normalization and shape parsers."""

from .normalizer import normalize, extract_numbers
from .parser import parse_linear, parse_quadratic, parse_angle

__all__ = ["normalize", "extract_numbers", "parse_linear", "parse_quadratic", "parse_angle"]
