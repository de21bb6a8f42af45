"""
Problem text normalization.

Brings typed or OCR-extracted text into the canonical form every
classifier predicate and solver regex is written against.
"""

import re
from typing import List

# Alternate operator glyphs and their ASCII equivalents
GLYPH_REPLACEMENTS = [
    ("×", "*"),
    ("·", "*"),
    ("÷", "/"),
]

_WHITESPACE_RE = re.compile(r"\s+")
_QUOTES_RE = re.compile(r"[\"']")
# Exponent caret; a caret already written as ** is left alone
_CARET_RE = re.compile(r"\^")
_NUMBER_RE = re.compile(r"\d+\.?\d*")


def normalize(raw: str) -> str:
    """
    Canonicalize a raw problem string.

    - lowercase, collapse whitespace runs, trim
    - × and · become *, ÷ becomes /
    - ^ becomes ** (an exponent marker for the solver regexes)
    - quote characters are removed

    The result is stable under a second application.
    """
    if not raw:
        return ""

    result = raw.lower()
    result = _WHITESPACE_RE.sub(" ", result).strip()

    for glyph, ascii_op in GLYPH_REPLACEMENTS:
        result = result.replace(glyph, ascii_op)

    result = _CARET_RE.sub("**", result)
    result = _QUOTES_RE.sub("", result)

    # Removing quotes can leave doubled or edge spaces behind
    return _WHITESPACE_RE.sub(" ", result).strip()


def extract_numbers(text: str) -> List[float]:
    """
    Return every unsigned numeric token in textual order.

    "rectangle 4 by 6.5" -> [4.0, 6.5]
    """
    return [float(token) for token in _NUMBER_RE.findall(text)]
