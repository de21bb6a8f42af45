"""
Solver configuration constants.

Labels, lookup tables and numeric settings shared by the solvers,
the session and the output layer.
"""

# Sentinel answer carried by every failed Solution
ERROR_ANSWER = "Xatolik"

NO_REAL_ROOTS = "No real roots"
MATRIX_PLACEHOLDER = "Matrix solver"

# Indefinite integrals known to the lookup solver, keyed by the
# normalized integrand (after ^ -> ** and with spaces removed)
INTEGRAL_TABLE = {
    "x": "x²/2 + C",
    "x**2": "x³/3 + C",
    "x**3": "x⁴/4 + C",
    "1/x": "ln|x| + C",
    "sin(x)": "-cos(x) + C",
    "cos(x)": "sin(x) + C",
    "e**x": "e^x + C",
}
INTEGRAL_FALLBACK = "F(x) + C"

DEFAULT_ANGLE_DEGREES = 30.0

# Decimal places used when rendering answers
DISPLAY_PRECISION = 2
ANSWER_PRECISION = 4

FLOAT_TOLERANCE = 1e-9

# |cos θ| below this is treated as a tangent asymptote
TAN_ASYMPTOTE_EPSILON = 1e-12

# A problem needs more tokens than this to be read as a word problem
WORD_PROBLEM_MIN_TOKENS = 10

# Seconds a single SymPy call may run before it is abandoned
SOLVE_TIMEOUT_SECONDS = 5

# Largest exact power (in decimal digits) SymPy is asked to build
MAX_POWER_DIGITS = 10000

# Number of solved problems the session keeps
HISTORY_LIMIT = 50

# Names the numeric evaluator accepts besides numbers and operators
SUPPORTED_FUNCTIONS = {
    "sqrt",
    "sin",
    "cos",
    "tan",
    "log",
    "ln",
    "exp",
    "abs",
    "pi",
    "e",
}

TOPIC_ICONS = {
    "arithmetic": "🔢",
    "algebra": "📐",
    "calculus": "∫",
    "geometry": "△",
    "trigonometry": "📏",
    "statistics": "📊",
    "matrix": "⊞",
    "word": "📝",
}
DEFAULT_ICON = "🔢"
