#!/usr/bin/env python3
"""
ProblemSolver - heuristic step-by-step math problem solver.

Entry point for the command line interface.

Usage:
    problemsolver "2 + 3 * 4"               # Solve and print the answer
    problemsolver -s "x^2 - 5x + 6 = 0"     # Show solution steps
    problemsolver -f json "circle radius 5" # Output as JSON
    problemsolver --history                 # Show recent history
"""

import sys
import os
import argparse
import logging

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(__file__))

logger = logging.getLogger("problemsolver")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    from problemsolver import __version__

    parser = argparse.ArgumentParser(
        prog="problemsolver",
        description="Heuristic step-by-step solver for free-form math problems",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  problemsolver "2 + 3 * 4"                 Evaluate an expression
  problemsolver -s "2x + 3 = 7"             Solve with steps
  problemsolver "derivative of x^3"         Differentiate
  problemsolver -f json "sin 45"            Trig values as JSON
  problemsolver --classify "mean of 1 2 3"  Show the detected topic
  echo "5 + 5" | problemsolver -            Read the problem from stdin
        """,
    )

    # Positional: problem to solve
    parser.add_argument(
        "problem",
        nargs="?",
        help="Problem to solve (use - to read from stdin)",
    )

    # Output format
    parser.add_argument(
        "-f",
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    # Show steps
    parser.add_argument(
        "-s",
        "--steps",
        action="store_true",
        help="Show solution steps",
    )

    parser.add_argument(
        "--classify",
        action="store_true",
        help="Print the detected topic and the rule that matched, then exit",
    )

    # History
    parser.add_argument(
        "--history",
        nargs="?",
        const=10,
        type=int,
        metavar="N",
        help="Print the N most recent saved solutions (default 10)",
    )

    parser.add_argument(
        "--db",
        metavar="PATH",
        help="History database path",
    )

    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not save the solution to history",
    )

    parser.add_argument(
        "--strict-word",
        action="store_true",
        help="Fail word problems that name no operation",
    )

    # Version
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Verbose
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    return parser


def configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def open_database(path: str | None):
    from problemsolver.utils.database import HistoryDatabase

    return HistoryDatabase(path)


def show_history(limit: int, db_path: str | None) -> int:
    """Print recent history entries."""
    from problemsolver.utils.errors import HistoryError, format_error_for_user

    try:
        entries = open_database(db_path).get_recent(limit=limit)
    except HistoryError as e:
        print(f"Error: {format_error_for_user(e)}", file=sys.stderr)
        return 1

    if not entries:
        print("No history yet")
        return 0

    for entry in entries:
        mark = "✗" if entry.failed else "✓"
        print(f"[{entry.id}] {entry.timestamp:%Y-%m-%d %H:%M} {mark} ({entry.topic})")
        print(f"    {entry.problem}")
        print(f"    = {entry.answer}")
    return 0


def classify_cli(problem: str) -> int:
    """Print the topic and the classifier rule that matched."""
    from problemsolver.classification import ProblemClassifier

    topic, rule = ProblemClassifier().explain(problem)
    print(f"Topic: {topic.icon} {topic.value}")
    print(f"Rule: {rule or 'default'}")
    return 0


def solve_problem_cli(
    problem: str,
    output_format: str,
    show_steps: bool,
    strict_word: bool,
    save: bool,
    db_path: str | None,
) -> int:
    """Solve a problem and print the result."""
    from problemsolver.engine import ProblemSolver
    from problemsolver.output import SolutionFormatter
    from problemsolver.solvers import get_default_registry
    from problemsolver.utils.errors import HistoryError, format_error_for_user

    solver = ProblemSolver(registry=get_default_registry(strict_word_problems=strict_word))
    solution = solver.solve(problem)

    formatter = SolutionFormatter(solution)
    if output_format == "json":
        print(formatter.to_json(show_steps=show_steps))
    else:
        print(formatter.to_text(show_steps=show_steps))

    if save:
        try:
            open_database(db_path).add_solution(solution)
        except HistoryError as e:
            logger.warning("History not saved: %s", e.technical_details)
            print(f"Warning: {format_error_for_user(e)}", file=sys.stderr)

    return 1 if solution.failed else 0


def main(argv=None):
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    # History mode
    if args.history is not None:
        return show_history(args.history, args.db)

    problem = args.problem
    if problem == "-":
        problem = sys.stdin.read().strip()

    if not problem:
        parser.print_usage(sys.stderr)
        print("Error: No problem given", file=sys.stderr)
        return 1

    if args.classify:
        return classify_cli(problem)

    return solve_problem_cli(
        problem=problem,
        output_format=args.format,
        show_steps=args.steps,
        strict_word=args.strict_word,
        save=not args.no_save,
        db_path=args.db,
    )


if __name__ == "__main__":
    sys.exit(main() or 0)
