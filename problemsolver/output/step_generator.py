"""
Step-by-step solution text.

Builds SolutionStep records and renders them for display.
"""

from typing import List

from ..models import SolutionStep


class StepGenerator:
    """
    Create and render solution steps.

    Solvers number their own steps; this class is used by callers that
    assemble steps by hand and by the text formatter.
    """

    def create_step(
        self,
        step_number: int,
        description: str,
        expression: str,
        explanation: str = "",
    ) -> SolutionStep:
        """
        Create a solution step.

        Args:
            step_number: Sequential step number, starting at 1
            description: Short label for the step
            expression: Formatted expression at this step
            explanation: Optional sentence explaining the step

        Returns:
            SolutionStep object
        """
        return SolutionStep(
            step_number=step_number,
            description=description,
            expression=expression,
            explanation=explanation,
        )

    def format_step_text(self, step: SolutionStep) -> str:
        """Format a single step as 'N. description: expression'."""
        text = f"{step.step_number}. {step.description}: {step.expression}"
        if step.explanation:
            text += f" ({step.explanation})"
        return text

    def steps_to_text(self, steps: List[SolutionStep], indent: int = 0) -> str:
        pad = " " * indent
        return "\n".join(pad + self.format_step_text(s) for s in steps)
