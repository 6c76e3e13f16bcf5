"""
Exception hierarchy for segment evaluation.

Every error the engine raises derives from SegmentError, so the top-level
evaluator boundary can convert all of them into a failure value with a
single except clause.
"""

from typing import Any


class SegmentError(Exception):
    """Base class for all segment compilation and evaluation errors."""
    pass


class RuleDefinitionError(SegmentError):
    """Raised when a rule definition is malformed and cannot be compiled."""
    pass


class MissingVariableError(SegmentError):
    """
    Raised when a variable required by a rule is not present in the state.

    Covers the rule subject, range bounds, comparison operands and
    variable-typed output values.
    """

    def __init__(self, variable_name: Any):
        self.variable_name = variable_name
        super().__init__(
            f"The Variable {variable_name} is required by a Rule but is not defined."
        )


class ResolutionError(SegmentError):
    """Raised when the merged output of passed rules cannot be resolved."""
    pass


class ComparisonError(SegmentError):
    """Raised when the comparator cannot evaluate a rule."""
    pass


class UnknownTestError(ComparisonError):
    """Raised when a condition test does not name a comparator operation."""

    def __init__(self, test_name: str):
        self.test_name = test_name
        super().__init__(f"Unknown condition test: {test_name!r}")


class SegmentLoadError(SegmentError):
    """Raised when a segment document cannot be parsed."""
    pass
