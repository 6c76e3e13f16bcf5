"""
Segment Rules Engine

Evaluates a declarative, ordered list of business rules (a "segment")
against a state of named variables and returns the merged condition output
of the rules that passed.

Layers:
    - model / serialization: how segments are authored and loaded
    - compiler: rule list -> immutable Plan
    - evaluator / output: Plan + state -> rule results -> output
    - engine: create_evaluator(), the never-raise public boundary

Comparison operations are supplied by a Comparator. A default one ships
in segrules.comparator and can be replaced per evaluator.
"""

from segrules.comparator import Comparator, normalize_test_name
from segrules.compiler import Plan, compile_ruleset
from segrules.engine import create_evaluator
from segrules.errors import (
    ComparisonError,
    MissingVariableError,
    ResolutionError,
    RuleDefinitionError,
    SegmentError,
    SegmentLoadError,
    UnknownTestError,
)
from segrules.evaluator import EvaluationOutcome, evaluate_plan
from segrules.model import Rule, Segment
from segrules.output import resolve_output
from segrules.serialization import load_segment

__version__ = "0.1.0"

__all__ = [
    "Comparator",
    "ComparisonError",
    "EvaluationOutcome",
    "MissingVariableError",
    "Plan",
    "ResolutionError",
    "Rule",
    "RuleDefinitionError",
    "Segment",
    "SegmentError",
    "SegmentLoadError",
    "UnknownTestError",
    "compile_ruleset",
    "create_evaluator",
    "evaluate_plan",
    "load_segment",
    "normalize_test_name",
    "resolve_output",
]
