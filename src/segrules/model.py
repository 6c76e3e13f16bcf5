"""
Core Segment Model Objects

Defines the declarative data structures a segment is authored in:
    - Rules (one conditional test against a state variable)
    - Segments (a named, ordered rule list plus execution mode)

ARCHITECTURAL RULE:
    These objects:
        - Describe rules, they do not evaluate them
        - Are plain data, fully serializable
        - Keep the authoring vocabulary (strings for tests and types)

Compilation into an executable form happens in segrules.compiler.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .operands import LITERAL


@dataclass
class Rule:
    """
    A single conditional test against a state variable.

    Properties:
        variable_name:
            State variable the test is applied to (the "subject")
            Example: "family_income"

        condition_test:
            Human-readable test descriptor. Matched against comparator
            operations case-insensitively with whitespace removed.
            Examples: "Equal", "Greater Than", "Range", "Is Null"

        rule_type:
            "AND", "OR" or None. Only meaningful together with rule_name.

        rule_name:
            Group id. Rules sharing a rule_name and rule_type are
            aggregated together.

        condition_output:
            Mapping merged into the final output when this rule passes.
            Example: {"scholarship": 50000}

        condition_output_types:
            Per output key, "literal" or "variable". A "variable" output
            value is a state variable name resolved after merging.

        value_comparison / value_minimum / value_maximum:
            Operands. Range tests use minimum and maximum, null tests use
            none, every other test uses value_comparison.

        value_comparison_type / value_minimum_type / value_maximum_type:
            "literal" (default) or "variable".
    """

    variable_name: str
    condition_test: str
    rule_type: Optional[str] = None
    rule_name: Optional[str] = None
    condition_output: Any = field(default_factory=dict)
    condition_output_types: Dict[str, str] = field(default_factory=dict)
    value_comparison: Any = None
    value_minimum: Any = None
    value_maximum: Any = None
    value_comparison_type: str = LITERAL
    value_minimum_type: str = LITERAL
    value_maximum_type: str = LITERAL


@dataclass
class Segment:
    """
    A named, ordered rule list plus execution mode.

    Properties:
        name:
            Segment identifier, echoed in evaluation results

        ruleset:
            Ordered rules. Order decides evaluation order and
            output merge order.

        sync:
            True: the evaluator returns results directly.
            False: the evaluator returns a completed Future.
    """

    name: str
    ruleset: List[Rule] = field(default_factory=list)
    sync: bool = False
