"""
Operand System for Segment Rules

Rule operands (comparison value, range bounds) are represented as small
immutable objects instead of raw values plus a sibling "type" string.

A compiled rule therefore always knows whether an operand is:
    - a Literal, passed to the comparator unchanged
    - a VariableReference, looked up in the state at evaluation time

ARCHITECTURAL RULE:
    Operands carry structure only.
    Resolution against a state belongs in the evaluator.
"""

from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


LITERAL = "literal"
VARIABLE = "variable"

OPERAND_TYPES = (LITERAL, VARIABLE)


class Operand(ABC):
    """
    Base class for rule operands.

    Exists to give the operand hierarchy a common type.
    """
    pass


@dataclass(frozen=True)
class Literal(Operand):
    """
    A constant operand value.

    Examples:
        - 18
        - "United States"
        - ["France", "Greece"]

    Properties:
        value: The literal value. None means the rule did not supply one.

    IMPORTANT:
        Strings, lists and nested structures are kept exactly as written.
        No coercion happens here.
    """

    value: Any

    @property
    def is_missing(self) -> bool:
        return self.value is None

    @property
    def label(self) -> Any:
        return self.value


@dataclass(frozen=True)
class VariableReference(Operand):
    """
    References a state variable by name.

    Examples:
        - dynamic_income_low
        - gpa_limit

    IMPORTANT:
        This object does NOT validate variable existence.
        A plan is reused across many states, so existence is
        checked per evaluation.
    """

    name: str

    @property
    def label(self) -> str:
        return self.name


class RuleType(Enum):
    """Group kinds a rule can belong to."""

    AND = "AND"
    OR = "OR"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["RuleType"]:
        """
        Parse a rule_type descriptor, case-insensitively.

        Returns None for anything that is not AND or OR.
        """
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


def make_operand(value: Any, operand_type: Optional[str]) -> Operand:
    """
    Build an operand from a raw rule value and its declared type.

    A value is only treated as a variable reference when it is declared
    as "variable" and is truthy. Falsy values such as 0 or False stay
    literals.
    """
    if operand_type == VARIABLE and value:
        return VariableReference(str(value))
    return Literal(value)
