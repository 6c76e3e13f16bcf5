"""
Tests for the rule operand system.

These tests verify:
    - Operand objects can be created and are immutable
    - Raw rule values are classified as literals or variable references
    - rule_type descriptors parse case-insensitively
"""

import pytest
from segrules.operands import (
    Literal,
    Operand,
    RuleType,
    VariableReference,
    make_operand,
)


class TestVariableReference:
    """Test variable reference operands."""

    def test_create_variable_reference(self):
        """Should reference a state variable by name."""
        ref = VariableReference("gpa_limit")
        assert ref.name == "gpa_limit"
        assert ref.label == "gpa_limit"

    def test_variable_reference_is_operand(self):
        assert isinstance(VariableReference("x"), Operand)

    def test_variable_reference_immutable(self):
        """Variable references should be immutable."""
        ref = VariableReference("gpa_limit")
        with pytest.raises(AttributeError):
            ref.name = "Changed"


class TestLiteral:
    """Test literal operands."""

    def test_string_literal_kept_as_string(self):
        lit = Literal("United States")
        assert lit.value == "United States"
        assert not lit.is_missing

    def test_list_literal_kept_unchanged(self):
        """Arrays pass through as written."""
        countries = ["France", "Greece"]
        assert Literal(countries).value is countries

    def test_zero_is_not_missing(self):
        """Falsy values are still supplied values."""
        assert not Literal(0).is_missing
        assert not Literal(False).is_missing
        assert not Literal("").is_missing

    def test_none_is_missing(self):
        assert Literal(None).is_missing

    def test_literal_immutable(self):
        lit = Literal(5)
        with pytest.raises(AttributeError):
            lit.value = 10


class TestMakeOperand:
    """Test classification of raw rule values."""

    def test_variable_type_makes_reference(self):
        assert make_operand("dynamic_income_low", "variable") == VariableReference("dynamic_income_low")

    def test_literal_type_makes_literal(self):
        assert make_operand("dynamic_income_low", "literal") == Literal("dynamic_income_low")

    def test_missing_type_defaults_to_literal(self):
        assert make_operand(18, None) == Literal(18)

    def test_variable_type_without_value_stays_literal(self):
        """A variable type with nothing to name is not a reference."""
        assert make_operand(None, "variable") == Literal(None)
        assert make_operand("", "variable") == Literal("")

    def test_falsy_variable_value_stays_literal(self):
        """0 and False are kept as literal values, never looked up."""
        assert make_operand(0, "variable") == Literal(0)
        assert make_operand(False, "variable") == Literal(False)


class TestRuleType:
    """Test rule_type parsing."""

    @pytest.mark.parametrize("raw", ["AND", "and", " And "])
    def test_and(self, raw):
        assert RuleType.parse(raw) is RuleType.AND

    @pytest.mark.parametrize("raw", ["OR", "or", "Or"])
    def test_or(self, raw):
        assert RuleType.parse(raw) is RuleType.OR

    @pytest.mark.parametrize("raw", [None, "", "XOR", "simple", 1])
    def test_other_values_are_ungrouped(self, raw):
        assert RuleType.parse(raw) is None
