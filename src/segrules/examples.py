"""
Example scholarship segments.

Three segments of increasing complexity, used by the demo script and the
tests:
    - basic: ungrouped rules only
    - complex: an AND group and an OR group next to ungrouped rules
    - dynamic: operands and outputs that are resolved from the state
"""
from segrules.model import Rule, Segment
from segrules.operands import VARIABLE


ENGLISH_SPEAKING_COUNTRIES = ["United States", "United Kingdom", "Canada", "Australia"]


def build_basic_segment(sync: bool = True) -> Segment:
    segment = Segment(name="basic_scholarship", sync=sync)
    segment.ruleset = [
        Rule(
            variable_name="age",
            condition_test="Greater Than Or Equal",
            value_comparison=18,
            rule_name="old_enough",
            condition_output={"old_enough": True},
        ),
        Rule(
            variable_name="country",
            condition_test="Equal",
            value_comparison="United States",
            rule_name="native_english",
            condition_output={"primary_language": "English", "required_language_hours": 0},
        ),
        Rule(
            variable_name="country",
            condition_test="Not Equal",
            value_comparison="United States",
            rule_name="language_course",
            condition_output={"required_language_hours": 120},
        ),
        Rule(
            variable_name="family_income",
            condition_test="Range",
            value_minimum=0,
            value_maximum=50000,
            rule_name="need_based",
            condition_output={"scholarship": 50000},
        ),
    ]
    return segment


def build_complex_segment(sync: bool = True) -> Segment:
    segment = Segment(name="complex_scholarship", sync=sync)
    segment.ruleset = [
        Rule(
            variable_name="age",
            condition_test="Greater Than Or Equal",
            value_comparison=18,
            condition_output={"old_enough": True},
        ),
        # English proficiency: both must hold
        Rule(
            variable_name="country",
            condition_test="In",
            value_comparison=ENGLISH_SPEAKING_COUNTRIES,
            rule_type="AND",
            rule_name="english_proficiency",
            condition_output={"primary_language": "English"},
        ),
        Rule(
            variable_name="has_sat_ii_english",
            condition_test="Equal",
            value_comparison=True,
            rule_type="AND",
            rule_name="english_proficiency",
            condition_output={"required_language_hours": 0},
        ),
        Rule(
            variable_name="family_income",
            condition_test="Less Than",
            value_comparison=250000,
            rule_name="income_cap",
            condition_output={"scholarship": 10000},
        ),
        # Financial need: either is enough
        Rule(
            variable_name="family_income",
            condition_test="Less Than",
            value_comparison=50000,
            rule_type="OR",
            rule_name="financial_need",
            condition_output={"scholarship": 50000},
        ),
        Rule(
            variable_name="has_dependents",
            condition_test="Equal",
            value_comparison=True,
            rule_type="OR",
            rule_name="financial_need",
            condition_output={"scholarship": 50000},
        ),
    ]
    return segment


def build_dynamic_segment(sync: bool = True) -> Segment:
    segment = Segment(name="dynamic_scholarship", sync=sync)
    segment.ruleset = [
        Rule(
            variable_name="country",
            condition_test="Equal",
            value_comparison="France",
            rule_name="language",
            condition_output={
                "primary_language": "preferred_language",
                "required_language_hours": "calculated_language_hours",
            },
            condition_output_types={
                "primary_language": VARIABLE,
                "required_language_hours": VARIABLE,
            },
        ),
        Rule(
            variable_name="family_income",
            condition_test="Range",
            value_minimum="dynamic_income_low",
            value_minimum_type=VARIABLE,
            value_maximum="dynamic_income_high",
            value_maximum_type=VARIABLE,
            rule_name="need_based",
            condition_output={"scholarship": 50000},
        ),
        Rule(
            variable_name="gpa",
            condition_test="Greater Than",
            value_comparison="gpa_limit",
            value_comparison_type=VARIABLE,
            rule_name="merit",
            condition_output={"additional_scholarship": 50000},
        ),
    ]
    return segment
