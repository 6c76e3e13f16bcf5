"""
Tests for serialization and loading of segment definitions.

These tests ensure lossless JSON/YAML round-trip and file loading using the
explicit serialization functions in `segrules.serialization`.
"""

import pytest
from segrules.engine import create_evaluator
from segrules.errors import SegmentLoadError
from segrules.examples import build_dynamic_segment
from segrules.serialization import (
    load_segment,
    rule_from_dict,
    segment_from_dict,
    segment_from_json,
    segment_from_yaml,
    segment_to_dict,
    segment_to_json,
    segment_to_yaml,
)


SEGMENT_YAML = """\
name: yaml_scholarship
sync: true
ruleset:
  - variable_name: age
    condition_test: Greater Than Or Equal
    value_comparison: 18
    rule_name: old_enough
    condition_output:
      old_enough: true
  - variable_name: family_income
    condition_test: Range
    value_minimum: income_floor
    value_minimum_type: variable
    value_maximum: 50000
    rule_type: OR
    rule_name: need
    condition_output:
      scholarship: award_amount
    condition_output_types:
      scholarship: variable
"""


def test_json_roundtrip():
    segment = build_dynamic_segment()
    before = segment_to_dict(segment)
    restored = segment_from_json(segment_to_json(segment))
    assert segment_to_dict(restored) == before


def test_yaml_roundtrip():
    segment = build_dynamic_segment()
    before = segment_to_dict(segment)
    restored = segment_from_yaml(segment_to_yaml(segment))
    assert segment_to_dict(restored) == before


def test_rule_defaults():
    rule = rule_from_dict({"variable_name": "age", "condition_test": "Equal"})
    assert rule.condition_output == {}
    assert rule.condition_output_types == {}
    assert rule.value_comparison_type == "literal"
    assert rule.rule_type is None


def test_non_mapping_output_types_passed_through():
    """A malformed output_types value is left for the compiler to reject."""
    rule = rule_from_dict({
        "variable_name": "age",
        "condition_test": "Equal",
        "condition_output_types": "variable",
    })
    assert rule.condition_output_types == "variable"


def test_sync_must_be_true_to_be_sync():
    assert segment_from_dict({"name": "s", "sync": True}).sync is True
    assert segment_from_dict({"name": "s", "sync": "yes"}).sync is False
    assert segment_from_dict({"name": "s"}).sync is False


@pytest.mark.parametrize("document", [
    "[1, 2",
    "- just\n- a list\n",
    "name: s\nruleset: not-a-list\n",
    "name: s\nruleset:\n  - 42\n",
])
def test_malformed_yaml(document):
    with pytest.raises(SegmentLoadError):
        segment_from_yaml(document)


def test_malformed_json():
    with pytest.raises(SegmentLoadError):
        segment_from_json("{")


def test_load_yaml_file_and_evaluate(tmp_path):
    path = tmp_path / "scholarship.yaml"
    path.write_text(SEGMENT_YAML)
    segment = load_segment(path)
    assert segment.name == "yaml_scholarship"
    assert segment.sync is True
    assert segment.ruleset[1].value_minimum_type == "variable"

    result = create_evaluator(segment, "yaml_module")({
        "age": 21,
        "family_income": 20000,
        "income_floor": 10000,
        "award_amount": 7500,
    })
    assert result["output"] == {"old_enough": True, "scholarship": 7500}


def test_load_json_file(tmp_path):
    path = tmp_path / "dynamic.json"
    path.write_text(segment_to_json(build_dynamic_segment()))
    assert segment_to_dict(load_segment(path)) == segment_to_dict(build_dynamic_segment())


def test_load_unsupported_extension(tmp_path):
    path = tmp_path / "segment.txt"
    path.write_text("name: s\n")
    with pytest.raises(SegmentLoadError, match="segment.txt"):
        load_segment(path)
