"""
Serialization helpers for segment objects (Segment, Rule).

Segments are usually authored as YAML or JSON documents. This module maps
them to and from the model objects through an intermediate dict
representation that mirrors the authoring vocabulary one to one.
"""
from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml

from segrules.errors import SegmentLoadError
from segrules.model import Rule, Segment
from segrules.operands import LITERAL


logger = logging.getLogger(__name__)


def rule_to_dict(r: Rule) -> Dict[str, Any]:
    return {
        "variable_name": r.variable_name,
        "condition_test": r.condition_test,
        "rule_type": r.rule_type,
        "rule_name": r.rule_name,
        "condition_output": copy.deepcopy(r.condition_output),
        "condition_output_types": dict(r.condition_output_types),
        "value_comparison": r.value_comparison,
        "value_minimum": r.value_minimum,
        "value_maximum": r.value_maximum,
        "value_comparison_type": r.value_comparison_type,
        "value_minimum_type": r.value_minimum_type,
        "value_maximum_type": r.value_maximum_type,
    }


def rule_from_dict(d: Mapping[str, Any]) -> Rule:
    if not isinstance(d, Mapping):
        raise SegmentLoadError(f"Rule definition must be a mapping, got {type(d).__name__}")
    output = d.get("condition_output")
    output_types = d.get("condition_output_types")
    if isinstance(output_types, Mapping):
        output_types = dict(output_types)
    return Rule(
        variable_name=d.get("variable_name"),
        condition_test=d.get("condition_test"),
        rule_type=d.get("rule_type"),
        rule_name=d.get("rule_name"),
        condition_output=copy.deepcopy(output) if output is not None else {},
        condition_output_types=output_types if output_types is not None else {},
        value_comparison=d.get("value_comparison"),
        value_minimum=d.get("value_minimum"),
        value_maximum=d.get("value_maximum"),
        value_comparison_type=d.get("value_comparison_type") or LITERAL,
        value_minimum_type=d.get("value_minimum_type") or LITERAL,
        value_maximum_type=d.get("value_maximum_type") or LITERAL,
    )


def segment_to_dict(s: Segment) -> Dict[str, Any]:
    return {
        "name": s.name,
        "ruleset": [rule_to_dict(r) for r in s.ruleset],
        "sync": s.sync,
    }


def segment_from_dict(d: Mapping[str, Any]) -> Segment:
    if not isinstance(d, Mapping):
        raise SegmentLoadError(f"Segment definition must be a mapping, got {type(d).__name__}")
    ruleset = d.get("ruleset") or []
    if not isinstance(ruleset, list):
        raise SegmentLoadError("Segment ruleset must be a list of rules")
    return Segment(
        name=d.get("name", ""),
        ruleset=[rule_from_dict(r) for r in ruleset],
        sync=d.get("sync") is True,
    )


def segment_to_json(s: Segment) -> str:
    return json.dumps(segment_to_dict(s), sort_keys=True)


def segment_from_json(s: str) -> Segment:
    try:
        d = json.loads(s)
    except json.JSONDecodeError as e:
        raise SegmentLoadError(f"Invalid segment JSON: {e}") from e
    return segment_from_dict(d)


def segment_to_yaml(s: Segment) -> str:
    return yaml.safe_dump(segment_to_dict(s), sort_keys=False)


def segment_from_yaml(s: str) -> Segment:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise SegmentLoadError(f"Invalid segment YAML: {e}") from e
    return segment_from_dict(d)


def load_segment(path: Union[str, Path]) -> Segment:
    """
    Load a segment definition from a .yaml, .yml or .json file.

    Raises:
        SegmentLoadError: unsupported extension or unparsable document
    """
    path = Path(path)
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix in (".yaml", ".yml"):
        segment = segment_from_yaml(text)
    elif suffix == ".json":
        segment = segment_from_json(text)
    else:
        raise SegmentLoadError(f"Unsupported segment file type: {path.name}")
    logger.debug("Loaded segment %r with %d rules from %s", segment.name, len(segment.ruleset), path)
    return segment
