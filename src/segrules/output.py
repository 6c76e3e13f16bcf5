"""
Output resolution: merge the condition outputs of passed rules.

Outputs are merged in rule order, so a later passed rule overwrites keys
set by an earlier one. Keys typed "variable" hold a state variable name and
are replaced by that variable's value once merging is done.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping as MappingABC
from typing import Any, Dict, Iterable, Mapping

from segrules.errors import MissingVariableError, ResolutionError
from segrules.operands import VARIABLE


def merge_passed_outputs(rule_results: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    merged: Dict[str, Any] = {}
    for result in rule_results:
        if result.get("passed") is not True:
            continue
        condition_output = result.get("condition_output")
        if isinstance(condition_output, MappingABC):
            merged.update(copy.deepcopy(dict(condition_output)))
    return merged


def resolve_output(
    rule_results: Iterable[Mapping[str, Any]],
    output_types: Mapping[str, str],
    state: Mapping[str, Any],
) -> Dict[str, Any]:
    """
    Build the final output of an evaluation.

    Args:
        rule_results: RuleResults in rule order
        output_types: output key -> "literal" | "variable"
        state: State used for variable-typed outputs

    Raises:
        MissingVariableError: a variable-typed output names an absent variable
        ResolutionError: a variable-typed output value cannot name a variable
    """
    output = merge_passed_outputs(rule_results)
    for key, value in output.items():
        if output_types.get(key) != VARIABLE:
            continue
        try:
            present = value in state
        except TypeError as e:
            raise ResolutionError(
                f"Output {key!r} is typed as a variable but holds {value!r}"
            ) from e
        if not present:
            raise MissingVariableError(value)
        output[key] = state[value]
    return output
