"""
Rule Compiler: turns an ordered rule list into an evaluation Plan.

Compilation is pure and deterministic. It never looks at a state:
    - condition tests are normalized to comparator operation names
    - operands are classified as literals or variable references
    - AND/OR group membership is derived from rule_type + rule_name

Variable existence is NOT checked here. A plan is compiled once and
evaluated against many different states.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping as MappingABC
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from segrules.comparator import is_null_test, is_range_test, normalize_test_name
from segrules.errors import RuleDefinitionError
from segrules.model import Rule
from segrules.operands import (
    OPERAND_TYPES,
    Operand,
    RuleType,
    VariableReference,
    make_operand,
)
from segrules.serialization import rule_from_dict


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledRule:
    """
    One rule, validated and ready to interpret.

    Properties:
        index: Position in the source rule list
        variable_name: State variable under test
        test: Condition test as written (used in diagnostics)
        operation: Normalized comparator operation name
        is_range: Test takes minimum and maximum operands
        is_null: Test takes no comparison operand
        group_id: rule_name if the rule belongs to an AND/OR group, else None
        group_kind: RuleType of the group, else None
    """

    index: int
    variable_name: str
    test: str
    operation: str
    is_range: bool
    is_null: bool
    comparison: Operand
    minimum: Operand
    maximum: Operand
    rule_name: Optional[str]
    group_id: Optional[str]
    group_kind: Optional[RuleType]
    condition_output: Any
    condition_output_types: Mapping[str, str]

    @property
    def operands(self) -> Tuple[Operand, ...]:
        if self.is_range:
            return (self.minimum, self.maximum)
        return (self.comparison,)


@dataclass(frozen=True)
class GroupSpec:
    """An AND or OR group: member rule indexes in rule order."""

    id: str
    kind: RuleType
    members: Tuple[int, ...]
    merged_condition_output: Mapping[str, Any]


@dataclass(frozen=True)
class Plan:
    """
    Compiled, immutable representation of a rule list.

    INVARIANTS:
        - rules are in source order and rules[i].index == i
        - every grouped rule index appears in exactly one group member
          list per kind
        - ungrouped holds the indexes of all rules without a group
    """

    rules: Tuple[CompiledRule, ...]
    or_groups: Tuple[GroupSpec, ...]
    and_groups: Tuple[GroupSpec, ...]
    ungrouped: Tuple[int, ...]

    @property
    def groups(self) -> Tuple[GroupSpec, ...]:
        return self.or_groups + self.and_groups

    @property
    def referenced_variables(self) -> List[str]:
        """State variables the plan may read, in first-occurrence order."""
        names: Dict[str, None] = {}
        for rule in self.rules:
            names.setdefault(rule.variable_name, None)
            for operand in rule.operands:
                if isinstance(operand, VariableReference):
                    names.setdefault(operand.name, None)
        return list(names)


def _require_text(value: Any, field_name: str, index: int) -> str:
    if not isinstance(value, str) or not value.strip():
        raise RuleDefinitionError(f"Rule {index}: {field_name} must be a non-empty string")
    return value


def _check_type(value: Any, field_name: str, index: int) -> None:
    if value not in OPERAND_TYPES:
        raise RuleDefinitionError(
            f"Rule {index}: {field_name} must be one of {OPERAND_TYPES}, got {value!r}"
        )


def _compile_rule(rule: Rule, index: int, comparator: Any = None) -> CompiledRule:
    variable_name = _require_text(rule.variable_name, "variable_name", index)
    test = _require_text(rule.condition_test, "condition_test", index)

    _check_type(rule.value_comparison_type, "value_comparison_type", index)
    _check_type(rule.value_minimum_type, "value_minimum_type", index)
    _check_type(rule.value_maximum_type, "value_maximum_type", index)

    output_types = rule.condition_output_types or {}
    if not isinstance(output_types, MappingABC):
        raise RuleDefinitionError(f"Rule {index}: condition_output_types must be a mapping")
    for key, output_type in output_types.items():
        _check_type(output_type, f"condition_output_types[{key!r}]", index)

    operation = normalize_test_name(test)
    if comparator is not None and not comparator.has_operation(operation):
        raise RuleDefinitionError(f"Rule {index}: unknown condition test {test!r}")

    kind = RuleType.parse(rule.rule_type)
    group_id = rule.rule_name if kind is not None and rule.rule_name else None

    return CompiledRule(
        index=index,
        variable_name=variable_name,
        test=test,
        operation=operation,
        is_range=is_range_test(test),
        is_null=is_null_test(test),
        comparison=make_operand(rule.value_comparison, rule.value_comparison_type),
        minimum=make_operand(rule.value_minimum, rule.value_minimum_type),
        maximum=make_operand(rule.value_maximum, rule.value_maximum_type),
        rule_name=rule.rule_name,
        group_id=group_id,
        group_kind=kind if group_id is not None else None,
        condition_output=copy.deepcopy(rule.condition_output),
        condition_output_types=MappingProxyType(dict(output_types)),
    )


def _build_groups(rules: Iterable[CompiledRule], kind: RuleType) -> Tuple[GroupSpec, ...]:
    members: Dict[str, List[int]] = {}
    outputs: Dict[str, Dict[str, Any]] = {}
    for rule in rules:
        if rule.group_kind is not kind:
            continue
        members.setdefault(rule.group_id, []).append(rule.index)
        merged = outputs.setdefault(rule.group_id, {})
        if isinstance(rule.condition_output, MappingABC):
            merged.update(copy.deepcopy(dict(rule.condition_output)))
    return tuple(
        GroupSpec(
            id=group_id,
            kind=kind,
            members=tuple(indexes),
            merged_condition_output=MappingProxyType(outputs[group_id]),
        )
        for group_id, indexes in members.items()
    )


def compile_ruleset(
    ruleset: Iterable[Union[Rule, Mapping[str, Any]]],
    comparator: Any = None,
) -> Plan:
    """
    Compile an ordered rule list into a Plan.

    Args:
        ruleset: Rules (model objects or plain dicts), in evaluation order
        comparator: Optional comparator used to reject unknown tests early

    Returns:
        Plan ready for segrules.evaluator.evaluate_plan

    Raises:
        RuleDefinitionError: if any rule is malformed
    """
    compiled = []
    for index, rule in enumerate(ruleset):
        if not isinstance(rule, Rule):
            rule = rule_from_dict(rule)
        compiled.append(_compile_rule(rule, index, comparator))

    plan = Plan(
        rules=tuple(compiled),
        or_groups=_build_groups(compiled, RuleType.OR),
        and_groups=_build_groups(compiled, RuleType.AND),
        ungrouped=tuple(r.index for r in compiled if r.group_id is None),
    )
    logger.debug(
        "Compiled %d rules (%d OR groups, %d AND groups, %d ungrouped)",
        len(plan.rules), len(plan.or_groups), len(plan.and_groups), len(plan.ungrouped),
    )
    return plan
