"""
Plan Evaluator: runs a compiled Plan against one state snapshot.

Produces:
    - one RuleResult per rule, in rule order
    - the member booleans of every AND/OR group
    - the overall pass flag (GroupAggregator)
    - the merged output-type map used by the output resolver

All bookkeeping lives in locals of a single evaluate_plan() call, so one
Plan can be evaluated by any number of callers at the same time.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence

from segrules.compiler import CompiledRule, GroupSpec, Plan
from segrules.errors import ComparisonError, MissingVariableError, SegmentError
from segrules.operands import Literal, Operand, RuleType, VariableReference


_MISSING = object()


@dataclass
class GroupOutcome:
    """Evaluated AND/OR group."""

    id: str
    kind: RuleType
    members: List[bool] = field(default_factory=list)
    merged_condition_output: Dict[str, Any] = field(default_factory=dict)
    passed: bool = False


@dataclass
class EvaluationOutcome:
    """
    Everything one evaluation of a Plan produced.

    Properties:
        rule_results: {"name", "passed", "condition_output"} per rule
        groups: OR groups then AND groups, each in first-occurrence order
        ungrouped: pass flags of rules outside any group, in rule order
        passes: overall pass flag
        output_types: output key -> "literal" | "variable", last write wins
    """

    rule_results: List[Dict[str, Any]] = field(default_factory=list)
    groups: List[GroupOutcome] = field(default_factory=list)
    ungrouped: List[bool] = field(default_factory=list)
    passes: bool = False
    output_types: Dict[str, str] = field(default_factory=dict)


def or_group_passes(members: Sequence[bool]) -> bool:
    return any(m is True for m in members)


def and_group_passes(members: Sequence[bool]) -> bool:
    return all(m is True for m in members)


def overall_passes(ungrouped: Sequence[bool], groups: Sequence[GroupOutcome]) -> bool:
    """
    No ungrouped rule failed and every group passed.

    Empty collections are vacuously true.
    """
    return False not in ungrouped and all(g.passed for g in groups)


def _lookup(state: Mapping[str, Any], name: Any) -> Any:
    try:
        return state.get(name, _MISSING)
    except TypeError:
        # unhashable names can never be state keys
        return _MISSING


def _resolve(operand: Operand, state: Mapping[str, Any]) -> Any:
    if isinstance(operand, VariableReference):
        return _lookup(state, operand.name)
    if isinstance(operand, Literal) and operand.is_missing:
        return _MISSING
    return operand.value


def _resolve_required(operand: Operand, state: Mapping[str, Any]) -> Any:
    value = _resolve(operand, state)
    if value is _MISSING:
        raise MissingVariableError(operand.label)
    return value


def _resolve_operands(rule: CompiledRule, state: Mapping[str, Any]) -> List[Any]:
    if rule.is_range:
        return [
            _resolve_required(rule.minimum, state),
            _resolve_required(rule.maximum, state),
        ]
    if rule.is_null:
        value = _resolve(rule.comparison, state)
        return [None if value is _MISSING else value]
    return [_resolve_required(rule.comparison, state)]


def _run_comparison(rule: CompiledRule, comparator: Any, value: Any, operands: List[Any]) -> bool:
    try:
        operation = comparator.operation(rule.operation)
        return bool(operation(value, *operands))
    except SegmentError:
        raise
    except Exception as e:
        raise ComparisonError(
            f"Rule {rule.index} ({rule.test}) could not compare {rule.variable_name}: {e}"
        ) from e


def _aggregate(plan: Plan, members: Dict[str, List[bool]]) -> List[GroupOutcome]:
    outcomes = []
    for spec in plan.or_groups:
        outcomes.append(_group_outcome(spec, members, or_group_passes))
    for spec in plan.and_groups:
        outcomes.append(_group_outcome(spec, members, and_group_passes))
    return outcomes


def _group_outcome(spec: GroupSpec, members: Dict[str, List[bool]], test) -> GroupOutcome:
    values = list(members.get(spec.id, []))
    return GroupOutcome(
        id=spec.id,
        kind=spec.kind,
        members=values,
        merged_condition_output=copy.deepcopy(dict(spec.merged_condition_output)),
        passed=test(values),
    )


def evaluate_plan(plan: Plan, state: Mapping[str, Any], comparator: Any) -> EvaluationOutcome:
    """
    Evaluate every rule of a plan against a state.

    Args:
        plan: Compiled plan
        state: Variable name -> value. Only read, never written.
        comparator: Object providing operation(name)

    Returns:
        EvaluationOutcome

    Raises:
        MissingVariableError: a subject or required operand is absent
        ComparisonError: the comparator rejected the test or its operands

    Any error aborts the whole evaluation; no partial outcome is returned.
    """
    members: Dict[str, List[bool]] = {}
    ungrouped: List[bool] = []
    rule_results: List[Dict[str, Any]] = []
    output_types: Dict[str, str] = {}

    for rule in plan.rules:
        value = _lookup(state, rule.variable_name)
        if value is _MISSING:
            raise MissingVariableError(rule.variable_name)

        operands = _resolve_operands(rule, state)
        passed = _run_comparison(rule, comparator, value, operands)

        if rule.group_id is not None:
            members.setdefault(rule.group_id, []).append(passed)
        else:
            ungrouped.append(passed)

        rule_results.append({
            "name": rule.rule_name,
            "passed": passed,
            "condition_output": copy.deepcopy(rule.condition_output),
        })
        output_types.update(rule.condition_output_types)

    groups = _aggregate(plan, members)
    return EvaluationOutcome(
        rule_results=rule_results,
        groups=groups,
        ungrouped=ungrouped,
        passes=overall_passes(ungrouped, groups),
        output_types=output_types,
    )
