"""
Segment evaluator factory: the public entry point of the engine.

create_evaluator() compiles a segment once and returns a function that
evaluates it against a state:

    evaluator = create_evaluator(segment, "pricing_module")
    result = evaluator({"age": 19, "country": "United States"})

The returned function never raises SegmentError. Failures come back as
{"error": message, "result": {}} and are also recorded on the caller's
state under "error".
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from concurrent.futures import Future
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Union

from segrules.comparator import Comparator
from segrules.compiler import Plan, compile_ruleset
from segrules.errors import SegmentError
from segrules.evaluator import evaluate_plan
from segrules.model import Segment
from segrules.output import resolve_output
from segrules.serialization import segment_from_dict


logger = logging.getLogger(__name__)

OUTPUT_TYPE = "Output"


def failure(message: str) -> Dict[str, Any]:
    return {"error": message, "result": {}}


def _record_error(state: Any, message: str) -> None:
    if isinstance(state, MutableMapping):
        state["error"] = {"code": "", "message": message}


def _completed(value: Any) -> Future:
    future: Future = Future()
    future.set_result(value)
    return future


def run_segment(
    plan: Plan,
    segment_name: str,
    state: Mapping[str, Any],
    comparator: Any,
    module_name: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Evaluate a compiled plan and resolve its output.

    Raises whatever the evaluator or output resolver raises; callers that
    need the never-raise contract go through create_evaluator().
    """
    logger.debug("Evaluating segment %r (%d rules)", segment_name, len(plan.rules))
    view = MappingProxyType(dict(state or {}))
    outcome = evaluate_plan(plan, view, comparator)
    output = resolve_output(outcome.rule_results, outcome.output_types, view)
    logger.debug(
        "Segment %r evaluated: passes=%s, %d output keys",
        segment_name, outcome.passes, len(output),
    )
    return {
        "name": module_name or "",
        "type": OUTPUT_TYPE,
        "segment": segment_name,
        "rules": outcome.rule_results,
        "output": output,
    }


def create_evaluator(
    segment: Union[Segment, Mapping[str, Any]],
    module_name: Optional[str] = None,
    comparator: Any = None,
) -> Callable[[MutableMapping], Any]:
    """
    Compile a segment and return its evaluator function.

    Args:
        segment: Segment object or its dict form
        module_name: Label echoed as "name" in successful results
        comparator: Comparator to use (default: segrules.comparator.Comparator)

    Returns:
        evaluator(state). With segment.sync True it returns the result dict,
        otherwise a completed concurrent.futures.Future holding it.
        evaluator.plan is the compiled Plan, or None if compilation failed.
    """
    comparator = comparator if comparator is not None else Comparator()
    compile_error: Optional[SegmentError] = None
    plan: Optional[Plan] = None

    try:
        if not isinstance(segment, Segment):
            segment = segment_from_dict(segment)
        plan = compile_ruleset(segment.ruleset, comparator)
    except SegmentError as e:
        logger.error("Segment %r failed to compile: %s", getattr(segment, "name", None), e)
        compile_error = e

    segment_name = segment.name if isinstance(segment, Segment) else ""
    sync = isinstance(segment, Segment) and segment.sync is True

    def fail(state: Any, message: str) -> Dict[str, Any]:
        logger.warning("Segment %r evaluation failed: %s", segment_name, message)
        _record_error(state, message)
        return failure(message)

    def evaluator(state: MutableMapping) -> Any:
        if compile_error is not None:
            result = fail(state, str(compile_error))
        else:
            try:
                result = run_segment(plan, segment_name, state, comparator, module_name)
            except SegmentError as e:
                result = fail(state, str(e))
        if sync:
            return result
        return _completed(result)

    evaluator.plan = plan
    evaluator.segment = segment
    return evaluator
