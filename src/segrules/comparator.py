"""
Default Comparator capability.

A comparator exposes named boolean tests over a base value and one or two
operands. Rules select a test by name; the name is normalized (lowercased,
all whitespace removed) so "Greater Than" and "greaterthan" are the same
operation.

Any object providing operation(), has_operation() and compare() can be
passed to the compiler and evaluator instead of the default Comparator.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, Optional

from segrules.errors import UnknownTestError


_WHITESPACE_RE = re.compile(r"\s+")

Operation = Callable[..., bool]


def normalize_test_name(condition_test: str) -> str:
    """Lowercase a test descriptor and strip all whitespace from it."""
    return _WHITESPACE_RE.sub("", condition_test.lower())


def is_range_test(condition_test: str) -> bool:
    return "range" in condition_test.lower()


def is_null_test(condition_test: str) -> bool:
    return "null" in condition_test.lower()


def _equal(value: Any, comparison: Any) -> bool:
    return value == comparison


def _not_equal(value: Any, comparison: Any) -> bool:
    return value != comparison


def _greater_than(value: Any, comparison: Any) -> bool:
    return value > comparison


def _greater_than_or_equal(value: Any, comparison: Any) -> bool:
    return value >= comparison


def _less_than(value: Any, comparison: Any) -> bool:
    return value < comparison


def _less_than_or_equal(value: Any, comparison: Any) -> bool:
    return value <= comparison


def _in_range(value: Any, minimum: Any, maximum: Any) -> bool:
    return minimum <= value <= maximum


def _not_in_range(value: Any, minimum: Any, maximum: Any) -> bool:
    return not _in_range(value, minimum, maximum)


def _is_in(value: Any, comparison: Any) -> bool:
    return value in comparison


def _is_not_in(value: Any, comparison: Any) -> bool:
    return value not in comparison


def _contains(value: Any, comparison: Any) -> bool:
    return comparison in value


def _does_not_contain(value: Any, comparison: Any) -> bool:
    return comparison not in value


def _is_null(value: Any, *_: Any) -> bool:
    return value is None


def _is_not_null(value: Any, *_: Any) -> bool:
    return value is not None


def _is_true(value: Any, *_: Any) -> bool:
    return value is True


def _is_false(value: Any, *_: Any) -> bool:
    return value is False


DEFAULT_OPERATIONS: Dict[str, Operation] = {
    "equal": _equal,
    "equals": _equal,
    "isequal": _equal,
    "equalto": _equal,
    "notequal": _not_equal,
    "notequals": _not_equal,
    "doesnotequal": _not_equal,
    "greaterthan": _greater_than,
    "gt": _greater_than,
    "greaterthanorequal": _greater_than_or_equal,
    "greaterthanorequalto": _greater_than_or_equal,
    "gte": _greater_than_or_equal,
    "lessthan": _less_than,
    "lt": _less_than,
    "lessthanorequal": _less_than_or_equal,
    "lessthanorequalto": _less_than_or_equal,
    "lte": _less_than_or_equal,
    "range": _in_range,
    "inrange": _in_range,
    "isinrange": _in_range,
    "between": _in_range,
    "notrange": _not_in_range,
    "notinrange": _not_in_range,
    "outofrange": _not_in_range,
    "in": _is_in,
    "isin": _is_in,
    "oneof": _is_in,
    "notin": _is_not_in,
    "isnotin": _is_not_in,
    "notoneof": _is_not_in,
    "contains": _contains,
    "includes": _contains,
    "doesnotcontain": _does_not_contain,
    "notcontains": _does_not_contain,
    "doesnotinclude": _does_not_contain,
    "null": _is_null,
    "isnull": _is_null,
    "notnull": _is_not_null,
    "isnotnull": _is_not_null,
    "exists": _is_not_null,
    "istrue": _is_true,
    "isfalse": _is_false,
}


class Comparator:
    """
    Dispatch table of named comparison operations.

    Each instance owns a copy of the default table, so operations
    registered on one comparator never leak into another.
    """

    def __init__(self, operations: Optional[Dict[str, Operation]] = None):
        self._operations: Dict[str, Operation] = dict(DEFAULT_OPERATIONS)
        for name, fn in (operations or {}).items():
            self.register(name, fn)

    def register(self, name: str, fn: Operation) -> None:
        self._operations[normalize_test_name(name)] = fn

    def has_operation(self, name: str) -> bool:
        return normalize_test_name(name) in self._operations

    def operation(self, name: str) -> Operation:
        """
        Look up an operation by (normalized) name.

        Raises:
            UnknownTestError: if no operation has that name
        """
        try:
            return self._operations[normalize_test_name(name)]
        except KeyError:
            raise UnknownTestError(name) from None

    def compare(self, name: str, value: Any, *operands: Any) -> bool:
        return bool(self.operation(name)(value, *operands))
