"""
ZIL Runtime Routine Executor

Every routine call runs inside an invocation boundary. A RoutineSignal raised
anywhere below it, however deeply nested, unwinds to exactly that boundary and
becomes the call's value. TerminationSignal passes straight through.

Key functions:
- invoke: run a callable inside a boundary
- cond: first-match-wins COND
- equal: EQUAL? against the first value
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

from zilrt.runtime.signals import RoutineSignal

logger = logging.getLogger(__name__)


def invoke(fn: Callable[..., Any], *args: Any) -> Any:
    """Call fn inside a routine boundary and return its value."""
    try:
        return fn(*args)
    except RoutineSignal as signal:
        logger.debug("%s exited with %r", getattr(fn, "__name__", fn), signal.value)
        return signal.value


def _value(item: Any) -> Any:
    return item() if callable(item) else item


def cond(*clauses: Sequence[Any]) -> Any:
    """
    COND.

    Each clause is (test, *body). Tests and body items may be plain values or
    zero-argument callables. The first clause whose test is truthy wins; its
    value is the last body value, or the test value when the body is empty.
    No match yields False.
    """
    for clause in clauses:
        if not clause:
            continue
        test, body = clause[0], clause[1:]
        result = _value(test)
        if not result:
            continue
        for item in body:
            result = _value(item)
        return result
    return False


def equal(*values: Any) -> bool:
    """EQUAL?: every value equals the first. Vacuously true below two values."""
    if len(values) < 2:
        return True
    first = values[0]
    return all(first == v for v in values[1:])
