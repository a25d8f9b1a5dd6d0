"""Evaluate policy conditions against a request context."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Dict, List, Optional

from ..contracts import Condition, Operator, Policy
from ..errors import InvalidConditionError
from ..matching import MISSING, matches_any, resolve

logger = logging.getLogger(__name__)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _is_literal(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool))


def _as_text(value: Any) -> Optional[str]:
    """Render a scalar the way it is written in a policy file."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, str):
        return value
    return None


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _literal_targets(condition: Condition) -> List[Any]:
    expected = condition.expected
    values = list(expected) if _is_sequence(expected) else [expected]
    if not values:
        raise InvalidConditionError(condition, "'expected' is empty")
    if not all(_is_literal(v) for v in values):
        raise InvalidConditionError(condition, "'expected' must hold literals")
    return values


def _context_targets(
    condition: Condition, context: Any, log: logging.Logger
) -> List[Any]:
    paths = condition.expected_on_context
    if isinstance(paths, str):
        paths = [paths]
    elif _is_sequence(paths):
        paths = list(paths)
    else:
        raise InvalidConditionError(condition, "'expectedOnContext' must be a path")
    if not paths or not all(isinstance(p, str) and p for p in paths):
        raise InvalidConditionError(
            condition, "'expectedOnContext' must hold non-empty paths"
        )

    values: List[Any] = []
    for path in paths:
        value = resolve(context, path)
        if value is MISSING:
            log.debug(f"Context path {path!r} is not set")
        elif _is_sequence(value):
            values.extend(value)
        else:
            values.append(value)
    return values


def comparison_targets(
    condition: Condition, context: Any, log: Optional[logging.Logger] = None
) -> List[Any]:
    """Return the values ``condition`` compares the actual value against.

    Literal ``expected`` values win over ``expected_on_context`` paths when
    both are given. Raises :class:`InvalidConditionError` when neither is
    usable.
    """
    log = log or logger
    if condition.expected is not None:
        return _literal_targets(condition)
    if condition.expected_on_context is not None:
        return _context_targets(condition, context, log)
    raise InvalidConditionError(
        condition, "neither 'expected' nor 'expectedOnContext' is set"
    )


def _glob(actual: Any, target: Any) -> Optional[bool]:
    actual_text, pattern = _as_text(actual), _as_text(target)
    if actual_text is None or pattern is None:
        return None
    return matches_any(actual_text, pattern)


def _match(actual: Any, target: Any) -> bool:
    return _glob(actual, target) is True


def _not_match(actual: Any, target: Any) -> bool:
    return _glob(actual, target) is False


def _less_than(actual: Any, target: Any) -> bool:
    left, right = _as_number(actual), _as_number(target)
    return left is not None and right is not None and left < right


def _greater_than(actual: Any, target: Any) -> bool:
    left, right = _as_number(actual), _as_number(target)
    return left is not None and right is not None and left > right


_COMPARATORS: Dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.MATCH: _match,
    Operator.NOT_MATCH: _not_match,
    Operator.LESS_THAN: _less_than,
    Operator.GREATER_THAN: _greater_than,
}


def evaluate_condition(
    condition: Condition,
    context: Mapping[str, Any],
    log: Optional[logging.Logger] = None,
) -> bool:
    """Evaluate a single condition.

    Each target is tested on its own and the results are OR-ed, so a
    ``notMatch`` condition holds as soon as one target differs from the
    actual value. An unset field or a malformed condition evaluates
    ``False``.
    """
    log = log or logger
    try:
        targets = comparison_targets(condition, context, log)
    except InvalidConditionError as e:
        log.warning(f"{e}; condition skipped")
        return False

    actual = resolve(context, condition.field)
    if actual is MISSING:
        log.debug(f"Condition field {condition.field!r} is not set on the context")
        return False

    compare = _COMPARATORS[condition.operator]
    return any(compare(actual, target) for target in targets)


def evaluate_conditions(
    policy: Policy,
    context: Mapping[str, Any],
    log: Optional[logging.Logger] = None,
) -> bool:
    """Return ``True`` when every condition on ``policy`` holds."""
    log = log or logger
    for condition in policy.conditions:
        if not evaluate_condition(condition, context, log):
            log.debug(
                f"Policy {policy.id} condition on {condition.field!r} "
                f"({condition.operator.value}) failed"
            )
            return False
    return True
