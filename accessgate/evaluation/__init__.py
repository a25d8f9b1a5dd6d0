"""Policy filtering, condition evaluation and decision aggregation."""

from __future__ import annotations

from .conditions import evaluate_condition, evaluate_conditions
from .decision import aggregate
from .filters import filter_by_roles, match_resource_action

__all__ = [
    "aggregate",
    "evaluate_condition",
    "evaluate_conditions",
    "filter_by_roles",
    "match_resource_action",
]
