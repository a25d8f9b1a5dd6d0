"""Core policy and decision contracts for accessgate."""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Any, Dict, Literal, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# A request context is a nested attribute bag.
ContextValue = Union[
    str, int, float, bool, None, Mapping[str, "ContextValue"], Sequence["ContextValue"]
]
RequestContext = Mapping[str, ContextValue]


def _normalize_token(value: str) -> str:
    return value.replace("_", "").replace("-", "").lower()


class Effect(str, Enum):
    """Outcome a policy contributes when it applies."""

    ALLOW = "allow"
    DENY = "deny"

    @classmethod
    def _missing_(cls, value: object) -> Optional["Effect"]:
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return None


class Operator(str, Enum):
    """Comparison applied by a condition."""

    MATCH = "match"
    NOT_MATCH = "notMatch"
    LESS_THAN = "lessThan"
    GREATER_THAN = "greaterThan"

    @classmethod
    def _missing_(cls, value: object) -> Optional["Operator"]:
        # Accept "not_match", "NotMatch", "greater-than" and friends.
        if isinstance(value, str):
            wanted = _normalize_token(value)
            for member in cls:
                if _normalize_token(member.value) == wanted:
                    return member
        return None


class DenialKind(str, Enum):
    """Why a request was denied."""

    NO_POLICY_MATCHED = "no_policy_matched"
    EXPLICIT_DENY = "explicit_deny"
    IMPLICIT_DENY = "implicit_deny"


class Condition(BaseModel):
    """A predicate over the request context.

    ``expected`` holds literal target(s); ``expected_on_context`` holds dot
    path(s) that are resolved against the same context before comparing.
    Neither is validated here: an unusable condition simply evaluates false.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    field: str
    operator: Operator
    expected: Any = None
    expected_on_context: Any = Field(default=None, alias="expectedOnContext")


class Policy(BaseModel):
    """A named rule binding roles, actions and resources to an effect."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    effect: Effect
    actions: Tuple[str, ...] = ()
    resources: Tuple[str, ...] = ()
    roles: Tuple[str, ...] = ()
    conditions: Tuple[Condition, ...] = ()
    deny_type: Optional[str] = Field(default=None, alias="denyType")

    @field_validator("actions", "resources", "roles", mode="before")
    @classmethod
    def _wrap_single_pattern(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return value

    @field_validator("conditions", mode="before")
    @classmethod
    def _default_conditions(cls, value: Any) -> Any:
        return () if value is None else value


class EvaluationRequest(BaseModel):
    """A single access question put to the engine.

    When ``roles`` is omitted the engine reads them from the context.
    """

    model_config = ConfigDict(frozen=True)

    action: str
    resource: str
    context: Dict[str, Any] = Field(default_factory=dict)
    roles: Optional[Tuple[str, ...]] = None

    @field_validator("roles", mode="before")
    @classmethod
    def _wrap_single_role(cls, value: Any) -> Any:
        if isinstance(value, str):
            return (value,)
        return value


class Allowed(BaseModel):
    """Access granted."""

    model_config = ConfigDict(frozen=True)

    allowed: Literal[True] = True
    policy_ids: Tuple[str, ...] = Field(
        default=(), description="Ids of the active Allow policies"
    )

    def __bool__(self) -> bool:
        return True


class Denied(BaseModel):
    """Access refused, with the detail needed to explain why."""

    model_config = ConfigDict(frozen=True)

    allowed: Literal[False] = False
    kind: DenialKind
    reason: str
    policy_id: Optional[str] = None
    deny_type: Optional[str] = None

    def __bool__(self) -> bool:
        return False


Decision = Union[Allowed, Denied]


class DenialPayload(BaseModel):
    """Detail handed to the failure reporter on every denial."""

    policy_id: Optional[str] = None
    context: Dict[str, Any] = Field(default_factory=dict)
    action: str
    resource: str
    reason: str
    deny_type: Optional[str] = None
