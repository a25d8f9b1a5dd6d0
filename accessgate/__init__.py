"""accessgate: embeddable policy-based access control."""

from .config import EngineConfig, load_config
from .contracts import (
    Allowed,
    Condition,
    Decision,
    Denied,
    DenialKind,
    DenialPayload,
    Effect,
    EvaluationRequest,
    Operator,
    Policy,
)
from .engine import AccessEngine
from .errors import AccessGateError, AuthorizationDeniedError, InvalidConditionError
from .matching import matches_any, resolve

__version__ = "0.1.0"
__all__ = [
    "AccessEngine",
    "AccessGateError",
    "Allowed",
    "AuthorizationDeniedError",
    "Condition",
    "Decision",
    "Denied",
    "DenialKind",
    "DenialPayload",
    "Effect",
    "EngineConfig",
    "EvaluationRequest",
    "InvalidConditionError",
    "Operator",
    "Policy",
    "load_config",
    "matches_any",
    "resolve",
]
