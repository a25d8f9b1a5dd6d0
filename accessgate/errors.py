"""Exceptions raised by accessgate."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .contracts import Condition, Denied


class AccessGateError(Exception):
    """Base class for all accessgate errors."""


class AuthorizationDeniedError(AccessGateError):
    """Raised by :meth:`AccessEngine.authorize` when a request is denied.

    The structured :class:`~accessgate.contracts.Denied` decision is kept on
    the exception so callers can inspect why access was refused.
    """

    def __init__(self, decision: "Denied") -> None:
        super().__init__(decision.reason)
        self.decision = decision

    @property
    def policy_id(self) -> Optional[str]:
        return self.decision.policy_id

    @property
    def reason(self) -> str:
        return self.decision.reason

    @property
    def deny_type(self) -> Optional[str]:
        return self.decision.deny_type


class InvalidConditionError(AccessGateError):
    """A condition has no usable comparison target."""

    def __init__(self, condition: "Condition", message: str) -> None:
        super().__init__(f"Invalid condition on field '{condition.field}': {message}")
        self.condition = condition
