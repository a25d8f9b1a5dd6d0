"""Access decision engine for accessgate."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from .config import EngineConfig
from .contracts import (
    Allowed,
    Decision,
    Denied,
    DenialPayload,
    EvaluationRequest,
    Policy,
)
from .errors import AuthorizationDeniedError
from .evaluation import (
    aggregate,
    evaluate_conditions,
    filter_by_roles,
    match_resource_action,
)
from .matching import resolve
from .reporting import FailureReporter, LoggingCallback

logger = logging.getLogger(__name__)


class AccessEngine:
    """Decides whether a request may perform an action on a resource.

    The engine owns an immutable snapshot of the policies it was built with.
    Evaluation is synchronous, does no I/O and keeps no state between calls,
    so one engine can be shared across threads.

    Example:
        >>> engine = AccessEngine([
        ...     {"id": "A", "effect": "allow", "roles": ["editor"],
        ...      "resources": ["docs::*"], "actions": ["read"]},
        ... ])
        >>> engine.evaluate_access(
        ...     context={}, action="read", resource="docs::42", roles=["editor"]
        ... )
        True
    """

    def __init__(
        self,
        policies: Iterable[Union[Policy, Mapping[str, Any]]],
        logging_callback: Optional[LoggingCallback] = None,
        config: Optional[EngineConfig] = None,
        log: Optional[logging.Logger] = None,
    ) -> None:
        self._config = config or EngineConfig()
        self._log = log or logger
        self._policies: Tuple[Policy, ...] = tuple(
            p if isinstance(p, Policy) else Policy.model_validate(p) for p in policies
        )
        self._reporter = FailureReporter(
            logging_callback,
            isolate_errors=self._config.isolate_reporter_errors,
            log=self._log,
        )
        self._log.debug(f"Access engine loaded {len(self._policies)} policies")

    @property
    def config(self) -> EngineConfig:
        return self._config

    def __len__(self) -> int:
        return len(self._policies)

    def get_policies(self) -> List[Policy]:
        """Return the loaded policies in construction order."""
        return list(self._policies)

    def _request_roles(self, request: EvaluationRequest) -> Tuple[str, ...]:
        if request.roles is not None:
            return request.roles
        roles = resolve(request.context, self._config.roles_path)
        if isinstance(roles, str):
            return (roles,)
        if isinstance(roles, Sequence):
            return tuple(r for r in roles if isinstance(r, str))
        return ()

    def evaluate(
        self,
        request: Union[EvaluationRequest, Mapping[str, Any], None] = None,
        **fields: Any,
    ) -> Decision:
        """Evaluate ``request`` and return an ``Allowed`` or ``Denied`` result.

        The request may be given as an :class:`EvaluationRequest`, a mapping or
        keyword arguments (``context``, ``action``, ``resource``, ``roles``).
        The logging callback is invoked before a denial is returned.
        """
        if request is None:
            request = EvaluationRequest(**fields)
        elif not isinstance(request, EvaluationRequest):
            request = EvaluationRequest.model_validate(request)

        roles = self._request_roles(request)
        candidates = filter_by_roles(self._policies, roles, log=self._log)
        matched = match_resource_action(
            candidates, request.resource, request.action, log=self._log
        )
        decision = aggregate(
            matched,
            lambda policy: evaluate_conditions(policy, request.context, log=self._log),
            default_deny_type=self._config.default_deny_type,
            log=self._log,
        )

        if isinstance(decision, Denied):
            self._log.info(
                f"Denied {request.action!r} on {request.resource!r}: {decision.reason}"
                + (f" (policy {decision.policy_id})" if decision.policy_id else "")
            )
            self._reporter.report(
                DenialPayload(
                    policy_id=decision.policy_id,
                    context=request.context,
                    action=request.action,
                    resource=request.resource,
                    reason=decision.reason,
                    deny_type=decision.deny_type,
                )
            )
        else:
            self._log.debug(
                f"Allowed {request.action!r} on {request.resource!r} "
                f"by {list(decision.policy_ids)}"
            )
        return decision

    def evaluate_access(
        self,
        context: Mapping[str, Any],
        action: str,
        resource: str,
        roles: Optional[Iterable[str]] = None,
    ) -> bool:
        """Return ``True`` if access is allowed."""
        return self.evaluate(
            context=context,
            action=action,
            resource=resource,
            roles=_as_roles(roles),
        ).allowed

    def authorize(
        self,
        context: Mapping[str, Any],
        action: str,
        resource: str,
        roles: Optional[Iterable[str]] = None,
    ) -> Allowed:
        """Return the ``Allowed`` decision or raise ``AuthorizationDeniedError``."""
        decision = self.evaluate(
            context=context,
            action=action,
            resource=resource,
            roles=_as_roles(roles),
        )
        if isinstance(decision, Denied):
            raise AuthorizationDeniedError(decision)
        return decision


def _as_roles(roles: Optional[Iterable[str]]) -> Optional[Tuple[str, ...]]:
    if roles is None:
        return None
    if isinstance(roles, str):
        return (roles,)
    return tuple(roles)
