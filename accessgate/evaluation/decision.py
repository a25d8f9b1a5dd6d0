"""Deny-overrides-allow aggregation of matched policies."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from ..constants import (
    DEFAULT_DENY_TYPE,
    REASON_EXPLICIT_DENY,
    REASON_NO_POLICY_MATCHED,
    REASON_NOT_ALLOWED,
)
from ..contracts import Allowed, Decision, Denied, DenialKind, Effect, Policy

logger = logging.getLogger(__name__)


def aggregate(
    matched: Sequence[Policy],
    is_active: Callable[[Policy], bool],
    default_deny_type: str = DEFAULT_DENY_TYPE,
    log: Optional[logging.Logger] = None,
) -> Decision:
    """Combine the effects of ``matched`` policies into one decision.

    ``matched`` are the policies that passed role, resource and action
    filtering, in store order. ``is_active`` reports whether a policy's
    conditions hold for the request; inactive policies are ignored.

    The scan never stops on an Allow, only on a Deny, so an applicable Deny
    wins regardless of where it sits in the store.
    """
    log = log or logger
    if not matched:
        return Denied(kind=DenialKind.NO_POLICY_MATCHED, reason=REASON_NO_POLICY_MATCHED)

    allow_ids: List[str] = []
    for policy in matched:
        if not is_active(policy):
            continue
        if policy.effect == Effect.DENY:
            log.debug(f"Policy {policy.id} explicitly denies the request")
            return Denied(
                kind=DenialKind.EXPLICIT_DENY,
                reason=REASON_EXPLICIT_DENY,
                policy_id=policy.id,
                deny_type=policy.deny_type or default_deny_type,
            )
        if policy.effect == Effect.ALLOW:
            allow_ids.append(policy.id)
        else:
            log.warning(f"Policy {policy.id} has unsupported effect {policy.effect!r}")

    if allow_ids:
        return Allowed(policy_ids=tuple(allow_ids))
    return Denied(kind=DenialKind.IMPLICIT_DENY, reason=REASON_NOT_ALLOWED)
