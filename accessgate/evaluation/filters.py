"""Narrow the policy snapshot down to the policies a request can touch."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence, Tuple

from ..contracts import Policy
from ..matching import matches_any

logger = logging.getLogger(__name__)


def filter_by_roles(
    policies: Sequence[Policy],
    roles: Iterable[str],
    log: Optional[logging.Logger] = None,
) -> Tuple[Policy, ...]:
    """Keep policies whose role patterns match at least one requester role.

    Role matching is case-insensitive. A policy with no roles matches nobody;
    use ``"*"`` to open a policy to every role.
    """
    log = log or logger
    roles = tuple(roles)
    selected = []
    for policy in policies:
        if policy.roles and any(
            matches_any(role, policy.roles, case_insensitive=True) for role in roles
        ):
            selected.append(policy)
        else:
            log.debug(f"Policy {policy.id} does not match roles {list(roles)}")
    return tuple(selected)


def match_resource_action(
    policies: Sequence[Policy],
    resource: str,
    action: str,
    log: Optional[logging.Logger] = None,
) -> Tuple[Policy, ...]:
    """Keep policies whose resource and action patterns both match."""
    log = log or logger
    selected = []
    for policy in policies:
        if not matches_any(resource, policy.resources):
            log.debug(f"Policy {policy.id} does not match resource {resource!r}")
            continue
        if not matches_any(action, policy.actions):
            log.debug(f"Policy {policy.id} does not match action {action!r}")
            continue
        selected.append(policy)
    return tuple(selected)
