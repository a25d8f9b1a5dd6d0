"""Simple example showing policy evaluation inside a host application."""

import logging

from accessgate import (
    AccessEngine,
    AuthorizationDeniedError,
    Condition,
    DenialPayload,
    Effect,
    Operator,
    Policy,
)


def audit(payload: DenialPayload) -> None:
    """Denial sink; a real host would ship this to its audit store."""
    print(f"🚫 {payload.action} on {payload.resource}: {payload.reason}")


def main():
    """Basic access evaluation example."""
    logging.basicConfig(level=logging.INFO)

    policies = [
        Policy(
            id="editors-read-docs",
            effect=Effect.ALLOW,
            roles=["editor"],
            resources=["docs::*"],
            actions=["read", "update"],
            conditions=[
                Condition(
                    field="request.user.id",
                    operator=Operator.MATCH,
                    expected_on_context=["resource.ownerId"],
                )
            ],
        ),
        Policy(
            id="no-secret-docs",
            effect=Effect.DENY,
            roles=["*"],
            resources=["docs::secret*"],
            actions=["*"],
            deny_type="Confidential",
        ),
    ]
    engine = AccessEngine(policies, logging_callback=audit)

    context = {
        "user": {"id": "u-1", "roles": ["editor"]},
        "request": {"user": {"id": "u-1"}},
        "resource": {"ownerId": "u-1"},
    }

    print(f"✅ read docs::42 -> {engine.evaluate_access(context, 'read', 'docs::42')}")
    print(f"✅ read docs::secret -> {engine.evaluate_access(context, 'read', 'docs::secret')}")

    try:
        engine.authorize(context, "delete", "docs::42")
    except AuthorizationDeniedError as e:
        print(f"📋 authorize refused: {e.reason} (policy={e.policy_id})")


if __name__ == "__main__":
    main()
