"""End-to-end access decisions through the engine."""

import uuid

import pytest

from accessgate import (
    AccessEngine,
    Allowed,
    Condition,
    Denied,
    DenialKind,
    Effect,
    Operator,
    Policy,
)


def _docs_reader(policy_id="A", **overrides):
    fields = dict(
        id=policy_id,
        effect=Effect.ALLOW,
        roles=["editor"],
        resources=["docs::*"],
        actions=["read"],
    )
    fields.update(overrides)
    return Policy(**fields)


def test_simple_policy_allows_and_denies():
    engine = AccessEngine([_docs_reader()])

    assert engine.evaluate_access({}, "read", "docs::42", roles=["editor"])

    decision = engine.evaluate(action="read", resource="images::42", roles=["editor"])
    assert isinstance(decision, Denied)
    assert decision.kind is DenialKind.NO_POLICY_MATCHED
    assert decision.reason == "No policies matched the request"


@pytest.mark.parametrize(
    "action, resource, roles",
    [
        ("read", "docs::42", ["viewer"]),
        ("write", "docs::42", ["editor"]),
        ("read", "images::42", ["editor"]),
    ],
)
def test_missing_role_resource_or_action_match_denies(action, resource, roles):
    engine = AccessEngine([_docs_reader()])
    decision = engine.evaluate(action=action, resource=resource, roles=roles)
    assert decision.kind is DenialKind.NO_POLICY_MATCHED


def test_broad_allow_with_single_explicit_deny():
    secret = Policy(
        id="B",
        effect=Effect.DENY,
        roles=["editor"],
        resources=["docs::secret"],
        actions=["read"],
    )
    engine = AccessEngine([_docs_reader(), secret])

    decision = engine.evaluate(action="read", resource="docs::secret", roles=["editor"])
    assert isinstance(decision, Denied)
    assert decision.policy_id == "B"
    assert decision.deny_type == "Deny"

    assert engine.evaluate_access({}, "read", "docs::42", roles=["editor"])


def test_deny_overrides_allow_regardless_of_store_order():
    allow = _docs_reader()
    deny = Policy(
        id="B", effect=Effect.DENY, roles=["*"], resources=["docs::*"], actions=["*"]
    )
    for policies in ([allow, deny], [deny, allow]):
        engine = AccessEngine(policies)
        decision = engine.evaluate(action="read", resource="docs::1", roles=["editor"])
        assert decision.policy_id == "B"


def test_condition_with_ip_stored_on_policy():
    allowed_ip = "192.168.0.10"
    condition = Condition(field="request.ip", operator=Operator.MATCH, expected=[allowed_ip])
    engine = AccessEngine([_docs_reader(conditions=[condition])])

    assert engine.evaluate_access(
        {"request": {"ip": allowed_ip}}, "read", "docs::1", roles=["editor"]
    )
    decision = engine.evaluate(
        context={"request": {"ip": "10.0.0.1"}},
        action="read",
        resource="docs::1",
        roles=["editor"],
    )
    assert decision.kind is DenialKind.IMPLICIT_DENY
    assert decision.reason == "Access has not been allowed"


def test_condition_user_must_match_context_user():
    user_id = str(uuid.uuid4())
    conditions = [
        Condition(
            field="request.user.id",
            operator=Operator.MATCH,
            expected_on_context=["user.id"],
        ),
        Condition(
            field="request.user.ip",
            operator=Operator.MATCH,
            expected_on_context=["user.knownIp"],
        ),
    ]
    engine = AccessEngine([_docs_reader(conditions=conditions)])
    context = {
        "user": {"id": user_id, "roles": ["editor"], "knownIp": "1.1.1.1"},
        "request": {"user": {"id": user_id, "ip": "1.1.1.1"}},
    }
    assert engine.evaluate_access(context, "read", "docs::1")

    context["request"]["user"]["ip"] = "2.2.2.2"
    assert not engine.evaluate_access(context, "read", "docs::1")


def test_session_age_greater_than():
    condition = Condition(
        field="user.sessionAge", operator=Operator.GREATER_THAN, expected=[600]
    )
    engine = AccessEngine([_docs_reader(conditions=[condition])])
    assert engine.evaluate_access(
        {"user": {"sessionAge": 1200}}, "read", "docs::1", roles=["editor"]
    )
    assert not engine.evaluate_access(
        {"user": {"sessionAge": 300}}, "read", "docs::1", roles=["editor"]
    )


def test_missing_context_path_denies_without_raising():
    condition = Condition(field="request.user.id", operator=Operator.MATCH, expected="abc")
    engine = AccessEngine([_docs_reader(conditions=[condition])])
    assert engine.evaluate_access(
        {"request": {"user": {"id": "abc"}}}, "read", "docs::1", roles=["editor"]
    )
    assert not engine.evaluate_access({"request": {}}, "read", "docs::1", roles=["editor"])


def test_conditional_deny_only_applies_when_condition_holds():
    block_outside = Policy(
        id="geo",
        effect=Effect.DENY,
        roles=["*"],
        resources=["docs::*"],
        actions=["*"],
        deny_type="GeoBlocked",
        conditions=[
            Condition(field="request.country", operator=Operator.NOT_MATCH, expected="NL")
        ],
    )
    engine = AccessEngine([_docs_reader(), block_outside])

    inside = engine.evaluate(
        context={"request": {"country": "NL"}},
        action="read",
        resource="docs::1",
        roles=["editor"],
    )
    assert isinstance(inside, Allowed)

    outside = engine.evaluate(
        context={"request": {"country": "US"}},
        action="read",
        resource="docs::1",
        roles=["editor"],
    )
    assert outside.policy_id == "geo"
    assert outside.deny_type == "GeoBlocked"


def test_malformed_condition_does_not_abort_other_policies():
    broken = _docs_reader(
        "broken", conditions=[Condition(field="user.id", operator=Operator.MATCH)]
    )
    engine = AccessEngine([broken, _docs_reader("ok")])
    decision = engine.evaluate(action="read", resource="docs::1", roles=["editor"])
    assert isinstance(decision, Allowed)
    assert decision.policy_ids == ("ok",)


def test_many_policies_only_matching_ones_count():
    policies = [
        _docs_reader(f"p{i}", resources=[f"docs::{i}"]) for i in range(500)
    ]
    engine = AccessEngine(policies)
    decision = engine.evaluate(action="read", resource="docs::250", roles=["editor"])
    assert decision.policy_ids == ("p250",)


def test_single_star_resource_does_not_grant_nested_paths():
    policy = Policy(
        id="shallow", effect=Effect.ALLOW, roles=["*"], resources=["docs/*"], actions=["read"]
    )
    engine = AccessEngine([policy])
    assert engine.evaluate_access({}, "read", "docs/readme", roles=["r"])
    assert not engine.evaluate_access({}, "read", "docs/secret/x", roles=["r"])
