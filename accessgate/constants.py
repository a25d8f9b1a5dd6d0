"""Shared constants for accessgate."""

REASON_NO_POLICY_MATCHED = "No policies matched the request"
REASON_EXPLICIT_DENY = "Access has been explicitly denied"
REASON_NOT_ALLOWED = "Access has not been allowed"

DEFAULT_DENY_TYPE = "Deny"
DEFAULT_ROLES_PATH = "user.roles"
PATH_SEPARATOR = "."
