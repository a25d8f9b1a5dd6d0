"""Dot-path lookup into nested request contexts."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ..constants import PATH_SEPARATOR


class _Missing:
    """Sentinel for a path that does not resolve."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:  # pragma: no cover - simple formatting
        return "MISSING"


MISSING: Any = _Missing()


def is_missing(value: Any) -> bool:
    return value is MISSING


def _step(node: Any, key: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(key, MISSING)
    if isinstance(node, Sequence) and not isinstance(node, (str, bytes)):
        if not key.isdecimal():
            return MISSING
        index = int(key)
        return node[index] if index < len(node) else MISSING
    return MISSING


def resolve(bag: Any, path: str) -> Any:
    """Return the value at ``path`` inside ``bag`` or ``MISSING``.

    ``path`` is a dot separated list of keys, e.g. ``"request.user.id"``.
    Sequence entries can be addressed by index (``"user.roles.0"``). A missing
    key, an out of range index or a scalar in the middle of the path all
    resolve to ``MISSING``; this function never raises for a bad path.
    """
    if not isinstance(path, str) or not path:
        return MISSING

    node = bag
    for key in path.split(PATH_SEPARATOR):
        if not key:
            return MISSING
        node = _step(node, key)
        if node is MISSING:
            return MISSING
    return node
