"""Thin adapter over :mod:`wcmatch` for role, action and resource globs."""

from __future__ import annotations

from typing import Any, Iterable, Union

from wcmatch import glob

# ``*`` stays within one ``/`` separated segment; ``**`` spans segments.
_FLAGS = glob.GLOBSTAR | glob.DOTGLOB | glob.FORCEUNIX


def matches_any(
    candidate: Any,
    patterns: Union[str, Iterable[str]],
    case_insensitive: bool = False,
) -> bool:
    """Return ``True`` if ``candidate`` matches at least one glob in ``patterns``.

    A candidate that is not a string never matches.
    """
    if not isinstance(candidate, str):
        return False
    if isinstance(patterns, str):
        patterns = (patterns,)

    flags = _FLAGS | glob.IGNORECASE if case_insensitive else _FLAGS
    for pattern in patterns:
        if not isinstance(pattern, str) or not pattern:
            continue
        if glob.globmatch(candidate, pattern, flags=flags):
            return True
    return False
