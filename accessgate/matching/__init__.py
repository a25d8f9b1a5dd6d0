"""Path resolution and glob matching helpers."""

from __future__ import annotations

from .paths import MISSING, is_missing, resolve
from .patterns import matches_any

__all__ = ["MISSING", "is_missing", "resolve", "matches_any"]
