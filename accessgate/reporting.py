"""Forward denial detail to an observer supplied by the host application."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from .contracts import DenialPayload

logger = logging.getLogger(__name__)


class LoggingCallback(Protocol):
    """Callable notified once for every denied request."""

    def __call__(self, payload: DenialPayload) -> None:
        """Receive the denial detail."""


class FailureReporter:
    """Invokes the host's logging callback on denial."""

    def __init__(
        self,
        callback: Optional[LoggingCallback] = None,
        isolate_errors: bool = True,
        log: Optional[logging.Logger] = None,
    ) -> None:
        self._callback = callback
        self._isolate_errors = isolate_errors
        self._log = log or logger

    @property
    def enabled(self) -> bool:
        return self._callback is not None

    def report(self, payload: DenialPayload) -> None:
        """Hand ``payload`` to the callback, if one is registered.

        With error isolation on, a failing callback is logged and the
        evaluation result is left untouched.
        """
        if self._callback is None:
            return
        try:
            self._callback(payload)
        except Exception:
            if not self._isolate_errors:
                raise
            self._log.exception(
                f"Logging callback failed for denial of {payload.action!r} "
                f"on {payload.resource!r}"
            )
