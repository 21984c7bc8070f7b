"""
Per-request context passed explicitly to every repository call.

Carries the request-bound logger and the deadline by which the
operation must finish. Replaces ambient, string-keyed request state.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Optional, Union

Logger = Union[logging.Logger, logging.LoggerAdapter]


@dataclass(frozen=True)
class RequestContext:
    """Request-scoped logger and deadline.

    Attributes:
        logger: Logger with request fields bound (request id, operation).
        deadline: ``time.monotonic()`` value after which work must stop,
            or None for no deadline.
    """

    logger: Logger = field(default_factory=lambda: logging.getLogger("invoicing_api"))
    deadline: Optional[float] = None

    @classmethod
    def with_timeout(cls, logger: Logger, timeout_seconds: Optional[float]) -> "RequestContext":
        """Build a context whose deadline is ``timeout_seconds`` from now."""
        if timeout_seconds is None:
            return cls(logger=logger)
        return cls(logger=logger, deadline=time.monotonic() + timeout_seconds)

    def remaining(self) -> Optional[float]:
        """Return seconds left before the deadline (never negative), or None."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def expired(self) -> bool:
        """Return True once the deadline has passed."""
        remaining = self.remaining()
        return remaining is not None and remaining <= 0.0
