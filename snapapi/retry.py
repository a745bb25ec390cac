"""
Opt-in retry for SnapAPI calls.

The client never retries on its own. Wrap a call in ``with_retry`` when it is
safe to send the same request again, e.g.::

    png = with_retry(lambda: client.screenshot(options), RetryPolicy(delay=5))
"""

import logging
import random
import threading
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from .errors import Cancelled, RateLimitError, SnapAPIError, is_retryable
from .polling import sleep_unless_cancelled

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """
    Bounded retry with a fixed or growing wait.

    The defaults wait a fixed 65 seconds (a little over the service's
    one-minute rate-limit window) and make at most 3 calls.

    Args:
        max_attempts: Total calls, including the first. Default: 3
        delay: Wait before the first retry, in seconds. Default: 65
        backoff_factor: Multiplier applied to the wait for each further
            retry. 1.0 keeps it fixed. Default: 1.0
        max_delay: Upper bound on a single wait. Default: no bound
        jitter: Add up to 20% random extra wait. Default: False
        respect_retry_after: Never wait less than a ``Retry-After`` hint
            carried by a ``RateLimitError``. Default: True
    """
    max_attempts: int = 3
    delay: float = 65.0
    backoff_factor: float = 1.0
    max_delay: Optional[float] = None
    jitter: bool = False
    respect_retry_after: bool = True

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.delay < 0:
            raise ValueError("delay must be >= 0")

    @classmethod
    def exponential(
        cls,
        max_attempts: int = 5,
        initial_delay: float = 1.0,
        max_delay: float = 60.0,
        jitter: bool = True,
    ) -> "RetryPolicy":
        """Doubling wait starting at ``initial_delay``."""
        return cls(
            max_attempts=max_attempts,
            delay=initial_delay,
            backoff_factor=2.0,
            max_delay=max_delay,
            jitter=jitter,
        )

    def compute_delay(self, retry: int, error: Optional[SnapAPIError] = None) -> float:
        """Seconds to wait before retry number ``retry`` (1-based)."""
        delay = self.delay * (self.backoff_factor ** (retry - 1))
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        if self.jitter:
            delay *= 1 + 0.2 * random.random()
        if (
            self.respect_retry_after
            and isinstance(error, RateLimitError)
            and error.retry_after is not None
        ):
            delay = max(delay, float(error.retry_after))
        return delay


def with_retry(
    operation: Callable[[], T],
    policy: Optional[RetryPolicy] = None,
    cancel: Optional[threading.Event] = None,
) -> T:
    """
    Call ``operation``, retrying while it fails with a retryable error.

    Non-retryable ``SnapAPIError`` and local errors are raised unchanged on
    the attempt that produced them. Once ``policy.max_attempts`` calls have
    failed, the last error is raised.

    Raises:
        Cancelled: ``cancel`` was set while waiting to retry.
    """
    policy = policy or RetryPolicy()
    attempt = 1

    while True:
        try:
            return operation()
        except SnapAPIError as e:
            if not is_retryable(e) or attempt >= policy.max_attempts:
                raise
            delay = policy.compute_delay(attempt, e)
            logger.warning(
                "Retryable error %s (attempt %d/%d), retrying in %.1fs",
                e,
                attempt,
                policy.max_attempts,
                delay,
            )
            if sleep_unless_cancelled(delay, cancel):
                raise Cancelled("retry cancelled") from e
        attempt += 1
