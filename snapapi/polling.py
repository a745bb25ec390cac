"""
Job polling for asynchronous SnapAPI operations.

Batch captures and async screenshots return a job id; ``poll_job`` re-fetches
the job's status until it completes, fails, or the polling budget runs out.
The poller knows nothing about endpoints: callers hand it a status-fetch
callable.
"""

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from .errors import Cancelled, JobFailedError, JobTimeoutError

logger = logging.getLogger(__name__)


class JobKind(str, Enum):
    """Kinds of asynchronous jobs."""
    BATCH_CAPTURE = "batch"
    ASYNC_CAPTURE = "screenshot"


class JobState(str, Enum):
    """Lifecycle states of a job."""
    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @classmethod
    def _missing_(cls, value: object) -> "JobState":
        # Any state the client does not know is treated as still running.
        if isinstance(value, str):
            name = value.lower()
            if name == "pending":
                return cls.QUEUED
            for member in cls:
                if member.value == name:
                    return member
        return cls.PROCESSING


@dataclass(frozen=True)
class JobHandle:
    """Reference to a server-side job."""
    job_id: str
    kind: JobKind


@dataclass
class JobStatus:
    """A single observation of a job's state."""
    state: JobState
    completed: int = 0
    total: int = 0
    failed: int = 0
    result: Optional[Any] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class PollPolicy:
    """
    How often and how long to poll.

    Args:
        interval: Seconds to wait before each status fetch. Default: 2
        max_attempts: Maximum number of status fetches. Default: 15
        timeout: Optional wall-clock budget in seconds, measured from the
            start of polling. Whichever of ``max_attempts`` and ``timeout``
            runs out first ends polling.
    """
    interval: float = 2.0
    max_attempts: int = 15
    timeout: Optional[float] = None

    def __post_init__(self) -> None:
        if self.interval < 0:
            raise ValueError("interval must be >= 0")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.timeout is not None and self.timeout < 0:
            raise ValueError("timeout must be >= 0")


def sleep_unless_cancelled(seconds: float, cancel: Optional[threading.Event]) -> bool:
    """Sleep for ``seconds``; return True if cancelled while waiting."""
    if cancel is None:
        if seconds > 0:
            time.sleep(seconds)
        return False
    return cancel.wait(seconds)


def poll_job(
    handle: JobHandle,
    fetch_status: Callable[[JobHandle], JobStatus],
    policy: Optional[PollPolicy] = None,
    cancel: Optional[threading.Event] = None,
    on_status: Optional[Callable[[JobStatus], Any]] = None,
) -> JobStatus:
    """
    Poll a job until it reaches a terminal state.

    Each iteration waits ``policy.interval`` seconds, then fetches the
    status once. Errors raised by ``fetch_status`` propagate immediately.

    Args:
        handle: The job to poll.
        fetch_status: Fetches the current status of ``handle``.
        policy: Polling interval and budget. Default: ``PollPolicy()``.
        cancel: Event that aborts polling when set.
        on_status: Called with the new status each time the state changes.

    Returns:
        The ``JobStatus`` observed as completed.

    Raises:
        JobFailedError: The service reported the job as failed.
        JobTimeoutError: The budget ran out while the job was still running.
        Cancelled: ``cancel`` was set.
    """
    policy = policy or PollPolicy()
    deadline = None
    if policy.timeout is not None:
        deadline = time.monotonic() + policy.timeout

    last_status: Optional[JobStatus] = None
    attempts = 0

    while attempts < policy.max_attempts:
        delay = policy.interval
        if deadline is not None:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            delay = min(delay, remaining)
        if sleep_unless_cancelled(delay, cancel):
            raise Cancelled(f"polling of {handle.kind.value} job {handle.job_id} cancelled")

        status = fetch_status(handle)
        attempts += 1
        logger.debug(
            "Job %s (%s) is %s [%d/%d] after %d checks",
            handle.job_id,
            handle.kind.value,
            status.state.value,
            status.completed,
            status.total,
            attempts,
        )

        if on_status is not None and (last_status is None or last_status.state != status.state):
            on_status(status)
        last_status = status

        if status.state == JobState.COMPLETED:
            return status
        if status.state == JobState.FAILED:
            raise JobFailedError(handle, status)

    raise JobTimeoutError(handle, attempts, last_status)
