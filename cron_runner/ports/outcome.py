"""Dispatch outcome definition (DTO) and sink interface."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol

from cron_runner.ports.job import JobRecord

__all__ = ["DispatchOutcome", "OutcomeKind", "OutcomeSinkPort"]

FIRST_SERVER_ERROR_CODE = 500


class OutcomeKind(str, Enum):
    """How a dispatch ended."""

    OK = "ok"
    HTTP_ERROR = "http_error"
    TRANSPORT_ERROR = "transport_error"


@dataclass(slots=True, frozen=True)
class DispatchOutcome:
    """Terminal result of one dispatch.

    Attributes:
        tick: Instant of the tick that fired the job (UTC), not completion time.
        method: HTTP method, copied from the job.
        url: Target URL, copied from the job.
        kind: Success, error status or transport failure.
        status_code: Response status; None for transport failures.
        cause: Transport failure description; None otherwise.
    """

    tick: datetime
    method: str
    url: str
    kind: OutcomeKind
    status_code: int | None = None
    cause: str | None = None

    @classmethod
    def success(cls, job: JobRecord, tick: datetime, status_code: int) -> DispatchOutcome:
        return cls(tick, job.method.value, job.url, OutcomeKind.OK, status_code=status_code)

    @classmethod
    def http_error(cls, job: JobRecord, tick: datetime, status_code: int) -> DispatchOutcome:
        return cls(tick, job.method.value, job.url, OutcomeKind.HTTP_ERROR, status_code=status_code)

    @classmethod
    def transport_error(cls, job: JobRecord, tick: datetime, cause: str) -> DispatchOutcome:
        return cls(tick, job.method.value, job.url, OutcomeKind.TRANSPORT_ERROR, cause=cause)

    @property
    def is_failed(self) -> bool:
        return self.kind is not OutcomeKind.OK

    @property
    def detail(self) -> str:
        """Last column of the outcome log line."""
        if self.kind is OutcomeKind.TRANSPORT_ERROR or self.status_code is None:
            return f"transport error: {self.cause}"
        if self.kind is OutcomeKind.OK:
            return str(self.status_code)
        category = (
            "server error" if self.status_code >= FIRST_SERVER_ERROR_CODE else "client error"
        )
        return f"HTTP {self.status_code} ({category})"


class OutcomeSinkPort(Protocol):
    """Interface for reporting finished dispatches.

    Called from dispatch tasks; implementations must only do a short,
    non-blocking write.
    """

    def emit(self, outcome: DispatchOutcome, /) -> None:
        """Report one outcome.

        Args:
            outcome: The outcome to report.
        """
        ...
