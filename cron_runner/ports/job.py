"""Job record definition (DTO)."""

from dataclasses import dataclass
from enum import Enum

from cron_runner.core.cron import CronSchedule

__all__ = ["HttpMethod", "JobRecord"]


class HttpMethod(str, Enum):
    """HTTP methods a job may use."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


@dataclass(slots=True, frozen=True)
class JobRecord:
    """One scheduled HTTP call.

    Built once from configuration and never mutated afterwards.

    Attributes:
        method: HTTP method.
        url: Absolute HTTP(S) endpoint.
        schedule: Parsed six-field cron schedule.
        headers: Extra request headers, in configuration order.
        body: Raw request body, if any.
    """

    method: HttpMethod
    url: str
    schedule: CronSchedule
    headers: tuple[tuple[str, str], ...] = ()
    body: str | None = None

    def __str__(self) -> str:
        return f"{self.method.value} {self.url}"
