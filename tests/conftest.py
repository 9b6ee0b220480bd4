"""Shared test doubles."""

from typing import Any

import pytest

from cron_runner.core.cron import parse_cron_expression
from cron_runner.ports.job import HttpMethod, JobRecord


class FakeResponse:
    """Async context manager standing in for aiohttp's response."""

    def __init__(self, status: int) -> None:
        self.status = status
        self.was_read = False

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc: object) -> None:
        return None

    async def read(self) -> bytes:
        self.was_read = True
        return b""


class FakeSession:
    """Records requests and answers with a fixed status or error."""

    def __init__(self, status: int = 200, error: BaseException | None = None) -> None:
        self.status = status
        self.error = error
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self.responses: list[FakeResponse] = []

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        response = FakeResponse(self.status)
        self.responses.append(response)
        return response


@pytest.fixture
def make_job():
    """Factory for job records with sensible defaults."""

    def _make(
        method: str = "GET",
        url: str = "http://example/ping",
        cron: str = "* * * * * *",
        headers: tuple[tuple[str, str], ...] = (),
        body: str | None = None,
    ) -> JobRecord:
        return JobRecord(
            method=HttpMethod(method),
            url=url,
            schedule=parse_cron_expression(cron),
            headers=headers,
            body=body,
        )

    return _make


@pytest.fixture
def make_session():
    """Factory for fake aiohttp sessions."""
    return FakeSession
