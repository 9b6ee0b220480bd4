"""HTTP client adapter that dispatches jobs and classifies their outcome."""

import asyncio
import logging
from datetime import datetime
from types import TracebackType

import aiohttp
from aiohttp import ClientTimeout
from multidict import CIMultiDict

from cron_runner.ports.job import JobRecord
from cron_runner.ports.outcome import DispatchOutcome

__all__ = ["HttpClient", "SECRET_HEADER", "USER_AGENT"]

logger = logging.getLogger(__name__)

SECRET_HEADER = "X-Cron-Secret"
USER_AGENT = "cron-runner/1.0 (Python aiohttp)"
DEFAULT_TIMEOUT = 30.0
FIRST_FAILING_HTTP_CODE = 400


class HttpClient:
    """HTTP client that runs one job request per dispatch.

    Features:
    - Shared secret header on every request.
    - Single attempt, no retry; failures become outcomes, never exceptions.
    - Job headers sent in order, repeated names included.
    - Context manager for proper resource cleanup.
    """

    def __init__(
        self,
        secret: str,
        *,
        timeout_sec: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize HTTP client.

        Args:
            secret: Value of the X-Cron-Secret header.
            timeout_sec: Total timeout for one request.
        """
        self.secret = secret
        self.timeout = ClientTimeout(total=timeout_sec)
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "HttpClient":
        """Enter async context manager (start session).

        Returns:
            Self for use in async with statement.
        """
        self.session = aiohttp.ClientSession(timeout=self.timeout)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Exit async context manager (close session).

        Args:
            exc_type: Exception type if raised in context.
            exc: Exception instance if raised in context.
            tb: Traceback if raised in context.
        """
        if self.session:
            await self.session.close()

    def build_headers(self, job: JobRecord) -> CIMultiDict[str]:
        """Assemble request headers for a job.

        The secret header always comes from the process secret; a job header
        with the same name is ignored. Other job headers keep their order and
        repeated names. A default User-Agent is added unless the job sets one.

        Args:
            job: Job being dispatched.

        Returns:
            Case-insensitive multi-valued headers for the request.
        """
        headers: CIMultiDict[str] = CIMultiDict({SECRET_HEADER: self.secret})
        for name, value in job.headers:
            if name.lower() == SECRET_HEADER.lower():
                continue
            headers.add(name, value)
        if "User-Agent" not in headers:
            headers["User-Agent"] = USER_AGENT
        return headers

    async def _send(self, job: JobRecord) -> int:
        """Send a job's request once.

        The body is drained so the connection can go back to the pool.

        Args:
            job: Job to send.

        Returns:
            HTTP status code of the response.

        Raises:
            RuntimeError: If session not initialized.
            aiohttp exceptions: Network/timeout errors.
        """
        if self.session is None:
            raise RuntimeError("Session not initialized; use 'async with' context manager")

        data = job.body.encode() if job.body is not None else None
        async with self.session.request(
            job.method.value,
            job.url,
            headers=self.build_headers(job),
            data=data,
        ) as resp:
            await resp.read()
            return resp.status

    async def dispatch(self, job: JobRecord, tick: datetime) -> DispatchOutcome:
        """Run one job and classify the result.

        Args:
            job: Job to dispatch.
            tick: Instant of the tick that fired the job.

        Returns:
            OK outcome for status < 400, HTTP error outcome for 4xx/5xx,
            transport error outcome when no response was obtained.
        """
        try:
            status = await self._send(job)
        except asyncio.CancelledError:
            raise
        except asyncio.TimeoutError:
            return DispatchOutcome.transport_error(
                job, tick, f"request timed out after {self.timeout.total:g}s"
            )
        except aiohttp.ClientError as e:
            return DispatchOutcome.transport_error(job, tick, str(e) or type(e).__name__)
        except Exception as e:  # noqa: BLE001
            logger.debug(f"Unexpected error dispatching {job}", exc_info=True)
            return DispatchOutcome.transport_error(job, tick, f"{type(e).__name__}: {e}")

        if status >= FIRST_FAILING_HTTP_CODE:
            return DispatchOutcome.http_error(job, tick, status)
        return DispatchOutcome.success(job, tick, status)
