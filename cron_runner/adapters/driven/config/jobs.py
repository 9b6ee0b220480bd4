"""Parsing of the job list into job records."""

import logging
import re

from pydantic import HttpUrl, TypeAdapter

from cron_runner.core.cron import parse_cron_expression
from cron_runner.ports.job import HttpMethod, JobRecord

__all__ = ["parse_headers", "parse_job", "parse_jobs"]

logger = logging.getLogger(__name__)
_http_url_adapter = TypeAdapter(HttpUrl)
_ENTRY_SEPARATORS = re.compile(r"[;\r\n]")


def parse_headers(raw: str) -> tuple[tuple[str, str], ...]:
    """Parse comma-separated ``Name:Value`` pairs.

    Names and values are trimmed; values may contain further colons.

    Args:
        raw: Header list, possibly blank.

    Returns:
        Header pairs in their original order.

    Raises:
        ValueError: If a pair has no colon or an empty name.
    """
    if not raw.strip():
        return ()

    headers = []
    for pair in raw.split(","):
        name, sep, value = pair.partition(":")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"Invalid header {pair.strip()!r}, expected Name:Value")
        headers.append((name, value.strip()))
    return tuple(headers)


def parse_job(entry: str) -> JobRecord:
    """Parse one ``METHOD|URL|CRON_EXPR|HEADERS|BODY`` entry.

    Headers and body are optional. The body is everything after the fourth
    separator and is kept verbatim; an empty body means no body.

    Args:
        entry: Single job entry.

    Returns:
        The job record.

    Raises:
        ValueError: If any part of the entry is invalid.
    """
    parts = entry.split("|", 4)
    if len(parts) < 3:
        raise ValueError("Expected METHOD|URL|CRON_EXPR[|HEADERS[|BODY]]")

    method_raw = parts[0].strip().upper()
    try:
        method = HttpMethod(method_raw)
    except ValueError as e:
        allowed = ", ".join(m.value for m in HttpMethod)
        raise ValueError(f"Unsupported method {method_raw!r} (allowed: {allowed})") from e

    url = parts[1].strip()
    try:
        _http_url_adapter.validate_python(url)
    except Exception as e:
        raise ValueError(f"Invalid URL {url!r}: {e}") from e

    schedule = parse_cron_expression(parts[2].strip())
    headers = parse_headers(parts[3]) if len(parts) >= 4 else ()
    body = parts[4] if len(parts) == 5 and parts[4] else None

    return JobRecord(method=method, url=url, schedule=schedule, headers=headers, body=body)


def parse_jobs(spec: str) -> list[JobRecord]:
    """Parse a whole job list.

    Entries are separated by ``;`` or line breaks; blank entries are ignored.
    A single invalid entry fails the whole list.

    Args:
        spec: Job list text.

    Returns:
        Parsed jobs, in configuration order.

    Raises:
        ValueError: If an entry is invalid or no job is defined.
    """
    entries = [e.strip() for e in _ENTRY_SEPARATORS.split(spec)]
    entries = [e for e in entries if e]
    if not entries:
        raise ValueError("No jobs defined")

    jobs = []
    for index, entry in enumerate(entries, start=1):
        try:
            jobs.append(parse_job(entry))
        except ValueError as e:
            raise ValueError(f"Invalid job #{index} ({entry!r}): {e}") from e

    for job in jobs:
        logger.debug(f"Loaded job {job} with schedule '{job.schedule}'")
    return jobs
