"""Tests for job list parsing."""

import pytest

from cron_runner.adapters.driven.config.jobs import parse_headers, parse_job, parse_jobs
from cron_runner.ports.job import HttpMethod

__all__ = []


def test_parse_job_minimal_entry() -> None:
    """METHOD|URL|CRON should be enough for a job."""
    job = parse_job("GET|http://example.com/ping|0 * * * * *")

    assert job.method is HttpMethod.GET
    assert job.url == "http://example.com/ping"
    assert str(job.schedule) == "0 * * * * *"
    assert job.headers == ()
    assert job.body is None


def test_parse_job_with_empty_headers_and_body() -> None:
    """Trailing empty headers and body should mean none."""
    job = parse_job("GET|http://example/ping|0 * * * * *||")

    assert job.headers == ()
    assert job.body is None


def test_parse_job_full_entry() -> None:
    """Headers and body should be parsed; body kept verbatim."""
    job = parse_job(
        "post|https://example.com/hook|*/30 * * * * *|"
        "Content-Type: application/json, X-Trace:a:b|{\"a\": \"x|y\"}"
    )

    assert job.method is HttpMethod.POST
    assert job.headers == (("Content-Type", "application/json"), ("X-Trace", "a:b"))
    assert job.body == '{"a": "x|y"}'


@pytest.mark.parametrize(
    ("entry", "message"),
    [
        ("GET|http://example.com", "Expected METHOD|URL|CRON_EXPR"),
        ("FETCH|http://example.com|* * * * * *", "Unsupported method"),
        ("GET|example.com/ping|* * * * * *", "Invalid URL"),
        ("GET|ftp://example.com/file|* * * * * *", "Invalid URL"),
        ("GET|http://example.com|* * * * *", "6 fields"),
        ("GET|http://example.com|61 * * * * *", "out of range"),
        ("GET|http://example.com|* * * * * *|NoColon", "Invalid header"),
        ("GET|http://example.com|* * * * * *|:value", "Invalid header"),
    ],
)
def test_parse_job_rejects_invalid_entries(entry: str, message: str) -> None:
    """Invalid entries should raise ValueError with a useful message."""
    with pytest.raises(ValueError, match=message):
        parse_job(entry)


def test_parse_headers_blank() -> None:
    """Blank header text should give no headers."""
    assert parse_headers("   ") == ()


def test_parse_jobs_splits_on_semicolons_and_newlines() -> None:
    """Entries may be separated by ';', '\\n' or '\\r\\n'; blanks are skipped."""
    spec = (
        "GET|http://a.example/ping|* * * * * *;\n"
        "  PUT|http://b.example/ping|0 0 * * * *  \r\n"
        "\n"
        ";DELETE|http://c.example/ping|0 0 0 * * SUN;"
    )

    jobs = parse_jobs(spec)

    assert [(j.method.value, j.url) for j in jobs] == [
        ("GET", "http://a.example/ping"),
        ("PUT", "http://b.example/ping"),
        ("DELETE", "http://c.example/ping"),
    ]


def test_parse_jobs_fails_on_any_invalid_entry() -> None:
    """One bad entry should fail the whole list, naming the entry."""
    spec = "GET|http://a.example/ping|* * * * * *;GET|http://b.example/ping|bad"

    with pytest.raises(ValueError, match="Invalid job #2"):
        parse_jobs(spec)


def test_parse_jobs_rejects_empty_list() -> None:
    """A list with no entries should be rejected."""
    with pytest.raises(ValueError, match="No jobs defined"):
        parse_jobs(" ;\n; ")
