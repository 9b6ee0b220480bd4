"""Tests for configuration loading and validation."""

import pytest
from pydantic import ValidationError

from cron_runner.adapters.driven.config.settings import Settings, load_settings

__all__ = []

JOBS = "GET|http://example.com/ping|0 * * * * *;POST|http://example.com/hook|*/5 * * * * *||{}"


@pytest.fixture
def env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Environment with valid required variables."""
    monkeypatch.setenv("SECRET", "s3cr3t")
    monkeypatch.setenv("CRON_JOBS", JOBS)
    monkeypatch.delenv("REQUEST_TIMEOUT_SECONDS", raising=False)
    monkeypatch.delenv("MAX_IN_FLIGHT_DISPATCHES", raising=False)
    return monkeypatch


def test_settings_loads_jobs() -> None:
    """Settings should parse the job list."""
    settings = Settings(secret="s3cr3t", jobs_spec=JOBS)
    settings.load_jobs()

    assert [job.url for job in settings.jobs] == [
        "http://example.com/ping",
        "http://example.com/hook",
    ]
    assert settings.jobs[1].body == "{}"


def test_settings_rejects_blank_secret() -> None:
    """Settings should reject an empty secret."""
    with pytest.raises(ValidationError, match="must not be empty"):
        Settings(secret="  ", jobs_spec=JOBS)


def test_settings_rejects_non_positive_timeout() -> None:
    """Settings should reject a non-positive timeout."""
    with pytest.raises(ValidationError):
        Settings(secret="s", jobs_spec=JOBS, request_timeout_sec=0)


def test_settings_rejects_invalid_job() -> None:
    """Settings should reject an invalid job entry."""
    settings = Settings(secret="s", jobs_spec="GET|http://example.com|* * *")

    with pytest.raises(ValueError, match="Invalid job #1"):
        settings.load_jobs()


def test_settings_load_settings_success(env) -> None:
    """Load Settings should create Settings object when the input is valid."""
    settings = load_settings()

    assert isinstance(settings, Settings)
    assert settings.secret == "s3cr3t"
    assert len(settings.jobs) == 2
    assert settings.request_timeout_sec == 30.0
    assert settings.max_in_flight == 1000


def test_settings_load_settings_optional_values(env) -> None:
    """Optional variables should override the defaults."""
    env.setenv("REQUEST_TIMEOUT_SECONDS", "2.5")
    env.setenv("MAX_IN_FLIGHT_DISPATCHES", "10")

    settings = load_settings()

    assert settings.request_timeout_sec == 2.5
    assert settings.max_in_flight == 10


@pytest.mark.parametrize("missing", ["SECRET", "CRON_JOBS"])
def test_settings_load_settings_missing_variable(env, missing: str) -> None:
    """Load Settings should name a missing required variable."""
    env.delenv(missing)

    with pytest.raises(RuntimeError, match=f"Missing required environment variable: {missing}"):
        load_settings()


@pytest.mark.parametrize(
    ("name", "value", "message"),
    [
        ("REQUEST_TIMEOUT_SECONDS", "-1", "REQUEST_TIMEOUT_SECONDS must be a positive number"),
        ("REQUEST_TIMEOUT_SECONDS", "soon", "REQUEST_TIMEOUT_SECONDS must be a positive number"),
        ("MAX_IN_FLIGHT_DISPATCHES", "0", "MAX_IN_FLIGHT_DISPATCHES must be a positive integer"),
        ("MAX_IN_FLIGHT_DISPATCHES", "1.5", "MAX_IN_FLIGHT_DISPATCHES must be a positive integer"),
    ],
)
def test_settings_load_settings_invalid_optional(env, name: str, value: str, message: str) -> None:
    """Load Settings should reject invalid optional values."""
    env.setenv(name, value)

    with pytest.raises(RuntimeError, match=message):
        load_settings()


def test_settings_load_settings_invalid_jobs(env) -> None:
    """Load Settings should fail when any job is invalid."""
    env.setenv("CRON_JOBS", JOBS + ";BREW|http://example.com|* * * * * *")

    with pytest.raises(ValueError, match="Unsupported method"):
        load_settings()
