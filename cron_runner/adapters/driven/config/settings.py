"""Configuration loading from environment variables."""

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from cron_runner.adapters.driven.config.jobs import parse_jobs
from cron_runner.ports.job import JobRecord

__all__ = ["Settings", "load_settings"]

load_dotenv()

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """Runtime configuration for the cron runner.

    Attributes:
        secret: Shared secret sent as X-Cron-Secret on every request.
        jobs_spec: Raw job list (METHOD|URL|CRON_EXPR|HEADERS|BODY entries).
        request_timeout_sec: Total timeout for one HTTP request.
        max_in_flight: Maximum number of concurrently running dispatches.
        jobs: Parsed job records (populated from jobs_spec).
    """

    secret: str = Field(..., description="Shared secret sent with every request.")
    jobs_spec: str = Field(..., description="Job list, one entry per line or ';'.")
    request_timeout_sec: float = Field(
        default=30.0, gt=0, description="Total timeout for one HTTP request in seconds."
    )
    max_in_flight: int = Field(
        default=1000, gt=0, description="Maximum number of concurrently running dispatches."
    )
    jobs: list[JobRecord] = Field(
        default_factory=list,
        description="Parsed job records (populated from jobs_spec).",
    )

    @field_validator("secret", "jobs_spec")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty or whitespace-only values.

        Args:
            v: Value to validate.

        Returns:
            The value unchanged.

        Raises:
            ValueError: If the value is blank.
        """
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    def load_jobs(self) -> None:
        """Parse and validate the job list.

        Raises:
            ValueError: If any job entry is invalid or the list is empty.
        """
        self.jobs = parse_jobs(self.jobs_spec)
        logger.debug(f"Loaded {len(self.jobs)} jobs")


def load_settings() -> Settings:
    """Load and validate settings from the environment.

    Required environment variables:
    - SECRET: Shared secret for the X-Cron-Secret header.
    - CRON_JOBS: Job list.

    Optional:
    - REQUEST_TIMEOUT_SECONDS: Positive number, default 30.
    - MAX_IN_FLIGHT_DISPATCHES: Positive integer, default 1000.

    Returns:
        Validated Settings object with parsed jobs.

    Raises:
        RuntimeError: If required env vars missing or invalid.
        ValueError: If configuration is invalid.
    """
    try:
        secret = os.environ["SECRET"]
        jobs_spec = os.environ["CRON_JOBS"]
    except KeyError as e:
        raise RuntimeError(f"Missing required environment variable: {e.args[0]}") from e

    timeout_raw = os.getenv("REQUEST_TIMEOUT_SECONDS", "30")
    try:
        request_timeout_sec = float(timeout_raw)
        if request_timeout_sec <= 0:
            raise ValueError("Must be positive")
    except ValueError as e:
        raise RuntimeError(
            f"REQUEST_TIMEOUT_SECONDS must be a positive number (got: {timeout_raw})"
        ) from e

    max_in_flight_raw = os.getenv("MAX_IN_FLIGHT_DISPATCHES", "1000")
    try:
        max_in_flight = int(max_in_flight_raw)
        if max_in_flight <= 0:
            raise ValueError("Must be positive")
    except ValueError as e:
        raise RuntimeError(
            f"MAX_IN_FLIGHT_DISPATCHES must be a positive integer (got: {max_in_flight_raw})"
        ) from e

    settings = Settings(
        secret=secret,
        jobs_spec=jobs_spec,
        request_timeout_sec=request_timeout_sec,
        max_in_flight=max_in_flight,
    )

    # Parse and validate the job list
    settings.load_jobs()

    logger.info(
        f"Cron runner configured: jobs={len(settings.jobs)}, "
        f"timeout={settings.request_timeout_sec:g}s, "
        f"max_in_flight={settings.max_in_flight}"
    )

    return settings
