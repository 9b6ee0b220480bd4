"""Settings port definition (DTO)."""

from dataclasses import dataclass

from cron_runner.ports.job import JobRecord

__all__ = ["SettingsPort"]


@dataclass(frozen=True)
class SettingsPort:
    """Runtime settings for the scheduler loop and dispatcher.

    Decouples core from concrete configuration sources, enabling
    easy testing and implementation swapping.

    Attributes:
        secret: Value sent in the X-Cron-Secret header of every request.
        jobs: Jobs to schedule, fixed for the process lifetime.
        request_timeout_sec: Total timeout for one HTTP request.
        max_in_flight: Upper bound on concurrently running dispatches.
    """

    secret: str
    jobs: tuple[JobRecord, ...]
    request_timeout_sec: float = 30.0
    max_in_flight: int = 1000
