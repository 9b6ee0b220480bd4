"""Configuration check for container orchestration."""

import logging

from cron_runner.adapters.driven.config.settings import load_settings
from cron_runner.adapters.driven.logging.logging_config import configure_logs

__all__ = ["main"]

logger = logging.getLogger(__name__)


def main() -> int:
    """Validate configuration without starting the scheduler.

    Validates:
    - Required environment variables are set.
    - Every job entry parses (method, URL, cron expression, headers).

    Returns:
        0 if healthy, 1 if unhealthy.
    """
    configure_logs()

    try:
        settings = load_settings()
    except Exception as exc:
        logger.error(f"Cron runner config check FAILED: {exc}")
        return 1

    for job in settings.jobs:
        logger.info(f"  {job} @ '{job.schedule}'")
    logger.info("Cron runner config check OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
