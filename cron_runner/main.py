"""Application entrypoint."""

import asyncio
import logging

from cron_runner.adapters.driven.config.settings import load_settings
from cron_runner.adapters.driven.http.client import HttpClient
from cron_runner.adapters.driven.logging.logging_config import configure_logs
from cron_runner.adapters.driven.logging.outcome_log import OutcomeLogger
from cron_runner.adapters.driving.signals import make_stop_on_sigterm
from cron_runner.core.event_loop import start_main_loop
from cron_runner.ports.settings import SettingsPort

__all__ = ["main", "run"]

logger = logging.getLogger(__name__)


async def main() -> int:
    """Start the cron runner service.

    Startup sequence:
    1. Configure logging.
    2. Load and validate configuration; any invalid job aborts startup.
    3. Run the scheduler loop.
    4. Gracefully shutdown on SIGTERM/SIGINT.

    Returns:
        Process exit status.
    """
    configure_logs()
    logger.info("Starting cron runner...")

    try:
        config = load_settings()
    except (RuntimeError, ValueError) as exc:
        logger.error(
            "Configuration error: %s\n"
            "Hint: check SECRET and CRON_JOBS; each job is "
            "METHOD|URL|SEC MIN HOUR DOM MON DOW|Name:Value,...|BODY.",
            exc,
        )
        return 1

    # Wrap config into port so core depends on interface (hexagonal)
    settings_port = SettingsPort(
        secret=config.secret,
        jobs=tuple(config.jobs),
        request_timeout_sec=config.request_timeout_sec,
        max_in_flight=config.max_in_flight,
    )

    outcome_logger = OutcomeLogger()
    http_client = HttpClient(
        settings_port.secret,
        timeout_sec=settings_port.request_timeout_sec,
    )

    async with http_client as http:
        try:
            await start_main_loop(
                settings=settings_port,
                stop_fn=make_stop_on_sigterm(),
                dispatch_fn=http.dispatch,
                report_fn=outcome_logger.emit,
            )
        except Exception as e:
            logger.error(f"Unhandled exception in scheduler loop: {e}", exc_info=True)
            return 1

        logger.info("Cron runner stopped.")
    return 0


def run() -> None:
    """Console script entrypoint."""
    try:
        raise SystemExit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user (Ctrl+C).")


if __name__ == "__main__":
    run()
