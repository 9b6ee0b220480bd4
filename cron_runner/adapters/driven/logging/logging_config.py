"""Logging setup for the cron runner."""

import logging
import sys

__all__ = ["configure_logs", "OUTCOME_LOGGER_NAME"]

OUTCOME_LOGGER_NAME = "cron_runner.outcomes"


class _BelowLevel(logging.Filter):
    """Pass only records strictly below a level."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def configure_logs() -> None:
    """Configure console logging.

    Sets up:
    - Root logger at INFO level on stderr.
    - Framework loggers (aiohttp, asyncio) at WARNING level.
    - Application loggers (cron_runner) at DEBUG level.
    - Structured format with timestamp, level, module, and line number.
    - Outcome logger with bare lines: successes on stdout, failures on stderr.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
    date_format = "%d/%m/%y %H:%M:%S"

    formatter = logging.Formatter(log_format, date_format)
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    # Root logger
    root = logging.getLogger()
    root.setLevel(logging.INFO)
    root.addHandler(handler)

    # Suppress verbose framework loggers
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    # Application loggers
    logging.getLogger("cron_runner").setLevel(logging.DEBUG)

    # Outcome lines carry their own timestamp
    bare = logging.Formatter("%(message)s")
    ok_handler = logging.StreamHandler(sys.stdout)
    ok_handler.setFormatter(bare)
    ok_handler.addFilter(_BelowLevel(logging.WARNING))
    fail_handler = logging.StreamHandler(sys.stderr)
    fail_handler.setFormatter(bare)
    fail_handler.setLevel(logging.WARNING)

    outcomes = logging.getLogger(OUTCOME_LOGGER_NAME)
    outcomes.setLevel(logging.INFO)
    outcomes.propagate = False
    outcomes.addHandler(ok_handler)
    outcomes.addHandler(fail_handler)
