"""One log line per finished dispatch."""

import logging

from cron_runner.adapters.driven.logging.logging_config import OUTCOME_LOGGER_NAME
from cron_runner.ports.outcome import DispatchOutcome, OutcomeSinkPort

__all__ = ["OutcomeLogger", "format_outcome"]


def format_outcome(outcome: DispatchOutcome) -> str:
    """Render an outcome as ``<tick> | OK   | METHOD URL | <detail>``.

    The timestamp is the tick instant in RFC 3339, UTC.
    """
    status = "FAIL" if outcome.is_failed else "OK  "
    return (
        f"{outcome.tick.isoformat(timespec='seconds')} | {status} | "
        f"{outcome.method} {outcome.url} | {outcome.detail}"
    )


class OutcomeLogger(OutcomeSinkPort):
    """Writes outcomes to the outcome logger: OK at INFO, FAIL at WARNING."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(OUTCOME_LOGGER_NAME)

    def emit(self, outcome: DispatchOutcome) -> None:
        level = logging.WARNING if outcome.is_failed else logging.INFO
        self._logger.log(level, format_outcome(outcome))
