"""Scheduler loop that fires due jobs on every wall-clock second."""

import asyncio
import logging
import math
import time
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

from cron_runner.core.cron import matches
from cron_runner.ports.job import JobRecord
from cron_runner.ports.outcome import DispatchOutcome
from cron_runner.ports.settings import SettingsPort

__all__ = ["start_main_loop", "MAX_CATCH_UP_SEC", "MAX_SLEEP_SEC"]

logger = logging.getLogger(__name__)

# Missed ticks up to this many seconds old are still fired; older gaps are skipped.
MAX_CATCH_UP_SEC = 5
# Longest single sleep, so stop_fn is polled at least once per second.
MAX_SLEEP_SEC = 1.0

DispatchFn = Callable[[JobRecord, datetime], Awaitable[DispatchOutcome]]
ReportFn = Callable[[DispatchOutcome], None]


async def start_main_loop(
    settings: SettingsPort,
    stop_fn: Callable[[], bool],
    dispatch_fn: DispatchFn,
    report_fn: ReportFn,
    clock: Callable[[], float] = time.time,
) -> None:
    """Run the scheduling loop.

    On every wall-clock second boundary:
    1. Match every job's schedule against the tick instant (UTC).
    2. Start each due job's dispatch as a background task (fire-and-forget).
    3. Sleep until the next boundary.
    4. Repeat until stop_fn() returns True, then cancel in-flight tasks.

    Args:
        settings: Runtime configuration (jobs, in-flight cap).
        stop_fn: Callable that returns True when loop should exit.
        dispatch_fn: Async function that runs one job and returns its outcome.
        report_fn: Receives every outcome once its dispatch finishes.
        clock: Wall-clock source in epoch seconds.

    Notes:
        - The loop never awaits individual dispatches: a slow endpoint
          delays neither other jobs nor the next tick.
        - Tick seconds are strictly increasing, so no second fires twice.
          A short stall is caught up second by second; a longer gap or a
          forward clock jump resynchronizes to the current second; after a
          backward jump the loop waits until the clock passes the last
          fired second.
        - Dispatches of the same job may overlap. The total number in
          flight is capped by settings.max_in_flight; due jobs over the
          cap are skipped for that tick.
    """
    next_tick: int = math.floor(clock()) + 1
    clock_behind = False
    pending: set[asyncio.Task[None]] = set()
    loop = asyncio.get_running_loop()

    async def _run_once(job: JobRecord, tick: datetime) -> None:
        """Run one dispatch and report its outcome."""
        try:
            outcome = await dispatch_fn(job, tick)
            report_fn(outcome)
        except asyncio.CancelledError:
            logger.debug(f"Dispatch of {job} cancelled on shutdown.")
            raise
        except Exception as e:  # noqa: BLE001
            logger.error(f"Unexpected error in dispatch task for {job}: {e}", exc_info=True)
        finally:
            task = asyncio.current_task()
            if task is not None:
                pending.discard(task)

    def _fire(tick_sec: int) -> None:
        tick = datetime.fromtimestamp(tick_sec, tz=timezone.utc)
        for job in settings.jobs:
            if not matches(job.schedule, tick):
                continue
            if len(pending) >= settings.max_in_flight:
                logger.warning(
                    f"Skipping {job} at {tick.isoformat()}: "
                    f"{len(pending)} dispatches already in flight"
                )
                continue

            # Fire and forget
            task: asyncio.Task[None] = loop.create_task(_run_once(job, tick))
            pending.add(task)

    while not stop_fn():
        now = clock()

        if now < next_tick:
            if next_tick - now > MAX_SLEEP_SEC and not clock_behind:
                logger.warning(
                    f"Wall clock moved backward ({next_tick - 1 - now:.1f}s behind the last "
                    "fired second), waiting for it to catch up"
                )
                clock_behind = True
            await asyncio.sleep(min(next_tick - now, MAX_SLEEP_SEC))
            continue

        clock_behind = False
        current = math.floor(now)
        if current - next_tick > MAX_CATCH_UP_SEC:
            logger.warning(
                f"Scheduler is {current - next_tick}s behind the wall clock, "
                "skipping missed ticks and resynchronizing"
            )
            next_tick = current

        _fire(next_tick)
        next_tick += 1

    if pending:
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
