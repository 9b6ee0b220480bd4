"""Signal handling for graceful shutdown."""

import asyncio
import logging
import signal
from collections.abc import Callable

__all__ = ["make_stop_on_sigterm"]

logger = logging.getLogger(__name__)


def make_stop_on_sigterm() -> Callable[[], bool]:
    """Create a signal-based stop flag for the scheduler loop.

    Registers SIGTERM and SIGINT handlers that set an asyncio.Event and
    returns its is_set method for the loop to poll once per tick.
    In-flight dispatches are not waited for beyond the loop's own
    cancellation step.

    Returns:
        Callable that returns True once a termination signal was received.
    """
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()

    def handle_signal(sig: signal.Signals) -> None:
        if stop.is_set():
            return
        logger.info(f"{sig.name} received, stopping scheduler...")
        stop.set()

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, handle_signal, sig)

    return stop.is_set
