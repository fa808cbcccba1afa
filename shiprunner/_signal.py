"""Graceful-then-forced shutdown for the watch loop."""

from __future__ import annotations

import os
import signal
import sys
import threading
from collections.abc import Callable, Iterable

FORCED_EXIT_STATUS = 130


def install_shutdown_handler(
    stop_event: threading.Event,
    *,
    on_first_signal: Callable[[], None] | None = None,
    signals: Iterable[signal.Signals] = (signal.SIGINT, signal.SIGTERM),
) -> Callable[[], None]:
    """Route *signals* to *stop_event* and return a function that undoes it.

    The first signal runs *on_first_signal* and sets *stop_event* so the
    loop can wind down after the current check run. A second one exits with
    status 130 immediately, even while a child process is still running.
    """
    received = threading.Event()

    def _handler(signum: int, frame: object) -> None:
        if received.is_set():
            name = signal.Signals(signum).name
            print(f"\nForce shutdown ({name}).", file=sys.stderr, flush=True)
            os._exit(FORCED_EXIT_STATUS)
        received.set()
        if on_first_signal is not None:
            on_first_signal()
        stop_event.set()

    previous = {sig: signal.signal(sig, _handler) for sig in signals}

    def restore() -> None:
        for sig, handler in previous.items():
            signal.signal(sig, handler)

    return restore
