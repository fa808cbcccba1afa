"""Centralized logging for shiprunner."""

from __future__ import annotations

import logging
import sys
import threading

_lock = threading.Lock()
_setup_done = False


class _Formatter(logging.Formatter):
    """Format records as ``[tag] message``; warnings and errors also carry the level."""

    def format(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith("shiprunner."):
            name = name[len("shiprunner.") :]
        prefix = f"[{name}]"
        if record.levelno >= logging.WARNING:
            prefix = f"{prefix} {record.levelname.lower()}:"
        record.msg = f"{prefix} {record.msg}"
        return super().format(record)


def setup_logging(verbose: bool = False) -> None:
    """Configure the ``shiprunner`` logger once per process.

    Attaches one ``StreamHandler(sys.stderr)`` at WARNING, or DEBUG when
    *verbose* is True, and stops propagation to the root logger. A later
    call with ``verbose=True`` still lowers the level.
    """
    global _setup_done
    logger = logging.getLogger("shiprunner")
    with _lock:
        if verbose:
            logger.setLevel(logging.DEBUG)
        if _setup_done:
            return
        if not verbose:
            logger.setLevel(logging.WARNING)
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_Formatter())
        logger.addHandler(handler)
        logger.propagate = False
        _setup_done = True
