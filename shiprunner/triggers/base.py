"""Base types for file-change triggers."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass(frozen=True)
class ChangeEvent:
    """One debounced batch of matching file changes."""

    paths: tuple[str, ...]
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    @property
    def summary(self) -> str:
        if not self.paths:
            return "(startup)"
        head = ", ".join(self.paths[:3])
        more = len(self.paths) - 3
        return f"{head} (+{more} more)" if more > 0 else head


class TriggerBase(ABC):
    """Abstract base for triggers. Observes in a daemon thread."""

    def __init__(self, callback: Callable[[ChangeEvent], None]) -> None:
        self._callback = callback
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name=type(self).__name__, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=10)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @abstractmethod
    def _run(self) -> None:
        """Main loop; must check self._stop_event regularly."""
