"""File watch trigger using watchfiles."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from watchfiles import watch

from shiprunner.triggers._glob import matches_any, watch_roots
from shiprunner.triggers.base import ChangeEvent, TriggerBase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WatchRule:
    """Glob patterns (relative to *base_dir*) and the stages they rerun."""

    patterns: tuple[str, ...]
    stages: tuple[str, ...]
    base_dir: Path
    debounce_seconds: float = 0.5

    def relative(self, path: str) -> str | None:
        """Return *path* relative to ``base_dir`` in ``/`` form, or None if outside."""
        try:
            return Path(path).resolve().relative_to(self.base_dir.resolve()).as_posix()
        except ValueError:
            return None

    def matches(self, path: str) -> bool:
        rel = self.relative(path)
        return rel is not None and matches_any(rel, self.patterns)


class FileWatchTrigger(TriggerBase):
    """Fires once per debounced batch of changes matching the rule's patterns."""

    def __init__(self, rule: WatchRule, callback: Callable[[ChangeEvent], None]) -> None:
        super().__init__(callback)
        self._rule = rule

    def _roots(self) -> list[Path]:
        roots = []
        for root in watch_roots(self._rule.patterns, self._rule.base_dir):
            if root.is_dir():
                roots.append(root)
            else:
                logger.warning("Not watching %s: directory does not exist", root)
        return roots

    def _run(self) -> None:
        roots = self._roots()
        if not roots:
            logger.warning("No existing directories to watch for %s", list(self._rule.patterns))
            return

        def _filter(_, path: str) -> bool:
            return self._rule.matches(path)

        logger.debug("watching %s", ", ".join(str(r) for r in roots))
        for changes in watch(
            *roots,
            watch_filter=_filter,
            stop_event=self._stop_event,
            debounce=int(self._rule.debounce_seconds * 1000),
        ):
            if self._stop_event.is_set():
                break
            paths = sorted({rel for _, p in changes if (rel := self._rule.relative(p))})
            if paths:
                self._callback(ChangeEvent(paths=tuple(paths)))
