"""Watch mode: file changes fire -> check stages rerun -> result reported.

Observation and execution run on separate threads. The trigger callback
only fills a single-slot queue, so events keep arriving while a check run
is blocked on a child process. Triggers that land during a run are merged
into one follow-up run.
"""

from __future__ import annotations

import logging
import threading

from rich.markup import escape

from shiprunner.display import console, display_result
from shiprunner.pipeline.executor import PipelineResult, run_pipeline
from shiprunner.pipeline.process import CommandRunner, Runner
from shiprunner.pipeline.schema import Pipeline
from shiprunner.project.loader import Project
from shiprunner.release import watch_pipeline
from shiprunner.triggers.base import ChangeEvent, TriggerBase
from shiprunner.triggers.file_watcher import FileWatchTrigger, WatchRule

_logger = logging.getLogger(__name__)


class WatchRunner:
    """Reruns *pipeline* whenever *rule* matches a change; survives failures."""

    def __init__(
        self,
        pipeline: Pipeline,
        rule: WatchRule,
        *,
        runner: Runner | None = None,
        trigger: TriggerBase | None = None,
    ) -> None:
        self._pipeline = pipeline
        self._rule = rule
        self._runner = runner or CommandRunner(rule.base_dir)
        self._trigger = trigger or FileWatchTrigger(rule, self.on_change)

        self._stop = threading.Event()
        self._lock = threading.Lock()
        self._pending = threading.Event()
        self._pending_paths: set[str] = set()
        self._busy = threading.Event()
        self._worker: threading.Thread | None = None

        self.runs = 0
        self.failures = 0
        self.last_result: PipelineResult | None = None

    @classmethod
    def for_project(cls, project: Project, *, runner: Runner | None = None) -> WatchRunner:
        watch = project.spec.watch
        rule = WatchRule(
            patterns=tuple(watch.patterns),
            stages=tuple(watch.stages),
            base_dir=project.root,
            debounce_seconds=watch.debounce_seconds,
        )
        return cls(watch_pipeline(project), rule, runner=runner)

    # -- trigger side -------------------------------------------------------

    def on_change(self, event: ChangeEvent) -> None:
        """Queue a rerun. Never blocks on the pipeline."""
        with self._lock:
            self._pending_paths.update(event.paths)
            self._pending.set()

    # -- worker side --------------------------------------------------------

    def _take_pending(self) -> list[str] | None:
        with self._lock:
            if not self._pending.is_set():
                return None
            self._pending.clear()
            paths = sorted(self._pending_paths)
            self._pending_paths.clear()
            return paths

    def _work(self) -> None:
        while not self._stop.is_set():
            if not self._pending.wait(timeout=0.2):
                continue
            paths = self._take_pending()
            if paths is None or self._stop.is_set():
                continue
            self._busy.set()
            try:
                self.run_checks(paths)
            finally:
                self._busy.clear()

    def run_checks(self, paths: list[str] | None = None) -> PipelineResult | None:
        """Run the check pipeline once, absorbing every failure.

        Returns the result, or None if the run itself crashed.
        """
        change = ChangeEvent(paths=tuple(paths or ()))
        console.print(f"\n[dim]Change:[/dim] {escape(change.summary)}", highlight=False)
        try:
            result = run_pipeline(self._pipeline, self._runner)
        except Exception:
            _logger.exception("Check run crashed; still watching")
            self.failures += 1
            self.runs += 1
            return None

        self.last_result = result
        display_result(result)
        if not result.success:
            console.print("[dim]Still watching for changes...[/dim]")
            self.failures += 1
        self.runs += 1
        return result

    def shutdown_notice(self) -> str:
        """What the first Ctrl-C tells the user, depending on the worker state."""
        if self._busy.is_set():
            return "Stopping after the current check run (Ctrl-C again to force)..."
        if self._pending.is_set():
            return "Stopping; the queued check run is dropped (Ctrl-C again to force)..."
        return "Stopping watch (Ctrl-C again to force)..."

    # -- lifecycle ----------------------------------------------------------

    def start(self, *, run_on_start: bool = False) -> None:
        if run_on_start:
            self.on_change(ChangeEvent(paths=()))
        self._stop.clear()
        self._worker = threading.Thread(target=self._work, name="watch-worker", daemon=True)
        self._worker.start()
        self._trigger.start()

    def stop(self) -> None:
        self._stop.set()
        self._trigger.stop()
        if self._worker is not None:
            self._worker.join(timeout=10)

    def run(self, *, run_on_start: bool = True) -> None:
        """Start watching and block until SIGINT/SIGTERM."""
        from shiprunner._signal import install_shutdown_handler

        console.print(
            f"[bold]Watching[/bold] {escape(', '.join(self._rule.patterns))} "
            f"[dim]-> {' + '.join(self._rule.stages)}[/dim]",
            highlight=False,
        )
        shutdown = threading.Event()
        restore_signals = install_shutdown_handler(
            shutdown,
            on_first_signal=lambda: console.print(f"\n{self.shutdown_notice()}"),
        )
        self.start(run_on_start=run_on_start)
        try:
            while not shutdown.wait(timeout=30):
                pass
        finally:
            self.stop()
            restore_signals()
        console.print("Watch stopped.")
