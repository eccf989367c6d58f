"""Sequential execution of a batch of scripts.

The runner drives a ScriptExecutor over an ordered list of items, one at a
time, and reports progress to a BatchListener. Scripts may depend on each
other's side effects on the host, so two scripts never run at the same time.

Event order for a batch of N items:

    on_batch_start()
    for each item:
        on_status("Running: <display name>")
        on_output_append(">>> Running <path>")
        on_output_append(<combined output>)
        on_progress(done / N)
    on_batch_end(report)

A failing item never stops the batch. on_batch_end is always emitted.
"""

import threading
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from scriptbay.core.audit_log import AuditLog
from scriptbay.core.catalog import ScriptEntry
from scriptbay.core.clock import Clock
from scriptbay.core.executor import FAILED_EXIT_CODE, ExecutionResult, ScriptExecutor

DONE_STATUS = "Done"
CANCELLED_STATUS = "Cancelled"


@dataclass(frozen=True)
class BatchItem:
    """A script scheduled in a batch."""

    path: Path
    display_name: str

    @staticmethod
    def from_entry(entry: ScriptEntry) -> "BatchItem":
        return BatchItem(path=entry.path, display_name=entry.display_name)


@dataclass(frozen=True)
class BatchReport:
    """Outcome of a whole batch.

    Attributes:
        results: (item, result) pairs in execution order
        total: Number of items submitted
        cancelled: Whether the batch stopped early at a cancellation check
        duration_seconds: Wall-clock time from start to end
    """

    results: tuple[tuple[BatchItem, ExecutionResult], ...]
    total: int
    cancelled: bool
    duration_seconds: float

    @property
    def completed(self) -> int:
        return len(self.results)

    @property
    def failed(self) -> list[tuple[BatchItem, ExecutionResult]]:
        return [(item, result) for item, result in self.results if not result.succeeded]

    @property
    def succeeded(self) -> bool:
        """True if every submitted item ran and exited with code 0."""
        return not self.cancelled and not self.failed and self.completed == self.total

    @property
    def final_status(self) -> str:
        return CANCELLED_STATUS if self.cancelled else DONE_STATUS


class BatchListener:
    """Receives batch events. Every callback defaults to doing nothing.

    Callbacks are invoked on the thread running the batch; a listener driving
    a UI must hand them over to its own thread.
    """

    def on_batch_start(self) -> None:
        pass

    def on_status(self, text: str) -> None:
        pass

    def on_output_append(self, text: str) -> None:
        pass

    def on_progress(self, fraction: float) -> None:
        pass

    def on_batch_end(self, report: BatchReport) -> None:
        pass


class CancellationToken:
    """Cooperative cancellation flag, checked between two items.

    A script that is already running is not interrupted.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()


class BatchAlreadyRunningError(RuntimeError):
    """A batch was started while another batch on the same runner was running."""


class BatchHandle:
    """Handle on a batch running in the background."""

    def __init__(self) -> None:
        self._done = threading.Event()
        self._report: BatchReport | None = None
        self._error: BaseException | None = None

    @property
    def done(self) -> bool:
        return self._done.is_set()

    def wait(self, timeout: float | None = None) -> BatchReport | None:
        """Block until the batch finishes.

        Returns:
            The BatchReport, or None if timeout expired first

        Raises:
            Exception: Whatever a listener callback raised on the batch thread
        """
        if not self._done.wait(timeout):
            return None
        if self._error is not None:
            raise self._error
        return self._report

    def _finish(self, report: BatchReport | None, error: BaseException | None) -> None:
        self._report = report
        self._error = error
        self._done.set()


class BatchRunner:
    """Runs batches of scripts strictly one after another."""

    def __init__(self, executor: ScriptExecutor, audit_log: AuditLog, clock: Clock) -> None:
        self._executor = executor
        self._audit_log = audit_log
        self._clock = clock
        self._busy = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._busy.locked()

    def run_batch(
        self,
        items: Sequence[BatchItem],
        listener: BatchListener,
        cancel: CancellationToken | None = None,
    ) -> BatchReport:
        """Run items on the calling thread and return when the batch is over.

        Raises:
            BatchAlreadyRunningError: If a batch is already running on this runner
        """
        self._acquire()
        try:
            return self._run(list(items), listener, cancel)
        finally:
            self._busy.release()

    def start_batch(
        self,
        items: Sequence[BatchItem],
        listener: BatchListener,
        cancel: CancellationToken | None = None,
    ) -> BatchHandle:
        """Run items on a background thread and return immediately.

        Raises:
            BatchAlreadyRunningError: If a batch is already running on this runner
        """
        self._acquire()
        handle = BatchHandle()
        batch = list(items)

        def worker() -> None:
            report: BatchReport | None = None
            error: BaseException | None = None
            try:
                report = self._run(batch, listener, cancel)
            except BaseException as e:
                error = e
            finally:
                self._busy.release()
                handle._finish(report, error)

        threading.Thread(target=worker, name="scriptbay-batch", daemon=True).start()
        return handle

    def _acquire(self) -> None:
        if not self._busy.acquire(blocking=False):
            raise BatchAlreadyRunningError("A batch is already running")

    def _run(
        self,
        items: list[BatchItem],
        listener: BatchListener,
        cancel: CancellationToken | None,
    ) -> BatchReport:
        started_at = self._clock.now()
        total = len(items)
        results: list[tuple[BatchItem, ExecutionResult]] = []
        cancelled = False
        self._audit_log.log(f"Batch started: {total} script(s)")
        listener.on_batch_start()
        try:
            for item in items:
                if cancel is not None and cancel.is_cancelled:
                    cancelled = True
                    self._audit_log.log(f"Batch cancelled after {len(results)} of {total}")
                    break

                listener.on_status(f"Running: {item.display_name}")
                listener.on_output_append(f">>> Running {item.path}")
                self._audit_log.log(f"Starting: {item.path}")

                result = self._execute(item)

                listener.on_output_append(result.combined_output)
                self._audit_log.log(f"Completed: {item.path} - ExitCode {result.exit_code}")
                results.append((item, result))
                listener.on_progress(len(results) / total)
        finally:
            duration = (self._clock.now() - started_at).total_seconds()
            report = BatchReport(
                results=tuple(results),
                total=total,
                cancelled=cancelled,
                duration_seconds=duration,
            )
            self._audit_log.log(
                f"Batch finished: {report.completed} of {total} run, {len(report.failed)} failed"
            )
            listener.on_batch_end(report)
        return report

    def _execute(self, item: BatchItem) -> ExecutionResult:
        try:
            return self._executor.run(item.path)
        except Exception as e:
            self._audit_log.log(f"Script execution error: {item.path}: {e!r}")
            return ExecutionResult(
                exit_code=FAILED_EXIT_CODE, combined_output=f"Execution error: {e}"
            )
