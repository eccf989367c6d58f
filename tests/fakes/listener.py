"""Recording BatchListener for testing."""

from scriptbay.core.batch_runner import BatchListener, BatchReport


class RecordingListener(BatchListener):
    """Records every batch event as a (kind, payload) tuple, in order.

    Kinds: "start", "status", "output", "progress", "end".
    """

    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []

    def of_kind(self, kind: str) -> list[object]:
        return [payload for event_kind, payload in self.events if event_kind == kind]

    def on_batch_start(self) -> None:
        self.events.append(("start", None))

    def on_status(self, text: str) -> None:
        self.events.append(("status", text))

    def on_output_append(self, text: str) -> None:
        self.events.append(("output", text))

    def on_progress(self, fraction: float) -> None:
        self.events.append(("progress", fraction))

    def on_batch_end(self, report: BatchReport) -> None:
        self.events.append(("end", report))
