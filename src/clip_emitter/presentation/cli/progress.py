"""Console progress sink — implements ProgressPort with Rich output."""

from __future__ import annotations

from clip_emitter.domain.models.event import EventRecord
from clip_emitter.domain.models.report import EmitReport
from clip_emitter.domain.ports.progress_port import ProgressPort
from clip_emitter.presentation.cli import formatters


class ConsoleProgress(ProgressPort):
    """Print one line per event plus a summary at the end."""

    def __init__(self, show_summary: bool = True) -> None:
        self._show_summary = show_summary

    def started(self, count: int, delay: float, backend: str) -> None:
        formatters.run_header(count, delay, backend)

    def copying(self, index: int) -> None:
        formatters.copying_line(index)

    def failed(self, event: EventRecord, error: Exception) -> None:
        formatters.failure_line(event.index, str(error))

    def finished(self, report: EmitReport) -> None:
        formatters.done_line()
        if self._show_summary:
            formatters.summary_table(report)

    def interrupted(self, report: EmitReport) -> None:
        formatters.interrupted_line(report.attempted, report.requested)
        if self._show_summary:
            formatters.summary_table(report)
