"""Use Case: Emit Clipboard Events.

Writes ``count`` generated strings to the clipboard, ``delay`` seconds
apart, through an injected ClipboardPort. A failed write is logged,
reported and skipped; it never stops the run.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from clip_emitter.config.models import EmitterConfig
from clip_emitter.domain.errors import ClipboardError
from clip_emitter.domain.models.event import EventRecord
from clip_emitter.domain.models.report import EmitReport
from clip_emitter.domain.ports.clipboard_port import ClipboardPort
from clip_emitter.domain.ports.clock_port import ClockPort
from clip_emitter.domain.ports.progress_port import ProgressPort

logger = logging.getLogger(__name__)


class EmitEventsUseCase:
    """Run the timed clipboard event loop."""

    def __init__(
        self,
        clipboard: ClipboardPort,
        clock: ClockPort,
        progress: ProgressPort,
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        self._clipboard = clipboard
        self._clock = clock
        self._progress = progress
        self._stop_event = stop_event or threading.Event()

    @property
    def stop_event(self) -> threading.Event:
        """Set this event to stop the run before the next iteration."""
        return self._stop_event

    def execute(self, config: EmitterConfig) -> EmitReport:
        """Emit ``config.count`` events.

        Args:
            config: Validated run settings.

        Returns:
            The run report. ``report.cancelled`` is True if the stop event
            was set before every iteration ran.
        """
        report = EmitReport(requested=config.count, started_at=self._clock.now())
        self._progress.started(config.count, config.delay, self._clipboard.name)
        logger.info(
            "Emitting %d events via %s (delay=%ss, label=%r)",
            config.count,
            self._clipboard.name,
            config.delay,
            config.label,
        )

        for index in range(1, config.count + 1):
            if self._stop_event.is_set():
                report.cancelled = True
                logger.info("Run cancelled before event %d", index)
                break

            self._emit_one(config.label, index, report)

            is_last = index == config.count
            if config.delay > 0 and not (is_last and config.skip_final_delay):
                self._clock.sleep(config.delay)

        # An interrupt during the trailing delay still counts as a cancellation
        if not report.cancelled and self._stop_event.is_set():
            report.cancelled = True
            logger.info("Run cancelled after event %d", report.attempted)

        report.finished_at = self._clock.now()
        if report.cancelled:
            self._progress.interrupted(report)
        else:
            self._progress.finished(report)

        if report.failed:
            logger.warning("%d of %d clipboard writes failed", report.failed, report.attempted)
        return report

    def _emit_one(self, label: str, index: int, report: EmitReport) -> None:
        self._progress.copying(index)
        event = EventRecord.create(label, index, self._clock.now())
        try:
            self._clipboard.copy(event.payload)
        except ClipboardError as exc:
            logger.warning("Clipboard write %d failed: %s", index, exc)
            report.record_failure(index, event.payload, str(exc))
            self._progress.failed(event, exc)
            return

        logger.debug("Copied %r", event.payload)
        report.record_success(event.content_type)
