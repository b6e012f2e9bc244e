"""Tests for the emitter loop (EmitEventsUseCase).

Uses an in-memory clipboard, a fake clock and a recording progress sink,
so nothing touches the real clipboard and nothing really sleeps.
"""

from __future__ import annotations

import re
import threading
from datetime import datetime, timedelta

import pytest

from clip_emitter.application.use_cases.emit_events import EmitEventsUseCase
from clip_emitter.config.models import EmitterConfig
from clip_emitter.domain.errors import ClipboardError
from clip_emitter.domain.ports.clipboard_port import ClipboardPort
from clip_emitter.domain.ports.clock_port import ClockPort
from clip_emitter.domain.ports.progress_port import ProgressPort
from clip_emitter.infrastructure.clipboard.memory_clipboard import MemoryClipboard

_PAYLOAD_RE = re.compile(r"^(?P<label>.+) (?P<index>\d+) - (?P<time>\d{2}:\d{2}:\d{2})$")


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class FakeClock(ClockPort):
    """Virtual clock: sleep() advances time instantly and logs the call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2024, 1, 1, 9, 59, 58)
        self.sleeps: list[float] = []
        self.log: list[tuple[str, object]] = []

    def now(self) -> datetime:
        return self.current

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.log.append(("sleep", seconds))
        self.current += timedelta(seconds=seconds)


class LoggingClipboard(MemoryClipboard):
    """Memory clipboard that also records the time of every call."""

    def __init__(self, clock: FakeClock, fail_on: set[int] | None = None) -> None:
        super().__init__(fail_on=fail_on)
        self._clock = clock
        self.call_times: list[datetime] = []

    def copy(self, text: str) -> None:
        self.call_times.append(self._clock.now())
        self._clock.log.append(("copy", text))
        super().copy(text)


class RecordingProgress(ProgressPort):
    def __init__(self) -> None:
        self.events: list[tuple] = []

    def started(self, count, delay, backend):
        self.events.append(("started", count, delay, backend))

    def copying(self, index):
        self.events.append(("copying", index))

    def failed(self, event, error):
        self.events.append(("failed", event.index, str(error)))

    def finished(self, report):
        self.events.append(("finished", report.attempted))

    def interrupted(self, report):
        self.events.append(("interrupted", report.attempted))

    def of(self, kind: str) -> list[tuple]:
        return [e for e in self.events if e[0] == kind]


class BrokenClipboard(ClipboardPort):
    """Every write fails."""

    def __init__(self) -> None:
        self.calls = 0

    @property
    def name(self) -> str:
        return "broken"

    def copy(self, text: str) -> None:
        self.calls += 1
        raise ClipboardError("wl-copy exited with status 1")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def progress() -> RecordingProgress:
    return RecordingProgress()


@pytest.fixture()
def clipboard(clock: FakeClock) -> LoggingClipboard:
    return LoggingClipboard(clock)


def _run(clipboard, clock, progress, stop_event=None, **cfg):
    uc = EmitEventsUseCase(clipboard, clock, progress, stop_event=stop_event)
    return uc.execute(EmitterConfig(**cfg))


# ---------------------------------------------------------------------------
# Ordering and payloads
# ---------------------------------------------------------------------------


class TestSequence:
    def test_invokes_clipboard_count_times_in_order(self, clipboard, clock, progress):
        _run(clipboard, clock, progress, count=7, delay=0)

        indices = [int(_PAYLOAD_RE.match(p).group("index")) for p in clipboard.history]
        assert indices == list(range(1, 8))

    def test_payload_contains_label_index_time(self, clipboard, clock, progress):
        _run(clipboard, clock, progress, count=2, delay=1, label="Hello World")

        for expected_index, payload in enumerate(clipboard.history, start=1):
            match = _PAYLOAD_RE.match(payload)
            assert match is not None
            assert match.group("label") == "Hello World"
            assert int(match.group("index")) == expected_index
            datetime.strptime(match.group("time"), "%H:%M:%S")

    def test_scenario_three_events_no_delay(self, clipboard, clock, progress):
        report = _run(clipboard, clock, progress, count=3, delay=0, label="X")

        assert clipboard.calls == 3
        assert [p.split(" - ")[0] for p in clipboard.history] == ["X 1", "X 2", "X 3"]
        times = [p.split(" - ")[1] for p in clipboard.history]
        assert times == sorted(times)
        assert clock.sleeps == []
        assert progress.of("finished") == [("finished", 3)]
        assert report.succeeded == 3

    def test_timestamp_uses_clock(self, clipboard, clock, progress):
        _run(clipboard, clock, progress, count=3, delay=1, label="T")
        # Clock starts at 09:59:58 and advances 1s per event
        assert clipboard.history == [
            "T 1 - 09:59:58",
            "T 2 - 09:59:59",
            "T 3 - 10:00:00",
        ]

    def test_progress_per_iteration(self, clipboard, clock, progress):
        _run(clipboard, clock, progress, count=4, delay=0)

        assert progress.events[0] == ("started", 4, 0.0, "memory")
        assert progress.of("copying") == [("copying", i) for i in range(1, 5)]
        assert progress.events[-1] == ("finished", 4)


# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------


class TestDelay:
    def test_calls_spaced_by_at_least_delay(self, clipboard, clock, progress):
        _run(clipboard, clock, progress, count=5, delay=2)

        gaps = [
            (later - earlier).total_seconds()
            for earlier, later in zip(clipboard.call_times, clipboard.call_times[1:])
        ]
        assert len(gaps) == 4
        assert all(gap >= 2 for gap in gaps)

    def test_sleeps_after_final_event_by_default(self, clipboard, clock, progress):
        _run(clipboard, clock, progress, count=3, delay=2)
        assert clock.sleeps == [2, 2, 2]
        assert clock.log[-1] == ("sleep", 2)

    def test_skip_final_delay(self, clipboard, clock, progress):
        _run(clipboard, clock, progress, count=3, delay=2, skip_final_delay=True)
        assert clock.sleeps == [2, 2]
        assert clock.log[-1][0] == "copy"

    def test_sleep_between_each_copy(self, clipboard, clock, progress):
        _run(clipboard, clock, progress, count=3, delay=0.5)
        kinds = [kind for kind, _ in clock.log]
        assert kinds == ["copy", "sleep", "copy", "sleep", "copy", "sleep"]


# ---------------------------------------------------------------------------
# Completion
# ---------------------------------------------------------------------------


class TestCompletion:
    def test_single_completion_message(self, clipboard, clock, progress):
        _run(clipboard, clock, progress, count=3, delay=0)
        assert len(progress.of("finished")) == 1
        assert progress.of("interrupted") == []

    def test_no_calls_after_completion(self, clipboard, clock, progress):
        _run(clipboard, clock, progress, count=2, delay=0)
        finished_at = progress.events.index(("finished", 2))
        assert all(e[0] != "copying" for e in progress.events[finished_at:])
        assert clipboard.calls == 2

    def test_report_timing(self, clipboard, clock, progress):
        report = _run(clipboard, clock, progress, count=3, delay=2)
        assert report.requested == 3
        assert report.completed is True
        assert report.duration == pytest.approx(6.0)


# ---------------------------------------------------------------------------
# Failure tolerance
# ---------------------------------------------------------------------------


class TestFailures:
    def test_failure_does_not_stop_loop(self, clock, progress):
        clipboard = LoggingClipboard(clock, fail_on={2})
        report = _run(clipboard, clock, progress, count=4, delay=0, label="X")

        assert clipboard.calls == 4
        assert [p.split(" - ")[0] for p in clipboard.history] == ["X 1", "X 3", "X 4"]
        assert report.attempted == 4
        assert report.succeeded == 3
        assert report.failed == 1
        assert report.failures[0].index == 2
        assert report.failures[0].payload.startswith("X 2 - ")
        assert progress.of("failed") == [("failed", 2, "simulated failure on write 2")]
        assert progress.of("finished") == [("finished", 4)]

    def test_all_failures_still_complete(self, clock, progress):
        clipboard = BrokenClipboard()
        report = _run(clipboard, clock, progress, count=3, delay=1)

        assert clipboard.calls == 3
        assert report.failed == 3
        assert report.completed is True
        assert clock.sleeps == [1, 1, 1]

    def test_failure_is_logged(self, clock, progress, caplog):
        with caplog.at_level("WARNING", logger="clip_emitter"):
            _run(BrokenClipboard(), clock, progress, count=1, delay=0)
        assert "Clipboard write 1 failed" in caplog.text
        assert "1 of 1 clipboard writes failed" in caplog.text

    def test_unexpected_errors_propagate(self, clock, progress):
        class Exploding(MemoryClipboard):
            def copy(self, text: str) -> None:
                raise RuntimeError("bug")

        with pytest.raises(RuntimeError, match="bug"):
            _run(Exploding(), clock, progress, count=2, delay=0)


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------


class TestCancellation:
    def test_stop_before_start(self, clipboard, clock, progress):
        stop = threading.Event()
        stop.set()
        report = _run(clipboard, clock, progress, stop_event=stop, count=5, delay=0)

        assert clipboard.calls == 0
        assert report.cancelled is True
        assert progress.of("finished") == []
        assert progress.of("interrupted") == [("interrupted", 0)]

    def test_stop_mid_run(self, clock, progress):
        stop = threading.Event()

        class StopAfterTwo(LoggingClipboard):
            def copy(self, text: str) -> None:
                super().copy(text)
                if self.calls == 2:
                    stop.set()

        clipboard = StopAfterTwo(clock)
        report = _run(clipboard, clock, progress, stop_event=stop, count=10, delay=1)

        assert clipboard.calls == 2
        assert report.attempted == 2
        assert report.cancelled is True
        assert report.completed is False
        assert progress.of("interrupted") == [("interrupted", 2)]

    def test_stop_during_final_delay(self, clipboard, progress):
        stop = threading.Event()

        class InterruptedSleep(FakeClock):
            def sleep(self, seconds: float) -> None:
                super().sleep(seconds)
                if len(self.sleeps) == 3:
                    stop.set()

        clock = InterruptedSleep()
        report = _run(clipboard, clock, progress, stop_event=stop, count=3, delay=2)

        assert clipboard.calls == 3
        assert report.attempted == 3
        assert report.cancelled is True
        assert report.completed is False
        assert progress.of("finished") == []
        assert progress.of("interrupted") == [("interrupted", 3)]

    def test_stop_event_exposed(self, clipboard, clock, progress):
        uc = EmitEventsUseCase(clipboard, clock, progress)
        assert isinstance(uc.stop_event, threading.Event)
        assert not uc.stop_event.is_set()
