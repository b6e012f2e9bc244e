"""System clock — implements ClockPort with the real wall clock."""

from __future__ import annotations

import threading
import time
from datetime import datetime
from typing import Optional

from clip_emitter.domain.ports.clock_port import ClockPort


class SystemClock(ClockPort):
    """Local time and blocking sleep.

    When a *stop_event* is given, :meth:`sleep` waits on it instead of
    ``time.sleep`` so that setting the event ends the wait immediately.
    """

    def __init__(self, stop_event: Optional[threading.Event] = None) -> None:
        self._stop_event = stop_event

    def now(self) -> datetime:
        return datetime.now()

    def sleep(self, seconds: float) -> None:
        if self._stop_event is not None:
            self._stop_event.wait(seconds)
        else:
            time.sleep(seconds)
