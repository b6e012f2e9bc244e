"""Composition Root — Dependency Injection Container.

This module is the ONLY place where concrete infrastructure classes are
imported and wired together. All other layers refer to ports (interfaces).
"""

from __future__ import annotations

import threading
from typing import Optional

from clip_emitter.config.models import EmitterConfig
from clip_emitter.domain.ports.clipboard_port import ClipboardPort
from clip_emitter.domain.ports.clock_port import ClockPort
from clip_emitter.domain.ports.progress_port import ProgressPort

from clip_emitter.infrastructure.clipboard.memory_clipboard import MemoryClipboard
from clip_emitter.infrastructure.clipboard.system_clipboard import SystemClipboard
from clip_emitter.infrastructure.clock.system_clock import SystemClock

from clip_emitter.application.use_cases.emit_events import EmitEventsUseCase

# Backend name that selects the in-memory clipboard
MEMORY_BACKEND = "memory"


class Container:
    """Simple dependency injection container.

    Usage::

        container = Container(config, progress=ConsoleProgress())
        report = container.emit_events().execute(config)
    """

    def __init__(
        self,
        config: EmitterConfig,
        progress: ProgressPort,
        dry_run: bool = False,
    ) -> None:
        self._config = config
        self._progress = progress
        self._dry_run = dry_run or config.backend == MEMORY_BACKEND

        # -- Infrastructure singletons ---------------------------------------
        self._stop_event = threading.Event()
        self._clock = SystemClock(stop_event=self._stop_event)
        self._clipboard: Optional[ClipboardPort] = None

    # -- Port accessors ------------------------------------------------------

    @property
    def config(self) -> EmitterConfig:
        return self._config

    @property
    def stop_event(self) -> threading.Event:
        return self._stop_event

    @property
    def clock(self) -> ClockPort:
        return self._clock

    @property
    def clipboard(self) -> ClipboardPort:
        """Return the clipboard adapter, resolving the backend on first use.

        Raises:
            ClipboardBackendNotFoundError: No usable backend.
        """
        if self._clipboard is None:
            if self._dry_run:
                self._clipboard = MemoryClipboard()
            else:
                self._clipboard = SystemClipboard(
                    backend=self._config.backend,
                    command=self._config.command,
                    timeout=self._config.timeout,
                )
        return self._clipboard

    # -- Use Case factories --------------------------------------------------

    def emit_events(self) -> EmitEventsUseCase:
        """Create the emitter use case wired to this container's adapters."""
        return EmitEventsUseCase(
            clipboard=self.clipboard,
            clock=self._clock,
            progress=self._progress,
            stop_event=self._stop_event,
        )
