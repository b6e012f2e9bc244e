"""Port: Progress — human-readable feedback while the emitter runs."""

from abc import ABC, abstractmethod

from clip_emitter.domain.models.event import EventRecord
from clip_emitter.domain.models.report import EmitReport


class ProgressPort(ABC):
    """Receives one callback per stage of a run."""

    @abstractmethod
    def started(self, count: int, delay: float, backend: str) -> None:
        """Called once before the first iteration."""
        ...

    @abstractmethod
    def copying(self, index: int) -> None:
        """Called at the start of iteration *index*."""
        ...

    @abstractmethod
    def failed(self, event: EventRecord, error: Exception) -> None:
        """Called when the clipboard write for *event* failed."""
        ...

    @abstractmethod
    def finished(self, report: EmitReport) -> None:
        """Called once after all iterations ran."""
        ...

    @abstractmethod
    def interrupted(self, report: EmitReport) -> None:
        """Called instead of :meth:`finished` when the run was cancelled."""
        ...
