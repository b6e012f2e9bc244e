"""Port: Clock — wall-clock time and suspension between events."""

from abc import ABC, abstractmethod
from datetime import datetime


class ClockPort(ABC):
    """Contract for reading the time and sleeping."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current local wall-clock time."""
        ...

    @abstractmethod
    def sleep(self, seconds: float) -> None:
        """Suspend for *seconds*; may return early if the run is cancelled."""
        ...
