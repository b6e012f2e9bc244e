"""Port: Clipboard — overwrite the system clipboard with text."""

from abc import ABC, abstractmethod


class ClipboardPort(ABC):
    """Contract for clipboard writes."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short backend name shown to the user (e.g. ``wl-copy``)."""
        ...

    @abstractmethod
    def copy(self, text: str) -> None:
        """Set the clipboard content to *text*.

        Raises:
            ClipboardError: If the write failed.
        """
        ...
