"""In-memory clipboard — implements ClipboardPort without touching the OS.

Used for ``--dry-run`` and in tests.
"""

from __future__ import annotations

from typing import Optional

from clip_emitter.domain.errors import ClipboardError
from clip_emitter.domain.ports.clipboard_port import ClipboardPort


class MemoryClipboard(ClipboardPort):
    """Keeps every written value in order.

    Parameters
    ----------
    fail_on : set[int] | None
        1-based write numbers that should raise ClipboardError.
    """

    def __init__(self, fail_on: Optional[set[int]] = None) -> None:
        self.history: list[str] = []
        self._fail_on = fail_on or set()
        self._calls = 0

    @property
    def name(self) -> str:
        return "memory"

    @property
    def content(self) -> Optional[str]:
        """Current clipboard value, or None if nothing was copied yet."""
        return self.history[-1] if self.history else None

    @property
    def calls(self) -> int:
        return self._calls

    def copy(self, text: str) -> None:
        self._calls += 1
        if self._calls in self._fail_on:
            raise ClipboardError(f"simulated failure on write {self._calls}")
        self.history.append(text)
