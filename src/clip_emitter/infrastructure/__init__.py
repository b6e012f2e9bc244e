"""Infrastructure layer — OS and runtime adapters."""

from clip_emitter.infrastructure.clipboard.memory_clipboard import MemoryClipboard
from clip_emitter.infrastructure.clipboard.system_clipboard import SystemClipboard
from clip_emitter.infrastructure.clock.system_clock import SystemClock

__all__ = [
    "MemoryClipboard",
    "SystemClipboard",
    "SystemClock",
]
