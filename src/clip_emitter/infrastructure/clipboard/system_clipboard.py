"""System clipboard — implements ClipboardPort using subprocess.

The payload is always written to the command's standard input, which every
supported tool accepts.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
import tempfile
from dataclasses import dataclass
from typing import Optional

from clip_emitter.domain.errors import ClipboardBackendNotFoundError, ClipboardError
from clip_emitter.domain.ports.clipboard_port import ClipboardPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClipboardBackend:
    """A known clipboard-set command."""

    name: str
    command: tuple[str, ...]
    platforms: tuple[str, ...]
    needs_wayland: bool = False

    @property
    def program(self) -> str:
        return self.command[0]


# Detection order matters: Wayland first, then X11, then the OS built-ins.
KNOWN_BACKENDS: tuple[ClipboardBackend, ...] = (
    ClipboardBackend("wl-copy", ("wl-copy",), ("linux", "freebsd"), needs_wayland=True),
    ClipboardBackend("xclip", ("xclip", "-selection", "clipboard"), ("linux", "freebsd")),
    ClipboardBackend("xsel", ("xsel", "--clipboard", "--input"), ("linux", "freebsd")),
    ClipboardBackend("pbcopy", ("pbcopy",), ("darwin",)),
    ClipboardBackend("clip", ("clip",), ("win32",)),
)


def _on_platform(backend: ClipboardBackend) -> bool:
    return any(sys.platform.startswith(p) for p in backend.platforms)


def is_available(backend: ClipboardBackend) -> bool:
    """True if the backend's program is on PATH and usable in this session."""
    if backend.needs_wayland and not os.environ.get("WAYLAND_DISPLAY"):
        return False
    return shutil.which(backend.program) is not None


def get_backend(name: str) -> ClipboardBackend:
    """Look up a known backend by name.

    Raises:
        ClipboardBackendNotFoundError: Unknown name.
    """
    for backend in KNOWN_BACKENDS:
        if backend.name == name:
            return backend
    known = ", ".join(b.name for b in KNOWN_BACKENDS)
    raise ClipboardBackendNotFoundError(f"Unknown clipboard backend '{name}' (known: {known})")


def detect_backend() -> ClipboardBackend:
    """Return the first usable clipboard backend for this OS.

    Raises:
        ClipboardBackendNotFoundError: No supported clipboard tool found.
    """
    candidates = [b for b in KNOWN_BACKENDS if _on_platform(b)]
    if not candidates:
        raise ClipboardBackendNotFoundError(f"Unsupported platform: {sys.platform}")

    for backend in candidates:
        if is_available(backend):
            logger.debug("Detected clipboard backend %s", backend.name)
            return backend

    tools = ", ".join(b.name for b in candidates)
    raise ClipboardBackendNotFoundError(f"No clipboard tool found. Install one of: {tools}.")


class SystemClipboard(ClipboardPort):
    """Clipboard adapter using OS-level subprocess commands.

    Parameters
    ----------
    backend : str | None
        Name of a known backend; auto-detected when ``None``.
    command : list[str] | None
        Custom command line, takes precedence over *backend*.
    timeout : float
        Seconds to wait for the command before treating the write as failed.

    Raises
    ------
    ClipboardBackendNotFoundError
        If the command cannot be resolved. Resolution happens here, once,
        so a missing tool is reported before the first event.
    """

    def __init__(
        self,
        backend: Optional[str] = None,
        command: Optional[list[str]] = None,
        timeout: float = 5.0,
    ) -> None:
        if command:
            if shutil.which(command[0]) is None:
                raise ClipboardBackendNotFoundError(f"Clipboard command not found: {command[0]}")
            self._name = command[0]
            self._command = list(command)
        else:
            resolved = get_backend(backend) if backend else detect_backend()
            if backend and shutil.which(resolved.program) is None:
                raise ClipboardBackendNotFoundError(
                    f"Clipboard tool '{resolved.program}' is not installed."
                )
            self._name = resolved.name
            self._command = list(resolved.command)
        self._timeout = timeout

    @property
    def name(self) -> str:
        return self._name

    @property
    def command(self) -> list[str]:
        return list(self._command)

    def copy(self, text: str) -> None:
        """Copy text to the system clipboard via subprocess.

        wl-copy and xclip fork a child that keeps serving the selection and
        inherits the output streams, so no pipe may be attached to them.
        stderr goes to a temporary file that is only read on failure.
        """
        with tempfile.TemporaryFile() as errors:
            try:
                subprocess.run(
                    self._command,
                    input=text.encode("utf-8"),
                    stdout=subprocess.DEVNULL,
                    stderr=errors,
                    check=True,
                    timeout=self._timeout,
                )
            except subprocess.CalledProcessError as exc:
                errors.seek(0)
                stderr = errors.read().decode("utf-8", errors="replace").strip()
                detail = f": {stderr}" if stderr else ""
                raise ClipboardError(
                    f"{self._name} exited with status {exc.returncode}{detail}"
                ) from exc
            except subprocess.TimeoutExpired as exc:
                raise ClipboardError(f"{self._name} timed out after {self._timeout}s") from exc
            except OSError as exc:
                # Includes FileNotFoundError when the tool vanished mid-run
                raise ClipboardError(f"Could not run {self._name}: {exc}") from exc
