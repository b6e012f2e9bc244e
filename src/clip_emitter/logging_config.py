"""Logging setup for the command-line entry point.

Library modules only call ``logging.getLogger(__name__)``; handlers are
attached here, once, and write to stderr so they never interleave with the
progress lines on stdout.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOGGING_INITIALIZED = False


def setup_logging(verbose: bool = False) -> None:
    """Attach a RichHandler to the package logger.

    Args:
        verbose: Log DEBUG and above instead of WARNING and above.
    """
    global _LOGGING_INITIALIZED

    level = logging.DEBUG if verbose else logging.WARNING
    package_logger = logging.getLogger("clip_emitter")
    package_logger.setLevel(level)

    if _LOGGING_INITIALIZED:
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    _LOGGING_INITIALIZED = True
