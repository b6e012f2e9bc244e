"""Domain errors — custom exceptions for clip-emitter.

These exceptions are raised by domain services and adapters and caught by
the application or presentation layers. They carry no infrastructure
dependencies.
"""


class EmitterError(Exception):
    """Base exception for all clip-emitter errors."""


class ConfigurationError(EmitterError):
    """Raised when configuration is invalid or cannot be read."""


class ClipboardError(EmitterError):
    """Raised when a single clipboard write fails."""


class ClipboardBackendNotFoundError(ClipboardError):
    """Raised when no clipboard backend is available at all."""
