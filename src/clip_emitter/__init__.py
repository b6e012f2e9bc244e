"""clip-emitter — timed clipboard event generator for testing clipboard listeners."""

__version__ = "0.1.0"
