"""Domain models — public API."""

from clip_emitter.domain.models.enums import ContentType
from clip_emitter.domain.models.event import EventRecord, format_payload
from clip_emitter.domain.models.report import EmitReport, EventFailure

__all__ = [
    "ContentType",
    "EmitReport",
    "EventFailure",
    "EventRecord",
    "format_payload",
]
