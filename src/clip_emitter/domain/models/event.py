"""Event record — one clipboard write produced by the emitter loop."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field

from clip_emitter.domain.models.enums import ContentType

# Same layout as ``date +%T``
TIME_FORMAT = "%H:%M:%S"


def format_payload(label: str, index: int, moment: datetime) -> str:
    """Build the clipboard text for one event.

    >>> format_payload("Test Event", 3, datetime(2024, 1, 1, 9, 5, 7))
    'Test Event 3 - 09:05:07'
    """
    return f"{label} {index} - {moment.strftime(TIME_FORMAT)}"


class EventRecord(BaseModel):
    """Ephemeral record for a single iteration.

    Created at the start of an iteration, handed to the clipboard and then
    discarded.
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=1)
    payload: str
    timestamp: datetime

    @classmethod
    def create(cls, label: str, index: int, moment: datetime) -> EventRecord:
        return cls(
            index=index,
            payload=format_payload(label, index, moment),
            timestamp=moment,
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def content_type(self) -> ContentType:
        return ContentType.from_preview(self.payload)
