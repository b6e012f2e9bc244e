"""Run report — summary of one emitter run.

The emitter never aborts on a failed clipboard write, so the report is
where those failures are surfaced.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from clip_emitter.domain.models.enums import ContentType


class EventFailure(BaseModel):
    """A clipboard write that did not succeed."""

    index: int
    payload: str
    error: str


class EmitReport(BaseModel):
    """Outcome of an emitter run."""

    requested: int
    attempted: int = 0
    succeeded: int = 0
    failures: list[EventFailure] = Field(default_factory=list)
    content_types: dict[ContentType, int] = Field(default_factory=dict)
    cancelled: bool = False
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    # -- Recording -----------------------------------------------------------

    def record_success(self, content_type: ContentType) -> None:
        self.attempted += 1
        self.succeeded += 1
        self.content_types[content_type] = self.content_types.get(content_type, 0) + 1

    def record_failure(self, index: int, payload: str, error: str) -> None:
        self.attempted += 1
        self.failures.append(EventFailure(index=index, payload=payload, error=error))

    # -- Derived -------------------------------------------------------------

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def completed(self) -> bool:
        """True when every requested iteration was attempted."""
        return not self.cancelled and self.attempted == self.requested

    @property
    def duration(self) -> float:
        """Run duration in seconds (0.0 until the run has finished)."""
        if self.started_at is None or self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()
